import os

from .config import Config

SECRET_KEY = "test-secret"

DB_CONFIG = {**Config.db_config(), "database": os.getenv("DB_NAME", "site_payroll_test")}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

FOOD_ALLOWANCE_AMOUNT = "70"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
