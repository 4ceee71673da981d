import os


class Config:
    """Defaults shared by every environment; each value can be overridden via env vars."""

    SECRET_KEY = os.environ.get("SECRET_KEY") or "dev-secret-key"

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "site_payroll")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Paid per present day when the site did not provide food.
    FOOD_ALLOWANCE_AMOUNT = os.environ.get("FOOD_ALLOWANCE_AMOUNT", "70")

    @classmethod
    def db_config(cls) -> dict:
        return {
            "host": cls.DB_HOST,
            "port": cls.DB_PORT,
            "user": cls.DB_USER,
            "password": cls.DB_PASSWORD,
            "database": cls.DB_NAME,
        }
