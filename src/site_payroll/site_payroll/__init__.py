"""Site Payroll package.

Attendance ledger for construction sites (submit once, then locked) and the
payroll aggregation that turns attendance, overtime and advances into wages.
Organized by feature modules with thin Flask controllers on top of
service/repository layers.
"""
