"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
Statutory rates live in payroll/tax_tables.py.
"""

from decimal import Decimal

DEFAULT_STANDARD_WORKING_HOURS = Decimal("160")
DEFAULT_STANDARD_DAILY_HOURS = Decimal("8")
DEFAULT_MINIMUM_WAGE = Decimal("15000")
DEFAULT_CURRENCY = "kes"

# Overtime policy
STANDARD_OVERTIME_CAP_HOURS = Decimal("40")
PREMIUM_OVERTIME_CAP_HOURS = Decimal("20")
STANDARD_OVERTIME_MULTIPLIER = Decimal("1.5")
PREMIUM_OVERTIME_MULTIPLIER = Decimal("2.0")
OVERTIME_APPROVAL_THRESHOLD_HOURS = Decimal("30")
EXCESSIVE_PREMIUM_OVERTIME_HOURS = Decimal("15")

# Working hours limits (Kenya Labour Act)
WEEKS_PER_MONTH = Decimal("4")
LEGAL_WEEKLY_HOURS_LIMIT = Decimal("60")
LEGAL_MONTHLY_HOURS_LIMIT = Decimal("260")

DEFAULT_HISTORY_LIMIT = 10
MAX_HISTORY_LIMIT = 100
