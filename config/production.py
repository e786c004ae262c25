import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "payroll"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "payroll_db"),
}

PAYMENT_GATEWAY = {
    "base_url": os.getenv("PAYMENT_GATEWAY_URL", ""),
    "api_key": os.getenv("PAYMENT_GATEWAY_API_KEY", "please-set-PAYMENT_GATEWAY_API_KEY"),
    "timeout": float(os.getenv("PAYMENT_GATEWAY_TIMEOUT", "30")),
}

PAYROLL_CURRENCY = os.getenv("PAYROLL_CURRENCY", "kes")
MINIMUM_WAGE = os.getenv("MINIMUM_WAGE", "15000")
STANDARD_WORKING_HOURS = os.getenv("STANDARD_WORKING_HOURS", "160")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
STORE_NOTIFICATIONS = bool(int(os.getenv("STORE_NOTIFICATIONS", "1")))
