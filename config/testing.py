import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "payroll_test_db"),
}

PAYMENT_GATEWAY = {
    "base_url": os.getenv("PAYMENT_GATEWAY_URL", "http://gateway.test"),
    "api_key": "sk_test",
    "timeout": 5.0,
}

PAYROLL_CURRENCY = "kes"
MINIMUM_WAGE = "15000"
STANDARD_WORKING_HOURS = "160"

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
STORE_NOTIFICATIONS = False
