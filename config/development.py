import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "payroll_db"),
}

# Payout processor (POST /v1/payouts, GET /v1/payouts/{id})
PAYMENT_GATEWAY = {
    "base_url": os.getenv("PAYMENT_GATEWAY_URL", "http://localhost:8081"),
    "api_key": os.getenv("PAYMENT_GATEWAY_API_KEY", "sk_test_local"),
    "timeout": float(os.getenv("PAYMENT_GATEWAY_TIMEOUT", "30")),
}

PAYROLL_CURRENCY = os.getenv("PAYROLL_CURRENCY", "kes")
MINIMUM_WAGE = os.getenv("MINIMUM_WAGE", "15000")
STANDARD_WORKING_HOURS = os.getenv("STANDARD_WORKING_HOURS", "160")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, schema.sql is applied on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Store notifications in the notifications table instead of only logging them
STORE_NOTIFICATIONS = bool(int(os.getenv("STORE_NOTIFICATIONS", "1")))
