import os
from decimal import Decimal
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./progress_billing.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")

    # Invoicing
    DEFAULT_TAX_RATE = Decimal(str(data.get("DEFAULT_TAX_RATE", "18")))  # Percent
    DEFAULT_PAYMENT_TERMS_DAYS = int(data.get("DEFAULT_PAYMENT_TERMS_DAYS", 30))
    INVOICE_NUMBER_PADDING = int(data.get("INVOICE_NUMBER_PADDING", 3))
    INVOICE_SEQUENCE_MAX_ATTEMPTS = int(data.get("INVOICE_SEQUENCE_MAX_ATTEMPTS", 5))

    # Budget health
    DEFAULT_TARGET_PROFIT_MARGIN = Decimal(str(data.get("DEFAULT_TARGET_PROFIT_MARGIN", "0.20")))  # Fraction
