import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./invoices.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", 0))
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    CREATE_TABLES_ON_STARTUP = bool(data.get("CREATE_TABLES_ON_STARTUP", True))

    # Invoice rendering
    DEFAULT_CURRENCY = data.get("DEFAULT_CURRENCY", "USD")
    COMPANY_NAME = data.get("COMPANY_NAME", "Invoice Desk")
    COMPANY_ADDRESS = data.get("COMPANY_ADDRESS", "123 Market Street, Springfield")

    # Attachment limits
    MAX_FILE_SIZE_BYTES = data.get("MAX_FILE_SIZE_BYTES", 10 * 1024 * 1024)  # 10MB per file
    MAX_ATTACHMENTS_PER_INVOICE = data.get("MAX_ATTACHMENTS_PER_INVOICE", 20)
    MAX_TOTAL_ATTACHMENT_BYTES = data.get("MAX_TOTAL_ATTACHMENT_BYTES", 50 * 1024 * 1024)  # 50MB per invoice
