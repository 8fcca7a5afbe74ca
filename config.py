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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./test.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # Bearer tokens
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    JWT_EXPIRATION_MINUTES = int(data.get("JWT_EXPIRATION_MINUTES", 60))

    # Passwords
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
    PASSWORD_MIN_LENGTH = int(data.get("PASSWORD_MIN_LENGTH", 6))

    # OTP mail delivery (logged instead of sent when SMTP_HOST is empty)
    SMTP_HOST = data.get("SMTP_HOST", "")
    SMTP_PORT = int(data.get("SMTP_PORT", 587))
    SMTP_USER = data.get("SMTP_USER", "")
    SMTP_PASSWORD = data.get("SMTP_PASSWORD", "")
    SMTP_USE_TLS = bool(data.get("SMTP_USE_TLS", True))
    MAIL_FROM = data.get("MAIL_FROM", "")

    # Create missing tables on startup (no migrations for this service yet)
    AUTO_CREATE_TABLES = bool(data.get("AUTO_CREATE_TABLES", True))
