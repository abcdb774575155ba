import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Auth
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(
        minutes=int(os.getenv("JWT_ACCESS_TOKEN_MINUTES", "60"))
    )

    # Content page singleton
    CONTENT_PAGE_SLUG = os.getenv("CONTENT_PAGE_SLUG", "content")

    # Preview links
    PREVIEW_SECRET = os.getenv("PREVIEW_SECRET", "preview-secret")
    PREVIEW_MAX_AGE = int(os.getenv("PREVIEW_MAX_AGE", "3600"))  # seconds

    # Revalidation webhook (fire-and-forget, single attempt)
    REVALIDATE_SECRET = os.getenv("REVALIDATE_SECRET", "revalidate-secret")
    REVALIDATE_WEBHOOK_URL = os.getenv("REVALIDATE_WEBHOOK_URL")
    REVALIDATE_TIMEOUT = float(os.getenv("REVALIDATE_TIMEOUT", "5"))
    REVALIDATE_ASYNC = _env_flag("REVALIDATE_ASYNC", True)

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///newsdesk-dev.db")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SECRET_KEY = "test-secret-key-for-testing-only-0123456789"
    JWT_SECRET_KEY = "test-jwt-secret-key-for-testing-only-0123456789"
    PREVIEW_SECRET = "test-preview-secret"
    REVALIDATE_SECRET = "test-revalidate-secret"
    REVALIDATE_WEBHOOK_URL = None
    REVALIDATE_ASYNC = False


class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")


config_by_name = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig
}
