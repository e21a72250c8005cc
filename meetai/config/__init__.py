"""Flask configuration objects, selected by APPLICATION_ENV."""

from .environment import get_env


def parse_origins(value):
    """Split a comma-separated CORS_ORIGINS value into a list"""
    return [origin.strip().rstrip("/") for origin in value.split(",") if origin.strip()]


class BaseConfig:
    APP_NAME = get_env("APP_NAME", "meetai-backend")
    SECRET_KEY = get_env("SECRET_KEY", "dev-secret")
    TESTING = False
    DEBUG = False

    AUTH_BASE_URL = get_env("AUTH_BASE_URL")
    MEETING_LINK_API_BASE_URL = get_env("MEETING_LINK_API_BASE_URL")
    LIVE_CONNECT_DELAY_SECONDS = get_env("LIVE_CONNECT_DELAY_MS", 800) / 1000.0
    # Session cookies are only shared with these origins; "*" turns credentials off
    CORS_ORIGINS = parse_origins(get_env("CORS_ORIGINS", "http://localhost:3000"))


class DevelopmentConfig(BaseConfig):
    DEBUG = True


class TestingConfig(BaseConfig):
    TESTING = True
    SECRET_KEY = "test-secret-key"
    CORS_ORIGINS = ["http://localhost:3000"]


class ProductionConfig(BaseConfig):
    pass


config = {
    "development": DevelopmentConfig,
    "test": TestingConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}
