from functools import lru_cache
from os import environ

from dotenv import load_dotenv


@lru_cache(maxsize=1)
def load_environment():
    """Load and cache environment variables"""
    # Load .env file only once
    load_dotenv()

    return {
        "APP_NAME": environ.get("APP_NAME") or "meetai-backend",
        "APPLICATION_ENV": environ.get("APPLICATION_ENV") or "development",
        "PORT": int(environ.get("PORT", 8080)),
        "SECRET_KEY": environ.get("SECRET_KEY"),
        # Supabase Configuration (agents table)
        "SUPABASE_PROJECT_URL": environ.get("SUPABASE_PROJECT_URL")
        or environ.get("SUPABASE_URL"),
        "SUPABASE_SERVICE_ROLE_KEY": environ.get("SUPABASE_SERVICE_ROLE_KEY"),
        "SUPABASE_DB_URL": environ.get("SUPABASE_DB_URL"),
        # Auth collaborator (session lookup)
        "AUTH_BASE_URL": environ.get("AUTH_BASE_URL"),
        # Live calls
        "MEETING_LINK_API_BASE_URL": environ.get(
            "MEETING_LINK_API_BASE_URL"
        ),  # Defaults to the serving host when unset
        "LIVE_CONNECT_DELAY_MS": int(environ.get("LIVE_CONNECT_DELAY_MS", 800)),
        "CORS_ORIGINS": environ.get("CORS_ORIGINS", "http://localhost:3000"),
    }


def get_env(key: str, default=""):
    """Get environment variable by key"""
    value = load_environment().get(key)
    return value if value is not None else default


def validate_supabase_config() -> None:
    """
    Validate Supabase configuration.

    Raises:
        ValueError: If required Supabase configuration is missing
    """
    supabase_url = get_env("SUPABASE_PROJECT_URL")
    supabase_key = get_env("SUPABASE_SERVICE_ROLE_KEY")

    if not supabase_url or not supabase_key:
        raise ValueError(
            "Supabase configuration incomplete. Required: "
            "SUPABASE_PROJECT_URL and SUPABASE_SERVICE_ROLE_KEY"
        )
