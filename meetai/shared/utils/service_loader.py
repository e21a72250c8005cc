import logging
from functools import lru_cache

from supabase import Client, create_client

from meetai.config.environment import get_env, validate_supabase_config
from meetai.shared.services.AuthSessionService import AuthSessionService

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    """Lazy load and cache the Supabase client used for the agents table."""
    validate_supabase_config()
    client = create_client(
        get_env("SUPABASE_PROJECT_URL"), get_env("SUPABASE_SERVICE_ROLE_KEY")
    )
    logger.info("Initialized Supabase client")
    return client


@lru_cache(maxsize=1)
def get_auth_session_service() -> AuthSessionService:
    """Lazy load and cache the AuthSessionService instance."""
    return AuthSessionService(base_url=get_env("AUTH_BASE_URL"))
