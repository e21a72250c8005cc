"""
Agents Domain Module - the owner-scoped agent directory.

This module contains:
- Business Logic: models.py, services.py
- API Interfaces: routes.py (REST endpoints)
- Validation: schemas.py (Pydantic validation)
- Error Handling: exceptions.py
- Configuration: constants.py
"""

from .constants import AGENTS_TABLE, API_PREFIX, API_VERSION
from .exceptions import (
    AgentNotFoundError,
    AgentsError,
    AgentStoreError,
    InvalidRequestError,
)
from .models import Agent
from .routes import agents_bp
from .schemas import (
    AgentInsertSchema,
    AgentListResponseSchema,
    AgentResponseSchema,
    AgentUpdateSchema,
)
from .services import AgentService, get_agent_service

__all__ = [
    # Blueprint
    "agents_bp",
    # Models
    "Agent",
    # Services
    "AgentService",
    "get_agent_service",
    # Schemas
    "AgentInsertSchema",
    "AgentUpdateSchema",
    "AgentResponseSchema",
    "AgentListResponseSchema",
    # Exceptions
    "AgentsError",
    "AgentNotFoundError",
    "AgentStoreError",
    "InvalidRequestError",
    # Constants
    "AGENTS_TABLE",
    "API_PREFIX",
    "API_VERSION",
]
