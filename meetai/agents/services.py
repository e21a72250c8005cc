"""
Agents Business Logic - owner-scoped CRUD over the agents table.

Every query is filtered by the session user's id, so an agent that belongs to
someone else behaves exactly like one that does not exist.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional

from supabase import Client

from meetai.shared.utils.service_loader import get_supabase_client

from .constants import AGENT_COLUMNS, AGENTS_TABLE
from .exceptions import AgentNotFoundError, AgentStoreError
from .models import Agent

logger = logging.getLogger(__name__)


class AgentService:
    """
    Agent directory backed by Supabase (PostgREST).

    Responsibilities:
    - List and fetch agents owned by a user
    - Insert new agents on behalf of a user
    - Update name/instructions of an owned agent
    """

    def __init__(self, client: Optional[Client] = None):
        """Initialize service with a Supabase client (lazy loaded if omitted)."""
        self._client = client

    @property
    def client(self) -> Client:
        """Lazy load Supabase client."""
        if self._client is None:
            self._client = get_supabase_client()
        return self._client

    def _table(self):
        return self.client.table(AGENTS_TABLE)

    def _execute(self, operation: str, build_query: Callable[[], Any]) -> List[dict]:
        """Run a PostgREST query, wrapping transport/storage failures."""
        try:
            response = build_query().execute()
        except Exception as e:
            logger.error(f"Agent store {operation} failed: {e}")
            raise AgentStoreError(
                f"Failed to {operation} agents", details={"error": str(e)}
            ) from e
        return response.data or []

    # ==================== QUERIES ====================

    def get_many(self, user_id: str) -> List[Agent]:
        """
        Get all agents owned by a user.

        Args:
            user_id: Session user id

        Returns:
            List of agents (possibly empty)
        """
        rows = self._execute(
            "list",
            lambda: self._table().select(AGENT_COLUMNS).eq("user_id", user_id),
        )
        logger.debug(f"Loaded {len(rows)} agents for user {user_id}")
        return [Agent.from_row(row) for row in rows]

    def get_one(self, user_id: str, agent_id: str) -> Agent:
        """
        Get one agent owned by a user.

        Raises:
            AgentNotFoundError: If the agent is missing or owned by someone else
        """
        rows = self._execute(
            "read",
            lambda: self._table()
            .select(AGENT_COLUMNS)
            .eq("id", agent_id)
            .eq("user_id", user_id)
            .limit(1),
        )
        if not rows:
            raise AgentNotFoundError(agent_id)
        return Agent.from_row(rows[0])

    # ==================== MUTATIONS ====================

    def create(self, user_id: str, name: str, instructions: str) -> Agent:
        """
        Insert a new agent owned by the user.

        Returns:
            The inserted agent with its server-generated id
        """
        rows = self._execute(
            "create",
            lambda: self._table().insert(
                {"user_id": user_id, "name": name, "instructions": instructions}
            ),
        )
        if not rows:
            raise AgentStoreError("Insert returned no rows")

        agent = Agent.from_row(rows[0])
        logger.info(f"Created agent {agent.id} for user {user_id}")
        return agent

    def update(self, user_id: str, agent_id: str, name: str, instructions: str) -> Agent:
        """
        Update name and instructions of an owned agent.

        Raises:
            AgentNotFoundError: If the agent is missing or owned by someone else
        """
        rows = self._execute(
            "update",
            lambda: self._table()
            .update(
                {
                    "name": name,
                    "instructions": instructions,
                    "updated_at": datetime.now(timezone.utc).isoformat(),
                }
            )
            .eq("id", agent_id)
            .eq("user_id", user_id),
        )
        if not rows:
            raise AgentNotFoundError(agent_id)

        agent = Agent.from_row(rows[0])
        logger.info(f"Updated agent {agent.id} for user {user_id}")
        return agent


# Singleton instance
_agent_service: Optional[AgentService] = None


def get_agent_service() -> AgentService:
    """Get or create the Agent service singleton."""
    global _agent_service
    if _agent_service is None:
        _agent_service = AgentService()
    return _agent_service
