"""Shared dependencies for API routes."""

from functools import lru_cache

from fastapi import HTTPException, status

from tripcraft.config import get_settings
from tripcraft.llm.gateway import OracleGateway, create_gateway_from_settings
from tripcraft.planning.session import PlanSession


class SessionRegistry:
    """In-process registry of plan sessions sharing one oracle gateway."""

    def __init__(self, gateway: OracleGateway) -> None:
        self.gateway = gateway
        self._sessions: dict[str, PlanSession] = {}

    def create(self) -> PlanSession:
        session = PlanSession(self.gateway)
        self._sessions[session.session_id] = session
        return session

    def get(self, session_id: str) -> PlanSession:
        """Get session by ID.

        Raises:
            HTTPException: 404 if the session does not exist
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Session {session_id} not found",
            )
        return session

    def remove(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)


@lru_cache
def get_registry() -> SessionRegistry:
    """Get the process-wide session registry."""
    return SessionRegistry(create_gateway_from_settings(get_settings()))
