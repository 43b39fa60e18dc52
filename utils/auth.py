import logging

from fastapi import Depends, HTTPException, Request

from services.orchestrator import SearchOrchestrator
from services.session import SessionManager

logger = logging.getLogger(__name__)


def get_session_manager(request: Request) -> SessionManager:
    return request.app.state.session


def get_orchestrator(request: Request) -> SearchOrchestrator:
    return request.app.state.orchestrator


async def get_current_user(
    session: SessionManager = Depends(get_session_manager),
) -> str:
    if not session.is_logged_in:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return session.current_user
