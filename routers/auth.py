import logging

from fastapi import APIRouter, HTTPException, Depends

from models.auth import CredentialsRequest, AuthResponse, UserInfo
from services.errors import DuplicateAccount, InvalidCredentials
from services.orchestrator import SearchOrchestrator
from services.session import SessionManager
from utils.auth import get_session_manager, get_orchestrator, get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["auth"])


@router.post("/auth/signup", response_model=AuthResponse)
async def signup(body: CredentialsRequest, session: SessionManager = Depends(get_session_manager)):
    """Create an account and log straight into it."""
    try:
        email = session.signup(body.email, body.password)
    except DuplicateAccount as e:
        raise HTTPException(status_code=409, detail=str(e))
    return AuthResponse(email=email, profile_count=len(session.profiles))


@router.post("/auth/login", response_model=AuthResponse)
async def login(body: CredentialsRequest, session: SessionManager = Depends(get_session_manager)):
    try:
        email = session.login(body.email, body.password)
    except InvalidCredentials as e:
        raise HTTPException(status_code=401, detail=str(e))
    return AuthResponse(email=email, profile_count=len(session.profiles))


@router.post("/auth/logout")
async def logout(
    session: SessionManager = Depends(get_session_manager),
    orchestrator: SearchOrchestrator = Depends(get_orchestrator),
):
    """Hard reset: session marker, profiles, leads and search state are all cleared."""
    session.logout()
    orchestrator.reset()
    return {"status": "logged_out"}


@router.get("/auth/me", response_model=UserInfo)
async def get_me(user: str = Depends(get_current_user)):
    return UserInfo(email=user)
