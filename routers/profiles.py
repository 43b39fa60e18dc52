import logging

from fastapi import APIRouter, HTTPException, Depends

from models.internal import SavedProfile
from models.requests import SaveProfileRequest
from models.responses import ProfileListResponse
from services.errors import MissingProfileName
from services.session import SessionManager
from utils.auth import get_session_manager, get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["profiles"])


@router.get("/profiles", response_model=ProfileListResponse)
async def list_profiles(
    user: str = Depends(get_current_user),
    session: SessionManager = Depends(get_session_manager),
):
    return ProfileListResponse(profiles=session.profiles)


@router.post("/profiles", response_model=SavedProfile, status_code=201)
async def create_profile(
    body: SaveProfileRequest,
    user: str = Depends(get_current_user),
    session: SessionManager = Depends(get_session_manager),
):
    """Save a new Ideal Customer Profile for the logged-in user."""
    try:
        return session.save_profile(body.name, body.profile)
    except MissingProfileName as e:
        raise HTTPException(status_code=400, detail=str(e))
