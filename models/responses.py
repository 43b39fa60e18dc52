from pydantic import BaseModel, Field
from typing import List, Optional
from enum import Enum
from models.internal import Lead, ProfileFailure, SavedProfile


class SearchState(str, Enum):
    IDLE = "idle"
    SEARCHING = "searching"
    SUCCESS = "success"
    FAILED = "failed"


class ProfileListResponse(BaseModel):
    profiles: List[SavedProfile] = Field(default_factory=list)


class SearchResponse(BaseModel):
    state: SearchState
    leads: List[Lead] = Field(default_factory=list)
    failures: List[ProfileFailure] = Field(
        default_factory=list,
        description="Per-profile failures, only populated in partial mode",
    )
    error: Optional[str] = None
    elapsed: Optional[float] = None


class ErrorResponse(BaseModel):
    error: str
    detail: Optional[str] = None
    error_type: Optional[str] = None
