from pydantic import BaseModel, Field
from typing import List
from models.internal import CompanyProfile


class SaveProfileRequest(BaseModel):
    name: str = Field(
        ..., max_length=200,
        description="Display name for the saved profile",
    )
    profile: CompanyProfile


class SearchRequest(BaseModel):
    profile_ids: List[str] = Field(
        default_factory=list,
        description="Ids of the saved profiles to search leads for",
    )
