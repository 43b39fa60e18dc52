from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional
from enum import Enum


class EmailApproach(str, Enum):
    AGGRESSIVE = "aggressive"
    FRIENDLY = "friendly"
    PROFESSIONAL = "professional"
    CUSTOM = "custom"


class CamelModel(BaseModel):
    """Stored and exchanged with camelCase keys, usable with snake_case in Python."""
    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class CompanyProfile(CamelModel):
    """The searching company's self-description and targeting criteria."""
    sector: str = ""
    size: str = ""
    core_solution: str = ""
    icp: str = Field("", description="Ideal customer description")
    channels: str = ""
    linkedin_profile: Optional[str] = None
    twitter_profile: Optional[str] = None
    country: str = ""
    target_audience: str = ""
    email_approach: EmailApproach = EmailApproach.FRIENDLY
    custom_email_prompt: Optional[str] = Field(
        None, description="Only used when email_approach is 'custom'",
    )


class SavedProfile(CamelModel):
    id: str
    name: str
    profile: CompanyProfile


class LeadReport(CamelModel):
    """One prospect as described by the AI backend. Every value is untrusted text."""
    company_name: str = ""
    business_sector: str = ""
    key_contact: str = ""
    contact_number: str = ""
    company_website: str = ""
    digital_status: str = ""
    email_contact: Optional[str] = None

    @field_validator(
        "company_name", "business_sector", "key_contact", "contact_number",
        "company_website", "digital_status",
        mode="before",
    )
    @classmethod
    def _blank_if_missing(cls, v):
        if v is None:
            return ""
        if isinstance(v, (int, float, bool)):
            return str(v)
        return v

    @field_validator("email_contact", mode="before")
    @classmethod
    def _stringify_contact(cls, v):
        if isinstance(v, (int, float, bool)):
            return str(v)
        return v


class Lead(CamelModel):
    report: LeadReport = Field(default_factory=LeadReport)
    email: str = Field("", description="Generated outreach email body")

    @field_validator("email", mode="before")
    @classmethod
    def _blank_email(cls, v):
        return "" if v is None else v


class ProfileFailure(BaseModel):
    """Per-profile failure recorded by a partial-mode search."""
    profile_id: str
    profile_name: str
    error_type: str
    message: str
