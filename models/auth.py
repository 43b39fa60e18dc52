from pydantic import BaseModel, Field, field_validator


class CredentialsRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=6, max_length=200)

    @field_validator("email")
    @classmethod
    def _looks_like_email(cls, v: str) -> str:
        if not v.strip() or "@" not in v:
            raise ValueError("Please enter a valid email address.")
        return v


class AuthResponse(BaseModel):
    email: str
    profile_count: int = 0


class UserInfo(BaseModel):
    email: str
    logged_in: bool = True
