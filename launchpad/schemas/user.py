"""User Schemas — login request and user response bodies.

Invariants:
    - LoginRequest.email is stripped; structural validation happens in the core
      so invalid emails follow the same sentinel path as every other caller
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1, max_length=255)

    @field_validator("email")
    @classmethod
    def strip_email(cls, v: str) -> str:
        return v.strip()


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    token: str | None = None
