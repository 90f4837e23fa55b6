from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for every wire model: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def not_null(value):
    """Optional fields may be left out, but not sent as null."""
    if value is None:
        raise ValueError("may not be null")
    return value


# -------- AUTH --------
class RegisterSchema(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    name: Optional[str] = Field(None, min_length=1, max_length=100)


class TokenSchema(BaseModel):
    access_token: str
    token_type: str = "bearer"


class CurrentUser(BaseModel):
    """Identity resolved from the bearer token and passed into every handler."""

    id: int
    email: str


# -------- PROFILE --------
class UserOut(CamelModel):
    id: int
    email: str
    name: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class UserResponse(CamelModel):
    user: UserOut


class UserUpdateSchema(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None

    @field_validator("name", "email", mode="before")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)


class PasswordChangeSchema(CamelModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8)


class SuccessResponse(BaseModel):
    success: bool = True
