from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError


class LoginRequest(BaseModel):
    username: str = Field("", validate_default=True)
    password: str = Field("", validate_default=True)

    @field_validator("username", mode="before")
    @classmethod
    def require_username(cls, value):
        if not isinstance(value, str) or not value.strip():
            raise PydanticCustomError("required", "Username is required")
        return value.strip()

    @field_validator("password", mode="before")
    @classmethod
    def require_password(cls, value):
        if not isinstance(value, str) or not value:
            raise PydanticCustomError("required", "Password is required")
        return value


class AdminIdentity(BaseModel):
    """The authenticated caller, as carried by a verified bearer token."""

    id: str
    username: str


class LoginResponse(BaseModel):
    token: str
    user: AdminIdentity
