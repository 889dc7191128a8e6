"""Pydantic schemas for registration and login."""

from pydantic import Field

from yogastudio.schemas.common import CamelModel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class SignupRequest(CamelModel):
    email: str = Field(..., max_length=50, pattern=EMAIL_PATTERN)
    first_name: str = Field(..., min_length=3, max_length=20)
    last_name: str = Field(..., min_length=3, max_length=20)
    password: str = Field(..., min_length=6, max_length=40)


class LoginRequest(CamelModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class JwtResponse(CamelModel):
    token: str
    type: str = "Bearer"
    id: int
    username: str
    first_name: str
    last_name: str
    admin: bool
