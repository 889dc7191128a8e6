"""Pydantic schemas for users. The password hash is never serialized."""

from datetime import datetime
from typing import Optional

from yogastudio.schemas.common import CamelModel


class UserRead(CamelModel):
    id: int
    email: str
    first_name: str
    last_name: str
    admin: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
