"""Pydantic schemas for teachers."""

from datetime import datetime

from yogastudio.schemas.common import CamelModel


class TeacherRead(CamelModel):
    id: int
    first_name: str
    last_name: str
    created_at: datetime
    updated_at: datetime
