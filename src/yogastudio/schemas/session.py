"""Pydantic schemas for yoga sessions.

SessionWrite is used for both create and update. It has no participant
field: the participant list only changes through join/leave.

The teacher reference is the one snake_case key on the wire
(``teacher_id``); the booking client reads and writes it under that name.
``teacherId`` is still accepted on input.
"""

from datetime import datetime

from pydantic import AliasChoices, Field, field_validator

from yogastudio.schemas.common import CamelModel


def _teacher_id_field():
    return Field(
        ...,
        alias="teacher_id",
        validation_alias=AliasChoices("teacher_id", "teacherId"),
    )


class SessionWrite(CamelModel):
    name: str = Field(..., max_length=50)
    date: datetime
    teacher_id: int = _teacher_id_field()
    description: str = Field(..., max_length=2500)

    @field_validator("name", "description")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class SessionRead(CamelModel):
    id: int
    name: str
    date: datetime
    teacher_id: int = _teacher_id_field()
    description: str
    users: list[int] = Field(
        default_factory=list, validation_alias="participant_ids"
    )
    created_at: datetime
    updated_at: datetime
