"""Session service: CRUD for yoga sessions.

Participants are deliberately out of reach here: create starts with an
empty list and update never touches it. See participation_service.
"""

from datetime import datetime
from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from yogastudio.db.models import Teacher, YogaSession
from yogastudio.errors import NotFoundError

logger = structlog.get_logger()


class SessionService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_sessions(self) -> list[YogaSession]:
        result = await self.db.execute(
            select(YogaSession).order_by(YogaSession.date, YogaSession.id)
        )
        return list(result.scalars().all())

    async def get_session(self, session_id: int) -> Optional[YogaSession]:
        return await self.db.get(YogaSession, session_id)

    async def create_session(
        self,
        name: str,
        date: datetime,
        teacher_id: int,
        description: str,
    ) -> YogaSession:
        teacher = await self._require_teacher(teacher_id)
        session = YogaSession(
            name=name,
            date=date,
            description=description,
            teacher=teacher,
            participants=[],
        )
        self.db.add(session)
        await self.db.commit()
        logger.info("session.created", session_id=session.id, teacher_id=teacher.id)
        return session

    async def update_session(
        self,
        session_id: int,
        name: str,
        date: datetime,
        teacher_id: int,
        description: str,
    ) -> YogaSession:
        session = await self.get_session(session_id)
        if session is None:
            raise NotFoundError("Session not found")
        teacher = await self._require_teacher(teacher_id)

        session.name = name
        session.date = date
        session.description = description
        session.teacher = teacher
        await self.db.commit()
        logger.info("session.updated", session_id=session.id)
        return session

    async def delete_session(self, session_id: int) -> None:
        session = await self.get_session(session_id)
        if session is None:
            raise NotFoundError("Session not found")
        await self.db.delete(session)
        await self.db.commit()
        logger.info("session.deleted", session_id=session_id)

    async def _require_teacher(self, teacher_id: int) -> Teacher:
        teacher = await self.db.get(Teacher, teacher_id)
        if teacher is None:
            raise NotFoundError("Teacher not found")
        return teacher
