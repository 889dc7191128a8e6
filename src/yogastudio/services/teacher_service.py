"""Teacher service: read access plus creation for the admin CLI."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from yogastudio.db.models import Teacher


class TeacherService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_teachers(self) -> list[Teacher]:
        result = await self.db.execute(select(Teacher).order_by(Teacher.id))
        return list(result.scalars().all())

    async def get_teacher(self, teacher_id: int) -> Optional[Teacher]:
        return await self.db.get(Teacher, teacher_id)

    async def create_teacher(self, first_name: str, last_name: str) -> Teacher:
        teacher = Teacher(first_name=first_name, last_name=last_name)
        self.db.add(teacher)
        await self.db.commit()
        return teacher
