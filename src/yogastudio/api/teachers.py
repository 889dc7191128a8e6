"""Teacher API routes (read-only)."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from yogastudio.db.engine import get_db
from yogastudio.errors import NotFoundError
from yogastudio.schemas.teacher import TeacherRead
from yogastudio.services.teacher_service import TeacherService

router = APIRouter(prefix="/teachers")


def _svc(db: AsyncSession = Depends(get_db)) -> TeacherService:
    return TeacherService(db)


@router.get("", response_model=list[TeacherRead])
async def list_teachers(svc: TeacherService = Depends(_svc)):
    return await svc.list_teachers()


@router.get("/{teacher_id}", response_model=TeacherRead)
async def get_teacher(teacher_id: int, svc: TeacherService = Depends(_svc)):
    teacher = await svc.get_teacher(teacher_id)
    if teacher is None:
        raise NotFoundError("Teacher not found")
    return teacher
