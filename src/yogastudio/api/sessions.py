"""Session and participation API routes.

CRUD on /sessions, plus join/leave on
/sessions/{session_id}/participants/{user_id}.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from yogastudio.db.engine import get_db
from yogastudio.errors import NotFoundError
from yogastudio.schemas.session import SessionRead, SessionWrite
from yogastudio.services.participation_service import ParticipationService
from yogastudio.services.session_service import SessionService

router = APIRouter(prefix="/sessions")


def _svc(db: AsyncSession = Depends(get_db)) -> SessionService:
    return SessionService(db)


def _participation(db: AsyncSession = Depends(get_db)) -> ParticipationService:
    return ParticipationService(db)


# ─── Sessions ───────────────────────────────────────────

@router.get("", response_model=list[SessionRead])
async def list_sessions(svc: SessionService = Depends(_svc)):
    return await svc.list_sessions()


@router.get("/{session_id}", response_model=SessionRead)
async def get_session(session_id: int, svc: SessionService = Depends(_svc)):
    session = await svc.get_session(session_id)
    if session is None:
        raise NotFoundError("Session not found")
    return session


@router.post("", response_model=SessionRead)
async def create_session(body: SessionWrite, svc: SessionService = Depends(_svc)):
    return await svc.create_session(
        name=body.name,
        date=body.date,
        teacher_id=body.teacher_id,
        description=body.description,
    )


@router.put("/{session_id}", response_model=SessionRead)
async def update_session(
    session_id: int,
    body: SessionWrite,
    svc: SessionService = Depends(_svc),
):
    return await svc.update_session(
        session_id,
        name=body.name,
        date=body.date,
        teacher_id=body.teacher_id,
        description=body.description,
    )


@router.delete("/{session_id}")
async def delete_session(session_id: int, svc: SessionService = Depends(_svc)):
    await svc.delete_session(session_id)
    return {"deleted": True}


# ─── Participation ──────────────────────────────────────

@router.post("/{session_id}/participants/{user_id}", response_model=SessionRead)
async def join_session(
    session_id: int,
    user_id: int,
    svc: ParticipationService = Depends(_participation),
):
    result = await svc.join(session_id, user_id)
    return result.raise_for_error()


@router.delete("/{session_id}/participants/{user_id}", response_model=SessionRead)
async def leave_session(
    session_id: int,
    user_id: int,
    svc: ParticipationService = Depends(_participation),
):
    result = await svc.leave(session_id, user_id)
    return result.raise_for_error()
