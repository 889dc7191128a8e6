"""Session participation: join/leave state machine.

Each (session, user) pair is either NOT_PARTICIPATING or PARTICIPATING:

    NOT_PARTICIPATING --join--> PARTICIPATING
    PARTICIPATING --leave--> NOT_PARTICIPATING

Joining twice and leaving without having joined are illegal transitions.
They are reported, never absorbed.

Outcomes come back as a ParticipationResult instead of an exception, so
callers have to look at which failure they got. The HTTP layer calls
raise_for_error() to turn a failure into a 404 or 400.

Both operations read the whole session, change its participant list and
write it back. Concurrent join/leave on one session is serialised by the
database (the unique constraint on participations catches a racing
duplicate join); nothing here takes locks.
"""

import enum
from dataclasses import dataclass
from typing import Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from yogastudio.db.models import User, YogaSession
from yogastudio.errors import AppError, BadRequestError, NotFoundError

logger = structlog.get_logger()


class ParticipationState(str, enum.Enum):
    NOT_PARTICIPATING = "not_participating"
    PARTICIPATING = "participating"


class ParticipationError(str, enum.Enum):
    SESSION_NOT_FOUND = "session_not_found"
    USER_NOT_FOUND = "user_not_found"
    ALREADY_PARTICIPATING = "already_participating"
    NOT_PARTICIPATING = "not_participating"

    @property
    def message(self) -> str:
        return _ERROR_MESSAGES[self]

    def to_exception(self) -> AppError:
        if self in (ParticipationError.SESSION_NOT_FOUND, ParticipationError.USER_NOT_FOUND):
            return NotFoundError(self.message)
        return BadRequestError(self.message)


_ERROR_MESSAGES = {
    ParticipationError.SESSION_NOT_FOUND: "Session not found",
    ParticipationError.USER_NOT_FOUND: "User not found",
    ParticipationError.ALREADY_PARTICIPATING: "User already participates in this session",
    ParticipationError.NOT_PARTICIPATING: "User does not participate in this session",
}


@dataclass(frozen=True)
class ParticipationResult:
    """Outcome of a join or leave.

    On success ``session`` is the updated session and ``error`` is None.
    On failure ``error`` says why and nothing was written.
    """

    session: Optional[YogaSession] = None
    error: Optional[ParticipationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> YogaSession:
        """Return the session, or raise NotFoundError/BadRequestError."""
        if self.error is not None:
            raise self.error.to_exception()
        return self.session


def participation_state(session: YogaSession, user_id: int) -> ParticipationState:
    if any(user.id == user_id for user in session.participants):
        return ParticipationState.PARTICIPATING
    return ParticipationState.NOT_PARTICIPATING


class ParticipationService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def join(self, session_id: int, user_id: int) -> ParticipationResult:
        session = await self.db.get(YogaSession, session_id)
        if session is None:
            return self._fail(ParticipationError.SESSION_NOT_FOUND, session_id, user_id)

        user = await self.db.get(User, user_id)
        if user is None:
            return self._fail(ParticipationError.USER_NOT_FOUND, session_id, user_id)

        if participation_state(session, user_id) is ParticipationState.PARTICIPATING:
            return self._fail(ParticipationError.ALREADY_PARTICIPATING, session_id, user_id)

        session.participants.append(user)
        await self.db.commit()
        logger.info(
            "participation.joined",
            session_id=session_id,
            user_id=user_id,
            participants=len(session.participants),
        )
        return ParticipationResult(session=session)

    async def leave(self, session_id: int, user_id: int) -> ParticipationResult:
        session = await self.db.get(YogaSession, session_id)
        if session is None:
            return self._fail(ParticipationError.SESSION_NOT_FOUND, session_id, user_id)

        if participation_state(session, user_id) is ParticipationState.NOT_PARTICIPATING:
            return self._fail(ParticipationError.NOT_PARTICIPATING, session_id, user_id)

        # Rebuild the list so the remaining participants keep their order.
        session.participants = [
            user for user in session.participants if user.id != user_id
        ]
        await self.db.commit()
        logger.info(
            "participation.left",
            session_id=session_id,
            user_id=user_id,
            participants=len(session.participants),
        )
        return ParticipationResult(session=session)

    def _fail(
        self, error: ParticipationError, session_id: int, user_id: int
    ) -> ParticipationResult:
        logger.info(
            "participation.rejected",
            reason=error.value,
            session_id=session_id,
            user_id=user_id,
        )
        return ParticipationResult(error=error)
