"""User API routes.

Users can read any profile but only delete their own account.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from yogastudio.auth.context import AuthContext
from yogastudio.auth.dependencies import get_current_user
from yogastudio.db.engine import get_db
from yogastudio.errors import NotFoundError, UnauthorizedError
from yogastudio.schemas.user import UserRead
from yogastudio.services.user_service import UserService

router = APIRouter(prefix="/users")


def _svc(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


@router.get("/{user_id}", response_model=UserRead)
async def get_user(user_id: int, svc: UserService = Depends(_svc)):
    user = await svc.get_user(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


@router.delete("/{user_id}")
async def delete_user(
    user_id: int,
    identity: AuthContext = Depends(get_current_user),
    svc: UserService = Depends(_svc),
):
    """Delete your own account. Someone else's → 401."""
    user = await svc.get_user(user_id)
    if user is None:
        raise NotFoundError("User not found")
    if user.email != identity.username:
        raise UnauthorizedError("You can only delete your own account")

    await svc.delete_user(user)
    return {"deleted": True}
