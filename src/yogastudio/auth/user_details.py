"""Credential store: principal lookup for the auth pipeline.

The auth code never touches the User model directly; it asks this store
for an immutable UserDetails snapshot by username (the user's email).
"""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from yogastudio.db.models import User


@dataclass(frozen=True)
class UserDetails:
    """The authenticated principal of a request."""

    id: int
    username: str
    first_name: str
    last_name: str
    password: str
    admin: bool = False

    @classmethod
    def from_user(cls, user: User) -> "UserDetails":
        return cls(
            id=user.id,
            username=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            password=user.password,
            admin=bool(user.admin),
        )


class UserDetailsService:
    """Loads principals from the users table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def load_user_by_username(self, username: str) -> Optional[UserDetails]:
        result = await self.db.execute(select(User).where(User.email == username))
        user = result.scalars().first()
        if user is None:
            return None
        return UserDetails.from_user(user)

    async def exists_by_username(self, username: str) -> bool:
        result = await self.db.execute(
            select(exists().where(User.email == username))
        )
        return bool(result.scalar())
