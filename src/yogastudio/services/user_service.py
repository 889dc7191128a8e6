"""User service: account creation, lookup and deletion."""

from typing import Optional

import structlog
from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from yogastudio.auth.password import hash_password
from yogastudio.db.models import User, YogaSession

logger = structlog.get_logger()


class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user(self, user_id: int) -> Optional[User]:
        return await self.db.get(User, user_id)

    async def exists_by_email(self, email: str) -> bool:
        result = await self.db.execute(select(exists().where(User.email == email)))
        return bool(result.scalar())

    async def create_user(
        self,
        email: str,
        first_name: str,
        last_name: str,
        password: str,
        admin: bool = False,
    ) -> User:
        """Create a user, hashing the plaintext password."""
        user = User(
            email=email,
            first_name=first_name,
            last_name=last_name,
            password=hash_password(password),
            admin=admin,
        )
        self.db.add(user)
        await self.db.commit()
        logger.info("user.created", user_id=user.id, admin=admin)
        return user

    async def delete_user(self, user: User) -> None:
        """Delete a user together with their session participations."""
        result = await self.db.execute(
            select(YogaSession).where(YogaSession.participants.any(User.id == user.id))
        )
        for session in result.scalars().all():
            if user in session.participants:
                session.participants.remove(user)
        await self.db.delete(user)
        await self.db.commit()
        logger.info("user.deleted", user_id=user.id)
