import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import create_access_token, verify_password
from app.models.user import User
from app.schemas.auth import Token

logger = logging.getLogger(__name__)

class AuthService:
    """Checks credentials against the users table and issues access tokens."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_username(self, username: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def authenticate_user(self, username: str, password: str) -> Optional[User]:
        user = await self.get_by_username(username.strip())
        if not user or not user.is_active:
            logger.info("Login refused for unknown or inactive user %r", username)
            return None
        if not verify_password(password, user.hashed_password):
            logger.warning("Wrong password for user %s", user.id)
            return None
        return user

    def issue_token(self, user: User) -> Token:
        # The role travels in the token so requests never reload the user
        return Token(
            access_token=create_access_token(subject=user.id, role=user.role),
            token_type="bearer",
        )
