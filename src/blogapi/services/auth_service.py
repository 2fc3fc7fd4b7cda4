"""Auth service — registration and login.

Learn: Thin orchestration over the user store and the token codec.

- register: reject duplicates, hash, insert, issue a token
- login: look up by email, check the password, issue a token

Login has exactly one failure: InvalidCredentials. Unknown email and
wrong password produce the same error and message, so the endpoint
can't be used to find out which emails have accounts.
"""

import asyncio

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.auth.password import hash_password
from blogapi.auth.tokens import TokenCodec
from blogapi.db.models import User
from blogapi.errors import Conflict, InvalidCredentials
from blogapi.services.user_service import UserService

logger = structlog.get_logger()


class AuthService:
    """Credential lifecycle: register and login."""

    def __init__(self, db: AsyncSession, codec: TokenCodec):
        self.db = db
        self.users = UserService(db)
        self.codec = codec

    async def register(self, username: str, email: str, password: str) -> tuple[User, str]:
        """Create an account and return it with a fresh token.

        Raises Conflict if the username or email (any case) is taken.
        """
        existing = await self.users.find_by_username_or_email(username, email)
        if existing:
            logger.info("auth.register_conflict", username=username)
            raise Conflict("User already exists")

        password_hash = await asyncio.to_thread(hash_password, password)
        try:
            user = await self.users.create(username, email, password_hash)
            await self.db.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration for the same name/email.
            await self.db.rollback()
            raise Conflict("User already exists") from e

        await self.db.refresh(user)
        logger.info("auth.registered", user_id=str(user.id))
        return user, self.codec.issue(str(user.id))

    async def login(self, email: str, password: str) -> tuple[User, str]:
        """Check credentials and return the user with a fresh token."""
        user = await self.users.find_by_email(email)
        if user is None or not await self.users.compare_secret(password, user.password_hash):
            logger.info("auth.login_failed")
            raise InvalidCredentials()

        logger.info("auth.logged_in", user_id=str(user.id))
        return user, self.codec.issue(str(user.id))
