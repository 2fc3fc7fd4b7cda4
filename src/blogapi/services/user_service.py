"""User service — the credential store.

Learn: Thin data access over the users table. Lookups by id, username
and email, row creation, and password comparison. Email lookups compare
lowercased values so "A@x.com" and "a@x.com" are the same account.

Storage errors (connection drops, timeouts) are not caught here; they
propagate to the caller, which reports them as a server fault.
"""

import asyncio
import uuid

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.auth.password import verify_password
from blogapi.db.models import User


class UserService:
    """Find, create, and check credentials of users."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, user_id: uuid.UUID) -> User | None:
        return await self.db.get(User, user_id)

    async def find_by_email(self, email: str) -> User | None:
        result = await self.db.execute(
            select(User).where(func.lower(User.email) == email.strip().lower())
        )
        return result.scalars().first()

    async def find_by_username(self, username: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.username == username.strip())
        )
        return result.scalars().first()

    async def find_by_username_or_email(self, username: str, email: str) -> User | None:
        result = await self.db.execute(
            select(User).where(
                or_(
                    User.username == username.strip(),
                    func.lower(User.email) == email.strip().lower(),
                )
            )
        )
        return result.scalars().first()

    async def create(self, username: str, email: str, password_hash: str) -> User:
        """Insert a user. The caller hashes the password first."""
        user = User(
            username=username.strip(),
            email=email.strip().lower(),
            password_hash=password_hash,
        )
        self.db.add(user)
        await self.db.flush()
        return user

    async def compare_secret(self, candidate: str, stored_hash: str) -> bool:
        """bcrypt check off the event loop."""
        return await asyncio.to_thread(verify_password, candidate, stored_hash)
