"""Identity resolution — token subject → live user.

Learn: A valid signature proves we issued the token, not that the user
still exists. The resolver loads the user behind a token's subject and
returns an Identity: id, username, email, and nothing else. The
password hash never leaves the users table through this path.

Requests without an identity carry ANONYMOUS instead of None, so every
handler that accepts optional auth has to say what it does with each
case.
"""

import uuid
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.db.models import User
from blogapi.services.user_service import UserService


class IdentityNotFound(Exception):
    """No live user for this subject id (deleted, or never a valid id)."""


@dataclass(frozen=True)
class Identity:
    """The authenticated caller for the duration of one request."""

    id: uuid.UUID
    username: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> "Identity":
        return cls(id=user.id, username=user.username, email=user.email)


class Anonymous:
    """No identity is attached to the request."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ANONYMOUS"

    def __bool__(self) -> bool:
        return False


ANONYMOUS = Anonymous()


class IdentityResolver:
    """Resolve a token subject to an Identity via the user store."""

    def __init__(self, db: AsyncSession):
        self.users = UserService(db)

    async def resolve(self, subject_id: str) -> Identity:
        try:
            user_id = uuid.UUID(str(subject_id))
        except ValueError as e:
            raise IdentityNotFound(subject_id) from e

        user = await self.users.find_by_id(user_id)
        if user is None:
            raise IdentityNotFound(subject_id)
        return Identity.from_user(user)
