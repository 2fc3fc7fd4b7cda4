"""JWT token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication. Nothing
about an issued token is stored server-side; a token is good as long as
its signature checks out against our secret and `exp` is in the future.

Payload: {"sub": <user id>, "iat": <issued at>, "exp": <iat + 7 days>}

The codec takes its secret at construction. Routes get one through the
get_token_codec dependency, which builds it from settings.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from blogapi.config import settings

DEFAULT_LIFETIME = timedelta(days=7)


class TokenError(Exception):
    """Raised when token verification fails."""


class InvalidSignature(TokenError):
    """Signature mismatch, malformed token, or missing claims."""


class TokenExpired(TokenError):
    """The token's `exp` has passed."""


class TokenCodec:
    """Issue and verify signed bearer tokens for a single secret."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        lifetime: timedelta = DEFAULT_LIFETIME,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.lifetime = lifetime

    def issue(self, subject_id: str, now: Optional[datetime] = None) -> str:
        """Create a token for subject_id that expires exactly one lifetime from now."""
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(subject_id),
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """Verify a token and return its subject id.

        Raises TokenExpired once the current time reaches `exp`, and
        InvalidSignature for everything else PyJWT rejects.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "iat", "exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpired("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidSignature(f"Invalid token: {e}") from e
        return payload["sub"]


def get_token_codec() -> TokenCodec:
    """FastAPI dependency — a codec configured from settings."""
    return TokenCodec(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        lifetime=timedelta(days=settings.token_expire_days),
    )
