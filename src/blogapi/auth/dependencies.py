"""FastAPI auth dependencies — the request gate.

Learn: These are used as Depends() in route handlers to extract
and validate the current user from the request.

Per request the gate walks one path:

    no token → token present → {invalid signature, expired, valid}
                                                      ↓
                                  {user not found, identity attached}

authenticate() returns either the Identity or the DenialReason where
the walk stopped. The two dependencies differ only in what they do with
a DenialReason: get_current_user turns it into a 401, and
get_current_user_optional turns it into ANONYMOUS.
"""

from typing import Optional

import structlog
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.auth.identity import (
    ANONYMOUS,
    Anonymous,
    Identity,
    IdentityNotFound,
    IdentityResolver,
)
from blogapi.auth.tokens import InvalidSignature, TokenCodec, TokenExpired, get_token_codec
from blogapi.db.engine import get_db
from blogapi.errors import DenialReason, ServerFault, Unauthenticated

logger = structlog.get_logger()

BEARER_PREFIX = "Bearer "


def extract_bearer(authorization: Optional[str]) -> Optional[str]:
    """Pull the token out of an `Authorization: Bearer <token>` header.

    The prefix is case-sensitive with exactly one space. Anything else,
    including "Bearer " with nothing after it, means no token.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    return authorization[len(BEARER_PREFIX):] or None


async def authenticate(
    authorization: Optional[str],
    codec: TokenCodec,
    resolver: IdentityResolver,
) -> Identity | DenialReason:
    """Run the gate. Auth failures come back as a DenialReason, never raised.

    Anything unexpected (store down, bug) is logged and raised as
    ServerFault without internal detail.
    """
    token = extract_bearer(authorization)
    if token is None:
        return DenialReason.NO_TOKEN

    try:
        subject_id = codec.verify(token)
    except TokenExpired:
        return DenialReason.TOKEN_EXPIRED
    except InvalidSignature:
        return DenialReason.INVALID_TOKEN

    try:
        return await resolver.resolve(subject_id)
    except IdentityNotFound:
        return DenialReason.USER_NOT_FOUND
    except Exception as e:
        logger.exception("auth.resolve_failed", subject_id=subject_id)
        raise ServerFault("Server error in authentication") from e


def _resolver(db: AsyncSession = Depends(get_db)) -> IdentityResolver:
    return IdentityResolver(db)


async def get_current_user(
    authorization: Optional[str] = Header(None),
    codec: TokenCodec = Depends(get_token_codec),
    resolver: IdentityResolver = Depends(_resolver),
) -> Identity:
    """Mandatory auth — 401 with the denial reason unless an identity resolves."""
    result = await authenticate(authorization, codec, resolver)
    if isinstance(result, DenialReason):
        logger.info("auth.denied", reason=result.value)
        raise Unauthenticated(result)
    return result


async def get_current_user_optional(
    authorization: Optional[str] = Header(None),
    codec: TokenCodec = Depends(get_token_codec),
    resolver: IdentityResolver = Depends(_resolver),
) -> Identity | Anonymous:
    """Optional auth — the identity if one resolves, otherwise ANONYMOUS."""
    result = await authenticate(authorization, codec, resolver)
    if isinstance(result, DenialReason):
        return ANONYMOUS
    return result
