"""Authentication gate tests — header parsing and the authenticate() state machine.

Learn: authenticate() is exercised with a real TokenCodec and a stub
resolver, so each terminal state of the gate can be hit directly
without HTTP or a database.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from blogapi.auth.dependencies import authenticate, extract_bearer
from blogapi.auth.identity import ANONYMOUS, Anonymous, Identity, IdentityNotFound
from blogapi.auth.tokens import TokenCodec
from blogapi.errors import DenialReason, ServerFault

ALICE = Identity(id=uuid.uuid4(), username="alice", email="alice@example.com")


class StubResolver:
    def __init__(self, *identities, error=None):
        self.identities = {str(i.id): i for i in identities}
        self.error = error

    async def resolve(self, subject_id):
        if self.error:
            raise self.error
        try:
            return self.identities[subject_id]
        except KeyError:
            raise IdentityNotFound(subject_id)


@pytest.fixture
def codec():
    return TokenCodec("gate-secret")


# ═══════════════════════════════════════════════════════════
# Header extraction
# ═══════════════════════════════════════════════════════════


@pytest.mark.parametrize(
    "header",
    [None, "", "Bearer ", "bearer abc", "BEARER abc", "Bearer", "Token abc", "Basic dXNlcjpwdw==", "Bearerabc"],
)
def test_extract_bearer_rejects_non_bearer(header):
    assert extract_bearer(header) is None


def test_extract_bearer_returns_token():
    assert extract_bearer("Bearer abc.def.ghi") == "abc.def.ghi"


# ═══════════════════════════════════════════════════════════
# authenticate()
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_valid_token_attaches_identity(codec):
    token = codec.issue(str(ALICE.id))
    result = await authenticate(f"Bearer {token}", codec, StubResolver(ALICE))
    assert result == ALICE


@pytest.mark.asyncio
async def test_missing_header_is_no_token(codec):
    assert await authenticate(None, codec, StubResolver(ALICE)) is DenialReason.NO_TOKEN


@pytest.mark.asyncio
async def test_malformed_prefix_is_no_token(codec):
    token = codec.issue(str(ALICE.id))
    result = await authenticate(f"Token {token}", codec, StubResolver(ALICE))
    assert result is DenialReason.NO_TOKEN


@pytest.mark.asyncio
async def test_tampered_token_is_invalid(codec):
    token = TokenCodec("attacker-secret").issue(str(ALICE.id))
    result = await authenticate(f"Bearer {token}", codec, StubResolver(ALICE))
    assert result is DenialReason.INVALID_TOKEN


@pytest.mark.asyncio
async def test_expired_token_is_expired(codec):
    token = codec.issue(str(ALICE.id), now=datetime.now(timezone.utc) - timedelta(days=8))
    result = await authenticate(f"Bearer {token}", codec, StubResolver(ALICE))
    assert result is DenialReason.TOKEN_EXPIRED


@pytest.mark.asyncio
async def test_unknown_subject_is_user_not_found(codec):
    token = codec.issue(str(uuid.uuid4()))
    result = await authenticate(f"Bearer {token}", codec, StubResolver(ALICE))
    assert result is DenialReason.USER_NOT_FOUND


@pytest.mark.asyncio
async def test_store_failure_is_server_fault(codec):
    token = codec.issue(str(ALICE.id))
    resolver = StubResolver(error=ConnectionError("db host 10.0.0.5 unreachable"))
    with pytest.raises(ServerFault) as exc:
        await authenticate(f"Bearer {token}", codec, resolver)
    assert "10.0.0.5" not in exc.value.detail
    assert exc.value.status_code == 500


def test_anonymous_is_a_falsy_singleton():
    assert Anonymous() is ANONYMOUS
    assert not ANONYMOUS
    assert not isinstance(ANONYMOUS, Identity)
