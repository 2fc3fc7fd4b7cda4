"""Credential store tests — lookups, creation, secret comparison."""

import pytest

from blogapi.auth.password import hash_password
from blogapi.services.user_service import UserService


@pytest.fixture
def users(db_session):
    return UserService(db_session)


@pytest.mark.asyncio
async def test_find_by_username(users, db_session):
    created = await users.create("erin", "Erin@Example.com", hash_password("secret1", rounds=4))
    await db_session.commit()

    found = await users.find_by_username(" erin ")
    assert found is not None
    assert found.id == created.id
    assert found.email == "erin@example.com"
    assert await users.find_by_username("Erin") is None
    assert await users.find_by_username("nobody") is None


@pytest.mark.asyncio
async def test_find_by_email_ignores_case(users, db_session):
    created = await users.create("frank", "frank@example.com", hash_password("secret1", rounds=4))
    await db_session.commit()

    assert (await users.find_by_email("FRANK@example.com")).id == created.id
    assert (await users.find_by_id(created.id)).username == "frank"


@pytest.mark.asyncio
async def test_compare_secret(users):
    stored = hash_password("secret1", rounds=4)
    assert await users.compare_secret("secret1", stored) is True
    assert await users.compare_secret("secret2", stored) is False
