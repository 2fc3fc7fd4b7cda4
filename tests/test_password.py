"""Password hashing tests."""

import pytest

from blogapi.auth.password import hash_password, verify_password


@pytest.fixture(scope="module")
def digest():
    return hash_password("secret1", rounds=4)


def test_hash_is_bcrypt_not_plaintext(digest):
    assert digest != "secret1"
    assert digest.startswith("$2b$04$")


def test_hash_is_salted():
    assert hash_password("secret1", rounds=4) != hash_password("secret1", rounds=4)


def test_verify_correct_password(digest):
    assert verify_password("secret1", digest) is True


def test_verify_wrong_password(digest):
    assert verify_password("secret2", digest) is False


def test_verify_corrupt_hash_is_a_mismatch():
    assert verify_password("secret1", "not-a-bcrypt-hash") is False


def test_default_rounds_come_from_settings():
    # conftest sets BLOGAPI_BCRYPT_ROUNDS=4
    assert hash_password("secret1").startswith("$2b$04$")
