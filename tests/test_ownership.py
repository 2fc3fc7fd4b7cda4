"""Ownership policy tests — pure, no database."""

import uuid

import pytest

from blogapi.auth.identity import ANONYMOUS, Identity
from blogapi.auth.ownership import can_mutate, can_read, ensure_owner, ensure_readable
from blogapi.db.models import Post
from blogapi.errors import Forbidden, PostNotFound

OWNER = Identity(id=uuid.uuid4(), username="alice", email="alice@example.com")
STRANGER = Identity(id=uuid.uuid4(), username="bob", email="bob@example.com")


def _post(published: bool) -> Post:
    return Post(
        id=uuid.uuid4(),
        title="Hello",
        content="Some content here",
        author_id=OWNER.id,
        published=published,
    )


def test_owner_can_mutate():
    assert can_mutate(_post(True), OWNER) is True


def test_non_owner_cannot_mutate():
    assert can_mutate(_post(True), STRANGER) is False


@pytest.mark.parametrize("identity", [ANONYMOUS, None])
def test_no_identity_cannot_mutate(identity):
    assert can_mutate(_post(True), identity) is False


@pytest.mark.parametrize("identity", [OWNER, STRANGER, ANONYMOUS, None])
def test_published_post_readable_by_anyone(identity):
    assert can_read(_post(True), identity) is True


@pytest.mark.parametrize("identity", [STRANGER, ANONYMOUS, None])
def test_draft_hidden_from_everyone_but_owner(identity):
    assert can_read(_post(False), identity) is False


def test_draft_readable_by_owner():
    assert can_read(_post(False), OWNER) is True


def test_identity_matching_is_by_id_only():
    same_id = Identity(id=OWNER.id, username="renamed", email="new@example.com")
    assert can_mutate(_post(False), same_id) is True


def test_ensure_readable_hides_draft_as_not_found():
    with pytest.raises(PostNotFound):
        ensure_readable(_post(False), STRANGER)
    with pytest.raises(PostNotFound):
        ensure_readable(None, OWNER)


def test_ensure_owner_distinguishes_forbidden_from_missing():
    with pytest.raises(Forbidden) as exc:
        ensure_owner(_post(True), STRANGER, "delete")
    assert exc.value.status_code == 403
    assert exc.value.detail == "Access denied. You can only delete your own posts"

    with pytest.raises(PostNotFound):
        ensure_owner(None, OWNER)


def test_ensure_owner_returns_post_for_owner():
    post = _post(False)
    assert ensure_owner(post, OWNER) is post
