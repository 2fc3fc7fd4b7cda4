"""Ownership policy for posts.

Learn: Two pure predicates and two enforcers.

- can_read: published posts are public; drafts only for their author
- can_mutate: only the author may edit or delete

ensure_readable reports a hidden draft exactly like a missing post
(404), so nobody can probe for the existence of other people's drafts.
ensure_owner reports a 403: the post exists and the caller can see
that it does, they just may not touch it.
"""

from blogapi.auth.identity import Anonymous, Identity
from blogapi.db.models import Post
from blogapi.errors import Forbidden, PostNotFound


def _is_owner(post: Post, identity: Identity | Anonymous | None) -> bool:
    return isinstance(identity, Identity) and identity.id == post.author_id


def can_read(post: Post, identity: Identity | Anonymous | None) -> bool:
    return bool(post.published) or _is_owner(post, identity)


def can_mutate(post: Post, identity: Identity | Anonymous | None) -> bool:
    return _is_owner(post, identity)


def ensure_readable(post: Post | None, identity: Identity | Anonymous) -> Post:
    if post is None or not can_read(post, identity):
        raise PostNotFound()
    return post


def ensure_owner(post: Post | None, identity: Identity, action: str = "edit") -> Post:
    if post is None:
        raise PostNotFound()
    if not can_mutate(post, identity):
        raise Forbidden(f"Access denied. You can only {action} your own posts")
    return post
