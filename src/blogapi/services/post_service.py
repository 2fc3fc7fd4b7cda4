"""Post service — business logic for blog posts.

Learn: Service layer separates business logic from HTTP routing.
API routes call services, services call the database. Ownership is
not decided here; routes ask auth.ownership before calling update or
delete, so every method below trusts its caller.

Publishing rules:
- first publish stamps published_at
- unpublishing clears it again
- only reads of published posts count as views
"""

import math
import uuid
from typing import Optional

import structlog
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.db.models import Post, utcnow
from blogapi.schemas.post import Pagination, PostCreate, PostUpdate

logger = structlog.get_logger()

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_PAGE = 10_000
MAX_LIMIT = 100


def _positive_int(raw: Optional[str], default: int) -> int:
    try:
        value = int(raw) if raw is not None else default
    except ValueError:
        return default
    return value if value > 0 else default


def page_params(page: Optional[str], limit: Optional[str]) -> tuple[int, int]:
    """Parse ?page=&limit= leniently.

    Junk or non-positive values fall back to defaults. page is capped at
    MAX_PAGE; a limit above MAX_LIMIT falls back to the default. Both stay
    small enough that the OFFSET fits a 64-bit integer.
    """
    page_no = min(_positive_int(page, DEFAULT_PAGE), MAX_PAGE)
    per_page = _positive_int(limit, DEFAULT_LIMIT)
    if per_page > MAX_LIMIT:
        per_page = DEFAULT_LIMIT
    return page_no, per_page


def paginate(page: int, limit: int, total: int) -> Pagination:
    total_pages = math.ceil(total / limit)
    return Pagination(
        current_page=page,
        total_pages=total_pages,
        total_posts=total,
        has_next_page=page < total_pages,
        has_prev_page=page > 1,
    )


def parse_post_id(raw: str) -> Optional[uuid.UUID]:
    """A malformed id is just an id that matches no post."""
    try:
        return uuid.UUID(raw)
    except (ValueError, TypeError):
        return None


def _sync_published_at(post: Post) -> None:
    if post.published and post.published_at is None:
        post.published_at = utcnow()
    elif not post.published and post.published_at is not None:
        post.published_at = None


class PostService:
    """CRUD and listings for posts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, post_id: Optional[uuid.UUID]) -> Post | None:
        if post_id is None:
            return None
        return await self.db.get(Post, post_id)

    async def list_published(self, page: int, limit: int) -> tuple[list[Post], Pagination]:
        where = Post.published.is_(True)
        result = await self.db.execute(
            select(Post)
            .where(where)
            .order_by(Post.published_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        total = await self.db.scalar(select(func.count()).select_from(Post).where(where))
        return list(result.scalars().unique().all()), paginate(page, limit, total or 0)

    async def list_by_author(
        self, author_id: uuid.UUID, page: int, limit: int
    ) -> tuple[list[Post], Pagination]:
        where = Post.author_id == author_id
        result = await self.db.execute(
            select(Post)
            .where(where)
            .order_by(Post.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        total = await self.db.scalar(select(func.count()).select_from(Post).where(where))
        return list(result.scalars().unique().all()), paginate(page, limit, total or 0)

    async def create(self, author_id: uuid.UUID, body: PostCreate) -> Post:
        post = Post(
            title=body.title,
            content=body.content,
            author_id=author_id,
            tags=body.tags,
            published=body.published,
        )
        _sync_published_at(post)
        self.db.add(post)
        await self.db.commit()
        await self.db.refresh(post)
        logger.info("post.created", post_id=str(post.id), author_id=str(author_id))
        return post

    async def update(self, post: Post, body: PostUpdate) -> Post:
        """Apply only the fields the client sent. author_id is never touched."""
        for field in ("title", "content", "tags", "published"):
            value = getattr(body, field)
            if field in body.model_fields_set and value is not None:
                setattr(post, field, value)
        _sync_published_at(post)
        await self.db.commit()
        await self.db.refresh(post)
        logger.info("post.updated", post_id=str(post.id))
        return post

    async def delete(self, post: Post) -> None:
        await self.db.delete(post)
        await self.db.commit()
        logger.info("post.deleted", post_id=str(post.id))

    async def record_view(self, post: Post) -> Post:
        if post.published:
            # Atomic increment; never read-modify-write.
            await self.db.execute(
                update(Post).where(Post.id == post.id).values(views=Post.views + 1)
            )
            await self.db.commit()
            await self.db.refresh(post)
        return post
