"""Post API routes.

Learn: Which gate guards which route:

    GET    /posts            open
    GET    /posts/user/me    get_current_user           (own posts, drafts too)
    GET    /posts/{id}       get_current_user_optional  (drafts for their author)
    POST   /posts            get_current_user
    PUT    /posts/{id}       get_current_user + ensure_owner
    DELETE /posts/{id}       get_current_user + ensure_owner

Path ids are taken as plain strings; a malformed id is reported the
same way as an id that matches nothing (404).
"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.auth.dependencies import get_current_user, get_current_user_optional
from blogapi.auth.identity import Anonymous, Identity
from blogapi.auth.ownership import ensure_owner, ensure_readable
from blogapi.db.engine import get_db
from blogapi.schemas.post import PostCreate, PostMessage, PostPage, PostRead, PostUpdate
from blogapi.services.post_service import PostService, page_params, parse_post_id

router = APIRouter(prefix="/posts")


def _svc(db: AsyncSession = Depends(get_db)) -> PostService:
    return PostService(db)


@router.get("", response_model=PostPage)
async def list_posts(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    svc: PostService = Depends(_svc),
):
    """Published posts, newest first."""
    page_no, per_page = page_params(page, limit)
    posts, pagination = await svc.list_published(page_no, per_page)
    return PostPage(
        posts=[PostRead.model_validate(p) for p in posts], pagination=pagination
    )


@router.get("/user/me", response_model=PostPage)
async def list_my_posts(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    identity: Identity = Depends(get_current_user),
    svc: PostService = Depends(_svc),
):
    """The caller's own posts, drafts included."""
    page_no, per_page = page_params(page, limit)
    posts, pagination = await svc.list_by_author(identity.id, page_no, per_page)
    return PostPage(
        posts=[PostRead.model_validate(p) for p in posts], pagination=pagination
    )


@router.get("/{post_id}", response_model=PostRead)
async def get_post(
    post_id: str,
    identity: Identity | Anonymous = Depends(get_current_user_optional),
    svc: PostService = Depends(_svc),
):
    post = ensure_readable(await svc.get(parse_post_id(post_id)), identity)
    return await svc.record_view(post)


@router.post("", response_model=PostMessage, status_code=201)
async def create_post(
    body: PostCreate,
    identity: Identity = Depends(get_current_user),
    svc: PostService = Depends(_svc),
):
    post = await svc.create(identity.id, body)
    return PostMessage(message="Post created successfully", post=PostRead.model_validate(post))


@router.put("/{post_id}", response_model=PostMessage)
async def update_post(
    post_id: str,
    body: PostUpdate,
    identity: Identity = Depends(get_current_user),
    svc: PostService = Depends(_svc),
):
    post = ensure_owner(await svc.get(parse_post_id(post_id)), identity, "edit")
    post = await svc.update(post, body)
    return PostMessage(message="Post updated successfully", post=PostRead.model_validate(post))


@router.delete("/{post_id}")
async def delete_post(
    post_id: str,
    identity: Identity = Depends(get_current_user),
    svc: PostService = Depends(_svc),
):
    post = ensure_owner(await svc.get(parse_post_id(post_id)), identity, "delete")
    await svc.delete(post)
    return {"message": "Post deleted successfully"}
