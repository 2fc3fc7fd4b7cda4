"""Pydantic schemas for posts and paginated listings.

Learn: Separate "Create"/"Update" schemas (input) from "Read" schemas
(output). PostUpdate fields default to None and the service only
applies the ones the client actually sent (model_fields_set).
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


def _clean_tags(v):
    if v is None:
        return v
    return [t.strip().lower() for t in v if isinstance(t, str) and t.strip()]


class PostCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=10)
    tags: list[str] = Field(default_factory=list)
    published: bool = False

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("tags", mode="after")
    @classmethod
    def clean_tags(cls, v):
        return _clean_tags(v)


class PostUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, min_length=10)
    tags: Optional[list[str]] = None
    published: Optional[bool] = None

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("tags", mode="after")
    @classmethod
    def clean_tags(cls, v):
        return _clean_tags(v)


class AuthorRead(BaseModel):
    id: uuid.UUID
    username: str

    model_config = {"from_attributes": True}


class PostRead(BaseModel):
    id: uuid.UUID
    title: str
    content: str
    author: AuthorRead
    tags: list[str]
    published: bool
    published_at: Optional[datetime] = None
    views: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PostMessage(BaseModel):
    message: str
    post: PostRead


class Pagination(BaseModel):
    current_page: int
    total_pages: int
    total_posts: int
    has_next_page: bool
    has_prev_page: bool


class PostPage(BaseModel):
    posts: list[PostRead]
    pagination: Pagination
