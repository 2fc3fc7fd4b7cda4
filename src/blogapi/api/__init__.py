"""API route aggregation.

All routers registered here get mounted in main.py.

Learn: Unlike a router-wide `dependencies=[...]` guard, auth here is
declared per route, because the posts router mixes open, optional-auth
and mandatory-auth endpoints. See api/posts.py for the map.
"""

from fastapi import APIRouter

from blogapi.api.auth import router as auth_router
from blogapi.api.health import router as health_router
from blogapi.api.posts import router as posts_router

api_router = APIRouter(prefix="/api")

api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])
api_router.include_router(posts_router, tags=["posts"])
