"""Blog API CLI — run the server, create tables, and talk to a running API.

Usage:
    blogapi serve                                # uvicorn blogapi.main:app
    blogapi init-db                              # create tables (dev/test)
    blogapi login a@x.com                        # prints a bearer token
    blogapi whoami --token <token>               # GET /api/auth/profile
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import json
import os
import sys
from typing import Optional

import click
import httpx

from blogapi import __version__

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

DEFAULT_API_URL = "http://localhost:5000"


def _api_url() -> str:
    return os.environ.get("BLOGAPI_API_URL", DEFAULT_API_URL).rstrip("/")


def _client() -> httpx.AsyncClient:
    """Build an async HTTP client pointed at the Blog API."""
    return httpx.AsyncClient(base_url=_api_url(), timeout=30.0)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(coro):
    """Run an async coroutine from synchronous Click handler.

    Handles nested event loops (e.g. when invoked via Click CliRunner
    inside an existing async context like tests) by offloading to a thread.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()


def _pretty_json(data: dict | list) -> str:
    return json.dumps(data, indent=2, default=str)


def _fail(r: httpx.Response) -> None:
    try:
        detail = r.json().get("detail", r.text)
    except ValueError:
        detail = r.text
    click.secho(f"Error {r.status_code}: {detail}", fg="red", err=True)
    sys.exit(1)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="blogapi")
def main():
    """Blog API — server bootstrap and a small client for the auth endpoints."""


@main.command()
@click.option("--host", default=None, help="Bind address (default: BLOGAPI_HOST)")
@click.option("--port", default=None, type=int, help="Port (default: BLOGAPI_PORT)")
@click.option("--reload", is_flag=True, help="Restart on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the API with uvicorn."""
    import uvicorn

    from blogapi.config import settings

    uvicorn.run(
        "blogapi.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


@main.command("init-db")
def init_db():
    """Create all tables on BLOGAPI_DATABASE_URL (use alembic in production)."""
    _run(_init_db_impl())
    click.secho("Tables created", fg="green")


async def _init_db_impl():
    from blogapi.db.engine import engine
    from blogapi.db.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()


@main.command()
@click.argument("email")
@click.password_option(confirmation_prompt=False)
def login(email: str, password: str):
    """Log in and print a bearer token."""
    _run(_login_impl(email, password))


async def _login_impl(email: str, password: str):
    async with _client() as c:
        r = await c.post("/api/auth/login", json={"email": email, "password": password})
        if r.status_code != 200:
            _fail(r)
        click.echo(r.json()["token"])


@main.command()
@click.option("--token", envvar="BLOGAPI_TOKEN", required=True, help="Bearer token (or BLOGAPI_TOKEN)")
def whoami(token: str):
    """Show the user a token belongs to."""
    _run(_whoami_impl(token))


async def _whoami_impl(token: str):
    async with _client() as c:
        r = await c.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
        if r.status_code != 200:
            _fail(r)
        click.echo(_pretty_json(r.json()))


if __name__ == "__main__":
    main()
