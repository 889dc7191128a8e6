"""Yoga Studio admin CLI.

Usage:
    yogastudio serve                                   # Run the API with uvicorn
    yogastudio init-db                                 # Create all tables
    yogastudio add-teacher Margot Delahaye             # Seed a teacher
    yogastudio create-user admin@studio.com Ada Admin --admin
                                                       # Create an account (prompts for password)

Every command accepts --database-url (defaults to YOGASTUDIO_DATABASE_URL).
"""

from __future__ import annotations

import asyncio

import click
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from yogastudio.config import settings
from yogastudio.db.models import Base
from yogastudio.services.teacher_service import TeacherService
from yogastudio.services.user_service import UserService

database_url_option = click.option(
    "--database-url",
    default=lambda: settings.database_url,
    show_default="YOGASTUDIO_DATABASE_URL",
    help="SQLAlchemy async database URL.",
)


async def _with_session(database_url: str, fn):
    """Run ``fn(session)`` on a short-lived engine, then dispose it."""
    engine = create_async_engine(database_url)
    try:
        factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        async with factory() as session:
            return await fn(session)
    finally:
        await engine.dispose()


async def _create_schema(database_url: str) -> None:
    engine = create_async_engine(database_url)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()


@click.group()
def cli():
    """Yoga Studio: booking backend administration."""


@cli.command()
@click.option("--host", default=lambda: settings.host, show_default="YOGASTUDIO_HOST")
@click.option("--port", default=lambda: settings.port, type=int, show_default="YOGASTUDIO_PORT")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes.")
def serve(host: str, port: int, reload: bool):
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run("yogastudio.main:app", host=host, port=port, reload=reload)


@cli.command("init-db")
@database_url_option
def init_db(database_url: str):
    """Create all tables (for development; use alembic in production)."""
    asyncio.run(_create_schema(database_url))
    click.echo("Database schema created.")


@cli.command("add-teacher")
@click.argument("first_name")
@click.argument("last_name")
@database_url_option
def add_teacher(first_name: str, last_name: str, database_url: str):
    """Add a teacher."""

    async def _add(session: AsyncSession):
        return await TeacherService(session).create_teacher(first_name, last_name)

    teacher = asyncio.run(_with_session(database_url, _add))
    click.echo(f"Teacher #{teacher.id}: {teacher.first_name} {teacher.last_name}")


@cli.command("create-user")
@click.argument("email")
@click.argument("first_name")
@click.argument("last_name")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
@click.option("--admin", is_flag=True, help="Grant the admin flag.")
@database_url_option
def create_user(
    email: str,
    first_name: str,
    last_name: str,
    password: str,
    admin: bool,
    database_url: str,
):
    """Create a user account."""

    async def _create(session: AsyncSession):
        users = UserService(session)
        if await users.exists_by_email(email):
            return None
        return await users.create_user(email, first_name, last_name, password, admin=admin)

    user = asyncio.run(_with_session(database_url, _create))
    if user is None:
        raise click.ClickException(f"Email is already taken: {email}")
    role = "admin" if user.admin else "member"
    click.echo(f"User #{user.id}: {user.email} ({role})")


if __name__ == "__main__":
    cli()
