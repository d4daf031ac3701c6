"""Engine and per-request sessions.

The schema itself is owned by Alembic (``migrations/``); nothing here creates
tables.
"""

from __future__ import annotations

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from lireddit.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base for the user, post and upvote models."""


# Models register themselves on Base.metadata when imported (Alembic autogenerate reads it).
import lireddit.models  # noqa: E402,F401


def _connect_args(url: str) -> dict[str, object]:
    # FastAPI runs sync dependencies in a threadpool, so SQLite must allow cross-thread use.
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.effective_database_url,
    connect_args=_connect_args(settings.effective_database_url),
    pool_pre_ping=True,
    echo=settings.sql_debug,
)

SessionLocal = sessionmaker(bind=engine, autoflush=False)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency yielding one session per request; closed when the response is sent."""
    with SessionLocal() as db:
        yield db
