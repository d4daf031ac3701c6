"""Keyset-paginated post feed.

Pages are ordered newest first. A page's cursor is the ``createdAt`` (epoch
milliseconds) of the last post the client received; the next page holds the
posts strictly older than that.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import null, select
from sqlalchemy.orm import Session

from lireddit.core.errors import InvalidCursorError
from lireddit.core.settings import settings
from lireddit.db.time import from_epoch_ms
from lireddit.models.post import Post
from lireddit.models.upvote import Upvote
from lireddit.models.user import User


@dataclass(frozen=True)
class FeedEntry:
    post: Post
    creator: User
    vote_status: int | None


@dataclass(frozen=True)
class FeedPage:
    entries: list[FeedEntry]
    has_more: bool


def parse_cursor(cursor: str | None) -> datetime | None:
    """Decode an epoch-millisecond cursor; empty means first page."""
    if cursor is None or cursor == "":
        return None
    try:
        return from_epoch_ms(int(cursor))
    except (ValueError, OverflowError) as err:
        raise InvalidCursorError(cursor) from err


def clamp_limit(limit: int, max_limit: int | None = None) -> int:
    ceiling = settings.feed_max_limit if max_limit is None else max_limit
    return max(0, min(limit, ceiling))


def list_posts(
    db: Session,
    *,
    limit: int,
    cursor: str | None,
    user_id: int | None,
) -> FeedPage:
    """Return one page of the feed with each post's creator and the caller's vote.

    One extra row is fetched to learn whether another page exists.

    Raises:
        InvalidCursorError: If ``cursor`` is not an integer timestamp.
    """
    real_limit = clamp_limit(limit)
    before = parse_cursor(cursor)

    if user_id is not None:
        vote_status = (
            select(Upvote.value)
            .where(Upvote.user_id == user_id, Upvote.post_id == Post.id)
            .correlate(Post)
            .scalar_subquery()
        )
    else:
        vote_status = null()

    stmt = select(Post, User, vote_status.label("vote_status")).join(
        User, User.id == Post.creator_id
    )
    if before is not None:
        stmt = stmt.where(Post.created_at < before)
    stmt = stmt.order_by(Post.created_at.desc()).limit(real_limit + 1)

    rows = db.execute(stmt).all()
    entries = [
        FeedEntry(post=post, creator=creator, vote_status=status)
        for post, creator, status in rows[:real_limit]
    ]
    return FeedPage(entries=entries, has_more=len(rows) == real_limit + 1)
