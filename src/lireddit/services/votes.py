"""Vote ledger: one signed vote per (user, post), mirrored into ``post.points``."""
from __future__ import annotations

import logging

from sqlalchemy import insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from lireddit.models.upvote import Upvote
from lireddit.repositories.post_repo import PostRepository

logger = logging.getLogger(__name__)


def normalize_vote(value: int) -> int:
    """Map any requested value onto the ledger's two states; only -1 is a downvote."""
    return -1 if value == -1 else 1


def cast_vote(db: Session, *, post_id: int, value: int, user_id: int) -> bool:
    """Record ``user_id``'s vote on ``post_id`` and adjust the post's points.

    - first vote: insert the row, ``points += value``
    - flipped vote: update the row, ``points += 2 * value``
    - repeated vote: nothing changes

    Both writes commit together or not at all. The ledger write is conditional
    on the stored value, so it alone decides the delta: two concurrent flips by
    one user move points once. Two concurrent first votes collide on the
    primary key; the loser rolls back and its IntegrityError propagates.

    Returns:
        False if the post does not exist, True otherwise.
    """
    value = normalize_vote(value)
    try:
        flipped = db.execute(
            update(Upvote)
            .where(
                Upvote.user_id == user_id,
                Upvote.post_id == post_id,
                Upvote.value != value,
            )
            .values(value=value)
            .execution_options(synchronize_session="fetch")
        ).rowcount == 1
        if flipped:
            delta = 2 * value
        else:
            stored = db.scalar(
                select(Upvote.value).where(
                    Upvote.user_id == user_id, Upvote.post_id == post_id
                )
            )
            if stored is not None:
                return True
            delta = value

        if not PostRepository(db).adjust_points(post_id, delta):
            db.rollback()
            logger.info("User %s voted on missing post %s", user_id, post_id)
            return False

        if not flipped:
            db.execute(insert(Upvote).values(user_id=user_id, post_id=post_id, value=value))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    return True
