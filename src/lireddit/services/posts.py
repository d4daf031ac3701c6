"""Service-level helpers for creating and editing posts."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from lireddit.core.errors import InvalidPostError
from lireddit.models.post import Post
from lireddit.repositories.post_repo import PostRepository

logger = logging.getLogger(__name__)


def get_post(db: Session, post_id: int) -> Post | None:
    return PostRepository(db).get_by_id(post_id)


def create_post(db: Session, *, title: str, text: str, creator_id: int) -> Post:
    """Persist a post owned by ``creator_id`` with zero points.

    Raises:
        InvalidPostError: If the title or text is blank.
    """
    if not title.strip():
        raise InvalidPostError("title cannot be empty")
    if not text.strip():
        raise InvalidPostError("text cannot be empty")

    post = PostRepository(db).create(title=title, text=text, creator_id=creator_id)
    db.commit()
    db.refresh(post)
    logger.info("User %s created post %s", creator_id, post.id)
    return post


def update_post(db: Session, *, post_id: int, title: str | None) -> Post | None:
    """Change a post's title; a None title leaves the post untouched.

    Returns:
        The post after the update, or None if it does not exist.
    """
    repo = PostRepository(db)
    post = repo.get_by_id(post_id)
    if post is None:
        return None
    if title is not None:
        if not title.strip():
            raise InvalidPostError("title cannot be empty")
        repo.update_title(post, title)
        db.commit()
        db.refresh(post)
    return post


def delete_post(db: Session, *, post_id: int) -> bool:
    """Delete a post together with its votes; False if there was nothing to delete."""
    deleted = PostRepository(db).delete(post_id)
    db.commit()
    if deleted:
        logger.info("Deleted post %s", post_id)
    return deleted
