"""Data access helpers for working with posts."""
from __future__ import annotations

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from lireddit.models.post import Post
from lireddit.models.upvote import Upvote

__all__ = ["PostRepository"]


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: int) -> Post | None:
        """Return a post by identifier."""
        return self.session.get(Post, post_id)

    def create(self, *, title: str, text: str, creator_id: int) -> Post:
        """Insert a new post and return the persisted ORM instance.

        Args:
            title: Post title.
            text: Post body.
            creator_id: Identifier of the authenticated author.
        """
        post = Post(title=title, text=text, creator_id=creator_id, points=0)
        self.session.add(post)
        self.session.flush()
        return post

    def update_title(self, post: Post, title: str) -> Post:
        post.title = title
        self.session.flush()
        return post

    def delete(self, post_id: int) -> bool:
        """Delete a post and its votes; return True if the post existed."""
        self.session.execute(delete(Upvote).where(Upvote.post_id == post_id))
        result = self.session.execute(delete(Post).where(Post.id == post_id))
        return result.rowcount > 0

    def adjust_points(self, post_id: int, delta: int) -> bool:
        """Add ``delta`` to a post's points as a relative update.

        The new total is computed by the database (``points = points + delta``)
        so concurrent voters never overwrite each other's adjustments.

        Returns:
            False if no post with ``post_id`` exists.
        """
        result = self.session.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(points=Post.points + delta)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount > 0
