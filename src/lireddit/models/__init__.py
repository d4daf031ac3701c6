"""SQLAlchemy models for the lireddit application."""

from .post import Post
from .upvote import Upvote
from .user import User

__all__ = [
    "Post",
    "Upvote",
    "User",
]
