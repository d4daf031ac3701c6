"""Resolver classes grouped by domain."""

from .post import PostMutation, PostQuery
from .user import UserMutation, UserQuery

__all__ = ["PostMutation", "PostQuery", "UserMutation", "UserQuery"]
