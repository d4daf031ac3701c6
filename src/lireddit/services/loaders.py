"""Per-request batch loaders.

Each loader collapses the lookups made while resolving one GraphQL response
into a single query. Loaders cache results, so build new ones per request.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple

from sqlalchemy import select, tuple_
from sqlalchemy.orm import Session
from strawberry.dataloader import DataLoader

from lireddit.models.upvote import Upvote
from lireddit.models.user import User
from lireddit.repositories.user_repo import UserRepository


class UpvoteKey(NamedTuple):
    post_id: int
    user_id: int


def create_upvote_loader(db: Session) -> DataLoader[UpvoteKey, Upvote | None]:
    """Loader resolving ``(post_id, user_id)`` pairs to the matching vote row, if any."""

    async def load(keys: Sequence[UpvoteKey]) -> list[Upvote | None]:
        rows = db.scalars(
            select(Upvote).where(
                tuple_(Upvote.user_id, Upvote.post_id).in_(
                    [(key.user_id, key.post_id) for key in keys]
                )
            )
        )
        by_key = {UpvoteKey(row.post_id, row.user_id): row for row in rows}
        return [by_key.get(key) for key in keys]

    return DataLoader(load_fn=load)


def create_user_loader(db: Session) -> DataLoader[int, User | None]:
    """Loader resolving user ids to users."""

    async def load(keys: Sequence[int]) -> list[User | None]:
        by_id = {user.id: user for user in UserRepository(db).get_many(keys)}
        return [by_id.get(key) for key in keys]

    return DataLoader(load_fn=load)
