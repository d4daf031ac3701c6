"""Fill the feed with mock posts for local development."""
from __future__ import annotations

import argparse
import logging
import random
import sys
from datetime import timedelta

from sqlalchemy.orm import Session

from lireddit.core.logging import configure_logging
from lireddit.core.settings import settings
from lireddit.db.session import SessionLocal
from lireddit.db.time import utcnow
from lireddit.models import Post
from lireddit.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)

_WORDS = (
    "lorem ipsum dolor sit amet consectetur adipiscing elit sed do eiusmod tempor "
    "incididunt ut labore et dolore magna aliqua curabitur mauris quisque porta "
    "volutpat erat viverra congue semper rutrum nulla nunc purus fusce posuere "
    "felis lacus morbi laoreet rhoncus aliquet pulvinar donec diam neque vestibulum"
).split()


def _sentence(rng: random.Random, low: int, high: int) -> str:
    words = rng.choices(_WORDS, k=rng.randint(low, high))
    return " ".join(words).capitalize() + "."


def build_mock_posts(
    creator_id: int,
    count: int,
    *,
    seed: int = 0,
    span_days: int = 365,
) -> list[Post]:
    """Generate ``count`` posts with distinct creation times over the last ``span_days``."""
    rng = random.Random(seed)
    now = utcnow()
    span_ms = span_days * 24 * 60 * 60 * 1000
    offsets = sorted(rng.sample(range(1, span_ms), count))
    return [
        Post(
            title=_sentence(rng, 1, 3).rstrip("."),
            text=" ".join(_sentence(rng, 8, 20) for _ in range(rng.randint(1, 4))),
            creator_id=creator_id,
            points=0,
            created_at=now - timedelta(milliseconds=offset),
            updated_at=now - timedelta(milliseconds=offset),
        )
        for offset in offsets
    ]


def seed_posts(db: Session, creator_id: int, count: int, *, seed: int = 0) -> int:
    """Insert mock posts owned by ``creator_id``; return how many were written.

    Raises:
        ValueError: If the creator does not exist.
    """
    if UserRepository(db).get_by_id(creator_id) is None:
        raise ValueError(f"user {creator_id} does not exist")
    posts = build_mock_posts(creator_id, count, seed=seed)
    db.add_all(posts)
    db.commit()
    return len(posts)


def main() -> None:
    parser = argparse.ArgumentParser(description="Insert mock posts into the configured database")
    parser.add_argument("--creator-id", type=int, required=True, help="Owner of the generated posts")
    parser.add_argument("--count", type=int, default=100, help="Number of posts to create")
    parser.add_argument("--seed", type=int, default=0, help="Random seed for reproducible content")
    args = parser.parse_args()

    configure_logging(settings.log_level)
    with SessionLocal() as db:
        try:
            written = seed_posts(db, args.creator_id, args.count, seed=args.seed)
        except ValueError as exc:
            logger.error("%s", exc)
            sys.exit(1)
    logger.info("Inserted %d mock posts for user %d", written, args.creator_id)


if __name__ == "__main__":
    main()
