# mypy: ignore-errors
"""Tests for the vote ledger service."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from lireddit.models import Post, Upvote
from lireddit.repositories.post_repo import PostRepository
from lireddit.services.votes import cast_vote, normalize_vote


def _points(db_session, post_id: int) -> int:
    return db_session.scalar(select(Post.points).where(Post.id == post_id))


def _ledger_sum(db_session, post_id: int) -> int:
    return db_session.scalar(
        select(func.coalesce(func.sum(Upvote.value), 0)).where(Upvote.post_id == post_id)
    )


@pytest.mark.parametrize(("requested", "stored"), [(1, 1), (-1, -1), (5, 1), (0, 1), (-7, 1)])
def test_normalize_vote(requested: int, stored: int) -> None:
    """Only -1 counts as a downvote; everything else is an upvote."""
    assert normalize_vote(requested) == stored


def test_first_upvote_inserts_row_and_adds_point(db_session, test_user, test_post) -> None:
    assert cast_vote(db_session, post_id=test_post.id, value=1, user_id=test_user.id) is True

    vote = db_session.get(Upvote, (test_user.id, test_post.id))
    assert vote is not None and vote.value == 1
    assert _points(db_session, test_post.id) == 1


def test_repeat_vote_is_idempotent(db_session, test_user, test_post) -> None:
    """Voting +1 twice moves points by +1 total, not +2."""
    before = _points(db_session, test_post.id)
    cast_vote(db_session, post_id=test_post.id, value=1, user_id=test_user.id)
    cast_vote(db_session, post_id=test_post.id, value=1, user_id=test_user.id)

    assert _points(db_session, test_post.id) == before + 1
    count = db_session.scalar(
        select(func.count()).select_from(Upvote).where(Upvote.post_id == test_post.id)
    )
    assert count == 1


def test_flip_vote_moves_points_by_two(db_session, test_user, test_post) -> None:
    """+1 then -1 ends 1 below the starting score (a -2 swing from the upvote)."""
    before = _points(db_session, test_post.id)
    cast_vote(db_session, post_id=test_post.id, value=1, user_id=test_user.id)
    assert _points(db_session, test_post.id) == before + 1

    cast_vote(db_session, post_id=test_post.id, value=-1, user_id=test_user.id)
    assert _points(db_session, test_post.id) == before - 1
    assert db_session.get(Upvote, (test_user.id, test_post.id)).value == -1


def test_points_track_ledger_across_users(db_session, test_user, other_user, test_post) -> None:
    sequence = [
        (test_user.id, 1),
        (other_user.id, -1),
        (test_user.id, -1),
        (other_user.id, -1),
        (other_user.id, 1),
        (test_user.id, 3),
    ]
    for user_id, value in sequence:
        cast_vote(db_session, post_id=test_post.id, value=value, user_id=user_id)
        assert _points(db_session, test_post.id) == _ledger_sum(db_session, test_post.id)

    assert _points(db_session, test_post.id) == 2


def test_vote_on_missing_post_changes_nothing(db_session, test_user) -> None:
    assert cast_vote(db_session, post_id=99999, value=1, user_id=test_user.id) is False
    assert db_session.get(Upvote, (test_user.id, 99999)) is None


def test_adjustment_is_relative_to_current_points(db_session, test_user, other_user, test_post) -> None:
    """A concurrent writer's change made after our object was loaded is not overwritten."""
    db_session.get(Post, test_post.id)
    db_session.connection().exec_driver_sql(
        "UPDATE post SET points = points + 10 WHERE id = ?", (test_post.id,)
    )

    cast_vote(db_session, post_id=test_post.id, value=1, user_id=other_user.id)

    assert _points(db_session, test_post.id) == 11


def _store_competing_vote(db_session, *, user_id: int, post_id: int, value: int, delta: int) -> None:
    """Write the ledger row and points the way a concurrent request would."""
    conn = db_session.connection()
    conn.exec_driver_sql(
        "INSERT INTO upvote (user_id, post_id, value) VALUES (?, ?, ?) "
        "ON CONFLICT (user_id, post_id) DO UPDATE SET value = excluded.value",
        (user_id, post_id, value),
    )
    conn.exec_driver_sql("UPDATE post SET points = points + ? WHERE id = ?", (delta, post_id))


def test_double_flip_moves_points_once(db_session, test_user, test_post) -> None:
    """A flip that lands after another request already flipped the same vote is a no-op."""
    cast_vote(db_session, post_id=test_post.id, value=1, user_id=test_user.id)
    loaded = db_session.get(Upvote, (test_user.id, test_post.id))
    assert loaded.value == 1

    _store_competing_vote(
        db_session, user_id=test_user.id, post_id=test_post.id, value=-1, delta=-2
    )
    assert cast_vote(db_session, post_id=test_post.id, value=-1, user_id=test_user.id) is True

    assert _points(db_session, test_post.id) == -1
    assert _points(db_session, test_post.id) == _ledger_sum(db_session, test_post.id)


def test_concurrent_first_vote_rolls_back_whole_vote(
    db_session, test_user, test_post, monkeypatch
) -> None:
    """The second of two simultaneous first votes fails without touching points."""
    original_adjust = PostRepository.adjust_points

    def adjust_after_competitor(self, post_id: int, delta: int) -> bool:
        _store_competing_vote(
            db_session, user_id=test_user.id, post_id=post_id, value=1, delta=1
        )
        return original_adjust(self, post_id, delta)

    monkeypatch.setattr(PostRepository, "adjust_points", adjust_after_competitor)

    with pytest.raises(IntegrityError):
        cast_vote(db_session, post_id=test_post.id, value=1, user_id=test_user.id)

    monkeypatch.undo()
    assert _points(db_session, test_post.id) == 0
    assert _points(db_session, test_post.id) == _ledger_sum(db_session, test_post.id)
