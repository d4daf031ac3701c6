"""GraphQL object and input types."""

import strawberry
from strawberry.types import Info

from lireddit.core.constants import TEXT_SNIPPET_LENGTH
from lireddit.db.time import to_epoch_ms
from lireddit.models.post import Post
from lireddit.models.user import User
from lireddit.services.accounts import UserResult
from lireddit.services.feed import FeedEntry, FeedPage
from lireddit.services.loaders import UpvoteKey


@strawberry.type
class FieldError:
    field: str
    message: str


@strawberry.type(name="User")
class UserType:
    id: int
    username: str
    email: str
    created_at: str
    updated_at: str

    @classmethod
    def from_model(cls, user: User) -> "UserType":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            created_at=str(to_epoch_ms(user.created_at)),
            updated_at=str(to_epoch_ms(user.updated_at)),
        )


@strawberry.type
class UserResponse:
    errors: list[FieldError] | None = None
    user: UserType | None = None

    @classmethod
    def from_result(cls, result: UserResult) -> "UserResponse":
        if result.errors:
            return cls(errors=[FieldError(field=e.field, message=e.message) for e in result.errors])
        return cls(user=UserType.from_model(result.user) if result.user else None)


@strawberry.type(name="Post")
class PostType:
    id: int
    title: str
    text: str
    points: int
    creator_id: int
    # Epoch milliseconds; ``createdAt`` is also the feed cursor.
    created_at: str
    updated_at: str

    creator_model: strawberry.Private[User | None] = None
    # Set when the feed query already joined the caller's vote.
    prefetched_vote: strawberry.Private[bool] = False
    vote_value: strawberry.Private[int | None] = None

    @classmethod
    def from_model(
        cls,
        post: Post,
        *,
        creator: User | None = None,
        prefetched_vote: bool = False,
        vote_value: int | None = None,
    ) -> "PostType":
        return cls(
            id=post.id,
            title=post.title,
            text=post.text,
            points=post.points,
            creator_id=post.creator_id,
            created_at=str(to_epoch_ms(post.created_at)),
            updated_at=str(to_epoch_ms(post.updated_at)),
            creator_model=creator,
            prefetched_vote=prefetched_vote,
            vote_value=vote_value,
        )

    @classmethod
    def from_feed_entry(cls, entry: FeedEntry) -> "PostType":
        return cls.from_model(
            entry.post,
            creator=entry.creator,
            prefetched_vote=True,
            vote_value=entry.vote_status,
        )

    @strawberry.field
    def text_snippet(self) -> str:
        return self.text[:TEXT_SNIPPET_LENGTH]

    @strawberry.field
    async def creator(self, info: Info) -> UserType:
        user = self.creator_model
        if user is None:
            user = await info.context.user_loader.load(self.creator_id)
        return UserType.from_model(user)

    @strawberry.field
    async def vote_status(self, info: Info) -> int | None:
        """The caller's vote on this post: 1, -1, or null when not voted or anonymous."""
        if self.prefetched_vote:
            return self.vote_value
        user_id = info.context.user_id
        if user_id is None:
            return None
        upvote = await info.context.upvote_loader.load(UpvoteKey(self.id, user_id))
        return upvote.value if upvote is not None else None


@strawberry.type
class PaginatedPosts:
    posts: list[PostType]
    has_more: bool

    @classmethod
    def from_page(cls, page: FeedPage) -> "PaginatedPosts":
        return cls(
            posts=[PostType.from_feed_entry(entry) for entry in page.entries],
            has_more=page.has_more,
        )


@strawberry.input
class UsernamePasswordInput:
    username: str
    email: str
    password: str


@strawberry.input
class PostInput:
    title: str
    text: str
