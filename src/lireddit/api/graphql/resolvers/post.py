"""Post queries and mutations, including voting."""

import strawberry
from strawberry.types import Info

from lireddit.api.graphql.permissions import IsAuthenticated
from lireddit.api.graphql.types import PaginatedPosts, PostInput, PostType
from lireddit.services import feed, votes
from lireddit.services import posts as post_service


@strawberry.type
class PostQuery:
    @strawberry.field
    async def posts(self, limit: int, info: Info, cursor: str | None = None) -> PaginatedPosts:
        """Newest posts first; pass the last post's ``createdAt`` as ``cursor`` for the next page."""
        page = feed.list_posts(
            info.context.db,
            limit=limit,
            cursor=cursor,
            user_id=info.context.user_id,
        )
        return PaginatedPosts.from_page(page)

    @strawberry.field
    async def post(self, id: int, info: Info) -> PostType | None:
        found = post_service.get_post(info.context.db, id)
        return PostType.from_model(found) if found is not None else None


@strawberry.type
class PostMutation:
    @strawberry.mutation(permission_classes=[IsAuthenticated])
    async def create_post(self, input: PostInput, info: Info) -> PostType:
        post = post_service.create_post(
            info.context.db,
            title=input.title,
            text=input.text,
            creator_id=info.context.user_id,
        )
        return PostType.from_model(post)

    @strawberry.mutation
    async def update_post(self, id: int, info: Info, title: str | None = None) -> PostType | None:
        post = post_service.update_post(info.context.db, post_id=id, title=title)
        return PostType.from_model(post) if post is not None else None

    @strawberry.mutation
    async def delete_post(self, id: int, info: Info) -> bool:
        return post_service.delete_post(info.context.db, post_id=id)

    @strawberry.mutation(permission_classes=[IsAuthenticated])
    async def vote(self, post_id: int, value: int, info: Info) -> bool:
        """Upvote (any value but -1) or downvote (-1); false if the post does not exist."""
        return votes.cast_vote(
            info.context.db,
            post_id=post_id,
            value=value,
            user_id=info.context.user_id,
        )
