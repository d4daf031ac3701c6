"""Account queries and mutations."""

import strawberry
from strawberry.types import Info

from lireddit.api.graphql.types import UsernamePasswordInput, UserResponse, UserType
from lireddit.services import accounts


@strawberry.type
class UserQuery:
    @strawberry.field
    async def me(self, info: Info) -> UserType | None:
        """The logged-in user, or null."""
        user = accounts.current_user(info.context.db, info.context.session)
        return UserType.from_model(user) if user is not None else None


@strawberry.type
class UserMutation:
    @strawberry.mutation
    async def register(self, options: UsernamePasswordInput, info: Info) -> UserResponse:
        result = accounts.register(
            info.context.db,
            info.context.session,
            username=options.username,
            email=options.email,
            password=options.password,
        )
        return UserResponse.from_result(result)

    @strawberry.mutation
    async def login(self, username_or_email: str, password: str, info: Info) -> UserResponse:
        result = accounts.login(
            info.context.db,
            info.context.session,
            username_or_email=username_or_email,
            password=password,
        )
        return UserResponse.from_result(result)

    @strawberry.mutation
    async def logout(self, info: Info) -> bool:
        return accounts.logout(info.context.session)

    @strawberry.mutation
    async def forgot_password(self, email: str, info: Info) -> bool:
        """Always true; a reset link is mailed only if the address is registered."""
        return accounts.forgot_password(
            info.context.db,
            info.context.reset_tokens,
            info.context.mailer,
            email=email,
        )

    @strawberry.mutation
    async def change_password(self, token: str, new_password: str, info: Info) -> UserResponse:
        result = accounts.change_password(
            info.context.db,
            info.context.session,
            info.context.reset_tokens,
            token=token,
            new_password=new_password,
        )
        return UserResponse.from_result(result)
