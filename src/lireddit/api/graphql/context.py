"""GraphQL context: carries the session, DB handle and cache handle into resolvers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request, Response
from redis import Redis
from sqlalchemy.orm import Session
from strawberry.fastapi import BaseContext

from lireddit.core.constants import COOKIE_NAME
from lireddit.db.session import get_db
from lireddit.services.cache import get_redis
from lireddit.services.loaders import create_upvote_loader, create_user_loader
from lireddit.services.mailer import Mailer, get_mailer
from lireddit.services.reset_tokens import ResetTokenStore
from lireddit.services.sessions import RequestSession, SessionStore

SessionDep = Annotated[Session, Depends(get_db)]
RedisDep = Annotated[Redis, Depends(get_redis)]
MailerDep = Annotated[Mailer, Depends(get_mailer)]


class GraphQLContext(BaseContext):
    """Context passed to every GraphQL resolver.

    Built once per HTTP request; nothing here outlives the request except the
    pooled connections behind ``db`` and ``redis``.
    """

    def __init__(
        self,
        *,
        db: Session,
        redis: Redis,
        mailer: Mailer,
        session: RequestSession,
    ) -> None:
        super().__init__()
        self.db = db
        self.redis = redis
        self.mailer = mailer
        self.session = session
        self.reset_tokens = ResetTokenStore(redis)
        self.upvote_loader = create_upvote_loader(db)
        self.user_loader = create_user_loader(db)

    @property
    def user_id(self) -> int | None:
        return self.session.user_id


def get_context(
    request: Request,
    response: Response,
    db: SessionDep,
    redis: RedisDep,
    mailer: MailerDep,
) -> GraphQLContext:
    """FastAPI dependency building the resolver context from the request cookie."""
    session = RequestSession.from_cookie(
        SessionStore(redis),
        request.cookies.get(COOKIE_NAME),
        response,
    )
    return GraphQLContext(db=db, redis=redis, mailer=mailer, session=session)
