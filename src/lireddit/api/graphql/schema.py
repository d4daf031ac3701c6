"""Schema and FastAPI router wiring.

This module composes the resolver classes into one schema. It contains no
business logic.
"""
from __future__ import annotations

from typing import Final

import strawberry
from strawberry.fastapi import GraphQLRouter
from strawberry.tools import merge_types

from .context import get_context
from .resolvers import PostMutation, PostQuery, UserMutation, UserQuery

Query = merge_types("Query", (UserQuery, PostQuery))
Mutation = merge_types("Mutation", (UserMutation, PostMutation))

schema: Final[strawberry.Schema] = strawberry.Schema(query=Query, mutation=Mutation)

graphql_router: Final[GraphQLRouter] = GraphQLRouter(schema, context_getter=get_context)

__all__ = ["graphql_router", "schema"]
