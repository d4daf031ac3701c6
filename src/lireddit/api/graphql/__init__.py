"""GraphQL API."""

from .schema import graphql_router, schema

__all__ = ["graphql_router", "schema"]
