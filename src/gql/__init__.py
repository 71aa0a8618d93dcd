"""GraphQL presentation layer."""

from src.gql.context import GraphQLContext, get_context
from src.gql.schema import Mutation, Query, create_graphql_router, schema

__all__ = [
    "GraphQLContext",
    "Mutation",
    "Query",
    "create_graphql_router",
    "get_context",
    "schema",
]
