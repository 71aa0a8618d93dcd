"""Schema extensions."""

import logging
from collections.abc import Iterator

from graphql import GraphQLError
from strawberry.extensions import SchemaExtension

from src.errors import APIError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An error occurred."


def is_internal_error(error: GraphQLError) -> bool:
    """Resolver failures that are not part of the API's error taxonomy."""
    original = error.original_error
    return original is not None and not isinstance(original, (APIError, GraphQLError))


def mask_error(error: GraphQLError) -> GraphQLError:
    """Replace an unexpected error with a generic 500 that hides its details."""
    logger.error(
        f"Unhandled error resolving {error.path}",
        exc_info=error.original_error,
    )
    return GraphQLError(
        INTERNAL_ERROR_MESSAGE,
        nodes=error.nodes,
        source=error.source,
        positions=error.positions,
        path=error.path,
        extensions={"status": 500, "data": None},
    )


class MaskInternalErrors(SchemaExtension):
    """Render errors without a status code as ``An error occurred.`` with status 500."""

    def on_operation(self) -> Iterator[None]:
        yield
        result = self.execution_context.result
        if result is None or not getattr(result, "errors", None):
            return
        result.errors = [
            mask_error(error) if is_internal_error(error) else error for error in result.errors
        ]
