# ABOUTME: Builds action-type predicates from middleware filter declarations
# ABOUTME: Accepts compiled patterns, literal action types and predicate functions

from typing import Any, Callable

from action_middleware.exceptions import MiddlewareFilterError
from action_middleware.models.middleware import InvocationContext
from action_middleware.utils import is_pattern

FilterPredicate = Callable[..., Any]


def to_filter(value: Any) -> FilterPredicate:
    """
    Turn a filter declaration into a predicate over invocation contexts.

    - A compiled pattern matches when it is found anywhere in the context type.
    - A string matches only the exact context type.
    - A callable is returned as is and receives exactly the arguments the
      filtered handler would receive. It may be sync or async.

    Args:
        value: The `filter` entry of a middleware declaration.

    Returns:
        FilterPredicate: Callable deciding whether a handler runs.

    Raises:
        MiddlewareFilterError: If the value is not a pattern, string or function.
    """
    if is_pattern(value):

        def pattern_filter(context: InvocationContext, *args: Any, **kwargs: Any) -> bool:
            return value.search(context.type) is not None

        return pattern_filter

    if isinstance(value, str):

        def type_filter(context: InvocationContext, *args: Any, **kwargs: Any) -> bool:
            return context.type == value

        return type_filter

    if callable(value):
        return value

    raise MiddlewareFilterError(
        "[ComposeMiddleware] Middleware filter must be a compiled pattern, string or function.",
        code="MW_INVALID_FILTER",
        details={"filter": repr(value)},
    )
