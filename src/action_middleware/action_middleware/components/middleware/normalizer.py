# ABOUTME: Normalizes middleware declarations into canonical per-stage handler tuples
# ABOUTME: Validates declaration keys and wraps filtered handlers in pass-through guards

import functools
from collections.abc import Mapping
from typing import Any, Tuple

from loguru import logger

from action_middleware.exceptions import MiddlewareConfigurationError, MiddlewareDeclarationError
from action_middleware.models.middleware import (
    CanonicalMiddleware,
    Handler,
    InvocationContext,
    MiddlewareStage,
    SingleHandler,
    StageMap,
)
from action_middleware.utils import describe_callable, is_sequence, map_values, resolve_awaitable

from .filters import FilterPredicate, to_filter

FILTER_KEY = "filter"
KEYS = tuple(stage.value for stage in MiddlewareStage) + (FILTER_KEY,)

_logger = logger.bind(name=__name__)


def classify_declaration(declaration: Any) -> SingleHandler | StageMap:
    """
    Decide which declaration variant a registration argument is.

    Args:
        declaration: A callable or a mapping keyed by stage.

    Returns:
        SingleHandler | StageMap: The tagged declaration.

    Raises:
        MiddlewareDeclarationError: If the value is neither callable nor a mapping.
    """
    if callable(declaration):
        return SingleHandler(handler=declaration)
    if isinstance(declaration, Mapping):
        return StageMap(record=dict(declaration))
    raise MiddlewareDeclarationError(
        f"[ComposeMiddleware] Middleware must be a function or mapping but got {declaration!r}",
        code="MW_INVALID_DECLARATION",
        details={"declaration_type": type(declaration).__name__},
    )


def _as_handlers(stage: str, value: Any) -> Tuple[Handler, ...]:
    handlers = tuple(value) if is_sequence(value) else (value,)
    for handler in handlers:
        if not callable(handler):
            raise MiddlewareDeclarationError(
                f"[ComposeMiddleware] Middleware for stage '{stage}' must be callable but got {handler!r}",
                code="MW_INVALID_DECLARATION",
                details={"stage": stage, "handler_type": type(handler).__name__},
            )
    return handlers


def guard_handler(handler: Handler, predicate: FilterPredicate) -> Handler:
    """
    Wrap a handler so it only runs when the filter predicate matches.

    On a mismatch the guard returns the context payload unchanged, so the
    stage continues as if the handler were not registered.

    Args:
        handler: The handler declared by the caller.
        predicate: Predicate built by `to_filter`.

    Returns:
        Handler: An async guard standing in for the handler.
    """

    @functools.wraps(handler)
    async def middleware_filter_guard(context: InvocationContext, *args: Any, **kwargs: Any) -> Any:
        matched = await resolve_awaitable(predicate(context, *args, **kwargs))
        if not matched:
            return context.payload
        return await resolve_awaitable(handler(context, *args, **kwargs))

    return middleware_filter_guard


def normalize(declaration: Any) -> CanonicalMiddleware:
    """
    Normalize a middleware declaration into canonical form.

    A callable becomes the only handler of the after stage. A mapping may
    use the keys before, after, error and filter; falsy entries are
    dropped, single handlers become one-element tuples, and a filter wraps
    every handler of the declaration in a guard.

    Args:
        declaration: Callable or mapping supplied to `use`.

    Returns:
        CanonicalMiddleware: Per-stage handler tuples with no filter left.

    Raises:
        MiddlewareConfigurationError: If the mapping holds an unknown key.
        MiddlewareFilterError: If the filter cannot be turned into a predicate.
        MiddlewareDeclarationError: If the declaration or one of its handlers has the wrong type.
    """
    variant = classify_declaration(declaration)

    if isinstance(variant, SingleHandler):
        return CanonicalMiddleware(after=(variant.handler,))

    record = {}
    for key, value in variant.record.items():
        if key not in KEYS:
            raise MiddlewareConfigurationError(
                f"[ComposeMiddleware] Middleware key must be one of {', '.join(KEYS)} but got {key!r}",
                code="MW_INVALID_KEY",
                details={"key": key, "allowed": list(KEYS)},
            )
        if value:
            record[key] = value

    filter_value = record.pop(FILTER_KEY, None)
    stages = {stage: _as_handlers(stage, value) for stage, value in record.items()}

    if filter_value is not None:
        predicate = to_filter(filter_value)
        stages = map_values(stages, lambda handlers: tuple(guard_handler(fn, predicate) for fn in handlers))
        _logger.debug(
            f"Wrapped {sum(len(h) for h in stages.values())} handler(s) with filter {filter_value!r}: "
            f"{[describe_callable(fn) for h in stages.values() for fn in h]}"
        )

    return CanonicalMiddleware(**stages)
