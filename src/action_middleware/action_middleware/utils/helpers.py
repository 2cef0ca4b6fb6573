# ABOUTME: Helper functions for classifying values and resolving sync or async results
# ABOUTME: Lets handlers, predicates and actions be plain functions or coroutine functions

import inspect
import re
from typing import Any, Callable, Dict, Mapping, TypeVar

from action_middleware.exceptions import MiddlewareArgumentsError

K = TypeVar("K")
V = TypeVar("V")
R = TypeVar("R")


def map_values(mapping: Mapping[K, V], fn: Callable[[V], R]) -> Dict[K, R]:
    """Return a new dict with `fn` applied to every value, keys and order preserved."""
    return {key: fn(value) for key, value in mapping.items()}


def is_pattern(value: Any) -> bool:
    """Check whether `value` is a compiled regular expression."""
    return isinstance(value, re.Pattern)


def is_sequence(value: Any) -> bool:
    """Check whether `value` is an ordered argument sequence (list or tuple)."""
    return isinstance(value, (list, tuple))


async def resolve_awaitable(value: Any) -> Any:
    """
    Await `value` if it is awaitable, otherwise return it unchanged.

    Args:
        value: Result of calling a sync or async callable.

    Returns:
        The settled value.
    """
    if inspect.isawaitable(value):
        return await value
    return value


def describe_callable(fn: Any) -> str:
    """Human-readable name for a handler, used in log messages."""
    return getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None) or fn.__class__.__name__


def as_argument_list(action_args: Any) -> list:
    """
    Copy action arguments into the list handed to the before stage.

    Args:
        action_args: List or tuple of positional arguments, or None for none.

    Returns:
        list: A fresh list of the arguments.

    Raises:
        MiddlewareArgumentsError: If the arguments are not a list or tuple.
    """
    if action_args is None:
        return []
    if not is_sequence(action_args):
        raise MiddlewareArgumentsError(
            f"[ComposeMiddleware] Action arguments must be a list or tuple but got {type(action_args).__name__}",
            code="MW_INVALID_ARGS",
            details={"args_type": type(action_args).__name__},
        )
    return list(action_args)
