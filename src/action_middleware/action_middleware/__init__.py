# ABOUTME: Package initialization for the action middleware library
# ABOUTME: Exports the composition engine, its models and the process-wide default engine

"""
Action middleware package.

Intercepts named actions with middleware that runs before an action,
after it resolves, or when it fails, optionally filtered by action type.
"""

from functools import lru_cache

from action_middleware.components.middleware import normalize, to_filter
from action_middleware.exceptions import (
    MiddlewareArgumentsError,
    MiddlewareConfigurationError,
    MiddlewareContractError,
    MiddlewareDeclarationError,
    MiddlewareError,
    MiddlewareFilterError,
)
from action_middleware.implementations.memory.middleware import ComposeMiddleware, InMemoryStageQueue
from action_middleware.implementations.noop.middleware import NoOpComposeMiddleware
from action_middleware.models.middleware import (
    ActionOutcome,
    CanonicalMiddleware,
    InvocationContext,
    MiddlewareStage,
    OutcomeStatus,
    Recovered,
    recover,
)

__version__ = "0.1.0"


@lru_cache
def get_default_engine() -> ComposeMiddleware:
    """Return the process-wide engine shared by callers that do not build their own."""
    return ComposeMiddleware(name="default")


__all__ = [
    "ComposeMiddleware",
    "InMemoryStageQueue",
    "NoOpComposeMiddleware",
    "get_default_engine",
    "normalize",
    "to_filter",
    "ActionOutcome",
    "CanonicalMiddleware",
    "InvocationContext",
    "MiddlewareStage",
    "OutcomeStatus",
    "Recovered",
    "recover",
    "MiddlewareError",
    "MiddlewareConfigurationError",
    "MiddlewareFilterError",
    "MiddlewareDeclarationError",
    "MiddlewareContractError",
    "MiddlewareArgumentsError",
]
