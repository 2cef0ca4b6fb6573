# ABOUTME: Exceptions package exports
# ABOUTME: Exports the root exception and the middleware error hierarchy

from action_middleware.exceptions.base import CoreException

from action_middleware.exceptions.middleware import (
    MiddlewareError,
    MiddlewareConfigurationError,
    MiddlewareFilterError,
    MiddlewareDeclarationError,
    MiddlewarePipelineError,
    MiddlewareContractError,
    MiddlewareArgumentsError,
)

__all__ = [
    "CoreException",
    # Middleware exceptions
    "MiddlewareError",
    "MiddlewareConfigurationError",
    "MiddlewareFilterError",
    "MiddlewareDeclarationError",
    "MiddlewarePipelineError",
    "MiddlewareContractError",
    "MiddlewareArgumentsError",
]
