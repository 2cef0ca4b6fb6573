# ABOUTME: Middleware-specific exception classes for registration and pipeline errors
# ABOUTME: Separates configuration errors raised by use() from runtime pipeline contract breaches

from action_middleware.exceptions.base import CoreException


class MiddlewareError(CoreException):
    """Base exception class for middleware-related errors.

    Should be used as a base for more specific middleware exceptions
    rather than being raised directly.
    """

    pass


class MiddlewareConfigurationError(MiddlewareError):
    """Exception raised when a middleware declaration is malformed.

    Raised synchronously while registering middleware, such as:
    - A declaration key other than before, after, error or filter
    - A stage entry that is not callable
    - A filter that is not a pattern, string or function

    Configuration errors never reach the error stage; the registration
    that raised them leaves the engine untouched.
    """

    pass


class MiddlewareFilterError(MiddlewareConfigurationError, TypeError):
    """Exception raised when a filter value cannot be turned into a predicate."""

    pass


class MiddlewareDeclarationError(MiddlewareConfigurationError, TypeError):
    """Exception raised when a declaration is neither a callable nor a mapping,
    or when one of its stage entries is not callable."""

    pass


class MiddlewarePipelineError(MiddlewareError):
    """Exception raised for failures of the before/action/after/error pipeline itself.

    Errors raised by user handlers or actions are propagated unchanged;
    this family covers breaches of the pipeline's own contracts.
    """

    pass


class MiddlewareContractError(MiddlewarePipelineError):
    """Exception raised when the before stage does not resolve to an argument sequence.

    The before stage must resolve to a list or tuple that is splatted into
    the action call. Anything else means a before handler is broken, and
    the action is never invoked.
    """

    pass


class MiddlewareArgumentsError(MiddlewarePipelineError, TypeError):
    """Exception raised when execute_action receives action arguments that are not a list or tuple.

    Raised before any stage runs, so it never reaches the error stage.
    """

    pass
