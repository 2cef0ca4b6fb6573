# ABOUTME: NoOp implementations package
# ABOUTME: Contains no-operation implementations for testing and benchmarking

from .middleware import NoOpComposeMiddleware

__all__ = ["NoOpComposeMiddleware"]
