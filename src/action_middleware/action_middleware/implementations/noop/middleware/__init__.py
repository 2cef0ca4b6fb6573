# ABOUTME: NoOp middleware implementations package
# ABOUTME: Provides the bypass composition engine

from .compose import NoOpComposeMiddleware

__all__ = ["NoOpComposeMiddleware"]
