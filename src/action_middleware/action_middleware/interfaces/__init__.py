# ABOUTME: Interfaces package exports
# ABOUTME: Exports the abstract stage queue and composition engine interfaces

from .middleware import AbstractStageQueue, AbstractComposeMiddleware

__all__ = ["AbstractStageQueue", "AbstractComposeMiddleware"]
