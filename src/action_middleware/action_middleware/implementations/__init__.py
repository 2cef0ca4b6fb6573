# ABOUTME: Implementations package exports
# ABOUTME: Contains the in-memory and no-op composition engines

from .memory import ComposeMiddleware, InMemoryStageQueue
from .noop import NoOpComposeMiddleware

__all__ = ["ComposeMiddleware", "InMemoryStageQueue", "NoOpComposeMiddleware"]
