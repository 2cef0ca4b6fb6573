# ABOUTME: Memory-based middleware implementations package
# ABOUTME: Provides the in-memory stage queue and the composition engine built on it

from .stage_queue import InMemoryStageQueue
from .compose import ComposeMiddleware

__all__ = ["InMemoryStageQueue", "ComposeMiddleware"]
