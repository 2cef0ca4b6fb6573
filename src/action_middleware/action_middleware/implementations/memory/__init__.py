# ABOUTME: In-memory implementations package
# ABOUTME: Stage queues and the composition engine backed by plain Python lists

from .middleware import ComposeMiddleware, InMemoryStageQueue

__all__ = ["ComposeMiddleware", "InMemoryStageQueue"]
