# ABOUTME: Middleware interfaces package
# ABOUTME: Exports abstract interfaces for stage queues and composition engines

from .stage_queue import AbstractStageQueue
from .engine import AbstractComposeMiddleware

__all__ = ["AbstractStageQueue", "AbstractComposeMiddleware"]
