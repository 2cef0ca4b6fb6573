# ABOUTME: Stage and pipeline phase enumerations for action middleware
# ABOUTME: Names the three middleware stages and the phases of a single pipeline run

from enum import Enum


class MiddlewareStage(str, Enum):
    """
    Middleware stage enumeration.

    Each registered handler belongs to exactly one stage, and each stage
    owns its own ordered queue of handlers.
    """

    BEFORE = "before"
    AFTER = "after"
    ERROR = "error"


class PipelinePhase(str, Enum):
    """
    Phases of a single execute_action run.

    A run moves BEFORE -> INVOKE -> AFTER, and from any of those into ERROR.
    Failure outcomes record the phase the failure originated in.
    """

    BEFORE = "before"
    INVOKE = "invoke"
    AFTER = "after"
    ERROR = "error"
