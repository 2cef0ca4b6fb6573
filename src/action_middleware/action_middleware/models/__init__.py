# ABOUTME: Models package initialization
# ABOUTME: Exports the middleware data models

from .middleware import (
    MiddlewareStage,
    PipelinePhase,
    ActionDescriptor,
    InvocationContext,
    SingleHandler,
    StageMap,
    CanonicalMiddleware,
    ActionOutcome,
    OutcomeStatus,
    Recovered,
    recover,
)

__all__ = [
    "MiddlewareStage",
    "PipelinePhase",
    "ActionDescriptor",
    "InvocationContext",
    "SingleHandler",
    "StageMap",
    "CanonicalMiddleware",
    "ActionOutcome",
    "OutcomeStatus",
    "Recovered",
    "recover",
]
