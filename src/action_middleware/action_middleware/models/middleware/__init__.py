# ABOUTME: Middleware models package
# ABOUTME: Exports stage enums, invocation context, declaration variants and outcome models

from .stage import MiddlewareStage, PipelinePhase
from .context import ActionDescriptor, InvocationContext
from .declaration import Handler, HandlerRegistration, SingleHandler, StageMap, CanonicalMiddleware
from .result import ActionOutcome, OutcomeStatus, Recovered, recover

__all__ = [
    "MiddlewareStage",
    "PipelinePhase",
    "ActionDescriptor",
    "InvocationContext",
    "Handler",
    "HandlerRegistration",
    "SingleHandler",
    "StageMap",
    "CanonicalMiddleware",
    "ActionOutcome",
    "OutcomeStatus",
    "Recovered",
    "recover",
]
