# ABOUTME: Middleware declaration variants and the canonical normalized record
# ABOUTME: SingleHandler and StageMap are decided once at registration, CanonicalMiddleware is what gets stored

from typing import Any, Callable, Dict, Iterator, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .stage import MiddlewareStage

Handler = Callable[..., Any]


class SingleHandler(BaseModel):
    """A declaration made of one callable, registered on the after stage."""

    handler: Handler

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class StageMap(BaseModel):
    """
    A declaration keyed by stage.

    Holds a private copy of the caller's mapping; normalization never
    touches the original object. Keys are left unvalidated here so the
    normalizer can report the offending key by name.
    """

    record: Dict[Any, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class CanonicalMiddleware(BaseModel):
    """
    Normalized middleware ready for registration.

    Every stage is an ordered tuple of handlers. An empty tuple means the
    declaration did not use that stage.
    """

    before: Tuple[Handler, ...] = ()
    after: Tuple[Handler, ...] = ()
    error: Tuple[Handler, ...] = ()

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def stages(self) -> Iterator[Tuple[MiddlewareStage, Tuple[Handler, ...]]]:
        """Yield (stage, handlers) for every non-empty stage, in before/after/error order."""
        for stage in MiddlewareStage:
            handlers = getattr(self, stage.value)
            if handlers:
                yield stage, handlers

    def as_dict(self) -> Dict[str, Tuple[Handler, ...]]:
        """Return the non-empty stages keyed by stage name."""
        return {stage.value: handlers for stage, handlers in self.stages()}

    def is_empty(self) -> bool:
        return not any(True for _ in self.stages())


class HandlerRegistration(BaseModel):
    """
    One registration of a handler on a stage queue.

    Registrations are matched by identity, so a remover can take out
    exactly the entries its own `use` call created even when the same
    handler is registered several times.
    """

    handler: Handler

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
