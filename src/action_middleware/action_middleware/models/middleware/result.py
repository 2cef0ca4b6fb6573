# ABOUTME: ActionOutcome and Recovered models describing how a pipeline run ended
# ABOUTME: Decides in one place whether the error stage recovered or escalated

from datetime import datetime, UTC
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from .stage import PipelinePhase


class Recovered(BaseModel):
    """
    Explicit recovery marker returned by an error handler.

    Any non-exception value returned from the error stage already counts as
    a recovery; the marker also allows recovering with a value that is itself
    an exception instance.
    """

    value: Any = None

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


def recover(value: Any = None) -> Recovered:
    """Wrap `value` so the error stage resolves the action with it."""
    return Recovered(value=value)


class OutcomeStatus(str, Enum):
    """
    Terminal status of an execute_action run.
    """

    RESOLVED = "resolved"
    RECOVERED = "recovered"
    FAILED = "failed"


class ActionOutcome(BaseModel):
    """
    Result of running one action through the middleware pipeline.

    Either carries the success value (resolved directly or recovered by the
    error stage) or the error that escaped the error stage.
    """

    status: OutcomeStatus = Field(description="Terminal status of the run")
    action: Optional[str] = Field(default=None, description="Action path of the run")
    value: Any = Field(default=None, description="Success or recovered value")
    error: Optional[BaseException] = Field(default=None, description="Error propagated to the caller")
    failed_phase: Optional[PipelinePhase] = Field(
        default=None, description="Phase where the original failure was raised"
    )

    # Timing information
    started_at: datetime = Field(default_factory=lambda: datetime.now(UTC), description="When the run started")
    completed_at: Optional[datetime] = Field(default=None, description="When the run completed")
    execution_time_ms: Optional[float] = Field(default=None, description="Execution time in milliseconds")

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @classmethod
    def resolved(cls, value: Any, action: Optional[str] = None) -> "ActionOutcome":
        return cls(status=OutcomeStatus.RESOLVED, value=value, action=action)

    @classmethod
    def failed(
        cls, error: BaseException, failed_phase: Optional[PipelinePhase] = None, action: Optional[str] = None
    ) -> "ActionOutcome":
        return cls(status=OutcomeStatus.FAILED, error=error, failed_phase=failed_phase, action=action)

    @classmethod
    def from_error_stage(
        cls, payload: Any, failed_phase: Optional[PipelinePhase] = None, action: Optional[str] = None
    ) -> "ActionOutcome":
        """
        Classify the value the error stage resolved to.

        Args:
            payload: Final payload of the error stage.
            failed_phase: Phase where the original failure was raised.
            action: Action path of the run.

        Returns:
            ActionOutcome: RECOVERED for a `Recovered` marker or any non-exception
            value, FAILED when the payload is an exception.
        """
        if isinstance(payload, Recovered):
            return cls(status=OutcomeStatus.RECOVERED, value=payload.value, failed_phase=failed_phase, action=action)
        if isinstance(payload, BaseException):
            return cls.failed(payload, failed_phase=failed_phase, action=action)
        return cls(status=OutcomeStatus.RECOVERED, value=payload, failed_phase=failed_phase, action=action)

    def mark_completed(self) -> None:
        """Set the completion timestamp and derive the execution time."""
        self.completed_at = datetime.now(UTC)
        if self.execution_time_ms is None:
            self.execution_time_ms = (self.completed_at - self.started_at).total_seconds() * 1000

    def unwrap(self) -> Any:
        """
        Return the success value or raise the propagated error.

        Raises:
            BaseException: The error that escaped the error stage.
        """
        if self.status == OutcomeStatus.FAILED:
            raise self.error
        return self.value

    def is_successful(self) -> bool:
        return self.status != OutcomeStatus.FAILED

    def is_failed(self) -> bool:
        return self.status == OutcomeStatus.FAILED

    def get_execution_summary(self) -> Dict[str, Any]:
        """
        Get a summary of the run.

        Returns:
            Dict[str, Any]: Summary containing status, timing and error information.
        """
        summary: Dict[str, Any] = {
            "action": self.action,
            "status": self.status.value,
            "execution_time_ms": self.execution_time_ms,
            "has_error": self.error is not None,
        }
        if self.error is not None:
            summary["error"] = str(self.error)
            summary["error_type"] = type(self.error).__name__
        if self.failed_phase is not None:
            summary["failed_phase"] = self.failed_phase.value
        return summary
