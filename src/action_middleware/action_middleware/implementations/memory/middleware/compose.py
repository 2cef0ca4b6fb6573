# ABOUTME: ComposeMiddleware engine running actions through before, after and error stages
# ABOUTME: Registers normalized middleware on in-memory stage queues and orchestrates the pipeline

import functools
import threading
from typing import Any, Callable, Dict, List, Optional, Sequence

from loguru import logger

from action_middleware.components.middleware import normalize
from action_middleware.config import get_settings
from action_middleware.exceptions import MiddlewareContractError
from action_middleware.interfaces.middleware import AbstractComposeMiddleware
from action_middleware.models.middleware import (
    ActionDescriptor,
    ActionOutcome,
    MiddlewareStage,
    PipelinePhase,
)
from action_middleware.utils import as_argument_list, is_sequence, resolve_awaitable

from .stage_queue import InMemoryStageQueue


class ComposeMiddleware(AbstractComposeMiddleware):
    """
    Middleware composition engine backed by in-memory stage queues.

    Every execute_action call runs the before stage on the argument list,
    invokes the action with the resulting arguments, and hands the result to
    the after stage. A failure in any of these steps enters the error stage,
    which either recovers with a replacement value or lets an error escape.
    """

    to_standard_middleware = staticmethod(normalize)

    def __init__(self, name: str = "ComposeMiddleware", route_contract_violations: Optional[bool] = None):
        """
        Initialize the composition engine with three empty stage queues.

        Args:
            name: Name of the engine for identification and logging.
            route_contract_violations: Whether a before stage that does not
                resolve to an argument sequence enters the error stage. Defaults
                to the MIDDLEWARE_ROUTE_CONTRACT_VIOLATIONS setting.
        """
        settings = get_settings()
        self.name = name
        self.route_contract_violations = (
            settings.MIDDLEWARE_ROUTE_CONTRACT_VIOLATIONS
            if route_contract_violations is None
            else route_contract_violations
        )
        self._queues: Dict[MiddlewareStage, InMemoryStageQueue] = {
            stage: InMemoryStageQueue(
                name=f"{self.name}.{stage.value}", stage=stage, log_payloads=settings.MIDDLEWARE_LOG_PAYLOADS
            )
            for stage in MiddlewareStage
        }

        self._lock = threading.RLock()
        self._logger = logger.bind(name=f"{__name__}.{self.name}")
        self._execution_count = 0

    @property
    def before(self) -> InMemoryStageQueue:
        return self._queues[MiddlewareStage.BEFORE]

    @property
    def after(self) -> InMemoryStageQueue:
        return self._queues[MiddlewareStage.AFTER]

    @property
    def error(self) -> InMemoryStageQueue:
        return self._queues[MiddlewareStage.ERROR]

    def get_stage_queue(self, stage: MiddlewareStage | str) -> InMemoryStageQueue:
        """
        Get the queue serving a stage.

        Args:
            stage: MiddlewareStage or its name.

        Returns:
            InMemoryStageQueue: The queue of that stage.

        Raises:
            ValueError: If the name is not a known stage.
        """
        return self._queues[MiddlewareStage(stage)]

    def use(self, *declarations: Any) -> Callable[[], None]:
        """
        Register middleware declarations on the stage queues.

        All declarations are normalized before anything is registered, so a
        configuration error leaves the engine untouched.

        Args:
            *declarations: Callables (after stage) or mappings keyed by
                before, after, error and optionally filter.

        Returns:
            Callable[[], None]: A remover undoing the registrations of this
            call. Calling it again does nothing.
        """
        normalized = [normalize(declaration) for declaration in declarations]

        removes: List[Callable[[], None]] = []
        registered: Dict[str, int] = {}
        for middleware in normalized:
            for stage, handlers in middleware.stages():
                queue = self._queues[stage]
                registrations = queue.use(handlers)
                removes.append(functools.partial(queue.discard, registrations))
                registered[stage.value] = registered.get(stage.value, 0) + len(handlers)

        self._logger.info(f"Registered {len(normalized)} middleware declaration(s): {registered}")

        removed = False

        def remove_middlewares() -> None:
            nonlocal removed
            if removed:
                return
            removed = True
            for remove in removes:
                remove()
            self._logger.info(f"Removed middleware registrations: {registered}")

        return remove_middlewares

    async def run_action(
        self,
        action_fn: Callable[..., Any],
        action_args: Sequence[Any] = (),
        action_name: Any = None,
        action_context: Any = None,
    ) -> ActionOutcome:
        """
        Run an action through the before, after and error stages.

        Args:
            action_fn: Sync or async callable implementing the action. Bound
                methods carry their own invocation target.
            action_args: Positional arguments for the action.
            action_name: Name of the action.
            action_context: Object or namespace the action belongs to.

        Returns:
            ActionOutcome: RESOLVED with the after-stage value, RECOVERED with
            the error-stage value, or FAILED with the error that escaped.

        Raises:
            MiddlewareArgumentsError: If `action_args` is not a list or tuple.
        """
        descriptor = ActionDescriptor.from_action(action_context, action_name)
        args_payload = as_argument_list(action_args)

        with self._lock:
            self._execution_count += 1
            execution_id = self._execution_count

        self._logger.debug(f"Execution #{execution_id}: running {descriptor.action}")

        phase = PipelinePhase.BEFORE
        try:
            args = await self.before.compose(descriptor.to_context(args_payload, MiddlewareStage.BEFORE))
            if not is_sequence(args):
                contract_error = MiddlewareContractError(
                    "[ComposeMiddleware] Pre middleware must return arguments",
                    code="MW_PRE_CONTRACT",
                    details={"action": descriptor.action, "returned_type": type(args).__name__},
                )
                if not self.route_contract_violations:
                    self._logger.error(f"Execution #{execution_id}: {contract_error.message} ({descriptor.action})")
                    outcome = ActionOutcome.failed(contract_error, failed_phase=phase, action=descriptor.action)
                    outcome.mark_completed()
                    return outcome
                raise contract_error

            phase = PipelinePhase.INVOKE
            result = await resolve_awaitable(action_fn(*args))

            phase = PipelinePhase.AFTER
            value = await self.after.compose(descriptor.to_context(result, MiddlewareStage.AFTER))
        except Exception as e:
            outcome = await self._handle_error(descriptor, e, phase, execution_id)
        else:
            outcome = ActionOutcome.resolved(value, action=descriptor.action)

        outcome.mark_completed()
        self._logger.debug(
            f"Execution #{execution_id}: {descriptor.action} {outcome.status.value} "
            f"in {outcome.execution_time_ms:.2f}ms"
        )
        return outcome

    async def _handle_error(
        self, descriptor: ActionDescriptor, error: Exception, phase: PipelinePhase, execution_id: int
    ) -> ActionOutcome:
        self._logger.warning(
            f"Execution #{execution_id}: {descriptor.action} failed during {phase.value} "
            f"with {type(error).__name__}: {error}"
        )
        try:
            payload = await self.error.compose(descriptor.to_context(error, MiddlewareStage.ERROR))
        except Exception as e:
            self._logger.error(
                f"Execution #{execution_id}: error stage for {descriptor.action} raised {type(e).__name__}: {e}"
            )
            return ActionOutcome.failed(e, failed_phase=PipelinePhase.ERROR, action=descriptor.action)

        outcome = ActionOutcome.from_error_stage(payload, failed_phase=phase, action=descriptor.action)
        if outcome.is_failed():
            self._logger.error(
                f"Execution #{execution_id}: {descriptor.action} escalated {type(outcome.error).__name__}: "
                f"{outcome.error}"
            )
        else:
            self._logger.info(f"Execution #{execution_id}: {descriptor.action} recovered by error stage")
        return outcome

    def wrap(
        self, action_fn: Callable[..., Any], action_name: Any = None, action_context: Any = None
    ) -> Callable[..., Any]:
        """
        Wrap an action so every call runs through this engine.

        Args:
            action_fn: Sync or async callable implementing the action.
            action_name: Name of the action. Defaults to the function name.
            action_context: Object or namespace the action belongs to.

        Returns:
            Callable[..., Any]: Async callable taking the action's positional arguments.
        """
        name = action_name if action_name is not None else getattr(action_fn, "__name__", repr(action_fn))

        @functools.wraps(action_fn)
        async def run_wrapped_action(*args: Any) -> Any:
            return await self.execute_action(
                action_fn, action_args=args, action_name=name, action_context=action_context
            )

        return run_wrapped_action

    def clear(self) -> None:
        """Remove every registered handler from all stages."""
        for queue in self._queues.values():
            queue.clear()
        self._logger.info(f"Cleared all stages of {self.name}")

    def get_pipeline_info(self) -> dict:
        """
        Get information about the current engine state.

        Returns:
            dict: Handler counts per stage, execution count and queue statistics.
        """
        with self._lock:
            execution_count = self._execution_count
        return {
            "name": self.name,
            "route_contract_violations": self.route_contract_violations,
            "total_executions": execution_count,
            "handler_counts": {stage.value: queue.get_handler_count() for stage, queue in self._queues.items()},
            "stage_stats": {stage.value: queue.get_performance_stats() for stage, queue in self._queues.items()},
        }

    def __repr__(self) -> str:
        counts = ", ".join(f"{stage.value}={queue.get_handler_count()}" for stage, queue in self._queues.items())
        return f"ComposeMiddleware(name='{self.name}', {counts})"
