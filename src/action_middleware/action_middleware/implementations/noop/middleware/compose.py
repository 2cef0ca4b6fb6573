# ABOUTME: NoOp composition engine for baselines and minimal scenarios
# ABOUTME: Validates middleware declarations but invokes actions without running any stage

from typing import Any, Callable, Sequence

from loguru import logger

from action_middleware.components.middleware import normalize
from action_middleware.interfaces.middleware import AbstractComposeMiddleware
from action_middleware.models.middleware import ActionDescriptor, ActionOutcome, PipelinePhase
from action_middleware.utils import as_argument_list, resolve_awaitable


class NoOpComposeMiddleware(AbstractComposeMiddleware):
    """
    No-operation implementation of the composition engine.

    Declarations are normalized so configuration errors still surface, but
    nothing is stored and actions run bare. It's designed for:
    - Performance baselines against the real engine
    - Tests that need to bypass middleware entirely
    """

    def __init__(self, name: str = "NoOpComposeMiddleware"):
        """
        Initialize the no-operation engine.

        Args:
            name: Name of the engine for identification and logging.
        """
        self.name = name
        self._declaration_count = 0
        self._logger = logger.bind(name=f"{__name__}.{self.name}")

        self._logger.debug(f"NoOp compose middleware '{name}' initialized")

    def use(self, *declarations: Any) -> Callable[[], None]:
        """
        Validate declarations without registering them (no-op).

        Args:
            *declarations: Middleware declarations, validated and discarded.

        Returns:
            Callable[[], None]: A remover that only updates the tracked count.
        """
        for declaration in declarations:
            normalize(declaration)

        count = len(declarations)
        self._declaration_count += count
        self._logger.debug(f"NoOp: {count} declaration(s) accepted (count: {self._declaration_count})")

        removed = False

        def remove_middlewares() -> None:
            nonlocal removed
            if removed:
                return
            removed = True
            self._declaration_count -= count

        return remove_middlewares

    async def run_action(
        self,
        action_fn: Callable[..., Any],
        action_args: Sequence[Any] = (),
        action_name: Any = None,
        action_context: Any = None,
    ) -> ActionOutcome:
        """
        Invoke the action directly (no-op pipeline).

        Returns:
            ActionOutcome: RESOLVED with the action result, or FAILED with its error.
        """
        descriptor = ActionDescriptor.from_action(action_context, action_name)
        args = as_argument_list(action_args)
        try:
            result = await resolve_awaitable(action_fn(*args))
        except Exception as e:
            outcome = ActionOutcome.failed(e, failed_phase=PipelinePhase.INVOKE, action=descriptor.action)
        else:
            outcome = ActionOutcome.resolved(result, action=descriptor.action)
        outcome.mark_completed()
        return outcome

    def get_declaration_count(self) -> int:
        """
        Get the number of declarations accepted and not yet removed.

        Returns:
            int: Tracked declaration count.
        """
        return self._declaration_count

    def __repr__(self) -> str:
        return f"NoOpComposeMiddleware(name='{self.name}', declaration_count={self._declaration_count})"
