# ABOUTME: Abstract composition engine interface for action middleware
# ABOUTME: Defines middleware registration and the before/action/after/error execution entry point

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Sequence

if TYPE_CHECKING:
    from action_middleware.models.middleware import ActionOutcome


class AbstractComposeMiddleware(ABC):
    """
    Abstract base class for middleware composition engines.

    An engine registers middleware declarations on its before, after and
    error stages and runs actions through them.
    """

    @abstractmethod
    def use(self, *declarations: Any) -> Callable[[], None]:
        """
        Register middleware declarations.

        Args:
            *declarations: Callables (after stage) or mappings keyed by
                before, after, error and optionally filter.

        Returns:
            Callable[[], None]: A remover undoing exactly the registrations
            made by this call.

        Raises:
            MiddlewareConfigurationError: If any declaration is invalid. No
                declaration of the call is registered in that case.
        """
        pass

    @abstractmethod
    async def run_action(
        self,
        action_fn: Callable[..., Any],
        action_args: Sequence[Any] = (),
        action_name: Any = None,
        action_context: Any = None,
    ) -> "ActionOutcome":
        """
        Run an action through the pipeline and report how it ended.

        Args:
            action_fn: Sync or async callable implementing the action.
            action_args: Positional arguments for the action. A list or tuple; None means no arguments.
            action_name: Name of the action.
            action_context: Object or namespace the action belongs to.

        Returns:
            ActionOutcome: Resolved, recovered or failed outcome.

        Raises:
            MiddlewareArgumentsError: If `action_args` is not a list or tuple.
        """
        pass

    async def execute_action(
        self,
        action_fn: Callable[..., Any],
        action_args: Sequence[Any] = (),
        action_name: Any = None,
        action_context: Any = None,
    ) -> Any:
        """
        Run an action through the pipeline.

        Args:
            action_fn: Sync or async callable implementing the action.
            action_args: Positional arguments for the action. A list or tuple; None means no arguments.
            action_name: Name of the action.
            action_context: Object or namespace the action belongs to.

        Returns:
            Any: The after-stage value, or the value recovered by the error stage.

        Raises:
            Exception: The error that escaped the error stage.
        """
        outcome = await self.run_action(
            action_fn, action_args=action_args, action_name=action_name, action_context=action_context
        )
        return outcome.unwrap()
