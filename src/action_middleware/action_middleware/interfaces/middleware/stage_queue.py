# ABOUTME: Abstract stage queue interface for ordered middleware handler storage
# ABOUTME: Defines registration, removal and payload-threading composition of handlers

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, List, Sequence

if TYPE_CHECKING:
    from action_middleware.models.middleware import Handler, HandlerRegistration, InvocationContext


class AbstractStageQueue(ABC):
    """
    Abstract base class for stage queue implementations.

    A stage queue keeps the handlers of one middleware stage in
    registration order and folds an invocation context through them.
    """

    @abstractmethod
    def use(self, handlers: "Handler | Sequence[Handler]") -> List["HandlerRegistration"]:
        """
        Append one handler or an ordered sequence of handlers.

        The same handler may be registered more than once; it then runs
        once per registration.

        Args:
            handlers: A callable or a list/tuple of callables.

        Returns:
            List[HandlerRegistration]: One registration per appended handler,
            accepted by `discard`.
        """
        pass

    @abstractmethod
    def discard(self, registrations: Sequence["HandlerRegistration"]) -> None:
        """
        Remove exactly the given registrations.

        Registrations are matched by identity, so other registrations of
        the same handler keep their position. Registrations no longer in
        the queue are ignored.

        Args:
            registrations: Registrations returned by `use`.
        """
        pass

    @abstractmethod
    def remove(self, handlers: "Handler | Sequence[Handler]") -> None:
        """
        Remove one registration of each given handler.

        Handlers are matched by identity. Removing a handler that is not
        registered is a no-op.

        Args:
            handlers: A callable or a list/tuple of callables.
        """
        pass

    @abstractmethod
    async def compose(self, context: "InvocationContext") -> Any:
        """
        Thread the context payload through every registered handler.

        Each handler receives the context carrying the previous handler's
        return value as payload. Handlers registered while a composition is
        running do not join that composition.

        Args:
            context: InvocationContext for the stage.

        Returns:
            Any: The last handler's return value, or the context payload
            unchanged when the queue is empty.
        """
        pass

    @abstractmethod
    def get_handler_count(self) -> int:
        """
        Get the number of registered handlers.

        Returns:
            int: Number of registrations currently in the queue.
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every registered handler."""
        pass
