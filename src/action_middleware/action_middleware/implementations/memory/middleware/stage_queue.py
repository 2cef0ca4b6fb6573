# ABOUTME: InMemoryStageQueue implementation holding the handlers of one middleware stage
# ABOUTME: Threads a payload through handlers in registration order and tracks composition timing

import threading
from datetime import datetime, UTC
from typing import Any, List, Optional, Sequence

from loguru import logger

from action_middleware.exceptions import MiddlewareDeclarationError
from action_middleware.interfaces.middleware import AbstractStageQueue
from action_middleware.models.middleware import Handler, HandlerRegistration, InvocationContext, MiddlewareStage
from action_middleware.utils import describe_callable, is_sequence, resolve_awaitable


class InMemoryStageQueue(AbstractStageQueue):
    """
    In-memory implementation of a stage queue.

    Registrations are kept in a plain list in registration order. Composition
    iterates a snapshot taken under the lock, so concurrent registrations
    and removals never disturb a composition that is already running.
    """

    def __init__(
        self,
        name: str = "InMemoryStageQueue",
        stage: Optional[MiddlewareStage] = None,
        log_payloads: bool = False,
    ):
        """
        Initialize the in-memory stage queue.

        Args:
            name: Name of the queue for identification and logging.
            stage: Stage served by this queue, if any.
            log_payloads: Whether payload representations appear in debug logs.
        """
        self.name = name
        self.stage = stage
        self.log_payloads = log_payloads
        self._registrations: List[HandlerRegistration] = []

        # Thread safety
        self._lock = threading.RLock()

        self._logger = logger.bind(name=f"{__name__}.{self.name}")

        # Performance statistics, only compositions that ran at least one handler
        self._composition_count = 0
        self._total_composition_time_ms = 0.0
        self._average_composition_time_ms = 0.0

    @staticmethod
    def _as_list(handlers: Handler | Sequence[Handler]) -> List[Handler]:
        return list(handlers) if is_sequence(handlers) else [handlers]

    def use(self, handlers: Handler | Sequence[Handler]) -> List[HandlerRegistration]:
        """
        Append one handler or an ordered sequence of handlers.

        Args:
            handlers: A callable or a list/tuple of callables.

        Returns:
            List[HandlerRegistration]: The registrations created, in order.

        Raises:
            MiddlewareDeclarationError: If any entry is not callable.
        """
        items = self._as_list(handlers)
        for handler in items:
            if not callable(handler):
                raise MiddlewareDeclarationError(
                    f"Stage queue '{self.name}' only accepts callables but got {handler!r}",
                    code="MW_INVALID_DECLARATION",
                    details={"queue": self.name, "handler_type": type(handler).__name__},
                )

        registrations = [HandlerRegistration(handler=handler) for handler in items]
        with self._lock:
            self._registrations.extend(registrations)
            self._logger.debug(
                f"Added {len(items)} handler(s) {[describe_callable(h) for h in items]}. "
                f"Total count: {len(self._registrations)}"
            )
        return registrations

    def discard(self, registrations: Sequence[HandlerRegistration]) -> None:
        """
        Remove exactly the given registrations, matched by identity.

        Args:
            registrations: Registrations returned by `use`. Ones already
                removed are ignored.
        """
        targets = {id(registration) for registration in registrations}
        with self._lock:
            before = len(self._registrations)
            self._registrations = [entry for entry in self._registrations if id(entry) not in targets]
            self._logger.debug(
                f"Discarded {before - len(self._registrations)}/{len(registrations)} registration(s). "
                f"Total count: {len(self._registrations)}"
            )

    def remove(self, handlers: Handler | Sequence[Handler]) -> None:
        """
        Remove one registration of each given handler, matched by identity.

        The earliest registration of a handler goes first. Use `discard` to
        remove specific registrations.

        Args:
            handlers: A callable or a list/tuple of callables. Handlers that
                are not registered are ignored.
        """
        items = self._as_list(handlers)
        removed = 0
        with self._lock:
            for handler in items:
                for index, registered in enumerate(self._registrations):
                    if registered.handler is handler:
                        del self._registrations[index]
                        removed += 1
                        break
            self._logger.debug(
                f"Removed {removed}/{len(items)} handler(s). Total count: {len(self._registrations)}"
            )

    async def compose(self, context: InvocationContext) -> Any:
        """
        Thread the context payload through every registered handler.

        Args:
            context: InvocationContext for the stage.

        Returns:
            Any: The last handler's return value, or the context payload
            unchanged when the queue is empty.
        """
        with self._lock:
            handlers = [registration.handler for registration in self._registrations]
            if handlers:
                self._composition_count += 1
                composition_id = self._composition_count

        payload = context.payload
        if not handlers:
            return payload

        start_time = datetime.now(UTC)
        self._logger.debug(
            f"Composition #{composition_id} for {context.action} through {len(handlers)} handler(s)"
            + (f", payload: {payload!r}" if self.log_payloads else "")
        )

        try:
            for index, handler in enumerate(handlers):
                try:
                    payload = await resolve_awaitable(handler(context.with_payload(payload)))
                except Exception as e:
                    self._logger.debug(
                        f"Composition #{composition_id}: handler {index + 1}/{len(handlers)} "
                        f"{describe_callable(handler)} raised {type(e).__name__}: {e}"
                    )
                    raise
        finally:
            execution_time_ms = (datetime.now(UTC) - start_time).total_seconds() * 1000
            with self._lock:
                self._total_composition_time_ms += execution_time_ms
                if self._composition_count:
                    self._average_composition_time_ms = self._total_composition_time_ms / self._composition_count

        self._logger.debug(
            f"Composition #{composition_id} completed in {execution_time_ms:.2f}ms"
            + (f", payload: {payload!r}" if self.log_payloads else "")
        )
        return payload

    def get_handler_count(self) -> int:
        """
        Get the number of registered handlers.

        Returns:
            int: Number of registrations currently in the queue.
        """
        with self._lock:
            return len(self._registrations)

    def get_handlers(self) -> List[Handler]:
        """
        Get a copy of the registered handlers in execution order.

        Returns:
            List[Handler]: Registered handlers, first to run first.
        """
        with self._lock:
            return [registration.handler for registration in self._registrations]

    def contains_handler(self, handler: Handler) -> bool:
        """
        Check whether a handler is registered, matched by identity.

        Args:
            handler: Callable to look for.

        Returns:
            bool: True if at least one registration of the handler exists.
        """
        with self._lock:
            return any(registered.handler is handler for registered in self._registrations)

    def is_empty(self) -> bool:
        with self._lock:
            return not self._registrations

    def clear(self) -> None:
        """
        Remove every registered handler.

        Also resets the performance statistics of the queue.
        """
        with self._lock:
            handler_count = len(self._registrations)
            self._registrations.clear()
            self._composition_count = 0
            self._total_composition_time_ms = 0.0
            self._average_composition_time_ms = 0.0
            self._logger.info(f"Cleared stage queue with {handler_count} handler(s) and reset statistics")

    def get_performance_stats(self) -> dict:
        """
        Get performance statistics for the queue.

        Returns:
            dict: Composition counts and timing.
        """
        with self._lock:
            return {
                "queue_name": self.name,
                "stage": self.stage.value if self.stage else None,
                "total_compositions": self._composition_count,
                "total_composition_time_ms": self._total_composition_time_ms,
                "average_composition_time_ms": self._average_composition_time_ms,
                "handler_count": len(self._registrations),
            }

    def reset_performance_stats(self) -> None:
        """Reset performance statistics to their initial state."""
        with self._lock:
            old_count = self._composition_count
            self._composition_count = 0
            self._total_composition_time_ms = 0.0
            self._average_composition_time_ms = 0.0
            self._logger.info(f"Performance statistics reset (previous composition count: {old_count})")

    def __repr__(self) -> str:
        return f"InMemoryStageQueue(name='{self.name}', handler_count={self.get_handler_count()})"
