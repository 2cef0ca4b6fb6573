# ABOUTME: Unit tests for InMemoryStageQueue implementation
# ABOUTME: Tests handler registration, identity-based removal and payload threading

import asyncio
from unittest.mock import Mock

import pytest

from action_middleware.exceptions import MiddlewareDeclarationError
from action_middleware.implementations.memory.middleware import InMemoryStageQueue
from action_middleware.models.middleware import ActionDescriptor, InvocationContext, MiddlewareStage


def _context(payload) -> InvocationContext:
    return ActionDescriptor.from_action("calc", "double").to_context(payload, MiddlewareStage.AFTER)


def add_one(context):
    return context.payload + 1


def times_ten(context):
    return context.payload * 10


class TestInMemoryStageQueue:
    """Unit tests for InMemoryStageQueue."""

    @pytest.mark.unit
    def test_queue_creation(self):
        """Test creating empty queue."""
        queue = InMemoryStageQueue()

        assert queue.name == "InMemoryStageQueue"
        assert queue.stage is None
        assert queue.get_handler_count() == 0
        assert queue.is_empty() is True

    @pytest.mark.unit
    def test_queue_creation_with_stage(self):
        queue = InMemoryStageQueue("engine.after", stage=MiddlewareStage.AFTER)

        assert queue.name == "engine.after"
        assert queue.stage == MiddlewareStage.AFTER

    @pytest.mark.unit
    def test_use_single_handler(self):
        queue = InMemoryStageQueue()

        queue.use(add_one)

        assert queue.get_handlers() == [add_one]
        assert queue.contains_handler(add_one) is True

    @pytest.mark.unit
    def test_use_sequence_keeps_order(self):
        queue = InMemoryStageQueue()

        queue.use([add_one, times_ten])
        queue.use((times_ten,))

        assert queue.get_handlers() == [add_one, times_ten, times_ten]

    @pytest.mark.unit
    def test_use_rejects_non_callable(self):
        queue = InMemoryStageQueue()

        with pytest.raises(MiddlewareDeclarationError):
            queue.use([add_one, 42])

        assert queue.is_empty() is True

    @pytest.mark.unit
    def test_remove_single_handler(self):
        queue = InMemoryStageQueue()
        queue.use([add_one, times_ten])

        queue.remove(add_one)

        assert queue.get_handlers() == [times_ten]

    @pytest.mark.unit
    def test_remove_sequence(self):
        queue = InMemoryStageQueue()
        queue.use([add_one, times_ten])

        queue.remove([times_ten, add_one])

        assert queue.is_empty() is True

    @pytest.mark.unit
    def test_remove_only_one_registration_per_handler(self):
        """Test removing a duplicated handler drops a single registration."""
        queue = InMemoryStageQueue()
        queue.use(add_one)
        queue.use(add_one)

        queue.remove(add_one)

        assert queue.get_handlers() == [add_one]

    @pytest.mark.unit
    def test_remove_missing_handler_is_noop(self):
        """Test removing a handler that was never added does nothing."""
        queue = InMemoryStageQueue()
        queue.use(add_one)

        queue.remove(times_ten)

        assert queue.get_handlers() == [add_one]

    @pytest.mark.unit
    def test_remove_matches_by_identity(self):
        """Test removal only drops the exact handler object."""
        first = Mock()
        second = Mock()
        queue = InMemoryStageQueue()
        queue.use([first, second])

        queue.remove(second)

        assert queue.get_handlers() == [first]
        assert queue.get_handlers()[0] is first

    @pytest.mark.unit
    def test_use_returns_one_registration_per_handler(self):
        queue = InMemoryStageQueue()

        registrations = queue.use([add_one, add_one])

        assert [r.handler for r in registrations] == [add_one, add_one]
        assert registrations[0] is not registrations[1]

    @pytest.mark.unit
    def test_discard_removes_only_given_registrations(self):
        queue = InMemoryStageQueue()
        queue.use(add_one)
        queue.use(times_ten)
        latest = queue.use(add_one)

        queue.discard(latest)

        assert queue.get_handlers() == [add_one, times_ten]

    @pytest.mark.unit
    def test_discard_keeps_later_duplicate(self):
        queue = InMemoryStageQueue()
        earliest = queue.use(add_one)
        queue.use(times_ten)
        queue.use(add_one)

        queue.discard(earliest)

        assert queue.get_handlers() == [times_ten, add_one]

    @pytest.mark.unit
    def test_discard_twice_is_noop(self):
        queue = InMemoryStageQueue()
        queue.use(add_one)
        registrations = queue.use(add_one)

        queue.discard(registrations)
        queue.discard(registrations)

        assert queue.get_handlers() == [add_one]

    @pytest.mark.unit
    def test_get_handlers_returns_copy(self):
        queue = InMemoryStageQueue()
        queue.use(add_one)

        handlers = queue.get_handlers()
        handlers.clear()

        assert queue.get_handler_count() == 1

    @pytest.mark.asyncio
    async def test_compose_empty_queue_returns_payload(self):
        """Test an empty queue resolves with the input payload unchanged."""
        queue = InMemoryStageQueue()
        payload = [1, 2, 3]

        result = await queue.compose(_context(payload))

        assert result is payload

    @pytest.mark.asyncio
    async def test_compose_threads_payload_in_order(self):
        queue = InMemoryStageQueue()
        queue.use([add_one, times_ten])

        assert await queue.compose(_context(1)) == 20

        queue.remove(add_one)
        queue.use(add_one)

        assert await queue.compose(_context(1)) == 11

    @pytest.mark.asyncio
    async def test_compose_passes_derived_contexts(self):
        """Test each handler receives the original descriptor with the current payload."""
        seen = []

        def record(context):
            seen.append(context)
            return context.payload * 2

        queue = InMemoryStageQueue()
        queue.use([record, record])
        context = _context(3)

        await queue.compose(context)

        assert [c.payload for c in seen] == [3, 6]
        assert all(c.type == "calc.double" and c.pos == MiddlewareStage.AFTER for c in seen)
        assert context.payload == 3

    @pytest.mark.asyncio
    async def test_compose_awaits_async_handlers(self):
        async def slow_add(context):
            await asyncio.sleep(0)
            return context.payload + 5

        queue = InMemoryStageQueue()
        queue.use([slow_add, add_one])

        assert await queue.compose(_context(0)) == 6

    @pytest.mark.asyncio
    async def test_compose_propagates_handler_error(self):
        def failing(context):
            raise ValueError("bad payload")

        after_failure = Mock()
        queue = InMemoryStageQueue()
        queue.use([failing, after_failure])

        with pytest.raises(ValueError, match="bad payload"):
            await queue.compose(_context(0))

        after_failure.assert_not_called()

    @pytest.mark.asyncio
    async def test_registration_during_compose_does_not_join_run(self):
        """Test handlers added mid-composition only apply to later runs."""
        queue = InMemoryStageQueue()

        def register_more(context):
            queue.use(times_ten)
            return context.payload + 1

        queue.use(register_more)

        assert await queue.compose(_context(1)) == 2
        assert queue.get_handler_count() == 2

    @pytest.mark.asyncio
    async def test_performance_stats(self):
        queue = InMemoryStageQueue("stats", stage=MiddlewareStage.BEFORE)
        queue.use(add_one)

        await queue.compose(_context(1))
        await queue.compose(_context(2))

        stats = queue.get_performance_stats()
        assert stats["queue_name"] == "stats"
        assert stats["stage"] == "before"
        assert stats["total_compositions"] == 2
        assert stats["handler_count"] == 1
        assert stats["average_composition_time_ms"] >= 0.0

        queue.reset_performance_stats()
        assert queue.get_performance_stats()["total_compositions"] == 0

    @pytest.mark.asyncio
    async def test_stats_count_only_timed_compositions(self):
        """Test empty compositions are not counted and failed ones are timed."""
        queue = InMemoryStageQueue("stats")
        for payload in range(3):
            await queue.compose(_context(payload))

        assert queue.get_performance_stats()["total_compositions"] == 0

        queue.use(add_one)
        await queue.compose(_context(1))

        stats = queue.get_performance_stats()
        assert stats["total_compositions"] == 1
        assert stats["average_composition_time_ms"] == pytest.approx(stats["total_composition_time_ms"])

        queue.use(Mock(side_effect=RuntimeError("boom")))
        with pytest.raises(RuntimeError):
            await queue.compose(_context(1))

        stats = queue.get_performance_stats()
        assert stats["total_compositions"] == 2
        assert stats["average_composition_time_ms"] == pytest.approx(stats["total_composition_time_ms"] / 2)

    @pytest.mark.unit
    def test_clear(self):
        queue = InMemoryStageQueue()
        queue.use([add_one, times_ten])

        queue.clear()

        assert queue.is_empty() is True
        assert queue.get_performance_stats()["total_compositions"] == 0
