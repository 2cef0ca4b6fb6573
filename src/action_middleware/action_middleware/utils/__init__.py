# ABOUTME: Small helpers shared by the normalizer, stage queues and engine
# ABOUTME: Exports value mapping, pattern detection and awaitable resolution helpers

from .helpers import map_values, is_pattern, is_sequence, resolve_awaitable, describe_callable, as_argument_list

__all__ = ["map_values", "is_pattern", "is_sequence", "resolve_awaitable", "describe_callable", "as_argument_list"]
