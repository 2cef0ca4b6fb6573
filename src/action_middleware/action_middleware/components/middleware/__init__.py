# ABOUTME: Middleware components package
# ABOUTME: Exports filter predicate construction and declaration normalization

from .filters import FilterPredicate, to_filter
from .normalizer import KEYS, classify_declaration, guard_handler, normalize

__all__ = ["FilterPredicate", "to_filter", "KEYS", "classify_declaration", "guard_handler", "normalize"]
