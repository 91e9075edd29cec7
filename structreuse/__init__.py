"""
Structural Reuse
================

Rebuild a value so that it shares every unchanged part of a previous
value, down to returning the previous value itself when nothing changed.

    old = {"user": {"name": "Ada"}, "tags": ["a", "b"]}
    new = {"user": {"name": "Ada"}, "tags": ["a", "c"]}

    result = reuse(new, old)
    result == new                   → True
    result is old                   → False  (tags changed)
    result["user"] is old["user"]   → True   (user did not)

Downstream code can then detect changes with ``is`` instead of a deep
comparison: memoized selectors, render skipping, cache invalidation.
"""

from structreuse.core import (
    # Types
    Category,
    Fallback,
    PRIMITIVE_TYPES,
    # Classification
    classify,
    same_value,
    # Reuse
    reuse,
)
from structreuse.records import is_record, record_fields, build_record
from structreuse.stable import Stable, reuse_results

__version__ = "0.1.0"
__all__ = [
    "Category", "Fallback", "PRIMITIVE_TYPES",
    "classify", "same_value", "reuse",
    "is_record", "record_fields", "build_record",
    "Stable", "reuse_results",
]
