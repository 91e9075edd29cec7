"""
structreuse.core — Structural Reuse
===================================

§1  THE PROBLEM
───────────────

Change-detection systems (render skipping, memoized derived state,
selector caches) decide whether something changed with a cheap identity
test: ``new is old``.  That only works if an unchanged value keeps its
old reference.  In practice data is rebuilt from scratch on every
update: a fresh parse, a fresh API response, a fresh reducer result.
Every reference changes even when nothing did.

``reuse(updated, old)`` repairs this.  It returns a value equal to
``updated`` that shares as much as possible with ``old``:

    reuse({"a": [1, 2]}, {"a": [1, 2]})      → old itself
    reuse({"a": [1, 2], "b": 3}, {"a": [1, 2], "b": 4})
                                             → new dict, ["a"] is old["a"]
    reuse([1, 2], "something else")          → updated itself


§2  CATEGORIES
──────────────

Every value is classified into one closed set of categories:

    PRIMITIVE         None, bool, numbers, str, bytes, enums, functions
    LIST              list, tuple
    ORDERED_MAP       dict and its subclasses
    RECORD            named tuple, dataclass, SimpleNamespace
    DATETIME          datetime.datetime, datetime.date, datetime.time
    PATTERN           compiled re.Pattern
    RESOURCE_LOCATOR  urllib.parse results, pathlib paths
    OPAQUE            anything else

Structural handling applies only when both values have the same concrete
type.  PRIMITIVE and OPAQUE values, and pairs of different types, get no
structural reuse: the caller-supplied ``fallback`` decides, or
``updated`` is returned unchanged.


§3  THE ALGORITHM
─────────────────

    LIST:        recurse index by index.  If the lengths match and every
                 result is the same value as old[i], return old.
    ORDERED_MAP: recurse on shared keys, keep new keys as-is.  If the
                 sizes match and every value is the same as old's,
                 return old.
    RECORD:      recurse on shared fields.  Any field missing from old,
                 any changed field, or any extra field on old forces a
                 new record.
    DATETIME:    old if the instants and the time zones are equal.
    PATTERN:     old if source and flags are equal.
    LOCATOR:     old if the paths' canonical strings, or the parsed
                 URL components, are equal.

Children that could be reused are reused even when the parent cannot
be, so a change deep in a tree only replaces the path from the root to
the change.


§4  PRECONDITIONS
─────────────────

Inputs must be acyclic.  A cycle recurses until Python raises
``RecursionError``; cycles are not detected.

Neither input is ever mutated.  Partial reuse always allocates a fresh
container of ``updated``'s type.

Author: structreuse contributors
License: MIT
"""

import copy
import datetime
import decimal
import fractions
import logging
import pathlib
import re
import types
from collections import OrderedDict
from enum import Enum, auto
from typing import Any, Callable, Optional, TypeVar
from urllib.parse import (
    DefragResult, DefragResultBytes,
    ParseResult, ParseResultBytes,
    SplitResult, SplitResultBytes,
)

from .records import build_record, is_record, record_fields

logger = logging.getLogger(__name__)

T = TypeVar("T")
Fallback = Callable[[Any, Any], Any]


# ═══════════════════════════════════════════════════════════════════
#  CATEGORIES
# ═══════════════════════════════════════════════════════════════════

class Category(Enum):
    """Structural kind of a value, used to select reuse logic."""
    PRIMITIVE = auto()
    LIST = auto()
    ORDERED_MAP = auto()
    RECORD = auto()
    DATETIME = auto()
    PATTERN = auto()
    RESOURCE_LOCATOR = auto()
    OPAQUE = auto()


# Immutable scalars: compared by value, never restructured
PRIMITIVE_TYPES = (
    type(None), bool, int, float, complex, str, bytes,
    decimal.Decimal, fractions.Fraction, datetime.timedelta, Enum,
)

# Compared by identity only
CALLABLE_TYPES = (
    type, types.FunctionType, types.BuiltinFunctionType,
    types.MethodType, types.BuiltinMethodType,
)

DATETIME_TYPES = (datetime.date, datetime.time)

URL_TYPES = (
    SplitResult, SplitResultBytes,
    ParseResult, ParseResultBytes,
    DefragResult, DefragResultBytes,
)


def classify(value: Any) -> Category:
    """
    Return the category of ``value``.

    Order matters: ``urllib.parse`` results are named tuples, and
    ``datetime.datetime`` is a subclass of ``datetime.date``.
    """
    if isinstance(value, PRIMITIVE_TYPES) or isinstance(value, CALLABLE_TYPES):
        return Category.PRIMITIVE
    if isinstance(value, DATETIME_TYPES):
        return Category.DATETIME
    if isinstance(value, re.Pattern):
        return Category.PATTERN
    if isinstance(value, URL_TYPES) or isinstance(value, pathlib.PurePath):
        return Category.RESOURCE_LOCATOR
    if is_record(value):
        return Category.RECORD
    if isinstance(value, (list, tuple)):
        return Category.LIST
    if isinstance(value, dict):
        return Category.ORDERED_MAP
    return Category.OPAQUE


def same_value(a: Any, b: Any) -> bool:
    """
    Reference equality, widened to equal scalars of the exact same type.

    Two equal strings or large ints are usually distinct objects, but
    nothing downstream can tell them apart, so they count as reused.
    ``True`` and ``1`` do not (different types).  Numbers that compare
    equal but print differently (``0.0`` and ``-0.0``, ``Decimal("1.0")``
    and ``Decimal("1.00")``) do not either.
    """
    if a is b:
        return True
    if type(a) is not type(b) or classify(a) is not Category.PRIMITIVE:
        return False
    if isinstance(a, decimal.Decimal):
        return a.as_tuple() == b.as_tuple()
    if isinstance(a, (float, complex)):
        return a == b and repr(a) == repr(b)
    return a == b


# ═══════════════════════════════════════════════════════════════════
#  CORE REUSE FUNCTION
# ═══════════════════════════════════════════════════════════════════

def reuse(
    updated: T,
    old: T,
    fallback: Optional[Fallback] = None,
    *,
    deep_fallback: bool = False,
) -> T:
    """
    Return a value equal to ``updated`` that shares unchanged parts of ``old``.

    The result is one of:
        • ``old`` itself, when the two are structurally equal
        • a new container of ``updated``'s type whose children are reused
          from ``old`` wherever possible
        • ``updated`` itself (or the fallback's result) when no structural
          reuse applies

    ``fallback(updated, old)`` is called for pairs no built-in category
    handles: scalars, opaque objects, and values of different types.  By
    default it applies to the top-level pair only; nested values are
    reused without it.  With ``deep_fallback=True`` it is passed down to
    every nested call, so it can teach ``reuse`` about custom types
    anywhere in the tree.

    Never mutates either argument.  Inputs must be acyclic.
    """
    kind = classify(updated)

    if kind is not Category.PRIMITIVE and type(updated) is type(old):
        nested = fallback if deep_fallback else None
        if kind is Category.LIST:
            return _reuse_sequence(updated, old, nested, deep_fallback)
        if kind is Category.ORDERED_MAP:
            return _reuse_mapping(updated, old, nested, deep_fallback)
        if kind is Category.RECORD:
            return _reuse_record(updated, old, nested, deep_fallback)
        if kind is Category.DATETIME:
            return old if _same_datetime(old, updated) else updated
        if kind is Category.PATTERN:
            return old if _pattern_key(old) == _pattern_key(updated) else updated
        if kind is Category.RESOURCE_LOCATOR:
            return old if _same_locator(old, updated) else updated

    elif (kind is not Category.PRIMITIVE
          and logger.isEnabledFor(logging.DEBUG)
          and classify(old) is not Category.PRIMITIVE):
        logger.debug(
            "No structural reuse between %s and %s",
            type(updated).__name__, type(old).__name__,
        )

    if fallback is not None:
        return fallback(updated, old)
    return updated


def _reuse_sequence(updated, old, fallback, deep_fallback):
    """
    Index-wise reuse.  Items past the end of ``old`` have nothing to
    reuse and are kept as they are.
    """
    n_old = len(old)
    items = [
        reuse(item, old[i], fallback, deep_fallback=deep_fallback) if i < n_old else item
        for i, item in enumerate(updated)
    ]

    if len(items) == n_old and all(
        same_value(item, prev) for item, prev in zip(items, old)
    ):
        return old

    if isinstance(updated, list):
        if type(updated) is list:
            return items
        result = copy.copy(updated)
        result[:] = items
        return result

    if type(updated) is tuple:
        return tuple(items)
    return type(updated)(items)


def _reuse_mapping(updated, old, fallback, deep_fallback):
    """
    Key-wise reuse.  The result is a shallow copy of ``updated`` so it
    keeps key order and subclass state (e.g. a defaultdict's factory).
    """
    result = copy.copy(updated)
    for key, value in updated.items():
        if key in old:
            result[key] = reuse(value, old[key], fallback, deep_fallback=deep_fallback)

    if len(result) == len(old) and all(
        key in old and same_value(value, old[key])
        for key, value in result.items()
    ):
        # OrderedDict equality is order sensitive
        if not isinstance(old, OrderedDict) or list(old) == list(result):
            return old

    return result


def _reuse_record(updated, old, fallback, deep_fallback):
    """
    Field-wise reuse.  An extra field on ``old`` blocks full reuse even
    when every shared field matched.
    """
    old_fields = record_fields(old)
    fields = {}
    reuse_old = True

    for name, value in record_fields(updated).items():
        if name in old_fields:
            fields[name] = reuse(value, old_fields[name], fallback, deep_fallback=deep_fallback)
            reuse_old = reuse_old and same_value(fields[name], old_fields[name])
        else:
            fields[name] = value
            reuse_old = False

    if reuse_old and len(old_fields) == len(fields):
        return old

    return build_record(updated, fields)


def _pattern_key(pattern: re.Pattern) -> tuple:
    return (pattern.pattern, pattern.flags)


def _same_datetime(old, updated) -> bool:
    """Same instant, same offset: an equal instant in another zone prints differently."""
    return (
        old == updated
        and getattr(old, "tzinfo", None) == getattr(updated, "tzinfo", None)
        and getattr(old, "fold", 0) == getattr(updated, "fold", 0)
    )


def _same_locator(old, updated) -> bool:
    """
    Paths compare by canonical string.  ``urllib.parse`` results compare
    field by field, since ``geturl()`` maps different results to one URL.
    """
    if isinstance(old, pathlib.PurePath):
        return str(old) == str(updated)
    return old == updated
