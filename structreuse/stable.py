"""
structreuse.stable — Keep references stable across recomputation.

Two thin consumers of ``reuse`` for the common case where a value is
recomputed over and over and downstream code only wants to hear about
real changes:

    holder = Stable()
    holder.update(load_config())    # first value is stored as-is
    holder.update(load_config())    # same content → same object back
    holder.changed                  # False

    @reuse_results
    def visible_rows(state):
        return [row for row in state.rows if row.visible]
"""

import functools
import logging
from typing import Any, Callable, Optional

from .core import Fallback, reuse, same_value

logger = logging.getLogger(__name__)

_EMPTY = object()


class Stable:
    """
    Holds the last accepted value.

    Each ``update`` runs the new value through ``reuse`` against the held
    one, so the held reference only changes when the content does.
    """
    __slots__ = ("_value", "_fallback", "changed")

    def __init__(self, initial: Any = _EMPTY, fallback: Optional[Fallback] = None):
        self._value = initial
        self._fallback = fallback
        self.changed = False

    @property
    def empty(self) -> bool:
        return self._value is _EMPTY

    @property
    def value(self) -> Any:
        """The held value, or None before the first update."""
        return None if self._value is _EMPTY else self._value

    def update(self, value: Any) -> Any:
        """Accept ``value`` and return the reference now held."""
        if self._value is _EMPTY:
            self._value = value
            self.changed = True
            return value

        result = reuse(value, self._value, self._fallback)
        if same_value(result, self._value):
            self.changed = False
            return self._value

        logger.debug("Stable value replaced with new %s", type(result).__name__)
        self._value = result
        self.changed = True
        return result

    def reset(self) -> None:
        """Forget the held value."""
        self._value = _EMPTY
        self.changed = False

    def __repr__(self) -> str:
        if self._value is _EMPTY:
            return "Stable(<empty>)"
        return f"Stable({self._value!r})"


def reuse_results(fn: Optional[Callable] = None, *, fallback: Optional[Fallback] = None):
    """
    Decorator: results equal to the previous result come back as the
    previous object.

    Works bare (``@reuse_results``) or with a fallback
    (``@reuse_results(fallback=...)``).  The wrapper exposes the holder as
    ``wrapper.stable`` and ``wrapper.reset()`` to forget the last result.
    """
    def decorate(func: Callable) -> Callable:
        holder = Stable(fallback=fallback)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            return holder.update(func(*args, **kwargs))

        wrapper.stable = holder
        wrapper.reset = holder.reset
        return wrapper

    if fn is None:
        return decorate
    return decorate(fn)
