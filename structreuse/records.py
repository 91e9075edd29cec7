"""
structreuse.records — Field access for keyed-field records.

A record is a value whose content is a fixed set of named fields rather
than positions or arbitrary keys:

    named tuple        → fields from ``_fields``
    dataclass instance → fields from ``dataclasses.fields()``, then any
                         attributes added to the instance ``__dict__``
    SimpleNamespace    → attributes from the instance ``__dict__``

Field order is deterministic: declared fields first in declaration order,
then instance attributes with string names in insertion order, then
instance attributes stored under non-string keys in insertion order.
"""

import copy
import dataclasses
from types import SimpleNamespace
from typing import Any, Iterable

_MISSING = object()


def is_record(value: Any) -> bool:
    """True for named-tuple, dataclass and SimpleNamespace instances."""
    if isinstance(value, tuple):
        return hasattr(type(value), "_fields")
    if isinstance(value, SimpleNamespace):
        return True
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _declared_fields(obj: Any) -> Iterable[str]:
    if isinstance(obj, tuple):
        return type(obj)._fields
    if dataclasses.is_dataclass(obj):
        return [f.name for f in dataclasses.fields(obj)]
    return ()


def record_fields(obj: Any) -> dict:
    """
    Return the fields ``obj`` currently owns, as a fresh ordered dict.

    Declared fields that have been deleted from the instance are left
    out, so a record that lost a field is distinguishable from one that
    still has it.
    """
    fields = {}
    for name in _declared_fields(obj):
        value = getattr(obj, name, _MISSING)
        if value is not _MISSING:
            fields[name] = value

    # Named tuples are rebuilt from their declared fields only
    if isinstance(obj, tuple):
        return fields

    tagged = []
    for key, value in getattr(obj, "__dict__", {}).items():
        if key in fields:
            continue
        if isinstance(key, str):
            fields[key] = value
        else:
            tagged.append((key, value))
    fields.update(tagged)
    return fields


def build_record(template: Any, fields: dict) -> Any:
    """
    Allocate a new record of ``template``'s type holding ``fields``.

    ``template`` is never written to.  Frozen and slotted dataclasses are
    filled in through ``object.__setattr__``, the same way their generated
    ``__init__`` does it.
    """
    if isinstance(template, tuple):
        return template._make(fields[name] for name in template._fields)

    result = copy.copy(template)
    for name, value in fields.items():
        if isinstance(name, str):
            object.__setattr__(result, name, value)
        else:
            vars(result)[name] = value
    return result
