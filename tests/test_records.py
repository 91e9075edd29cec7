"""
Tests for structreuse.records — field enumeration and record construction.
"""

import os
import sys
from collections import namedtuple
from dataclasses import FrozenInstanceError, dataclass, field
from types import SimpleNamespace

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from structreuse.records import build_record, is_record, record_fields


Pair = namedtuple("Pair", ["left", "right"])


@dataclass
class Config:
    host: str
    port: int = 80
    tags: list = field(default_factory=list)


@dataclass(frozen=True)
class Frozen:
    a: int
    b: int


@dataclass(frozen=True, slots=True)
class FrozenSlots:
    a: int
    b: int


class TestIsRecord:

    def test_namedtuple(self):
        assert is_record(Pair(1, 2))

    def test_plain_tuple(self):
        assert not is_record((1, 2))

    def test_dataclass_instance(self):
        assert is_record(Config("h"))

    def test_dataclass_class(self):
        assert not is_record(Config)

    def test_namespace(self):
        assert is_record(SimpleNamespace())

    def test_plain_object(self):
        assert not is_record(object())
        assert not is_record({"a": 1})


class TestRecordFields:

    def test_namedtuple_order(self):
        assert list(record_fields(Pair(1, 2))) == ["left", "right"]

    def test_dataclass_declared_order(self):
        assert record_fields(Config("h", 8080)) == {"host": "h", "port": 8080, "tags": []}

    def test_declared_before_added(self):
        cfg = Config("h")
        cfg.extra = 1
        assert list(record_fields(cfg)) == ["host", "port", "tags", "extra"]

    def test_non_string_keys_last(self):
        token = object()
        ns = SimpleNamespace()
        ns.a = 1
        vars(ns)[token] = 2
        ns.b = 3
        assert list(record_fields(ns)) == ["a", "b", token]

    def test_deleted_field_is_absent(self):
        cfg = Config("h", tags=[1])
        del cfg.tags
        assert "tags" not in record_fields(cfg)

    def test_returns_fresh_dict(self):
        ns = SimpleNamespace(a=1)
        fields = record_fields(ns)
        fields["a"] = 2
        assert ns.a == 1

    def test_slotted_dataclass(self):
        assert record_fields(FrozenSlots(1, 2)) == {"a": 1, "b": 2}


class TestBuildRecord:

    def test_namedtuple(self):
        template = Pair(1, 2)
        result = build_record(template, {"left": 3, "right": 4})
        assert result == Pair(3, 4)
        assert type(result) is Pair

    def test_namespace_is_fresh(self):
        template = SimpleNamespace(a=1, b=2)
        result = build_record(template, {"a": 10, "b": 2})
        assert result is not template
        assert result.a == 10
        assert template.a == 1

    def test_frozen_dataclass(self):
        template = Frozen(1, 2)
        result = build_record(template, {"a": 5, "b": 2})
        assert result == Frozen(5, 2)
        assert template == Frozen(1, 2)
        with pytest.raises(FrozenInstanceError):
            result.a = 6

    def test_frozen_slotted_dataclass(self):
        template = FrozenSlots(1, 2)
        result = build_record(template, {"a": 1, "b": 7})
        assert result == FrozenSlots(1, 7)
        assert template.b == 2

    def test_non_string_key(self):
        token = object()
        template = SimpleNamespace(a=1)
        vars(template)[token] = "old"
        result = build_record(template, {"a": 1, token: "new"})
        assert vars(result)[token] == "new"
        assert vars(template)[token] == "old"

    def test_added_dataclass_attribute(self):
        template = Config("h")
        template.extra = [1]
        replacement = [1]
        result = build_record(template, {"host": "h", "port": 80, "tags": [], "extra": replacement})
        assert result.extra is replacement
        assert template.extra is not replacement


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
