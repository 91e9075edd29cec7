"""
Tests for structreuse.stable — Stable holder and reuse_results decorator.
"""

import logging
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from structreuse.stable import Stable, reuse_results


class Token:
    def __init__(self, name):
        self.name = name


class TestStable:

    def test_first_update_is_stored(self):
        holder = Stable()
        assert holder.empty
        assert holder.value is None
        value = {"a": [1]}
        assert holder.update(value) is value
        assert holder.changed
        assert not holder.empty

    def test_none_is_a_held_value(self):
        holder = Stable(None)
        assert not holder.empty
        assert holder.value is None
        assert holder.update(None) is None
        assert not holder.changed

    def test_equal_update_keeps_reference(self):
        first = {"a": [1]}
        holder = Stable(first)
        assert holder.update({"a": [1]}) is first
        assert not holder.changed
        assert holder.value is first

    def test_changed_update_reuses_children(self):
        first = {"a": [1], "b": [2]}
        holder = Stable(first)
        result = holder.update({"a": [1], "b": [3]})
        assert holder.changed
        assert result is holder.value
        assert result["a"] is first["a"]

    def test_equal_scalars_are_not_changes(self):
        holder = Stable("".join(["x"] * 50))
        kept = holder.value
        assert holder.update("".join(["x"] * 50)) is kept
        assert not holder.changed

    def test_fallback_is_used(self):
        first = Token("a")
        holder = Stable(first, fallback=lambda u, o: o if u.name == o.name else u)
        assert holder.update(Token("a")) is first
        assert not holder.changed
        replacement = Token("b")
        assert holder.update(replacement) is replacement
        assert holder.changed

    def test_reset(self):
        holder = Stable([1])
        holder.reset()
        assert holder.empty
        value = [1]
        assert holder.update(value) is value

    def test_repr(self):
        assert repr(Stable()) == "Stable(<empty>)"
        assert repr(Stable([1])) == "Stable([1])"

    def test_replacement_is_logged(self, caplog):
        holder = Stable([1])
        with caplog.at_level(logging.DEBUG, logger="structreuse.stable"):
            holder.update([2])
        assert "replaced" in caplog.text


class TestReuseResults:

    def test_bare_decorator(self):
        calls = []

        @reuse_results
        def rows(n):
            calls.append(n)
            return [{"i": i} for i in range(n)]

        first = rows(3)
        second = rows(3)
        assert second is first
        assert calls == [3, 3]

    def test_changed_result_shares_prefix(self):
        @reuse_results
        def rows(n):
            return [{"i": i} for i in range(n)]

        first = rows(2)
        second = rows(3)
        assert second is not first
        assert second[0] is first[0]
        assert second[1] is first[1]

    def test_with_fallback(self):
        @reuse_results(fallback=lambda u, o: o if u.name == o.name else u)
        def make(name):
            return Token(name)

        first = make("a")
        assert make("a") is first
        assert make("b") is not first

    def test_reset_and_metadata(self):
        @reuse_results
        def build():
            """Build a thing."""
            return [1]

        first = build()
        build.reset()
        assert build() is not first
        assert build.__name__ == "build"
        assert build.__doc__ == "Build a thing."
        assert isinstance(build.stable, Stable)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
