"""
Benchmark: structreuse vs plain deep comparison.

Structural reuse does more than answer "did anything change?": it also
rebuilds the value so that unchanged parts keep their old references.
This script measures what that costs compared to:
    1. ``==`` — Python's built-in deep equality
    2. deepdiff — popular structural diff library (if installed)

and how many references survive a small change.
"""

import copy
import json
import logging
import os
import sys
import time

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from structreuse import reuse

logger = logging.getLogger("benchmark")


# ═══════════════════════════════════════════════════════════════════
#  TEST DATA
# ═══════════════════════════════════════════════════════════════════

CONFIG = {
    "server": {
        "host": "0.0.0.0",
        "port": 443,
        "tls": True,
        "workers": 4,
    },
    "database": {
        "host": "db.internal",
        "port": 5432,
        "name": "production",
        "pool_size": 10,
        "ssl": True,
    },
    "logging": {
        "level": "WARN",
        "format": "json",
        "outputs": ["stdout", "file"],
    },
    "cache": {
        "backend": "redis",
        "ttl": 300,
        "max_size": 10000,
    },
}


def make_state(n):
    """A reducer-style state tree with ``n`` todo items."""
    return {
        "user": {"name": "Ada", "roles": ["admin", "editor"]},
        "todos": [
            {"id": i, "title": f"task {i}", "done": i % 3 == 0, "tags": ["a", "b"]}
            for i in range(n)
        ],
        "filter": "all",
    }


def _try_import(name):
    """Safely attempt to import an optional dependency by name."""
    import importlib
    try:
        return importlib.import_module(name)
    except ImportError:
        return None


def count_shared(result, old):
    """Number of containers in ``result`` that are reused from ``old``."""
    if result is old:
        return _count_containers(old)
    shared = 0
    if isinstance(result, dict) and isinstance(old, dict):
        for key, value in result.items():
            if key in old:
                shared += count_shared(value, old[key])
    elif isinstance(result, list) and isinstance(old, list):
        for value, prev in zip(result, old):
            shared += count_shared(value, prev)
    return shared


def _count_containers(value):
    if isinstance(value, dict):
        return 1 + sum(_count_containers(v) for v in value.values())
    if isinstance(value, list):
        return 1 + sum(_count_containers(v) for v in value)
    return 0


# ═══════════════════════════════════════════════════════════════════
#  BENCHMARKS
# ═══════════════════════════════════════════════════════════════════

def benchmark_unchanged_config():
    """Reparse an unchanged config and reuse it."""
    print("=" * 70)
    print("  §1  UNCHANGED CONFIG")
    print("=" * 70)
    print()

    text = json.dumps(CONFIG)
    old = json.loads(text)
    updated = json.loads(text)

    t0 = time.perf_counter()
    result = reuse(updated, old)
    dt = time.perf_counter() - t0

    mark = "✓" if result is old else "✗"
    print(f"  {mark} reuse(reparsed, old) is old  [{dt*1000:.3f}ms]")
    print()


def benchmark_single_change():
    """One leaf changes deep in a large tree."""
    print("=" * 70)
    print("  §2  SINGLE LEAF CHANGE")
    print("=" * 70)
    print()

    for n in [10, 100, 1000, 5000]:
        old = make_state(n)
        updated = copy.deepcopy(old)
        updated["todos"][n // 2]["done"] = not updated["todos"][n // 2]["done"]

        t0 = time.perf_counter()
        result = reuse(updated, old)
        dt = time.perf_counter() - t0

        shared = count_shared(result, old)
        total = _count_containers(old)
        print(f"  todos={n:>5}: shared {shared:>6}/{total:<6} containers  "
              f"time={dt*1000:>8.2f}ms")

    print()


def benchmark_vs_equality():
    """Compare against == and deepdiff (if available)."""
    print("=" * 70)
    print("  §3  COMPARISON WITH DEEP EQUALITY")
    print("=" * 70)
    print()

    old = make_state(1000)
    updated = copy.deepcopy(old)

    t0 = time.perf_counter()
    equal = updated == old
    eq_time = time.perf_counter() - t0

    t0 = time.perf_counter()
    result = reuse(updated, old)
    reuse_time = time.perf_counter() - t0

    print(f"  ==:            equal={equal}  time={eq_time*1000:.3f}ms")
    print(f"  structreuse:   is old={result is old}  time={reuse_time*1000:.3f}ms")

    deepdiff = _try_import("deepdiff")
    if deepdiff:
        t0 = time.perf_counter()
        dd_result = deepdiff.DeepDiff(old, updated)
        dd_time = time.perf_counter() - t0
        print(f"  deepdiff:      changes={len(dd_result)}  time={dd_time*1000:.3f}ms")
    else:
        print(f"  deepdiff:      NOT INSTALLED (pip install deepdiff)")
    print()

    print("  == and deepdiff answer whether something changed.")
    print("  reuse answers it AND hands back a value whose references say so.")
    print()


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    logger.info("running structreuse benchmarks")

    print()
    print("╔══════════════════════════════════════════════════════════════════════╗")
    print("║          STRUCTURAL REUSE — BENCHMARK SUITE                         ║")
    print("║          structreuse v0.1.0                                         ║")
    print("╚══════════════════════════════════════════════════════════════════════╝")
    print()

    benchmark_unchanged_config()
    benchmark_single_change()
    benchmark_vs_equality()


if __name__ == "__main__":
    main()
