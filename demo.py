"""
Demonstration: two structurally equal records, one reused against the other.
"""

import datetime
import logging
import os
import sys
from types import SimpleNamespace

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from structreuse import reuse


# Stands in for a non-string field identifier
TAG = object()


def make_record():
    record = SimpleNamespace(
        foo=42,
        bar=[1, 6],
        z=datetime.datetime(2024, 1, 1, 12, 0, 0),
    )
    vars(record)[TAG] = 8
    return record


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    x = make_record()
    y = make_record()

    yp = reuse(y, x)

    print(yp)
    print(yp is x)  # True


if __name__ == "__main__":
    main()
