#!/usr/bin/env python3
"""
Demo: build a tensor, index it both ways, slice it and print it.

Run with --debug to see the slice read/write log records.
"""

import logging
import sys

from tensorplus import Range, Single, TensorStore
from tensorplus.csv_format import parse_csv_string, to_csv
from tensorplus.log import setup_logging


def main():
    setup_logging(logging.DEBUG if "--debug" in sys.argv else logging.INFO)

    print("=" * 80)
    print("TENSOR SLICING DEMO")
    print("=" * 80)

    t = TensorStore([2, 3, 2], range(1, 13), name="T")
    print(t)

    print("\nLinear t[4]       ->", t[4])
    print("Coordinates t[1, 2, 0] ->", t[1, 2, 0])

    s = t.get_slice([Range(0, 1), Single(1), Range(0, 1)])
    print("\nSlice:")
    print(s)

    t.set_slice([Range(0, 1), Single(1), Range(0, 1)], TensorStore.filled(s.shape, 0))
    print("\nAfter zeroing the slice:")
    print(t)

    csv_text = to_csv(t)
    print("\nCSV:")
    print(csv_text)

    restored = parse_csv_string(csv_text, converter=int)
    print("\nCSV round trip equal:", restored == t)
    print("=" * 80)


if __name__ == "__main__":
    main()
