#!/usr/bin/env python
# Author Dario Clavijo 2017
# GPlv3
"""
Builds a filter from a text file, one item per line:
    python -m xxBloomFilter.mkbloom <input.txt> <output.blf> [fp_rate]
"""

import sys
from tqdm import tqdm

from xxBloomFilter.bloom import DEFAULT_FP_RATE, Bloom
from xxBloomFilter.exceptions import BloomError
from xxBloomFilter.lib.timing import timing

USAGE = "usage: mkbloom <input.txt> <output.blf> [fp_rate]\n"


def read_items(filename):
    with open(filename, 'r', encoding='utf8') as fp:
        for line in fp:
            line = line.rstrip('\r\n')
            if line:
                yield line


@timing
def build(input_file, output_file, fp_rate=DEFAULT_FP_RATE):
    items_count = sum(1 for _ in read_items(input_file))
    bf = Bloom.new_with_rate(max(items_count, 1), fp_rate, verbose=True)
    for item in tqdm(read_items(input_file), total=items_count, unit='items', file=sys.stderr):
        bf.add(item)
    with open(output_file, 'wb') as fp:
        fp.write(bf.export_state().to_bytes(compress=True))
    return bf


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) not in (2, 3):
        sys.stderr.write(USAGE)
        return 1
    try:
        fp_rate = float(argv[2]) if len(argv) == 3 else DEFAULT_FP_RATE
        bf = build(argv[0], argv[1], fp_rate)
    except (OSError, BloomError, ValueError) as e:
        sys.stderr.write("BLOOM: %s\n" % e)
        return 1
    bf.info()
    return 0


if __name__ == "__main__":
    sys.exit(main())
