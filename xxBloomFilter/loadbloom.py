"""
Queries a filter written by mkbloom:
    python -m xxBloomFilter.loadbloom <filter.blf> [item ...]
Items are read from stdin, one per line, when none are given.
"""

import sys

from xxBloomFilter.bloom import Bloom
from xxBloomFilter.exceptions import InvalidStateError
from xxBloomFilter.lib.timing import timing
from xxBloomFilter.state import BloomState


def load(filename):
    with open(filename, 'rb') as fp:
        return Bloom.from_state(BloomState.from_bytes(fp.read()))


@timing
def query(bf, items, out):
    for item in items:
        out.write("%s\t%s\n" % (item, bf.check(item)))


def main(argv=None, stdin=None, stdout=None):
    argv = sys.argv[1:] if argv is None else argv
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    if not argv:
        sys.stderr.write("usage: loadbloom <filter.blf> [item ...]\n")
        return 1
    try:
        bf = load(argv[0])
    except (OSError, InvalidStateError) as e:
        sys.stderr.write("BLOOM: Error loading filter: %s\n" % e)
        return 1
    items = argv[1:] or (line.rstrip('\r\n') for line in stdin)
    query(bf, items, stdout)
    bf.stat()
    return 0


if __name__ == "__main__":
    sys.exit(main())
