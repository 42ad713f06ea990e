#!/usr/bin/env python
# based on https://gist.github.com/josephkern/2897618
"""
A Bloom Filter with two seeded XXHash64 functions
Calculating optimal filter size:
            Where:
            m is: the number of bits in the bitmap
            n is: the number of expected values added to the bitmap
            k is: the number of probes per value
            p ~= (1 - math.exp(-float(k * n) / m)) ** k
Probe positions come from two base hashes (Kirsch-Mitzenmacher):
            position_i = (h0 + i * h1) mod m
http://en.wikipedia.org/wiki/Bloom_filter
"""
# Original Author Dario Clavijo 2017
# GPLv3

import sys
import math
import random
import hashlib
import bitarray
import xxhash

from xxBloomFilter.exceptions import (
    IncompatibleFilterError,
    InvalidRateError,
    InvalidSizeError,
    InvalidStateError,
)

MASK64 = (1 << 64) - 1
DEFAULT_FP_RATE = 1e-6


def compute_bitmap_size(items_count, fp_p):
    """
    Recommended bitmap size in BYTES for items_count items
    and a fp_p rate of false positives, fp_p in ]0.0, 1.0[
    """
    if not isinstance(items_count, int) or isinstance(items_count, bool) or items_count <= 0:
        raise InvalidSizeError("items_count must be a positive integer, got %r" % (items_count,))
    if not (0.0 < fp_p < 1.0):
        raise InvalidRateError("false positive rate must be in ]0.0, 1.0[, got %r" % (fp_p,))
    log2_2 = math.log(2) ** 2
    return int(math.ceil(items_count * math.log(fp_p) / (-8.0 * log2_2)))


def compute_bit_count(items_count, fp_p):
    """Bits allocated by Bloom.new_with_rate(), always whole bytes."""
    return compute_bitmap_size(items_count, fp_p) * 8


def optimal_k_num(bitmap_size, items_count):
    """Probe count for a bitmap of bitmap_size BITS holding items_count items."""
    k = int(math.ceil(float(bitmap_size) / items_count * math.log(2)))
    return max(k, 1)


def item_bytes(item):
    """
    Canonical bytes fed to the hash functions.
    Equal items must serialize to equal bytes.
    """
    if isinstance(item, (bytes, bytearray, memoryview)):
        return bytes(item)
    if isinstance(item, str):
        return item.encode("utf8")
    if isinstance(item, int):
        if 0 <= item <= MASK64:
            return int(item).to_bytes(8, "little")
        length = (item.bit_length() + 8) // 8
        return b"\x00i" + item.to_bytes(length, "little", signed=True)
    if hasattr(item, "__bytes__"):
        return bytes(item)
    raise TypeError("unhashable bloom item of type %s" % type(item).__name__)


def _check_seeds(seeds):
    if len(seeds) != 2:
        raise InvalidStateError("expected two seeds, got %d" % len(seeds))
    for seed in seeds:
        if not isinstance(seed, int) or not 0 <= seed <= MASK64:
            raise InvalidStateError("seed %r is not an unsigned 64-bit integer" % (seed,))
    return (int(seeds[0]), int(seeds[1]))


class Bloom(object):
    def __init__(self, bitmap_size, items_count, rng=None, seeds=None, verbose=False):
        """
        Initializes a Bloom() object:
        Expects:
            bitmap_size (in bytes): 4 * 1024 for a 4KB bitmap
            items_count (int): estimation of the maximum number of items to store
            rng: source of the hash seeds, anything with getrandbits()
            seeds (tuple): two 64-bit seeds, used instead of rng when given
            verbose (bool): write a summary line to stderr
        """
        for name, value in (("bitmap_size", bitmap_size), ("items_count", items_count)):
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise InvalidSizeError("%s must be a positive integer, got %r" % (name, value))

        self.bitmap_size = bitmap_size * 8  # Bits in the bitmap
        self.k = optimal_k_num(self.bitmap_size, items_count)
        self._bitmap = bitarray.bitarray(self.bitmap_size, endian="big")
        self._bitmap.setall(0)

        if seeds is None:
            if rng is None:
                rng = random.SystemRandom()
            seeds = (rng.getrandbits(64), rng.getrandbits(64))
        self._seeds = _check_seeds(seeds)

        self.hits = 0
        self.queries = 0

        if verbose:
            sys.stderr.write(
                f"BLOOM: bits: {self.bitmap_size}, k: {self.k}, items: {items_count}, "
                f"size:{(self.bitmap_size // 8) / (1024**2):.2f}MB\n"
            )

    @classmethod
    def new_with_rate(cls, items_count, fp_p, rng=None, seeds=None, verbose=False):
        """
        Sizes the bitmap for items_count items at a fp_p rate of false positives.
        The size is rounded up to whole bytes.
        """
        bitmap_size = compute_bitmap_size(items_count, fp_p)
        return cls(bitmap_size, items_count, rng=rng, seeds=seeds, verbose=verbose)

    @classmethod
    def from_existing(cls, bitmap, bitmap_size, k, seeds):
        """
        Rebuilds a filter from the state of an existing one.
        bitmap is packed most significant bit first (or is a bitarray,
        as returned by bitmap()); only the first bitmap_size bits are kept.
        """
        if isinstance(bitmap, bitarray.bitarray):
            bitmap = bitarray.bitarray(bitmap, endian="big").tobytes()
        if not isinstance(bitmap_size, int) or bitmap_size <= 0:
            raise InvalidStateError("bitmap_size must be a positive number of bits, got %r" % (bitmap_size,))
        if not isinstance(k, int) or k <= 0:
            raise InvalidStateError("k must be a positive integer, got %r" % (k,))
        needed = (bitmap_size + 7) // 8
        if len(bitmap) < needed:
            raise InvalidStateError(
                "bitmap holds %d bytes, %d needed for %d bits" % (len(bitmap), needed, bitmap_size)
            )

        self = cls.__new__(cls)
        self.bitmap_size = bitmap_size
        self.k = k
        self._bitmap = bitarray.bitarray(endian="big")
        self._bitmap.frombytes(bytes(bitmap[:needed]))
        del self._bitmap[bitmap_size:]
        if len(self._bitmap) != bitmap_size:
            raise InvalidStateError("restored %d bits, %d expected" % (len(self._bitmap), bitmap_size))
        self._seeds = _check_seeds(tuple(seeds))
        self.hits = 0
        self.queries = 0
        return self

    @classmethod
    def from_state(cls, state):
        return cls.from_existing(state.bitmap, state.bitmap_size, state.k, (state.seed_a, state.seed_b))

    @classmethod
    def from_existing_struct(cls, other):
        """Independent deep copy of another filter."""
        return cls.from_state(other.export_state())

    def export_state(self):
        from xxBloomFilter.state import export_state

        return export_state(self)

    def hashes(self, item):
        data = item_bytes(item)
        seed_a, seed_b = self._seeds
        return (
            xxhash.xxh64_intdigest(data, seed=seed_a),
            xxhash.xxh64_intdigest(data, seed=seed_b),
        )

    def bit_offsets(self, item):
        """Yields the k probe positions of item."""
        h0, h1 = self.hashes(item)
        m = self.bitmap_size
        for i_k in range(self.k):
            # u64 wraparound before the modulo
            yield ((h0 + i_k * h1) & MASK64) % m

    def add(self, item):
        """Record the presence of an item."""
        for offset in self.bit_offsets(item):
            self._bitmap[offset] = True

    def check(self, item):
        """
        Check if an item is present in the set.
        There can be false positives, but no false negatives.
        """
        self.queries += 1
        for offset in self.bit_offsets(item):
            if not self._bitmap[offset]:
                return False
        self.hits += 1
        return True

    def __contains__(self, item):
        return self.check(item)

    def __getitem__(self, item):
        return self.check(item)

    def check_and_add(self, item):
        """
        Record the presence of an item in the set,
        and return the previous state of this item.
        Very useful for caches, where we want to know if an element was already seen.
        """
        found = True
        for offset in self.bit_offsets(item):
            if not self._bitmap[offset]:
                found = False
                self._bitmap[offset] = True
        return found

    update = check_and_add

    def clear(self):
        """Clear all of the bits in the filter, removing all keys from the set"""
        self._bitmap.setall(0)
        self.hits = 0
        self.queries = 0

    def bitmap(self):
        """Return a copy of the bitmap"""
        return self._bitmap.copy()

    def number_of_bits(self):
        return self.bitmap_size

    def number_of_hash_functions(self):
        """Return the number of probes used for `check` and `add`"""
        return self.k

    def seeds(self):
        return self._seeds

    def __len__(self):
        return self.bitmap_size

    def __eq__(self, other):
        if not isinstance(other, Bloom):
            return NotImplemented
        return (
            self.bitmap_size == other.bitmap_size
            and self.k == other.k
            and self._seeds == other._seeds
            and self._bitmap == other._bitmap
        )

    __hash__ = None

    def __copy__(self):
        return type(self).from_existing_struct(self)

    def __deepcopy__(self, memo):
        return type(self).from_existing_struct(self)

    def conformable(self, other):
        return (
            self.bitmap_size == other.bitmap_size
            and self.k == other.k
            and self._seeds == other._seeds
        )

    def union(self, other):
        """
        Merges another filter built with the same size, k and seeds
        into this one.
        """
        if not self.conformable(other):
            raise IncompatibleFilterError(
                "filters are not conformable: %d/%d bits, k %d/%d"
                % (self.bitmap_size, other.bitmap_size, self.k, other.k)
            )
        self._bitmap |= other._bitmap
        return self

    def __ior__(self, other):
        if not isinstance(other, Bloom):
            return NotImplemented
        return self.union(other)

    def __or__(self, other):
        if not isinstance(other, Bloom):
            return NotImplemented
        return type(self).from_existing_struct(self).union(other)

    def bits_set(self):
        return self._bitmap.count(1)

    def fill_ratio(self):
        return float(self.bits_set()) / self.bitmap_size

    def false_positive_rate(self, items_count=None):
        """
        Expected false positive rate after items_count insertions,
        or estimated from the current fill ratio when items_count is None.
        """
        if items_count is None:
            return self.fill_ratio() ** self.k
        return (1 - math.exp(-float(self.k * items_count) / self.bitmap_size)) ** self.k

    def hashid(self):
        return hashlib.blake2b(self._bitmap.tobytes(), digest_size=4).hexdigest()

    def stat(self):
        bitset = self.bits_set()
        sys.stderr.write(
            "BLOOM: Bits set: %d of %d" % (bitset, self.bitmap_size)
            + " %3.8f" % (self.fill_ratio() * 100)
            + "%\n"
        )
        sys.stderr.write(
            "BLOOM: Hits %d over Querys: %d, hit_ratio: %3.8f"
            % (self.hits, self.queries, (float(self.hits) / self.queries * 100) if self.queries > 0 else 0)
            + "%\n"
        )
        sys.stderr.write("BLOOM: Estimated fp rate: %1.8f\n" % self.false_positive_rate())

    def info(self):
        sys.stderr.write(
            f"BLOOM: bits: {self.bitmap_size}, k: {self.k}, "
            f"seeds: {self._seeds[0]:016x}:{self._seeds[1]:016x}, "
            f"size:{((self.bitmap_size + 7) // 8) / (1024**2):.2f}MB\n"
        )
        sys.stderr.write("BLOOM: HASHID: %s\n" % self.hashid())
        self.stat()

    def __repr__(self):
        return "Bloom(bits=%d, k=%d, bits_set=%d)" % (self.bitmap_size, self.k, self.bits_set())
