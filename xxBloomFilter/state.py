"""
Flat, portable snapshot of a Bloom filter.

A BloomState holds everything needed to rebuild an equivalent filter:
the bitmap packed most significant bit first (zero padded to a whole
byte), the number of bits, the number of probes and the two hash seeds.
Storing or sending the snapshot is up to the caller; to_bytes() and
from_bytes() give one fixed-width encoding for it:

    magic(4) version(1) flags(1) m(8) k(8) seed_a(8) seed_b(8) bitmap

all integers big-endian, bitmap zlib-compressed when flags & 1.
"""

import struct
import zlib
from dataclasses import dataclass

from xxBloomFilter.bloom import Bloom
from xxBloomFilter.exceptions import InvalidStateError

MAGIC = b"XXBF"
VERSION = 1
FLAG_ZLIB = 0x01
HDR_FMT = ">4sBBQQQQ"
HDR_SIZE = struct.calcsize(HDR_FMT)


@dataclass(frozen=True)
class BloomState:
    bitmap: bytes
    bitmap_size: int
    k: int
    seed_a: int
    seed_b: int

    def to_bytes(self, compress=False):
        payload = zlib.compress(self.bitmap) if compress else self.bitmap
        flags = FLAG_ZLIB if compress else 0
        try:
            hdr = struct.pack(HDR_FMT, MAGIC, VERSION, flags, self.bitmap_size, self.k, self.seed_a, self.seed_b)
        except struct.error as e:
            raise InvalidStateError("state does not fit the 64-bit header: %s" % e) from e
        return hdr + payload

    @classmethod
    def from_bytes(cls, data):
        data = bytes(data)
        if len(data) < HDR_SIZE:
            raise InvalidStateError("truncated header: %d of %d bytes" % (len(data), HDR_SIZE))
        magic, version, flags, bitmap_size, k, seed_a, seed_b = struct.unpack(HDR_FMT, data[:HDR_SIZE])
        if magic != MAGIC:
            raise InvalidStateError("invalid bloom header %r" % magic)
        if version != VERSION:
            raise InvalidStateError("unsupported state version %d" % version)
        if flags & ~FLAG_ZLIB:
            raise InvalidStateError("unknown state flags 0x%02x" % flags)

        payload = data[HDR_SIZE:]
        if flags & FLAG_ZLIB:
            try:
                payload = zlib.decompress(payload)
            except zlib.error as e:
                raise InvalidStateError("corrupt compressed bitmap: %s" % e) from e

        needed = (bitmap_size + 7) // 8
        if len(payload) < needed:
            raise InvalidStateError("bitmap holds %d bytes, %d needed" % (len(payload), needed))
        return cls(payload[:needed], bitmap_size, k, seed_a, seed_b)


def export_state(bloom):
    """Snapshot of a live filter; later changes to the filter do not show in it."""
    seed_a, seed_b = bloom.seeds()
    return BloomState(
        bitmap=bloom.bitmap().tobytes(),
        bitmap_size=bloom.number_of_bits(),
        k=bloom.number_of_hash_functions(),
        seed_a=seed_a,
        seed_b=seed_b,
    )


def import_state(state):
    return Bloom.from_state(state)


def clone(bloom):
    return import_state(export_state(bloom))
