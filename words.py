"""32-bit word helpers shared by the MD-family hashes.

Words are plain Python ints kept in 0 <= x < 2^32. Conversions between
words and bytes go through struct with an explicit byte order, so nothing
here depends on the host's endianness.
"""
import struct

MASK32 = 0xffffffff

_ORDER = {'big': '>', 'little': '<'}


def rotl(x, n):
    """Rotate the 32-bit word x left by n bits."""
    x &= MASK32
    return ((x << n) | (x >> (32 - n))) & MASK32


def add32(*words):
    """Sum words modulo 2^32."""
    return sum(words) & MASK32


def decode_words(data, byteorder, offset=0, count=16):
    """Read `count` 32-bit words from data starting at offset."""
    return list(struct.unpack_from(_ORDER[byteorder] + '%dI' % count, data, offset))


def encode_words(words, byteorder):
    """Serialize 32-bit words into 4 bytes each."""
    return struct.pack(_ORDER[byteorder] + '%dI' % len(words), *words)


def add_bit_length(low, high, nbytes):
    """Add nbytes * 8 bits to a (low, high) 64-bit bit counter.

    The low word carries exactly one unit into the high word when it wraps,
    and the bits lost when multiplying nbytes by 8 (nbytes >> 29) go to the
    high word as well. The high word wraps silently at 2^32, so the counter
    as a whole is taken modulo 2^64.
    """
    bits = (nbytes << 3) & MASK32
    low = (low + bits) & MASK32
    if low < bits:
        high += 1
    high = (high + (nbytes >> 29)) & MASK32
    return low, high
