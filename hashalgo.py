"""Streaming Merkle-Damgard engine shared by SHA-1 and MD4.

A HashAlgorithm owns three pieces of state that are created together on
reset():

  - state:  the chaining words, seeded from `initial_state`
  - buffer: the bytes of the current, incomplete block
  - count:  the 64-bit bit-length counter as [low, high] 32-bit words

Subclasses only supply the constants and `transform(block)`, which mixes one
`block_size` block into `state`. Buffering, length accounting, padding and
digest serialization live here.

Instances are not thread-safe: callers sharing one engine between threads
must serialize absorb()/finalize() themselves. Separate instances are fully
independent.

Known limitation: inputs of 2^64 bits or more wrap the bit counter silently,
exactly as the reference algorithms do.
"""
from words import MASK32, add_bit_length, encode_words

IDLE = 'idle'
ABSORBING = 'absorbing'
FINALIZED = 'finalized'

REPORT_HEX = 'hex'
REPORT_DIGIT = 'digit'


class HashError(Exception):
    """Base class for errors raised by the hashing engine."""


class HashMisuseError(HashError):
    """The engine was driven out of order (absorb after finalize, ...)."""


class HashFileError(HashError):
    """A file could not be fed into the engine."""


class FileOpenError(HashFileError):
    """The file could not be opened for reading."""


class FileReadError(HashFileError):
    """Reading failed after the file was opened."""


class HashAlgorithm:
    """Common interface: name, digest size, reset/absorb/finalize/digest.

    Parameters
    - wipe: zero transient working variables after every transform and
            clear buffer, state and counter once the digest is produced.
    """

    name = None
    short_name = None
    digest_size = None
    block_size = 64
    byteorder = 'big'
    initial_state = ()

    def __init__(self, wipe=True):
        self.wipe = wipe
        self.reset()

    def reset(self):
        """Reseed the state and empty the buffer and bit counter."""
        self.state = list(self.initial_state)
        self.count = [0, 0]
        self.buffer = bytearray(self.block_size)
        self.status = IDLE
        self._digest = None

    @property
    def buffered(self):
        """Number of input bytes waiting in the buffer."""
        return (self.count[0] >> 3) % self.block_size

    def transform(self, block):
        raise NotImplementedError

    def absorb(self, data, length=None):
        """Feed the first `length` bytes of data (all of it by default).

        Chunking never changes the result: absorbing a then b is the same
        as absorbing a + b.
        """
        if self.status == FINALIZED:
            raise HashMisuseError("absorb() after finalize(); call reset() first")
        view = memoryview(data).cast('B')
        if length is None:
            length = len(view)
        elif length < 0 or length > len(view):
            raise ValueError("length must be between 0 and %d, got %d" % (len(view), length))
        if length == 0:
            return
        self.status = ABSORBING
        self._absorb(view[:length])

    def _absorb(self, data):
        bs = self.block_size
        n = len(data)
        j = self.buffered
        self.count[0], self.count[1] = add_bit_length(self.count[0], self.count[1], n)

        if j + n >= bs:
            i = bs - j
            self.buffer[j:] = data[:i]
            self.transform(self.buffer)
            # Whole blocks go straight from the input.
            while i + bs <= n:
                self.transform(data[i:i + bs])
                i += bs
            j = 0
        else:
            i = 0
        self.buffer[j:j + n - i] = data[i:]

    @classmethod
    def _length_bytes(cls, low, high):
        if cls.byteorder == 'big':
            return encode_words((high, low), 'big')
        return encode_words((low, high), 'little')

    @classmethod
    def _pad(cls, buffered, low, high):
        bs = cls.block_size
        zeros = (bs - 9 - buffered) % bs
        return b"\x80" + b"\x00" * zeros + cls._length_bytes(low, high)

    @classmethod
    def padding(cls, message_length):
        """Return the suffix appended to a message of message_length bytes.

        Padding: 0x80 byte, then 0x00 bytes up to block_size - 8 mod
        block_size, then the 64-bit bit length in the algorithm's byte order.
        """
        low, high = add_bit_length(0, 0, message_length)
        return cls._pad(message_length % cls.block_size, low, high)

    def finalize(self):
        """Pad the message, run the final transform(s) and return the digest."""
        if self.status == FINALIZED:
            raise HashMisuseError("finalize() called twice; call reset() first")
        # The padding goes through the regular absorb path.
        self._absorb(self._pad(self.buffered, self.count[0], self.count[1]))
        assert self.buffered == 0

        self._digest = encode_words(self.state, self.byteorder)
        self.status = FINALIZED
        if self.wipe:
            self.buffer[:] = bytes(self.block_size)
            self.state = [0] * len(self.state)
            self.count = [0, 0]
        return self._digest

    def digest(self):
        if self.status != FINALIZED:
            raise HashMisuseError("digest is only available after finalize()")
        return self._digest

    def hexdigest(self):
        return self.digest().hex()

    def report(self, style=REPORT_HEX):
        """Render the digest as space separated bytes.

        REPORT_HEX gives "A9 99 3E ...", REPORT_DIGIT gives "169 153 62 ...".
        """
        digest = self.digest()
        if style == REPORT_HEX:
            return ' '.join('%02X' % b for b in digest)
        elif style == REPORT_DIGIT:
            return ' '.join('%u' % b for b in digest)
        else:
            raise ValueError("Unknown report style %r" % (style,))

    def __repr__(self):
        return '<%s %s state=%s>' % (self.name, self.status,
                                      ' '.join('%08x' % (w & MASK32) for w in self.state))
