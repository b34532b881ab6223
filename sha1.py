"""SHA-1 compression function on top of the streaming engine.

The transform runs 80 steps in four rounds of 20, each round with its own
boolean function and additive constant.

Test vectors (FIPS PUB 180-1):

    SHA1("abc") =
        A9993E36 4706816A BA3E2571 7850C26C 9CD0D89D
    SHA1("abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq") =
        84983E44 1C3BD26E BAAE4AA1 F95129E5 E54670F1
    SHA1(a million repetitions of "a") =
        34AA973C D4C4DAA4 F61EEB2B DBAD2731 6534016F
"""
from hashalgo import HashAlgorithm
from words import add32, decode_words, rotl


# The five working variables rotate roles every step: at step i,
# (v, w, x, y, z) are the variables at offsets -i .. 4 - i.
_ROLES = tuple(tuple((k - i) % 5 for k in range(5)) for i in range(80))


def schedule_word(W, i):
    """Expand schedule word i >= 16 in the circular 16-word workspace W.

    W[i & 15] still holds word i - 16 on entry and holds word i on return.
    """
    W[i & 15] = rotl(W[(i + 13) & 15] ^ W[(i + 8) & 15] ^ W[(i + 2) & 15] ^ W[i & 15], 1)
    return W[i & 15]


def expand_schedule(block, count=80):
    """Return the first `count` message schedule words of a 64-byte block."""
    W = decode_words(block, 'big')
    schedule = W[:min(count, 16)]
    for i in range(16, count):
        schedule.append(schedule_word(W, i))
    return schedule


class SHA1(HashAlgorithm):

    name = 'SHA1'
    short_name = 'sha1'
    digest_size = 20
    byteorder = 'big'
    initial_state = (0x67452301, 0xefcdab89, 0x98badcfe, 0x10325476, 0xc3d2e1f0)

    # Additive constant of each 20-step round
    K_table = (0x5a827999, 0x6ed9eba1, 0x8f1bbcdc, 0xca62c1d6)

    @staticmethod
    def K(i):
        """Return the additive constant for step i (0 <= i < 80)."""
        return SHA1.K_table[i // 20]

    @staticmethod
    def F(w, x, y, i):
        """SHA-1 non-linear function selected by step index i.

        Steps  0-19: choose    ((w & (x ^ y)) ^ y)
        Steps 20-39: parity    w ^ x ^ y
        Steps 40-59: majority  (((w | x) & y) | (w & x))
        Steps 60-79: parity    w ^ x ^ y
        """
        if i < 20:
            return (w & (x ^ y)) ^ y
        elif i < 40:
            return w ^ x ^ y
        elif i < 60:
            return ((w | x) & y) | (w & x)
        elif i < 80:
            return w ^ x ^ y
        else:
            raise ValueError("Invalid step index")

    @staticmethod
    def step(v, w, x, y, z, word, i):
        """One SHA-1 step; returns the new (z, w).

        z += F(w, x, y) + word + K(i) + ROL(v, 5); w = ROL(w, 30)
        """
        z = add32(z, SHA1.F(w, x, y, i), word, SHA1.K(i), rotl(v, 5))
        return z, rotl(w, 30)

    def transform(self, block):
        """Mix one 64-byte block into the state."""
        assert len(block) == 64
        W = decode_words(block, 'big')
        s = list(self.state)

        for i in range(80):
            word = W[i] if i < 16 else schedule_word(W, i)
            v, w, x, y, z = _ROLES[i]
            s[z], s[w] = SHA1.step(s[v], s[w], s[x], s[y], s[z], word, i)

        # 80 is a multiple of 5, so s is back in a, b, c, d, e order.
        self.state = [add32(h, t) for h, t in zip(self.state, s)]

        if self.wipe:
            W[:] = [0] * 16
            s[:] = [0] * 5
