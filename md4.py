"""MD4 message digest (RFC 1320) on top of the streaming engine.

Derived from the RSA Data Security, Inc. MD4 Message-Digest Algorithm.
"""
from hashalgo import HashAlgorithm
from words import MASK32, decode_words, rotl


class MD4(HashAlgorithm):

    name = 'MD4'
    short_name = 'md4'
    digest_size = 16
    byteorder = 'little'
    initial_state = (0x67452301, 0xefcdab89, 0x98badcfe, 0x10325476)

    # Per-round left-rotation amounts, additive constants and word order
    S_table = ((3, 7, 11, 19),
               (3, 5, 9, 13),
               (3, 9, 11, 15))
    K_table = (0, 0x5a827999, 0x6ed9eba1)
    X_order = (tuple(range(16)),
               (0, 4, 8, 12, 1, 5, 9, 13, 2, 6, 10, 14, 3, 7, 11, 15),
               (0, 8, 4, 12, 2, 10, 6, 14, 1, 9, 5, 13, 3, 11, 7, 15))

    @staticmethod
    def F(x, y, z, r):
        if r == 0:
            return (x & y) | (~x & z)
        elif r == 1:
            return (x & y) | (x & z) | (y & z)
        elif r == 2:
            return x ^ y ^ z
        else:
            raise ValueError("Invalid round index")

    def transform(self, block):
        assert len(block) == 64
        X = decode_words(block, 'little')
        h = list(self.state)

        for r in range(3):
            s = MD4.S_table[r]
            for j in range(16):
                # a, d, c, b take turns as the updated word
                i = -j % 4
                t = h[i] + MD4.F(h[(i + 1) % 4], h[(i + 2) % 4], h[(i + 3) % 4], r) \
                    + X[MD4.X_order[r][j]] + MD4.K_table[r]
                h[i] = rotl(t, s[j % 4])

        self.state = [(a + b) & MASK32 for a, b in zip(self.state, h)]

        if self.wipe:
            X[:] = [0] * 16
            h[:] = [0] * 4
