"""SHA-256 compressor.

Consumes a padded message in 64-byte blocks and folds each block into the
8-word running hash state, following FIPS 180-4 section 6.2.2:

    W[0..15]  = big-endian words of the block
    W[16..63] = W[t-16] + s0(W[t-15]) + W[t-7] + s1(W[t-2])

    for each of the 64 rounds:
        S1    = (e >>> 6) ^ (e >>> 11) ^ (e >>> 25)
        ch    = (e & f) ^ (~e & g)
        temp1 = h + S1 + ch + k[i] + w[i]

        S0    = (a >>> 2) ^ (a >>> 13) ^ (a >>> 22)
        maj   = (a & b) ^ (a & c) ^ (b & c)
        temp2 = S0 + maj

        h, g, f, e, d, c, b, a = g, f, e, d + temp1, c, b, a, temp1 + temp2

    H[j] += working[j]

All additions are performed modulo 2**32.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple, Union


MASK32 = 0xFFFFFFFF
BLOCK_SIZE = 64
ROUNDS = 64

State = Tuple[int, int, int, int, int, int, int, int]

# First 32 bits of the fractional parts of the cube roots of the first 64
# primes (FIPS 180-4, 4.2.2).
K_VALUES: Tuple[int, ...] = (
    0x428A2F98, 0x71374491, 0xB5C0FBCF, 0xE9B5DBA5, 0x3956C25B, 0x59F111F1, 0x923F82A4, 0xAB1C5ED5,
    0xD807AA98, 0x12835B01, 0x243185BE, 0x550C7DC3, 0x72BE5D74, 0x80DEB1FE, 0x9BDC06A7, 0xC19BF174,
    0xE49B69C1, 0xEFBE4786, 0x0FC19DC6, 0x240CA1CC, 0x2DE92C6F, 0x4A7484AA, 0x5CB0A9DC, 0x76F988DA,
    0x983E5152, 0xA831C66D, 0xB00327C8, 0xBF597FC7, 0xC6E00BF3, 0xD5A79147, 0x06CA6351, 0x14292967,
    0x27B70A85, 0x2E1B2138, 0x4D2C6DFC, 0x53380D13, 0x650A7354, 0x766A0ABB, 0x81C2C92E, 0x92722C85,
    0xA2BFE8A1, 0xA81A664B, 0xC24B8B70, 0xC76C51A3, 0xD192E819, 0xD6990624, 0xF40E3585, 0x106AA070,
    0x19A4C116, 0x1E376C08, 0x2748774C, 0x34B0BCB5, 0x391C0CB3, 0x4ED8AA4A, 0x5B9CCA4F, 0x682E6FF3,
    0x748F82EE, 0x78A5636F, 0x84C87814, 0x8CC70208, 0x90BEFFFA, 0xA4506CEB, 0xBEF9A3F7, 0xC67178F2,
)

# Initial hash values (first 32 bits of the fractional parts of the
# square roots of the first 8 primes 2..19), FIPS 180-4 5.3.3.
H0: State = (
    0x6A09E667,
    0xBB67AE85,
    0x3C6EF372,
    0xA54FF53A,
    0x510E527F,
    0x9B05688C,
    0x1F83D9AB,
    0x5BE0CD19,
)


class InvalidInputLength(ValueError):
    """Raised when a buffer handed to the compressor is not block aligned."""

    def __init__(self, length: int, block_size: int = BLOCK_SIZE):
        self.length = length
        self.block_size = block_size
        super().__init__(
            f"Padded message length must be a multiple of {block_size} bytes, got {length}"
        )


def _rotr(x: int, n: int) -> int:
    """Right-rotate a 32-bit word `x` by `n` bits."""
    x &= MASK32
    return ((x >> n) | (x << (32 - n))) & MASK32


def _shr(x: int, n: int) -> int:
    """Right-shift a 32-bit word `x` by `n` bits."""
    x &= MASK32
    return x >> n


def ch(x: int, y: int, z: int) -> int:
    """Choose: bits of `y` where `x` is set, bits of `z` elsewhere."""
    return ((x & y) ^ (~x & z)) & MASK32


def maj(x: int, y: int, z: int) -> int:
    """Majority of each bit position across `x`, `y`, `z`."""
    return (x & y) ^ (x & z) ^ (y & z)


def big_sigma0(x: int) -> int:
    return _rotr(x, 2) ^ _rotr(x, 13) ^ _rotr(x, 22)


def big_sigma1(x: int) -> int:
    return _rotr(x, 6) ^ _rotr(x, 11) ^ _rotr(x, 25)


def small_sigma0(x: int) -> int:
    """SHA-256 function σ0 used in the message schedule."""
    return (_rotr(x, 7) ^ _rotr(x, 18) ^ _shr(x, 3)) & MASK32


def small_sigma1(x: int) -> int:
    """SHA-256 function σ1 used in the message schedule."""
    return (_rotr(x, 17) ^ _rotr(x, 19) ^ _shr(x, 10)) & MASK32


def compression(
    a: int,
    b: int,
    c: int,
    d: int,
    e: int,
    f: int,
    g: int,
    h: int,
    w: int,
    k: int,
) -> State:
    """Perform one SHA-256 compression round.

    Parameters
    ----------
    a, b, c, d, e, f, g, h : int
        32-bit words representing the current working state.
    w : int
        Message schedule word `w[i]`.
    k : int
        Round constant `k[i]`.

    Returns
    -------
    (a_new, b_new, c_new, d_new, e_new, f_new, g_new, h_new) : tuple[int, ...]
        Updated working state after one round, all reduced modulo 2**32.
    """
    a &= MASK32
    b &= MASK32
    c &= MASK32
    d &= MASK32
    e &= MASK32
    f &= MASK32
    g &= MASK32
    h &= MASK32
    w &= MASK32
    k &= MASK32

    temp1 = (h + big_sigma1(e) + ch(e, f, g) + k + w) & MASK32
    temp2 = (big_sigma0(a) + maj(a, b, c)) & MASK32

    return (
        (temp1 + temp2) & MASK32,
        a,
        b,
        c,
        (d + temp1) & MASK32,
        e,
        f,
        g,
    )


def compress64(
    a: int,
    b: int,
    c: int,
    d: int,
    e: int,
    f: int,
    g: int,
    h: int,
    ws: Sequence[int],
    track: bool = False,
) -> Union[State, Tuple[State, List[State]]]:
    """Run the full 64-round SHA-256 compression loop for one block.

    Parameters
    ----------
    a, b, c, d, e, f, g, h : int
        Initial working state words (the current hash value).
    ws : Sequence[int]
        The 64-word message schedule `w[0..63]` for this block.
    track : bool
        When true, also return the working state after every round.

    Returns
    -------
    (a, b, c, d, e, f, g, h) : tuple[int, ...]
        Final working state words after 64 rounds. With ``track=True`` the
        result is ``(final_state, per_round_states)``.
    """
    if len(ws) != ROUNDS:
        raise ValueError(f"compress64 expects {ROUNDS} message schedule words, got {len(ws)}")

    working: State = (a, b, c, d, e, f, g, h)
    rounds: List[State] = []
    for i in range(ROUNDS):
        working = compression(*working, ws[i], K_VALUES[i])
        if track:
            rounds.append(working)

    if track:
        return working, rounds
    return working


def build_message_schedule(block: bytes) -> List[int]:
    """Given a 512-bit block, build the 64-word message schedule w[0..63]."""
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"Expected {BLOCK_SIZE}-byte block, got {len(block)}")

    w: List[int] = [0] * ROUNDS

    # First 16 words come directly from the block (big-endian).
    for i in range(16):
        w[i] = int.from_bytes(block[4 * i : 4 * (i + 1)], byteorder="big")

    for i in range(16, ROUNDS):
        s0 = small_sigma0(w[i - 15])
        s1 = small_sigma1(w[i - 2])
        w[i] = (w[i - 16] + s0 + w[i - 7] + s1) & MASK32

    return w


def update_hash_state(state: Sequence[int], working: Sequence[int]) -> State:
    """Fold the working registers a..h into the chaining value.

        H_{i+1}[j] = (H_i[j] + working[j]) mod 2^32
    """
    return tuple((h + v) & MASK32 for h, v in zip(state, working))


def iter_blocks(padded: bytes) -> Iterable[bytes]:
    """Yield the 64-byte blocks of an already padded buffer, first to last."""
    if len(padded) % BLOCK_SIZE != 0:
        raise InvalidInputLength(len(padded))
    for i in range(0, len(padded), BLOCK_SIZE):
        yield padded[i : i + BLOCK_SIZE]


def compress(padded: bytes) -> State:
    """Hash a padded buffer and return the final 8-word state H[0..7].

    Raises
    ------
    InvalidInputLength
        If ``len(padded)`` is not a multiple of 64. The padder always
        produces aligned output, so this only fires for direct callers.
    """
    padded = bytes(padded)
    state = H0
    for block in iter_blocks(padded):
        ws = build_message_schedule(block)
        working = compress64(*state, ws)
        state = update_hash_state(state, working)
    return state
