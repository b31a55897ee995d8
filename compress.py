"""Forward SHA-256 compression.

One round of the compression loop takes the working state words
`(a, b, c, d, e, f, g, h)`, the round constant `k` and the message schedule
word `w`, and computes:

    S1    = (e >>> 6) ^ (e >>> 11) ^ (e >>> 25)
    ch    = (e & f) ^ (~e & g)
    temp1 = h + S1 + ch + k + w

    S0    = (a >>> 2) ^ (a >>> 13) ^ (a >>> 22)
    maj   = (a & b) ^ (a & c) ^ (b & c)
    temp2 = S0 + maj

    a' = temp1 + temp2
    e' = d + temp1

    b' = a,  c' = b,  d' = c,  f' = e,  g' = f,  h' = g

All additions are performed modulo 2**32.

Two interchangeable 64-round forms are provided: `compress64`, which calls
`compression` once per round, and `compress64_unrolled`, which runs eight
rounds per iteration and renames the working variables instead of shifting
them. Both return the same working state for every input.
"""

from __future__ import annotations

from typing import Callable, Dict, Sequence, Tuple


MASK32 = 0xFFFFFFFF

State = Tuple[int, int, int, int, int, int, int, int]

# Standard SHA-256 round constants k[0..63] from FIPS 180-4.
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


def _rotr(x: int, n: int) -> int:
    """Right-rotate a 32-bit word `x` by `n` bits (1 <= n <= 31)."""
    x &= MASK32
    return ((x >> n) | (x << (32 - n))) & MASK32


def _big_sigma0(a: int) -> int:
    return _rotr(a, 2) ^ _rotr(a, 13) ^ _rotr(a, 22)


def _big_sigma1(e: int) -> int:
    return _rotr(e, 6) ^ _rotr(e, 11) ^ _rotr(e, 25)


def _ch(e: int, f: int, g: int) -> int:
    return (e & f) ^ ((~e) & g)


def _maj(a: int, b: int, c: int) -> int:
    return (a & b) ^ (a & c) ^ (b & c)


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
        Updated working state after one compression round, all reduced modulo 2**32.
    """
    temp1 = (h + _big_sigma1(e) + _ch(e, f, g) + k + w) & MASK32
    temp2 = (_big_sigma0(a) + _maj(a, b, c)) & MASK32

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
) -> State:
    """Run the full 64-round SHA-256 compression loop for one block.

    Parameters
    ----------
    a, b, c, d, e, f, g, h : int
        Initial working state words (the current hash value).
    ws : Sequence[int]
        The 64-word message schedule `w[0..63]` for this block.

    Returns
    -------
    (a, b, c, d, e, f, g, h) : tuple[int, ...]
        Final working state words after 64 rounds. The caller adds these back
        into the hash value.
    """
    if len(ws) != 64:
        raise ValueError(f"compress64 expects 64 message schedule words, got {len(ws)}")

    for i in range(64):
        a, b, c, d, e, f, g, h = compression(a, b, c, d, e, f, g, h, ws[i], K_VALUES[i])

    return a, b, c, d, e, f, g, h


def _step(a: int, b: int, c: int, d: int, e: int, f: int, g: int, h: int, k: int, w: int) -> Tuple[int, int]:
    """One round without the shift: return the new `e` and new `a`.

    The new `e` belongs in the slot that held `d`, the new `a` in the slot
    that held `h`; every other word stays where it is and changes role.
    """
    temp1 = (h + _big_sigma1(e) + _ch(e, f, g) + k + w) & MASK32
    temp2 = (_big_sigma0(a) + _maj(a, b, c)) & MASK32
    return (d + temp1) & MASK32, (temp1 + temp2) & MASK32


def compress64_unrolled(
    a: int,
    b: int,
    c: int,
    d: int,
    e: int,
    f: int,
    g: int,
    h: int,
    ws: Sequence[int],
) -> State:
    """Eight-rounds-per-iteration form of `compress64`.

    Each round writes only two variables; the roles of a..h rotate by one
    position per round and line up again after eight rounds.
    """
    if len(ws) != 64:
        raise ValueError(f"compress64_unrolled expects 64 message schedule words, got {len(ws)}")

    k = K_VALUES
    for i in range(0, 64, 8):
        d, h = _step(a, b, c, d, e, f, g, h, k[i], ws[i])
        c, g = _step(h, a, b, c, d, e, f, g, k[i + 1], ws[i + 1])
        b, f = _step(g, h, a, b, c, d, e, f, k[i + 2], ws[i + 2])
        a, e = _step(f, g, h, a, b, c, d, e, k[i + 3], ws[i + 3])
        h, d = _step(e, f, g, h, a, b, c, d, k[i + 4], ws[i + 4])
        g, c = _step(d, e, f, g, h, a, b, c, k[i + 5], ws[i + 5])
        f, b = _step(c, d, e, f, g, h, a, b, k[i + 6], ws[i + 6])
        e, a = _step(b, c, d, e, f, g, h, a, k[i + 7], ws[i + 7])

    return a, b, c, d, e, f, g, h


Compressor = Callable[..., State]

COMPRESSORS: Dict[str, Compressor] = {
    "loop": compress64,
    "unrolled": compress64_unrolled,
}
