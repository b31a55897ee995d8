"""SHA-256 message schedule: one 16-word block expanded to 64 words."""

from __future__ import annotations

from typing import List, Sequence

from compress import MASK32, _rotr


def _shr(x: int, n: int) -> int:
    """Right-shift a 32-bit word `x` by `n` bits."""
    x &= MASK32
    return x >> n


def _small_sigma0(x: int) -> int:
    """SHA-256 function σ0 used in the message schedule."""
    return (_rotr(x, 7) ^ _rotr(x, 18) ^ _shr(x, 3)) & MASK32


def _small_sigma1(x: int) -> int:
    """SHA-256 function σ1 used in the message schedule."""
    return (_rotr(x, 17) ^ _rotr(x, 19) ^ _shr(x, 10)) & MASK32


def build_message_schedule(block: Sequence[int]) -> List[int]:
    """Given a block of 16 32-bit words, build the 64-word schedule w[0..63].

    The first 16 words are copied from the block; the rest follow the
    recurrence

        w[i] = w[i-16] + σ0(w[i-15]) + w[i-7] + σ1(w[i-2])   (mod 2**32)
    """
    w: List[int] = list(block)

    for i in range(16, 64):
        s0 = _small_sigma0(w[i - 15])
        s1 = _small_sigma1(w[i - 2])
        w.append((w[i - 16] + s0 + w[i - 7] + s1) & MASK32)

    return w
