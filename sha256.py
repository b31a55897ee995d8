"""SHA-256 digest driver.

This module provides:

- `digest(message, length=None) -> tuple[int, ...]`: the 8-word digest of a
  message.
- `initial_state()`: a fresh copy of H0..H7, for callers running their own
  block loop with `compress_block`.
- `compare(hash_a, hash_b)`: word-exact equality of two digests.

Each call to `digest` owns its hash state; nothing here keeps mutable state
between calls, so independent messages can be hashed from several threads.
"""

from __future__ import annotations

from typing import Iterator, List, Sequence, Tuple

from compress import MASK32, State, Compressor, compress64
from padding import BLOCK_BITS, BLOCK_BYTES, BLOCK_WORDS, MAX_MESSAGE_BITS, fill_block, num_blocks
from schedule import build_message_schedule


# Initial hash values (first 32 bits of the fractional parts of the
# square roots of the first 8 primes 2..19), as per FIPS 180-4.
_H0: State = (
    0x6A09E667,
    0xBB67AE85,
    0x3C6EF372,
    0xA54FF53A,
    0x510E527F,
    0x9B05688C,
    0x1F83D9AB,
    0x5BE0CD19,
)

HASH_WORDS = 8


def initial_state() -> List[int]:
    """Return a new, caller-owned copy of the initial hash value H0..H7."""
    return list(_H0)


def compress_block(
    state: List[int],
    block: Sequence[int],
    compressor: Compressor = compress64,
) -> None:
    """Fold one 16-word block into `state`, in place.

    The block is expanded to its 64-word schedule, run through `compressor`
    starting from the current state, and the resulting working words are
    added back into the state (modulo 2**32).
    """
    if len(state) != HASH_WORDS:
        raise ValueError(f"Expected 8-word hash state, got {len(state)}")
    if len(block) != BLOCK_WORDS:
        raise ValueError(f"Expected 16-word block, got {len(block)}")

    ws = build_message_schedule(block)
    work_out = compressor(*state, ws)

    for j in range(HASH_WORDS):
        state[j] = (state[j] + work_out[j]) & MASK32


def iter_blocks(message: Sequence[int], length: int) -> Iterator[Tuple[List[int], int]]:
    """Yield `(block, bytes_used)` for every padded block of the first `length` bytes."""
    length_bits = length * 8
    offset = 0
    remaining = length

    for _ in range(num_blocks(length_bits)):
        block, bytes_used = fill_block(message, offset, remaining, length_bits)
        yield block, bytes_used
        offset += bytes_used
        remaining -= bytes_used


def _check_length(message: Sequence[int], length: int) -> None:
    if length < 0:
        raise ValueError(f"Message length must be non-negative, got {length}")
    if length > len(message):
        raise ValueError(
            f"Message length {length} exceeds the buffer size {len(message)}"
        )
    if length * 8 > MAX_MESSAGE_BITS:
        raise ValueError(
            f"Message of {length} bytes does not fit the 64-bit length field"
        )


def digest(
    message: Sequence[int],
    length: int | None = None,
    *,
    compressor: Compressor = compress64,
) -> State:
    """Compute the SHA-256 digest of the first `length` bytes of `message`.

    `message` is any bytes-like object (`bytes`, `bytearray`, `memoryview`,
    or a sequence of byte values); `length` defaults to its full size.
    The digest is returned as eight 32-bit words, most significant first.
    """
    if length is None:
        length = len(message)
    _check_length(message, length)

    state = initial_state()
    for block, _ in iter_blocks(message, length):
        compress_block(state, block, compressor)

    return tuple(state)


def digest_repeated_block(
    block: bytes,
    repetitions: int,
    *,
    compressor: Compressor = compress64,
) -> State:
    """Digest of one 64-byte block repeated `repetitions` times.

    The data block is packed once and folded in `repetitions` times, followed
    by the padding block carrying the total length. Equivalent to
    `digest(block * repetitions)` without building the repeated message.
    """
    if len(block) != BLOCK_BYTES:
        raise ValueError(f"Expected 64-byte block, got {len(block)}")
    if repetitions < 0:
        raise ValueError(f"Repetitions must be non-negative, got {repetitions}")

    length_bits = BLOCK_BITS * repetitions
    if length_bits > MAX_MESSAGE_BITS:
        raise ValueError(
            f"{repetitions} repetitions do not fit the 64-bit length field"
        )

    state = initial_state()

    words, _ = fill_block(block, 0, BLOCK_BYTES, length_bits)
    for _ in range(repetitions):
        compress_block(state, words, compressor)

    final, _ = fill_block(block, 0, 0, length_bits)
    compress_block(state, final, compressor)

    return tuple(state)


def compare(hash_a: Sequence[int], hash_b: Sequence[int]) -> bool:
    """Return True if both digests hold the same eight words."""
    if len(hash_a) != HASH_WORDS or len(hash_b) != HASH_WORDS:
        return False
    return all(x == y for x, y in zip(hash_a, hash_b))


def digest_to_bytes(words: Sequence[int]) -> bytes:
    """Convert a digest into its 32-byte big-endian form."""
    return b"".join(word.to_bytes(4, byteorder="big") for word in words)
