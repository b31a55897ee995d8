"""SHA-256 message padding, one block at a time.

A message of `L` bits is followed by a single `1` bit, zero bits, and the
64-bit big-endian value of `L`, so that the padded length is a multiple of
512 bits. `fill_block` builds the next 16-word block straight from the
remaining message bytes, so the padded message is never materialized.

Depending on where the message ends, the padding lands in one of three
shapes:

- the `0x80` byte, zeros and the length all fit in the last data block;
- the `0x80` byte fits but the two length words do not: the block is
  zero-filled and one more block carries only zeros and the length;
- the message fills its last block exactly (`L % 512 == 0`): a dedicated
  block starts with `0x80000000` and ends with the length.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from compress import MASK32


BLOCK_WORDS = 16
BLOCK_BYTES = 64
BLOCK_BITS = 512

# The length field is 64 bits wide.
MAX_MESSAGE_BITS = (1 << 64) - 1


def num_blocks(length_bits: int) -> int:
    """Number of 512-bit blocks for a message of `length_bits` bits.

    Room is needed for the message, the `1` bit and the 64-bit length:

        ceil((length_bits + 1 + 64) / 512)
    """
    total_bits = length_bits + 1 + 64
    return (total_bits + BLOCK_BITS - 1) // BLOCK_BITS


def fill_block(
    message: Sequence[int],
    offset: int,
    remaining: int,
    length_bits: int,
) -> Tuple[List[int], int]:
    """Build the next block of a message.

    Parameters
    ----------
    message : bytes-like
        The whole message buffer.
    offset : int
        Index of the first byte not yet consumed.
    remaining : int
        Number of message bytes not yet consumed.
    length_bits : int
        Length of the original message in bits, written into the last block.

    Returns
    -------
    (block, bytes_used) : tuple[list[int], int]
        The 16 big-endian words of the block, and how many message bytes went
        into it (0 for a block made only of padding).

    The arguments are trusted: `remaining` must not run past the end of
    `message`, and `length_bits` must be the bit length of the whole message.
    """
    block: List[int] = []
    word = 0
    count = 0
    bytes_used = 0

    # Pack message bytes four at a time, big-endian.
    while remaining and len(block) < BLOCK_WORDS:
        word = (word << 8) | (message[offset + bytes_used] & 0xFF)
        bytes_used += 1
        remaining -= 1
        count += 1
        if count == 4:
            block.append(word)
            word = 0
            count = 0

    if len(block) == BLOCK_WORDS:
        return block, bytes_used

    # The marker goes right after the last message byte. When the message
    # filled its last block exactly, it opens a padding-only block instead.
    if bytes_used or length_bits % BLOCK_BITS == 0:
        word = (word << 8) | 0x80
        count += 1
        word <<= 8 * (4 - count)
        block.append(word)

    while len(block) < BLOCK_WORDS - 2:
        block.append(0)

    # No room for the length: it goes into the next block.
    if len(block) == BLOCK_WORDS - 2:
        block.append((length_bits >> 32) & MASK32)
        block.append(length_bits & MASK32)

    while len(block) < BLOCK_WORDS:
        block.append(0)

    return block, bytes_used
