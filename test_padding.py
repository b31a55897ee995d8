import pytest

from padding import BLOCK_WORDS, MAX_MESSAGE_BITS, fill_block, num_blocks


A_WORD = 0x61616161  # "aaaa"


@pytest.mark.parametrize(
    "length_bytes,expected",
    [
        (0, 1),
        (3, 1),
        (55, 1),
        (56, 2),
        (57, 2),
        (63, 2),
        (64, 2),
        (119, 2),
        (120, 3),
        (128, 3),
    ],
)
def test_num_blocks(length_bytes, expected):
    assert num_blocks(length_bytes * 8) == expected


def test_num_blocks_past_32_bits():
    """Bit lengths beyond 2**32 keep their full width in the block count."""
    assert num_blocks(1 << 40) == (1 << 31) + 1
    assert num_blocks(MAX_MESSAGE_BITS) == (1 << 55) + 1


def test_fill_block_empty_message():
    block, used = fill_block(b"", 0, 0, 0)

    assert used == 0
    assert block == [0x80000000] + [0] * 15


def test_fill_block_abc():
    block, used = fill_block(b"abc", 0, 3, 24)

    assert used == 3
    assert block == [0x61626380] + [0] * 14 + [24]


def test_fill_block_honours_offset():
    assert fill_block(b"xxabcyy", 2, 3, 24) == fill_block(b"abc", 0, 3, 24)


def test_fill_block_55_bytes_fits_one_block():
    message = b"a" * 55
    block, used = fill_block(message, 0, 55, 440)

    assert used == 55
    assert block[:13] == [A_WORD] * 13
    assert block[13] == 0x61616180
    assert block[14:] == [0, 440]


def test_fill_block_56_bytes_defers_length():
    message = b"a" * 56

    first, used = fill_block(message, 0, 56, 448)
    assert used == 56
    assert first[:14] == [A_WORD] * 14
    assert first[14:] == [0x80000000, 0]

    # No second marker: the message did not end on a block boundary.
    second, used = fill_block(message, 56, 0, 448)
    assert used == 0
    assert second == [0] * 15 + [448]


def test_fill_block_57_bytes_defers_length():
    message = b"a" * 57

    first, used = fill_block(message, 0, 57, 456)
    assert used == 57
    assert first[14:] == [0x61800000, 0]

    second, _ = fill_block(message, 57, 0, 456)
    assert second == [0] * 15 + [456]


def test_fill_block_60_bytes_marker_in_last_word():
    message = b"a" * 60

    first, used = fill_block(message, 0, 60, 480)
    assert used == 60
    assert first == [A_WORD] * 15 + [0x80000000]

    second, _ = fill_block(message, 60, 0, 480)
    assert second == [0] * 15 + [480]


def test_fill_block_64_bytes_needs_padding_block():
    message = b"a" * 64

    first, used = fill_block(message, 0, 64, 512)
    assert used == 64
    assert first == [A_WORD] * 16

    second, used = fill_block(message, 64, 0, 512)
    assert used == 0
    assert second == [0x80000000] + [0] * 14 + [512]


def test_fill_block_full_block_leaves_rest():
    message = bytes(range(100))
    block, used = fill_block(message, 0, 100, 800)

    assert used == 64
    assert block[0] == 0x00010203
    assert block[15] == 0x3C3D3E3F


def test_fill_block_length_high_word():
    # Not a multiple of 512: a length-only block.
    block, _ = fill_block(b"", 0, 0, (5 << 32) | 7)
    assert block == [0] * 14 + [5, 7]

    # A multiple of 512: the dedicated block also opens with the marker.
    block, _ = fill_block(b"", 0, 0, 1 << 33)
    assert block == [0x80000000] + [0] * 13 + [2, 0]


def test_fill_block_max_length_field():
    block, _ = fill_block(b"", 0, 0, MAX_MESSAGE_BITS)
    assert block[14:] == [0xFFFFFFFF, 0xFFFFFFFF]


@pytest.mark.parametrize("length", range(0, 200))
def test_padded_blocks_are_consistent(length):
    """
    Walk every block of an n-byte message and check the padding invariants:
    the block count, total bytes consumed, exactly one marker byte, and the
    length in the last two words.
    """
    message = bytes((i * 7 + 1) & 0xFF for i in range(length))
    length_bits = length * 8

    offset = 0
    remaining = length
    padded = bytearray()
    for _ in range(num_blocks(length_bits)):
        block, used = fill_block(message, offset, remaining, length_bits)
        assert len(block) == BLOCK_WORDS
        for word in block:
            padded.extend(word.to_bytes(4, byteorder="big"))
        offset += used
        remaining -= used

    assert remaining == 0
    assert len(padded) % 64 == 0
    assert bytes(padded[:length]) == message
    assert padded[length] == 0x80
    assert not any(padded[length + 1 : -8])
    assert int.from_bytes(padded[-8:], byteorder="big") == length_bits
