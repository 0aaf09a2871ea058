import pytest

from compress import InvalidInputLength
from padding import (
    InputTooLarge,
    encode_length_field,
    pad_message,
    padding_length,
    split_into_blocks,
)


@pytest.mark.parametrize(
    "length,expected_padded_length",
    [
        (0, 64),
        (1, 64),
        (55, 64),
        (56, 128),
        (57, 128),
        (63, 128),
        (64, 128),
        (119, 128),
        (120, 192),
        (1000, 1024),
    ],
)
def test_padded_length(length, expected_padded_length):
    padded = pad_message(b"\x61" * length)
    assert len(padded) == expected_padded_length
    assert len(padded) % 64 == 0
    assert len(padded) >= length + 9


@pytest.mark.parametrize("length", [0, 3, 55, 56, 57, 64, 200])
def test_padding_layout(length):
    message = bytes((i * 7) & 0xFF for i in range(length))
    padded = pad_message(message)
    marker_and_zeros = padding_length(length)

    assert 1 <= marker_and_zeros <= 64
    assert (length + marker_and_zeros) % 64 == 56
    assert padded[:length] == message
    assert padded[length] == 0x80
    assert padded[length + 1 : length + marker_and_zeros] == b"\x00" * (marker_and_zeros - 1)
    assert padded[-8:] == (length * 8).to_bytes(8, "big")


def test_pad_empty_message():
    assert pad_message(b"") == b"\x80" + b"\x00" * 63


def test_pad_accepts_byte_value_lists():
    assert pad_message([0x61, 0x62, 0x63]) == pad_message(b"abc")
    assert pad_message(bytearray(b"abc")) == pad_message(b"abc")


def test_length_field_is_big_endian_bit_count():
    assert encode_length_field(24) == b"\x00\x00\x00\x00\x00\x00\x00\x18"
    assert encode_length_field(0x0102030405) == b"\x00\x00\x00\x01\x02\x03\x04\x05"


def test_length_field_32_bit_mode_keeps_high_bytes_zero():
    assert encode_length_field(0xDEADBEEF, field_bits=32) == b"\x00\x00\x00\x00\xde\xad\xbe\xef"
    assert pad_message(b"abc", length_field_bits=32) == pad_message(b"abc")


def test_length_field_32_bit_mode_rejects_large_messages():
    # 2**29 bytes is the first message size whose bit length needs 33 bits.
    with pytest.raises(InputTooLarge) as excinfo:
        encode_length_field(2 ** 29 * 8, field_bits=32)
    assert excinfo.value.bit_length == 2 ** 32
    assert excinfo.value.field_bits == 32

    assert encode_length_field(2 ** 32 - 1, field_bits=32)[:4] == b"\x00\x00\x00\x00"


def test_length_field_64_bit_limit():
    assert encode_length_field(2 ** 64 - 1) == b"\xff" * 8
    with pytest.raises(InputTooLarge):
        encode_length_field(2 ** 64)


def test_input_too_large_is_a_value_error():
    with pytest.raises(ValueError):
        encode_length_field(2 ** 40, field_bits=32)


@pytest.mark.parametrize("bit_length,field_bits", [(-1, 64), (8, 16), (8, 128)])
def test_length_field_rejects_bad_arguments(bit_length, field_bits):
    with pytest.raises(ValueError):
        encode_length_field(bit_length, field_bits)


def test_split_into_blocks():
    padded = pad_message(b"x" * 130)
    blocks = split_into_blocks(padded)

    assert len(blocks) == 3
    assert all(len(block) == 64 for block in blocks)
    assert b"".join(blocks) == padded


def test_split_into_blocks_rejects_unaligned_input():
    with pytest.raises(InvalidInputLength):
        split_into_blocks(b"\x00" * 70)
