"""SHA-256 message padding (FIPS 180-4, 5.1.1).

The padded message is the original bytes, a single 0x80 marker, zero bytes
until the length is 56 mod 64, and an 8-byte big-endian bit-length field.
"""

from __future__ import annotations

from typing import Iterable, List, Union

from compress import BLOCK_SIZE, iter_blocks


LENGTH_FIELD_SIZE = 8
SUPPORTED_LENGTH_FIELD_BITS = (32, 64)

Message = Union[bytes, bytearray, memoryview, Iterable[int]]


class InputTooLarge(ValueError):
    """Raised when a message's bit length does not fit the length field."""

    def __init__(self, bit_length: int, field_bits: int):
        self.bit_length = bit_length
        self.field_bits = field_bits
        super().__init__(
            f"Message of {bit_length} bits does not fit a {field_bits}-bit length field "
            f"(limit is {2 ** field_bits - 1} bits)"
        )


def _as_bytes(message: Message) -> bytes:
    """Accept ``bytes``-like objects or an iterable of byte values (0-255)."""
    if isinstance(message, bytes):
        return message
    return bytes(message)


def padding_length(message_length: int) -> int:
    """Number of marker and zero bytes inserted before the length field.

    Always between 1 and 64: a message already ending at 56 mod 64 still
    gets the marker plus 63 zero bytes, a full extra block.
    """
    return (55 - message_length) % BLOCK_SIZE + 1


def encode_length_field(bit_length: int, field_bits: int = 64) -> bytes:
    """Encode ``bit_length`` as the 8-byte big-endian trailer.

    With ``field_bits=32`` only the low four bytes are populated and the high
    four are zero, which limits messages to under 2**32 bits (512 MiB).
    Lengths that do not fit raise `InputTooLarge` rather than wrapping.
    """
    if field_bits not in SUPPORTED_LENGTH_FIELD_BITS:
        raise ValueError(
            f"field_bits must be one of {SUPPORTED_LENGTH_FIELD_BITS}, got {field_bits}"
        )
    if bit_length < 0:
        raise ValueError(f"bit_length must be non-negative, got {bit_length}")
    if bit_length >= 2 ** field_bits:
        raise InputTooLarge(bit_length, field_bits)

    return bit_length.to_bytes(LENGTH_FIELD_SIZE, byteorder="big")


def pad_message(message: Message, length_field_bits: int = 64) -> bytes:
    """Pad the input message according to the SHA-256 specification.

    The result length is a multiple of 64 bytes (512 bits) and at least
    ``len(message) + 9``.
    """
    data = _as_bytes(message)
    length_field = encode_length_field(len(data) * 8, length_field_bits)

    padded = bytearray(data)
    padded.append(0x80)
    padded.extend(b"\x00" * (padding_length(len(data)) - 1))
    padded.extend(length_field)
    return bytes(padded)


def split_into_blocks(padded: Message) -> List[bytes]:
    """Split a padded message into 512-bit (64-byte) blocks.

    The input must already be padded so that its length is a multiple of 64,
    otherwise `compress.InvalidInputLength` is raised.
    """
    return list(iter_blocks(_as_bytes(padded)))
