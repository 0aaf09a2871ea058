"""SHA-256 built from the padder in `padding.py` and the compressor in `compress.py`.

This module provides:

- `sha256_hex(data) -> str` (also exported as `hash`): the lowercase hex
  digest of arbitrary data.
- `sha256(data) -> bytes`: the same digest as 32 raw bytes.
- CLI usage: `python sha256_cli.py "message"` prints the hex digest of the
  UTF-8 encoding of `"message"`.
"""

from __future__ import annotations

import sys
from typing import List, Sequence

from compress import MASK32, compress
from padding import Message, pad_message


USAGE = (
    "Usage:\n"
    "  python sha256_cli.py \"message\"\n"
    "  python sha256_cli.py -f path/to/file\n"
)


def encode_hex(words: Sequence[int]) -> str:
    """Render the 8 state words as a 64-character lowercase hex string."""
    if len(words) != 8:
        raise ValueError(f"Expected 8 digest words, got {len(words)}")
    for j, word in enumerate(words):
        if word < 0 or word > MASK32:
            raise ValueError(f"Digest word {j} is out of 32-bit range: {word}")
    return "".join(f"{word:08x}" for word in words)


def _finalize_digest_from_state(state: Sequence[int]) -> bytes:
    """Convert the final hash state into the 32-byte SHA-256 digest."""
    return b"".join(word.to_bytes(4, byteorder="big") for word in state)


def sha256_words(data: Message, length_field_bits: int = 64) -> List[int]:
    """Return the final 8-word hash state for `data`."""
    return list(compress(pad_message(data, length_field_bits)))


def sha256(data: Message, length_field_bits: int = 64) -> bytes:
    """Compute the SHA-256 digest of `data`."""
    return _finalize_digest_from_state(sha256_words(data, length_field_bits))


def sha256_hex(data: Message, length_field_bits: int = 64) -> str:
    """Compute the SHA-256 digest of `data` as a 64-character hex string.

    High-level flow:

    1. Pad the message to a multiple of 64 bytes.
    2. Run the compressor over every block to get the final state.
    3. Render the 8 state words as hex.

    ``length_field_bits=32`` reproduces the reference behaviour of only
    populating the low half of the length field; it raises
    `padding.InputTooLarge` for messages of 2**32 bits or more.
    """
    return encode_hex(sha256_words(data, length_field_bits))


hash = sha256_hex


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Usage:
        python sha256_cli.py "message"
        python sha256_cli.py -f path/to/file

    Without flags, the single argument is interpreted as a UTF-8 string and
    hashed. With `-f`, the following argument is treated as a filename whose
    raw bytes are hashed. The resulting hex digest is printed to stdout.
    """
    if argv is None:
        argv = sys.argv[1:]

    if not argv:
        sys.stderr.write(USAGE)
        return 1

    # File mode: `-f <filename>`
    if argv[0] == "-f":
        if len(argv) != 2:
            sys.stderr.write("Usage: python sha256_cli.py -f path/to/file\n")
            return 1
        filename = argv[1]
        try:
            with open(filename, "rb") as f:
                data = f.read()
        except OSError as e:
            sys.stderr.write(f"Error reading file '{filename}': {e}\n")
            return 1
    elif len(argv) != 1:
        sys.stderr.write(USAGE)
        return 1
    else:
        data = argv[0].encode("utf-8")

    try:
        digest_hex = sha256_hex(data)
    except ValueError as e:
        sys.stderr.write(f"Error hashing input: {e}\n")
        return 1

    print(digest_hex)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
