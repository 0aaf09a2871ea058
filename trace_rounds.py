"""Dump the round-by-round SHA-256 computation of a message as YAML.

For a single message, this script:
1. Pads it and splits it into 64-byte blocks
2. Records each block's 64-word message schedule
3. Records the working registers a..h after every compression round
4. Records the chaining value after each block and the final digest

Usage:
    python trace_rounds.py "abc"
    python trace_rounds.py -f path/to/file --output trace.yaml
    python trace_rounds.py "abc" --length-field-bits 32

Output layout:
    message_hex, message_length_bytes, message_length_bits,
    padded_length_bytes, length_field_bits, block_count, state_in,
    blocks: [{block_index, block_hex, schedule, rounds, state_out}],
    digest_hex
"""

from __future__ import annotations

import argparse
import sys
from typing import Dict, List, Sequence

import yaml

from compress import H0, build_message_schedule, compress64, update_hash_state
from padding import SUPPORTED_LENGTH_FIELD_BITS, Message, pad_message, split_into_blocks
from sha256_cli import encode_hex


def _words_hex(words: Sequence[int]) -> List[str]:
    return [f"{w:08x}" for w in words]


def trace_message(data: Message, length_field_bits: int = 64) -> Dict:
    """Compute SHA-256 of `data` while recording every intermediate value.

    Returns a plain dict (hex strings and ints only) ready for `yaml.dump`.
    The ``digest_hex`` entry equals ``sha256_cli.sha256_hex(data)``.
    """
    data = bytes(data)
    padded = pad_message(data, length_field_bits)
    blocks = split_into_blocks(padded)

    trace: Dict = {
        "message_hex": data.hex(),
        "message_length_bytes": len(data),
        "message_length_bits": len(data) * 8,
        "padded_length_bytes": len(padded),
        "length_field_bits": length_field_bits,
        "block_count": len(blocks),
        "state_in": _words_hex(H0),
        "blocks": [],
    }

    state = H0
    for block_idx, block in enumerate(blocks):
        ws = build_message_schedule(block)
        working, rounds = compress64(*state, ws, track=True)
        state = update_hash_state(state, working)

        trace["blocks"].append({
            "block_index": block_idx,
            "block_hex": block.hex(),
            "schedule": _words_hex(ws),
            "rounds": [_words_hex(r) for r in rounds],
            "state_out": _words_hex(state),
        })

    trace["digest_hex"] = encode_hex(state)
    return trace


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Trace the SHA-256 schedule and compression rounds of a message"
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "message",
        nargs="?",
        help="Message to hash, encoded as UTF-8",
    )
    source.add_argument(
        "-f",
        "--file",
        type=str,
        help="Hash the raw bytes of this file instead",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write the YAML trace to this path (default: stdout)",
    )
    parser.add_argument(
        "--length-field-bits",
        type=int,
        choices=SUPPORTED_LENGTH_FIELD_BITS,
        default=64,
        help="Populated width of the padding length field (default: 64)",
    )
    args = parser.parse_args(argv)

    if args.file is not None:
        try:
            with open(args.file, "rb") as f:
                data = f.read()
        except OSError as e:
            sys.stderr.write(f"Error reading file '{args.file}': {e}\n")
            return 1
    else:
        data = args.message.encode("utf-8")

    try:
        trace = trace_message(data, args.length_field_bits)
    except ValueError as e:
        sys.stderr.write(f"Error tracing input: {e}\n")
        return 1

    if args.output is None:
        yaml.dump(trace, sys.stdout, default_flow_style=False, sort_keys=False)
        return 0

    try:
        with open(args.output, "w") as f:
            yaml.dump(trace, f, default_flow_style=False, sort_keys=False)
    except OSError as e:
        sys.stderr.write(f"Error writing trace to '{args.output}': {e}\n")
        return 1

    print(f"Traced {trace['block_count']} block(s) of {trace['message_length_bytes']} bytes to {args.output}")
    print(f"  digest={trace['digest_hex']}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
