#!/usr/bin/env python3
"""
sew - compose raw bytes from shell arguments.

Usage:
    sew mac bc ^ mac random ^ vlan 100 ^ hex 08 00 ^ pad 60 > frame.bin
    sew --seed 7 mac random                # reproducible random MAC
    sew -c sew.toml hex de ad be ef        # settings from a TOML file
    sew --list-actions                     # show the action grammar

Actions are separated by a lone "^". Options must come before the first
action. The composed bytes are written to stdout only if every action
succeeds; diagnostics go to stderr.
"""

import argparse
import logging
import os
import sys
from typing import BinaryIO, List, Optional

import numpy as np

from .config import default_config, load_from_toml
from .dispatcher import compose
from .errors import (
    ConfigError,
    MalformedExpression,
    OutputWriteFailure,
    SewError,
)
from .registry import ActionRegistry, create_registry

logger = logging.getLogger(__name__)

PROG = "sew"


def write_output(data: bytes, stream: BinaryIO) -> None:
    """
    Write the composed bytes to stream in one piece.

    Raises:
        OutputWriteFailure: If the stream fails or accepts fewer bytes
    """
    try:
        written = stream.write(data)
        stream.flush()
    except (OSError, ValueError) as e:
        raise OutputWriteFailure(f"unable to write packet to stdout: {e}") from e

    if written is not None and written != len(data):
        raise OutputWriteFailure(
            f"unable to write packet to stdout: short write {written}/{len(data)} bytes"
        )


def _silence_stdout() -> None:
    """Point stdout at devnull so the interpreter's exit-time flush cannot fail again."""
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        os.close(devnull)
    except (OSError, ValueError) as e:
        logger.debug(f"Could not redirect stdout to devnull: {e}")


def print_actions(registry: ActionRegistry) -> None:
    for descriptor in registry:
        print(f"{descriptor.name:<6} {descriptor.usage}")


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Compose raw bytes (e.g. test network frames) from actions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Actions:
  hex|x [BYTE ...]                          append base-16 bytes
  pad LEN                                   zero-fill to a multiple of LEN
  zero|z LEN                                append LEN zero bytes
  mac bc|broadcast|random|XX:XX:XX:XX:XX:XX append a MAC address
  vlan VID                                  append an 802.1Q tag (0-4095)

Example:
  sew mac bc ^ mac random ^ vlan 100 ^ hex 08 00 ^ pad 60
        """,
    )
    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Path to TOML config file",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for 'mac random' (overrides config)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging on stderr",
    )
    parser.add_argument(
        "-l", "--list-actions",
        action="store_true",
        help="List available actions and exit",
    )
    parser.add_argument(
        "actions",
        nargs=argparse.REMAINDER,
        help="Action groups separated by '^'",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None, stdout: Optional[BinaryIO] = None) -> int:
    """Command-line entry point. Returns the process exit status."""
    args = _parse_args(argv)

    try:
        cfg = load_from_toml(args.config) if args.config else default_config()
        cfg = cfg.with_overrides(seed=args.seed, verbose=args.verbose)
    except (OSError, ConfigError) as e:
        print(f"{PROG}: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=getattr(logging, cfg.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    logger.debug(f"{len(args.actions)} argument tokens, seed={cfg.seed}")

    registry = create_registry(np.random.default_rng(cfg.seed))
    if args.list_actions:
        print_actions(registry)
        return 0

    try:
        data = compose(args.actions, registry)
        write_output(data, stdout if stdout is not None else sys.stdout.buffer)
    except MalformedExpression as e:
        print(f"{PROG}: {e}", file=sys.stderr)
        print(f"usage: {e.usage}", file=sys.stderr)
        return 1
    except OutputWriteFailure as e:
        if stdout is None:
            _silence_stdout()
        print(f"{PROG}: {e}", file=sys.stderr)
        return 1
    except SewError as e:
        print(f"{PROG}: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
