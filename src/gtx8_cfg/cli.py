"""gtx8-cfg-dump command line interface.

Decode a GTX8 cfg group binary and print it as JSON.

Usage:
    gtx8-cfg-dump goodix_cfg_group.bin
    gtx8-cfg-dump goodix_cfg_group.bin --compact --no-verify
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .cfg_bin import parse_cfg_bin
from .errors import DecodeError, SchemaViolation, TruncatedInput
from .registry import get_registry
from .render import render_json

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    registry = get_registry()
    parser = argparse.ArgumentParser(
        prog="gtx8-cfg-dump",
        description="Decode a Goodix GTX8 cfg group binary into JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Pretty-printed JSON
    gtx8-cfg-dump goodix_cfg_group.bin

    # One line, skipping the bin_len and checksum checks
    gtx8-cfg-dump goodix_cfg_group.bin --compact --no-verify
        """
    )

    parser.add_argument(
        "cfg_bin",
        type=str,
        help="Path to the cfg group binary"
    )
    parser.add_argument(
        "--chip",
        choices=registry.names(),
        default="gtx8",
        help="Chip family layout. Default: gtx8"
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation. Default: 2"
    )
    parser.add_argument(
        "--compact",
        action="store_true",
        help="Single-line JSON output"
    )
    parser.add_argument(
        "--no-verify",
        action="store_true",
        help="Skip the bin_len and checksum checks"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Debug logging on stderr"
    )
    return parser


def describe_error(exc: DecodeError) -> str:
    """One-line diagnostic naming the failure kind and location."""
    if isinstance(exc, TruncatedInput):
        return (f"{exc.kind} at {exc.field} (offset {exc.offset}): "
                f"need {exc.required} bytes, have {exc.available} ({exc.missing} missing)")
    if isinstance(exc, SchemaViolation):
        detail = exc.reason or f"got {exc.value}, expected {exc.expected}"
        return f"{exc.kind} at {exc.field} (offset {exc.offset}): {detail}"
    return str(exc)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            stream=sys.stderr,
        )

    path = Path(args.cfg_bin)
    try:
        data = path.read_bytes()
    except OSError as e:
        print(f"error: cannot read {args.cfg_bin}: {e.strerror or e}", file=sys.stderr)
        return 1

    layout = get_registry().get(args.chip)
    logger.debug("decoding %s (%d bytes) as %s", path, len(data), layout.name)

    try:
        tree = parse_cfg_bin(data, layout=layout, verify=not args.no_verify)
    except DecodeError as e:
        print(f"error: {describe_error(e)}", file=sys.stderr)
        return 1

    print(render_json(tree, indent=None if args.compact else args.indent))
    return 0


if __name__ == "__main__":
    sys.exit(main())
