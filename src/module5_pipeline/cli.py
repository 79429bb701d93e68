"""
Command-line interface.

Usage:
    qr-fountain-gen SOURCE [SETUP] [-o OUTPUT] [--text] [-v]

Encodes SOURCE (a hex string by default) into SOURCE.png, an animated PNG
of fountain-coded QR frames, using constants from SETUP
(default: ``default_constants``).
"""

import argparse
import logging
import sys

from src.module1_io.errors import IOStageError
from src.module2_packetizer.errors import PacketizeError
from src.module3_matrix.errors import MatrixRenderError
from src.module4_compositor.errors import CompositorError

from .pipeline import run_hex, run_text


DEFAULT_SETUP = 'default_constants'


def setup_logging(verbose: bool = False):
    """Configure logging for the command-line tool."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def parse_arguments(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog='qr-fountain-gen',
        description='Encode a file into an animated PNG of fountain-coded QR codes',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Hex payload, default constants, writes message.hex.png
  qr-fountain-gen message.hex

  # Text payload with a YAML config
  qr-fountain-gen notes.txt default_config.yaml --text -o notes.png
        """
    )

    parser.add_argument(
        'source',
        help='Payload file (hex string unless --text is given)'
    )

    parser.add_argument(
        'setup',
        nargs='?',
        default=None,
        help=f'Constants file, legacy or YAML (default: {DEFAULT_SETUP})'
    )

    parser.add_argument(
        '-o', '--output',
        default=None,
        help='Output APNG path (default: SOURCE.png)'
    )

    parser.add_argument(
        '--text',
        action='store_true',
        help='Treat the payload file as raw text instead of hex'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Entry point; returns the process exit code."""
    args = parse_arguments(argv)
    setup_logging(args.verbose)

    setup = args.setup or DEFAULT_SETUP
    output = args.output or f"{args.source}.png"
    print(f"Encoding data from file {args.source} using setup file {setup}")

    run = run_text if args.text else run_hex
    try:
        result = run(args.source, setup, output)
    except (IOStageError, PacketizeError, MatrixRenderError, CompositorError) as e:
        print(f"Application error: {e}", file=sys.stderr)
        return 1

    print(f"Wrote {result.num_packets} frames to {output}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
