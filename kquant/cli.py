"""Command-line interface for kquant."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .pipeline import DEFAULT_OUTPUT, Pipeline, QuantizeConfig
from .types import QuantizationError


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="kquant",
        description="Reduce an image to k colors with k-means clustering",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  kquant photo.jpg 8
  kquant photo.jpg 16 -o photo_16.png --iterations 20
  kquant photo.jpg 4 --seed 1234 --tolerance 1
        """,
    )

    parser.add_argument("input", help="Input image file path")

    parser.add_argument("colors", type=int, help="Number of colors (k)")

    parser.add_argument(
        "-o",
        "--output",
        default=DEFAULT_OUTPUT,
        help=f"Output image path (default: {DEFAULT_OUTPUT})",
    )

    parser.add_argument(
        "--iterations",
        "-n",
        type=int,
        default=10,
        help="Number of clustering iterations (default: 10)",
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for initial centers (default: current Unix time)",
    )

    parser.add_argument(
        "--tolerance",
        type=float,
        default=None,
        help="Stop early once no center moves more than this (default: off)",
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    return parser


def main(args: Optional[list] = None) -> int:
    """Main entry point for CLI.

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    try:
        config = QuantizeConfig(
            n_colors=parsed.colors,
            max_iterations=parsed.iterations,
            seed=parsed.seed,
            tolerance=parsed.tolerance,
        )
        pipeline = Pipeline(config)
        pipeline.process(Path(parsed.input), parsed.output)
        return 0

    except (FileNotFoundError, QuantizationError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
