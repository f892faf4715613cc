from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from ..codec import IOFailure, PbmError, encode_bytes
from ..rendering import bitmap_to_image
from ..rotate_job import RotateJobBuilder, RotateSettings, is_raster_path

LOG_LEVEL_ENV_VAR = "PBM_ROTATE_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="pbm-rotate: rotate plain PBM (P1) bitmaps by an arbitrary angle."
    )
    parser.add_argument("path", help="Image to rotate (.pbm, or .png/.jpg/.gif/.bmp with --output)")
    parser.add_argument("-a", "--angle", type=float, required=True, help="Rotation angle in degrees (clockwise)")
    parser.add_argument(
        "--counter-clockwise", action="store_true", help="Treat positive angles as counter-clockwise"
    )
    parser.add_argument("-o", "--output", metavar="PATH", help="Write the result here instead of rewriting PATH")
    parser.add_argument("--preview", metavar="PNG", help="Also save the rotated bitmap as a PNG image")
    parser.add_argument("--no-dither", action="store_true", help="Threshold raster inputs instead of dithering")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def configure_logging(verbose: bool) -> None:
    level_name = "DEBUG" if verbose else os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL)
    level = getattr(logging, level_name.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def write_output(path: str, data: bytes) -> None:
    try:
        with open(path, "wb") as handle:
            handle.write(data)
    except OSError as exc:
        raise IOFailure(f"Failed writing {path}: {exc}") from exc


def run(args: argparse.Namespace) -> int:
    settings = RotateSettings(
        angle=args.angle,
        clockwise=not args.counter_clockwise,
        dither=not args.no_dither,
    )
    image = RotateJobBuilder(settings).build_from_file(args.path)
    # the whole output exists before the destination is opened for writing
    data = encode_bytes(image)
    if args.preview:
        # a failing preview must not leave the destination already rewritten
        bitmap_to_image(image.bitmap).save(args.preview)
    output = args.output or args.path
    write_output(output, data)
    logger.info("Wrote %dx%d image to %s", image.width, image.height, output)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)
    if is_raster_path(args.path) and not args.output:
        print("Raster inputs need --output. Use --help for usage.", file=sys.stderr)
        return 2
    try:
        return run(args)
    except (PbmError, OSError, ValueError) as exc:
        print(str(exc), file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
