#!/usr/bin/env python3
"""
pixmap command line tool.

    pixmap info image.ppm
    pixmap convert photo.png photo.ppm
    pixmap blank 64 32 canvas.ppm --color 255 255 255
"""
import argparse
import logging
import os
import sys

from dotenv import load_dotenv

from ..models.color import Color
from ..models.errors import PixmapError
from ..services.pixel_buffer_service import PixelBufferService

# Load environment variables first
load_dotenv()

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    level_name = os.getenv("PIXMAP_LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(level_name)
    # getLevelName returns "Level <name>" for names it does not know
    known = isinstance(level, int)
    if not known:
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )
    if not known:
        logger.warning(f"Unknown PIXMAP_LOG_LEVEL {level_name!r}, using INFO")


def cmd_info(service: PixelBufferService, args) -> None:
    buffer = service.load(args.file)
    logger.info(f"{args.file}: {buffer.width}x{buffer.height}, {len(buffer)} pixels")


def cmd_convert(service: PixelBufferService, args) -> None:
    buffer = service.import_image(args.src)
    service.export_image(buffer, args.dst)


def cmd_blank(service: PixelBufferService, args) -> None:
    buffer = service.create(args.width, args.height)
    service.fill(buffer, Color(*args.color))
    service.save(buffer, args.dst)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="pixmap", description="ASCII PPM (P3) utilities")
    sub = ap.add_subparsers(dest="command", required=True)

    info = sub.add_parser("info", help="print the dimensions of a P3 file")
    info.add_argument("file")
    info.set_defaults(func=cmd_info)

    convert = sub.add_parser("convert", help="convert between P3 and any Pillow format")
    convert.add_argument("src")
    convert.add_argument("dst")
    convert.set_defaults(func=cmd_convert)

    blank = sub.add_parser("blank", help="write a solid-colour P3 file")
    blank.add_argument("width", type=int)
    blank.add_argument("height", type=int)
    blank.add_argument("dst")
    blank.add_argument("--color", nargs=3, type=int, default=[0, 0, 0],
                       metavar=("R", "G", "B"))
    blank.set_defaults(func=cmd_blank)
    return ap


def main(argv=None) -> int:
    _configure_logging()
    args = build_parser().parse_args(argv)
    try:
        args.func(PixelBufferService(), args)
    except (PixmapError, OSError, ValueError) as err:
        logger.error(f"{args.command} failed: {err}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
