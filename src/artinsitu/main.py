"""
Application Initialization
==========================
Parses the command line, sets up logging and either opens the preview window
or renders a single frame to an image file.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Builds the SceneProps from command-line options.
2. Creates the QApplication.
3. Hands the props to the window (interactive) or to a hidden canvas (export).
"""
from __future__ import annotations

import argparse
import logging
import re
import sys
from typing import Optional, Sequence

from PySide6.QtCore import QEventLoop
from PySide6.QtGui import QImage

from artinsitu.app.application import create_app
from artinsitu.config import DEFAULT_ARTWORK_SRC, DEFAULT_CHAIR_SRC
from artinsitu.logging_config import setup_logging
from artinsitu.model.props import SceneProps
from artinsitu.model.scene import ColorPair
from artinsitu.utils import parse_dimensions

logger = logging.getLogger(__name__)

_SIZE_RE = re.compile(r"^\s*(\d+)\s*[xX×]\s*(\d+)\s*$")


def parse_size(text: str) -> tuple[int, int]:
    """'1920x1080' -> (1920, 1080). Used as an argparse type."""
    match = _SIZE_RE.match(text)
    if not match or int(match.group(1)) <= 0 or int(match.group(2)) <= 0:
        raise argparse.ArgumentTypeError(f"Expected WIDTHxHEIGHT, got '{text}'.")
    return int(match.group(1)), int(match.group(2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="artinsitu",
        description="Preview an artwork on a wall, at its real size.",
    )
    parser.add_argument("--dimensions", help="Physical size, e.g. '96 × 80 cm'.")
    parser.add_argument("--artwork", default=DEFAULT_ARTWORK_SRC, help="Artwork image path or URL.")
    parser.add_argument("--chair", default=DEFAULT_CHAIR_SRC, help="Chair image path or URL.")
    parser.add_argument("--no-chair", action="store_true", help="Hide the chair.")
    parser.add_argument("--debug", action="store_true", help="Show the debug overlay.")
    parser.add_argument("--wall", nargs=2, metavar=("TOP", "BOTTOM"), help="Wall gradient colours.")
    parser.add_argument("--floor", nargs=2, metavar=("TOP", "BOTTOM"), help="Floor gradient colours.")
    parser.add_argument("--export", metavar="OUT.png", help="Render one frame to a file and exit.")
    parser.add_argument("--size", type=parse_size, default=(1920, 1080), help="Export size in CSS px.")
    parser.add_argument("--dpr", type=float, default=1.0, help="Export device pixel ratio.")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", default=None)
    return parser


def props_from_args(args: argparse.Namespace) -> SceneProps:
    """
    Translate parsed options to SceneProps.

    Raises:
        ValueError: If a colour is not a hex colour.
    """
    dimensions = parse_dimensions(args.dimensions) if args.dimensions else None
    if args.dimensions and dimensions is None:
        logger.warning(f"Could not parse dimensions '{args.dimensions}', using the default box.")
    return SceneProps(
        artwork_src=args.artwork,
        chair_src=args.chair,
        dimensions=dimensions,
        wall_colors=ColorPair(*args.wall) if args.wall else None,
        floor_colors=ColorPair(*args.floor) if args.floor else None,
        show_chair=not args.no_chair,
        show_debug=args.debug,
    )


def export_frame(
    props: SceneProps,
    size: tuple[int, int],
    out_path: str,
    device_pixel_ratio: float = 1.0,
) -> QImage:
    """
    Render one frame offscreen, after both images settle, and save it.

    Raises:
        OSError: If the image cannot be written.
    """
    from artinsitu.view.canvas import InSituCanvas

    canvas = InSituCanvas(props)
    canvas.set_device_pixel_ratio(device_pixel_ratio)
    canvas.resize(*size)

    if canvas.is_loading():
        loop = QEventLoop()
        canvas.assets_settled.connect(loop.quit)
        loop.exec()

    canvas.render_frame()
    image = canvas.grab_frame()
    if not image.save(out_path):
        raise OSError(f"Could not write image to '{out_path}'.")
    logger.info(f"Exported {image.width()}x{image.height()} frame to {out_path}")
    return image


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(level=getattr(logging, args.log_level), log_file=args.log_file)

    try:
        props = props_from_args(args)
    except ValueError as e:
        logger.error(str(e))
        return 2

    app = create_app()

    if args.export:
        try:
            export_frame(props, args.size, args.export, args.dpr)
        except OSError as e:
            logger.error(str(e))
            return 1
        return 0

    from artinsitu.view.main_window import InSituWindow

    window = InSituWindow(props)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
