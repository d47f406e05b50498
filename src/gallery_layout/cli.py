"""CLI argument parsing and main entry point."""

from __future__ import annotations

import argparse
import json
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import TYPE_CHECKING, TypeVar

import gallery_layout.config as gl_config
import gallery_layout.image_io as gl_image_io
from gallery_layout.constants import BIAS_MODES
from gallery_layout.engine import LayoutEngine
from gallery_layout.exceptions import GalleryLayoutError
from gallery_layout.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Sequence

    from gallery_layout.collection import LineCollection

T = TypeVar("T")


def installed_version() -> str:
    """Version of the installed distribution, or 0.0.0 from a source tree."""
    try:
        return version("gallery-layout")
    except PackageNotFoundError:
        return "0.0.0"


def non_negative_int(text: str) -> int:
    """Argparse-style validator for integers greater or equal to zero."""
    try:
        value = int(text)
    except ValueError as exc:
        msg = "must be an integer"
        raise ValueError(msg) from exc
    if value < 0:
        msg = "must not be negative"
        raise ValueError(msg)
    return value


def positive_int(text: str) -> int:
    """Argparse-style validator that enforces a strictly positive integer."""
    value = non_negative_int(text)
    if value == 0:
        msg = "must be positive"
        raise ValueError(msg)
    return value


def _wrap_validator(
    validator: Callable[[str], T],
) -> Callable[[str], T]:
    """Convert ``ValueError`` from a validator into ``ArgumentTypeError``."""

    def wrapper(text: str) -> T:
        try:
            return validator(text)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(str(exc)) from exc

    return wrapper


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct the argument parser for the command-line interface."""
    p = argparse.ArgumentParser(
        prog="gallery-layout",
        description=(
            "Arrange images into justified gallery lines of equal width "
            "whose heights stay close to a desired height."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "gallery-layout photos/\n"
            "gallery-layout a.jpg b.jpg c.jpg --optimized-width 960 --json\n"
            "gallery-layout photos/ --config gallery.toml --quick"
        ),
    )
    p.add_argument(
        "images", nargs="*",
        help="Image files or directories, in display order")
    p.add_argument(
        "--recursive", action="store_true",
        help="Also scan subdirectories of directory arguments")
    p.add_argument(
        "--version", action="version",
        version=f"%(prog)s {installed_version()}")

    layout = p.add_argument_group("layout")
    layout.add_argument(
        "--desired-height", type=_wrap_validator(positive_int),
        help="Height each line should come close to")
    layout.add_argument(
        "--optimized-width", type=_wrap_validator(positive_int),
        help="Width every line is scaled to")
    layout.add_argument(
        "--margin", type=_wrap_validator(non_negative_int),
        help="Gap between images and between lines")
    layout.add_argument(
        "--bias-mode", choices=list(BIAS_MODES),
        help="Aggregate deviation to minimize: average or maximum")
    layout.add_argument(
        "--quick", action="store_true",
        help="Use the fast greedy layout instead of the exhaustive search")

    search = p.add_argument_group("search")
    search.add_argument(
        "--max-best-lines", type=_wrap_validator(non_negative_int),
        help="Fall back to quick mode above this many lines (0: no limit)")

    output = p.add_argument_group("output")
    output.add_argument(
        "--json", action="store_true",
        help="Print the layout as JSON")

    cfg = p.add_argument_group("config")
    cfg.add_argument(
        "--config", type=str,
        help="Path to a gallery TOML config file")
    cfg.add_argument(
        "--validate-config-only", action="store_true",
        help="Validate the config file and exit without laying out images")

    return p


def log_parameters(cfg: gl_config.GalleryConfig, image_count: int) -> None:
    """Log the effective layout parameters."""
    logger.info("Images: %d", image_count)
    logger.info("Desired Height: %d", cfg.layout.desired_height)
    logger.info("Optimized Width: %d", cfg.layout.optimized_width)
    logger.info("Margin: %d", cfg.layout.margin)
    logger.info("Bias Mode: %s", cfg.layout.bias_mode)
    logger.info("Quick Mode: %s",
                "Enabled" if cfg.layout.quick_mode else "Disabled")
    logger.info("Best Mode Line Limit: %s",
                cfg.search.max_best_mode_lines or "none")


def format_layout(collection: LineCollection) -> str:
    """Render a plain-text summary of a layout, one block per line."""
    if not len(collection):
        return "No images.\n"

    out: list[str] = []
    for number, line in enumerate(collection, start=1):
        out.append(
            f"Line {number}: {len(line)} images, "
            f"height {line.height_without_margin:.2f} "
            f"(bias {line.bias_from_desired_height():.2f})",
        )
        for image in line:
            label = image.source.path if image.source is not None else "-"
            out.append(
                f"  {label}: {image.scaled_width:.2f}x"
                f"{image.scaled_height:.2f} "
                f"({image.percentage_width:.2f}%)",
            )
    out.append(f"Total {collection.bias_mode} bias: {collection.bias():.2f}")
    return "\n".join(out) + "\n"


def run_from_args(args: argparse.Namespace) -> LineCollection | None:
    """Lay out the images named by ``args`` and print the result."""
    base_cfg: gl_config.GalleryConfig | None = None
    if args.config:
        base_cfg = gl_config.ConfigLoader.load(args.config)
        if args.validate_config_only:
            logger.info("Config %s validated successfully.", args.config)
            return None

    cfg = gl_config.build_config_from_cli(vars(args), base_config=base_cfg)

    paths = gl_image_io.expand_image_paths(
        args.images, recursive=args.recursive)
    records = gl_image_io.load_image_records(paths)
    log_parameters(cfg, len(records))

    engine = LayoutEngine.from_config(cfg)
    collection = engine.layout(gl_image_io.sorted_records(records))

    if args.json:
        sys.stdout.write(json.dumps(collection.to_dict(), indent=2) + "\n")
    else:
        sys.stdout.write(format_layout(collection))
    return collection


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command-line interface."""
    arg_parser = build_arg_parser()
    args = arg_parser.parse_args(argv)
    if args.validate_config_only and not args.config:
        arg_parser.error("--validate-config-only requires --config")
    if not args.validate_config_only and not args.images:
        arg_parser.error("the following arguments are required: images")

    try:
        run_from_args(args)
    except (GalleryLayoutError, OSError) as exc:
        arg_parser.error(str(exc))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
