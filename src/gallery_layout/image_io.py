"""Reading natural image sizes from disk for the layout engine."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from PIL import ExifTags, Image, UnidentifiedImageError

from gallery_layout.constants import SUPPORTED_EXTENSIONS
from gallery_layout.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable, Sequence

# EXIF orientations that rotate the image by 90 or 270 degrees
_TRANSPOSED_ORIENTATIONS = frozenset({5, 6, 7, 8})


@dataclass(frozen=True, slots=True)
class ImageRecord:
    """Read-only description of an image file and its display order."""

    path: Path
    width: int
    height: int
    sort: int = 0


def read_image_size(path: str | Path) -> tuple[int, int]:
    """
    Return the displayed ``(width, height)`` of an image file.

    Only the header is parsed; pixel data is never decoded. Images whose
    EXIF orientation rotates them by a quarter turn report swapped
    dimensions, matching how browsers display them.

    Raises:
        FileNotFoundError: If the image file does not exist
        OSError: If the file is not a readable image

    """
    try:
        with Image.open(path) as img:
            width, height = img.size
            orientation = img.getexif().get(ExifTags.Base.Orientation)
    except FileNotFoundError as e:
        msg = f"Image file not found: '{path}'"
        raise FileNotFoundError(msg) from e
    except (UnidentifiedImageError, OSError) as e:
        msg = f"Error reading image '{path}': {e!s}"
        raise OSError(msg) from e

    if orientation in _TRANSPOSED_ORIENTATIONS:
        return height, width
    return width, height


def read_image_record(path: str | Path, sort: int = 0) -> ImageRecord:
    """Build an ImageRecord for ``path``."""
    width, height = read_image_size(path)
    return ImageRecord(path=Path(path), width=width, height=height, sort=sort)


def iter_image_files(folder: str | Path, *, recursive: bool = False) -> list[Path]:
    """List supported image files under ``folder``, sorted by path."""
    root = Path(folder)
    if not root.is_dir():
        msg = f"Image folder not found: {folder}"
        raise FileNotFoundError(msg)

    walker = root.rglob("*") if recursive else root.glob("*")
    return sorted(
        p for p in walker
        if p.is_file() and p.suffix.lower() in SUPPORTED_EXTENSIONS
    )


def expand_image_paths(
    paths: Iterable[str | Path],
    *,
    recursive: bool = False,
) -> list[Path]:
    """Expand directories into their image files, keeping argument order."""
    expanded: list[Path] = []
    for entry in paths:
        path = Path(entry)
        if path.is_dir():
            expanded.extend(iter_image_files(path, recursive=recursive))
        else:
            expanded.append(path)
    return expanded


def load_image_records(paths: Iterable[str | Path]) -> list[ImageRecord]:
    """Read every path in order; the position becomes the sort key."""
    records = [
        read_image_record(path, sort=index)
        for index, path in enumerate(paths)
    ]
    logger.debug("Read sizes of %d images", len(records))
    return records


def sorted_records(records: Iterable[ImageRecord]) -> list[ImageRecord]:
    """Return ``records`` in ascending sort order; equal keys keep order."""
    return sorted(records, key=lambda record: record.sort)


def preview_record(records: Sequence[ImageRecord]) -> ImageRecord | None:
    """Return the record shown as the gallery preview, if any."""
    ordered = sorted_records(records)
    return ordered[0] if ordered else None
