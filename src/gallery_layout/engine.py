"""
Layout orchestration: packing images into lines and choosing row breaks.

Two strategies are available:

- quick mode fills each line greedily, first-fit-then-stop, in a single
  linear pass.
- best mode starts from the same greedy line and, at every line boundary,
  compares two continuations end to end: keep the line as it is, or pull
  the next image into it as well. Matching a line rescales all of its
  images uniformly, so one extra image changes the height of the line and
  everything packed after it. The lower aggregate bias wins; ties keep
  the line as it is.

Only these two candidates are explored per boundary, so best mode is
not a full optimum over every possible row break. Its cost still grows
exponentially with the number of lines, which is why inputs needing
many lines fall back to quick mode.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from gallery_layout.collection import LineCollection
from gallery_layout.config import GalleryConfig, LayoutConfig
from gallery_layout.config_defaults import DEFAULT_MAX_BEST_MODE_LINES
from gallery_layout.image import ImageDescriptor
from gallery_layout.line import Line
from gallery_layout.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable

    from gallery_layout.type_defs import BiasMode, SizedImage

LayoutMode = Literal["quick", "best"]


class LayoutEngine:
    """
    Arrange images into lines of equal width and near-desired height.

    The engine reads its constants once from an already validated
    configuration and injects them into every line it creates.
    """

    def __init__(
        self,
        config: LayoutConfig,
        *,
        max_best_mode_lines: int = DEFAULT_MAX_BEST_MODE_LINES,
    ) -> None:
        self.desired_height = config.desired_height
        self.optimized_width = config.optimized_width
        self.margin = config.margin
        self.bias_mode: BiasMode = config.bias_mode
        self.quick_mode = config.quick_mode
        self.max_best_mode_lines = max_best_mode_lines

    @classmethod
    def from_config(cls, config: GalleryConfig) -> LayoutEngine:
        return cls(
            config.layout,
            max_best_mode_lines=config.search.max_best_mode_lines,
        )

    def new_line(self, *, first_line: bool) -> Line:
        return Line(
            self.desired_height,
            self.optimized_width,
            self.margin,
            first_line=first_line,
        )

    def prepare(
        self,
        images: Iterable[SizedImage | ImageDescriptor],
    ) -> list[ImageDescriptor]:
        """
        Wrap ``images`` into fresh descriptors scaled to the desired height.

        Descriptors passed in are cloned, so the caller's objects are
        never mutated by a layout run.
        """
        prepared: list[ImageDescriptor] = []
        for image in images:
            if isinstance(image, ImageDescriptor):
                descriptor = image.clone()
            else:
                descriptor = ImageDescriptor.from_source(image)
            descriptor.set_scale_by_height(self.desired_height)
            prepared.append(descriptor)
        return prepared

    def pack_line(
        self,
        images: list[ImageDescriptor],
        *,
        first_line: bool,
    ) -> Line:
        """
        Fill one line from the front of ``images`` and remove what was used.

        Images are taken in order until the first one that does not fit;
        packing stops there even if a later image would fit.
        """
        line = self.new_line(first_line=first_line)
        count = 0
        for image in images:
            if not line.has_enough_space(image):
                break
            line.add_image(image)
            count += 1
        del images[:count]
        return line

    def find_quick_order(
        self,
        images: list[ImageDescriptor],
    ) -> LineCollection:
        """Greedy single pass; every image lands in exactly one line."""
        remaining = list(images)
        collection = LineCollection(self.bias_mode)
        first_line = True
        while remaining:
            line = self.pack_line(remaining, first_line=first_line)
            line.match()
            collection.add_line(line)
            first_line = False
        return collection

    def find_best_order(
        self,
        images: list[ImageDescriptor],
        *,
        first_line: bool = True,
    ) -> LineCollection:
        """
        Recursively choose between keeping and extending each greedy line.

        Every recursive call consumes at least one image, so the depth is
        bounded by ``len(images)``.
        """
        if not images:
            return LineCollection(self.bias_mode)

        remaining = list(images)
        line = self.pack_line(remaining, first_line=first_line)

        if not remaining:
            line.match()
            return LineCollection(self.bias_mode, [line])

        # Scale mutation is destructive: each branch gets its own copies.
        kept_rest = [image.clone() for image in remaining]
        extended = line.clone()
        extended.add_image(remaining[0].clone())
        extended_rest = remaining[1:]

        kept = self.find_best_order(kept_rest, first_line=False)
        line.match()
        kept.add_line(line, at_start=True)

        extended.match()
        pulled = self.find_best_order(extended_rest, first_line=False)
        pulled.add_line(extended, at_start=True)

        if pulled.bias() < kept.bias():
            return pulled
        return kept

    def count_greedy_lines(self, images: list[ImageDescriptor]) -> int:
        """Number of lines quick mode would produce for ``images``."""
        remaining = list(images)
        count = 0
        while remaining:
            self.pack_line(remaining, first_line=count == 0)
            count += 1
        return count

    def select_mode(self, images: list[ImageDescriptor]) -> LayoutMode:
        """
        Pick quick or best mode for already prepared ``images``.

        The search cost follows the number of line boundaries, not the
        number of images, so the limit applies to the greedy line count.
        """
        if self.quick_mode:
            return "quick"
        limit = self.max_best_mode_lines
        if not limit:
            return "best"
        line_count = self.count_greedy_lines(images)
        if line_count > limit:
            logger.warning(
                "Gallery needs %d lines, more than the best mode limit of "
                "%d. Falling back to quick mode.",
                line_count,
                limit,
            )
            return "quick"
        return "best"

    def layout(
        self,
        images: Iterable[SizedImage | ImageDescriptor],
    ) -> LineCollection:
        """
        Lay out ``images`` and return the finalized line collection.

        The returned images carry their final scale together with the
        presentation fields a renderer needs.
        """
        prepared = self.prepare(images)
        mode = self.select_mode(prepared)
        logger.debug(
            "Laying out %d images in %s mode (bias mode %s)",
            len(prepared),
            mode,
            self.bias_mode,
        )

        if mode == "quick":
            collection = self.find_quick_order(prepared)
        else:
            collection = self.find_best_order(prepared)
        collection.finalize()

        if len(collection):
            logger.info(
                "Arranged %d images into %d lines, %s bias %.2f",
                len(prepared),
                len(collection),
                self.bias_mode,
                collection.bias(),
            )
        return collection


def adjust_images(
    images: Iterable[SizedImage | ImageDescriptor],
    config: GalleryConfig | LayoutConfig,
) -> LineCollection:
    """Lay out ``images`` with a one-off engine built from ``config``."""
    if isinstance(config, GalleryConfig):
        engine = LayoutEngine.from_config(config)
    else:
        engine = LayoutEngine(config)
    return engine.layout(images)
