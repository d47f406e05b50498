"""
A single row of images in a justified gallery.

Widths follow one convention throughout: the total width of a line is
the sum of its scaled image widths plus one margin *between* each pair
of adjacent images. No margin follows the last image.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gallery_layout.constants import PERCENT

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterator

    from gallery_layout.image import ImageDescriptor


class Line:
    """
    Ordered row of images that is rescaled to fill the optimized width.

    The layout constants are injected once at construction rather than
    looked up from global configuration, so a line can be cloned and
    evaluated in isolation.
    """

    def __init__(
        self,
        desired_height: int,
        optimized_width: int,
        margin: int,
        *,
        first_line: bool = False,
    ) -> None:
        self.desired_height = desired_height
        self.optimized_width = optimized_width
        self.margin = margin
        self.first_line = first_line
        self._images: list[ImageDescriptor] = []

    @property
    def images(self) -> tuple[ImageDescriptor, ...]:
        return tuple(self._images)

    def __len__(self) -> int:
        return len(self._images)

    def __iter__(self) -> Iterator[ImageDescriptor]:
        return iter(self._images)

    def is_empty(self) -> bool:
        return not self._images

    def add_image(self, image: ImageDescriptor) -> None:
        """Append ``image`` without checking the remaining space."""
        self._images.append(image)

    def has_enough_space(self, image: ImageDescriptor) -> bool:
        """
        Return True if ``image`` still fits into this line.

        An empty line always accepts an image, so every line holds at
        least one image even when that image is wider than the line.
        """
        if self.is_empty():
            return True
        needed = self.width + self.margin + image.scaled_width
        return needed <= self.optimized_width

    @property
    def width_without_margin(self) -> float:
        return sum(image.scaled_width for image in self._images)

    @property
    def margins_width(self) -> int:
        """Total width of the gaps between adjacent images."""
        if not self._images:
            return 0
        return (len(self._images) - 1) * self.margin

    @property
    def width(self) -> float:
        return self.width_without_margin + self.margins_width

    @property
    def height_without_margin(self) -> float:
        return max(
            (image.scaled_height for image in self._images), default=0.0,
        )

    @property
    def height(self) -> float:
        """Rendered height, including the top margin of non-first lines."""
        height = self.height_without_margin
        if not self.first_line:
            height += self.margin
        return height

    def match(self) -> None:
        """
        Rescale every image so the line fills the optimized width exactly.

        The same factor is applied to all images, which changes the line
        height as well. Calling this on an empty line does nothing.
        """
        if self.is_empty():
            return
        resize_factor = (
            (self.optimized_width - self.margins_width)
            / self.width_without_margin
        )
        for image in self._images:
            image.rescale(resize_factor)

    def bias_from_desired_height(self) -> float:
        """Absolute deviation of the rendered height from the desired one."""
        return abs(self.height_without_margin - self.desired_height)

    def finalize(self) -> None:
        """Write the presentation fields of every image in this line."""
        width = self.width
        if width == 0:
            return
        for image in self._images:
            image.percentage_width = image.scaled_width / width * PERCENT
            image.percentage_margin = self.margin / width * PERCENT
            image.has_margin_top = not self.first_line
            image.has_margin_right = True
        self._images[-1].has_margin_right = False

    def clone(self) -> Line:
        """Deep copy this line; images are cloned, not shared."""
        copy = Line(
            self.desired_height,
            self.optimized_width,
            self.margin,
            first_line=self.first_line,
        )
        copy._images = [image.clone() for image in self._images]  # noqa: SLF001
        return copy

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(images={len(self._images)}, "
            f"width={self.width:.2f}, height={self.height_without_margin:.2f}, "
            f"first_line={self.first_line})"
        )
