"""
Scale model for a single gallery image.

An ImageDescriptor never touches pixel data. It pairs the immutable
natural size of an image with a mutable scale factor, which is all the
layout engine needs to reason about rendered dimensions.
"""

from __future__ import annotations

from typing import Any

from gallery_layout.exceptions import IllegalStateError, InvalidArgumentError


class ImageDescriptor:
    """
    Mutable scale wrapper around an image's natural width and height.

    The presentation fields (``percentage_width``, ``percentage_margin``,
    ``has_margin_top`` and ``has_margin_right``) are plain output data.
    They are written when a finished line is finalized and are not used
    by the layout computation itself.
    """

    __slots__ = (
        "_natural_height",
        "_natural_width",
        "has_margin_right",
        "has_margin_top",
        "percentage_margin",
        "percentage_width",
        "scale",
        "source",
    )

    def __init__(
        self,
        natural_width: int,
        natural_height: int,
        *,
        scale: float = 1.0,
        source: Any = None,
    ) -> None:
        if not (
            _is_positive_whole(natural_width)
            and _is_positive_whole(natural_height)
        ):
            msg = (
                "Natural image dimensions must be positive integers, got "
                f"{natural_width}x{natural_height}"
            )
            raise InvalidArgumentError(msg)
        if scale < 0:
            msg = "A negative scale factor is not allowed"
            raise InvalidArgumentError(msg)

        self._natural_width = int(natural_width)
        self._natural_height = int(natural_height)
        self.scale = float(scale)
        # Producer record passed through untouched, e.g. an ImageRecord
        self.source = source
        self.percentage_width = 0.0
        self.percentage_margin = 0.0
        self.has_margin_top = True
        self.has_margin_right = True

    @classmethod
    def from_source(cls, source: Any) -> ImageDescriptor:
        """Wrap any object exposing ``width`` and ``height`` attributes."""
        return cls(source.width, source.height, source=source)

    @property
    def natural_width(self) -> int:
        return self._natural_width

    @property
    def natural_height(self) -> int:
        return self._natural_height

    @property
    def scaled_width(self) -> float:
        return self._natural_width * self.scale

    @property
    def scaled_height(self) -> float:
        return self._natural_height * self.scale

    def set_scale_by_height(self, height: float) -> None:
        """Scale so the rendered height equals ``height``."""
        if height < 0:
            msg = "A negative image height is not allowed"
            raise InvalidArgumentError(msg)
        self.scale *= height / self._current(self.scaled_height)

    def set_scale_by_width(self, width: float) -> None:
        """Scale so the rendered width equals ``width``."""
        if width < 0:
            msg = "A negative image width is not allowed"
            raise InvalidArgumentError(msg)
        self.scale *= width / self._current(self.scaled_width)

    def rescale(self, factor: float) -> None:
        """Multiply the current scale by ``factor``."""
        if factor < 0:
            msg = "A negative scale factor is not allowed"
            raise InvalidArgumentError(msg)
        self.scale *= factor

    def clone(self) -> ImageDescriptor:
        """Return an independent copy, including scale and output fields."""
        copy = ImageDescriptor(
            self._natural_width,
            self._natural_height,
            scale=self.scale,
            source=self.source,
        )
        copy.percentage_width = self.percentage_width
        copy.percentage_margin = self.percentage_margin
        copy.has_margin_top = self.has_margin_top
        copy.has_margin_right = self.has_margin_right
        return copy

    def _current(self, dimension: float) -> float:
        if dimension == 0:
            msg = "Cannot derive a scale from an image scaled down to zero"
            raise IllegalStateError(msg)
        return dimension

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self._natural_width}x"
            f"{self._natural_height}, scale={self.scale:.6g})"
        )


def _is_positive_whole(value: float) -> bool:
    # 0.5 would otherwise truncate to a zero-sized image
    return value > 0 and int(value) == value
