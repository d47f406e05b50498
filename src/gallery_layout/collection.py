"""Ordered set of gallery lines and the aggregate bias used to rank them."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gallery_layout.constants import BIAS_MODE_AVG, BIAS_MODE_MAX, BIAS_MODES
from gallery_layout.exceptions import IllegalStateError, InvalidArgumentError

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable, Iterator

    from gallery_layout.image import ImageDescriptor
    from gallery_layout.line import Line
    from gallery_layout.type_defs import BiasMode, LayoutDict


class LineCollection:
    """
    All lines of a gallery in reading order.

    Two bias modes are supported:

    - ``avg`` keeps the average deviation from the desired height low,
      which is usually the preferred option.
    - ``max`` minimizes the single worst line, which better prevents
      very tall rows.
    """

    def __init__(
        self,
        bias_mode: BiasMode,
        lines: Iterable[Line] | None = None,
    ) -> None:
        if bias_mode not in BIAS_MODES:
            msg = f"Bias mode '{bias_mode}' does not exist."
            raise InvalidArgumentError(msg)
        self._bias_mode: BiasMode = bias_mode
        self._lines: list[Line] = list(lines or [])

    @property
    def bias_mode(self) -> BiasMode:
        return self._bias_mode

    @property
    def lines(self) -> tuple[Line, ...]:
        return tuple(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[Line]:
        return iter(self._lines)

    def add_line(self, line: Line, *, at_start: bool = False) -> None:
        """Append ``line``, or insert it in front when ``at_start`` is set."""
        if at_start:
            self._lines.insert(0, line)
        else:
            self._lines.append(line)

    def images(self) -> list[ImageDescriptor]:
        """Return every image of every line in reading order."""
        return [image for line in self._lines for image in line]

    def bias(self) -> float:
        """
        Return the aggregate deviation from the desired height.

        Raises:
            IllegalStateError: If the collection holds no lines.

        """
        if not self._lines:
            msg = "The bias of an empty LineCollection can not be calculated."
            raise IllegalStateError(msg)

        biases = [line.bias_from_desired_height() for line in self._lines]
        if self._bias_mode == BIAS_MODE_AVG:
            return sum(biases) / len(biases)
        if self._bias_mode == BIAS_MODE_MAX:
            return max(biases)

        msg = f"Bias mode '{self._bias_mode}' does not exist."
        raise InvalidArgumentError(msg)

    def finalize(self) -> None:
        """Write presentation fields on every image of every line."""
        for line in self._lines:
            line.finalize()

    def to_dict(self) -> LayoutDict:
        """Export the layout as plain data for a rendering layer."""
        return {
            "bias_mode": self._bias_mode,
            "bias": self.bias() if self._lines else None,
            "lines": [
                {
                    "first_line": line.first_line,
                    "width": line.width,
                    "height": line.height,
                    "bias": line.bias_from_desired_height(),
                    "images": [
                        {
                            "source": _describe_source(image.source),
                            "natural_width": image.natural_width,
                            "natural_height": image.natural_height,
                            "scale": image.scale,
                            "width": image.scaled_width,
                            "height": image.scaled_height,
                            "percentage_width": image.percentage_width,
                            "percentage_margin": image.percentage_margin,
                            "has_margin_top": image.has_margin_top,
                            "has_margin_right": image.has_margin_right,
                        }
                        for image in line
                    ],
                }
                for line in self._lines
            ],
        }

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(bias_mode={self._bias_mode!r}, "
            f"lines={len(self._lines)})"
        )


def _describe_source(source: object) -> str | None:
    if source is None:
        return None
    path = getattr(source, "path", None)
    return str(path) if path is not None else repr(source)
