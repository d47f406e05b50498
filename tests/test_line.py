"""
Tests for Line width accounting, capacity checks and matching.

Covers:
- Margin convention between images
- has_enough_space on empty and partially filled lines
- match() filling the optimized width exactly
- Bias, finalization and deep cloning
"""
from collections.abc import Callable

import pytest

from gallery_layout.image import ImageDescriptor
from gallery_layout.line import Line

# Matched lines may miss the optimized width by float rounding only
WIDTH_TOLERANCE = 1e-6


class TestWidthAccounting:
    """Margins sit between images, never after the last one."""

    def test_empty_line(self, make_line: Callable[..., Line]) -> None:
        line = make_line([])
        assert line.is_empty()
        assert len(line) == 0
        assert line.width == 0
        assert line.margins_width == 0
        assert line.height_without_margin == 0

    def test_width_with_margins(self, make_line: Callable[..., Line]) -> None:
        line = make_line([(100, 50), (200, 50), (50, 50)], margin=10)
        assert line.width_without_margin == 350
        assert line.margins_width == 20
        assert line.width == 370

    def test_height_uses_tallest_image(
        self,
        make_line: Callable[..., Line],
    ) -> None:
        line = make_line([(100, 50), (100, 80)], margin=7)
        assert line.height_without_margin == 80
        assert line.height == 87

    def test_first_line_has_no_top_margin(
        self,
        make_line: Callable[..., Line],
    ) -> None:
        line = make_line([(100, 80)], margin=7, first_line=True)
        assert line.height == 80


class TestHasEnoughSpace:
    """Capacity test used by greedy packing."""

    def test_empty_line_accepts_oversized_image(
        self,
        make_line: Callable[..., Line],
    ) -> None:
        line = make_line([], optimized_width=100)
        assert line.has_enough_space(ImageDescriptor(5000, 10))

    def test_exact_fit_is_accepted(
        self,
        make_line: Callable[..., Line],
    ) -> None:
        line = make_line([(100, 100)], optimized_width=210, margin=10)
        assert line.has_enough_space(ImageDescriptor(100, 100))

    def test_margin_counts_against_capacity(
        self,
        make_line: Callable[..., Line],
    ) -> None:
        line = make_line([(100, 100)], optimized_width=209, margin=10)
        assert not line.has_enough_space(ImageDescriptor(100, 100))

    def test_add_image_skips_capacity_check(
        self,
        make_line: Callable[..., Line],
    ) -> None:
        line = make_line([(100, 100)], optimized_width=100)
        line.add_image(ImageDescriptor(100, 100))
        assert len(line) == 2
        assert line.width == 200


class TestMatch:
    """match() rescales all images by one factor."""

    def test_match_fills_optimized_width(
        self,
        make_line: Callable[..., Line],
    ) -> None:
        line = make_line([(300, 200), (150, 100), (90, 60)],
                         optimized_width=1000, margin=12)
        line.match()
        assert line.width == pytest.approx(1000, abs=WIDTH_TOLERANCE)

    def test_match_is_uniform(self, make_line: Callable[..., Line]) -> None:
        line = make_line([(100, 100), (300, 100)], optimized_width=200)
        line.match()
        first, second = line.images
        assert first.scale == pytest.approx(0.5)
        assert second.scale == pytest.approx(0.5)
        assert line.height_without_margin == pytest.approx(50)

    def test_match_shrinking_line_lowers_height(
        self,
        make_line: Callable[..., Line],
    ) -> None:
        line = make_line([(800, 400), (800, 400)],
                         optimized_width=1200, margin=10)
        line.match()
        assert line.height_without_margin == pytest.approx(297.5)
        assert line.images[0].scaled_width == pytest.approx(595)

    def test_match_on_empty_line_is_noop(
        self,
        make_line: Callable[..., Line],
    ) -> None:
        line = make_line([])
        line.match()
        assert line.is_empty()


class TestBias:
    """Bias measures the rendered height after matching."""

    def test_bias_after_match(self, make_line: Callable[..., Line]) -> None:
        line = make_line([(800, 400)], desired_height=400,
                         optimized_width=1200)
        assert line.bias_from_desired_height() == 0
        line.match()
        assert line.bias_from_desired_height() == pytest.approx(200)

    def test_bias_ignores_top_margin(
        self,
        make_line: Callable[..., Line],
    ) -> None:
        line = make_line([(100, 90)], desired_height=100, margin=50)
        assert line.bias_from_desired_height() == 10


class TestFinalizeAndClone:
    """Presentation fields and deep copies."""

    def test_finalize_sets_presentation_fields(
        self,
        make_line: Callable[..., Line],
    ) -> None:
        line = make_line([(100, 100), (300, 100)],
                         optimized_width=410, margin=10)
        line.match()
        line.finalize()
        first, second = line.images

        assert first.percentage_width == pytest.approx(100 / 410 * 100)
        assert second.percentage_width == pytest.approx(300 / 410 * 100)
        assert first.percentage_margin == pytest.approx(10 / 410 * 100)
        assert first.has_margin_top is True
        assert first.has_margin_right is True
        assert second.has_margin_right is False

    def test_finalize_first_line_has_no_top_margin(
        self,
        make_line: Callable[..., Line],
    ) -> None:
        line = make_line([(100, 100)], first_line=True)
        line.match()
        line.finalize()
        assert line.images[0].has_margin_top is False
        assert line.images[0].has_margin_right is False
        assert line.images[0].percentage_width == pytest.approx(100)

    def test_clone_is_deep(self, make_line: Callable[..., Line]) -> None:
        line = make_line([(100, 100), (200, 100), (50, 100)],
                         first_line=True)
        original_scales = [image.scale for image in line]

        copy = line.clone()
        for image in copy:
            image.rescale(3)
        copy.add_image(ImageDescriptor(10, 10))

        assert [image.scale for image in line] == original_scales
        assert len(line) == 3
        assert len(copy) == 4
        assert copy.first_line is True
        assert all(
            a is not b for a, b in zip(line.images, copy.images, strict=False)
        )
