"""Tests for LineCollection ordering and aggregate bias."""
from collections.abc import Callable

import pytest

from gallery_layout.collection import LineCollection
from gallery_layout.exceptions import IllegalStateError, InvalidArgumentError
from gallery_layout.line import Line


@pytest.fixture
def lines_of_known_heights(make_line: Callable[..., Line]) -> list[Line]:
    """Three lines with heights 100, 130 and 40 against a desired 100."""
    return [
        make_line([(50, 100)], desired_height=100, first_line=True),
        make_line([(50, 130)], desired_height=100),
        make_line([(50, 40)], desired_height=100),
    ]


def test_unknown_bias_mode_rejected() -> None:
    with pytest.raises(InvalidArgumentError, match="median"):
        LineCollection("median")  # type: ignore[arg-type]


def test_empty_collection_bias_raises() -> None:
    collection = LineCollection("avg")
    assert len(collection) == 0
    with pytest.raises(IllegalStateError):
        collection.bias()


def test_avg_bias_is_mean(lines_of_known_heights: list[Line]) -> None:
    collection = LineCollection("avg", lines_of_known_heights)
    assert collection.bias() == pytest.approx((0 + 30 + 60) / 3)


def test_max_bias_is_maximum(lines_of_known_heights: list[Line]) -> None:
    collection = LineCollection("max", lines_of_known_heights)
    assert collection.bias() == pytest.approx(60)


def test_add_line_order(make_line: Callable[..., Line]) -> None:
    first = make_line([(10, 10)])
    second = make_line([(20, 10)])
    front = make_line([(30, 10)])

    collection = LineCollection("avg")
    collection.add_line(first)
    collection.add_line(second)
    collection.add_line(front, at_start=True)

    assert collection.lines == (front, first, second)
    assert [image.natural_width for image in collection.images()] == [
        30, 10, 20,
    ]


def test_bias_mode_is_fixed() -> None:
    collection = LineCollection("max")
    assert collection.bias_mode == "max"
    with pytest.raises(AttributeError):
        collection.bias_mode = "avg"  # type: ignore[misc]


def test_to_dict_exports_lines(make_line: Callable[..., Line]) -> None:
    line = make_line([(100, 100), (100, 100)], optimized_width=210,
                     margin=10, first_line=True)
    line.match()
    collection = LineCollection("avg", [line])
    collection.finalize()

    data = collection.to_dict()

    assert data["bias_mode"] == "avg"
    assert data["bias"] == pytest.approx(0)
    assert len(data["lines"]) == 1
    exported = data["lines"][0]
    assert exported["first_line"] is True
    assert exported["width"] == pytest.approx(210)
    assert [img["has_margin_right"] for img in exported["images"]] == [
        True, False,
    ]
    assert exported["images"][0]["source"] is None


def test_to_dict_of_empty_collection() -> None:
    assert LineCollection("max").to_dict() == {
        "bias_mode": "max",
        "bias": None,
        "lines": [],
    }
