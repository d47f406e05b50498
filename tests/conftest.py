"""
Test configuration and shared fixtures for gallery_layout.

This module defines reusable pytest fixtures for layout configuration,
image sizes and on-disk sample images. These fixtures support all test
modules in the test suite.

Note:
    This file is automatically loaded by pytest and should not be
    renamed.

"""
from collections.abc import Callable
from pathlib import Path
from typing import Any, NamedTuple

import pytest
from PIL import Image

from gallery_layout.config import GalleryConfig, LayoutConfig
from gallery_layout.image import ImageDescriptor
from gallery_layout.line import Line
from gallery_layout.logging_utils import logger


class Size(NamedTuple):
    """Minimal image record exposing natural dimensions."""

    width: int
    height: int


@pytest.fixture
def make_layout_config() -> Callable[..., LayoutConfig]:
    """Build LayoutConfig instances with keyword overrides."""

    def _build(**overrides: Any) -> LayoutConfig:
        return LayoutConfig.model_validate(overrides)

    return _build


@pytest.fixture
def make_gallery_config() -> Callable[..., GalleryConfig]:
    """Build GalleryConfig instances with optional section overrides."""

    def _build(
        *,
        layout: dict[str, Any] | None = None,
        search: dict[str, Any] | None = None,
    ) -> GalleryConfig:
        data: dict[str, Any] = {}
        if layout:
            data["layout"] = dict(layout)
        if search:
            data["search"] = dict(search)
        return GalleryConfig.model_validate(data)

    return _build


@pytest.fixture
def worked_example_config(
    make_layout_config: Callable[..., LayoutConfig],
) -> LayoutConfig:
    """Configuration of the three-image reference example."""
    return make_layout_config(
        desired_height=400,
        optimized_width=1200,
        margin=10,
        bias_mode="avg",
    )


@pytest.fixture
def worked_example_sizes() -> list[Size]:
    """Three images that all become 800 wide at a height of 400."""
    return [Size(1000, 500), Size(800, 400), Size(600, 300)]


@pytest.fixture
def make_line() -> Callable[..., Line]:
    """Factory for lines holding images of the given natural sizes."""

    def _build(
        sizes: list[tuple[int, int]],
        *,
        desired_height: int = 100,
        optimized_width: int = 300,
        margin: int = 0,
        first_line: bool = False,
    ) -> Line:
        line = Line(
            desired_height,
            optimized_width,
            margin,
            first_line=first_line,
        )
        for width, height in sizes:
            line.add_image(ImageDescriptor(width, height))
        return line

    return _build


@pytest.fixture
def image_dir(tmp_path: Path) -> Path:
    """Directory with three small images of different aspect ratios."""
    folder = tmp_path / "photos"
    folder.mkdir()
    Image.new("RGB", (200, 100), color="red").save(folder / "a.png")
    Image.new("RGB", (100, 100), color="green").save(folder / "b.jpg")
    Image.new("RGB", (100, 200), color="blue").save(folder / "c.png")
    (folder / "notes.txt").write_text("not an image", encoding="utf-8")
    return folder


@pytest.fixture(autouse=True)
def enable_logger_propagation(monkeypatch: pytest.MonkeyPatch) -> None:
    """Enable propagation for the layout logger to allow caplog to work."""
    monkeypatch.setattr(logger, "propagate", True)
