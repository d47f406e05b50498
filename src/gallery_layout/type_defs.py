"""
Defines shared type aliases for the gallery layout engine.

Centralizes reusable type hints to improve consistency and readability.
"""
from __future__ import annotations

from typing import Any, Literal, Protocol

BiasMode = Literal["avg", "max"]
LayoutDict = dict[str, Any]


class SizedImage(Protocol):
    """Anything exposing natural pixel dimensions."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...
