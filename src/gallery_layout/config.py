"""
Configuration schema and loader for the gallery layout engine.

Defines Pydantic models representing structured configuration sections
and a TOML-based config loader. Validation happens once, here, at the
boundary; the engine trusts the values it receives afterwards.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Annotated, Any

import tomlkit
from pydantic import (
    BaseModel,
    BeforeValidator,
    Field,
    ValidationError,
    model_validator,
)

from gallery_layout.config_defaults import (
    DEFAULT_BIAS_MODE,
    DEFAULT_DESIRED_HEIGHT,
    DEFAULT_MARGIN,
    DEFAULT_MAX_BEST_MODE_LINES,
    DEFAULT_OPTIMIZED_WIDTH,
    DEFAULT_QUICK_MODE,
)
from gallery_layout.exceptions import InvalidConfigurationError
from gallery_layout.type_defs import BiasMode

# CLI argument name -> (config section, field)
_CLI_OVERRIDES: dict[str, tuple[str, str]] = {
    "desired_height": ("layout", "desired_height"),
    "optimized_width": ("layout", "optimized_width"),
    "margin": ("layout", "margin"),
    "bias_mode": ("layout", "bias_mode"),
    "max_best_lines": ("search", "max_best_mode_lines"),
}


def _reject_text_and_bool(value: Any) -> Any:
    if isinstance(value, (bool, str)):
        msg = f"must be a number, got {type(value).__name__} {value!r}"
        raise ValueError(msg)
    return value


# Lax int that still refuses "300" and True
WholeNumber = Annotated[int, BeforeValidator(_reject_text_and_bool)]


class LayoutConfig(BaseModel):
    """
    Control the geometry of gallery lines.

    Integer fields reject strings, booleans and values with a fractional
    component; a float such as ``300.0`` is accepted and stored as ``300``.
    """

    desired_height: WholeNumber = Field(DEFAULT_DESIRED_HEIGHT, gt=0)
    optimized_width: WholeNumber = Field(DEFAULT_OPTIMIZED_WIDTH, gt=0)
    margin: WholeNumber = Field(DEFAULT_MARGIN, ge=0)
    bias_mode: BiasMode = Field(DEFAULT_BIAS_MODE)
    quick_mode: bool = DEFAULT_QUICK_MODE

    @model_validator(mode="after")
    def _width_covers_margin(self) -> LayoutConfig:
        if self.optimized_width < self.margin:
            msg = (
                "optimized_width must be greater or equal to the margin "
                f"({self.optimized_width} < {self.margin})"
            )
            raise ValueError(msg)
        return self


class SearchConfig(BaseModel):
    """Limit the exhaustive best mode search. Zero disables the limit."""

    max_best_mode_lines: WholeNumber = Field(DEFAULT_MAX_BEST_MODE_LINES, ge=0)


class GalleryConfig(BaseModel):
    """
    Root configuration object combining all supported sections.

    Mirrors the structure of config.toml, grouping related parameters
    under ``[layout]`` and ``[search]``.
    """

    layout: LayoutConfig = Field(
        default_factory=lambda: LayoutConfig.model_validate({}),
    )
    search: SearchConfig = Field(
        default_factory=lambda: SearchConfig.model_validate({}),
    )


def load_layout_config(data: Mapping[str, Any]) -> GalleryConfig:
    """
    Validate raw configuration data into a GalleryConfig.

    Raises:
        InvalidConfigurationError: If any value is missing its constraints.

    """
    try:
        return GalleryConfig.model_validate(dict(data))
    except ValidationError as exc:
        msg = f"Invalid gallery configuration: {exc}"
        raise InvalidConfigurationError(msg) from exc


class ConfigLoader:
    """
    Loads and parses a TOML configuration file into a typed config object.

    Falls back to defaults for any missing subsections or fields.
    """

    @staticmethod
    def load(path: str) -> GalleryConfig:
        """Load a gallery configuration from a TOML file."""
        config_path = Path(path)
        if not config_path.is_file():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        with config_path.open("r", encoding="utf-8") as f:
            doc = tomlkit.load(f)

        return load_layout_config(doc.unwrap())


def build_config_from_cli(
    args: Mapping[str, Any],
    base_config: GalleryConfig | None = None,
    loader: Callable[[str], GalleryConfig] = ConfigLoader.load,
) -> GalleryConfig:
    """
    Merge command-line overrides on top of a base configuration.

    Only keys present in ``args`` override the base. ``quick`` switches
    quick mode on; it never switches a configured quick mode off.
    """
    if base_config is None and args.get("config"):
        base_config = loader(args["config"])
    base = base_config or GalleryConfig.model_validate({})

    data = base.model_dump()
    for arg_name, (section, field) in _CLI_OVERRIDES.items():
        if args.get(arg_name) is not None:
            data[section][field] = args[arg_name]
    if args.get("quick"):
        data["layout"]["quick_mode"] = True

    return load_layout_config(data)
