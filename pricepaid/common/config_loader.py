"""Configuration loading and validation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pricepaid.common.errors import ConfigError
from pricepaid.common.fs import read_yaml
from pricepaid.common.location_set import LocationSet
from pricepaid.common.schema import validate_locations_config, validate_pipeline_config

PIPELINE_FILENAME = "pipeline.yml"
LOCATIONS_FILENAME = "locations.yml"


@dataclass(frozen=True)
class ConfigBundle:
    pipeline: dict
    locations: LocationSet


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_yaml_with_overlay(path: Path, overlay_path: Path | None) -> dict:
    if not path.exists():
        raise ConfigError(f"Missing config file: {path}")
    base = read_yaml(path)
    if overlay_path is None or not overlay_path.exists():
        return base
    overlay = read_yaml(overlay_path)
    if overlay is None:
        return base
    return _deep_merge(base, overlay)


def load_all_configs(
    config_dir: Path,
    *,
    allow_unknown: bool = False,
    overlay_config_dir: Path | None = None,
) -> ConfigBundle:
    def overlay_for(name: str) -> Path | None:
        return (overlay_config_dir / name) if overlay_config_dir is not None else None

    pipeline = validate_pipeline_config(
        _load_yaml_with_overlay(config_dir / PIPELINE_FILENAME, overlay_for(PIPELINE_FILENAME)),
        allow_unknown=allow_unknown,
    )
    # A list overlay replaces the codes outright rather than extending them.
    locations_cfg = validate_locations_config(
        _load_yaml_with_overlay(config_dir / LOCATIONS_FILENAME, overlay_for(LOCATIONS_FILENAME))
    )
    return ConfigBundle(pipeline=pipeline, locations=LocationSet.from_config(locations_cfg))
