"""Minimal strict schemas for YAML config validation."""

from __future__ import annotations

from pricepaid.common.errors import ConfigError
from pricepaid.common.models import TransferDuration


def _assert_mapping(obj, ctx: str) -> None:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    _assert_mapping(obj, ctx)
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def validate_pipeline_config(cfg: dict, *, allow_unknown: bool = False) -> dict:
    top_required = {"source", "filter", "output", "http"}
    _assert_required_keys(cfg, top_required, "pipeline config")
    _assert_no_unknown_keys(cfg, top_required, "pipeline config", allow_unknown)

    source_keys = {"url", "filename", "has_header", "skip_malformed"}
    _assert_required_keys(cfg["source"], source_keys, "source")
    _assert_no_unknown_keys(cfg["source"], source_keys, "source", allow_unknown)

    filter_keys = {"min_year", "required_duration"}
    _assert_required_keys(cfg["filter"], filter_keys, "filter")
    _assert_no_unknown_keys(cfg["filter"], filter_keys, "filter", allow_unknown)
    if not isinstance(cfg["filter"]["min_year"], int) or isinstance(cfg["filter"]["min_year"], bool):
        raise ConfigError("filter.min_year must be an integer")
    durations = {member.value for member in TransferDuration}
    if cfg["filter"]["required_duration"] not in durations:
        raise ConfigError(
            f"filter.required_duration must be one of: {', '.join(sorted(durations))}"
        )

    output_keys = {"filename", "indent", "summary_filename"}
    _assert_required_keys(cfg["output"], output_keys, "output")
    _assert_no_unknown_keys(cfg["output"], output_keys, "output", allow_unknown)

    _assert_required_keys(cfg["http"], {"connect_timeout", "read_timeout", "max_attempts"}, "http")

    return cfg


def validate_locations_config(cfg: dict) -> dict:
    _assert_required_keys(cfg, {"name", "codes"}, "locations")
    codes = cfg["codes"]
    if not isinstance(codes, list) or not codes:
        raise ConfigError("locations.codes must be a non-empty list")

    bad = [code for code in codes if not isinstance(code, str) or not code or " " in code]
    if bad:
        raise ConfigError(f"Invalid location codes: {', '.join(map(str, bad))}")

    dupes = {code for code in codes if codes.count(code) > 1}
    if dupes:
        raise ConfigError(f"Duplicate location codes: {', '.join(sorted(dupes))}")

    return cfg
