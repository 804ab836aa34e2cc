"""JSON export and re-load of the price aggregate."""

from __future__ import annotations

from pathlib import Path

from pricepaid.common.errors import OutputError
from pricepaid.common.fs import read_json, write_json_atomic
from pricepaid.common.models import PropertyAge, PropertyType
from pricepaid.pipeline.aggregate import NestedPrices, PriceAggregate


def render_aggregate(aggregate: PriceAggregate) -> dict:
    """Nested JSON-ready form; categories are written by name, years as strings."""
    rendered: dict = {}
    for location, by_year in aggregate.to_nested().items():
        rendered[location] = {
            str(year): {
                property_type.value: {property_age.value: prices for property_age, prices in by_age.items()}
                for property_type, by_age in by_type.items()
            }
            for year, by_type in by_year.items()
        }
    return rendered


def parse_aggregate(payload: dict) -> PriceAggregate:
    nested: NestedPrices = {}
    try:
        for location, by_year in payload.items():
            nested[location] = {
                int(year): {
                    PropertyType(type_name): {
                        PropertyAge(age_name): [int(price) for price in prices]
                        for age_name, prices in by_age.items()
                    }
                    for type_name, by_age in by_type.items()
                }
                for year, by_type in by_year.items()
            }
    except (AttributeError, TypeError, ValueError) as exc:
        raise OutputError(f"Malformed aggregate payload: {exc}") from exc
    return PriceAggregate.from_nested(nested)


def write_aggregate_json(path: Path, aggregate: PriceAggregate, *, indent: int | str | None = "\t") -> Path:
    payload = render_aggregate(aggregate)
    try:
        write_json_atomic(path, payload, indent=indent)
    except (OSError, TypeError, ValueError) as exc:
        raise OutputError(f"Failed to write aggregate to {path}: {exc}") from exc
    return path


def read_aggregate_json(path: Path) -> PriceAggregate:
    return parse_aggregate(read_json(path))
