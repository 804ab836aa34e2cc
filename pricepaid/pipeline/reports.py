"""Run summary report."""

from __future__ import annotations

from pathlib import Path

from pricepaid.common.errors import OutputError
from pricepaid.common.fs import write_json
from pricepaid.pipeline.aggregate import PriceAggregate
from pricepaid.pipeline.ingest import IngestStats


def write_run_summary(
    path: Path,
    *,
    run_id: str,
    source_path: Path,
    output_path: Path,
    min_year: int,
    location_set_name: str,
    stats: IngestStats,
    aggregate: PriceAggregate,
) -> Path:
    status = "partial" if stats.malformed else "success"
    years = aggregate.years()
    payload = {
        "run_id": run_id,
        "status": status,
        "source": str(source_path),
        "output": str(output_path),
        "filter": {
            "min_year": min_year,
            "location_set": location_set_name,
        },
        "counts": {
            **stats.to_dict(),
            "locations": len(aggregate.locations()),
            "leaves": len(aggregate),
            "prices": aggregate.price_count(),
        },
        "years": {"first": years[0], "last": years[-1]} if years else None,
    }
    try:
        write_json(path, payload)
    except OSError as exc:
        raise OutputError(f"Failed to write run summary to {path}: {exc}") from exc
    return path
