"""Aggregate stage: ingest, filter, fold and persist."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from pricepaid.common.location_set import LocationSet
from pricepaid.common.logging import log_event
from pricepaid.common.models import TransferDuration
from pricepaid.pipeline.aggregate import PriceAggregate, aggregate
from pricepaid.pipeline.export import write_aggregate_json
from pricepaid.pipeline.ingest import parse_and_filter
from pricepaid.pipeline.reports import write_run_summary


def output_paths(pipeline_config: dict, data_dir: Path) -> tuple[Path, Path]:
    output = pipeline_config["output"]
    out_dir = data_dir / "out"
    return out_dir / output["filename"], out_dir / "reports" / output["summary_filename"]


def run_aggregate(
    pipeline_config: dict,
    location_set: LocationSet,
    source: Path,
    output: Path,
    summary: Path,
    logger: logging.Logger,
    run_id: str,
    *,
    min_year: int | None = None,
    skip_malformed: bool | None = None,
) -> PriceAggregate:
    filter_cfg = pipeline_config["filter"]
    source_cfg = pipeline_config["source"]
    if min_year is None:
        min_year = filter_cfg["min_year"]
    if skip_malformed is None:
        skip_malformed = bool(source_cfg["skip_malformed"])

    started = time.monotonic()
    entries, stats = parse_and_filter(
        source,
        location_set,
        min_year,
        required_duration=TransferDuration(filter_cfg["required_duration"]),
        has_header=bool(source_cfg["has_header"]),
        skip_malformed=skip_malformed,
    )
    log_event(
        logger,
        f"parsed and filtered {source}",
        run_id=run_id,
        stage="aggregate",
        source=str(source),
        event="INGEST_DONE",
        status="partial" if stats.malformed else "ok",
        rows_in=stats.rows_in,
        rows_out=stats.eligible,
        duration_ms=int((time.monotonic() - started) * 1000),
    )

    result = aggregate(entries)
    del entries
    log_event(
        logger,
        f"grouped prices into {len(result)} leaves",
        run_id=run_id,
        stage="aggregate",
        event="AGGREGATE_DONE",
        status="ok",
        rows_in=stats.eligible,
        rows_out=len(result),
    )

    write_aggregate_json(output, result, indent=pipeline_config["output"]["indent"])
    write_run_summary(
        summary,
        run_id=run_id,
        source_path=source,
        output_path=output,
        min_year=min_year,
        location_set_name=location_set.name,
        stats=stats,
        aggregate=result,
    )
    log_event(
        logger,
        f"wrote aggregate to {output}",
        run_id=run_id,
        stage="aggregate",
        event="OUTPUT_WRITTEN",
        status="ok",
        duration_ms=int((time.monotonic() - started) * 1000),
    )
    return result
