"""Read the price paid CSV, classify rows and keep the eligible ones."""

from __future__ import annotations

import csv
import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from pricepaid.common.constants import PPD_MIN_COLUMNS, PPD_PRICE_COLUMN
from pricepaid.common.errors import InputFormatError, SourceMissingError
from pricepaid.common.location_set import LocationSet
from pricepaid.common.models import Entry, TransferDuration
from pricepaid.pipeline.classify import classify
from pricepaid.pipeline.eligibility import exclusion_reason

logger = logging.getLogger(__name__)


@dataclass
class IngestStats:
    rows_in: int = 0
    eligible: int = 0
    malformed: int = 0
    excluded: Counter = field(default_factory=Counter)

    def to_dict(self) -> dict:
        return {
            "rows_in": self.rows_in,
            "eligible": self.eligible,
            "malformed": self.malformed,
            "excluded": dict(sorted(self.excluded.items())),
        }


def iter_raw_records(path: Path, *, has_header: bool = False) -> Iterator[tuple[int, list[str]]]:
    """Yield ``(line_number, columns)`` for each data row of ``path``."""
    if not path.exists():
        raise SourceMissingError(f"Missing price paid source: {path}")
    try:
        f = path.open("r", encoding="utf-8", newline="")
    except OSError as exc:
        raise SourceMissingError(f"Cannot open price paid source {path}: {exc}") from exc

    with f:
        reader = csv.reader(f)
        try:
            if has_header:
                next(reader, None)
            for columns in reader:
                yield reader.line_num, columns
        except (csv.Error, UnicodeDecodeError) as exc:
            raise InputFormatError(f"Line {reader.line_num}: unreadable CSV data: {exc}") from exc


def _classify_row(line_number: int, columns: list[str]) -> Entry:
    if len(columns) < PPD_MIN_COLUMNS:
        raise InputFormatError(
            f"Line {line_number}: expected at least {PPD_MIN_COLUMNS} columns, got {len(columns)}"
        )
    try:
        return classify(columns[PPD_PRICE_COLUMN:PPD_MIN_COLUMNS])
    except InputFormatError as exc:
        raise InputFormatError(f"Line {line_number}: {exc}") from exc


def parse_and_filter(
    path: Path,
    location_set: LocationSet,
    min_year: int,
    *,
    required_duration: TransferDuration = TransferDuration.FREEHOLD,
    has_header: bool = False,
    skip_malformed: bool = False,
) -> tuple[list[Entry], IngestStats]:
    """Return eligible entries ordered by year, plus ingest counts.

    The sort is stable, so entries from the same year keep file order and the
    price lists built from them are reproducible. Malformed rows abort the run
    unless ``skip_malformed`` is set.
    """
    stats = IngestStats()
    entries: list[Entry] = []

    for line_number, columns in iter_raw_records(path, has_header=has_header):
        stats.rows_in += 1
        try:
            entry = _classify_row(line_number, columns)
        except InputFormatError as exc:
            if not skip_malformed:
                raise
            stats.malformed += 1
            logger.warning("skipping malformed row: %s", exc)
            continue

        reason = exclusion_reason(entry, location_set, min_year, required_duration)
        if reason is not None:
            stats.excluded[reason] += 1
            continue
        entries.append(entry)

    stats.eligible = len(entries)
    entries.sort(key=lambda entry: entry.year)
    return entries, stats
