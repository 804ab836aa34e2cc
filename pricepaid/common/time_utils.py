"""UTC-focused helpers for run metadata and transfer dates."""

from __future__ import annotations

import re
from datetime import datetime, timezone

from pricepaid.common.constants import PPD_DATE_FORMAT

# strptime alone also accepts unpadded fields such as "2016-3-1 1:0".
_TRANSFER_DATETIME_RE = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}", re.ASCII)


def utc_timestamp_iso() -> str:
    return datetime.now(tz=timezone.utc).isoformat(timespec="milliseconds")


def parse_transfer_datetime(value: str) -> datetime:
    """Parse a PPD date of transfer such as ``2016-03-01 10:00``.

    Raises ``ValueError`` for anything that does not match the fixed pattern.
    """
    if not _TRANSFER_DATETIME_RE.fullmatch(value):
        raise ValueError(f"date of transfer {value!r} does not match {PPD_DATE_FORMAT!r}")
    return datetime.strptime(value, PPD_DATE_FORMAT)


def generate_run_id() -> str:
    now = datetime.now(tz=timezone.utc)
    return now.strftime("run-%Y%m%dT%H%M%S%fZ")
