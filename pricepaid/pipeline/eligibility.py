"""Eligibility rules for the aggregate."""

from __future__ import annotations

from pricepaid.common.location_set import LocationSet
from pricepaid.common.models import Entry, TransferDuration

EMPTY_LOCATION = "EMPTY_LOCATION"
BEFORE_MIN_YEAR = "BEFORE_MIN_YEAR"
DURATION_MISMATCH = "DURATION_MISMATCH"
LOCATION_NOT_IN_SET = "LOCATION_NOT_IN_SET"


def exclusion_reason(
    entry: Entry,
    location_set: LocationSet,
    min_year: int,
    required_duration: TransferDuration = TransferDuration.FREEHOLD,
) -> str | None:
    # Cheapest checks first; the set lookup runs last.
    if not entry.primary_location:
        return EMPTY_LOCATION
    if entry.year < min_year:
        return BEFORE_MIN_YEAR
    if entry.transfer_duration is not required_duration:
        return DURATION_MISMATCH
    if not location_set.contains(entry.primary_location):
        return LOCATION_NOT_IN_SET
    return None


def is_eligible(
    entry: Entry,
    location_set: LocationSet,
    min_year: int,
    required_duration: TransferDuration = TransferDuration.FREEHOLD,
) -> bool:
    return exclusion_reason(entry, location_set, min_year, required_duration) is None
