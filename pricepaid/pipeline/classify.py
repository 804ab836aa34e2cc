"""Classify raw price paid fields into normalised entries."""

from __future__ import annotations

from typing import Sequence

from pricepaid.common.errors import InputFormatError
from pricepaid.common.models import Entry, PropertyAge, PropertyType, TransferDuration
from pricepaid.common.postcode import split_postcode
from pricepaid.common.time_utils import parse_transfer_datetime

# "O" covers parcels of land, commercial sites and anything else unclassified.
PROPERTY_TYPE_CODES = {
    "D": PropertyType.DETACHED,
    "S": PropertyType.SEMI_DETACHED,
    "T": PropertyType.TERRACED,
    "F": PropertyType.FLAT,
}
PROPERTY_AGE_CODES = {
    "Y": PropertyAge.NEW,
}
# Leases of 7 years or less are not recorded at all.
TRANSFER_DURATION_CODES = {
    "F": TransferDuration.FREEHOLD,
}


def to_property_type(code: str) -> PropertyType:
    return PROPERTY_TYPE_CODES.get(code, PropertyType.OTHER)


def to_property_age(code: str) -> PropertyAge:
    return PROPERTY_AGE_CODES.get(code, PropertyAge.OLD)


def to_transfer_duration(code: str) -> TransferDuration:
    return TRANSFER_DURATION_CODES.get(code, TransferDuration.LEASEHOLD)


def _parse_price(value: str) -> int:
    # ASCII digits only: no sign, whitespace, underscores or other scripts.
    if not (value.isascii() and value.isdigit()):
        raise InputFormatError(f"Malformed price: {value!r}")
    return int(value)


def classify(raw_fields: Sequence[str]) -> Entry:
    """Build an :class:`Entry` from ``(price, date, postcode, type, age, duration)``.

    Unknown category codes fall back to ``Other``, ``Old`` and ``Leasehold``.
    A price or date that does not parse raises :class:`InputFormatError`.
    """
    price_raw, date_raw, location_raw, type_code, age_code, duration_code = raw_fields[:6]

    try:
        date = parse_transfer_datetime(date_raw)
    except ValueError as exc:
        raise InputFormatError(f"Malformed date of transfer: {date_raw!r}") from exc

    primary, secondary = split_postcode(location_raw)
    return Entry(
        price=_parse_price(price_raw),
        date=date,
        primary_location=primary,
        secondary_location=secondary,
        property_type=to_property_type(type_code),
        property_age=to_property_age(age_code),
        transfer_duration=to_transfer_duration(duration_code),
    )
