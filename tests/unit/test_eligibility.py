from dataclasses import replace
from datetime import datetime

import pytest

from pricepaid.common.location_set import LocationSet
from pricepaid.common.models import Entry, PropertyAge, PropertyType, TransferDuration
from pricepaid.pipeline.eligibility import (
    BEFORE_MIN_YEAR,
    DURATION_MISMATCH,
    EMPTY_LOCATION,
    LOCATION_NOT_IN_SET,
    exclusion_reason,
    is_eligible,
)

LOCATIONS = LocationSet(["SW1", "E1", "N1"])


def _entry(**overrides) -> Entry:
    base = Entry(
        price=100,
        date=datetime(2016, 1, 1, 0, 0),
        primary_location="SW1",
        secondary_location="9AA",
        property_type=PropertyType.FLAT,
        property_age=PropertyAge.OLD,
        transfer_duration=TransferDuration.FREEHOLD,
    )
    return replace(base, **overrides)


def test_eligible_when_all_conditions_hold():
    assert is_eligible(_entry(), LOCATIONS, 2015)
    assert exclusion_reason(_entry(), LOCATIONS, 2015) is None


@pytest.mark.parametrize(
    "overrides,reason",
    [
        ({"primary_location": ""}, EMPTY_LOCATION),
        ({"date": datetime(2014, 12, 31, 23, 59)}, BEFORE_MIN_YEAR),
        ({"transfer_duration": TransferDuration.LEASEHOLD}, DURATION_MISMATCH),
        ({"primary_location": "ZZ99"}, LOCATION_NOT_IN_SET),
    ],
)
def test_each_condition_flips_eligibility(overrides, reason):
    entry = _entry(**overrides)
    assert not is_eligible(entry, LOCATIONS, 2015)
    assert exclusion_reason(entry, LOCATIONS, 2015) == reason


def test_year_threshold_is_inclusive():
    assert is_eligible(_entry(date=datetime(2015, 1, 1, 0, 0)), LOCATIONS, 2015)
    assert not is_eligible(_entry(date=datetime(2014, 6, 1, 0, 0)), LOCATIONS, 2015)


def test_location_must_match_exactly_not_by_prefix():
    assert not is_eligible(_entry(primary_location="SW1A"), LOCATIONS, 2015)
    assert not is_eligible(_entry(primary_location="SW"), LOCATIONS, 2015)


def test_required_duration_can_be_leasehold():
    entry = _entry(transfer_duration=TransferDuration.LEASEHOLD)
    assert is_eligible(entry, LOCATIONS, 2015, TransferDuration.LEASEHOLD)
    assert not is_eligible(_entry(), LOCATIONS, 2015, TransferDuration.LEASEHOLD)


def test_empty_location_excluded_even_if_empty_string_in_set():
    # LocationSet itself would accept "", the filter must not.
    odd_set = LocationSet(["", "SW1"])
    assert not is_eligible(_entry(primary_location=""), odd_set, 2015)
