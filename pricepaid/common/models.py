"""Data models used across the pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class PropertyType(Enum):
    DETACHED = "Detached"
    SEMI_DETACHED = "SemiDetached"
    TERRACED = "Terraced"
    FLAT = "Flat"
    OTHER = "Other"


class PropertyAge(Enum):
    NEW = "New"
    OLD = "Old"


class TransferDuration(Enum):
    FREEHOLD = "Freehold"
    LEASEHOLD = "Leasehold"


@dataclass(frozen=True)
class Entry:
    """One classified price paid record."""

    price: int
    date: datetime
    # Postcodes can be reallocated; the price paid data keeps the original.
    primary_location: str
    secondary_location: str
    property_type: PropertyType
    property_age: PropertyAge
    transfer_duration: TransferDuration

    @property
    def year(self) -> int:
        return self.date.year
