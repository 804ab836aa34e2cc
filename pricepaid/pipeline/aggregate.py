"""Group eligible entries into location/year/type/age price lists."""

from __future__ import annotations

from typing import Iterable, Iterator

from pricepaid.common.models import Entry, PropertyAge, PropertyType

LeafKey = tuple[str, int, PropertyType, PropertyAge]
NestedPrices = dict[str, dict[int, dict[PropertyType, dict[PropertyAge, list[int]]]]]


class PriceAggregate:
    """Prices keyed by ``(location, year, property type, property age)``.

    Stored flat and regrouped into nested mappings on demand. Leaf lists keep
    the order prices were added in and duplicates are retained, since each
    price is a separate transaction.
    """

    def __init__(self) -> None:
        self._leaves: dict[LeafKey, list[int]] = {}

    def add(self, entry: Entry) -> None:
        key = (entry.primary_location, entry.year, entry.property_type, entry.property_age)
        leaf = self._leaves.get(key)
        if leaf is None:
            leaf = []
            self._leaves[key] = leaf
        leaf.append(entry.price)

    def __len__(self) -> int:
        return len(self._leaves)

    def __contains__(self, key: object) -> bool:
        return key in self._leaves

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PriceAggregate):
            return NotImplemented
        return self._leaves == other._leaves

    def prices(self, location: str, year: int, property_type: PropertyType, property_age: PropertyAge) -> list[int]:
        return list(self._leaves.get((location, year, property_type, property_age), []))

    def leaves(self) -> Iterator[tuple[LeafKey, list[int]]]:
        for key, prices in self._leaves.items():
            yield key, list(prices)

    def locations(self) -> list[str]:
        return list(dict.fromkeys(key[0] for key in self._leaves))

    def years(self) -> list[int]:
        return sorted({key[1] for key in self._leaves})

    def price_count(self) -> int:
        return sum(len(prices) for prices in self._leaves.values())

    def to_nested(self) -> NestedPrices:
        nested: NestedPrices = {}
        for (location, year, property_type, property_age), prices in self._leaves.items():
            by_type = nested.setdefault(location, {}).setdefault(year, {})
            by_type.setdefault(property_type, {})[property_age] = list(prices)
        return nested

    @classmethod
    def from_nested(cls, nested: NestedPrices) -> "PriceAggregate":
        agg = cls()
        for location, by_year in nested.items():
            for year, by_type in by_year.items():
                for property_type, by_age in by_type.items():
                    for property_age, prices in by_age.items():
                        agg._leaves[(location, year, property_type, property_age)] = list(prices)
        return agg


def aggregate(entries: Iterable[Entry]) -> PriceAggregate:
    """Fold already-filtered entries in order; no eligibility re-check is done."""
    agg = PriceAggregate()
    for entry in entries:
        agg.add(entry)
    return agg
