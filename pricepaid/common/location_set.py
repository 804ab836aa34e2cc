"""Immutable sorted set of postcode districts with ordered lookup."""

from __future__ import annotations

from bisect import bisect_left
from typing import Iterable, Iterator


class LocationSet:
    """Sorted, deduplicated district codes queried by binary search.

    The reference lists are usually supplied in a human-friendly order
    (EC, WC, E, N, ...) so the codes are always sorted at construction.
    """

    __slots__ = ("name", "_codes")

    def __init__(self, codes: Iterable[str], name: str = "") -> None:
        self.name = name
        self._codes: tuple[str, ...] = tuple(sorted(set(codes)))

    @classmethod
    def from_config(cls, cfg: dict) -> "LocationSet":
        return cls(cfg["codes"], name=cfg.get("name", ""))

    @property
    def codes(self) -> tuple[str, ...]:
        return self._codes

    def contains(self, code: str) -> bool:
        idx = bisect_left(self._codes, code)
        return idx < len(self._codes) and self._codes[idx] == code

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and self.contains(code)

    def __len__(self) -> int:
        return len(self._codes)

    def __iter__(self) -> Iterator[str]:
        return iter(self._codes)

    def __repr__(self) -> str:
        return f"LocationSet(name={self.name!r}, size={len(self._codes)})"
