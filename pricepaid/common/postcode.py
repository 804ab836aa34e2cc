"""Postcode splitting for price paid records."""

from __future__ import annotations


def split_postcode(raw: str) -> tuple[str, str]:
    """Split ``"SW1A 1AA"`` into district ``"SW1A"`` and inward code ``"1AA"``.

    Splits on a single space only. Tokens after the second are ignored and a
    missing inward code is returned as an empty string.
    """
    parts = raw.split(" ")
    primary = parts[0]
    secondary = parts[1] if len(parts) > 1 else ""
    return primary, secondary
