from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

_TWO_PLACES = Decimal("0.01")
_ONE_PLACE = Decimal("0.1")


def _fixed(quotient: float, places: Decimal) -> str:
    # Rounds the binary double itself, so 1.005 (stored as 1.00499...) gives 1.00.
    return str(Decimal(quotient).quantize(places, rounding=ROUND_HALF_UP))


def million_pixels(pixels: int) -> str:
    """Headline distance: pixels / 1,000,000 as a float, two decimals."""

    return _fixed(pixels / 1_000_000, _TWO_PLACES)


def thousand_pixels(pixels: int) -> str:
    """Chart distance: pixels / 1,000 as a float, one decimal."""

    return _fixed(pixels / 1_000, _ONE_PLACE)


def group_thousands(value: int) -> str:
    return f"{value:,}"
