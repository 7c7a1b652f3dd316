"""Display values derived from catalog entities. Pure functions, no I/O."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import List, Optional, Sequence

from storefront.modules.catalog.entities import Review

MAX_STARS = 5

IN_STOCK_CLASS = "bg-green-100 text-green-800"
OUT_OF_STOCK_CLASS = "bg-red-100 text-red-800"


def format_money(amount: Decimal) -> str:
    """``$80`` for whole amounts, ``$79.50`` otherwise."""
    if amount == amount.to_integral_value():
        return f"${amount.to_integral_value():f}"
    return f"${amount.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP):f}"


# --- Ratings ---------------------------------------------------------------

def average_rating(reviews: Sequence[Review]) -> Decimal:
    """Mean rating; reviews without a usable rating count as 0."""
    if not reviews:
        return Decimal(0)
    total = sum(review.stars for review in reviews)
    return Decimal(total) / Decimal(len(reviews))


def rating_stars(reviews: Sequence[Review]) -> int:
    """Average rounded half-up to a whole star count."""
    rounded = average_rating(reviews).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return max(0, min(MAX_STARS, int(rounded)))


def star_row(stars: int) -> List[bool]:
    return [position <= stars for position in range(1, MAX_STARS + 1)]


# --- Price -----------------------------------------------------------------

class PriceKind(str, Enum):
    REGULAR = "regular"
    DISCOUNTED = "discounted"


@dataclass(frozen=True)
class PriceDisplay:
    kind: PriceKind
    current: Decimal
    current_label: str
    original: Optional[Decimal] = None
    original_label: Optional[str] = None
    discount: Optional[Decimal] = None
    discount_label: Optional[str] = None

    @property
    def discounted(self) -> bool:
        return self.kind is PriceKind.DISCOUNTED


def price_display(price: Decimal, sale_price: Optional[Decimal]) -> PriceDisplay:
    if sale_price is None:
        return PriceDisplay(kind=PriceKind.REGULAR, current=price, current_label=format_money(price))

    discount = price - sale_price
    return PriceDisplay(
        kind=PriceKind.DISCOUNTED,
        current=sale_price,
        current_label=format_money(sale_price),
        original=price,
        original_label=format_money(price),
        discount=discount,
        discount_label=f"Save {format_money(discount)}",
    )


# --- Stock -----------------------------------------------------------------

@dataclass(frozen=True)
class StockBadge:
    in_stock: bool
    label: str
    css_class: str


def stock_badge(in_stock: bool) -> StockBadge:
    if in_stock:
        return StockBadge(True, "In Stock", IN_STOCK_CLASS)
    return StockBadge(False, "Out of Stock", OUT_OF_STOCK_CLASS)


# --- Labels ----------------------------------------------------------------

def pluralize(count: int, singular: str, plural: Optional[str] = None) -> str:
    if count == 1:
        return singular
    return plural or f"{singular}s"


def count_label(count: int, singular: str, plural: Optional[str] = None) -> str:
    return f"{count} {pluralize(count, singular, plural)}"
