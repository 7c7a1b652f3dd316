"""Which branch of each conditional page region to render.

Every rule is a pure function of what is being shown; nothing here remembers
a previous render.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, TypeVar

from storefront.modules.catalog.entities import Product, Review

T = TypeVar("T")

MAX_THUMBNAILS = 4


class Region(str, Enum):
    GRID = "grid"
    LIST = "list"
    EMPTY = "empty"


@dataclass(frozen=True)
class EmptyState:
    title: str
    message: str
    link_href: Optional[str] = None
    link_label: Optional[str] = None


NO_PRODUCTS = EmptyState(
    title="No products found",
    message="Check back later for new products.",
)
NO_COLLECTION_PRODUCTS = EmptyState(
    title="No products in this collection",
    message="Check back later for new products in this collection.",
    link_href="/products",
    link_label="View All Products",
)
NO_COLLECTIONS = EmptyState(
    title="No collections yet",
    message="Collections will appear here once they are published.",
)
NO_REVIEWS = EmptyState(
    title="Customer Reviews",
    message="No reviews yet. Be the first to review this product!",
)


def grid_region(items: Sequence[object]) -> Region:
    return Region.GRID if items else Region.EMPTY


def products_region(products: Sequence[object]) -> Region:
    return grid_region(products)


def reviews_region(reviews: Sequence[object]) -> Region:
    return Region.LIST if reviews else Region.EMPTY


def gallery_thumbnails(images: Sequence[T], limit: int = MAX_THUMBNAILS) -> List[T]:
    """Thumbnail strip only makes sense with more than one image."""
    if len(images) <= 1:
        return []
    return list(images[:limit])


def show_collection_breadcrumb(product: Product) -> bool:
    return product.collection is not None


def show_sku(product: Product) -> bool:
    return bool(product.sku)


def show_verified_badge(review: Review) -> bool:
    return review.verified_purchase


@dataclass(frozen=True)
class CartButton:
    label: str
    disabled: bool
    css_class: str


def add_to_cart_button(in_stock: bool) -> CartButton:
    # Affordance only: no cart endpoint exists behind it.
    if in_stock:
        return CartButton(
            label="Add to Cart",
            disabled=False,
            css_class="bg-blue-600 text-white hover:bg-blue-700 focus:ring-blue-500",
        )
    return CartButton(
        label="Out of Stock",
        disabled=True,
        css_class="bg-gray-300 text-gray-500 cursor-not-allowed",
    )
