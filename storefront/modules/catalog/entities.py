"""Catalog entities as they arrive from the CMS.

Each ``from_cosmic`` factory is the ingestion boundary: it turns one raw
Cosmic object into an immutable snapshot, or raises ``ValueError`` when the
payload cannot describe the entity at all.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import IntEnum
from typing import Any, Dict, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)


def _metadata(data: Mapping[str, Any]) -> Dict[str, Any]:
    meta = data.get("metadata")
    return meta if isinstance(meta, dict) else {}


def _require(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if not value:
        raise ValueError(f"object is missing '{key}'")
    return str(value)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _decimal(value: Any) -> Optional[Decimal]:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return number if number.is_finite() else None


def _reference_id(value: Any) -> Optional[str]:
    # A relation is an id string at depth 0 and an expanded object at depth 1.
    if isinstance(value, dict):
        return _text(value.get("id")) or None
    if isinstance(value, str) and value:
        return value
    return None


@dataclass(frozen=True)
class Image:
    url: str
    imgix_url: str

    @classmethod
    def from_cosmic(cls, data: Any) -> Optional["Image"]:
        if not isinstance(data, dict):
            return None
        url = _text(data.get("url"))
        imgix_url = _text(data.get("imgix_url")) or url
        if not imgix_url:
            return None
        return cls(url=url or imgix_url, imgix_url=imgix_url)


@dataclass(frozen=True)
class Collection:
    id: str
    slug: str
    title: str
    name: str
    description: str
    featured_image: Optional[Image] = None

    @classmethod
    def from_cosmic(cls, data: Mapping[str, Any]) -> "Collection":
        meta = _metadata(data)
        title = _text(data.get("title"))
        return cls(
            id=_require(data, "id"),
            slug=_require(data, "slug"),
            title=title,
            name=_text(meta.get("name")) or title,
            description=_text(meta.get("description")),
            featured_image=Image.from_cosmic(meta.get("featured_image")),
        )


@dataclass(frozen=True)
class Product:
    id: str
    slug: str
    title: str
    thumbnail: str
    name: str
    description: str
    price: Decimal
    sale_price: Optional[Decimal] = None
    images: Tuple[Image, ...] = ()
    in_stock: bool = False
    collection: Optional[Collection] = None
    collection_id: Optional[str] = None
    sku: Optional[str] = None

    @classmethod
    def from_cosmic(cls, data: Mapping[str, Any]) -> "Product":
        meta = _metadata(data)
        title = _text(data.get("title"))

        price = _decimal(meta.get("price"))
        if price is None or price <= 0:
            raise ValueError(f"product {data.get('slug')!r} has no valid price")

        # A sale price that is missing, zero or not below the price is no discount.
        sale_price = _decimal(meta.get("sale_price"))
        if sale_price is not None and not (0 < sale_price < price):
            sale_price = None

        raw_images = meta.get("images") or []
        images = tuple(
            image for image in (Image.from_cosmic(item) for item in raw_images if item) if image is not None
        )

        raw_collection = meta.get("collection")
        collection = None
        if isinstance(raw_collection, dict):
            try:
                collection = Collection.from_cosmic(raw_collection)
            except ValueError:
                logger.warning("Ignoring malformed collection on product %s", data.get("slug"))

        return cls(
            id=_require(data, "id"),
            slug=_require(data, "slug"),
            title=title,
            thumbnail=_text(data.get("thumbnail")),
            name=_text(meta.get("name")) or title,
            description=_text(meta.get("description")),
            price=price,
            sale_price=sale_price,
            images=images,
            in_stock=bool(meta.get("in_stock")),
            collection=collection,
            collection_id=collection.id if collection else _reference_id(raw_collection),
            sku=_text(meta.get("sku")).strip() or None,
        )


class Rating(IntEnum):
    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5

    @classmethod
    def parse(cls, key: Any) -> Optional["Rating"]:
        """Parse a CMS rating key such as ``"4"``; None when it is not 1..5."""
        if isinstance(key, bool):
            return None
        try:
            return cls(int(str(key).strip()))
        except (TypeError, ValueError):
            return None


@dataclass(frozen=True)
class Review:
    id: str
    slug: str
    title: str
    product_id: Optional[str]
    customer_name: str
    rating: Optional[Rating]
    rating_label: str
    review_text: str
    verified_purchase: bool = False

    @property
    def stars(self) -> int:
        return int(self.rating) if self.rating is not None else 0

    @classmethod
    def from_cosmic(cls, data: Mapping[str, Any]) -> "Review":
        meta = _metadata(data)
        raw_rating = meta.get("rating")
        if isinstance(raw_rating, dict):
            key, label = raw_rating.get("key"), raw_rating.get("value")
        else:
            key, label = raw_rating, raw_rating

        rating = Rating.parse(key)
        if rating is None and key is not None:
            logger.warning("Review %s has unusable rating key %r", data.get("slug"), key)

        return cls(
            id=_require(data, "id"),
            slug=_text(data.get("slug")),
            title=_text(data.get("title")),
            product_id=_reference_id(meta.get("product")),
            customer_name=_text(meta.get("customer_name")),
            rating=rating,
            rating_label=_text(label),
            review_text=_text(meta.get("review_text")),
            verified_purchase=bool(meta.get("verified_purchase")),
        )
