"""Assemble one render-ready view model per page.

The templates and the JSON API both consume these objects, so every
conditional decision is made here rather than in markup.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from storefront.app.images import transform_url
from storefront.modules.catalog import render_rules as rules
from storefront.modules.catalog.entities import Collection, Product, Review
from storefront.modules.catalog.view_models import (
    PriceDisplay,
    StockBadge,
    count_label,
    price_display,
    rating_stars,
    star_row,
    stock_badge,
)


@dataclass(frozen=True)
class ProductCard:
    slug: str
    name: str
    image_url: Optional[str]
    price: PriceDisplay
    stock: StockBadge
    collection_name: Optional[str] = None


@dataclass(frozen=True)
class CollectionCard:
    slug: str
    name: str
    description: str
    image_url: Optional[str]


@dataclass(frozen=True)
class CollectionLink:
    slug: str
    name: str


@dataclass(frozen=True)
class GalleryImage:
    url: str
    alt: str


@dataclass(frozen=True)
class ReviewItem:
    id: str
    title: str
    customer_name: str
    text: str
    stars: List[bool]
    rating_label: str
    show_verified_badge: bool


@dataclass(frozen=True)
class HomePage:
    products: List[ProductCard]
    collections: List[CollectionCard]
    products_region: rules.Region
    collections_region: rules.Region
    products_empty: rules.EmptyState = rules.NO_PRODUCTS
    collections_empty: rules.EmptyState = rules.NO_COLLECTIONS


@dataclass(frozen=True)
class ProductListPage:
    products: List[ProductCard]
    region: rules.Region
    empty: rules.EmptyState = rules.NO_PRODUCTS


@dataclass(frozen=True)
class CollectionPage:
    slug: str
    name: str
    description: str
    hero_url: Optional[str]
    count_label: str
    products: List[ProductCard]
    region: rules.Region
    empty: rules.EmptyState = rules.NO_COLLECTION_PRODUCTS


@dataclass(frozen=True)
class ProductPage:
    slug: str
    name: str
    description: str
    main_image_url: Optional[str]
    thumbnails: List[GalleryImage]
    collection: Optional[CollectionLink]
    stars: List[bool]
    review_count_label: str
    price: PriceDisplay
    stock: StockBadge
    sku: Optional[str]
    cart_button: rules.CartButton
    reviews: List[ReviewItem] = field(default_factory=list)
    reviews_region: rules.Region = rules.Region.EMPTY
    reviews_empty: rules.EmptyState = rules.NO_REVIEWS


def _primary_image(product: Product) -> Optional[str]:
    if product.thumbnail:
        return product.thumbnail
    return product.images[0].imgix_url if product.images else None


def product_card(product: Product) -> ProductCard:
    return ProductCard(
        slug=product.slug,
        name=product.name,
        image_url=transform_url(_primary_image(product), "card"),
        price=price_display(product.price, product.sale_price),
        stock=stock_badge(product.in_stock),
        collection_name=product.collection.name if product.collection else None,
    )


def collection_card(collection: Collection) -> CollectionCard:
    image = collection.featured_image
    return CollectionCard(
        slug=collection.slug,
        name=collection.name,
        description=collection.description,
        image_url=transform_url(image.imgix_url, "card") if image else None,
    )


def review_item(review: Review) -> ReviewItem:
    return ReviewItem(
        id=review.id,
        title=review.title,
        customer_name=review.customer_name,
        text=review.review_text,
        stars=star_row(review.stars),
        rating_label=review.rating_label,
        show_verified_badge=rules.show_verified_badge(review),
    )


def home_page(products: Sequence[Product], collections: Sequence[Collection]) -> HomePage:
    cards = [product_card(p) for p in products]
    collection_cards = [collection_card(c) for c in collections]
    return HomePage(
        products=cards,
        collections=collection_cards,
        products_region=rules.products_region(cards),
        collections_region=rules.grid_region(collection_cards),
    )


def product_list_page(products: Sequence[Product]) -> ProductListPage:
    cards = [product_card(p) for p in products]
    return ProductListPage(products=cards, region=rules.products_region(cards))


def collection_page(collection: Collection, products: Sequence[Product]) -> CollectionPage:
    cards = [product_card(p) for p in products]
    image = collection.featured_image
    return CollectionPage(
        slug=collection.slug,
        name=collection.name,
        description=collection.description,
        hero_url=transform_url(image.imgix_url, "hero") if image else None,
        count_label=count_label(len(cards), "product"),
        products=cards,
        region=rules.products_region(cards),
    )


def product_page(product: Product, reviews: Sequence[Review]) -> ProductPage:
    thumbnails = [
        GalleryImage(url=transform_url(image.imgix_url, "thumbnail"), alt=f"{product.name} {index}")
        for index, image in enumerate(rules.gallery_thumbnails(product.images), start=1)
    ]
    collection = None
    if rules.show_collection_breadcrumb(product):
        collection = CollectionLink(slug=product.collection.slug, name=product.collection.name)

    items = [review_item(r) for r in reviews]
    return ProductPage(
        slug=product.slug,
        name=product.name,
        description=product.description,
        main_image_url=transform_url(_primary_image(product), "detail"),
        thumbnails=thumbnails,
        collection=collection,
        stars=star_row(rating_stars(reviews)),
        review_count_label=count_label(len(items), "review"),
        price=price_display(product.price, product.sale_price),
        stock=stock_badge(product.in_stock),
        sku=product.sku if rules.show_sku(product) else None,
        cart_button=rules.add_to_cart_button(product.in_stock),
        reviews=items,
        reviews_region=rules.reviews_region(items),
    )
