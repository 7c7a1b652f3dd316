from __future__ import annotations

import asyncio
from dataclasses import asdict

from flask import Blueprint, current_app

from storefront.app.common.errors import abort_json
from storefront.modules.catalog import fetchers, pages
from storefront.modules.catalog.outcomes import items_of

bp = Blueprint("catalog", __name__)


@bp.get("/products")
async def list_products():
    """GET /api/products - Product cards, capped at PRODUCT_LIST_LIMIT."""
    products = await fetchers.get_products(limit=current_app.config["PRODUCT_LIST_LIMIT"])
    page = pages.product_list_page(items_of(products))
    return {
        "items": [asdict(card) for card in page.products],
        "count": len(page.products),
        "region": page.region,
        "unavailable": products.failed,
    }, 200


@bp.get("/products/<slug>")
async def get_product(slug: str):
    """GET /api/products/<slug> - Product detail with its reviews."""
    product = await fetchers.get_product(slug)
    if not product.is_found:
        abort_json(404, "not_found", "Product not found", {"slug": slug})

    reviews = await fetchers.get_product_reviews(product.value.id)
    return asdict(pages.product_page(product.value, items_of(reviews))), 200


@bp.get("/collections")
async def list_collections():
    """GET /api/collections - All collections."""
    result = await fetchers.get_collections()
    collections = items_of(result)
    return {
        "items": [asdict(pages.collection_card(c)) for c in collections],
        "count": len(collections),
        "unavailable": result.failed,
    }, 200


@bp.get("/collections/<slug>")
async def get_collection(slug: str):
    """GET /api/collections/<slug> - Collection header and its products."""
    collection = await fetchers.get_collection(slug)
    if not collection.is_found:
        abort_json(404, "not_found", "Collection not found", {"slug": slug})

    products = await fetchers.get_collection_products(collection.value.id)
    return asdict(pages.collection_page(collection.value, items_of(products))), 200


@bp.get("/home")
async def home_feed():
    """GET /api/home - Featured products and collections, fetched together."""
    products, collections = await asyncio.gather(
        fetchers.get_products(limit=current_app.config["FEATURED_PRODUCT_LIMIT"]),
        fetchers.get_collections(),
    )
    return asdict(pages.home_page(items_of(products), items_of(collections))), 200
