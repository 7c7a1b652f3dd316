"""Server-rendered storefront pages.

Listing pages always render, falling back to empty states. Detail pages 404
when their primary resource is missing.
"""

from __future__ import annotations

import asyncio
from typing import TypeVar

from flask import Blueprint, abort, current_app, render_template

from storefront.modules.catalog import fetchers, pages
from storefront.modules.catalog.outcomes import FetchResult, items_of

T = TypeVar("T")

ui_bp = Blueprint("ui", __name__)


def found_or_404(result: FetchResult[T]) -> T:
    if not result.is_found or result.value is None:
        abort(404)
    return result.value


@ui_bp.get("/")
async def home():
    products, collections = await asyncio.gather(
        fetchers.get_products(limit=current_app.config["FEATURED_PRODUCT_LIMIT"]),
        fetchers.get_collections(),
    )
    page = pages.home_page(items_of(products), items_of(collections))
    return render_template("pages/home.html", page=page)


@ui_bp.get("/products")
async def product_list():
    products = await fetchers.get_products(limit=current_app.config["PRODUCT_LIST_LIMIT"])
    page = pages.product_list_page(items_of(products))
    return render_template("pages/products.html", page=page)


@ui_bp.get("/collections/<slug>")
async def collection_detail(slug: str):
    collection = found_or_404(await fetchers.get_collection(slug))
    products = await fetchers.get_collection_products(collection.id)
    page = pages.collection_page(collection, items_of(products))
    return render_template("pages/collection.html", page=page)


@ui_bp.get("/products/<slug>")
async def product_detail(slug: str):
    product = found_or_404(await fetchers.get_product(slug))
    reviews = await fetchers.get_product_reviews(product.id)
    page = pages.product_page(product, items_of(reviews))
    return render_template("pages/product.html", page=page)
