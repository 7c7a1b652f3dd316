"""Per-page content fetchers.

None of these raise for remote failures: every ``CosmicError`` is logged and
folded into a ``FetchResult`` so the page decides between an empty state and
a 404.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Mapping, Optional, TypeVar

from storefront.app.cosmic import (
    CosmicClient,
    CosmicError,
    CosmicMalformedResponse,
    CosmicNetworkError,
    CosmicNotFound,
    ObjectQuery,
)
from storefront.app.extensions import cosmic
from storefront.modules.catalog.entities import Collection, Product, Review
from storefront.modules.catalog.outcomes import FailureReason, FetchResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

PRODUCT_PROPS = ("id", "title", "slug", "thumbnail", "metadata")
COLLECTION_PROPS = ("id", "title", "slug", "metadata")
REVIEW_PROPS = ("id", "title", "slug", "metadata")
RELATION_DEPTH = 1


def _reason(exc: CosmicError) -> FailureReason:
    if isinstance(exc, CosmicNotFound):
        return FailureReason.NOT_FOUND
    if isinstance(exc, CosmicNetworkError):
        return FailureReason.NETWORK
    if isinstance(exc, CosmicMalformedResponse):
        return FailureReason.MALFORMED
    return FailureReason.HTTP_ERROR


def _log_failure(what: str, exc: CosmicError) -> FailureReason:
    reason = _reason(exc)
    if reason is FailureReason.NOT_FOUND:
        logger.info("No %s found: %s", what, exc)
    else:
        logger.error("Error fetching %s (%s): %s", what, reason.value, exc)
    return reason


async def _fetch_one(
    client: CosmicClient,
    query: ObjectQuery,
    parse: Callable[[Mapping[str, Any]], T],
    what: str,
) -> FetchResult[T]:
    try:
        raw = await client.find_one(query)
    except CosmicError as exc:
        return FetchResult.not_found(_log_failure(what, exc))

    try:
        return FetchResult.found(parse(raw))
    except (ValueError, TypeError) as exc:
        logger.error("Error fetching %s (malformed): %s", what, exc)
        return FetchResult.not_found(FailureReason.MALFORMED)


async def _fetch_many(
    client: CosmicClient,
    query: ObjectQuery,
    parse: Callable[[Mapping[str, Any]], T],
    what: str,
) -> FetchResult[List[T]]:
    try:
        result = await client.find(query)
    except CosmicError as exc:
        return FetchResult.empty(_log_failure(what, exc))

    items: List[T] = []
    for raw in result.objects:
        if not isinstance(raw, dict):
            logger.warning("Skipping non-object entry in %s", what)
            continue
        try:
            items.append(parse(raw))
        except (ValueError, TypeError) as exc:
            logger.warning("Skipping malformed entry in %s: %s", what, exc)

    if result.total > len(result.objects):
        logger.info("Showing %d of %d %s", len(items), result.total, what)
    if not items:
        return FetchResult.empty()
    return FetchResult.found(items)


async def get_collection(slug: str, client: Optional[CosmicClient] = None) -> FetchResult[Collection]:
    query = ObjectQuery(
        type="collections",
        filters={"slug": slug},
        props=COLLECTION_PROPS,
        depth=RELATION_DEPTH,
    )
    return await _fetch_one(client or cosmic, query, Collection.from_cosmic, f"collection '{slug}'")


async def get_collection_products(
    collection_id: str, client: Optional[CosmicClient] = None
) -> FetchResult[List[Product]]:
    query = ObjectQuery(
        type="products",
        filters={"metadata.collection": collection_id},
        props=PRODUCT_PROPS,
        depth=RELATION_DEPTH,
    )
    return await _fetch_many(client or cosmic, query, Product.from_cosmic, f"products of collection {collection_id}")


async def get_product(slug: str, client: Optional[CosmicClient] = None) -> FetchResult[Product]:
    query = ObjectQuery(
        type="products",
        filters={"slug": slug},
        props=PRODUCT_PROPS,
        depth=RELATION_DEPTH,
    )
    return await _fetch_one(client or cosmic, query, Product.from_cosmic, f"product '{slug}'")


async def get_product_reviews(product_id: str, client: Optional[CosmicClient] = None) -> FetchResult[List[Review]]:
    query = ObjectQuery(
        type="reviews",
        filters={"metadata.product": product_id},
        props=REVIEW_PROPS,
        depth=RELATION_DEPTH,
    )
    return await _fetch_many(client or cosmic, query, Review.from_cosmic, f"reviews of product {product_id}")


async def get_products(limit: Optional[int] = None, client: Optional[CosmicClient] = None) -> FetchResult[List[Product]]:
    query = ObjectQuery(
        type="products",
        props=PRODUCT_PROPS,
        depth=RELATION_DEPTH,
        limit=limit,
    )
    return await _fetch_many(client or cosmic, query, Product.from_cosmic, "products")


async def get_collections(client: Optional[CosmicClient] = None) -> FetchResult[List[Collection]]:
    query = ObjectQuery(
        type="collections",
        props=COLLECTION_PROPS,
        depth=RELATION_DEPTH,
    )
    return await _fetch_many(client or cosmic, query, Collection.from_cosmic, "collections")
