"""In-memory stand-in for a Cosmic bucket, served through httpx.MockTransport."""

from __future__ import annotations

import asyncio
import json

import httpx

from storefront.app.config import TestConfig

IMGIX = "https://imgix.cosmicjs.com"


def image(name):
    return {"url": f"https://cdn.cosmicjs.com/{name}", "imgix_url": f"{IMGIX}/{name}"}


def collection(id, slug, name, description="", featured_image=None):
    meta = {"name": name, "description": description}
    if featured_image:
        meta["featured_image"] = image(featured_image)
    return {"id": id, "slug": slug, "title": name, "metadata": meta}


def product(id, slug, name, price, sale_price=None, in_stock=True, collection=None, sku=None, images=0):
    return {
        "id": id,
        "slug": slug,
        "title": name,
        "thumbnail": f"{IMGIX}/{slug}.jpg",
        "metadata": {
            "name": name,
            "description": f"<p>All about the {name}.</p>",
            "price": price,
            "sale_price": sale_price,
            "images": [image(f"{slug}-{i}.jpg") for i in range(1, images + 1)],
            "in_stock": in_stock,
            "collection": collection,
            "sku": sku,
        },
    }


def review(id, product, rating, customer="Sam", verified=False, title="Nice", text="Would buy again."):
    return {
        "id": id,
        "slug": id,
        "title": title,
        "metadata": {
            "product": product,
            "customer_name": customer,
            "rating": {"key": rating, "value": f"{rating} Stars"},
            "review_text": text,
            "verified_purchase": verified,
        },
    }


def bucket_config(transport, **overrides):
    """TestConfig subclass whose CMS calls go through ``transport``."""
    return type("BucketConfig", (TestConfig,), {"COSMIC_TRANSPORT": transport, **overrides})


def default_catalog():
    summer = collection("col-summer", "summer", "Summer Edit", "Light layers for hot days.", "summer.jpg")
    empty = collection("col-empty", "empty-shelf", "Empty Shelf", "Nothing here yet.")
    shirt = product("prod-shirt", "linen-shirt", "Linen Shirt", 100, sale_price=80, collection=summer, sku="LS-001", images=5)
    hat = product("prod-hat", "straw-hat", "Straw Hat", 45.5, in_stock=False, collection=summer, images=1)
    tote = product("prod-tote", "canvas-tote", "Canvas Tote", 30, sale_price=35)
    return {
        "collections": [summer, empty],
        "products": [shirt, hat, tote],
        "reviews": [
            review("rev-1", shirt, "5", customer="Ada", verified=True, title="Perfect fit"),
            review("rev-2", shirt, "3", customer="Lin", title="Wrinkles easily"),
        ],
    }


def _lookup(obj, dotted):
    current = obj
    for part in dotted.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
    if isinstance(current, dict):
        return current.get("id")
    return current


class FakeCosmicBucket:
    """Answers objects queries the way the Cosmic REST API does.

    Set ``fail_with`` to ``"network"`` to raise a connection error, to an int
    to answer with that status, or to ``"garbage"`` for a non-JSON body.
    """

    def __init__(self, objects=None):
        self.objects = objects if objects is not None else default_catalog()
        self.requests = []
        self.fail_with = None

    @property
    def transport(self):
        return httpx.MockTransport(self.handle)

    def queries(self):
        return [json.loads(r.url.params["query"]) for r in self.requests]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if self.fail_with == "network":
            raise httpx.ConnectError("connection refused", request=request)
        if self.fail_with == "garbage":
            return httpx.Response(200, content=b"<html>oops</html>")
        if isinstance(self.fail_with, int):
            return httpx.Response(self.fail_with, json={"message": "error"})

        query = json.loads(request.url.params["query"])
        object_type = query.pop("type")
        matched = [
            obj
            for obj in self.objects.get(object_type, [])
            if all(_lookup(obj, key) == value for key, value in query.items())
        ]
        if not matched:
            return httpx.Response(404, json={"status": 404, "message": "No objects found"})

        limit = request.url.params.get("limit")
        page = matched[: int(limit)] if limit else matched
        return httpx.Response(200, json={"objects": page, "total": len(matched)})


class RendezvousBucket(FakeCosmicBucket):
    """A bucket that only answers once every type in ``rendezvous`` has asked.

    Requests that run one after another never meet, so the first of them
    times out with a 504 and its page section comes back empty.
    """

    def __init__(self, rendezvous=("products", "collections"), wait_timeout=1.0, objects=None):
        super().__init__(objects)
        self.rendezvous = rendezvous
        self.wait_timeout = wait_timeout
        self.timed_out = []
        self._arrived = {}

    @property
    def transport(self):
        return httpx.MockTransport(self.handle_async)

    def _event(self, object_type):
        if object_type not in self._arrived:
            self._arrived[object_type] = asyncio.Event()
        return self._arrived[object_type]

    async def handle_async(self, request: httpx.Request) -> httpx.Response:
        object_type = json.loads(request.url.params["query"])["type"]
        self._event(object_type).set()

        for other in self.rendezvous:
            if other == object_type:
                continue
            try:
                await asyncio.wait_for(self._event(other).wait(), self.wait_timeout)
            except asyncio.TimeoutError:
                self.timed_out.append(object_type)
                return httpx.Response(504, json={"message": f"{other} never arrived"})
        return self.handle(request)
