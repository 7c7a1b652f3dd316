"""Thin async adapter over the Cosmic objects REST endpoint.

Only reads are supported. Every call opens its own ``httpx.AsyncClient`` so
the adapter can be shared by views that each run on their own event loop.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional, Tuple

import httpx
from flask import Flask, current_app

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.cosmicjs.com/v3"


class CosmicError(Exception):
    """Base class for failures talking to the content API."""


class CosmicNetworkError(CosmicError):
    """The request never produced a response (DNS, connect, timeout...)."""


class CosmicNotFound(CosmicError):
    """No object matched the query."""


class CosmicResponseError(CosmicError):
    """The API answered with an error status other than 404."""

    def __init__(self, status_code: int, message: str = "") -> None:
        super().__init__(message or f"Cosmic API returned HTTP {status_code}")
        self.status_code = status_code


class CosmicMalformedResponse(CosmicError):
    """The body was not the JSON shape the objects endpoint promises."""


@dataclass(frozen=True)
class ObjectQuery:
    """Description of one objects query.

    ``filters`` are equality matches merged into the JSON ``query`` parameter,
    e.g. ``{"slug": "summer"}`` or ``{"metadata.collection": "<id>"}``.
    """

    type: str
    filters: Dict[str, Any] = field(default_factory=dict)
    props: Tuple[str, ...] = ()
    depth: int = 0
    limit: Optional[int] = None

    def first(self) -> "ObjectQuery":
        return replace(self, limit=1)

    def to_params(self, read_key: str) -> Dict[str, str]:
        query = {"type": self.type, **self.filters}
        params = {
            "read_key": read_key,
            "query": json.dumps(query, separators=(",", ":")),
        }
        if self.props:
            params["props"] = ",".join(self.props)
        if self.depth:
            params["depth"] = str(self.depth)
        if self.limit is not None:
            params["limit"] = str(self.limit)
        return params


@dataclass(frozen=True)
class ObjectList:
    objects: List[Dict[str, Any]]
    total: int


@dataclass(frozen=True)
class CosmicSettings:
    """Bucket coordinates of one app, kept in ``app.extensions["cosmic"]``.

    ``transport`` is handed to ``httpx`` untouched; tests put an
    ``httpx.MockTransport`` there through ``COSMIC_TRANSPORT``.
    """

    api_url: str = DEFAULT_API_URL
    bucket_slug: str = ""
    read_key: str = ""
    timeout: Optional[float] = None
    transport: Optional[httpx.AsyncBaseTransport] = None

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "CosmicSettings":
        return cls(
            api_url=(config.get("COSMIC_API_URL") or DEFAULT_API_URL).rstrip("/"),
            bucket_slug=config.get("COSMIC_BUCKET_SLUG", ""),
            read_key=config.get("COSMIC_READ_KEY", ""),
            timeout=config.get("COSMIC_TIMEOUT"),
            transport=config.get("COSMIC_TRANSPORT"),
        )

    @property
    def objects_url(self) -> str:
        return f"{self.api_url}/buckets/{self.bucket_slug}/objects"


class CosmicClient:
    """Flask extension for the content API.

    Unbound, it reads the settings of ``current_app`` on every call, so one
    module-level instance serves any number of apps. Passing ``settings``
    binds it to those instead (no app context needed).
    """

    def __init__(self, app: Flask | None = None, settings: CosmicSettings | None = None) -> None:
        self._settings = settings
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        settings = CosmicSettings.from_config(app.config)
        if not settings.bucket_slug:
            logger.warning("COSMIC_BUCKET_SLUG is not set; catalog pages will be empty")
        app.extensions["cosmic"] = settings

    @property
    def settings(self) -> CosmicSettings:
        if self._settings is not None:
            return self._settings
        return current_app.extensions["cosmic"]

    async def find(self, query: ObjectQuery) -> ObjectList:
        settings = self.settings
        payload = await self._get(settings, query.to_params(settings.read_key))
        objects = payload.get("objects")
        if not isinstance(objects, list):
            raise CosmicMalformedResponse(f"'objects' missing from {query.type} response")
        total = payload.get("total", len(objects))
        if not isinstance(total, int):
            total = len(objects)
        return ObjectList(objects=objects, total=total)

    async def find_one(self, query: ObjectQuery) -> Dict[str, Any]:
        result = await self.find(query.first())
        if not result.objects:
            raise CosmicNotFound(f"No {query.type} object matches {query.filters}")
        obj = result.objects[0]
        if not isinstance(obj, dict):
            raise CosmicMalformedResponse(f"{query.type} object is not a mapping")
        return obj

    async def _get(self, settings: CosmicSettings, params: Dict[str, str]) -> Dict[str, Any]:
        try:
            async with httpx.AsyncClient(transport=settings.transport, timeout=settings.timeout) as client:
                response = await client.get(settings.objects_url, params=params)
        except httpx.HTTPError as exc:
            raise CosmicNetworkError(str(exc) or exc.__class__.__name__) from exc

        if response.status_code == 404:
            raise CosmicNotFound("No objects found")
        if response.is_error:
            raise CosmicResponseError(response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            raise CosmicMalformedResponse("Response body is not JSON") from exc
        if not isinstance(payload, dict):
            raise CosmicMalformedResponse("Response body is not a JSON object")
        return payload
