from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol
from urllib.parse import quote

import httpx

from ..config import MapsSettings
from ..domain import Filter, StudySpot

logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves untouched besides alphanumerics.
_URI_COMPONENT_SAFE = "-_.!~*'()"


class MapsKeyProvider(Protocol):
    def fetch_key(self) -> Optional[str]: ...


@dataclass(frozen=True)
class StaticMapsKeyProvider:
    api_key: Optional[str]

    def fetch_key(self) -> Optional[str]:
        return self.api_key or None


@dataclass(frozen=True)
class RemoteMapsKeyProvider:
    """Reads the key from a key-retrieval endpoint returning ``{"apiKey": ...}``."""

    endpoint: str
    timeout: float = 10.0

    def fetch_key(self) -> Optional[str]:
        try:
            response = httpx.get(self.endpoint, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError):
            logger.exception("Error fetching Maps API key from %s", self.endpoint)
            return None
        key = payload.get("apiKey") if isinstance(payload, dict) else None
        return key or None


def build_search_query(
    query: str,
    filters: Filter,
    *,
    default_query: str = "study spots",
    region: str = "singapore",
) -> str:
    text = query.strip() or default_query
    for facet in filters.enabled():
        text += f" {facet.keyword}"
    if region and region.lower() not in text.lower():
        text += f" {region}"
    return text


def _encode(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def build_search_url(api_key: str, query: str, *, base_url: str = "https://www.google.com/maps/embed/v1") -> str:
    return f"{base_url}/search?key={_encode(api_key)}&q={_encode(query)}"


def build_place_url(
    api_key: str,
    spot: StudySpot,
    *,
    fallback_address: str = "Singapore",
    base_url: str = "https://www.google.com/maps/embed/v1",
) -> str:
    place = f"{spot.name} {spot.address or fallback_address}"
    return f"{base_url}/place?key={_encode(api_key)}&q={_encode(place)}"


def initial_map_url(api_key: str, *, base_url: str = "https://www.google.com/maps/embed/v1") -> str:
    return f"{base_url}/search?key={_encode(api_key)}&q=study+spots+in+Singapore"


@dataclass
class MapSearch:
    """Composes embed URLs from settings and a key provider; a missing key yields ``None``."""

    settings: MapsSettings
    keys: MapsKeyProvider

    def _key(self) -> Optional[str]:
        key = self.keys.fetch_key()
        if not key:
            logger.warning("Maps API key is not configured; skipping map update")
        return key

    def initial_url(self) -> Optional[str]:
        key = self._key()
        if not key:
            return None
        return initial_map_url(key, base_url=self.settings.embed_base_url)

    def search_url(self, query: str, filters: Filter) -> Optional[str]:
        key = self._key()
        if not key:
            return None
        text = build_search_query(
            query,
            filters,
            default_query=self.settings.default_query,
            region=self.settings.region,
        )
        return build_search_url(key, text, base_url=self.settings.embed_base_url)

    def place_url(self, spot: StudySpot) -> Optional[str]:
        key = self._key()
        if not key:
            return None
        return build_place_url(
            key,
            spot,
            fallback_address=self.settings.region.title(),
            base_url=self.settings.embed_base_url,
        )
