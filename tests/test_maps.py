from __future__ import annotations

import httpx
import pytest

from productivity_hub.domain import Facet, Filter, StudySpot
from productivity_hub.services import MapSearch, RemoteMapsKeyProvider, StaticMapsKeyProvider, build_search_query
from productivity_hub.services.maps import build_place_url, build_search_url


def test_default_query_gets_filters_then_region():
    assert build_search_query("", Filter(wifi=True, food=True)) == "study spots wifi food singapore"


def test_region_is_not_repeated():
    assert build_search_query("Cafes in Singapore", Filter()) == "Cafes in Singapore"


def test_facet_keywords_follow_declaration_order():
    filters = Filter()
    filters.toggle(Facet.CHARGING)
    filters.toggle(Facet.DRINKS)

    assert build_search_query("library", filters) == "library coffee power outlets singapore"


def test_search_url_encodes_the_query():
    url = build_search_url("KEY", "study spots wifi")

    assert url == "https://www.google.com/maps/embed/v1/search?key=KEY&q=study%20spots%20wifi"


def test_place_url_falls_back_to_region_without_address():
    url = build_place_url("KEY", StudySpot(name="Library"))

    assert url.endswith("/place?key=KEY&q=Library%20Singapore")


def test_map_search_without_key_returns_none(settings):
    search = MapSearch(settings.maps, StaticMapsKeyProvider(None))

    assert search.initial_url() is None
    assert search.search_url("library", Filter()) is None
    assert search.place_url(StudySpot(name="Library")) is None


def test_map_search_uses_configured_key(settings):
    search = MapSearch(settings.maps, StaticMapsKeyProvider(settings.maps.api_key))

    url = search.search_url("", Filter(wifi=True))

    assert url == (
        "https://www.google.com/maps/embed/v1/search?key=test-maps-key&q=study%20spots%20wifi%20singapore"
    )
    assert "q=study+spots+in+Singapore" in search.initial_url()


def test_remote_key_provider_reads_api_key(monkeypatch):
    endpoint = "https://hub.example.com/api/maps-key"

    def fake_get(url, timeout):
        assert url == endpoint
        return httpx.Response(200, json={"apiKey": "remote-key"}, request=httpx.Request("GET", url))

    monkeypatch.setattr(httpx, "get", fake_get)

    assert RemoteMapsKeyProvider(endpoint).fetch_key() == "remote-key"


@pytest.mark.parametrize(
    "status, body",
    [(500, {"error": "boom"}), (200, {"apiKey": ""}), (200, ["not", "an", "object"])],
)
def test_remote_key_provider_failures_yield_none(monkeypatch, status, body):
    def fake_get(url, timeout):
        return httpx.Response(status, json=body, request=httpx.Request("GET", url))

    monkeypatch.setattr(httpx, "get", fake_get)

    assert RemoteMapsKeyProvider("https://hub.example.com/api/maps-key").fetch_key() is None


def test_remote_key_provider_network_error(monkeypatch):
    def fake_get(url, timeout):
        raise httpx.ConnectError("unreachable", request=httpx.Request("GET", url))

    monkeypatch.setattr(httpx, "get", fake_get)

    assert RemoteMapsKeyProvider("https://hub.example.com/api/maps-key").fetch_key() is None
