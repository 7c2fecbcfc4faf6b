from __future__ import annotations

from typing import Any, Dict, Optional

from ..domain import Facet
from .registry import register_api
from .serializers import serialize_spot
from .state import api_state


@register_api(
    "list_favorite_spots",
    description="List saved study spots.",
    category="spots",
    tags=("list", "favorites"),
)
def list_favorite_spots() -> Dict[str, Any]:
    context = api_state.ensure_started()
    return {"spots": [serialize_spot(spot) for spot in context.finder.favorites()]}


@register_api(
    "toggle_filter",
    description="Toggle an amenity filter: wifi, food, drinks or charging.",
    category="spots",
    tags=("filter",),
)
def toggle_filter(facet: str) -> Dict[str, Any]:
    context = api_state.ensure_started()
    context.finder.toggle_filter(Facet(facet))
    return {"filters": context.finder.filters.as_dict()}


@register_api(
    "search_study_spots",
    description="Build the map embed URL for a study-spot search with the given amenity filters.",
    category="spots",
    tags=("search", "maps"),
)
def search_study_spots(
    query: str = "",
    wifi: Optional[bool] = None,
    food: Optional[bool] = None,
    drinks: Optional[bool] = None,
    charging: Optional[bool] = None,
) -> Dict[str, Any]:
    context = api_state.ensure_started()
    finder = context.finder
    requested = {Facet.WIFI: wifi, Facet.FOOD: food, Facet.DRINKS: drinks, Facet.CHARGING: charging}
    for facet, wanted in requested.items():
        if wanted is not None and finder.filters.is_enabled(facet) != wanted:
            finder.toggle_filter(facet)
    url = finder.search(query)
    return {"map_url": url, "filters": finder.filters.as_dict(), "query": finder.query}


@register_api(
    "view_favorite_spot",
    description="Build the map embed URL that shows a saved study spot.",
    category="spots",
    tags=("maps", "favorites"),
)
def view_favorite_spot(spot_id: str) -> Dict[str, Any]:
    context = api_state.ensure_started()
    return {"map_url": context.finder.view_spot(spot_id), "spot_id": spot_id}


@register_api(
    "save_study_spot",
    description="Save a study spot to favorites, tagged with the currently enabled amenity filters.",
    category="spots",
    tags=("create", "favorites"),
)
def save_study_spot(name: str, address: str = "") -> Dict[str, Any]:
    context = api_state.ensure_started()
    result = context.finder.save_spot(name, address)
    return {"saved": result.saved, "message": result.message, "spot": serialize_spot(result.spot)}
