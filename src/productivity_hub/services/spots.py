from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..data.policy import StoragePolicy
from ..data.stores import StudySpotStore
from ..domain import Facet, Filter, SaveSpotResult, StorageMode, StudySpot
from .maps import MapSearch

SAVED_MESSAGE = "Spot saved to favorites!"
SAVED_LOCALLY_MESSAGE = "Spot saved to favorites! Sign in to sync across devices."
SAVE_FAILED_MESSAGE = "Failed to save spot. Please try again."
DEFAULT_SPOT_NOTES = "Added from search"


@dataclass
class SpotFinder:
    """Search state for the study-spot map plus the favorites collection."""

    store: StudySpotStore
    maps: MapSearch
    policy: StoragePolicy
    filters: Filter = field(default_factory=Filter)
    query: str = ""
    map_url: Optional[str] = None

    def load(self) -> Optional[str]:
        self.map_url = self.maps.initial_url()
        return self.map_url

    def favorites(self) -> List[StudySpot]:
        return self.store.list()

    def toggle_filter(self, facet: Facet) -> bool:
        return self.filters.toggle(facet)

    def search(self, query: Optional[str] = None) -> Optional[str]:
        if query is not None:
            self.query = query
        url = self.maps.search_url(self.query, self.filters)
        if url is not None:
            self.map_url = url
        return url

    def view_spot(self, spot_id: str) -> Optional[str]:
        spot = self.store.find(spot_id)
        if spot is None:
            return None
        url = self.maps.place_url(spot)
        if url is not None:
            self.map_url = url
        return url

    def save_spot(self, name: str, address: str = "") -> SaveSpotResult:
        if not name.strip():
            return SaveSpotResult(saved=False, message="A spot name is required.")
        spot = StudySpot(
            name=name,
            address=address,
            has_wifi=self.filters.wifi,
            has_food=self.filters.food,
            has_drinks=self.filters.drinks,
            has_charging=self.filters.charging,
            notes=DEFAULT_SPOT_NOTES,
        )
        local = self.policy.mode() is StorageMode.LOCAL
        saved = self.store.add(spot)
        if saved is None:
            return SaveSpotResult(saved=False, message=SAVE_FAILED_MESSAGE)
        return SaveSpotResult(saved=True, message=SAVED_LOCALLY_MESSAGE if local else SAVED_MESSAGE, spot=saved)
