from __future__ import annotations

from ...domain import StudySpot
from .base import OwnedTableRepository


class StudySpotRepository(OwnedTableRepository[StudySpot]):
    model = StudySpot
    order_column = "created_at"
