from __future__ import annotations

from ...domain import StudySpot
from .base import DualModeStore


class StudySpotStore(DualModeStore[StudySpot]):
    record_type = StudySpot
