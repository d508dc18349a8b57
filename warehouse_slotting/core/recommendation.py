# warehouse_slotting/core/recommendation.py
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from warehouse_slotting.config import config, SlottingSettings
from warehouse_slotting.models import SlottingClass
from warehouse_slotting.core.classifier import classify, recommended_distance_from_dock
from warehouse_slotting.core.records import LocationRecord

DISTANCE_NOT_SET = "distance not set"

BASE_CONFIDENCE = 50
MAX_DISTANCE_POINTS = 30
CAPACITY_POINTS = 10
DIMENSIONS_POINTS = 10


@dataclass(frozen=True)
class Recommendation:
    location_id: str
    current_class: Optional[SlottingClass]
    recommended_class: Optional[SlottingClass]
    confidence_score: int
    reasoning: str

    @property
    def is_actionable(self) -> bool:
        """True when the recommendation proposes an actual class change."""
        return self.confidence_score > 0 and self.recommended_class is not self.current_class


def calculate_confidence_score(
    location: LocationRecord,
    recommended_class: SlottingClass,
    settings: Optional[SlottingSettings] = None
) -> int:
    """Score how much a recommendation can be trusted, from 0 to 100.
    
    Base score of 50, plus up to 30 points the closer the location sits to
    the ideal distance of the recommended class, plus 10 each when capacity
    and dimensions are configured.
    """
    score = BASE_CONFIDENCE
    
    if location.distance_from_dock is not None:
        ideal = recommended_distance_from_dock(recommended_class, settings)
        gap = abs(location.distance_from_dock - ideal)
        score += max(0, MAX_DISTANCE_POINTS - gap)
    
    if location.capacity is not None:
        score += CAPACITY_POINTS
    
    if location.dimensions is not None:
        score += DIMENSIONS_POINTS
    
    return max(0, min(100, score))


def recommend_location(location: LocationRecord, settings: Optional[SlottingSettings] = None) -> Recommendation:
    """Build the recommendation for a single location without changing it."""
    if location.distance_from_dock is None:
        return Recommendation(
            location_id=location.location_id,
            current_class=location.slotting_class,
            recommended_class=location.slotting_class,
            confidence_score=0,
            reasoning=DISTANCE_NOT_SET
        )
    
    settings = settings or config.slotting_settings
    recommended = classify(location.distance_from_dock, settings)
    reasoning = (
        f"Location is {location.distance_from_dock} units from dock. "
        f"Recommended {recommended} (current: {location.slotting_class})"
    )
    return Recommendation(
        location_id=location.location_id,
        current_class=location.slotting_class,
        recommended_class=recommended,
        confidence_score=calculate_confidence_score(location, recommended, settings),
        reasoning=reasoning
    )


def recommend(
    locations: Iterable[LocationRecord],
    settings: Optional[SlottingSettings] = None
) -> Dict[str, Recommendation]:
    """Recommend a slotting class for every active storage location.
    
    Locations without a surveyed distance get a sentinel recommendation
    (same class, confidence 0, reasoning "distance not set").
    
    Args:
        locations: Locations to inspect (never modified)
        settings: Slotting settings (defaults to the configured settings)
        
    Returns:
        Dictionary mapping location ID to its recommendation, in input order
    """
    return {
        location.location_id: recommend_location(location, settings)
        for location in locations
        if location.is_active_storage
    }
