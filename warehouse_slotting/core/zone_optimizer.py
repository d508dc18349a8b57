# warehouse_slotting/core/zone_optimizer.py
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from warehouse_slotting.config import SlottingSettings
from warehouse_slotting.models import SlottingClass
from warehouse_slotting.core.classifier import classify
from warehouse_slotting.core.records import LocationRecord, is_slotting_candidate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlottingChange:
    """A class reassignment made during an optimization pass."""
    location_id: str
    warehouse_id: str
    zone: Optional[str]
    previous_class: Optional[SlottingClass]
    new_class: SlottingClass
    pick_path_sequence: int


def optimize_zone_changes(
    locations: Iterable[LocationRecord],
    settings: Optional[SlottingSettings] = None,
    updated_by: Optional[str] = None
) -> List[SlottingChange]:
    """Reassign slotting classes by distance from dock.
    
    Only active storage locations with a known distance are considered.
    A location is changed when its recommended class differs from its
    current one; the change also resets its pick path sequence. Running
    the pass again on the same records yields no further changes.
    
    Args:
        locations: Locations of one warehouse zone (mutated in place)
        settings: Slotting settings (defaults to the configured settings)
        updated_by: User or process performing the optimization
        
    Returns:
        List of changes made, in input order
    """
    changes = []
    
    for location in locations:
        if not is_slotting_candidate(location):
            continue
        
        recommended = classify(location.distance_from_dock, settings)
        if recommended is location.slotting_class:
            continue
        
        previous = location.assign_slotting_class(recommended, updated_by)
        changes.append(SlottingChange(
            location_id=location.location_id,
            warehouse_id=location.warehouse_id,
            zone=location.zone,
            previous_class=previous,
            new_class=recommended,
            pick_path_sequence=location.pick_path_sequence
        ))
        logger.debug(f"Location {location.location_id}: {previous} -> {recommended}")
    
    return changes


def optimize_zone(
    locations: Iterable[LocationRecord],
    settings: Optional[SlottingSettings] = None,
    updated_by: Optional[str] = None
) -> int:
    """Reassign slotting classes in a zone and return the number of locations changed."""
    return len(optimize_zone_changes(locations, settings, updated_by))
