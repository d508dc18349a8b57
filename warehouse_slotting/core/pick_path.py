# warehouse_slotting/core/pick_path.py
from typing import Iterable, List

from warehouse_slotting.models import SlottingClass, require_member
from warehouse_slotting.core.records import LocationRecord


def pick_path_key(location: LocationRecord):
    """Sort key giving a total order over pick locations.
    
    Class priority, then distance from dock (unsurveyed last), then aisle,
    bay and level compared as strings, then location ID.
    """
    slotting_class = require_member(SlottingClass, location.slotting_class, 'slotting_class')
    distance = location.distance_from_dock
    return (
        slotting_class.pick_path_priority,
        distance is None,
        distance if distance is not None else 0,
        location.aisle or '',
        location.bay or '',
        location.level or '',
        location.location_id,
    )


def order_for_pick_path(locations: Iterable[LocationRecord]) -> List[LocationRecord]:
    """Order a zone's active storage locations into a pick route.
    
    Locations without a slotting class are left out.
    """
    candidates = [
        loc for loc in locations
        if loc.is_active_storage and loc.slotting_class is not None
    ]
    return sorted(candidates, key=pick_path_key)
