# warehouse_slotting/core/golden_zone.py
import math
from typing import Iterable, List, Optional

from warehouse_slotting.config import config
from warehouse_slotting.core.records import LocationRecord, is_slotting_candidate
from warehouse_slotting.exceptions import ConfigError


def golden_zone_size(total_candidates: int, fraction: float) -> int:
    """Number of locations in the golden zone.
    
    Args:
        total_candidates: Number of eligible locations
        fraction: Share of candidates in the golden zone, in (0, 1]
        
    Returns:
        ceil(max(1, total * fraction)), or 0 when there are no candidates
    """
    if total_candidates <= 0:
        return 0
    # Rounding first keeps e.g. 10 * 0.7 = 7.000000000000001 at 7
    return math.ceil(max(1.0, round(total_candidates * fraction, 9)))


def _proximity_key(location: LocationRecord):
    sequence = location.pick_path_sequence
    return (
        location.distance_from_dock,
        sequence is None,
        sequence if sequence is not None else 0,
        location.location_id,
    )


def select_golden_zone(
    locations: Iterable[LocationRecord],
    fraction: Optional[float] = None
) -> List[LocationRecord]:
    """Select the most accessible locations of a zone.
    
    Candidates are active storage locations with a known distance, ranked by
    distance from dock and then pick path sequence (unsequenced last).
    
    Args:
        locations: Locations of one warehouse zone
        fraction: Share of candidates to return (defaults to the configured
            golden zone fraction)
        
    Returns:
        The top-ranked candidates, nearest first
    """
    if fraction is None:
        fraction = config.slotting_settings.golden_zone_fraction
    elif not 0.0 < fraction <= 1.0:
        raise ConfigError(f"Golden zone fraction must be in (0, 1], got {fraction}", code='GOLDEN_ZONE')
    
    candidates = sorted((loc for loc in locations if is_slotting_candidate(loc)), key=_proximity_key)
    return candidates[:golden_zone_size(len(candidates), fraction)]
