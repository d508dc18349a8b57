# warehouse_slotting/core/distribution.py
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional

from warehouse_slotting.config import config, SlottingSettings
from warehouse_slotting.models import LocationStatus, LocationType, SlottingClass, require_member
from warehouse_slotting.core.records import LocationRecord

FAST_CLASSES = (SlottingClass.FAST_MOVER, SlottingClass.A)


@dataclass(frozen=True)
class Distribution:
    counts_by_class: Dict[SlottingClass, int] = field(default_factory=dict)
    total: int = 0
    needs_rebalancing: bool = False

    def count(self, slotting_class: SlottingClass) -> int:
        return self.counts_by_class.get(slotting_class, 0)

    @property
    def fast_share(self) -> float:
        """Share of FAST_MOVER and A locations, 0.0 when empty."""
        if not self.total:
            return 0.0
        return sum(self.count(c) for c in FAST_CLASSES) / self.total


def _is_counted(location: LocationRecord) -> bool:
    status = require_member(LocationStatus, location.status, 'status')
    location_type = require_member(LocationType, location.location_type, 'location_type')
    if status is LocationStatus.DECOMMISSIONED or not location_type.can_store_inventory:
        return False
    if location.slotting_class is None:
        return False
    require_member(SlottingClass, location.slotting_class, 'slotting_class')
    return True


def analyze(locations: Iterable[LocationRecord], settings: Optional[SlottingSettings] = None) -> Distribution:
    """Count storage locations per slotting class and flag over-promotion.
    
    A zone needs rebalancing when FAST_MOVER + A locations make up more
    than the rebalance tolerance (30% by default) of the counted total;
    the intended Pareto shape puts roughly 20% there.
    
    Args:
        locations: Locations of one warehouse zone
        settings: Slotting settings (defaults to the configured settings)
        
    Returns:
        Distribution of the zone
    """
    settings = settings or config.slotting_settings
    counts = Counter(loc.slotting_class for loc in locations if _is_counted(loc))
    total = sum(counts.values())
    
    fast = sum(counts.get(c, 0) for c in FAST_CLASSES)
    needs_rebalancing = total > 0 and fast / total > settings.rebalance_tolerance
    
    return Distribution(counts_by_class=dict(counts), total=total, needs_rebalancing=needs_rebalancing)
