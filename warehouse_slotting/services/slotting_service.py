# warehouse_slotting/services/slotting_service.py
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from warehouse_slotting.config import config, SlottingSettings
from warehouse_slotting.models import SlottingClass, require_member
from warehouse_slotting.core.records import LocationRecord
from warehouse_slotting.core.zone_optimizer import optimize_zone_changes
from warehouse_slotting.core.golden_zone import select_golden_zone
from warehouse_slotting.core.recommendation import Recommendation, recommend
from warehouse_slotting.core.distribution import Distribution, analyze
from warehouse_slotting.core.pick_path import order_for_pick_path
from warehouse_slotting.events import SlottingChangedEvent
from warehouse_slotting.repository import LocationRepository
from warehouse_slotting.exceptions import LocationNotFoundError

logger = logging.getLogger(__name__)

AUTOMATIC_REASON = "Automatic slotting optimization"


@dataclass
class SlottingBalanceReport:
    warehouse_id: str
    distribution_by_zone: Dict[str, Distribution] = field(default_factory=dict)
    locations_rebalanced: int = 0
    zones_rebalanced: List[str] = field(default_factory=list)


class SlottingService:
    """Service running slotting passes against a location repository."""
    
    def __init__(
        self,
        repository: LocationRepository,
        settings: Optional[SlottingSettings] = None,
        publisher: Optional[Callable[[SlottingChangedEvent], None]] = None
    ):
        """Initialize the slotting service.
        
        Args:
            repository: Location repository
            settings: Slotting settings (defaults to the configured settings)
            publisher: Optional callable receiving SlottingChangedEvent objects
        """
        self.repository = repository
        self._settings = settings
        self.publisher = publisher
    
    @property
    def settings(self) -> SlottingSettings:
        return self._settings or config.slotting_settings
    
    def _publish(self, event: SlottingChangedEvent):
        if self.publisher is not None:
            self.publisher(event)
    
    def optimize_zone_slotting(self, warehouse_id: str, zone: str, updated_by: str = 'system') -> int:
        """Reassign slotting classes for a zone by distance from dock.
        
        Args:
            warehouse_id: Warehouse ID
            zone: Zone to optimize
            updated_by: User performing the optimization
            
        Returns:
            Number of locations updated
        """
        logger.info(f"Optimizing slotting for warehouse {warehouse_id} zone {zone}")
        
        locations = self.repository.find_by_zone(warehouse_id, zone)
        changes = optimize_zone_changes(locations, self.settings, updated_by)
        
        by_id = {loc.location_id: loc for loc in locations}
        for change in changes:
            self.repository.save(by_id[change.location_id])
            self._publish(SlottingChangedEvent.of(
                location_id=change.location_id,
                warehouse_id=change.warehouse_id,
                zone=change.zone,
                previous_class=change.previous_class,
                new_class=change.new_class,
                new_pick_path_sequence=change.pick_path_sequence,
                updated_by=updated_by,
                reason=AUTOMATIC_REASON
            ))
        
        logger.info(f"Updated {len(changes)} locations in zone {zone}")
        return len(changes)
    
    def get_slotting_recommendations(self, warehouse_id: str, zone: Optional[str] = None) -> Dict[str, Recommendation]:
        """Get slotting recommendations for a warehouse, optionally one zone.
        
        Returns:
            Dictionary mapping location ID to recommendation
        """
        logger.info(f"Generating slotting recommendations for warehouse {warehouse_id}")
        
        locations = self.repository.find_active_storage_locations(warehouse_id, zone)
        return recommend(locations, self.settings)
    
    def identify_golden_zone(self, warehouse_id: str, zone: str, fraction: Optional[float] = None) -> List[LocationRecord]:
        """Get the golden zone (most accessible locations) of a zone."""
        logger.debug(f"Identifying golden zone for warehouse {warehouse_id} zone {zone}")
        
        if fraction is None:
            fraction = self.settings.golden_zone_fraction
        return select_golden_zone(self.repository.find_by_zone(warehouse_id, zone), fraction)
    
    def get_optimized_pick_path(self, warehouse_id: str, zone: str) -> List[LocationRecord]:
        """Get a zone's locations in pick path order."""
        return order_for_pick_path(self.repository.find_by_zone(warehouse_id, zone))
    
    def analyze_zone_distribution(self, warehouse_id: str, zone: str) -> Distribution:
        return analyze(self.repository.find_by_zone(warehouse_id, zone), self.settings)
    
    def balance_slotting(self, warehouse_id: str, updated_by: str = 'system') -> SlottingBalanceReport:
        """Optimize every zone whose class distribution has drifted.
        
        Args:
            warehouse_id: Warehouse ID
            updated_by: User performing the rebalancing
            
        Returns:
            Report with the distribution of each zone before rebalancing
        """
        logger.info(f"Balancing slotting for warehouse {warehouse_id}")
        
        report = SlottingBalanceReport(warehouse_id=warehouse_id)
        for zone in self.repository.find_zones(warehouse_id):
            report.distribution_by_zone[zone] = self.analyze_zone_distribution(warehouse_id, zone)
        
        for zone, distribution in report.distribution_by_zone.items():
            if distribution.needs_rebalancing:
                logger.info(
                    f"Zone {zone} needs rebalancing "
                    f"(fast share {distribution.fast_share:.0%} of {distribution.total})"
                )
                report.locations_rebalanced += self.optimize_zone_slotting(warehouse_id, zone, updated_by)
                report.zones_rebalanced.append(zone)
        
        return report
    
    def find_optimal_location(
        self,
        warehouse_id: str,
        zone: str,
        target_class: SlottingClass,
        required_quantity: int
    ) -> Optional[LocationRecord]:
        """Find the nearest location of a class with room for a quantity.
        
        Args:
            warehouse_id: Warehouse ID
            zone: Zone to search
            target_class: Slotting class wanted
            required_quantity: Quantity the location must still be able to take
            
        Returns:
            The best location, or None if none qualifies
        """
        target_class = require_member(SlottingClass, target_class, 'target_class')
        logger.debug(f"Finding optimal location for class {target_class} in warehouse {warehouse_id} zone {zone}")
        
        candidates = [
            loc for loc in self.repository.find_by_zone(warehouse_id, zone)
            if loc.can_accept_inventory and loc.slotting_class is target_class
        ]
        candidates.sort(key=lambda loc: (
            loc.distance_from_dock is None,
            loc.distance_from_dock or 0,
            loc.pick_path_sequence is None,
            loc.pick_path_sequence or 0,
            loc.location_id,
        ))
        
        for location in candidates:
            if location.capacity is not None and location.capacity.available_quantity >= required_quantity:
                return location
        return None
    
    def update_slotting_class(
        self,
        location_id: str,
        slotting_class: SlottingClass,
        updated_by: str,
        reason: Optional[str] = None
    ) -> LocationRecord:
        """Manually set the slotting class of a location.
        
        Raises:
            LocationNotFoundError: If the location does not exist
        """
        logger.info(f"Updating slotting class for location {location_id} to {slotting_class}")
        
        location = self.repository.get(location_id)
        if location is None:
            raise LocationNotFoundError(f"Location {location_id} not found")
        
        previous = location.assign_slotting_class(slotting_class, updated_by)
        self.repository.save(location)
        
        self._publish(SlottingChangedEvent.of(
            location_id=location.location_id,
            warehouse_id=location.warehouse_id,
            zone=location.zone,
            previous_class=previous,
            new_class=location.slotting_class,
            new_pick_path_sequence=location.pick_path_sequence,
            updated_by=updated_by,
            reason=reason
        ))
        return location
