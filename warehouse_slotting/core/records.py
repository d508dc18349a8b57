# warehouse_slotting/core/records.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from warehouse_slotting.models import (
    LocationType, LocationStatus, SlottingClass, require_member
)
from warehouse_slotting.exceptions import ValidationError
from warehouse_slotting.utils.validation import (
    validate_location, validate_capacity, validate_dimensions
)


def _raise_on_errors(errors, subject):
    if errors:
        message = '; '.join(f"{k}: {v}" for k, v in errors.items())
        raise ValidationError(f"Invalid {subject}: {message}", details=errors)


@dataclass
class Capacity:
    """Storage capacity of a location and its current usage."""
    max_quantity: int
    max_weight: float
    max_volume: float
    weight_unit: str = 'KG'
    volume_unit: str = 'M3'
    current_quantity: int = 0
    current_weight: float = 0.0
    current_volume: float = 0.0

    def __post_init__(self):
        _raise_on_errors(validate_capacity(self), 'capacity')

    @property
    def available_quantity(self) -> int:
        return self.max_quantity - self.current_quantity

    @property
    def utilization_percentage(self) -> float:
        """Highest of quantity, weight and volume utilisation, as a percentage."""
        return round(max(
            self.current_quantity * 100.0 / self.max_quantity,
            self.current_weight * 100.0 / self.max_weight,
            self.current_volume * 100.0 / self.max_volume,
        ), 2)

    @property
    def is_full(self) -> bool:
        return self.utilization_percentage >= 95.0

    @property
    def is_near_capacity(self) -> bool:
        return self.utilization_percentage >= 80.0

    def can_accept(self, quantity: int, weight: float = 0.0, volume: float = 0.0) -> bool:
        return (
            self.current_quantity + quantity <= self.max_quantity
            and self.current_weight + weight <= self.max_weight
            and self.current_volume + volume <= self.max_volume
        )


@dataclass
class Dimensions:
    """Physical dimensions of a location."""
    length: float
    width: float
    height: float
    unit: str = 'CM'

    def __post_init__(self):
        _raise_on_errors(validate_dimensions(self), 'dimensions')

    @property
    def volume(self) -> float:
        return self.length * self.width * self.height

    @property
    def floor_area(self) -> float:
        return self.length * self.width

    def can_fit(self, item: 'Dimensions') -> bool:
        if self.unit != item.unit:
            raise ValidationError(
                f"Cannot compare dimensions in {self.unit} with dimensions in {item.unit}"
            )
        return self.length >= item.length and self.width >= item.width and self.height >= item.height


@dataclass
class LocationRecord:
    """In-memory view of one warehouse location as seen by the slotting engine.
    
    Records are owned by the repository. The engine only changes
    slotting_class and pick_path_sequence, through assign_slotting_class.
    """
    location_id: str
    warehouse_id: str
    location_type: LocationType
    zone: Optional[str] = None
    status: LocationStatus = LocationStatus.ACTIVE
    slotting_class: Optional[SlottingClass] = SlottingClass.MIXED
    distance_from_dock: Optional[int] = None
    pick_path_sequence: Optional[int] = None
    capacity: Optional[Capacity] = None
    dimensions: Optional[Dimensions] = None
    location_name: Optional[str] = None
    parent_location_id: Optional[str] = None
    aisle: Optional[str] = None
    bay: Optional[str] = None
    level: Optional[str] = None
    position: Optional[str] = None
    updated_by: Optional[str] = None
    updated_at: Optional[datetime] = field(default=None, compare=False)

    def __post_init__(self):
        require_member(LocationType, self.location_type, 'location_type')
        require_member(LocationStatus, self.status, 'status')
        if self.slotting_class is not None:
            require_member(SlottingClass, self.slotting_class, 'slotting_class')
        _raise_on_errors(validate_location(self), f"location {self.location_id!r}")

    @property
    def is_active_storage(self) -> bool:
        """True for ACTIVE locations whose type can hold inventory."""
        status = require_member(LocationStatus, self.status, 'status')
        location_type = require_member(LocationType, self.location_type, 'location_type')
        return status is LocationStatus.ACTIVE and location_type.can_store_inventory

    @property
    def can_accept_inventory(self) -> bool:
        return self.status.can_accept_inventory and self.location_type.can_store_inventory

    @property
    def has_known_distance(self) -> bool:
        return self.distance_from_dock is not None

    def assign_slotting_class(self, slotting_class: SlottingClass, updated_by: Optional[str] = None):
        """Set the slotting class and re-derive the pick path sequence.
        
        Args:
            slotting_class: New slotting class
            updated_by: User or process making the change
            
        Returns:
            The previous slotting class
        """
        slotting_class = require_member(SlottingClass, slotting_class, 'slotting_class')
        previous = self.slotting_class
        self.slotting_class = slotting_class
        self.pick_path_sequence = slotting_class.base_pick_path_sequence
        self._touch(updated_by)
        return previous

    def set_pick_path_sequence(self, sequence: Optional[int], updated_by: Optional[str] = None):
        """Manually override the pick path sequence."""
        if sequence is not None and (isinstance(sequence, bool) or not isinstance(sequence, int) or sequence < 0):
            raise ValidationError(f"Pick path sequence must be a non-negative integer, got {sequence!r}")
        self.pick_path_sequence = sequence
        self._touch(updated_by)

    def set_distance_from_dock(self, distance: Optional[int], updated_by: Optional[str] = None):
        if distance is not None and (isinstance(distance, bool) or not isinstance(distance, int) or distance < 0):
            raise ValidationError(f"Distance from dock must be a non-negative integer, got {distance!r}")
        self.distance_from_dock = distance
        self._touch(updated_by)

    def _touch(self, updated_by):
        if updated_by:
            self.updated_by = updated_by
        self.updated_at = datetime.now()


def is_slotting_candidate(location: LocationRecord) -> bool:
    """True when a location takes part in distance-based slotting.
    
    It must be an active storage location with a surveyed distance.
    """
    return location.is_active_storage and location.has_known_distance
