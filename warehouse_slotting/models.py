# warehouse_slotting/models.py
from sqlalchemy import Column, Integer, String, Float, DateTime, Enum, Index
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func
import enum

from warehouse_slotting.exceptions import UnknownVariantError

Base = declarative_base()


def require_member(enum_cls, value, field_name=None):
    """Return value if it is a member of enum_cls, otherwise fail fast.
    
    Args:
        enum_cls: Expected enum class
        value: Value to check
        field_name: Optional field name for the error message
        
    Returns:
        The enum member
        
    Raises:
        UnknownVariantError: If value is not a member of enum_cls
    """
    if isinstance(value, enum_cls):
        return value
    label = f" for {field_name}" if field_name else ""
    raise UnknownVariantError(
        f"Unknown {enum_cls.__name__} value{label}: {value!r}",
        code='UNKNOWN_VARIANT',
        details={'enum': enum_cls.__name__, 'value': repr(value)}
    )


class _ParsableEnum(enum.Enum):

    def __str__(self):
        """Return the string value of the enum."""
        return self.value

    @classmethod
    def from_string(cls, value: str):
        """Create a member from its string value (case-insensitive).
        
        Raises:
            UnknownVariantError if the string value is not valid
        """
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            valid = ', '.join(m.value for m in cls)
            raise UnknownVariantError(
                f"Invalid {cls.__name__}: {value}. Valid values are: {valid}",
                code='UNKNOWN_VARIANT'
            )


class LocationType(_ParsableEnum):
    """Type of a location in the warehouse hierarchy.
    
    Values:
        WAREHOUSE: Warehouse facility (hierarchy root)
        ZONE: Functional zone within warehouse
        AISLE: Storage aisle
        BAY: Storage bay within aisle
        LEVEL: Storage level/shelf
        BIN: Individual storage bin/position
        DOOR: Shipping/receiving door
        STAGING: Staging area
        WORK_STATION: Work station/put wall
    """
    WAREHOUSE = 'WAREHOUSE'
    ZONE = 'ZONE'
    AISLE = 'AISLE'
    BAY = 'BAY'
    LEVEL = 'LEVEL'
    BIN = 'BIN'
    DOOR = 'DOOR'
    STAGING = 'STAGING'
    WORK_STATION = 'WORK_STATION'

    @property
    def can_have_children(self) -> bool:
        return _TYPE_TRAITS[self][0]

    @property
    def can_store_inventory(self) -> bool:
        return _TYPE_TRAITS[self][1]

    @property
    def hierarchy_depth(self) -> int:
        """Depth in the hierarchy, 0 for the warehouse root."""
        return _TYPE_TRAITS[self][2]

    @property
    def typical_parent(self):
        return _TYPE_TRAITS[self][3]


# type -> (can_have_children, can_store_inventory, hierarchy_depth, typical_parent)
_TYPE_TRAITS = {
    LocationType.WAREHOUSE: (True, False, 0, None),
    LocationType.ZONE: (True, False, 1, LocationType.WAREHOUSE),
    LocationType.DOOR: (False, False, 1, LocationType.WAREHOUSE),
    LocationType.AISLE: (True, False, 2, LocationType.ZONE),
    LocationType.STAGING: (False, True, 2, LocationType.ZONE),
    LocationType.WORK_STATION: (False, False, 2, LocationType.ZONE),
    LocationType.BAY: (True, False, 3, LocationType.AISLE),
    LocationType.LEVEL: (True, False, 4, LocationType.BAY),
    LocationType.BIN: (False, True, 5, LocationType.LEVEL),
}


class LocationStatus(_ParsableEnum):
    """Operational status of a location.
    
    DECOMMISSIONED is terminal: no transition leads out of it.
    """
    ACTIVE = 'ACTIVE'
    INACTIVE = 'INACTIVE'
    BLOCKED = 'BLOCKED'
    RESERVED = 'RESERVED'
    FULL = 'FULL'
    DECOMMISSIONED = 'DECOMMISSIONED'

    @property
    def can_accept_inventory(self) -> bool:
        return self in (LocationStatus.ACTIVE, LocationStatus.RESERVED)

    @property
    def can_release_inventory(self) -> bool:
        return self in (LocationStatus.ACTIVE, LocationStatus.FULL, LocationStatus.RESERVED)

    @property
    def is_operational(self) -> bool:
        return self in (LocationStatus.ACTIVE, LocationStatus.FULL, LocationStatus.RESERVED)

    @property
    def requires_attention(self) -> bool:
        return self in (LocationStatus.BLOCKED, LocationStatus.FULL)

    @property
    def is_terminal(self) -> bool:
        return self is LocationStatus.DECOMMISSIONED

    def can_transition_to(self, target: 'LocationStatus') -> bool:
        """Check whether a location in this status may move to target."""
        target = require_member(LocationStatus, target, 'status')
        return not self.is_terminal and target is not self


class SlottingClass(_ParsableEnum):
    """ABC velocity classification for a storage location.
    
    Values:
        FAST_MOVER: Very high velocity - critical items
        A: High velocity - 80% of picks, 20% of SKUs
        B: Medium velocity - 15% of picks, 30% of SKUs
        C: Low velocity - 5% of picks, 50% of SKUs
        SLOW_MOVER: Very low velocity - rare picks
        SEASONAL: Seasonal items
        HAZMAT: Hazardous materials
        OVERSIZED: Oversized items requiring special handling
        MIXED: Mixed velocity items
    """
    FAST_MOVER = 'FAST_MOVER'
    A = 'A'
    B = 'B'
    C = 'C'
    SLOW_MOVER = 'SLOW_MOVER'
    SEASONAL = 'SEASONAL'
    HAZMAT = 'HAZMAT'
    OVERSIZED = 'OVERSIZED'
    MIXED = 'MIXED'

    @property
    def pick_path_priority(self) -> int:
        """Pick path priority; lower is visited earlier."""
        return _CLASS_TRAITS[self][0]

    @property
    def ideal_distance_band(self) -> int:
        """Rank of the distance band this class ideally occupies (1 = closest to dock)."""
        return _CLASS_TRAITS[self][1]

    @property
    def requires_special_handling(self) -> bool:
        return self in (SlottingClass.HAZMAT, SlottingClass.OVERSIZED)

    @property
    def base_pick_path_sequence(self) -> int:
        """Sequence derived automatically when a location receives this class."""
        return self.pick_path_priority * 1000


# class -> (pick_path_priority, ideal_distance_band)
_CLASS_TRAITS = {
    SlottingClass.FAST_MOVER: (1, 1),
    SlottingClass.A: (2, 1),
    SlottingClass.B: (3, 2),
    SlottingClass.C: (4, 3),
    SlottingClass.SLOW_MOVER: (5, 4),
    SlottingClass.SEASONAL: (3, 2),
    SlottingClass.HAZMAT: (6, 5),
    SlottingClass.OVERSIZED: (6, 4),
    SlottingClass.MIXED: (3, 2),
}

# Classes assigned by distance, nearest band first
VELOCITY_BANDS = (
    SlottingClass.FAST_MOVER,
    SlottingClass.A,
    SlottingClass.B,
    SlottingClass.C,
    SlottingClass.SLOW_MOVER,
)


class Location(Base):
    __tablename__ = 'location_master'
    
    location_id = Column(String(64), primary_key=True)
    warehouse_id = Column(String(20), nullable=False)
    location_name = Column(String(100))
    location_type = Column(Enum(LocationType), nullable=False)
    status = Column(Enum(LocationStatus), nullable=False, default=LocationStatus.ACTIVE)
    parent_location_id = Column(String(64))
    zone = Column(String(50))
    
    # Physical address
    aisle = Column(String(20))
    bay = Column(String(20))
    level = Column(String(20))
    position = Column(String(20))
    
    # Slotting
    slotting_class = Column(Enum(SlottingClass), default=SlottingClass.MIXED)
    distance_from_dock = Column(Integer)
    pick_path_sequence = Column(Integer)
    
    # Capacity
    max_quantity = Column(Integer)
    current_quantity = Column(Integer)
    max_weight = Column(Float)
    current_weight = Column(Float)
    max_volume = Column(Float)
    current_volume = Column(Float)
    weight_unit = Column(String(10))
    volume_unit = Column(String(10))
    
    # Dimensions
    length = Column(Float)
    width = Column(Float)
    height = Column(Float)
    dimension_unit = Column(String(10))
    
    updated_by = Column(String(50))
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())
    
    __table_args__ = (
        Index('idx_location_warehouse_zone', 'warehouse_id', 'zone'),
        Index('idx_location_type_status', 'location_type', 'status'),
        Index('idx_location_slotting_class', 'slotting_class'),
    )
    
    def __repr__(self):
        return f"<Location(location_id='{self.location_id}', zone='{self.zone}', slotting_class={self.slotting_class})>"
