# warehouse_slotting/repository.py
import logging
import threading
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from warehouse_slotting.models import Location, LocationStatus
from warehouse_slotting.core.records import Capacity, Dimensions, LocationRecord
from warehouse_slotting.exceptions import RepositoryError

logger = logging.getLogger(__name__)

_RECORD_FIELDS = (
    'location_id', 'warehouse_id', 'location_type', 'zone', 'status',
    'slotting_class', 'distance_from_dock', 'pick_path_sequence',
    'location_name', 'parent_location_id', 'aisle', 'bay', 'level',
    'position', 'updated_by', 'updated_at',
)


class LocationRepository(ABC):
    """Source and sink of location records for the slotting engine."""
    
    @abstractmethod
    def find_by_zone(self, warehouse_id: str, zone: str) -> List[LocationRecord]:
        """All locations of a warehouse zone."""
        pass
    
    @abstractmethod
    def find_active_storage_locations(self, warehouse_id: str, zone: Optional[str] = None) -> List[LocationRecord]:
        """ACTIVE locations able to store inventory, optionally limited to one zone."""
        pass
    
    @abstractmethod
    def find_zones(self, warehouse_id: str) -> List[str]:
        """Distinct zone names of a warehouse, sorted."""
        pass
    
    @abstractmethod
    def get(self, location_id: str) -> Optional[LocationRecord]:
        pass
    
    @abstractmethod
    def save(self, record: LocationRecord) -> LocationRecord:
        pass
    
    def save_all(self, records: Iterable[LocationRecord]) -> int:
        """Save several records and return how many were saved."""
        count = 0
        for record in records:
            self.save(record)
            count += 1
        return count


class InMemoryLocationRepository(LocationRepository):
    """Dictionary-backed repository; records are shared by reference."""
    
    def __init__(self, records: Optional[Iterable[LocationRecord]] = None):
        self._records: Dict[str, LocationRecord] = {}
        self._lock = threading.Lock()
        for record in records or []:
            self.save(record)
    
    def _snapshot(self) -> List[LocationRecord]:
        with self._lock:
            return list(self._records.values())
    
    def find_by_zone(self, warehouse_id, zone):
        return [r for r in self._snapshot() if r.warehouse_id == warehouse_id and r.zone == zone]
    
    def find_active_storage_locations(self, warehouse_id, zone=None):
        return [
            r for r in self._snapshot()
            if r.warehouse_id == warehouse_id
            and (zone is None or r.zone == zone)
            and r.is_active_storage
        ]
    
    def find_zones(self, warehouse_id):
        return sorted({r.zone for r in self._snapshot() if r.warehouse_id == warehouse_id and r.zone})
    
    def get(self, location_id):
        with self._lock:
            return self._records.get(location_id)
    
    def save(self, record):
        with self._lock:
            self._records[record.location_id] = record
        return record
    
    def __len__(self):
        with self._lock:
            return len(self._records)


def to_record(row: Location) -> LocationRecord:
    """Convert a database row into a location record."""
    capacity = None
    if row.max_quantity is not None:
        capacity = Capacity(
            max_quantity=row.max_quantity,
            max_weight=row.max_weight,
            max_volume=row.max_volume,
            weight_unit=row.weight_unit or 'KG',
            volume_unit=row.volume_unit or 'M3',
            current_quantity=row.current_quantity or 0,
            current_weight=row.current_weight or 0.0,
            current_volume=row.current_volume or 0.0
        )
    
    dimensions = None
    if row.length is not None:
        dimensions = Dimensions(
            length=row.length,
            width=row.width,
            height=row.height,
            unit=row.dimension_unit or 'CM'
        )
    
    values = {name: getattr(row, name) for name in _RECORD_FIELDS}
    return LocationRecord(capacity=capacity, dimensions=dimensions, **values)


def apply_record(row: Location, record: LocationRecord) -> Location:
    """Copy a location record's values onto a database row."""
    for name in _RECORD_FIELDS:
        if name == 'updated_at' and record.updated_at is None:
            continue
        setattr(row, name, getattr(record, name))
    
    capacity = record.capacity
    row.max_quantity = capacity.max_quantity if capacity else None
    row.current_quantity = capacity.current_quantity if capacity else None
    row.max_weight = capacity.max_weight if capacity else None
    row.current_weight = capacity.current_weight if capacity else None
    row.max_volume = capacity.max_volume if capacity else None
    row.current_volume = capacity.current_volume if capacity else None
    row.weight_unit = capacity.weight_unit if capacity else None
    row.volume_unit = capacity.volume_unit if capacity else None
    
    dimensions = record.dimensions
    row.length = dimensions.length if dimensions else None
    row.width = dimensions.width if dimensions else None
    row.height = dimensions.height if dimensions else None
    row.dimension_unit = dimensions.unit if dimensions else None
    
    return row


class SqlAlchemyLocationRepository(LocationRepository):
    """Repository over the location_master table.
    
    The caller owns the transaction (see db.session_scope); save only flushes.
    """
    
    def __init__(self, session: Session):
        """Initialize the repository.
        
        Args:
            session: Database session
        """
        self.session = session
    
    def _query(self, *criteria) -> List[LocationRecord]:
        try:
            rows = (
                self.session.query(Location)
                .filter(*criteria)
                .order_by(Location.location_id)
                .all()
            )
        except SQLAlchemyError as e:
            raise RepositoryError(f"Error querying locations: {str(e)}")
        return [to_record(row) for row in rows]
    
    def find_by_zone(self, warehouse_id, zone):
        return self._query(Location.warehouse_id == warehouse_id, Location.zone == zone)
    
    def find_active_storage_locations(self, warehouse_id, zone=None):
        criteria = [
            Location.warehouse_id == warehouse_id,
            Location.status == LocationStatus.ACTIVE,
        ]
        if zone is not None:
            criteria.append(Location.zone == zone)
        return [r for r in self._query(*criteria) if r.location_type.can_store_inventory]
    
    def find_zones(self, warehouse_id):
        try:
            rows = (
                self.session.query(Location.zone)
                .filter(Location.warehouse_id == warehouse_id, Location.zone.isnot(None))
                .distinct()
                .all()
            )
        except SQLAlchemyError as e:
            raise RepositoryError(f"Error querying zones: {str(e)}")
        return sorted(zone for (zone,) in rows)
    
    def get(self, location_id):
        try:
            row = self.session.get(Location, location_id)
        except SQLAlchemyError as e:
            raise RepositoryError(f"Error loading location {location_id}: {str(e)}")
        return to_record(row) if row is not None else None
    
    def save(self, record):
        try:
            row = self.session.get(Location, record.location_id)
            if row is None:
                row = Location(location_id=record.location_id)
                self.session.add(row)
            apply_record(row, record)
            self.session.flush()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Error saving location {record.location_id}: {str(e)}")
        
        logger.debug(f"Saved location {record.location_id}")
        return record
