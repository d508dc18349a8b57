"""
Shared builders for slotting tests.
"""
from warehouse_slotting.config import SlottingSettings
from warehouse_slotting.core.records import Capacity, Dimensions, LocationRecord
from warehouse_slotting.models import LocationType, LocationStatus, SlottingClass

DEFAULT_SETTINGS = SlottingSettings()


def make_location(location_id, distance=None, slotting_class=SlottingClass.MIXED,
                  zone='PICK', warehouse_id='WH-001', location_type=LocationType.BIN,
                  status=LocationStatus.ACTIVE, **kwargs):
    """Build an active BIN location in zone PICK unless told otherwise."""
    return LocationRecord(
        location_id=location_id,
        warehouse_id=warehouse_id,
        location_type=location_type,
        zone=zone,
        status=status,
        slotting_class=slotting_class,
        distance_from_dock=distance,
        **kwargs
    )


def make_capacity(max_quantity=100, current_quantity=0):
    return Capacity(max_quantity=max_quantity, max_weight=500.0, max_volume=2.0,
                    current_quantity=current_quantity)


def make_dimensions():
    return Dimensions(length=120.0, width=80.0, height=100.0, unit='CM')
