from typing import Dict


def validate_location(location) -> Dict[str, str]:
    """Validate a location record.
    
    Args:
        location: Location record to validate
        
    Returns:
        Dictionary with validation errors
    """
    errors = {}
    
    if not location.location_id or not str(location.location_id).strip():
        errors['location_id'] = 'Location ID is required'
    
    if not location.warehouse_id:
        errors['warehouse_id'] = 'Warehouse ID is required'
    
    if location.distance_from_dock is not None:
        if isinstance(location.distance_from_dock, bool) or not isinstance(location.distance_from_dock, int):
            errors['distance_from_dock'] = 'Distance from dock must be an integer'
        elif location.distance_from_dock < 0:
            errors['distance_from_dock'] = 'Distance from dock cannot be negative'
    
    if location.pick_path_sequence is not None:
        if isinstance(location.pick_path_sequence, bool) or not isinstance(location.pick_path_sequence, int):
            errors['pick_path_sequence'] = 'Pick path sequence must be an integer'
        elif location.pick_path_sequence < 0:
            errors['pick_path_sequence'] = 'Pick path sequence must be non-negative'
    
    return errors


def validate_capacity(capacity) -> Dict[str, str]:
    """Validate a capacity configuration.
    
    Args:
        capacity: Capacity to validate
        
    Returns:
        Dictionary with validation errors
    """
    errors = {}
    
    if capacity.max_quantity is None or capacity.max_quantity <= 0:
        errors['max_quantity'] = 'Max quantity must be positive'
    
    if capacity.max_weight is None or capacity.max_weight <= 0:
        errors['max_weight'] = 'Max weight must be positive'
    
    if capacity.max_volume is None or capacity.max_volume <= 0:
        errors['max_volume'] = 'Max volume must be positive'
    
    if capacity.current_quantity < 0:
        errors['current_quantity'] = 'Current quantity cannot be negative'
    
    return errors


def validate_dimensions(dimensions) -> Dict[str, str]:
    """Validate physical dimensions."""
    errors = {}
    
    for name in ('length', 'width', 'height'):
        value = getattr(dimensions, name)
        if value is None or value <= 0:
            errors[name] = f'{name.capitalize()} must be positive'
    
    if not dimensions.unit or not str(dimensions.unit).strip():
        errors['unit'] = 'Unit is required'
    
    return errors
