from .validation import validate_location, validate_capacity, validate_dimensions

__all__ = [
    'validate_location',
    'validate_capacity',
    'validate_dimensions'
]
