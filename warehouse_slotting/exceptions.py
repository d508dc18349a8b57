class SlottingError(Exception):
    """Base exception for Warehouse Slotting System errors."""
    
    def __init__(self, message=None, code=None, details=None):
        """Initialize the exception.
        
        Args:
            message: Error message
            code: Error code
            details: Additional error details
        """
        self.message = message or "An error occurred in the Warehouse Slotting System"
        self.code = code
        self.details = details
        super().__init__(self.message)
    
    def __str__(self):
        """String representation of the error."""
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message
    
    def to_dict(self):
        """Convert the exception to a dictionary."""
        error_dict = {
            'error': self.__class__.__name__,
            'message': self.message,
        }
        
        if self.code:
            error_dict['code'] = self.code
            
        if self.details:
            error_dict['details'] = self.details
            
        return error_dict


class ConfigError(SlottingError):
    """Exception raised for configuration errors."""
    
    def __init__(self, message=None, code=None, details=None):
        message = message or "Configuration error"
        super().__init__(message, code, details)


class ValidationError(SlottingError):
    """Exception raised when a location record breaks one of its invariants."""
    
    def __init__(self, message=None, code=None, details=None):
        message = message or "Validation error"
        super().__init__(message, code, details)


class ClassificationError(SlottingError):
    """Exception raised when a distance cannot be classified."""
    
    def __init__(self, message=None, code=None, details=None):
        message = message or "Classification error"
        super().__init__(message, code, details)


class UnknownVariantError(SlottingError):
    """Exception raised when a value that is not a known enum member reaches the engine.
    
    This is a programming fault, never a data problem, so callers should not
    catch it to fall back to a default class.
    """
    
    def __init__(self, message=None, code=None, details=None):
        message = message or "Unknown enumerated value"
        super().__init__(message, code, details)


class LocationNotFoundError(SlottingError):
    """Exception raised when a requested location is not found."""
    
    def __init__(self, message=None, code=None, details=None):
        message = message or "Location not found"
        super().__init__(message, code, details)


class RepositoryError(SlottingError):
    """Exception raised for persistence errors."""
    
    def __init__(self, message=None, code=None, details=None):
        message = message or "Repository error"
        super().__init__(message, code, details)


class BatchProcessError(SlottingError):
    """Exception raised for batch process errors."""
    
    def __init__(self, message=None, code=None, details=None):
        message = message or "Batch process error"
        super().__init__(message, code, details)
