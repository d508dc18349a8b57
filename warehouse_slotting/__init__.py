from .config import config, SlottingSettings
from .logging_setup import logger, get_logger
from .exceptions import (
    SlottingError, ConfigError, ValidationError, ClassificationError,
    UnknownVariantError, LocationNotFoundError, RepositoryError
)
from .models import LocationType, LocationStatus, SlottingClass
from .core import (
    Capacity, Dimensions, LocationRecord, classify, optimize_zone,
    select_golden_zone, recommend, analyze, order_for_pick_path
)

__all__ = [
    'config',
    'SlottingSettings',
    'logger',
    'get_logger',
    'SlottingError',
    'ConfigError',
    'ValidationError',
    'ClassificationError',
    'UnknownVariantError',
    'LocationNotFoundError',
    'RepositoryError',
    'LocationType',
    'LocationStatus',
    'SlottingClass',
    'Capacity',
    'Dimensions',
    'LocationRecord',
    'classify',
    'optimize_zone',
    'select_golden_zone',
    'recommend',
    'analyze',
    'order_for_pick_path'
]
