# warehouse_slotting/core/classifier.py
from typing import Iterable, List, Optional

import numpy as np

from warehouse_slotting.config import config, SlottingSettings
from warehouse_slotting.models import SlottingClass, VELOCITY_BANDS, require_member
from warehouse_slotting.exceptions import ClassificationError


def _check_distance(distance) -> int:
    if isinstance(distance, bool) or not isinstance(distance, (int, np.integer)):
        raise ClassificationError(f"Distance must be an integer, got {distance!r}")
    if distance < 0:
        raise ClassificationError(f"Distance cannot be negative, got {distance}")
    return int(distance)


def classify(distance: int, settings: Optional[SlottingSettings] = None) -> SlottingClass:
    """Map a distance from dock to its recommended velocity class.
    
    Bands are contiguous with inclusive upper limits, so with the default
    limits 20/50/100/200 a distance of 20 is FAST_MOVER and 21 is A.
    
    Args:
        distance: Non-negative distance from dock
        settings: Slotting settings (defaults to the configured settings)
        
    Returns:
        Recommended slotting class
    """
    settings = settings or config.slotting_settings
    distance = _check_distance(distance)
    index = int(np.searchsorted(settings.distance_bands, distance, side='left'))
    return VELOCITY_BANDS[index]


def classify_many(distances: Iterable[int], settings: Optional[SlottingSettings] = None) -> List[SlottingClass]:
    """Classify a batch of distances in one pass."""
    settings = settings or config.slotting_settings
    checked = [_check_distance(d) for d in distances]
    if not checked:
        return []
    indices = np.searchsorted(settings.distance_bands, np.asarray(checked), side='left')
    return [VELOCITY_BANDS[int(i)] for i in indices]


def recommended_distance_from_dock(
    slotting_class: SlottingClass,
    settings: Optional[SlottingSettings] = None
) -> int:
    """Distance from dock at which a class is ideally placed."""
    settings = settings or config.slotting_settings
    slotting_class = require_member(SlottingClass, slotting_class, 'slotting_class')
    return slotting_class.ideal_distance_band * settings.band_width
