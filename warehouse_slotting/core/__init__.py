from .records import Capacity, Dimensions, LocationRecord, is_slotting_candidate
from .classifier import classify, classify_many, recommended_distance_from_dock
from .zone_optimizer import SlottingChange, optimize_zone, optimize_zone_changes
from .golden_zone import golden_zone_size, select_golden_zone
from .recommendation import (
    Recommendation, DISTANCE_NOT_SET, calculate_confidence_score,
    recommend, recommend_location
)
from .distribution import Distribution, analyze
from .pick_path import order_for_pick_path, pick_path_key

__all__ = [
    'Capacity',
    'Dimensions',
    'LocationRecord',
    'is_slotting_candidate',
    'classify',
    'classify_many',
    'recommended_distance_from_dock',
    'SlottingChange',
    'optimize_zone',
    'optimize_zone_changes',
    'golden_zone_size',
    'select_golden_zone',
    'Recommendation',
    'DISTANCE_NOT_SET',
    'calculate_confidence_score',
    'recommend',
    'recommend_location',
    'Distribution',
    'analyze',
    'order_for_pick_path',
    'pick_path_key'
]
