"""
Unit tests for slotting recommendations.
"""
import unittest

from warehouse_slotting.core.recommendation import (
    DISTANCE_NOT_SET, calculate_confidence_score, recommend, recommend_location
)
from warehouse_slotting.models import LocationStatus, LocationType, SlottingClass
from warehouse_slotting.tests.support import (
    DEFAULT_SETTINGS, make_capacity, make_dimensions, make_location
)


class TestConfidenceScore(unittest.TestCase):
    """Test cases for calculate_confidence_score."""
    
    def test_near_ideal_distance(self):
        location = make_location('LOC-1', distance=15)
        self.assertEqual(
            calculate_confidence_score(location, SlottingClass.FAST_MOVER, DEFAULT_SETTINGS), 75
        )
    
    def test_capacity_and_dimensions_add_points(self):
        location = make_location('LOC-1', distance=15, capacity=make_capacity(),
                                 dimensions=make_dimensions())
        self.assertEqual(
            calculate_confidence_score(location, SlottingClass.FAST_MOVER, DEFAULT_SETTINGS), 95
        )
    
    def test_exact_ideal_distance_caps_at_100(self):
        location = make_location('LOC-1', distance=20, capacity=make_capacity(),
                                 dimensions=make_dimensions())
        self.assertEqual(
            calculate_confidence_score(location, SlottingClass.FAST_MOVER, DEFAULT_SETTINGS), 100
        )
    
    def test_distance_points_shrink_with_gap(self):
        a = make_location('LOC-A', distance=35)
        c = make_location('LOC-C', distance=120)
        self.assertEqual(calculate_confidence_score(a, SlottingClass.A, DEFAULT_SETTINGS), 65)
        self.assertEqual(calculate_confidence_score(c, SlottingClass.C, DEFAULT_SETTINGS), 50)


class TestRecommend(unittest.TestCase):
    """Test cases for recommend."""
    
    def test_recommendation_content(self):
        location = make_location('LOC-1', distance=35)
        rec = recommend_location(location, DEFAULT_SETTINGS)
        
        self.assertEqual(rec.current_class, SlottingClass.MIXED)
        self.assertEqual(rec.recommended_class, SlottingClass.A)
        self.assertEqual(rec.confidence_score, 65)
        self.assertEqual(rec.reasoning, "Location is 35 units from dock. Recommended A (current: MIXED)")
        self.assertTrue(rec.is_actionable)
    
    def test_unsurveyed_location_gets_sentinel(self):
        location = make_location('LOC-1', distance=None, slotting_class=SlottingClass.B)
        rec = recommend_location(location, DEFAULT_SETTINGS)
        
        self.assertEqual(rec.recommended_class, SlottingClass.B)
        self.assertEqual(rec.confidence_score, 0)
        self.assertEqual(rec.reasoning, DISTANCE_NOT_SET)
        self.assertFalse(rec.is_actionable)
    
    def test_already_correct_is_not_actionable(self):
        location = make_location('LOC-1', distance=10, slotting_class=SlottingClass.FAST_MOVER)
        self.assertFalse(recommend_location(location, DEFAULT_SETTINGS).is_actionable)
    
    def test_covers_active_storage_only(self):
        locations = [
            make_location('LOC-1', distance=10),
            make_location('LOC-2', distance=None),
            make_location('LOC-3', distance=10, status=LocationStatus.INACTIVE),
            make_location('BAY-1', distance=10, location_type=LocationType.BAY),
        ]
        result = recommend(locations, DEFAULT_SETTINGS)
        self.assertEqual(list(result), ['LOC-1', 'LOC-2'])
    
    def test_does_not_mutate(self):
        location = make_location('LOC-1', distance=150)
        recommend([location], DEFAULT_SETTINGS)
        self.assertEqual(location.slotting_class, SlottingClass.MIXED)
        self.assertIsNone(location.pick_path_sequence)


if __name__ == '__main__':
    unittest.main()
