"""
Unit tests for the slotting service.
"""
import unittest
from unittest.mock import MagicMock

from warehouse_slotting.events import EventPublisher, SlottingChangedEvent
from warehouse_slotting.exceptions import LocationNotFoundError, UnknownVariantError
from warehouse_slotting.models import LocationStatus, SlottingClass
from warehouse_slotting.repository import InMemoryLocationRepository
from warehouse_slotting.services.slotting_service import AUTOMATIC_REASON, SlottingService
from warehouse_slotting.tests.support import DEFAULT_SETTINGS, make_capacity, make_location


class TestSlottingService(unittest.TestCase):
    """Test cases for SlottingService."""
    
    def setUp(self):
        self.repository = InMemoryLocationRepository([
            make_location('LOC-A', distance=15),
            make_location('LOC-B', distance=35),
            make_location('LOC-C', distance=120),
            make_location('LOC-N', distance=None),
            make_location('BULK-1', distance=60, zone='BULK', slotting_class=SlottingClass.B),
        ])
        self.publisher = MagicMock()
        self.service = SlottingService(self.repository, DEFAULT_SETTINGS, self.publisher)
    
    def test_optimize_zone_slotting(self):
        updated = self.service.optimize_zone_slotting('WH-001', 'PICK', 'tester')
        
        self.assertEqual(updated, 3)
        self.assertEqual(self.repository.get('LOC-A').slotting_class, SlottingClass.FAST_MOVER)
        self.assertEqual(self.repository.get('LOC-C').slotting_class, SlottingClass.C)
        self.assertEqual(self.repository.get('LOC-N').slotting_class, SlottingClass.MIXED)
    
    def test_optimize_publishes_one_event_per_change(self):
        self.service.optimize_zone_slotting('WH-001', 'PICK', 'tester')
        
        self.assertEqual(self.publisher.call_count, 3)
        event = self.publisher.call_args_list[0][0][0]
        self.assertIsInstance(event, SlottingChangedEvent)
        self.assertEqual(event.location_id, 'LOC-A')
        self.assertEqual(event.previous_class, SlottingClass.MIXED)
        self.assertEqual(event.new_class, SlottingClass.FAST_MOVER)
        self.assertEqual(event.new_pick_path_sequence, 1000)
        self.assertEqual(event.updated_by, 'tester')
        self.assertEqual(event.reason, AUTOMATIC_REASON)
    
    def test_optimize_is_idempotent(self):
        self.service.optimize_zone_slotting('WH-001', 'PICK')
        self.publisher.reset_mock()
        
        self.assertEqual(self.service.optimize_zone_slotting('WH-001', 'PICK'), 0)
        self.publisher.assert_not_called()
    
    def test_optimize_unknown_zone(self):
        self.assertEqual(self.service.optimize_zone_slotting('WH-001', 'NOWHERE'), 0)
    
    def test_recommendations_do_not_change_state(self):
        recommendations = self.service.get_slotting_recommendations('WH-001')
        
        self.assertEqual(set(recommendations), {'LOC-A', 'LOC-B', 'LOC-C', 'LOC-N', 'BULK-1'})
        self.assertEqual(recommendations['LOC-A'].recommended_class, SlottingClass.FAST_MOVER)
        self.assertEqual(recommendations['LOC-N'].confidence_score, 0)
        self.assertEqual(self.repository.get('LOC-A').slotting_class, SlottingClass.MIXED)
        self.publisher.assert_not_called()
    
    def test_recommendations_for_zone(self):
        recommendations = self.service.get_slotting_recommendations('WH-001', 'BULK')
        self.assertEqual(list(recommendations), ['BULK-1'])
        self.assertFalse(recommendations['BULK-1'].is_actionable)
    
    def test_identify_golden_zone(self):
        golden = self.service.identify_golden_zone('WH-001', 'PICK')
        self.assertEqual([loc.location_id for loc in golden], ['LOC-A'])
        
        golden = self.service.identify_golden_zone('WH-001', 'PICK', fraction=1.0)
        self.assertEqual([loc.location_id for loc in golden], ['LOC-A', 'LOC-B', 'LOC-C'])
    
    def test_get_optimized_pick_path(self):
        self.service.optimize_zone_slotting('WH-001', 'PICK')
        path = self.service.get_optimized_pick_path('WH-001', 'PICK')
        self.assertEqual([loc.location_id for loc in path], ['LOC-A', 'LOC-B', 'LOC-N', 'LOC-C'])
    
    def test_analyze_zone_distribution(self):
        self.service.optimize_zone_slotting('WH-001', 'PICK')
        distribution = self.service.analyze_zone_distribution('WH-001', 'PICK')
        
        self.assertEqual(distribution.total, 4)
        self.assertEqual(distribution.count(SlottingClass.FAST_MOVER), 1)
        self.assertEqual(distribution.count(SlottingClass.MIXED), 1)
        self.assertTrue(distribution.needs_rebalancing)
    
    def test_balance_slotting_only_touches_drifted_zones(self):
        for loc_id in ('LOC-A', 'LOC-B', 'LOC-C'):
            self.repository.get(loc_id).assign_slotting_class(SlottingClass.FAST_MOVER)
        
        report = self.service.balance_slotting('WH-001', 'balancer')
        
        self.assertEqual(report.zones_rebalanced, ['PICK'])
        self.assertEqual(report.locations_rebalanced, 2)
        self.assertTrue(report.distribution_by_zone['PICK'].needs_rebalancing)
        self.assertFalse(report.distribution_by_zone['BULK'].needs_rebalancing)
        self.assertEqual(self.repository.get('LOC-C').slotting_class, SlottingClass.C)
        self.assertEqual(self.repository.get('BULK-1').updated_by, None)
    
    def test_update_slotting_class(self):
        location = self.service.update_slotting_class('LOC-C', SlottingClass.HAZMAT, 'safety', 'Flammable stock')
        
        self.assertEqual(location.slotting_class, SlottingClass.HAZMAT)
        self.assertEqual(location.pick_path_sequence, 6000)
        event = self.publisher.call_args[0][0]
        self.assertEqual(event.reason, 'Flammable stock')
        self.assertEqual(event.previous_class, SlottingClass.MIXED)
    
    def test_update_slotting_class_missing_location(self):
        with self.assertRaises(LocationNotFoundError):
            self.service.update_slotting_class('NOPE', SlottingClass.A, 'tester')
    
    def test_update_slotting_class_unknown_value(self):
        with self.assertRaises(UnknownVariantError):
            self.service.update_slotting_class('LOC-A', 'PLATINUM', 'tester')


class TestFindOptimalLocation(unittest.TestCase):
    """Test cases for find_optimal_location."""
    
    def setUp(self):
        self.repository = InMemoryLocationRepository([
            make_location('NEAR-FULL', distance=5, slotting_class=SlottingClass.A,
                          capacity=make_capacity(current_quantity=95)),
            make_location('MID', distance=25, slotting_class=SlottingClass.A,
                          capacity=make_capacity(current_quantity=10)),
            make_location('FAR', distance=45, slotting_class=SlottingClass.A,
                          capacity=make_capacity()),
            make_location('BLOCKED', distance=1, slotting_class=SlottingClass.A,
                          status=LocationStatus.BLOCKED, capacity=make_capacity()),
            make_location('NO-CAP', distance=2, slotting_class=SlottingClass.A),
            make_location('OTHER', distance=1, slotting_class=SlottingClass.B,
                          capacity=make_capacity()),
        ])
        self.service = SlottingService(self.repository, DEFAULT_SETTINGS)
    
    def test_nearest_with_room(self):
        location = self.service.find_optimal_location('WH-001', 'PICK', SlottingClass.A, 20)
        self.assertEqual(location.location_id, 'MID')
    
    def test_small_quantity_takes_nearest(self):
        location = self.service.find_optimal_location('WH-001', 'PICK', SlottingClass.A, 5)
        self.assertEqual(location.location_id, 'NEAR-FULL')
    
    def test_none_when_nothing_fits(self):
        self.assertIsNone(self.service.find_optimal_location('WH-001', 'PICK', SlottingClass.A, 500))
        self.assertIsNone(self.service.find_optimal_location('WH-001', 'PICK', SlottingClass.C, 1))


class TestEventPublisher(unittest.TestCase):
    
    def test_fans_out_to_subscribers(self):
        publisher = EventPublisher()
        received = []
        publisher.subscribe(received.append)
        publisher.subscribe(received.append)
        
        event = SlottingChangedEvent.of('LOC-1', 'WH-001', 'PICK', SlottingClass.MIXED,
                                        SlottingClass.A, 2000, 'tester', 'test')
        publisher(event)
        
        self.assertEqual(received, [event, event])
        self.assertTrue(event.event_id)


if __name__ == '__main__':
    unittest.main()
