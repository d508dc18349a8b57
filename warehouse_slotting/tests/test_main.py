"""
Tests for the command line interface against a SQLite database.
"""
import io
import logging
import os
import tempfile
import unittest
from contextlib import redirect_stdout

from warehouse_slotting.db import db, session_scope
from warehouse_slotting.logging_setup import logger
from warehouse_slotting.main import build_parser, main
from warehouse_slotting.models import SlottingClass
from warehouse_slotting.repository import SqlAlchemyLocationRepository
from warehouse_slotting.tests.support import make_location


class TestMain(unittest.TestCase):
    """Test cases for the slotting CLI."""
    
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.db_url = f"sqlite:///{os.path.join(self.tmpdir.name, 'slotting.db')}"
        db.initialize(self.db_url)
        db.create_all_tables()
        with session_scope() as session:
            SqlAlchemyLocationRepository(session).save_all([
                make_location('LOC-A', distance=15),
                make_location('LOC-B', distance=35),
                make_location('LOC-C', distance=120),
            ])
    
    def tearDown(self):
        db.drop_all_tables()
        db.engine.dispose()
        self.tmpdir.cleanup()
    
    def run_cli(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(['--db-url', self.db_url] + list(argv))
        return code, out.getvalue()
    
    def stored_class(self, location_id):
        with session_scope() as session:
            return SqlAlchemyLocationRepository(session).get(location_id).slotting_class
    
    def test_optimize(self):
        code, output = self.run_cli('optimize', '-w', 'WH-001', '-z', 'PICK', '--user', 'tester')
        
        self.assertEqual(code, 0)
        self.assertIn('Updated 3 locations', output)
        self.assertEqual(self.stored_class('LOC-A'), SlottingClass.FAST_MOVER)
    
    def test_recommend(self):
        code, output = self.run_cli('recommend', '-w', 'WH-001')
        
        self.assertEqual(code, 0)
        self.assertIn('LOC-B', output)
        self.assertIn('Total recommendations: 3', output)
        self.assertEqual(self.stored_class('LOC-B'), SlottingClass.MIXED)
    
    def test_pick_path_after_optimize(self):
        self.run_cli('optimize', '-w', 'WH-001', '-z', 'PICK')
        code, output = self.run_cli('pick-path', '-w', 'WH-001', '-z', 'PICK')
        
        self.assertEqual(code, 0)
        self.assertLess(output.index('LOC-A'), output.index('LOC-B'))
        self.assertLess(output.index('LOC-B'), output.index('LOC-C'))
    
    def test_golden_zone(self):
        code, output = self.run_cli('golden-zone', '-w', 'WH-001', '-z', 'PICK')
        self.assertEqual(code, 0)
        self.assertIn('Golden zone size: 1', output)
    
    def test_invalid_fraction_returns_error(self):
        code, _ = self.run_cli('golden-zone', '-w', 'WH-001', '-z', 'PICK', '--fraction', '2')
        self.assertEqual(code, 1)
    
    def test_distribution_and_balance(self):
        self.run_cli('optimize', '-w', 'WH-001', '-z', 'PICK')
        code, output = self.run_cli('distribution', '-w', 'WH-001', '-z', 'PICK')
        self.assertEqual(code, 0)
        self.assertIn('Total: 3', output)
        
        code, output = self.run_cli('balance', '-w', 'WH-001')
        self.assertEqual(code, 0)
        self.assertIn('Locations rebalanced: 0', output)
    
    def test_run_job(self):
        code, output = self.run_cli('run-job', '-w', 'WH-001')
        
        self.assertEqual(code, 0)
        self.assertIn('Updated locations: 3', output)
        self.assertEqual(self.stored_class('LOC-C'), SlottingClass.C)
    
    def test_verbose_enables_engine_debug(self):
        service_logger = logging.getLogger('warehouse_slotting.services.slotting_service')
        try:
            code, _ = self.run_cli('-v', 'distribution', '-w', 'WH-001', '-z', 'PICK')
            self.assertEqual(code, 0)
            self.assertTrue(service_logger.isEnabledFor(logging.DEBUG))
        finally:
            logger.set_level(logging.INFO)

    def test_optimize_logs_progress(self):
        with self.assertLogs('warehouse_slotting.services.slotting_service', level='INFO') as logs:
            self.run_cli('optimize', '-w', 'WH-001', '-z', 'PICK')
        self.assertTrue(any('Updated 3 locations' in line for line in logs.output))

    def test_parser_requires_zone(self):
        with redirect_stdout(io.StringIO()), self.assertRaises(SystemExit):
            build_parser().parse_args(['optimize', '-w', 'WH-001'])


if __name__ == '__main__':
    unittest.main()
