"""
Command line interface for warehouse slotting.

Runs slotting passes and reports against the configured location database.
"""
import argparse
import logging
import sys

from tabulate import tabulate

from warehouse_slotting.config import config
from warehouse_slotting.db import db, session_scope
from warehouse_slotting.logging_setup import logger, get_logger
from warehouse_slotting.repository import SqlAlchemyLocationRepository
from warehouse_slotting.services.slotting_service import SlottingService
from warehouse_slotting.batch.slotting_job import run_slotting_job
from warehouse_slotting.events import EventPublisher
from warehouse_slotting.exceptions import SlottingError, BatchProcessError

LOCATION_HEADERS = ['Location', 'Class', 'Distance', 'Sequence', 'Aisle', 'Bay', 'Level']


def init_application(db_url=None):
    """Initialize application components."""
    db.initialize(db_url)
    db.create_all_tables()
    
    log = logger.app_logger
    log.info("Warehouse Slotting System initialized")
    log.info(f"Using database: {db_url or config.get_db_url()}")
    return True


def _location_rows(locations):
    return [
        [loc.location_id, loc.slotting_class, loc.distance_from_dock, loc.pick_path_sequence,
         loc.aisle, loc.bay, loc.level]
        for loc in locations
    ]


def _service(session):
    publisher = EventPublisher()
    events_log = get_logger('events')
    publisher.subscribe(lambda event: events_log.info(
        f"{event.location_id}: {event.previous_class} -> {event.new_class} ({event.reason})"
    ))
    return SlottingService(SqlAlchemyLocationRepository(session), publisher=publisher)


def optimize(args):
    with session_scope() as session:
        updated = _service(session).optimize_zone_slotting(args.warehouse, args.zone, args.user)
    print(f"Updated {updated} locations in zone {args.zone}")


def recommend(args):
    with session_scope() as session:
        recommendations = _service(session).get_slotting_recommendations(args.warehouse, args.zone)
    
    rows = [
        [r.location_id, r.current_class, r.recommended_class, r.confidence_score, r.reasoning]
        for r in recommendations.values()
        if r.is_actionable or args.all
    ]
    print(tabulate(rows, headers=['Location', 'Current', 'Recommended', 'Confidence', 'Reasoning']))
    print(f"\nTotal recommendations: {len(rows)}")


def golden_zone(args):
    with session_scope() as session:
        locations = _service(session).identify_golden_zone(args.warehouse, args.zone, args.fraction)
    print(tabulate(_location_rows(locations), headers=LOCATION_HEADERS))
    print(f"\nGolden zone size: {len(locations)}")


def pick_path(args):
    with session_scope() as session:
        locations = _service(session).get_optimized_pick_path(args.warehouse, args.zone)
    rows = [[i + 1] + row for i, row in enumerate(_location_rows(locations))]
    print(tabulate(rows, headers=['Stop'] + LOCATION_HEADERS))


def distribution(args):
    with session_scope() as session:
        result = _service(session).analyze_zone_distribution(args.warehouse, args.zone)
    rows = sorted(
        ([str(cls), count] for cls, count in result.counts_by_class.items()),
        key=lambda row: row[0]
    )
    print(tabulate(rows, headers=['Class', 'Locations']))
    print(f"\nTotal: {result.total}  Fast share: {result.fast_share:.1%}  "
          f"Needs rebalancing: {result.needs_rebalancing}")


def balance(args):
    with session_scope() as session:
        report = _service(session).balance_slotting(args.warehouse, args.user)
    rows = [
        [zone, d.total, f"{d.fast_share:.1%}", d.needs_rebalancing]
        for zone, d in report.distribution_by_zone.items()
    ]
    print(tabulate(rows, headers=['Zone', 'Locations', 'Fast share', 'Rebalanced']))
    print(f"\nLocations rebalanced: {report.locations_rebalanced}")


def run_job(args):
    results = run_slotting_job(args.warehouse, args.user, only_if_drifted=args.only_drifted)
    rows = [
        [zone, r['success'], r.get('skipped', False), r['updated_locations'], r.get('error', '')]
        for zone, r in results['zones'].items()
    ]
    print(tabulate(rows, headers=['Zone', 'Success', 'Skipped', 'Updated', 'Error']))
    print(f"\nUpdated locations: {results['updated_locations']}  Duration: {results['duration']}")
    if not results['success']:
        raise BatchProcessError(results.get('error', 'Slotting job finished with zone errors'))


def build_parser():
    parser = argparse.ArgumentParser(description='Warehouse slotting optimization')
    parser.add_argument('--db-url', help='Database URL (defaults to configuration)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose logging')
    subparsers = parser.add_subparsers(dest='command', required=True)
    
    def add(name, func, help_text, zone=True, zone_required=True):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument('--warehouse', '-w', required=True, help='Warehouse ID')
        if zone:
            sub.add_argument('--zone', '-z', required=zone_required, help='Zone')
        sub.set_defaults(func=func)
        return sub
    
    sub = add('optimize', optimize, 'Reassign slotting classes in a zone')
    sub.add_argument('--user', default='cli', help='User recorded on changes')
    
    sub = add('recommend', recommend, 'Show slotting recommendations', zone_required=False)
    sub.add_argument('--all', action='store_true', help='Include non-actionable recommendations')
    
    sub = add('golden-zone', golden_zone, 'Show the golden zone of a zone')
    sub.add_argument('--fraction', type=float, help='Golden zone fraction (0, 1]')
    
    add('pick-path', pick_path, 'Show a zone in pick path order')
    add('distribution', distribution, 'Show the class distribution of a zone')
    
    sub = add('balance', balance, 'Optimize zones whose distribution drifted', zone=False)
    sub.add_argument('--user', default='cli', help='User recorded on changes')
    
    sub = add('run-job', run_job, 'Run the slotting batch job for all zones', zone=False)
    sub.add_argument('--user', default='slotting_job', help='User recorded on changes')
    sub.add_argument('--only-drifted', action='store_true', help='Only optimize drifted zones')
    
    return parser


def main(argv=None):
    """Run the command line interface."""
    args = build_parser().parse_args(argv)
    
    log = get_logger('cli')
    if args.verbose:
        logger.set_level(logging.DEBUG)
    
    try:
        init_application(args.db_url)
        args.func(args)
        return 0
    except SlottingError as e:
        log.error(f"Error running {args.command}: {str(e)}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
