# warehouse_slotting/batch/slotting_job.py
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Callable, Dict, Optional

from warehouse_slotting.config import config, SlottingSettings
from warehouse_slotting.db import session_scope
from warehouse_slotting.repository import LocationRepository, SqlAlchemyLocationRepository
from warehouse_slotting.services.slotting_service import SlottingService
from warehouse_slotting.exceptions import SlottingError
from warehouse_slotting.logging_setup import logger as log_manager

# Initialize logger
logger = logging.getLogger(__name__)


def _run_with_service(repository, settings, publisher, action):
    """Run action(service) against the given repository or a fresh database session."""
    if repository is not None:
        return action(SlottingService(repository, settings, publisher))
    with session_scope() as session:
        return action(SlottingService(SqlAlchemyLocationRepository(session), settings, publisher))


def optimize_zone_job(
    warehouse_id: str,
    zone: str,
    updated_by: str = 'slotting_job',
    only_if_drifted: bool = False,
    repository: Optional[LocationRepository] = None,
    settings: Optional[SlottingSettings] = None,
    publisher: Optional[Callable] = None
) -> Dict:
    """Run one zone's slotting pass.
    
    Args:
        warehouse_id: Warehouse ID
        zone: Zone to optimize
        updated_by: User or process name recorded on changed locations
        only_if_drifted: Skip zones whose distribution is within tolerance
        repository: Optional repository; a database session is opened when omitted
        settings: Optional slotting settings
        publisher: Optional event publisher
        
    Returns:
        Dictionary with zone results
    """
    def action(service):
        distribution = service.analyze_zone_distribution(warehouse_id, zone)
        if only_if_drifted and not distribution.needs_rebalancing:
            return {
                'success': True,
                'skipped': True,
                'needs_rebalancing': False,
                'updated_locations': 0
            }
        return {
            'success': True,
            'skipped': False,
            'needs_rebalancing': distribution.needs_rebalancing,
            'updated_locations': service.optimize_zone_slotting(warehouse_id, zone, updated_by)
        }
    
    try:
        return _run_with_service(repository, settings, publisher, action)
    except SlottingError as e:
        logger.error(f"Error optimizing zone {zone} of warehouse {warehouse_id}: {str(e)}")
        return {
            'success': False,
            'error': str(e),
            'updated_locations': 0
        }


def run_slotting_job(
    warehouse_id: str,
    updated_by: str = 'slotting_job',
    only_if_drifted: bool = False,
    repository: Optional[LocationRepository] = None,
    settings: Optional[SlottingSettings] = None,
    publisher: Optional[Callable] = None,
    max_workers: Optional[int] = None
) -> Dict:
    """Run the slotting pass for every zone of a warehouse.
    
    Zones share no records, so they are processed in parallel threads.
    
    Args:
        warehouse_id: Warehouse ID
        updated_by: User or process name recorded on changed locations
        only_if_drifted: Only optimize zones that need rebalancing
        repository: Optional repository; database sessions are used when omitted
        settings: Optional slotting settings
        publisher: Optional event publisher
        max_workers: Thread count (defaults to [BATCH_PROCESS] max_workers)
        
    Returns:
        Dictionary with job results
    """
    log_info = log_manager.batch_start_log('slotting_job', {'warehouse_id': warehouse_id})
    start_time = log_info['start_time']
    
    results = {
        'warehouse_id': warehouse_id,
        'start_time': start_time,
        'end_time': None,
        'duration': None,
        'zones': {},
        'updated_locations': 0
    }
    
    try:
        zones = _run_with_service(
            repository, settings, publisher,
            lambda service: service.repository.find_zones(warehouse_id)
        )
        logger.info(f"Found {len(zones)} zones in warehouse {warehouse_id}")
        
        workers = max_workers or config.batch_config['max_workers'] or 1
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {
                zone: executor.submit(
                    optimize_zone_job, warehouse_id, zone, updated_by, only_if_drifted,
                    repository, settings, publisher
                )
                for zone in zones
            }
            for zone, future in futures.items():
                results['zones'][zone] = future.result()
        
        results['updated_locations'] = sum(r['updated_locations'] for r in results['zones'].values())
        results['success'] = all(r['success'] for r in results['zones'].values())
    
    except Exception as e:
        logger.error(f"Error during slotting job: {str(e)}", exc_info=True)
        results['success'] = False
        results['error'] = str(e)
    
    results['end_time'] = datetime.now()
    results['duration'] = results['end_time'] - start_time
    log_manager.batch_end_log(
        log_info,
        success=results['success'],
        result_info={'zones': len(results['zones']), 'updated_locations': results['updated_locations']}
    )
    return results
