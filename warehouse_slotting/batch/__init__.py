from .slotting_job import optimize_zone_job, run_slotting_job

__all__ = [
    'optimize_zone_job',
    'run_slotting_job'
]
