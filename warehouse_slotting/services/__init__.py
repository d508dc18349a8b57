from .slotting_service import SlottingService, SlottingBalanceReport

__all__ = [
    'SlottingService',
    'SlottingBalanceReport'
]
