# warehouse_slotting/events.py
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from warehouse_slotting.models import SlottingClass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlottingChangedEvent:
    """Published whenever a location's slotting class changes."""
    event_id: str
    location_id: str
    warehouse_id: str
    zone: Optional[str]
    previous_class: Optional[SlottingClass]
    new_class: SlottingClass
    new_pick_path_sequence: Optional[int]
    occurred_at: datetime
    updated_by: Optional[str]
    reason: Optional[str]

    @classmethod
    def of(cls, location_id, warehouse_id, zone, previous_class, new_class,
           new_pick_path_sequence, updated_by=None, reason=None) -> 'SlottingChangedEvent':
        return cls(
            event_id=str(uuid.uuid4()),
            location_id=location_id,
            warehouse_id=warehouse_id,
            zone=zone,
            previous_class=previous_class,
            new_class=new_class,
            new_pick_path_sequence=new_pick_path_sequence,
            occurred_at=datetime.now(),
            updated_by=updated_by,
            reason=reason
        )


class EventPublisher:
    """Fans slotting events out to subscribed callables."""
    
    def __init__(self):
        self._subscribers: List[Callable[[SlottingChangedEvent], None]] = []
    
    def subscribe(self, handler: Callable[[SlottingChangedEvent], None]):
        self._subscribers.append(handler)
        return handler
    
    def publish(self, event: SlottingChangedEvent):
        logger.info(
            f"Publishing slotting change for location {event.location_id}: "
            f"{event.previous_class} -> {event.new_class}"
        )
        for handler in self._subscribers:
            handler(event)
    
    def __call__(self, event: SlottingChangedEvent):
        self.publish(event)
