"""
Events module - log generacji i tabele zdarzeń.

Zawiera:
- GenerationEvent: Dataclass reprezentująca zdarzenie generacji
- EventType: Enum typów zdarzeń
- EventLogger: Klasa logująca zdarzenia do JSON
- EventTable, EventInfo, EventAction: Tabele zdarzeń kategorii
"""

from .event_logger import GenerationEvent, EventType, EventLogger
from .event_table import EventTable, EventInfo, EventAction

__all__ = [
    "GenerationEvent", "EventType", "EventLogger",
    "EventTable", "EventInfo", "EventAction",
]
