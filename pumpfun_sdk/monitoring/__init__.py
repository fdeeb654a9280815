# pumpfun_sdk/monitoring/__init__.py

from .events import (
    CompleteEvent,
    CreateEvent,
    EventKind,
    SetParamsEvent,
    TradeEvent,
    UnrecognizedEvent,
    decode_event,
    decode_events,
)
from .logs_event_processor import LogsEventProcessor

__all__ = [
    "CompleteEvent",
    "CreateEvent",
    "EventKind",
    "SetParamsEvent",
    "TradeEvent",
    "UnrecognizedEvent",
    "decode_event",
    "decode_events",
    "LogsEventProcessor",
]
