# pumpfun_sdk/monitoring/logs_event_processor.py

import base64
import binascii
import hashlib
import io
from typing import Any, Dict, List, Mapping, Optional, Tuple

from borsh_construct import Bool, CStruct, I64, String, U64
from construct import Bytes as FixedBytes
from construct import ConstructError

from .events import PumpEvent, decode_event
from ..utils.logger import get_logger

logger = get_logger(__name__)

PROGRAM_DATA_PREFIX = "Program data: "


def event_discriminator(event_name: str) -> bytes:
    """Anchor event discriminator: sha256("event:<Name>")[:8]."""
    return hashlib.sha256(f"event:{event_name}".encode()).digest()[:8]


# Leading fields of each event; later program versions append more.
CREATE_EVENT_LAYOUT = CStruct(
    "name" / String,
    "symbol" / String,
    "uri" / String,
    "mint" / FixedBytes(32),
    "bonding_curve" / FixedBytes(32),
    "user" / FixedBytes(32),
)
CREATE_EVENT_CREATOR = CStruct("creator" / FixedBytes(32))

TRADE_EVENT_LAYOUT = CStruct(
    "mint" / FixedBytes(32),
    "sol_amount" / U64,
    "token_amount" / U64,
    "is_buy" / Bool,
    "user" / FixedBytes(32),
    "timestamp" / I64,
    "virtual_sol_reserves" / U64,
    "virtual_token_reserves" / U64,
)
TRADE_EVENT_REAL_RESERVES = CStruct(
    "real_sol_reserves" / U64,
    "real_token_reserves" / U64,
)

COMPLETE_EVENT_LAYOUT = CStruct(
    "user" / FixedBytes(32),
    "mint" / FixedBytes(32),
    "bonding_curve" / FixedBytes(32),
    "timestamp" / I64,
)

_EVENT_LAYOUTS = {
    event_discriminator("CreateEvent"): ("CreateEvent", CREATE_EVENT_LAYOUT, CREATE_EVENT_CREATOR),
    event_discriminator("TradeEvent"): ("TradeEvent", TRADE_EVENT_LAYOUT, TRADE_EVENT_REAL_RESERVES),
    event_discriminator("CompleteEvent"): ("CompleteEvent", COMPLETE_EVENT_LAYOUT, None),
}


class LogsEventProcessor:
    """
    Parses Anchor-style 'Program data:' entries from logsSubscribe /
    getTransaction results into event records.
    """

    def parse_program_data(self, encoded: str) -> Optional[Tuple[str, Dict[str, Any]]]:
        """Decodes one base64 event blob into (event_name, fields), or None if it is not a known event."""
        try:
            raw = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError):
            logger.debug(f"Skipping non-base64 program data: {encoded[:32]}")
            return None

        entry = _EVENT_LAYOUTS.get(raw[:8])
        if entry is None:
            return None
        name, layout, trailing_layout = entry

        stream = io.BytesIO(raw[8:])
        try:
            fields = dict(layout.parse_stream(stream))
            remaining = stream.read()
            if trailing_layout is not None and len(remaining) >= trailing_layout.sizeof():
                fields.update(trailing_layout.parse(remaining[:trailing_layout.sizeof()]))
        except ConstructError as e:
            logger.debug(f"Malformed {name} payload ({len(raw)} bytes): {e}")
            return None

        fields.pop("_io", None)
        return name, fields

    def extract_events(self, log_result: Mapping[str, Any]) -> List[PumpEvent]:
        """Returns the events found in a log result, in log order."""
        events: List[PumpEvent] = []
        for entry in log_result.get("logs", None) or []:
            if not entry.startswith(PROGRAM_DATA_PREFIX):
                continue
            parsed = self.parse_program_data(entry[len(PROGRAM_DATA_PREFIX):].strip())
            if parsed is None:
                continue
            name, fields = parsed
            events.append(decode_event(name, fields))
        return events
