# pumpfun_sdk/monitoring/events.py
"""
Maps program events, already decoded into field mappings by an IDL-driven
decoder, onto the library's event records.

Payload keys may be snake_case (anchorpy, borsh layouts) or camelCase
(Anchor TS); addresses may arrive as Pubkey, base58 text or raw 32 bytes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

from solders.pubkey import Pubkey

from ..core.exceptions import UnknownEventType
from ..utils.logger import get_logger

logger = get_logger(__name__)


class EventKind(Enum):
    CREATE = "createEvent"
    TRADE = "tradeEvent"
    COMPLETE = "completeEvent"
    SET_PARAMS = "setParamsEvent"


# IDL type names and the camelCase names Anchor clients subscribe with
_EVENT_NAMES: Dict[str, EventKind] = {
    "createEvent": EventKind.CREATE,
    "CreateEvent": EventKind.CREATE,
    "tradeEvent": EventKind.TRADE,
    "TradeEvent": EventKind.TRADE,
    "completeEvent": EventKind.COMPLETE,
    "CompleteEvent": EventKind.COMPLETE,
    "setParamsEvent": EventKind.SET_PARAMS,
    "SetParamsEvent": EventKind.SET_PARAMS,
}


@dataclass(frozen=True)
class CreateEvent:
    mint: Pubkey
    name: str
    symbol: str
    uri: str
    creator: Pubkey
    bonding_curve: Optional[Pubkey] = None
    user: Optional[Pubkey] = None


@dataclass(frozen=True)
class TradeEvent:
    mint: Pubkey
    sol_amount: int
    token_amount: int
    is_buy: bool
    user: Pubkey
    timestamp: int
    virtual_sol_reserves: int
    virtual_token_reserves: int
    real_sol_reserves: Optional[int] = None
    real_token_reserves: Optional[int] = None


@dataclass(frozen=True)
class CompleteEvent:
    mint: Pubkey
    user: Pubkey
    timestamp: int
    bonding_curve: Optional[Pubkey] = None


@dataclass(frozen=True)
class SetParamsEvent:
    fee_basis_points: int
    fee_recipient: Pubkey
    authority: Optional[Pubkey] = None
    initial_virtual_token_reserves: Optional[int] = None
    initial_virtual_sol_reserves: Optional[int] = None
    initial_real_token_reserves: Optional[int] = None
    token_total_supply: Optional[int] = None


@dataclass(frozen=True)
class UnrecognizedEvent:
    name: str
    payload: Mapping[str, Any] = field(default_factory=dict)


PumpEvent = Union[CreateEvent, TradeEvent, CompleteEvent, SetParamsEvent, UnrecognizedEvent]

_MISSING = object()


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _field(payload: Mapping[str, Any], name: str, default: Any = _MISSING) -> Any:
    for key in (name, _camel(name)):
        if key in payload:
            return payload[key]
    if default is _MISSING:
        raise KeyError(f"Event payload is missing field '{name}'")
    return default


def _pubkey(value: Any) -> Pubkey:
    if isinstance(value, Pubkey):
        return value
    if isinstance(value, str):
        return Pubkey.from_string(value)
    if isinstance(value, (bytes, bytearray, list, tuple)):
        return Pubkey.from_bytes(bytes(value))
    # anchorpy / web3.js style objects
    return Pubkey.from_string(str(value))


def _optional_pubkey(payload: Mapping[str, Any], name: str) -> Optional[Pubkey]:
    value = _field(payload, name, None)
    return None if value is None else _pubkey(value)


def _int(value: Any) -> int:
    # BN / bigint values arrive as numeric strings from JSON bridges
    return int(str(value)) if not isinstance(value, int) else value


def _optional_int(payload: Mapping[str, Any], name: str) -> Optional[int]:
    value = _field(payload, name, None)
    return None if value is None else _int(value)


def _to_create_event(payload: Mapping[str, Any]) -> CreateEvent:
    user = _optional_pubkey(payload, "user")
    creator = _optional_pubkey(payload, "creator") or user
    if creator is None:
        raise KeyError("Event payload is missing field 'creator'")
    return CreateEvent(
        mint=_pubkey(_field(payload, "mint")),
        name=str(_field(payload, "name")),
        symbol=str(_field(payload, "symbol")),
        uri=str(_field(payload, "uri")),
        creator=creator,
        bonding_curve=_optional_pubkey(payload, "bonding_curve"),
        user=user,
    )


def _to_trade_event(payload: Mapping[str, Any]) -> TradeEvent:
    return TradeEvent(
        mint=_pubkey(_field(payload, "mint")),
        sol_amount=_int(_field(payload, "sol_amount")),
        token_amount=_int(_field(payload, "token_amount")),
        is_buy=bool(_field(payload, "is_buy")),
        user=_pubkey(_field(payload, "user")),
        timestamp=_int(_field(payload, "timestamp")),
        virtual_sol_reserves=_int(_field(payload, "virtual_sol_reserves")),
        virtual_token_reserves=_int(_field(payload, "virtual_token_reserves")),
        real_sol_reserves=_optional_int(payload, "real_sol_reserves"),
        real_token_reserves=_optional_int(payload, "real_token_reserves"),
    )


def _to_complete_event(payload: Mapping[str, Any]) -> CompleteEvent:
    return CompleteEvent(
        mint=_pubkey(_field(payload, "mint")),
        user=_pubkey(_field(payload, "user")),
        timestamp=_int(_field(payload, "timestamp")),
        bonding_curve=_optional_pubkey(payload, "bonding_curve"),
    )


def _to_set_params_event(payload: Mapping[str, Any]) -> SetParamsEvent:
    return SetParamsEvent(
        fee_basis_points=_int(_field(payload, "fee_basis_points")),
        fee_recipient=_pubkey(_field(payload, "fee_recipient")),
        authority=_optional_pubkey(payload, "authority"),
        initial_virtual_token_reserves=_optional_int(payload, "initial_virtual_token_reserves"),
        initial_virtual_sol_reserves=_optional_int(payload, "initial_virtual_sol_reserves"),
        initial_real_token_reserves=_optional_int(payload, "initial_real_token_reserves"),
        token_total_supply=_optional_int(payload, "token_total_supply"),
    )


_DECODERS = {
    EventKind.CREATE: _to_create_event,
    EventKind.TRADE: _to_trade_event,
    EventKind.COMPLETE: _to_complete_event,
    EventKind.SET_PARAMS: _to_set_params_event,
}


def decode_event(name: str, payload: Mapping[str, Any], strict: bool = False) -> PumpEvent:
    """
    Maps one decoded event onto its record.

    Unknown event names are logged and returned as UnrecognizedEvent so a
    feed keeps flowing when the program adds new events; with strict=True
    they raise UnknownEventType instead. A known event with a missing field
    raises KeyError.
    """
    kind = _EVENT_NAMES.get(name)
    if kind is None:
        if strict:
            raise UnknownEventType(f"Unknown event type: {name}")
        logger.warning(f"Unhandled event type: {name}")
        return UnrecognizedEvent(name=name, payload=dict(payload))
    return _DECODERS[kind](payload)


def decode_events(events: Iterable[Tuple[str, Mapping[str, Any]]]) -> Iterator[PumpEvent]:
    """Decodes a feed of (name, payload) pairs, preserving arrival order."""
    for name, payload in events:
        yield decode_event(name, payload)
