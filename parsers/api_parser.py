"""Parser for structured booking API responses ('rooms' with nested pricing)."""

import json
from typing import Any, Optional

from models.errors import ApiResponseError
from models.price import ApiRoom
from parsers.price_parser import normalize_api_value, normalize_currency_lenient

BLOCKED_STATUSES = {"blocked", "sold_out", "unavailable", "closed"}


def parse_api_response(payload_json: str) -> list[ApiRoom]:
    """Decode an API response and return one ApiRoom per room entry.

    Accepts a 'rooms' list (or an object keyed by room id) or a single
    'room' object. Raises ApiResponseError when the payload is not a JSON
    object or holds no rooms.
    """
    try:
        payload = json.loads(payload_json)
    except (TypeError, ValueError) as e:
        raise ApiResponseError(f"Invalid API response payload: {e}") from e

    if not isinstance(payload, dict):
        raise ApiResponseError("Invalid API response payload.")

    rooms = payload.get("rooms")
    if rooms is None and "room" in payload:
        rooms = [payload["room"]]

    if isinstance(rooms, dict):
        rooms = list(rooms.values())

    if not isinstance(rooms, list):
        raise ApiResponseError("API response does not contain rooms.")

    parsed = [parse_api_room(room) for room in rooms if isinstance(room, dict)]
    if not parsed:
        raise ApiResponseError("API response does not contain valid room entries.")

    return parsed


def parse_api_room(room: dict) -> ApiRoom:
    pricing = room.get("pricing")
    if not isinstance(pricing, dict):
        pricing = {}

    total = _amount(pricing.get("total"))
    night = _amount(pricing.get("night"))
    currency = _first_present(
        _field(pricing.get("total"), "currency"),
        _field(pricing.get("night"), "currency"),
        room.get("currency"),
    )

    name = room.get("name")
    return ApiRoom(
        name="" if name is None else str(name),
        total=normalize_api_value(total),
        night=normalize_api_value(night),
        currency=normalize_currency_lenient(currency),
        blocked=is_room_blocked(room),
    )


def is_room_blocked(room: dict) -> bool:
    """Blocked flag, a closed-out status, or available == false."""
    blocked = bool(room["blocked"]) if room.get("blocked") is not None else False

    status = str(room.get("status") or "").lower()
    if status in BLOCKED_STATUSES:
        blocked = True

    if room.get("available", True) is False:
        blocked = True

    return blocked


def _field(value: Any, key: str) -> Any:
    return value.get(key) if isinstance(value, dict) else None


def _amount(value: Any) -> Any:
    """pricing.x.amount when present, else pricing.x itself."""
    if isinstance(value, dict):
        return value.get("amount")
    return value


def _first_present(*values: Any) -> Optional[Any]:
    for value in values:
        if value is not None:
            return value
    return None
