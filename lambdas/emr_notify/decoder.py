# lambdas/emr_notify/decoder.py
from typing import Any

from pydantic import ValidationError

from .models import EventDetail, InboundEvent


class DecodeError(ValueError):
    """Raised when an envelope or its detail payload is not well-formed."""
    pass


def parse_event(raw: Any) -> InboundEvent:
    """
    Validates the EventBridge envelope handed to the Lambda.

    Raises:
        DecodeError: If the event is not a dict or a known key has a bad value.
    """
    if not isinstance(raw, dict):
        raise DecodeError(f"Expected an event object, got {type(raw).__name__}")
    try:
        return InboundEvent.model_validate(raw)
    except ValidationError as e:
        raise DecodeError(f"Malformed event envelope: {e}") from e


def _is_json_null(detail: Any) -> bool:
    if isinstance(detail, str):
        return detail.strip() == "null"
    return bytes(detail).strip() == b"null"


def decode_detail(detail: Any) -> EventDetail:
    """
    Turns the opaque detail payload into an EventDetail.

    EventBridge normally delivers `detail` already parsed, but raw JSON text or
    bytes are accepted as well. Keys missing from the object decode to "", and
    a JSON null decodes to an all-empty detail.

    Raises:
        DecodeError: If the payload is not a JSON object or a known key is
            not a string.
    """
    if detail is None:
        return EventDetail()
    try:
        if isinstance(detail, (str, bytes, bytearray)):
            if _is_json_null(detail):
                return EventDetail()
            return EventDetail.model_validate_json(detail)
        return EventDetail.model_validate(detail)
    except ValidationError as e:
        raise DecodeError(f"Malformed event detail: {e}") from e


def decode_event_detail(event: InboundEvent) -> EventDetail:
    """
    Decodes the detail of an envelope.

    Raises:
        DecodeError: If the envelope has no `detail` key at all, or the detail is malformed.
    """
    if 'detail' not in event.model_fields_set:
        raise DecodeError("Event has no detail payload")
    return decode_detail(event.detail)
