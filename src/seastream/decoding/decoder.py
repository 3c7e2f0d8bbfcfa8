"""Envelope parser + payload dispatcher.

This module translates one raw stream message into a `StreamEvent` using a
`PayloadRegistry` of `PayloadSpec`s. The envelope shape is validated by a
pydantic model; the payload is decoded by the spec selected from its
`event_type` tag. Unknown tags are rejected.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, StrictStr, ValidationError, field_validator

from seastream.core.errors import DecodeError, MalformedEnvelope
from seastream.core.models import StreamEvent
from seastream.decoding.codecs import decode_timestamp
from seastream.decoding.records import decode_record
from seastream.decoding.registries import default_registry
from seastream.decoding.specs import PayloadRegistry, PayloadSpec

logger = logging.getLogger(__name__)


# ---------- envelope ----------


class Envelope(BaseModel):
    """Outer wrapper of every stream message. Extra keys are ignored."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    sent_at: datetime
    event_type: StrictStr
    payload: dict[str, Any]

    @field_validator("sent_at", mode="before")
    @classmethod
    def parse_sent_at(cls, v: Any) -> datetime:
        """Same ISO-8601-with-offset rule as every other timestamp."""
        return decode_timestamp(v)


def _envelope_error(exc: ValidationError, document: Mapping[str, Any]) -> DecodeError:
    """Map the first pydantic error onto the decode error taxonomy.

    Every envelope-level failure (including a missing key) is a
    `MalformedEnvelope`; `MissingRequiredField` is reserved for payload keys.
    """
    err = exc.errors()[0]
    field = ".".join(str(p) for p in err["loc"]) or None
    cause = (err.get("ctx") or {}).get("error")
    if isinstance(cause, DecodeError):
        return cause.at(field) if field else cause
    if err["type"] == "missing":
        return MalformedEnvelope("required envelope field is missing", field=field)
    return MalformedEnvelope(err["msg"], field=field, value=document.get(field) if field else None)


def parse_envelope(document: Any) -> Envelope:
    if not isinstance(document, Mapping):
        raise MalformedEnvelope("message is not a JSON object", value=document)
    try:
        return Envelope.model_validate(dict(document))
    except ValidationError as exc:
        raise _envelope_error(exc, document) from None


# ---------- dispatch ----------


def _lookup_spec(event_type: str, registry: PayloadRegistry) -> PayloadSpec:
    spec = registry.get(event_type)
    if spec is None:
        raise MalformedEnvelope(
            f"unknown event type {event_type!r}", field="event_type", value=event_type
        )
    return spec


def decode_event(
    document: Mapping[str, Any],
    *,
    registry: PayloadRegistry | None = None,
) -> StreamEvent:
    """Decode one parsed JSON document into a `StreamEvent`.

    Raises a `DecodeError` subclass whose `field` is the dotted path of the
    failing key (e.g. "payload.item.nft_id").
    """
    reg = default_registry() if registry is None else registry
    envelope = parse_envelope(document)
    spec = _lookup_spec(envelope.event_type, reg)
    try:
        payload = decode_record(spec.record, envelope.payload)
    except DecodeError as exc:
        raise exc.at("payload")
    return StreamEvent(sent_at=envelope.sent_at, payload=payload)


def decode_message(
    raw: bytes | bytearray | str,
    *,
    registry: PayloadRegistry | None = None,
) -> StreamEvent:
    """Decode one raw frame (a single JSON object) into a `StreamEvent`."""
    try:
        document = json.loads(raw)
    except (ValueError, RecursionError) as exc:
        # JSONDecodeError, UnicodeDecodeError and the int digit limit are all ValueErrors
        raise MalformedEnvelope(f"invalid JSON: {exc}", value=raw) from None
    event = decode_event(document, registry=registry)
    logger.debug("decoded %s sent at %s", event.event_type, event.sent_at.isoformat())
    return event
