"""Encode `StreamEvent`s back to the wire schema.

The output is the canonical form: lowercase hex, plain decimal strings for
scaled integers, string prices, ISO-8601 timestamps, and every declared
payload key present (optional values as null).
"""

from __future__ import annotations

import json
from typing import Any

from seastream.core.models import Payload, StreamEvent
from seastream.decoding.codecs import encode_timestamp
from seastream.decoding.records import encode_record
from seastream.decoding.registries import default_registry
from seastream.decoding.specs import PayloadRegistry, PayloadSpec


def _spec_for(payload: Payload, registry: PayloadRegistry) -> PayloadSpec:
    tag = payload.event_type.value
    spec = registry.get(tag)
    if spec is None or not isinstance(payload, spec.record.cls):
        raise ValueError(f"no payload spec registered for {type(payload).__name__} ({tag})")
    return spec


def encode_payload(payload: Payload, *, registry: PayloadRegistry | None = None) -> dict[str, Any]:
    """Encode a payload record (context keys flattened in)."""
    spec = _spec_for(payload, default_registry() if registry is None else registry)
    return encode_record(spec.record, payload)


def encode_event(event: StreamEvent, *, registry: PayloadRegistry | None = None) -> dict[str, Any]:
    """Encode a `StreamEvent` into a JSON-ready dict."""
    return {
        "sent_at": encode_timestamp(event.sent_at),
        "event_type": event.event_type.value,
        "payload": encode_payload(event.payload, registry=registry),
    }


def encode_message(event: StreamEvent, *, registry: PayloadRegistry | None = None) -> str:
    """Serialize a `StreamEvent` as a compact JSON document."""
    return json.dumps(encode_event(event, registry=registry), separators=(",", ":"))
