"""Payload specification primitives and registry typing.

Defines lightweight dataclasses to describe how to decode (and re-encode) payloads:
- `FieldCodec`: one bidirectional leaf codec (wire value ⇄ typed value)
- `FieldSpec`: one JSON key, its codec, and whether it may be absent/null
- `RecordSpec`: a dataclass + its field specs (+ sub-records flattened into the same object)
- `PayloadSpec`: one event kind (event_type tag → record spec)
- `PayloadRegistry`: mapping from event_type tag → PayloadSpec
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from seastream.core.models import EventType


@dataclass(frozen=True)
class FieldCodec:
    """A decode/encode function pair for one wire representation."""

    name: str
    decode: Callable[[Any], Any]
    encode: Callable[[Any], Any]


@dataclass(frozen=True)
class FieldSpec:
    """Describe one JSON key of a record."""

    name: str
    codec: FieldCodec
    required: bool = True
    default: Callable[[], Any] | None = None  # used when an optional key is absent/null


def optional(name: str, codec: FieldCodec, *, default: Callable[[], Any] | None = None) -> FieldSpec:
    """Shorthand for a key where absence and explicit null both mean "none"."""
    return FieldSpec(name, codec, required=False, default=default)


@dataclass(frozen=True)
class RecordSpec:
    """How to build one dataclass from a JSON object.

    `flatten` lists (attribute, sub-record) pairs whose keys live in the
    *same* JSON object rather than under a nested key.
    """

    cls: type
    fields: tuple[FieldSpec, ...]
    flatten: tuple[tuple[str, RecordSpec], ...] = ()

    def __post_init__(self):
        declared = [f.name for f in self.fields] + [attr for attr, _ in self.flatten]
        if len(set(declared)) != len(declared):
            raise ValueError(f"{self.name} spec declares a field twice")
        expected = {f.name for f in dataclasses.fields(self.cls)}
        missing = expected - set(declared)
        if missing:
            raise ValueError(f"{self.name} spec does not cover fields: {sorted(missing)}")
        unknown = set(declared) - expected
        if unknown:
            raise ValueError(f"{self.name} spec refers to non-existent fields: {sorted(unknown)}")

    @property
    def name(self) -> str:
        return self.cls.__name__

    def wire_keys(self) -> list[str]:
        """All JSON keys this record reads, flattened sub-records first."""
        keys: list[str] = []
        for _, sub in self.flatten:
            keys.extend(sub.wire_keys())
        keys.extend(f.name for f in self.fields)
        return keys


@dataclass(frozen=True)
class PayloadSpec:
    """One event kind: discriminant tag + payload record."""

    event_type: EventType
    record: RecordSpec

    def __post_init__(self):
        declared = getattr(self.record.cls, "event_type", None)
        if declared is not self.event_type:
            raise ValueError(
                f"{self.record.name} is tagged {declared!r}, spec says {self.event_type!r}"
            )

    @property
    def tag(self) -> str:
        return self.event_type.value


# The full registry keyed by event_type tag (e.g. "item_listed").
PayloadRegistry = dict[str, PayloadSpec]


def get_payload_specs_tags(specs: Iterable[PayloadSpec]) -> list[str]:
    return [spec.tag for spec in specs]


def get_payload_registry_tags(registry: PayloadRegistry) -> list[str]:
    return get_payload_specs_tags(registry.values())
