"""Payload registry helpers.

This module exposes:
- `make_registry(specs)` → PayloadRegistry prefilled with the given specs
- `add_payload_spec(registry, spec)` → insert one spec keyed by its tag
- `add_many(registry, specs)` → insert multiple

The default registry with all seven stream event kinds lives in
`seastream.decoding.registries.make_stream_registry`.
"""

from __future__ import annotations

from collections.abc import Iterable

from seastream.decoding.specs import PayloadRegistry, PayloadSpec


def make_registry(specs: Iterable[PayloadSpec] = ()) -> PayloadRegistry:
    """Build a registry from payload specs (empty by default)."""
    reg: PayloadRegistry = {}
    add_many(reg, specs)
    return reg


def add_payload_spec(registry: PayloadRegistry, spec: PayloadSpec) -> None:
    """Insert one spec into the registry keyed by its event_type tag."""
    if spec.tag in registry and registry[spec.tag] is not spec:
        raise ValueError(f"event type {spec.tag!r} is already registered")
    registry[spec.tag] = spec


def add_many(registry: PayloadRegistry, specs: Iterable[PayloadSpec]) -> None:
    """Insert many specs into the registry."""
    for s in specs:
        add_payload_spec(registry, s)
