"""Generic record decoder/encoder driven by `RecordSpec`.

- `decode_record(spec, obj)`: JSON object → dataclass instance
- `encode_record(spec, value)`: dataclass instance → JSON object
- `record_codec(spec)`: wrap a nested record as a `FieldCodec`

Absence rules
-------------
- required key absent or null → `MissingRequiredField`
- optional key absent or null → `FieldSpec.default()` if set, else None
- unknown keys are ignored
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import partial
from typing import Any

from seastream.core.errors import DecodeError, MalformedEnvelope, MissingRequiredField
from seastream.decoding.specs import FieldCodec, FieldSpec, RecordSpec


def _decode_field(fs: FieldSpec, obj: Mapping[str, Any]) -> Any:
    """Decode one key of `obj` according to its field spec."""
    raw = obj.get(fs.name)
    if raw is None:
        if fs.required:
            reason = "is null" if fs.name in obj else "is missing"
            raise MissingRequiredField(f"required field {reason}", field=fs.name)
        return fs.default() if fs.default is not None else None
    try:
        return fs.codec.decode(raw)
    except DecodeError as exc:
        raise exc.at(fs.name)


def decode_record(spec: RecordSpec, obj: Any) -> Any:
    """Build `spec.cls` from a JSON object (flattened sub-records read the same object)."""
    if not isinstance(obj, Mapping):
        raise MalformedEnvelope(f"expected an object for {spec.name}", value=obj)

    kwargs: dict[str, Any] = {}
    for attr, sub in spec.flatten:
        kwargs[attr] = decode_record(sub, obj)
    for fs in spec.fields:
        kwargs[fs.name] = _decode_field(fs, obj)

    try:
        return spec.cls(**kwargs)
    except ValueError as exc:
        # model-level invariants (e.g. uint256 bounds) not covered by a codec
        raise MalformedEnvelope(str(exc), value=dict(obj)) from exc


def encode_record(spec: RecordSpec, value: Any) -> dict[str, Any]:
    """Inverse of `decode_record`. Optional None values are written as null."""
    out: dict[str, Any] = {}
    for attr, sub in spec.flatten:
        out.update(encode_record(sub, getattr(value, attr)))
    for fs in spec.fields:
        v = getattr(value, fs.name)
        out[fs.name] = None if v is None else fs.codec.encode(v)
    return out


def record_codec(spec: RecordSpec) -> FieldCodec:
    """Expose a nested record as a leaf codec for use in another spec."""
    return FieldCodec(
        name=spec.name,
        decode=partial(decode_record, spec),
        encode=partial(encode_record, spec),
    )
