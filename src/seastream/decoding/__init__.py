"""Event schema codec.

This package provides:
- Payload specification system (FieldCodec, FieldSpec, RecordSpec, PayloadSpec)
- Leaf field codecs (scaled integers, NFT ids, wrapped addresses, string prices)
- Generic decoder/encoder that translates stream messages ⇄ StreamEvent objects
- Registry management for payload specs, prefilled with the seven stream event kinds
"""

from seastream.decoding.decoder import Envelope, decode_event, decode_message
from seastream.decoding.encoder import encode_event, encode_message, encode_payload
from seastream.decoding.registries import default_registry, make_stream_registry
from seastream.decoding.registry import add_many, add_payload_spec, make_registry
from seastream.decoding.specs import (
    FieldCodec,
    FieldSpec,
    PayloadRegistry,
    PayloadSpec,
    RecordSpec,
)

__all__ = [
    "Envelope",
    "decode_event",
    "decode_message",
    "encode_event",
    "encode_message",
    "encode_payload",
    "default_registry",
    "make_stream_registry",
    "add_many",
    "add_payload_spec",
    "make_registry",
    "FieldCodec",
    "FieldSpec",
    "PayloadRegistry",
    "PayloadSpec",
    "RecordSpec",
]
