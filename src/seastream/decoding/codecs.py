"""Leaf field codecs: wire JSON value ⇄ typed value.

Each codec is a plain `decode_*` / `encode_*` function pair bundled into a
`FieldCodec` constant at the bottom of the module. Decoders raise a
`DecodeError` subclass on malformed input; callers add the field path.

Wire forms
----------
- scaled integer:   "1000000000000000000"          (decimal string, < 2**256)
- NFT identifier:   "ethereum/0xabc.../1234"        (split on the first two "/")
- wrapped address:  {"address": "0x" + 40 hex}
- float-or-string:  "1.23" or 1.23                  (always encoded as a string)
- chain:            {"name": "matic"}
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal
from typing import Any
from urllib.parse import urlsplit

from seastream.core.errors import (
    InvalidAddress,
    InvalidIdentifier,
    MalformedEnvelope,
    MissingRequiredField,
    NumericOverflowOrFormat,
    UnknownChain,
)
from seastream.core.models import U256_MAX, Address, Chain, Hash32, ListingType, NftId
from seastream.decoding.specs import FieldCodec

U64_MAX = 2**64 - 1
_U256_MAX_DIGITS = len(str(U256_MAX))  # 78


def _type_name(raw: Any) -> str:
    if raw is None:
        return "null"
    if isinstance(raw, bool):
        return "boolean"
    if isinstance(raw, (int, float)):
        return "number"
    if isinstance(raw, str):
        return "string"
    if isinstance(raw, Mapping):
        return "object"
    if isinstance(raw, list):
        return "array"
    return type(raw).__name__


def _expect_str(raw: Any, what: str) -> str:
    if not isinstance(raw, str):
        raise MalformedEnvelope(f"expected {what} as a string, got {_type_name(raw)}", value=raw)
    return raw


def _expect_object(raw: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        raise MalformedEnvelope(f"expected {what} as an object, got {_type_name(raw)}", value=raw)
    return raw


# ---------- scaled integers ----------


def parse_u256(text: str) -> int:
    """Parse unsigned decimal text into an int bounded to 256 bits."""
    if not text or not (text.isascii() and text.isdigit()):
        raise NumericOverflowOrFormat(f"not an unsigned decimal integer: {text!r}", value=text)
    if len(text.lstrip("0")) > _U256_MAX_DIGITS:
        raise NumericOverflowOrFormat("integer does not fit in 256 bits", value=text)
    value = int(text)
    if value > U256_MAX:
        raise NumericOverflowOrFormat("integer does not fit in 256 bits", value=text)
    return value


def decode_u256(raw: Any) -> int:
    if not isinstance(raw, str):
        # JSON numbers lose precision past 2**53; the wire form is always a string.
        raise NumericOverflowOrFormat(
            f"expected a decimal string, got {_type_name(raw)}", value=raw
        )
    return parse_u256(raw)


def encode_u256(value: int) -> str:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= U256_MAX:
        raise NumericOverflowOrFormat(f"not a uint256 value: {value!r}", value=value)
    return str(value)


# ---------- plain scalars ----------


def decode_uint64(raw: Any) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise MalformedEnvelope(f"expected an integer, got {_type_name(raw)}", value=raw)
    if not 0 <= raw <= U64_MAX:
        raise NumericOverflowOrFormat("integer does not fit in 64 unsigned bits", value=raw)
    return raw


def decode_bool(raw: Any) -> bool:
    if not isinstance(raw, bool):
        raise MalformedEnvelope(f"expected a boolean, got {_type_name(raw)}", value=raw)
    return raw


def decode_str(raw: Any) -> str:
    return _expect_str(raw, "text")


def decode_url(raw: Any) -> str:
    """Validate URL text; the original string is kept as-is."""
    text = _expect_str(raw, "URL")
    try:
        scheme = urlsplit(text).scheme
    except ValueError as exc:
        raise MalformedEnvelope(f"invalid URL: {exc}", value=raw) from exc
    if not scheme:
        raise MalformedEnvelope("URL has no scheme", value=raw)
    return text


def _identity(value: Any) -> Any:
    return value


def decode_timestamp(raw: Any) -> datetime:
    """ISO-8601 with an explicit UTC offset."""
    text = _expect_str(raw, "timestamp")
    try:
        value = datetime.fromisoformat(text)
    except ValueError:
        raise MalformedEnvelope(f"invalid ISO-8601 timestamp: {text!r}", value=raw) from None
    if value.tzinfo is None or value.utcoffset() is None:
        raise MalformedEnvelope(f"timestamp has no UTC offset: {text!r}", value=raw)
    return value


def encode_timestamp(value: datetime) -> str:
    return value.isoformat()


# ---------- float or string ----------


def _parse_float_text(text: str) -> float:
    # plain ASCII literal only: no padding, no digit separators
    if not text.isascii() or text != text.strip() or "_" in text:
        raise NumericOverflowOrFormat(f"not a number: {text!r}", value=text)
    try:
        return float(text)
    except ValueError:
        raise NumericOverflowOrFormat(f"not a number: {text!r}", value=text) from None


def decode_float_or_str(raw: Any) -> float:
    if isinstance(raw, bool):
        raise NumericOverflowOrFormat("expected a number or numeric string, got boolean", value=raw)
    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            raise NumericOverflowOrFormat("number does not fit in a float", value=raw) from None
    elif isinstance(raw, str):
        value = _parse_float_text(raw)
    else:
        raise NumericOverflowOrFormat(
            f"expected a number or numeric string, got {_type_name(raw)}", value=raw
        )
    if not math.isfinite(value):
        raise NumericOverflowOrFormat(f"not a finite number: {raw!r}", value=raw)
    return value


def encode_float_as_str(value: float) -> str:
    """Shortest round-trip digits, written as plain decimal text (no exponent)."""
    return format(Decimal(repr(float(value))), "f")


# ---------- addresses / hashes ----------


def parse_address(text: Any) -> Address:
    try:
        return Address.from_hex(text)
    except ValueError as exc:
        raise InvalidAddress(str(exc), value=text) from None


def decode_address(raw: Any) -> Address:
    return parse_address(_expect_str(raw, "address"))


def encode_hex_value(value: Address | Hash32) -> str:
    return value.hex


def decode_wrapped_address(raw: Any) -> Address:
    obj = _expect_object(raw, "address wrapper")
    if obj.get("address") is None:
        raise MissingRequiredField("address wrapper has no address", field="address", value=raw)
    try:
        return decode_address(obj["address"])
    except InvalidAddress as exc:
        raise exc.at("address")


def encode_wrapped_address(value: Address) -> dict[str, str]:
    return {"address": value.hex}


def decode_hash32(raw: Any) -> Hash32:
    text = _expect_str(raw, "hash")
    try:
        return Hash32.from_hex(text)
    except ValueError as exc:
        raise MalformedEnvelope(f"invalid 32-byte hash: {exc}", value=raw) from None


# ---------- enumerations ----------


def parse_chain(name: Any) -> Chain:
    """Look up a chain by its lowercase wire name (case-sensitive)."""
    try:
        return Chain(name)
    except ValueError:
        raise UnknownChain(f"unknown chain: {name!r}", value=name) from None


def decode_chain(raw: Any) -> Chain:
    obj = _expect_object(raw, "chain")
    if obj.get("name") is None:
        raise MissingRequiredField("chain has no name", field="name", value=raw)
    name = _expect_str(obj["name"], "chain name")
    return parse_chain(name)


def encode_chain(value: Chain) -> dict[str, str]:
    return {"name": value.value}


def decode_listing_type(raw: Any) -> ListingType:
    text = _expect_str(raw, "listing type")
    try:
        return ListingType(text)
    except ValueError:
        raise MalformedEnvelope(f"unknown listing type: {text!r}", value=raw) from None


def encode_enum_value(value: Chain | ListingType) -> str:
    return value.value


# ---------- composite identifier ----------


def parse_nft_id(text: str) -> NftId:
    """Split "<chain>/<address>/<token id>" on the first two separators."""
    parts = text.split("/", 2)
    if len(parts) < 3:
        raise InvalidIdentifier(
            f"expected <chain>/<address>/<token id>, got {len(parts)} segment(s)", value=text
        )
    chain_name, address_hex, token_text = parts
    network = parse_chain(chain_name)
    address = parse_address(address_hex)
    token_id = parse_u256(token_text)
    return NftId(network=network, address=address, token_id=token_id)


def decode_nft_id(raw: Any) -> NftId:
    try:
        return parse_nft_id(_expect_str(raw, "NFT identifier"))
    except (UnknownChain, InvalidAddress, NumericOverflowOrFormat) as exc:
        # report the whole identifier, not just the failing segment
        exc.value = raw
        raise


def encode_nft_id(value: NftId) -> str:
    return f"{value.network.value}/{value.address.hex}/{value.token_id}"


# ---------- opaque sequences ----------


def decode_opaque_sequence(raw: Any) -> tuple[Any, ...]:
    if not isinstance(raw, list):
        raise MalformedEnvelope(f"expected an array, got {_type_name(raw)}", value=raw)
    return tuple(raw)


def encode_opaque_sequence(value: tuple[Any, ...]) -> list[Any]:
    return list(value)


# ---------- codec table ----------

U256_DECIMAL = FieldCodec("u256_decimal", decode_u256, encode_u256)
UINT64 = FieldCodec("uint64", decode_uint64, _identity)
BOOL = FieldCodec("bool", decode_bool, _identity)
STRING = FieldCodec("string", decode_str, _identity)
URL = FieldCodec("url", decode_url, _identity)
TIMESTAMP = FieldCodec("timestamp", decode_timestamp, encode_timestamp)
FLOAT_OR_STRING = FieldCodec("float_or_string", decode_float_or_str, encode_float_as_str)
ADDRESS = FieldCodec("address", decode_address, encode_hex_value)
WRAPPED_ADDRESS = FieldCodec("wrapped_address", decode_wrapped_address, encode_wrapped_address)
HASH32 = FieldCodec("hash32", decode_hash32, encode_hex_value)
CHAIN = FieldCodec("chain", decode_chain, encode_chain)
LISTING_TYPE = FieldCodec("listing_type", decode_listing_type, encode_enum_value)
NFT_ID = FieldCodec("nft_id", decode_nft_id, encode_nft_id)
OPAQUE_SEQUENCE = FieldCodec("opaque_sequence", decode_opaque_sequence, encode_opaque_sequence)
