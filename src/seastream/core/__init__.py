"""Core data models, errors, configuration and interfaces.

This package provides:
- Data models (StreamEvent, the seven payload records, Address, NftId, Chain, ...)
- Decode error taxonomy (DecodeError and subclasses)
- Configuration classes (ConsumerConfig, StreamConfig) in `core.config`
"""

from seastream.core.errors import (
    DecodeError,
    InvalidAddress,
    InvalidIdentifier,
    MalformedEnvelope,
    MissingRequiredField,
    NumericOverflowOrFormat,
    UnknownChain,
)
from seastream.core.models import (
    Address,
    Chain,
    CollectionRef,
    Context,
    EventType,
    Hash32,
    Item,
    ListingType,
    Metadata,
    NftId,
    PaymentToken,
    StreamEvent,
    Transaction,
)

__all__ = [
    "DecodeError",
    "InvalidAddress",
    "InvalidIdentifier",
    "MalformedEnvelope",
    "MissingRequiredField",
    "NumericOverflowOrFormat",
    "UnknownChain",
    "Address",
    "Chain",
    "CollectionRef",
    "Context",
    "EventType",
    "Hash32",
    "Item",
    "ListingType",
    "Metadata",
    "NftId",
    "PaymentToken",
    "StreamEvent",
    "Transaction",
]
