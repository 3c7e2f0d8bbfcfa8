from __future__ import annotations

from .core.errors import DecodeError
from .core.models import (
    ItemCancelledData,
    ItemListedData,
    ItemMetadataUpdatedData,
    ItemReceivedBidData,
    ItemReceivedOfferData,
    ItemSoldData,
    ItemTransferredData,
    Payload,
    StreamEvent,
)
from .decoding.decoder import decode_event, decode_message
from .decoding.encoder import encode_event, encode_message
from .protocol import Collection, EventType, Network, endpoint_url

__all__ = [
    "decode_event",
    "decode_message",
    "encode_event",
    "encode_message",
    "DecodeError",
    "StreamEvent",
    "Payload",
    "ItemListedData",
    "ItemSoldData",
    "ItemTransferredData",
    "ItemMetadataUpdatedData",
    "ItemCancelledData",
    "ItemReceivedOfferData",
    "ItemReceivedBidData",
    "Collection",
    "EventType",
    "Network",
    "endpoint_url",
]
