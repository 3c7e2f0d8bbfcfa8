"""Record and payload specs for the OpenSea Stream event schema.

Shared records (nested under their own key):
- COLLECTION_REF  {"slug": ...}
- METADATA        {"name", "description", "image_url", "animation_url", "metadata_url"}
- ITEM            {"nft_id", "permalink", "chain", "metadata"}
- PAYMENT_TOKEN   {"address", "decimals", "eth_price", "usd_price", "name", "symbol"}
- TRANSACTION     {"hash", "timestamp"}

CONTEXT ({"collection", "item"}) is flattened into every payload object.

Example
-------
>>> from seastream.decoding.registries import make_stream_registry
>>> sorted(make_stream_registry())[:2]
['item_cancelled', 'item_listed']
"""

from __future__ import annotations

from functools import cache

from seastream.core.models import (
    CollectionRef,
    Context,
    EventType,
    Item,
    ItemCancelledData,
    ItemListedData,
    ItemMetadataUpdatedData,
    ItemReceivedBidData,
    ItemReceivedOfferData,
    ItemSoldData,
    ItemTransferredData,
    Metadata,
    PaymentToken,
    Transaction,
)
from seastream.decoding.codecs import (
    ADDRESS,
    BOOL,
    CHAIN,
    FLOAT_OR_STRING,
    HASH32,
    LISTING_TYPE,
    NFT_ID,
    OPAQUE_SEQUENCE,
    STRING,
    TIMESTAMP,
    U256_DECIMAL,
    UINT64,
    URL,
    WRAPPED_ADDRESS,
)
from seastream.decoding.records import record_codec
from seastream.decoding.registry import make_registry
from seastream.decoding.specs import FieldSpec, PayloadRegistry, PayloadSpec, RecordSpec, optional


# -------------------------
# Shared records
# -------------------------

COLLECTION_REF = RecordSpec(CollectionRef, (FieldSpec("slug", STRING),))

METADATA = RecordSpec(
    Metadata,
    (
        optional("name", STRING),
        optional("description", STRING),
        optional("image_url", URL),
        optional("animation_url", URL),
        optional("metadata_url", URL),
    ),
)

ITEM = RecordSpec(
    Item,
    (
        FieldSpec("nft_id", NFT_ID),
        FieldSpec("permalink", URL),
        FieldSpec("chain", CHAIN),
        FieldSpec("metadata", record_codec(METADATA)),
    ),
)

CONTEXT = RecordSpec(
    Context,
    (
        FieldSpec("collection", record_codec(COLLECTION_REF)),
        FieldSpec("item", record_codec(ITEM)),
    ),
)

PAYMENT_TOKEN = RecordSpec(
    PaymentToken,
    (
        FieldSpec("address", ADDRESS),
        FieldSpec("decimals", UINT64),
        FieldSpec("eth_price", FLOAT_OR_STRING),
        FieldSpec("usd_price", FLOAT_OR_STRING),
        FieldSpec("name", STRING),
        FieldSpec("symbol", STRING),
    ),
)

TRANSACTION = RecordSpec(
    Transaction,
    (
        FieldSpec("hash", HASH32),
        FieldSpec("timestamp", TIMESTAMP),
    ),
)

_PAYMENT_TOKEN = record_codec(PAYMENT_TOKEN)
_TRANSACTION = record_codec(TRANSACTION)
_WITH_CONTEXT = (("context", CONTEXT),)


# -------------------------
# Payloads
# -------------------------

ITEM_LISTED = PayloadSpec(
    EventType.ITEM_LISTED,
    RecordSpec(
        ItemListedData,
        (
            FieldSpec("event_timestamp", TIMESTAMP),
            FieldSpec("base_price", U256_DECIMAL),
            FieldSpec("expiration_date", TIMESTAMP),
            FieldSpec("is_private", BOOL),
            FieldSpec("listing_date", TIMESTAMP),
            optional("listing_type", LISTING_TYPE),
            FieldSpec("maker", WRAPPED_ADDRESS),
            FieldSpec("payment_token", _PAYMENT_TOKEN),
            FieldSpec("quantity", UINT64),
            optional("taker", WRAPPED_ADDRESS),
        ),
        flatten=_WITH_CONTEXT,
    ),
)

ITEM_SOLD = PayloadSpec(
    EventType.ITEM_SOLD,
    RecordSpec(
        ItemSoldData,
        (
            FieldSpec("event_timestamp", TIMESTAMP),
            FieldSpec("closing_date", TIMESTAMP),
            FieldSpec("is_private", BOOL),
            optional("listing_type", LISTING_TYPE),
            FieldSpec("maker", WRAPPED_ADDRESS),
            FieldSpec("payment_token", _PAYMENT_TOKEN),
            FieldSpec("quantity", UINT64),
            FieldSpec("sale_price", U256_DECIMAL),
            FieldSpec("taker", WRAPPED_ADDRESS),
            FieldSpec("transaction", _TRANSACTION),
        ),
        flatten=_WITH_CONTEXT,
    ),
)

ITEM_TRANSFERRED = PayloadSpec(
    EventType.ITEM_TRANSFERRED,
    RecordSpec(
        ItemTransferredData,
        (
            FieldSpec("event_timestamp", TIMESTAMP),
            FieldSpec("transaction", _TRANSACTION),
            FieldSpec("from_account", WRAPPED_ADDRESS),
            FieldSpec("to_account", WRAPPED_ADDRESS),
            FieldSpec("quantity", UINT64),
        ),
        flatten=_WITH_CONTEXT,
    ),
)

ITEM_METADATA_UPDATED = PayloadSpec(
    EventType.ITEM_METADATA_UPDATED,
    RecordSpec(
        ItemMetadataUpdatedData,
        (
            optional("name", STRING),
            optional("description", STRING),
            optional("image_preview_url", URL),
            optional("animation_url", URL),
            optional("background_color", STRING),
            optional("metadata_url", URL),
            optional("traits", OPAQUE_SEQUENCE, default=tuple),
        ),
        flatten=_WITH_CONTEXT,
    ),
)

ITEM_CANCELLED = PayloadSpec(
    EventType.ITEM_CANCELLED,
    RecordSpec(
        ItemCancelledData,
        (
            FieldSpec("event_timestamp", TIMESTAMP),
            optional("listing_type", LISTING_TYPE),
            FieldSpec("payment_token", _PAYMENT_TOKEN),
            FieldSpec("quantity", UINT64),
            FieldSpec("transaction", _TRANSACTION),
        ),
        flatten=_WITH_CONTEXT,
    ),
)

ITEM_RECEIVED_OFFER = PayloadSpec(
    EventType.ITEM_RECEIVED_OFFER,
    RecordSpec(
        ItemReceivedOfferData,
        (
            FieldSpec("event_timestamp", TIMESTAMP),
            FieldSpec("base_price", U256_DECIMAL),
            FieldSpec("created_date", TIMESTAMP),
            FieldSpec("expiration_date", TIMESTAMP),
            FieldSpec("maker", WRAPPED_ADDRESS),
            FieldSpec("payment_token", _PAYMENT_TOKEN),
            FieldSpec("quantity", UINT64),
            optional("taker", WRAPPED_ADDRESS),
        ),
        flatten=_WITH_CONTEXT,
    ),
)

ITEM_RECEIVED_BID = PayloadSpec(
    EventType.ITEM_RECEIVED_BID,
    RecordSpec(
        ItemReceivedBidData,
        (
            FieldSpec("event_timestamp", TIMESTAMP),
            FieldSpec("base_price", U256_DECIMAL),
            FieldSpec("created_date", TIMESTAMP),
            FieldSpec("expiration_date", TIMESTAMP),
            FieldSpec("maker", WRAPPED_ADDRESS),
            FieldSpec("payment_token", _PAYMENT_TOKEN),
            FieldSpec("quantity", UINT64),
            optional("taker", WRAPPED_ADDRESS),
        ),
        flatten=_WITH_CONTEXT,
    ),
)

STREAM_PAYLOADS: tuple[PayloadSpec, ...] = (
    ITEM_LISTED,
    ITEM_SOLD,
    ITEM_TRANSFERRED,
    ITEM_METADATA_UPDATED,
    ITEM_CANCELLED,
    ITEM_RECEIVED_OFFER,
    ITEM_RECEIVED_BID,
)


def make_stream_registry() -> PayloadRegistry:
    """Return a fresh registry with all seven stream event kinds."""
    return make_registry(STREAM_PAYLOADS)


@cache
def default_registry() -> PayloadRegistry:
    """Shared registry used when callers pass none. Treat as read-only."""
    return make_stream_registry()
