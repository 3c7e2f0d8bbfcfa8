"""Typed, immutable representation of OpenSea Stream events.

This module defines:
- value types: `Address` (20 bytes), `Hash32` (32 bytes), `NftId`
- closed enumerations: `Chain`, `ListingType`, `EventType`
- shared records: `CollectionRef`, `Metadata`, `Item`, `Context`,
  `PaymentToken`, `Transaction`
- the seven payload records and the `StreamEvent` envelope

Design notes
------------
- Every record is a frozen dataclass; sequences are tuples (opaque `traits`
  may hold dicts, see `ItemMetadataUpdatedData`).
- Scaled integers (prices, token ids) are plain Python ints bounded to 256 bits.
- `StreamEvent.event_type` is derived from the payload class, so the tag and
  the payload shape cannot disagree.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import StrEnum
from typing import Any, ClassVar

from eth_utils import decode_hex, encode_hex, is_hex, remove_0x_prefix, to_checksum_address

U256_MAX = 2**256 - 1


# === Enumerations ===


class Chain(StrEnum):
    """Network an item lives on. Values are the wire names."""

    ETHEREUM = "ethereum"
    POLYGON = "matic"
    KLAYTN = "klaytn"
    SOLANA = "solana"

    RINKEBY = "rinkeby"
    MUMBAI = "mumbai"
    BAOBAB = "baobab"

    @property
    def is_testnet(self) -> bool:
        return self in _TESTNETS


_TESTNETS = frozenset({Chain.RINKEBY, Chain.MUMBAI, Chain.BAOBAB})


class ListingType(StrEnum):
    """Auction mechanism of a listing. Absence (None) means buyout."""

    ENGLISH = "english"
    DUTCH = "dutch"


class EventType(StrEnum):
    """Wire tag of each payload kind (`event_type` field)."""

    ITEM_LISTED = "item_listed"
    ITEM_SOLD = "item_sold"
    ITEM_TRANSFERRED = "item_transferred"
    ITEM_METADATA_UPDATED = "item_metadata_updated"
    ITEM_CANCELLED = "item_cancelled"
    ITEM_RECEIVED_OFFER = "item_received_offer"
    ITEM_RECEIVED_BID = "item_received_bid"


# === Fixed-size byte values ===


def _bytes_from_hex(text: str, size: int) -> bytes:
    if not isinstance(text, str) or not is_hex(text):
        raise ValueError(f"not a hex string: {text!r}")
    body = remove_0x_prefix(text)  # type: ignore[arg-type]
    if len(body) != 2 * size:
        raise ValueError(f"expected {size} bytes, got {len(body)} hex digits")
    return decode_hex(body)


@dataclass(frozen=True, slots=True)
class _FixedBytes:
    raw: bytes

    SIZE: ClassVar[int] = 0

    def __post_init__(self) -> None:
        if len(self.raw) != self.SIZE:
            raise ValueError(f"{type(self).__name__} must be {self.SIZE} bytes, got {len(self.raw)}")

    @classmethod
    def from_hex(cls, text: str) -> Any:
        """Parse hex text, with or without 0x prefix, any case."""
        return cls(_bytes_from_hex(text, cls.SIZE))

    @property
    def hex(self) -> str:
        """Lowercase 0x-prefixed form (canonical wire text)."""
        return encode_hex(self.raw)

    def __str__(self) -> str:
        return self.hex


class Address(_FixedBytes):
    """20-byte account or contract address."""

    __slots__ = ()
    SIZE = 20

    @property
    def checksum(self) -> str:
        """EIP-55 mixed-case form."""
        return to_checksum_address(self.raw)


class Hash32(_FixedBytes):
    """32-byte hash (transaction hashes)."""

    __slots__ = ()
    SIZE = 32


@dataclass(frozen=True, slots=True)
class NftId:
    """Identifier of one token: (chain, contract address, token id)."""

    network: Chain
    address: Address
    token_id: int

    def __post_init__(self) -> None:
        if not 0 <= self.token_id <= U256_MAX:
            raise ValueError(f"token_id out of uint256 range: {self.token_id}")

    def __str__(self) -> str:
        return f"{self.network}/{self.address.hex}/{self.token_id}"


# === Shared records ===


@dataclass(frozen=True, slots=True)
class CollectionRef:
    """Collection an item belongs to, as embedded in event payloads."""

    slug: str


@dataclass(frozen=True, slots=True)
class Metadata:
    """Basic item metadata. Every field is optional."""

    name: str | None = None
    description: str | None = None
    image_url: str | None = None
    animation_url: str | None = None
    metadata_url: str | None = None


@dataclass(frozen=True, slots=True)
class Item:
    nft_id: NftId
    permalink: str
    chain: Chain
    metadata: Metadata


@dataclass(frozen=True, slots=True)
class Context:
    """Collection + item; flattened into every payload on the wire."""

    collection: CollectionRef
    item: Item


@dataclass(frozen=True, slots=True)
class PaymentToken:
    """Token used for payment, with reference prices."""

    address: Address
    decimals: int
    eth_price: float
    usd_price: float
    name: str
    symbol: str

    def scale(self, amount: int) -> Decimal:
        """Convert a scaled integer amount into whole token units."""
        return Decimal(amount).scaleb(-self.decimals)


@dataclass(frozen=True, slots=True)
class Transaction:
    hash: Hash32
    timestamp: datetime


# === Payload records ===


@dataclass(frozen=True, slots=True, kw_only=True)
class ItemListedData:
    """An item has been listed for sale."""

    event_type: ClassVar[EventType] = EventType.ITEM_LISTED

    context: Context
    event_timestamp: datetime
    base_price: int
    expiration_date: datetime
    is_private: bool
    listing_date: datetime
    listing_type: ListingType | None
    maker: Address
    payment_token: PaymentToken
    quantity: int
    taker: Address | None


@dataclass(frozen=True, slots=True, kw_only=True)
class ItemSoldData:
    """An item has been sold. `taker` (the buyer) is always present."""

    event_type: ClassVar[EventType] = EventType.ITEM_SOLD

    context: Context
    event_timestamp: datetime
    closing_date: datetime
    is_private: bool
    listing_type: ListingType | None
    maker: Address
    payment_token: PaymentToken
    quantity: int
    sale_price: int
    taker: Address
    transaction: Transaction


@dataclass(frozen=True, slots=True, kw_only=True)
class ItemTransferredData:
    """An item has moved from one wallet to another."""

    event_type: ClassVar[EventType] = EventType.ITEM_TRANSFERRED

    context: Context
    event_timestamp: datetime
    transaction: Transaction
    from_account: Address
    to_account: Address
    quantity: int


@dataclass(frozen=True, slots=True, kw_only=True)
class ItemMetadataUpdatedData:
    """An item's metadata changed.

    `traits` is kept opaque: the raw JSON values (usually dicts) in a tuple.
    The record itself is frozen, but it is not hashable while `traits` holds
    dicts, so do not use it as a set member or dict key.
    """

    event_type: ClassVar[EventType] = EventType.ITEM_METADATA_UPDATED

    context: Context
    name: str | None
    description: str | None
    image_preview_url: str | None
    animation_url: str | None
    background_color: str | None
    metadata_url: str | None
    traits: tuple[Any, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class ItemCancelledData:
    """A listing has been cancelled."""

    event_type: ClassVar[EventType] = EventType.ITEM_CANCELLED

    context: Context
    event_timestamp: datetime
    listing_type: ListingType | None
    payment_token: PaymentToken
    quantity: int
    transaction: Transaction


@dataclass(frozen=True, slots=True, kw_only=True)
class ItemReceivedOfferData:
    event_type: ClassVar[EventType] = EventType.ITEM_RECEIVED_OFFER

    context: Context
    event_timestamp: datetime
    base_price: int
    created_date: datetime
    expiration_date: datetime
    maker: Address
    payment_token: PaymentToken
    quantity: int
    taker: Address | None


@dataclass(frozen=True, slots=True, kw_only=True)
class ItemReceivedBidData:
    event_type: ClassVar[EventType] = EventType.ITEM_RECEIVED_BID

    context: Context
    event_timestamp: datetime
    base_price: int
    created_date: datetime
    expiration_date: datetime
    maker: Address
    payment_token: PaymentToken
    quantity: int
    taker: Address | None


Payload = (
    ItemListedData
    | ItemSoldData
    | ItemTransferredData
    | ItemMetadataUpdatedData
    | ItemCancelledData
    | ItemReceivedOfferData
    | ItemReceivedBidData
)


# === Envelope ===


@dataclass(frozen=True, slots=True)
class StreamEvent:
    """One message from the stream: send time + typed payload."""

    sent_at: datetime
    payload: Payload

    @property
    def event_type(self) -> EventType:
        return self.payload.event_type

    @property
    def context(self) -> Context:
        return self.payload.context
