"""Subscription-side identifiers for the OpenSea Stream websocket.

This module provides:
- `Collection`: channel topic of a subscription ("collection:<slug>" / "collection:*")
- `EventType`: the event names a channel delivers (re-exported from core.models)
- `Network`: mainnet/testnet websocket endpoints and `endpoint_url()`

`Collection` is deliberately a different type from `CollectionRef` (the
`{"slug": ...}` object embedded in event payloads); both expose `.slug`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import httpx

from seastream.core.models import Chain, EventType

TOPIC_PREFIX = "collection:"
WILDCARD = "*"

__all__ = ["Collection", "EventType", "Network", "endpoint_url", "TOPIC_PREFIX", "WILDCARD"]


@dataclass(frozen=True, slots=True)
class Collection:
    """A collection whose events can be subscribed to (or all of them)."""

    slug: str

    def __post_init__(self) -> None:
        if not self.slug:
            raise ValueError("collection slug must not be empty")

    @classmethod
    def all(cls) -> Collection:
        """Wildcard subscription to every collection."""
        return cls(WILDCARD)

    @property
    def is_wildcard(self) -> bool:
        return self.slug == WILDCARD

    @property
    def topic(self) -> str:
        return f"{TOPIC_PREFIX}{self.slug}"

    @classmethod
    def from_topic(cls, topic: str) -> Collection:
        """Parse "collection:<slug>" (or "collection:*")."""
        if not topic.startswith(TOPIC_PREFIX):
            raise ValueError(f"expected {TOPIC_PREFIX}<slug>, got {topic!r}")
        return cls(topic[len(TOPIC_PREFIX):])

    def __str__(self) -> str:
        return self.topic


class Network(Enum):
    """Websocket to connect to: production chains or testnets."""

    MAINNET = "wss://stream.openseabeta.com/socket/websocket"
    TESTNET = "wss://testnets-stream.openseabeta.com/socket/websocket"

    @classmethod
    def for_chain(cls, chain: Chain) -> Network:
        return cls.TESTNET if chain.is_testnet else cls.MAINNET


def endpoint_url(network: Network, api_key: str) -> str:
    """Websocket URL for `network` with the API key as the `token` query param."""
    if not api_key:
        raise ValueError("api_key must not be empty")
    return str(httpx.URL(network.value).copy_add_param("token", api_key))
