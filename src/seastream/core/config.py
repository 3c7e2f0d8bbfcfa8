from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from seastream.core.models import EventType
from seastream.protocol import Collection, Network, endpoint_url

ErrorPolicy = Literal["skip", "raise"]


@dataclass(frozen=True)
class ConsumerConfig:
    """Configuration for the stream consumer (decode + filter)."""

    event_types: tuple[EventType, ...] = ()  # empty = every kind
    collections: tuple[str, ...] = ()  # payload collection slugs to keep; empty = all
    on_error: ErrorPolicy = "skip"  # "skip" logs and drops a bad frame, "raise" stops

    def __post_init__(self) -> None:
        if self.on_error not in ("skip", "raise"):
            raise ValueError(f"on_error must be 'skip' or 'raise', got {self.on_error!r}")


@dataclass(frozen=True)
class StreamConfig:
    """Connection-level settings handed to the transport collaborator."""

    api_key: str
    network: Network = Network.MAINNET
    collections: tuple[Collection, ...] = field(default_factory=lambda: (Collection.all(),))

    @property
    def url(self) -> str:
        return endpoint_url(self.network, self.api_key)

    @property
    def topics(self) -> list[str]:
        return [c.topic for c in self.collections]
