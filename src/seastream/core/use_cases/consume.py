from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass, field

from seastream.core.config import ConsumerConfig
from seastream.core.errors import DecodeError
from seastream.core.interfaces import IFrameSource
from seastream.core.models import EventType, StreamEvent
from seastream.decoding.decoder import decode_message
from seastream.decoding.specs import PayloadRegistry

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------------


@dataclass(kw_only=True)
class ConsumeStats:
    """
    Counters for one consumer run.

    - received: frames pulled from the source
    - decoded: events yielded to the caller
    - filtered: well-formed events dropped by the event/collection filters
    - failed: frames that did not decode
    - per_event: yielded events by event_type tag
    """

    received: int = 0
    decoded: int = 0
    filtered: int = 0
    failed: int = 0
    per_event: dict[str, int] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Consumer
# ---------------------------------------------------------------------------


class StreamConsumer:
    """
    Pull frames from an `IFrameSource`, decode each one independently and
    yield the events that pass the configured filters.

    A frame that fails to decode is either logged and skipped or re-raised,
    per `ConsumerConfig.on_error`. Decoding itself never makes that choice.
    """

    def __init__(
        self,
        source: IFrameSource,
        *,
        config: ConsumerConfig | None = None,
        registry: PayloadRegistry | None = None,
    ) -> None:
        self._source = source
        self.config = config or ConsumerConfig()
        self._registry = registry
        self._event_types: frozenset[EventType] = frozenset(self.config.event_types)
        self._collections: frozenset[str] = frozenset(self.config.collections)
        self.stats = ConsumeStats()

    def _accepts(self, event: StreamEvent) -> bool:
        if self._event_types and event.event_type not in self._event_types:
            return False
        if self._collections and event.context.collection.slug not in self._collections:
            return False
        return True

    async def events(self) -> AsyncIterator[StreamEvent]:
        """Yield decoded events until the source is exhausted."""
        async for frame in self._source.frames():
            self.stats.received += 1
            try:
                event = decode_message(frame, registry=self._registry)
            except DecodeError as exc:
                self.stats.failed += 1
                if self.config.on_error == "raise":
                    raise
                logger.warning(
                    "dropping malformed frame #%d: %s (value=%.120r)",
                    self.stats.received,
                    exc,
                    exc.value,
                )
                continue

            if not self._accepts(event):
                self.stats.filtered += 1
                continue

            self.stats.decoded += 1
            tag = event.event_type.value
            self.stats.per_event[tag] = self.stats.per_event.get(tag, 0) + 1
            yield event

    async def collect(self) -> list[StreamEvent]:
        """Drain the source and return every accepted event."""
        return [event async for event in self.events()]
