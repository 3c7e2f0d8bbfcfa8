from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Protocol, runtime_checkable


# ---------------------------------------------------------------------------
# IFrameSource
# ---------------------------------------------------------------------------

@runtime_checkable
class IFrameSource(Protocol):
    """
    Abstract supplier of raw stream frames.

    Domain expectations:
    - Each frame is one JSON object (bytes or text) holding one stream event.
    - Connecting, joining channels, heartbeats and reconnection are the
      source's business; the consumer only iterates.
    - The consumer never acknowledges, retries or re-fetches a frame.
    """

    def frames(self) -> AsyncIterator[bytes | str]:
        """
        Yield raw frames until the stream ends.

        Implementations:
        - Phoenix channel client subscribed to OpenSea Stream topics
        - NDJSON replay of captured messages (`seastream.clients.replay`)
        - In-memory list for testing
        """
        ...
