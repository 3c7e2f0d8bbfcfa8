"""Replay captured stream messages as an `IFrameSource`.

Input is NDJSON: one stream event document per line. Blank lines are skipped.
Useful for offline decoding of recorded traffic (`seastream decode`).
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterable


class ReplaySource:
    """Frame source backed by an iterable of lines (file object, list, ...).

    Parameters
    ----------
    lines : Iterable[str | bytes]
        Raw NDJSON lines; trailing newlines are stripped.
    """

    def __init__(self, lines: Iterable[str | bytes]) -> None:
        self._lines = lines

    async def frames(self) -> AsyncIterator[str | bytes]:
        for line in self._lines:
            frame = line.strip()
            if frame:
                yield frame
