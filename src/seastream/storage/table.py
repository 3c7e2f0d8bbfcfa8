"""Columnar buffer for decoded events (Arrow / Parquet export).

Design notes
------------
- Base columns are strongly typed and always present.
- Every other payload key becomes a dynamic string column on first appearance
  (nested objects are flattened to dotted names, e.g. "payment_token.symbol").
- Dynamic values are the canonical wire text, so uint256 prices and addresses
  survive exactly.
- Sorting is applied on (sent_at, event_type) before write.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

import pyarrow as pa
import pyarrow.parquet as pq

from seastream.core.models import StreamEvent
from seastream.decoding.encoder import encode_payload

logger = logging.getLogger(__name__)

_BASE_FIELDS: list[tuple[str, pa.DataType]] = [
    ("sent_at", pa.timestamp("us", tz="UTC")),
    ("event_type", pa.string()),
    ("collection", pa.string()),
    ("chain", pa.string()),
    ("contract", pa.string()),
    ("token_id", pa.string()),
    ("permalink", pa.string()),
]

# context keys already represented by base columns
_CONTEXT_KEYS = ("collection", "item")


def _flatten(prefix: str, value: Any, out: dict[str, str | None]) -> None:
    if isinstance(value, dict):
        for k, v in value.items():
            _flatten(f"{prefix}.{k}", v, out)
    elif isinstance(value, list):
        out[prefix] = json.dumps(value, separators=(",", ":"))
    elif value is None:
        out[prefix] = None
    elif isinstance(value, bool):
        out[prefix] = "true" if value else "false"
    else:
        out[prefix] = str(value)


def flatten_payload(event: StreamEvent) -> dict[str, str | None]:
    """Kind-specific payload keys as dotted-name strings."""
    out: dict[str, str | None] = {}
    for key, value in encode_payload(event.payload).items():
        if key in _CONTEXT_KEYS:
            continue
        _flatten(key, value, out)
    return out


@dataclass(slots=True)
class EventColumns:
    """Dynamic columnar buffer of decoded events."""

    sent_at: list[datetime] = field(default_factory=list)
    event_type: list[str] = field(default_factory=list)
    collection: list[str] = field(default_factory=list)
    chain: list[str] = field(default_factory=list)
    contract: list[str] = field(default_factory=list)
    token_id: list[str] = field(default_factory=list)
    permalink: list[str] = field(default_factory=list)

    # Dynamic columns created on-demand for any payload key
    dyn: dict[str, list[str | None]] = field(default_factory=dict)
    _rows: int = 0

    @classmethod
    def from_events(cls, events: Iterable[StreamEvent]) -> EventColumns:
        buf = cls()
        for event in events:
            buf.append(event)
        return buf

    def size(self) -> int:
        """Number of rows currently stored."""
        return self._rows

    def _ensure_dyn_col(self, name: str) -> list[str | None]:
        """Ensure a dynamic column exists and is aligned to current row count."""
        col = self.dyn.get(name)
        if col is None:
            col = [None] * self._rows
            self.dyn[name] = col
        return col

    def append(self, event: StreamEvent) -> None:
        """Append one event; its payload keys become columns."""
        item = event.context.item
        self.sent_at.append(event.sent_at)
        self.event_type.append(event.event_type.value)
        self.collection.append(event.context.collection.slug)
        self.chain.append(item.chain.value)
        self.contract.append(item.nft_id.address.hex)
        self.token_id.append(str(item.nft_id.token_id))
        self.permalink.append(item.permalink)
        self._rows += 1
        # Pad existing dynamic columns with None for the new row
        for col in self.dyn.values():
            col.append(None)
        for k, v in flatten_payload(event).items():
            self._ensure_dyn_col(k)[-1] = v

    def to_arrow_table(self) -> pa.Table:
        """Convert the buffer to a sorted Arrow table with deterministic schema."""
        fields = [pa.field(n, t) for n, t in _BASE_FIELDS]
        arrays: dict[str, pa.Array] = {
            name: pa.array(getattr(self, name), type=typ) for name, typ in _BASE_FIELDS
        }
        # Add dynamic columns in deterministic order
        for name in sorted(self.dyn.keys()):
            fields.append(pa.field(name, pa.string()))
            arrays[name] = pa.array(self.dyn[name], type=pa.string())
        schema = pa.schema(fields)
        return pa.Table.from_pydict(arrays, schema=schema).sort_by(
            [("sent_at", "ascending"), ("event_type", "ascending")]
        )

    def write_parquet(self, out_path: Path, *, codec: str = "zstd") -> Path | None:
        """Write Parquet atomically (tmp + replace). Returns None when empty."""
        if self._rows == 0:
            return None
        table = self.to_arrow_table()
        out_path.parent.mkdir(parents=True, exist_ok=True)
        tmp = out_path.with_suffix(".tmp")
        try:
            pq.write_table(table, tmp, compression=codec)
            os.replace(tmp, out_path)
        finally:
            tmp.unlink(missing_ok=True)
        logger.info("wrote %s (rows=%d, cols=%d)", out_path, len(table), len(table.schema))
        return out_path
