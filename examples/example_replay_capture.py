import asyncio
from pathlib import Path

import pyarrow.parquet as pq

from seastream.clients.replay import ReplaySource
from seastream.core.config import ConsumerConfig
from seastream.core.models import EventType
from seastream.core.use_cases.consume import StreamConsumer
from seastream.storage.table import EventColumns

EXAMPLES_ROOT = Path(__file__).parent
assert EXAMPLES_ROOT.name == "examples"
OUT_ROOT = EXAMPLES_ROOT.parent / "data_examples"

CAPTURE = EXAMPLES_ROOT / "capture.ndjson"  # one stream message per line
assert CAPTURE.is_file()

config = ConsumerConfig(
    event_types=(EventType.ITEM_SOLD, EventType.ITEM_LISTED),
    collections=("boredapeyachtclub",),
    on_error="skip",
)


async def replay():
    with CAPTURE.open() as fh:
        consumer = StreamConsumer(ReplaySource(fh), config=config)
        events = await consumer.collect()
    return consumer.stats, events


async def main():
    stats, events = await replay()
    print(stats)

    for event in events[:5]:
        token = event.payload.payment_token
        price = event.payload.sale_price if event.event_type is EventType.ITEM_SOLD else event.payload.base_price
        print(event.sent_at, event.event_type, event.context.item.nft_id, token.scale(price), token.symbol)

    out = EventColumns.from_events(events).write_parquet(OUT_ROOT / "bayc.parquet")
    if out is None:
        return
    table = pq.read_table(out)
    print(table.num_rows)
    print(table.column_names)
    print(table.slice(0, 1).to_pylist())


asyncio.run(main())
