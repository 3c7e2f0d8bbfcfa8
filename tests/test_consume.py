import json
import logging

import pytest

from seastream.clients.replay import ReplaySource
from seastream.core.config import ConsumerConfig
from seastream.core.errors import MalformedEnvelope
from seastream.core.interfaces import IFrameSource
from seastream.core.models import EventType
from seastream.core.use_cases.consume import StreamConsumer


@pytest.fixture
def frames(make_doc) -> list[str]:
    return [
        json.dumps(make_doc("item_listed")),
        "{not json",
        json.dumps(make_doc("item_sold", slug="boredapeyachtclub")),
        json.dumps(make_doc("item_transferred")),
    ]


def test_replay_source_is_frame_source():
    assert isinstance(ReplaySource([]), IFrameSource)


@pytest.mark.asyncio
async def test_replay_source_skips_blank_lines():
    source = ReplaySource(["a\n", "\n", "   ", b"b\n"])
    assert [f async for f in source.frames()] == ["a", b"b"]


@pytest.mark.asyncio
async def test_consumer_skips_malformed(frames: list[str], caplog: pytest.LogCaptureFixture) -> None:
    consumer = StreamConsumer(ReplaySource(frames))

    with caplog.at_level(logging.WARNING):
        events = await consumer.collect()

    assert [e.event_type for e in events] == [
        EventType.ITEM_LISTED,
        EventType.ITEM_SOLD,
        EventType.ITEM_TRANSFERRED,
    ]
    assert consumer.stats.received == 4
    assert consumer.stats.decoded == 3
    assert consumer.stats.failed == 1
    assert consumer.stats.per_event == {"item_listed": 1, "item_sold": 1, "item_transferred": 1}
    assert "dropping malformed frame #2" in caplog.text


@pytest.mark.asyncio
async def test_consumer_raise_policy(frames: list[str]) -> None:
    consumer = StreamConsumer(ReplaySource(frames), config=ConsumerConfig(on_error="raise"))

    with pytest.raises(MalformedEnvelope):
        await consumer.collect()
    assert consumer.stats.received == 2
    assert consumer.stats.decoded == 1


@pytest.mark.asyncio
async def test_consumer_event_filter(frames: list[str]) -> None:
    config = ConsumerConfig(event_types=(EventType.ITEM_SOLD, EventType.ITEM_TRANSFERRED))
    consumer = StreamConsumer(ReplaySource(frames), config=config)

    events = await consumer.collect()

    assert [e.event_type for e in events] == [EventType.ITEM_SOLD, EventType.ITEM_TRANSFERRED]
    assert consumer.stats.filtered == 1


@pytest.mark.asyncio
async def test_consumer_collection_filter(frames: list[str]) -> None:
    config = ConsumerConfig(collections=("boredapeyachtclub",))
    consumer = StreamConsumer(ReplaySource(frames), config=config)

    events = [e async for e in consumer.events()]

    assert len(events) == 1
    assert events[0].context.collection.slug == "boredapeyachtclub"
    assert consumer.stats.filtered == 2
    assert consumer.stats.failed == 1


@pytest.mark.asyncio
async def test_consumer_skips_unrepresentable_price(make_doc) -> None:
    bad = make_doc("item_listed")
    bad["payload"]["payment_token"]["usd_price"] = 10**400
    frames = [json.dumps(bad), json.dumps(make_doc("item_sold"))]
    consumer = StreamConsumer(ReplaySource(frames))

    events = await consumer.collect()

    assert [e.event_type for e in events] == [EventType.ITEM_SOLD]
    assert consumer.stats.failed == 1
