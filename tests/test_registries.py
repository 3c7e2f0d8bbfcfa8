import pytest

from seastream.core.models import CollectionRef, EventType
from seastream.decoding.codecs import STRING
from seastream.decoding.registries import (
    ITEM_LISTED,
    ITEM_SOLD,
    STREAM_PAYLOADS,
    default_registry,
    make_stream_registry,
)
from seastream.decoding.registry import add_many, add_payload_spec, make_registry
from seastream.decoding.specs import (
    FieldSpec,
    PayloadSpec,
    RecordSpec,
    get_payload_registry_tags,
    get_payload_specs_tags,
)


def test_make_stream_registry():
    registry = make_stream_registry()
    assert len(registry) == 7
    assert set(registry.keys()) == {e.value for e in EventType}
    assert set(get_payload_registry_tags(registry)) == set(get_payload_specs_tags(STREAM_PAYLOADS))


def test_make_stream_registry_is_fresh():
    assert make_stream_registry() is not make_stream_registry()
    assert default_registry() is default_registry()


def test_add_payload_spec():
    registry = make_registry()
    add_payload_spec(registry, ITEM_SOLD)
    add_payload_spec(registry, ITEM_SOLD)  # same spec again is a no-op
    assert list(registry) == ["item_sold"]

    with pytest.raises(ValueError):
        add_payload_spec(registry, PayloadSpec(EventType.ITEM_SOLD, ITEM_SOLD.record))

    add_many(registry, [ITEM_LISTED])
    assert sorted(registry) == ["item_listed", "item_sold"]


def test_record_spec_must_cover_dataclass():
    with pytest.raises(ValueError):
        RecordSpec(CollectionRef, ())
    with pytest.raises(ValueError):
        RecordSpec(CollectionRef, (FieldSpec("slug", STRING), FieldSpec("name", STRING)))
    with pytest.raises(ValueError):
        RecordSpec(CollectionRef, (FieldSpec("slug", STRING), FieldSpec("slug", STRING)))


def test_payload_spec_tag_must_match_record():
    with pytest.raises(ValueError):
        PayloadSpec(EventType.ITEM_LISTED, ITEM_SOLD.record)


def test_wire_keys():
    keys = ITEM_LISTED.record.wire_keys()
    assert keys[:2] == ["collection", "item"]
    assert "base_price" in keys
    assert "context" not in keys
