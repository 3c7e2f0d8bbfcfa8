import copy
from typing import Any

import pytest

CONTRACT = "0x" + "ab" * 20
MAKER = "0x" + "1f" * 20
TAKER = "0x" + "34" * 20
TX_HASH = "0x" + "cd" * 32

SENT_AT = "2023-03-14T15:09:27.123456+00:00"
T0 = "2023-03-14T15:09:26+00:00"
T1 = "2023-03-21T15:09:26+00:00"

ETH = {
    "address": "0x0000000000000000000000000000000000000000",
    "decimals": 18,
    "eth_price": "1.0",
    "usd_price": "1712.21",
    "name": "Ether",
    "symbol": "ETH",
}

TRANSACTION = {"hash": TX_HASH, "timestamp": T0}

# Canonical payload bodies (context keys are added by `make_doc`).
PAYLOADS: dict[str, dict[str, Any]] = {
    "item_listed": {
        "event_timestamp": T0,
        "base_price": "1000000000000000000",
        "expiration_date": T1,
        "is_private": False,
        "listing_date": T0,
        "listing_type": "english",
        "maker": {"address": MAKER},
        "payment_token": ETH,
        "quantity": 1,
        "taker": None,
    },
    "item_sold": {
        "event_timestamp": T0,
        "closing_date": T0,
        "is_private": False,
        "listing_type": None,
        "maker": {"address": MAKER},
        "payment_token": ETH,
        "quantity": 1,
        "sale_price": "2500000000000000000",
        "taker": {"address": TAKER},
        "transaction": TRANSACTION,
    },
    "item_transferred": {
        "event_timestamp": T0,
        "transaction": TRANSACTION,
        "from_account": {"address": MAKER},
        "to_account": {"address": TAKER},
        "quantity": 1,
    },
    "item_metadata_updated": {
        "name": "Doodle #1234",
        "description": None,
        "image_preview_url": "https://i.seadn.io/preview/1234.png",
        "animation_url": None,
        "background_color": "ffffff",
        "metadata_url": "ipfs://QmPMc4tcBsMqLRuCQtPmPe84bpSjrC3Ky7t3JWuHXYB4aS/1234",
        "traits": [{"trait_type": "head", "value": "purple"}],
    },
    "item_cancelled": {
        "event_timestamp": T0,
        "listing_type": "dutch",
        "payment_token": ETH,
        "quantity": 1,
        "transaction": TRANSACTION,
    },
    "item_received_offer": {
        "event_timestamp": T0,
        "base_price": "500000000000000000",
        "created_date": T0,
        "expiration_date": T1,
        "maker": {"address": MAKER},
        "payment_token": ETH,
        "quantity": 1,
        "taker": {"address": TAKER},
    },
    "item_received_bid": {
        "event_timestamp": T0,
        "base_price": "750000000000000000",
        "created_date": T0,
        "expiration_date": T1,
        "maker": {"address": MAKER},
        "payment_token": ETH,
        "quantity": 1,
        "taker": None,
    },
}


def _context(slug: str, token_id: str) -> dict[str, Any]:
    return {
        "collection": {"slug": slug},
        "item": {
            "nft_id": f"ethereum/{CONTRACT}/{token_id}",
            "permalink": f"https://opensea.io/assets/ethereum/{CONTRACT}/{token_id}",
            "chain": {"name": "ethereum"},
            "metadata": {
                "name": f"Doodle #{token_id}",
                "description": None,
                "image_url": f"https://i.seadn.io/{token_id}.png",
                "animation_url": None,
                "metadata_url": f"ipfs://QmPMc4tcBsMqLRuCQtPmPe84bpSjrC3Ky7t3JWuHXYB4aS/{token_id}",
            },
        },
    }


@pytest.fixture
def make_doc():
    """Factory for canonical stream documents; keyword overrides replace payload keys."""

    def _make(
        event_type: str = "item_listed",
        *,
        slug: str = "doodles-official",
        token_id: str = "1234",
        sent_at: str = SENT_AT,
        **overrides: Any,
    ) -> dict[str, Any]:
        payload = {**_context(slug, token_id), **copy.deepcopy(PAYLOADS[event_type])}
        payload.update(overrides)
        return {"sent_at": sent_at, "event_type": event_type, "payload": payload}

    return _make


@pytest.fixture
def event_types() -> list[str]:
    return list(PAYLOADS)
