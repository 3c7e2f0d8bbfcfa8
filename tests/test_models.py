from decimal import Decimal

import pytest

from seastream.core.errors import DecodeError, MalformedEnvelope
from seastream.core.models import U256_MAX, Address, Chain, Hash32, NftId, PaymentToken
from seastream.decoding.decoder import decode_event

VITALIK = "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"


def test_address_forms() -> None:
    addr = Address.from_hex(VITALIK.lower())
    assert addr == Address.from_hex(VITALIK.upper().replace("0X", "0x"))
    assert addr == Address.from_hex(VITALIK[2:])
    assert addr.hex == VITALIK.lower()
    assert addr.checksum == VITALIK
    assert str(addr) == addr.hex
    assert len(addr.raw) == 20


@pytest.mark.parametrize("text", ["", "0x", "0x1234", "0x" + "zz" * 20, "0x" + "ab" * 21])
def test_address_rejects(text: str) -> None:
    with pytest.raises(ValueError):
        Address.from_hex(text)


def test_hash32_size() -> None:
    assert len(Hash32.from_hex("0x" + "00" * 32).raw) == 32
    with pytest.raises(ValueError):
        Hash32(b"\x00" * 20)


def test_nft_id_bounds() -> None:
    addr = Address.from_hex(VITALIK)
    assert NftId(Chain.ETHEREUM, addr, U256_MAX).token_id == U256_MAX
    with pytest.raises(ValueError):
        NftId(Chain.ETHEREUM, addr, U256_MAX + 1)
    with pytest.raises(ValueError):
        NftId(Chain.ETHEREUM, addr, -1)


def test_chain_testnets() -> None:
    assert {c for c in Chain if c.is_testnet} == {Chain.RINKEBY, Chain.MUMBAI, Chain.BAOBAB}
    assert Chain("matic") is Chain.POLYGON


def test_payment_token_scale() -> None:
    token = PaymentToken(
        address=Address.from_hex("0x" + "00" * 20),
        decimals=18,
        eth_price=1.0,
        usd_price=1712.21,
        name="Ether",
        symbol="ETH",
    )
    assert token.scale(10**18) == Decimal(1)
    assert token.scale(1_500_000_000_000_000_000) == Decimal("1.5")


def test_decode_error_path() -> None:
    exc = MalformedEnvelope("bad", field="address")
    assert exc.at("maker").at("payload") is exc
    assert exc.field == "payload.maker.address"
    assert str(exc) == "payload.maker.address: bad"
    assert isinstance(exc, DecodeError)
    assert isinstance(exc, ValueError)
    assert str(DecodeError("plain")) == "plain"


def test_metadata_updated_hashability(make_doc) -> None:
    listed = decode_event(make_doc("item_listed")).payload
    assert hash(listed) == hash(decode_event(make_doc("item_listed")).payload)

    updated = decode_event(make_doc("item_metadata_updated")).payload
    assert updated == decode_event(make_doc("item_metadata_updated")).payload
    # raw trait dicts keep the record unhashable
    with pytest.raises(TypeError):
        hash(updated)
