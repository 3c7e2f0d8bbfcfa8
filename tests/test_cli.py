import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from seastream.cli import cli


@pytest.fixture
def ndjson(make_doc, tmp_path: Path) -> Path:
    path = tmp_path / "capture.ndjson"
    lines = [
        json.dumps(make_doc("item_listed")),
        "",
        '{"sent_at": "2023-03-14T15:09:27+00:00", "event_type": "item_sold"}',
        json.dumps(make_doc("item_sold")),
    ]
    path.write_text("\n".join(lines) + "\n")
    return path


def test_decode_summary(ndjson: Path):
    result = CliRunner().invoke(cli, ["decode", str(ndjson)])
    assert result.exit_code == 0, result.output
    assert "decoded=2" in result.output
    assert "failed=1" in result.output
    assert "messages=3" in result.output


def test_decode_reencode(ndjson: Path, make_doc):
    result = CliRunner().invoke(cli, ["decode", str(ndjson), "--reencode", "--event", "item_sold"])
    assert result.exit_code == 0, result.output
    docs = [json.loads(line) for line in result.output.splitlines() if line.startswith("{")]
    assert docs == [make_doc("item_sold")]
    assert "filtered=1" in result.output


def test_decode_strict(ndjson: Path):
    result = CliRunner().invoke(cli, ["decode", str(ndjson), "--strict"])
    assert result.exit_code == 1
    assert "message 2" in result.output


def test_decode_parquet_out(ndjson: Path, tmp_path: Path):
    out = tmp_path / "events.parquet"
    result = CliRunner().invoke(cli, ["decode", str(ndjson), "--parquet-out", str(out)])
    assert result.exit_code == 0, result.output
    assert out.is_file()


def test_topic():
    result = CliRunner().invoke(cli, ["topic", "doodles-official", "*"])
    assert result.exit_code == 0
    assert result.output.splitlines() == ["collection:doodles-official", "collection:*"]


def test_endpoint():
    runner = CliRunner()
    result = runner.invoke(cli, ["endpoint", "--api-key", "abc"])
    assert result.output.strip() == "wss://stream.openseabeta.com/socket/websocket?token=abc"

    result = runner.invoke(cli, ["endpoint", "--network", "testnet"], env={"OPENSEA_API_KEY": "xyz"})
    assert result.exit_code == 0
    assert result.output.strip() == "wss://testnets-stream.openseabeta.com/socket/websocket?token=xyz"
