import asyncio
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import IO

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from seastream.clients.replay import ReplaySource
from seastream.core.config import ConsumerConfig
from seastream.core.errors import DecodeError
from seastream.core.models import EventType, StreamEvent
from seastream.core.use_cases.consume import ConsumeStats, StreamConsumer
from seastream.decoding.encoder import encode_message
from seastream.protocol import Collection, Network, endpoint_url
from seastream.storage.table import EventColumns

console = Console()

_EVENT_CHOICES = [e.value for e in EventType]


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
def cli(verbose: bool) -> None:
    """seastream: OpenSea Stream event schema codec."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _summary_table(stats: ConsumeStats) -> Table:
    table = Table(title="decoded events")
    table.add_column("event_type")
    table.add_column("count", justify="right")
    for tag in _EVENT_CHOICES:
        if tag in stats.per_event:
            table.add_row(tag, str(stats.per_event[tag]))
    return table


@cli.command("decode")
@click.argument("source", type=click.File("r"))
@click.option(
    "--event",
    "events",
    multiple=True,
    type=click.Choice(_EVENT_CHOICES),
    help="Keep only this event type; repeat to OR",
)
@click.option("--collection", "collections", multiple=True, help="Keep only this collection slug; repeat to OR")
@click.option(
    "--strict/--no-strict",
    default=False,
    show_default=True,
    help="Abort on the first malformed line instead of logging and skipping it",
)
@click.option("--reencode", is_flag=True, help="Print each decoded event as canonical JSON")
@click.option(
    "--parquet-out",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write decoded events to this Parquet file",
)
def decode_cmd(
    source: IO[str],
    events: tuple[str, ...],
    collections: tuple[str, ...],
    strict: bool,
    reencode: bool,
    parquet_out: Path | None,
) -> None:
    """Decode an NDJSON file of stream messages (one event per line, '-' for stdin)."""
    config = ConsumerConfig(
        event_types=tuple(EventType(e) for e in events),
        collections=collections,
        on_error="raise" if strict else "skip",
    )
    consumer = StreamConsumer(ReplaySource(source), config=config)

    async def run() -> list[StreamEvent]:
        return await consumer.collect()

    try:
        decoded = asyncio.run(run())
    except DecodeError as e:
        raise click.ClickException(f"message {consumer.stats.received}: {e}") from e

    if reencode:
        for event in decoded:
            click.echo(encode_message(event))

    if parquet_out is not None:
        written = EventColumns.from_events(decoded).write_parquet(parquet_out)
        if written is None:
            console.print("[yellow]no events to write[/]")

    stats = consumer.stats
    console.print(_summary_table(stats))
    console.print(
        f"[bold]summary[/]: "
        f"[green]decoded[/]={stats.decoded}  "
        f"[red]failed[/]={stats.failed}  "
        f"[yellow]filtered[/]={stats.filtered}  "
        f"(messages={stats.received})"
    )


@cli.command("topic")
@click.argument("slugs", nargs=-1, required=True)
def topic_cmd(slugs: Iterable[str]) -> None:
    """Print the subscription topic for each SLUG ('*' for every collection)."""
    for slug in slugs:
        click.echo(Collection(slug).topic)


@cli.command("endpoint")
@click.option(
    "--network",
    type=click.Choice([n.name.lower() for n in Network]),
    default="mainnet",
    show_default=True,
)
@click.option("--api-key", envvar="OPENSEA_API_KEY", required=True, help="OpenSea API key")
def endpoint_cmd(network: str, api_key: str) -> None:
    """Print the websocket URL to connect to."""
    click.echo(endpoint_url(Network[network.upper()], api_key))


if __name__ == "__main__":
    cli()
