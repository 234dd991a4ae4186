"""Meilies developer CLI.

Decodes requests the same way the server does, without a server.

Usage:
    meilies parse PUBLISH orders hello        # Show the decoded command
    meilies parse subscribe orders:42 -f json # JSON output
    meilies parse --hex 7075626c697368 6f ff  # Hex-encoded arguments
    meilies encode SUBSCRIBE orders           # RESP bytes of the request
    meilies config                            # Show configuration

Environment:
    MEILIES_LOG_LEVEL, MEILIES_OUTPUT_FORMAT (see meilies.config)
"""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import asdict, replace

import click

from .config import FORMAT_JSON, OUTPUT_FORMATS, Settings
from .protocol import (
    Array,
    Command,
    CommandError,
    DecodeError,
    PublishCommand,
    decode_request,
    encode_value,
)
from .protocol.display import format_payload, truncate

logger = logging.getLogger(__name__)

PREVIEW_BYTES = 64


def _to_bytes(args: tuple[str, ...], hex_args: bool) -> list[bytes]:
    if not hex_args:
        # Arguments that were not UTF-8 on the command line arrive surrogate-escaped
        return [arg.encode("utf-8", "surrogateescape") for arg in args]
    try:
        return [bytes.fromhex(arg) for arg in args]
    except ValueError as e:
        raise click.BadParameter(f"not a hex string: {e}", param_hint="ARGS") from e


def _print_command(command: Command, output_format: str) -> None:
    if output_format == FORMAT_JSON:
        click.echo(command.model_dump_json(by_alias=True, indent=2))
        return

    click.echo(f"{'Command:':<10}{command.cmd.value}")
    click.echo(f"{'Stream:':<10}{command.stream}")
    if isinstance(command, PublishCommand):
        click.echo(f"{'Event:':<10}{truncate(format_payload(command.event, limit=PREVIEW_BYTES))}")
        click.echo(f"{'Size:':<10}{len(command.event)} bytes")
    else:
        click.echo(f"{'From:':<10}{'tail' if command.from_tail else command.from_}")


@click.group()
@click.option("--log-level", default=None, help="Log level (overrides MEILIES_LOG_LEVEL)")
@click.pass_context
def main(ctx: click.Context, log_level: str | None) -> None:
    """Meilies - decode event stream requests."""
    try:
        settings = Settings.from_env()
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    if log_level:
        settings = replace(settings, log_level=log_level.upper())

    logging.basicConfig(
        level=settings.log_level_value,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,  # Logs go to stderr, output to stdout
    )
    ctx.obj = settings


@main.command("parse")
@click.argument("args", nargs=-1)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default=None,
    help="Output format (default: MEILIES_OUTPUT_FORMAT or table)",
)
@click.option("--hex", "hex_args", is_flag=True, help="Arguments are hex-encoded bytes")
@click.pass_obj
def parse(settings: Settings, args: tuple[str, ...], output_format: str | None, hex_args: bool) -> None:
    """Decode ARGS as one request and show the command.

    Exits with status 1 and prints the error reply if the request is invalid.

    Examples:

        meilies parse PUBLISH orders hello

        meilies parse subscribe orders:42 --format json
    """
    value = Array.of_bulk(*_to_bytes(args, hex_args))

    try:
        command = decode_request(value)
    except (DecodeError, CommandError) as e:
        logger.debug(f"Request rejected: {type(e).__name__}")
        click.echo(e.to_reply().value, err=True)
        sys.exit(1)

    _print_command(command, output_format or settings.output_format)


@main.command("encode")
@click.argument("args", nargs=-1, required=True)
@click.option("--hex", "hex_args", is_flag=True, help="Arguments are hex-encoded bytes")
@click.option("--raw", is_flag=True, help="Write the raw bytes instead of an escaped form")
def encode(args: tuple[str, ...], hex_args: bool, raw: bool) -> None:
    """Show the RESP encoding of ARGS sent as one request.

    Examples:

        meilies encode SUBSCRIBE orders:42

        meilies encode --raw PUBLISH orders hello | nc localhost 6480
    """
    data = encode_value(Array.of_bulk(*_to_bytes(args, hex_args)))
    if raw:
        click.get_binary_stream("stdout").write(data)
        return
    click.echo(repr(data)[2:-1])


@main.command("config")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def show_config(settings: Settings, output_json: bool) -> None:
    """Show current configuration."""
    if output_json:
        click.echo(json.dumps(asdict(settings), indent=2))
        return

    click.echo("Meilies Configuration")
    click.echo("-" * 40)
    click.echo(f"Log level:        {settings.log_level}")
    click.echo(f"Output format:    {settings.output_format}")


if __name__ == "__main__":
    main()
