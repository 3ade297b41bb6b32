"""notifs CLI - sign and verify webhook payloads."""

import sys
from typing import BinaryIO

import click
from rich.console import Console

from notifs.common.errors import ConfigurationError, ErrorCode
from notifs.common.logging import setup_logging
from notifs.common.settings import Settings
from notifs.signature import SIGNATURE_HEADER, generate_signature, verify_signature
from notifs.webhook import generate_secret

console = Console()


def _resolve_secret(secret: str | None, settings: Settings) -> str:
    if secret:
        return secret
    try:
        return settings.require_webhook_secret()
    except ConfigurationError as exc:
        console.print(f"[red]Error ({exc.code}): {exc.message}[/red]")
        sys.exit(1)


@click.group()
@click.option("--log-level", default=None, help="Log level (DEBUG, INFO, ...)")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """notifs CLI - Sign and verify webhook payloads."""
    setup_logging(level=log_level)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = Settings()


@cli.command("sign")
@click.argument("payload", type=click.File("rb"), default="-")
@click.option("--secret", "-s", help="Webhook secret (default: NOTIFS_WEBHOOK_SECRET)")
@click.option("--timestamp", "-t", type=click.IntRange(min=0), help="Signing time (default: now)")
@click.pass_context
def sign_cmd(ctx: click.Context, payload: BinaryIO, secret: str | None, timestamp: int | None) -> None:
    """Sign a payload file (or stdin) and print the header value."""
    secret = _resolve_secret(secret, ctx.obj["settings"])
    body = payload.read()

    signature = generate_signature(body, secret, timestamp)
    click.echo(signature)


@cli.command("verify")
@click.argument("payload", type=click.File("rb"), default="-")
@click.option("--signature", "-S", required=True, help=f"Value of the {SIGNATURE_HEADER} header")
@click.option("--secret", "-s", help="Webhook secret (default: NOTIFS_WEBHOOK_SECRET)")
@click.option(
    "--tolerance",
    type=click.IntRange(min=0),
    default=None,
    help="Allowed clock distance in seconds (default: NOTIFS_SIGNATURE_TOLERANCE_SECONDS)",
)
@click.pass_context
def verify_cmd(
    ctx: click.Context,
    payload: BinaryIO,
    signature: str,
    secret: str | None,
    tolerance: int | None,
) -> None:
    """Verify a payload file (or stdin) against a signature."""
    settings: Settings = ctx.obj["settings"]
    secret = _resolve_secret(secret, settings)
    if tolerance is None:
        tolerance = settings.signature_tolerance_seconds

    if verify_signature(payload.read(), signature, secret, tolerance):
        console.print("[green]✓ Signature is valid[/green]")
    else:
        console.print(f"[red]✗ Signature is invalid ({ErrorCode.INVALID_SIGNATURE})[/red]")
        sys.exit(1)


@cli.command("generate-secret")
@click.option("--bytes", "nbytes", default=32, type=click.IntRange(min=16), help="Random bytes")
def generate_secret_cmd(nbytes: int) -> None:
    """Generate a new webhook secret."""
    click.echo(generate_secret(nbytes))


def main() -> None:
    """CLI entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
