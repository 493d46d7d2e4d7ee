"""Typer-based command line interface for DKIM-Signature values."""
from __future__ import annotations

import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import typer

from ..config import AppConfig, dump_default_config, load_config
from ..exceptions import SignatureSyntaxError
from ..logging import configure_logging
from ..models import Signature
from ..parser import parse
from ..serializer import epoch_seconds

app = typer.Typer(help="Parse and re-render DKIM-Signature header values")


@app.callback()
def main(ctx: typer.Context, config: Optional[Path] = typer.Option(None, "--config", metavar="PATH")) -> None:
    ctx.obj = load_config(config)
    configure_logging(ctx.obj.logging.normalized_level())


def _read_input(source: str) -> bytes:
    if source == "-":
        return sys.stdin.buffer.read()
    path = Path(source)
    if not path.is_file():
        typer.echo(f"No such file: {source}", err=True)
        raise typer.Exit(code=2)
    return path.read_bytes()


def _parse_or_exit(ctx: typer.Context, source: str) -> Signature:
    config: AppConfig = ctx.obj
    try:
        return parse(_read_input(source), charset=config.parser.charset)
    except SignatureSyntaxError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc


def _instant(value: Optional[datetime]) -> Optional[Dict[str, Any]]:
    if value is None:
        return None
    return {"iso": value.isoformat(), "epoch": epoch_seconds(value)}


def signature_to_dict(signature: Signature) -> Dict[str, Any]:
    return {
        "version": signature.version,
        "algorithm": signature.algorithm,
        "domain": signature.domain,
        "selector": signature.selector,
        "identifier": signature.identifier,
        "query_methods": list(signature.query_methods),
        "canonicalization": list(signature.canonicalization),
        "headers": signature.headers,
        "copied_headers": signature.copied_headers,
        "created_at": _instant(signature.created_at),
        "expires_at": _instant(signature.expires_at),
        "body_length": signature.body_length,
        "body_hash": signature.body_hash,
        "data": signature.data,
        "unknown_tags": dict(signature.unknown_tags),
    }


@app.command("parse")
def parse_command(
    ctx: typer.Context,
    source: str = typer.Argument(..., help="File holding the header value, or '-' for stdin"),
) -> None:
    signature = _parse_or_exit(ctx, source)
    typer.echo(json.dumps(signature_to_dict(signature), indent=2))


@app.command("format")
def format_command(
    ctx: typer.Context,
    source: str = typer.Argument(..., help="File holding the header value, or '-' for stdin"),
) -> None:
    signature = _parse_or_exit(ctx, source)
    typer.echo(signature.to_string())


@app.command("config-init")
def config_init(target: Path = typer.Argument(..., help="Where to write the default configuration")) -> None:
    dump_default_config(target)
    typer.echo(f"Default configuration written to {target}")


@app.command()
def version() -> None:
    from ..version import __version__

    typer.echo(__version__)


if __name__ == "__main__":  # pragma: no cover
    app()
