"""Typer CLI for the jetton_meta application."""
from __future__ import annotations

import asyncio
from functools import partial
import logging
from pathlib import Path
from typing import Awaitable, Callable, Optional

import typer
from pytoniq_core import Address

from . import utils
from .chain.client import LiteChainAPI
from .config import AppSettings, load_settings
from .errors import AddressDecodeError, ChainQueryError, DecimalsParseError
from .master import get_master_by_wallet, get_master_data
from .meta.cache import ContentCache
from .providers.offchain import fetch_offchain_content
from .reporting import console as console_report
from .resolver import ContentResolver
from .types import MasterData

app = typer.Typer(help="Jetton master data lookup")

Lookup = Callable[..., Awaitable[MasterData]]


def _configure_logging(settings: AppSettings, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level, logging.WARNING)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _build_resolver(settings: AppSettings, cache: ContentCache) -> ContentResolver:
    fetch = partial(fetch_offchain_content, timeout=settings.http_timeout, ipfs_gateway=settings.ipfs_gateway)
    return ContentResolver(cache, fetch, ttl=settings.content_ttl)


async def _lookup(settings: AppSettings, lookup: Lookup, address: Address) -> MasterData:
    with ContentCache(settings.cache_default_ttl, settings.cache_cleanup_interval) as cache:
        resolver = _build_resolver(settings, cache)
        async with LiteChainAPI.from_settings(settings) as api:
            return await lookup(api, address, resolver=resolver)


def _run(lookup: Lookup, address: str, config: Optional[Path], verbose: bool) -> None:
    settings = load_settings(config)
    _configure_logging(settings, verbose)
    try:
        parsed = utils.parse_address(address)
    except Exception as exc:
        raise typer.BadParameter(f"Invalid address {address!r}: {exc}") from exc
    try:
        data = asyncio.run(_lookup(settings, lookup, parsed))
    except DecimalsParseError as exc:
        console_report.render_master_data(exc.master_data, warning=str(exc))
        raise typer.Exit(code=1)
    except (ChainQueryError, AddressDecodeError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2)
    console_report.render_master_data(data)


@app.command()
def master(
    address: str = typer.Argument(..., help="Jetton master address"),
    config: Optional[Path] = typer.Option(None, "--config", help="Config YAML"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Show master data for a jetton master contract."""

    _run(get_master_data, address, config, verbose)


@app.command()
def wallet(
    address: str = typer.Argument(..., help="Jetton wallet address"),
    config: Optional[Path] = typer.Option(None, "--config", help="Config YAML"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Resolve the master of a jetton wallet and show its master data."""

    _run(get_master_by_wallet, address, config, verbose)
