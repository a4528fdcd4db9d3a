"""Console rendering helpers using rich."""
from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table

from .. import utils
from ..types import MasterData


def render_master_data(data: MasterData, *, console: Optional[Console] = None, warning: Optional[str] = None) -> None:
    console = console or Console()
    table = Table(title="Jetton Master Data", show_header=False, show_lines=False)
    table.add_column("Field", style="bold")
    table.add_column("Value", overflow="fold")
    table.add_row("Address", utils.friendly_address(data.address))
    table.add_row("Content", data.content_type or "unknown")
    table.add_row("Name", data.name)
    table.add_row("Symbol", data.symbol)
    table.add_row("Description", data.description)
    table.add_row("Image", data.image)
    table.add_row("Decimals", str(data.decimals))
    console.print(table)
    if data.resolution == "partial":
        console.print("[yellow]Off-chain content could not be fetched; some fields are empty.[/yellow]")
    elif data.resolution == "unrecognized":
        console.print("[yellow]Unrecognized content layout.[/yellow]")
    if warning:
        console.print(f"[yellow]{warning}[/yellow]")
