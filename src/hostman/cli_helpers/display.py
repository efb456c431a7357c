#!/usr/bin/env python3
"""
Display helper functions for the Hostman CLI
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table as RichTable

from ..table import Table

console = Console()


def display_table(table: Table, title: str = "Managed Hosts", self_host: Optional[str] = None) -> None:
    """Pretty-print the managed alias → IP entries."""
    rich_table = RichTable(title=title, header_style="bold magenta")
    rich_table.add_column("Alias", style="cyan", no_wrap=True)
    rich_table.add_column("IP", style="green")

    for alias, ip in table.entries():
        label = f"{alias} (this host)" if alias == self_host else alias
        rich_table.add_row(label, ip)

    if not len(table):
        rich_table.add_row("[dim]-[/dim]", "[dim]no entries[/dim]")

    console.print(rich_table)


def display_success(message: str):
    """Display success message"""
    console.print(f"[green]✅ {message}[/green]")


def display_warning(message: str):
    """Display warning message"""
    console.print(f"[yellow]⚠️  {message}[/yellow]")


def display_error(message: str):
    """Display error message"""
    console.print(f"[red]❌ {escape(message)}[/red]")


def display_info(message: str):
    """Display info message"""
    console.print(f"[blue]ℹ️  {message}[/blue]")
