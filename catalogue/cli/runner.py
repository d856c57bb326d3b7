# catalogue/cli/runner.py

"""Headless CLI for browsing the catalogue."""

import json
import logging
import sys

from rich.console import Console
from rich.table import Table

from catalogue.models.product import ProductRecord
from catalogue.models.product_collection import ProductCollection
from catalogue.services.catalogue_session import (
    NO_CONNECTION,
    CatalogueSession,
)

logger = logging.getLogger("catalogue.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def _report_error(error: str | None, error_kind: str | None) -> None:
    """Print a failed load the way a screen would present it."""
    if error_kind == NO_CONNECTION:
        _err.print(f"[red]No connection: {error}[/red]")
        _err.print("[dim]Check the network and run the command again.[/dim]")
    else:
        _err.print(f"[red]{error or 'Could not load products.'}[/red]")


def _print_list_table(products: ProductCollection) -> None:
    """Render the product list as a Rich table."""
    table = Table(
        title="Products",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("ID", style="bold")
    table.add_column("Title", max_width=50)
    table.add_column("Price", justify="right", style="green")
    table.add_column("Size", justify="center")
    table.add_column("Tag", style="magenta")

    for idx, p in enumerate(products, 1):
        table.add_row(
            str(idx),
            p.id or "—",
            p.title or "—",
            p.price or "N/A",
            p.size or "—",
            p.tag or "—",
        )

    Console().print(table)


def _print_detail_table(product: ProductRecord) -> None:
    """Render every field of one product."""
    table = Table(
        title=f"Product {product.id}",
        show_header=False,
        title_style="bold cyan",
    )
    table.add_column("Field", style="bold")
    table.add_column("Value", overflow="fold")
    for wire_name, value in product.to_wire().items():
        table.add_row(wire_name, value if value is not None else "—")
    Console().print(table)


def _dump_json(payload: object) -> None:
    json.dump(payload, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")


async def cli_list(output_format: str) -> int:
    """Fetch the product list and print it (0=ok, 1=fail)."""
    session = CatalogueSession()
    state = await session.load_list()
    if state.products is None:
        _report_error(state.error, state.error_kind)
        return 1

    _err.print(f"[green]✓ {state.products.size} products[/green]")
    if output_format == "table":
        _print_list_table(state.products)
    else:
        _dump_json([p.to_wire() for p in state.products])
    return 0


async def cli_show(product_id: str, output_format: str) -> int:
    """Fetch one product's list entry and details, then print it."""
    session = CatalogueSession()
    list_state = await session.load_list()
    if list_state.products is None:
        # The detail endpoint alone still yields a usable record
        logger.warning(
            "List unavailable (%s), fetching %s details only",
            list_state.error,
            product_id,
        )

    state = await session.load_detail(product_id)
    if state.product is None:
        _report_error(state.error, state.error_kind)
        return 1
    if state.error:
        _report_error(state.error, state.error_kind)

    missing = session.missing_for(product_id) or frozenset()
    if missing:
        _err.print(
            f"[yellow]Still missing: {', '.join(sorted(missing))}[/yellow]"
        )
    if output_format == "table":
        _print_detail_table(state.product)
    else:
        _dump_json(state.product.to_wire())
    return 0 if state.error is None else 1


async def run_health_check() -> int:
    """Probe both catalogue endpoints and print a status table."""
    from catalogue.services.health_checker import HealthChecker

    _err.print("[bold]Running catalogue health check...[/bold]")
    checker = HealthChecker()
    results = await checker.check_all()

    table = Table(
        title="Catalogue Health Check",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Endpoint", style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Latency", justify="right")
    table.add_column("Notes", style="dim")

    any_down = False
    for r in results:
        if r.status == "ok":
            status = "[green]OK[/green]"
        elif r.status == "slow":
            status = "[yellow]SLOW[/yellow]"
        else:
            status = "[red]DOWN[/red]"
            any_down = True

        latency = f"{r.latency_ms:.0f}ms" if r.latency_ms > 0 else "—"
        table.add_row(r.endpoint, status, latency, r.message)

    Console().print(table)
    return 1 if any_down else 0
