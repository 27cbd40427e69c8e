"""Typer-based CLI for ordermap."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from . import __version__, config, config_manager
from .cli_groups import config_grp, order_grp, person_grp
from .errors import MappingError
from .models import Order, Person
from .pipeline import run_pipeline
from .registry import CodecRegistry, default_registry
from .streaming import read_person_stream
from .tree import NodeKind, TreeNode, dumps, read_source

console = Console()

app = typer.Typer(
    help="🧾 ordermap — map order JSON to typed objects and back.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(order_grp, name="order")
app.add_typer(person_grp, name="person")
app.add_typer(config_grp, name="config")


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"ordermap v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
):
    """ordermap: custom JSON mapping for orders, customers and persons."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _fail(exc: MappingError) -> None:
    typer.echo(typer.style(f"❌ {exc}", fg=typer.colors.RED), err=True)
    raise typer.Exit(code=1)


def _load(path: Path) -> TreeNode:
    try:
        return TreeNode.load(path)
    except MappingError as exc:
        _fail(exc)


def _registry() -> CodecRegistry:
    return default_registry(config_manager.load_mapping_settings())


def _read_orders(registry: CodecRegistry, node: TreeNode) -> List[Order]:
    if node.kind is NodeKind.ARRAY:
        return registry.read_many("order", node)
    return [registry.read("order", node)]


def _write_output(text: str, output: Optional[Path]) -> None:
    if output is None:
        typer.echo(text)
        return
    output.write_text(text + "\n", encoding="utf-8")
    typer.echo(f"Wrote {output}")


# ── order ───────────────────────────────────────────────────

def _print_order(order: Order) -> None:
    summary = Table(title=f"Order {order.order_id}", show_header=False)
    summary.add_column("Field", style="cyan")
    summary.add_column("Value")
    customer = order.customer
    address = customer.shipping_address
    summary.add_row("Customer", f"{customer.full_name} ({customer.id})")
    summary.add_row("Email", customer.email)
    summary.add_row("Ship to", f"{address.street}, {address.zip_code} {address.city}, {address.country}")
    summary.add_row("Date", order.order_date.isoformat() if order.order_date else "-")
    summary.add_row("Total", f"{order.total_amount}")
    console.print(summary)

    items = Table(show_header=True)
    items.add_column("Product")
    items.add_column("Name")
    items.add_column("Qty", justify="right")
    items.add_column("Unit price", justify="right")
    for item in order.items:
        items.add_row(item.product_id, item.product_name, str(item.quantity), f"{item.unit_price}")
    console.print(items)


@order_grp.command("show")
def order_show(
    source: Path = typer.Argument(..., exists=True, dir_okay=False, help="Order JSON file (object or array)."),
):
    """Map an order document and print a summary."""
    node = _load(source)
    try:
        orders = _read_orders(_registry(), node)
    except MappingError as exc:
        _fail(exc)
    for order in orders:
        _print_order(order)


@order_grp.command("convert")
def order_convert(
    source: Path = typer.Argument(..., exists=True, dir_okay=False, help="Order JSON file (object or array)."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to this file instead of stdout."),
    indent: Optional[int] = typer.Option(None, "--indent", "-i", min=0, help="Indentation (default from config)."),
    exclude: Optional[List[str]] = typer.Option(None, "--exclude", "-x", help="Output key to drop (repeatable)."),
):
    """Re-emit an order document in the output naming scheme."""
    node = _load(source)
    registry = _registry()
    out_settings = config_manager.load_output_settings()
    try:
        orders = _read_orders(registry, node)
    except MappingError as exc:
        _fail(exc)
    tree = registry.write(orders if node.kind is NodeKind.ARRAY else orders[0])
    excluded = list(out_settings.exclude) + list(exclude or [])
    text = dumps(tree, indent=out_settings.indent if indent is None else indent, exclude=excluded)
    _write_output(text, output)


# ── person ──────────────────────────────────────────────────

def _print_person(person: Person) -> None:
    table = Table(title="Person", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("ID", "-" if person.person_id is None else str(person.person_id))
    table.add_row("Name", person.name or "-")
    table.add_row("Email", person.email or "-")
    table.add_row("Birth date", person.birth_date.isoformat() if person.birth_date else "-")
    table.add_row("Enabled", "unset" if person.enabled is None else str(person.enabled).lower())
    console.print(table)


@person_grp.command("show")
def person_show(
    source: Path = typer.Argument(..., exists=True, dir_okay=False, help="Person JSON file."),
    stream: bool = typer.Option(False, "--stream", "-s", help="Use the token-stream reader (flat objects only)."),
    as_json: bool = typer.Option(False, "--json", help="Print the mapped person as JSON."),
):
    """Map a person document."""
    registry = _registry()
    try:
        if stream:
            person = read_person_stream(read_source(source))
        else:
            person = registry.read("person", TreeNode.load(source))
    except MappingError as exc:
        _fail(exc)
    if as_json:
        typer.echo(dumps(registry.write(person), indent=config_manager.load_output_settings().indent))
    else:
        _print_person(person)


# ── pipeline ────────────────────────────────────────────────

@app.command("pipeline")
def pipeline(
    source: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON array of log entries."),
    only_type: Optional[str] = typer.Option(None, "--only-type", "-t", help="Keep only entries of this type."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to this file instead of stdout."),
):
    """Filter and enrich a JSON array of log entries."""
    try:
        text = run_pipeline(
            read_source(source),
            only_type=only_type,
            indent=config_manager.load_output_settings().indent,
        )
    except MappingError as exc:
        _fail(exc)
    _write_output(text, output)


# ── config ──────────────────────────────────────────────────

@config_grp.command("show")
def config_show():
    """Show the effective configuration."""
    cfg = config_manager.load_config()
    exists = config.CONFIG_FILE.exists()
    for section in ("mapping", "output"):
        typer.echo(typer.style(f"[{section}]", bold=True))
        for key, value in cfg[section].items():
            typer.echo(f"  {key:<24} {typer.style(str(value), fg=typer.colors.CYAN)}")
    source = str(config.CONFIG_FILE) if exists else f"{config.CONFIG_FILE} (not created, using defaults)"
    typer.echo(f"  Config    {typer.style(source, dim=True)}")


@config_grp.command("set")
def config_set(
    key: str = typer.Argument(..., help="Dotted key, e.g. mapping.require_items."),
    value: str = typer.Argument(..., help="New value (lists are comma separated)."),
):
    """Set a configuration value."""
    try:
        parsed = config_manager.set_value(key, value)
    except KeyError:
        valid = ", ".join(sorted(config_manager.SETTABLE_KEYS))
        raise typer.BadParameter(f"Unknown key '{key}'. Valid keys: {valid}")
    except ValueError as exc:
        raise typer.BadParameter(str(exc))
    typer.echo(f"✅ {key} = {parsed}")


@config_grp.command("reset")
def config_reset():
    """Delete the configuration file and return to defaults."""
    if config_manager.clear_config():
        typer.echo("Configuration reset to defaults.")
    else:
        typer.echo("No configuration file found. Nothing to reset.")


if __name__ == "__main__":
    app()
