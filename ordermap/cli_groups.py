"""Command groups for the ordermap CLI.

  ordermap order   — map and convert order documents
  ordermap person  — map person documents
  ordermap config  — configuration management
"""

from __future__ import annotations

import typer

# ── Order group ─────────────────────────────────────────────
order_grp = typer.Typer(
    help="📦 Orders — map order JSON to objects and re-emit it.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# ── Person group ────────────────────────────────────────────
person_grp = typer.Typer(
    help="👤 Persons — tree and token-stream person mapping.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# ── Configuration group ─────────────────────────────────────
config_grp = typer.Typer(
    help="⚙️  Configuration — mapping policy and output options.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
