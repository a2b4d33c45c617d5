"""Console output helpers shared by the management commands."""

from collections.abc import Mapping
from typing import Any

import click

_STYLES = {
    "success": ("✓", "green"),
    "error": ("✗", "red"),
    "warning": ("⚠", "yellow"),
    "info": ("ℹ", "blue"),
}


def _emit(kind: str, message: str) -> None:
    symbol, color = _STYLES[kind]
    click.secho(f"{symbol} {message}", fg=color, err=kind == "error")


def success(message: str) -> None:
    _emit("success", message)


def error(message: str) -> None:
    _emit("error", message)


def warning(message: str) -> None:
    _emit("warning", message)


def info(message: str) -> None:
    _emit("info", message)


def details(rows: Mapping[str, Any]) -> None:
    """Print aligned ``key: value`` lines, e.g. the resolved database settings."""
    if not rows:
        return
    width = max(len(key) for key in rows)
    for key, value in rows.items():
        click.echo(f"  {click.style(key.ljust(width), bold=True)}  {value}")
