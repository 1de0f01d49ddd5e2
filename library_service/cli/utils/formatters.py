"""Terminal output for CLI commands."""

from __future__ import annotations

import click


def _emit(symbol: str, message: str, color: str, *, err: bool = False) -> None:
    click.secho(f"{symbol} {message}", fg=color, err=err)


def success(message: str) -> None:
    _emit("✓", message, "green")


def error(message: str) -> None:
    _emit("✗", message, "red", err=True)


def warning(message: str) -> None:
    _emit("!", message, "yellow")


def info(message: str) -> None:
    _emit("·", message, "blue")


def header(message: str) -> None:
    click.secho(f"\n{message}\n{'-' * len(message)}", fg="cyan", bold=True)


def store_line(name: str, healthy: bool, detail: str) -> None:
    """One row of ``db status``: store name, reachability and detail."""
    if healthy:
        success(f"{name}: {detail}")
    else:
        warning(f"{name}: unreachable ({detail})")
