"""Terminal styling for resorter-admin command output.

Headers and labels are cyan bold, outcomes carry a green ✓ or red ✗,
warnings are yellow and secondary notes are dimmed.
"""

from __future__ import annotations

__all__ = [
    "style_dim",
    "style_error",
    "style_header",
    "style_label",
    "style_success",
    "style_warning",
]

import click

SUCCESS_MARK = "✓"
ERROR_MARK = "✗"


def style_header(title: str) -> str:
    """``--- Session ---`` banner opening a block of ``config show`` output."""
    return click.style(f"--- {title} ---", fg="cyan", bold=True)


def style_label(label: str) -> str:
    """Key of a ``Key: value`` line, e.g. ``style_label("Listening") + " 127.0.0.1:5000"``."""
    return click.style(label + ":", fg="cyan", bold=True)


def style_success(message: str) -> str:
    return click.style(f"{SUCCESS_MARK} {message}", fg="green")


def style_error(message: str) -> str:
    return click.style(f"{ERROR_MARK} {message}", fg="red")


def style_warning(message: str) -> str:
    """Yellow ``Warning:`` line; check-login uses it for an unreachable provider."""
    return click.style("Warning: " + message, fg="yellow", bold=True)


def style_dim(message: str) -> str:
    return click.style(message, dim=True)
