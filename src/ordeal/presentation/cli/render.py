"""Shared CLI rendering helpers."""
from __future__ import annotations

import os
import textwrap
from typing import Iterable, Sequence

from ordeal.domain.metrics import PlayerMetrics
from ordeal.services.decision_preview import DecisionPreview

DEFAULT_WIDTH = 72


def debug_enabled() -> bool:
    """Return True only when ORDEAL_DEBUG is explicitly set to '1'."""
    return os.getenv("ORDEAL_DEBUG") == "1"


def wrap_text(text: str, width: int = DEFAULT_WIDTH, *, indent_continuation: bool = True) -> list[str]:
    """
    Wrap text on word boundaries.

    Bullet-prefixed lines ("- ...") keep the bullet on the first line and
    indent their continuation lines so the bullet stays visible.
    """
    if not text or width <= 0:
        return [text] if text else [""]
    subsequent_indent = "  " if indent_continuation else ""
    if text.startswith("- "):
        wrapped = textwrap.fill(
            text[2:],
            width=width - 2,
            subsequent_indent=subsequent_indent,
            break_long_words=False,
            break_on_hyphens=False,
        )
        lines = wrapped.split("\n")
        lines[0] = "- " + lines[0]
        if indent_continuation:
            lines[1:] = ["  " + line for line in lines[1:]]
        return lines
    wrapped = textwrap.fill(
        text,
        width=width,
        subsequent_indent=subsequent_indent,
        break_long_words=False,
        break_on_hyphens=False,
    )
    return wrapped.split("\n")


def render_heading(title: str) -> None:
    """Print a consistent section heading."""
    print(f"\n=== {title} ===")


def render_paragraph(text: str) -> None:
    for line in wrap_text(text, indent_continuation=False):
        print(line)


def render_menu(title: str, options: Sequence[str]) -> None:
    """Display a menu section with numbered options."""
    render_heading(title)
    for idx, label in enumerate(options, start=1):
        print(f"{idx}. {label}")


def render_bullet_lines(lines: Iterable[str]) -> None:
    """Print bullet-prefixed lines."""
    for line in lines:
        for wrapped in wrap_text(f"- {line}"):
            print(wrapped)


def _bar(value: float, maximum: float = 100.0, width: int = 20) -> str:
    filled = int(round(width * max(0.0, min(value, maximum)) / maximum))
    return "#" * filled + "." * (width - filled)


def format_metrics(metrics: PlayerMetrics) -> list[str]:
    """One line per metric the player can act on."""
    return [
        f"Energy        [{_bar(metrics.energy)}] {metrics.energy:5.1f}",
        f"Hydration     [{_bar(metrics.hydration)}] {metrics.hydration:5.1f}",
        f"Body temp     {metrics.body_temperature:5.1f} C",
        f"Injury        [{_bar(metrics.injury_severity)}] {metrics.injury_severity:5.1f}",
        f"Morale        [{_bar(metrics.morale)}] {metrics.morale:5.1f}",
        f"Shelter       [{_bar(metrics.shelter)}] {metrics.shelter:5.1f}",
        f"Fire          [{_bar(metrics.fire_quality)}] {metrics.fire_quality:5.1f}",
        f"Signal        [{_bar(metrics.signal_effectiveness)}] {metrics.signal_effectiveness:5.1f}",
        f"Survival      {metrics.survival_probability:5.1f}%",
    ]


def format_preview(preview: DecisionPreview) -> str:
    """Single line summarising odds and expected cost of a decision."""
    return (
        f"{preview.success_label} ({preview.success_probability:.0%}) | "
        f"energy {preview.energy_change:+.0f}, water {preview.hydration_change:+.0f} | "
        f"{preview.effort} effort, {preview.risk_level}"
    )
