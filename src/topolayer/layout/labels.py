"""Fixed-width text estimates and decoration placement.

Badge pills and the legend strip are sized with a per-character width
estimate instead of real text measurement. Badge text is short and
monospace, so the estimate holds well enough.
"""

from __future__ import annotations

__all__ = [
    "BadgeBox",
    "GlowRing",
    "LegendItem",
    "badge_box",
    "glow_ring",
    "legend_entry_advance",
    "place_legend",
    "text_width",
]

from dataclasses import dataclass

from topolayer.layout.constants import (
    BADGE_CHAR_WIDTH,
    BADGE_GAP,
    BADGE_HEIGHT,
    BADGE_PADDING,
    GLOW_SPREAD,
    LEGEND_BOTTOM_OFFSET,
    LEGEND_CHAR_WIDTH,
    LEGEND_ENTRY_PADDING,
    LEGEND_SWATCH_SIZE,
    LEGEND_TEXT_GAP,
)
from topolayer.layout.layers import CanvasSize, NodePlacement
from topolayer.parser.model import LegendEntry


def text_width(text: str, char_width: float) -> float:
    """Estimated pixel width of a single-line string."""
    return len(text) * char_width


@dataclass
class BadgeBox:
    text: str
    color: str
    x: float
    y: float
    width: float
    height: float

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2


@dataclass
class GlowRing:
    x: float
    y: float
    width: float
    height: float


@dataclass
class LegendItem:
    entry: LegendEntry
    swatch_x: float
    swatch_y: float
    text_x: float
    text_y: float


def badge_box(placement: NodePlacement) -> BadgeBox | None:
    """Pill just below the node box, or None when the node has no badge."""
    node = placement.node
    if not node.badge:
        return None
    width = text_width(node.badge, BADGE_CHAR_WIDTH) + BADGE_PADDING
    return BadgeBox(
        text=node.badge,
        color=node.effective_badge_color,
        x=placement.x - width / 2,
        y=placement.bottom + BADGE_GAP,
        width=width,
        height=BADGE_HEIGHT,
    )


def glow_ring(placement: NodePlacement) -> GlowRing | None:
    """Enlarged box drawn beneath a highlighted node."""
    if not placement.node.glow:
        return None
    return GlowRing(
        x=placement.left - GLOW_SPREAD,
        y=placement.top - GLOW_SPREAD,
        width=placement.node_width + 2 * GLOW_SPREAD,
        height=placement.node_height + 2 * GLOW_SPREAD,
    )


def legend_entry_advance(entry: LegendEntry) -> float:
    return text_width(entry.label, LEGEND_CHAR_WIDTH) + LEGEND_ENTRY_PADDING


def place_legend(legend: list[LegendEntry], canvas: CanvasSize) -> list[LegendItem]:
    """Lay legend entries left to right in a strip centered near the bottom."""
    if not legend:
        return []

    legend_y = canvas.height - LEGEND_BOTTOM_OFFSET
    total = sum(legend_entry_advance(entry) for entry in legend)
    x = (canvas.width - total) / 2

    items: list[LegendItem] = []
    for entry in legend:
        items.append(
            LegendItem(
                entry=entry,
                swatch_x=x,
                swatch_y=legend_y - LEGEND_SWATCH_SIZE / 2,
                text_x=x + LEGEND_TEXT_GAP,
                text_y=legend_y,
            )
        )
        x += legend_entry_advance(entry)
    return items
