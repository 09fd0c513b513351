"""Built-in themes."""

from __future__ import annotations

__all__ = ["DARK_THEME", "LIGHT_THEME", "THEMES"]

from topolayer.render.style import Theme

DARK_THEME = Theme(
    name="dark",
    background_color="#0a0a0f",
    background_radius=12.0,
    node_fill="#111118",
    label_color="#f4f4f5",
    muted_color="#71717a",
    badge_text_color="#ffffff",
    font_family="JetBrains Mono, monospace",
)

LIGHT_THEME = Theme(
    name="light",
    background_color="#ffffff",
    background_radius=12.0,
    node_fill="#f4f4f5",
    label_color="#18181b",
    muted_color="#52525b",
    badge_text_color="#ffffff",
    font_family="JetBrains Mono, monospace",
    edge_opacity=0.8,
    ring_node_fill="#fafafa",
    secondary_text_color="#52525b",
)

THEMES: dict[str, Theme] = {
    "dark": DARK_THEME,
    "light": LIGHT_THEME,
}
