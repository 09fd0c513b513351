#!/usr/bin/env python3
"""Batch render every graph document under tests/fixtures/ to SVG and PNG.

Outputs go to /tmp/topolayer_renders/.

Usage:
    python scripts/render_topologies.py [--theme light]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from topolayer.layout.engine import compute_graph_layout
from topolayer.layout.radial import compute_radial_layout
from topolayer.parser.loader import (
    GraphFormatError,
    is_radial_document,
    parse_graph,
    parse_radial_graph,
)
from topolayer.render.radial import render_radial_svg
from topolayer.render.svg import render_svg
from topolayer.themes import THEMES

project_root = Path(__file__).parent.parent
FIXTURES_DIR = project_root / "tests" / "fixtures"
OUTPUT_DIR = Path("/tmp/topolayer_renders")


def render_file(
    json_path: Path, output_dir: Path, theme_name: str | None = None
) -> tuple[str, list[str]]:
    """Parse, lay out, and render one document to SVG (and optionally PNG).

    Returns (name, list_of_issues).
    """
    name = json_path.stem
    issues: list[str] = []

    try:
        text = json_path.read_text()
        if is_radial_document(text):
            radial = compute_radial_layout(parse_radial_graph(text))
            svg_str = render_radial_svg(radial, THEMES[theme_name or "dark"])
            if radial.dropped:
                issues.append(f"{len(radial.dropped)} neighbor(s) dropped")
        else:
            graph = parse_graph(text)
            layout = compute_graph_layout(graph)
            theme = THEMES.get(theme_name or graph.theme or "dark", THEMES["dark"])
            svg_str = render_svg(layout, theme, graph.title)
            for edge in layout.skipped_edges:
                issues.append(f"skipped edge {edge.source} -> {edge.target}")
    except GraphFormatError as e:
        return name, [f"PARSE ERROR: {e}"]

    svg_path = output_dir / f"{name}.svg"
    svg_path.write_text(svg_str)

    try:
        import cairosvg

        png_path = output_dir / f"{name}.png"
        cairosvg.svg2png(bytestring=svg_str.encode(), write_to=str(png_path), scale=2)
    except ImportError:
        issues.append("cairosvg not available, skipping PNG")

    return name, issues


def main():
    parser = argparse.ArgumentParser(description="Batch render fixture graphs")
    parser.add_argument("--theme", choices=sorted(THEMES), default=None)
    args = parser.parse_args()

    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

    all_files = sorted(FIXTURES_DIR.glob("*.json"))
    print(f"Rendering {len(all_files)} files to {OUTPUT_DIR}/\n")

    max_name_len = max((len(f.stem) for f in all_files), default=0)
    any_errors = False

    for json_path in all_files:
        name, issues = render_file(json_path, OUTPUT_DIR, args.theme)
        status = "OK" if not issues else "ISSUES"
        if any("ERROR" in i for i in issues):
            status = "FAIL"
            any_errors = True

        print(f"  {name:<{max_name_len}}  [{status}]")
        for issue in issues:
            print(f"    - {issue}")

    print(f"\nOutputs in: {OUTPUT_DIR}/")

    if any_errors:
        sys.exit(1)


if __name__ == "__main__":
    main()
