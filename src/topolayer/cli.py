"""Command-line interface for topolayer."""

from __future__ import annotations

from pathlib import Path

import click

from topolayer import __version__
from topolayer.layout.engine import compute_graph_layout
from topolayer.layout.radial import compute_radial_layout
from topolayer.layout.validator import Severity, validate_graph
from topolayer.parser.loader import (
    GraphFormatError,
    is_radial_document,
    parse_graph,
    parse_radial_graph,
)
from topolayer.render.radial import render_radial_svg
from topolayer.render.svg import render_svg
from topolayer.themes import THEMES


@click.group()
@click.version_option(version=__version__)
def cli():
    """topolayer: layered topology graphs as SVG."""


def _write_output(svg: str, output: Path) -> None:
    if output.suffix.lower() == ".png":
        try:
            import cairosvg
        except ImportError as e:
            raise click.ClickException(
                "PNG output requires cairosvg: pip install 'topolayer[png]'"
            ) from e
        cairosvg.svg2png(bytestring=svg.encode(), write_to=str(output), scale=2)
    else:
        output.write_text(svg)


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path),
    required=True,
    help="Output file (.svg, or .png with cairosvg installed).",
)
@click.option(
    "--theme",
    type=click.Choice(sorted(THEMES)),
    default=None,
    help="Visual theme (default: the graph's own, else dark).",
)
@click.option("--width", type=float, default=None, help="Minimum canvas width.")
@click.option("--height", type=float, default=None, help="Minimum canvas height.")
@click.option("--node-width", type=float, default=None, help="Node box width.")
@click.option("--node-height", type=float, default=None, help="Node box height.")
@click.option("--layer-gap", type=float, default=None, help="Row-to-row pitch.")
@click.option("--node-gap", type=float, default=None, help="Gap within a row.")
def render(
    input_file: Path,
    output: Path,
    theme: str | None,
    width: float | None,
    height: float | None,
    node_width: float | None,
    node_height: float | None,
    layer_gap: float | None,
    node_gap: float | None,
) -> None:
    """Render a graph file to SVG."""
    text = input_file.read_text()
    try:
        if is_radial_document(text):
            radial = parse_radial_graph(text)
            layout = compute_radial_layout(radial)
            svg = render_radial_svg(layout, THEMES[theme or "dark"])
            if layout.dropped:
                click.echo(
                    f"Dropped {len(layout.dropped)} neighbor(s) beyond the ring",
                    err=True,
                )
        else:
            graph = parse_graph(text)
            theme_name = theme or graph.theme or "dark"
            if theme_name not in THEMES:
                raise click.ClickException(f"Unknown theme '{theme_name}'")
            layout = compute_graph_layout(
                graph,
                width=width,
                height=height,
                node_width=node_width,
                node_height=node_height,
                layer_gap=layer_gap,
                node_gap=node_gap,
            )
            svg = render_svg(layout, THEMES[theme_name], graph.title)
            for edge in layout.skipped_edges:
                click.echo(
                    f"Skipped edge {edge.source} -> {edge.target}: unknown node",
                    err=True,
                )
    except GraphFormatError as e:
        raise click.ClickException(str(e)) from e

    _write_output(svg, output)
    click.echo(f"Wrote {output}")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as failures.",
)
def validate(input_file: Path, strict: bool) -> None:
    """Check a layered graph file for dangling, reversed, or duplicate entries."""
    try:
        graph = parse_graph(input_file.read_text())
    except GraphFormatError as e:
        raise click.ClickException(str(e)) from e

    violations = validate_graph(graph)
    for v in violations:
        click.echo(str(v))

    errors = [v for v in violations if v.severity == Severity.ERROR]
    if errors or (strict and violations):
        raise SystemExit(1)
    click.echo(f"OK: {len(graph.nodes)} nodes, {len(graph.edges)} edges")
