"""CLI entry point for layered-layout."""

import sys

import click

from layered_layout import layout_edge_list
from layered_layout.errors import MalformedGraphError
from layered_layout.renderers.trace import TraceWriter
from layered_layout.types import Orientation, Point

_ORIENTATION_MAP: dict[str, Orientation] = {
    "TB": Orientation.TopToBottom,
    "TD": Orientation.TopToBottom,
    "LR": Orientation.LeftToRight,
    "BT": Orientation.BottomToTop,
    "RL": Orientation.RightToLeft,
}


def parse_edge_list(text: str) -> list[tuple[str, str]]:
    """Parse ``A -> B`` lines; a bare name declares an isolated node.

    Blank lines and lines starting with ``#`` are ignored.
    """
    edges: list[tuple[str, str]] = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if "->" not in line:
            edges.append((line, ""))
            continue
        src, _, dst = line.partition("->")
        src, dst = src.strip(), dst.strip()
        if not src or not dst:
            raise ValueError(f"line {lineno}: expected 'A -> B', got {raw!r}")
        edges.append((src, dst))
    return edges


def parse_size(text: str) -> Point:
    w, sep, h = text.lower().partition("x")
    if not sep:
        raise ValueError(f"size must look like WxH, got {text!r}")
    return Point(float(w), float(h))


@click.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option("--orientation", "-o", "orientation", type=str, default="TB", help="Orientation (TB, LR, BT, RL)")
@click.option("--size", "-s", "size", type=str, default="100x50", help="Node size as WxH")
@click.option("--skip-refinement", is_flag=True, help="Skip the Brandes-Kopf refinement phase")
@click.option("--debug", is_flag=True, help="Also emit connector and bounding-box draw calls")
@click.option("--window", "-w", "window", type=str, default=None, help="Scale the output into a WxH window")
def main(
    input: str | None, orientation: str, size: str, skip_refinement: bool, debug: bool, window: str | None
) -> None:
    """Lay out a directed graph given as an edge list and print the draw calls."""
    if input:
        try:
            with open(input) as f:
                text = f.read()
        except OSError as e:
            click.echo(f"error: cannot read '{input}': {e}", err=True)
            sys.exit(1)
    else:
        text = sys.stdin.read()

    key = orientation.upper()
    if key not in _ORIENTATION_MAP:
        click.echo(f"error: unknown orientation '{orientation}'; use TB, LR, BT, or RL", err=True)
        sys.exit(1)

    try:
        edges = parse_edge_list(text)
        box = parse_size(size)
        target = parse_size(window) if window else None
    except ValueError as e:
        click.echo(f"parse error:\n{e}", err=True)
        sys.exit(1)

    try:
        vg, _ = layout_edge_list(edges, _ORIENTATION_MAP[key], box, skip_refinement)
    except MalformedGraphError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)

    writer = TraceWriter()
    vg.render(debug, writer)
    if target is not None:
        writer = writer.scaled(target)
    click.echo(writer.to_text(), nl=False)


if __name__ == "__main__":
    main()
