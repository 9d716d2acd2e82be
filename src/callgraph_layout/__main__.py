"""CLI entry point for callgraph-layout."""

import logging
import sys

import click

from callgraph_layout.config import LayoutConfig
from callgraph_layout.exceptions import LayoutError
from callgraph_layout.layout.engine import full_layout
from callgraph_layout.parsers.edgelist import parse_edge_list
from callgraph_layout.renderers.svg import render_svg


def _setup_logging(verbose: bool) -> None:
    """Configure logging for CLI output."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(message)s", force=True)


@click.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option("--output", "-o", "output", type=str, default=None, help="Write SVG to this file instead of stdout")
@click.option("--straight", is_flag=True, help="Draw edges as straight segments instead of curves")
@click.option("--passes", "passes", type=click.IntRange(min=0), default=4, help="Crossing-minimization passes")
@click.option("--break-cycles", is_flag=True, help="Reverse a feedback arc set before ranking")
@click.option("--verbose", "-v", is_flag=True, help="Log layout stage details")
def main(
    input: str | None,
    output: str | None,
    straight: bool,
    passes: int,
    break_cycles: bool,
    verbose: bool,
) -> None:
    """Lay out a directed graph edge list as a layered SVG drawing."""
    _setup_logging(verbose)

    if input:
        try:
            with open(input) as f:
                text = f.read()
        except OSError as e:
            click.echo(f"error: cannot read '{input}': {e}", err=True)
            sys.exit(1)
    else:
        text = sys.stdin.read()

    try:
        graph = parse_edge_list(text)
    except ValueError as e:
        click.echo(f"parse error:\n{e}", err=True)
        sys.exit(1)

    config = LayoutConfig(ordering_passes=passes, curved=not straight, break_cycles=break_cycles)
    try:
        result = full_layout(graph, config)
    except LayoutError as e:
        click.echo(f"error: {e.format_user_message()}", err=True)
        sys.exit(1)

    rendered = render_svg(result)

    if output:
        try:
            with open(output, "w") as f:
                f.write(rendered)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(rendered, nl=False)


if __name__ == "__main__":
    main()
