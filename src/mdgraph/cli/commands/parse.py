"""
Parse Command - Build the graph for one document and report on it.

Prints a summary table by default, or the full graph envelope as JSON for
editor integrations.
"""

import json
import sys

import click
from rich.console import Console
from rich.table import Table

from ...config import Settings
from ...core.errors import MdGraphError
from ..utils import build_session, echo_error, load_document, run

console = Console()


@click.command()
@click.argument("source")
@click.option("--json", "as_json", is_flag=True, help="Output graph data as JSON to stdout")
@click.option("--remote", default=None, help="Processing service base URL")
@click.pass_context
def parse(ctx: click.Context, source: str, as_json: bool, remote: str | None):
    """
    Parse a Markdown file or URL into a graph.
    """
    settings: Settings = (ctx.obj or {}).get("settings") or Settings()
    document = load_document(source, timeout=settings.timeout)
    if document is None:
        return

    session = build_session(settings, remote=remote)
    try:
        result = run(session.load_content(document.content, document.filename, document.metadata))
    except MdGraphError as e:
        echo_error(str(e))
        sys.exit(1)

    if as_json:
        click.echo(json.dumps({
            "meta": {"status": "success", "source": session.source.value if session.source else None},
            "data": {
                "filename": session.filename,
                **session.snapshot.to_dict(),
                "stats": session.stats.to_wire() if session.stats else {},
            },
        }))
        return

    stats = result.stats if result else session.stats
    table = Table(title=f"📄 {session.filename}", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Headings", str(len(session.snapshot.headings())))
    table.add_row("Links", str(len(session.snapshot.references())))
    if stats:
        table.add_row("Nodes", str(stats.node_count))
        table.add_row("Edges", str(stats.edge_count))
        table.add_row("Lines", str(stats.line_count))
        table.add_row("Words", str(stats.word_count))
        table.add_row("Characters", str(stats.char_count))
    table.add_row("Parsed by", session.source.value if session.source else "-")
    console.print(table)
