"""
Show Command - Print the detail payload for one node.
"""

import json
import sys

import click

from ...config import Settings
from ...core.errors import MdGraphError, UnknownNodeSelected
from ..utils import build_session, echo_error, echo_info, echo_warning, load_document, run


@click.command()
@click.argument("source")
@click.argument("node_id")
@click.option("--remote", default=None, help="Processing service base URL")
@click.pass_context
def show(ctx: click.Context, source: str, node_id: str, remote: str | None):
    """
    Show the detail view for NODE_ID (e.g. node-0, link-https://...).
    """
    settings: Settings = (ctx.obj or {}).get("settings") or Settings()
    document = load_document(source, timeout=settings.timeout)
    if document is None:
        return

    session = build_session(settings, remote=remote)
    try:
        run(session.load_content(document.content, document.filename, document.metadata))
        detail = session.select(node_id, strict=True)
    except UnknownNodeSelected as e:
        echo_warning(str(e))
        echo_info("Run 'mdgraph parse --json' to list node ids.")
        return
    except MdGraphError as e:
        echo_error(str(e))
        sys.exit(1)

    click.echo(json.dumps(detail.to_wire(), indent=2))
