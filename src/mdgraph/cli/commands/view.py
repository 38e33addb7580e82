"""
View Command - Generate the interactive visualization.

Loads the document through a session, renders it with the chosen backend
and writes the backend's self-contained HTML document.
"""

import sys
import webbrowser
from pathlib import Path

import click

from ...config import Settings
from ...core.errors import MdGraphError
from ...core.session import SessionController
from ..utils import BACKEND_CHOICES, build_session, echo_error, echo_info, echo_success, load_document, run


async def _render(session: SessionController, content: str, filename: str, metadata: dict) -> str:
    async with session:
        await session.load_content(content, filename, metadata)
        return session.export_html()


@click.command()
@click.argument("source")
@click.option("-b", "--backend", type=BACKEND_CHOICES, default=None, help="Rendering backend")
@click.option("-o", "--output", default=None, help="Output HTML file")
@click.option("--remote", default=None, help="Processing service base URL")
@click.option("--no-open", is_flag=True, help="Do not open the browser")
@click.pass_context
def view(ctx: click.Context, source: str, backend: str | None, output: str | None, remote: str | None, no_open: bool):
    """
    Render a Markdown file or URL as an interactive graph.
    """
    settings: Settings = (ctx.obj or {}).get("settings") or Settings()
    document = load_document(source, timeout=settings.timeout)
    if document is None:
        return

    target = backend or settings.backend
    session = build_session(settings, remote=remote, backend=target)
    try:
        html_content = run(_render(session, document.content, document.filename, document.metadata))
    except MdGraphError as e:
        echo_error(str(e))
        sys.exit(1)

    output_path = Path(output or settings.output)
    output_path.write_text(html_content, encoding="utf-8")
    echo_success(f"Generated: {output_path} ({target} view)")
    echo_info(f"Open: {output_path.resolve().as_uri()}")

    if not no_open:
        webbrowser.open(output_path.resolve().as_uri())
