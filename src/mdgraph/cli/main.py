"""
mdgraph CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import logging
from pathlib import Path

import click

from ..config import load_settings
from .commands import initialize, parse, show, view


@click.group()
@click.version_option(package_name="mdgraph")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "-c", "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: .mdgraph/config.yaml)",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_path: Path | None):
    """mdgraph: Explore Markdown documents as graphs.

    Headings become a hierarchy, inline links become shared reference
    nodes, and every node opens its section in a detail panel.

    \b
    Quick Start:
      mdgraph init --sample
      mdgraph parse sample.md
      mdgraph view sample.md --backend spatial
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["settings"] = load_settings(config_path)


# Register commands
main.add_command(parse.parse)
main.add_command(view.view)
main.add_command(show.show)
main.add_command(initialize.init)

if __name__ == "__main__":
    main()
