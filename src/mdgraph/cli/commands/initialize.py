"""
Init Command - Onboarding Automation.

This module handles the `mdgraph init` command, which writes a
configuration file with the default view and processing settings and can
drop a sample document next to it.
"""

import copy
from pathlib import Path

import click
import yaml
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm

from ...config import CONFIG_DIR_NAME, CONFIG_FILE_NAME, DEFAULT_BACKEND, DEFAULT_OUTPUT, DEFAULT_TIMEOUT_SECONDS
from ...core.sample import SampleManager

console = Console()

# Default configuration template
DEFAULT_CONFIG = {
    "version": "1.0",
    "remote": {
        "api_url": None,
        "timeout": DEFAULT_TIMEOUT_SECONDS,
    },
    "view": {
        "backend": DEFAULT_BACKEND.value,
        "output": DEFAULT_OUTPUT,
    },
}


def create_gitignore(config_dir: Path):
    """Ensure the generated HTML output is ignored by git."""
    gitignore = config_dir.parent / ".gitignore"
    entry = f"\n# mdgraph\n{DEFAULT_OUTPUT}\n"

    if not gitignore.exists():
        with open(gitignore, "w") as f:
            f.write(entry)
    else:
        content = gitignore.read_text()
        if DEFAULT_OUTPUT not in content:
            with open(gitignore, "a") as f:
                f.write(entry)


def _init_project(root_dir: Path, api_url: str | None, with_sample: bool):
    """Internal helper to write the config (and sample) files."""
    config_dir = root_dir / CONFIG_DIR_NAME
    config_file = config_dir / CONFIG_FILE_NAME

    config = copy.deepcopy(DEFAULT_CONFIG)
    config["remote"]["api_url"] = api_url

    config_dir.mkdir(exist_ok=True)
    with open(config_file, "w") as f:
        yaml.dump(config, f, sort_keys=False, default_flow_style=False)

    create_gitignore(config_dir)

    console.print("\n✨ [bold green]Initialized successfully![/bold green]")
    console.print(f"   Config created at: [dim]{config_file}[/dim]")

    if with_sample:
        sample_file = SampleManager(root_dir).provision()
        console.print(f"📄 Sample document: [bold]{sample_file.name}[/bold]")
        console.print("\n[bold green]Try these commands:[/bold green]")
        console.print(f"1. [bold cyan]mdgraph parse {sample_file.name}[/bold cyan]")
        console.print(f"2. [bold cyan]mdgraph view {sample_file.name}[/bold cyan]")


@click.command()
@click.option("--force", is_flag=True, help="Overwrite existing configuration")
@click.option("--sample", is_flag=True, help="Also write a sample Markdown document")
@click.option("--api-url", default=None, help="Processing service base URL to store")
def init(force: bool, sample: bool, api_url: str | None):
    """
    Initialize mdgraph in the current directory.
    """
    console.print(Panel.fit("🚀 [bold blue]mdgraph Initialization[/bold blue]", border_style="blue"))

    root_dir = Path.cwd()
    config_file = root_dir / CONFIG_DIR_NAME / CONFIG_FILE_NAME

    if config_file.exists() and not force:
        console.print(f"[yellow]Configuration already exists at {config_file}[/yellow]")
        if not Confirm.ask("Do you want to overwrite it?"):
            console.print("Aborted.")
            return

    _init_project(root_dir, api_url, sample)
