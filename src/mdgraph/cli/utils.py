"""
CLI Utilities - Shared helper functions for command line operations.

This module provides common functionality used across CLI commands,
including formatted printing, document loading and session construction.
"""

import asyncio
import http.client
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional
from urllib import error, parse, request

import click

from ..config import ACCEPTED_EXTENSIONS, Settings
from ..core.session import SessionController
from ..core.types import BackendKind
from ..parsing.base import is_markdown_file
from ..parsing.remote import RemoteParseClient


REMOTE_FALLBACK_FILENAME = "remote-file.md"


@dataclass
class Document:
    """Raw Markdown plus where it came from."""
    content: str
    filename: str
    metadata: Dict[str, Any] = field(default_factory=dict)


def echo_success(message: str) -> None:
    """
    Print a success message with a green checkmark.

    Args:
        message (str): The message to display.
    """
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    """
    Print an error message with a red cross.

    Args:
        message (str): The error message to display.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_warning(message: str) -> None:
    """Print a warning message with a yellow alert symbol."""
    click.echo(click.style(f"⚠️  {message}", fg="yellow"))


def echo_info(message: str) -> None:
    """Print an informational message, dimmed."""
    click.echo(click.style(f"   {message}", dim=True))


def is_url(source: str) -> bool:
    return parse.urlparse(source).scheme in ("http", "https")


def fetch_url(url: str, timeout: float) -> Document:
    """
    Download a Markdown document.

    The filename is the last path segment of the URL.
    """
    with request.urlopen(url, timeout=timeout) as response:
        content = response.read().decode("utf-8", errors="replace")
    name = Path(parse.urlparse(url).path).name or REMOTE_FALLBACK_FILENAME
    return Document(content=content, filename=name, metadata={"source": "url", "url": url})


def load_document(source: str, timeout: float = 10.0) -> Optional[Document]:
    """
    Load a Markdown document from a local path or an http(s) URL.

    Args:
        source (str): File path or URL.
        timeout (float): Network timeout for URL sources.

    Returns:
        Optional[Document]: The loaded document, or None if loading failed.
    """
    if is_url(source):
        try:
            return fetch_url(source, timeout)
        except (error.URLError, http.client.HTTPException, OSError) as e:
            echo_error(f"Failed to load file from URL: {e}")
            return None

    path = Path(source)
    if not path.is_file():
        echo_error(f"File not found: {source}")
        return None

    if not is_markdown_file(path):
        accepted = ", ".join(sorted(ACCEPTED_EXTENSIONS))
        echo_warning(f"Please select a markdown file ({accepted})")
        return None

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        echo_error(f"Failed to read {source}: {e}")
        return None
    return Document(content=content, filename=path.name, metadata={"source": "file"})


def build_session(
    settings: Settings,
    remote: Optional[str] = None,
    backend: Optional[str] = None,
) -> SessionController:
    """Construct a session from effective settings and CLI overrides."""
    api_url = remote or settings.api_url
    client = RemoteParseClient(api_url, timeout=settings.timeout) if api_url else None
    return SessionController(
        backend=backend or settings.backend,
        remote_client=client,
    )


def run(coro):
    """Drive a coroutine from synchronous click commands."""
    return asyncio.run(coro)


BACKEND_CHOICES = click.Choice([k.value for k in BackendKind])
