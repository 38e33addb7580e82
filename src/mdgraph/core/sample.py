"""
Sample Manager - Scaffolds an example document.

Provides a small Markdown document that exercises every structural feature
the graph builder recognises: nested headings, a level jump, repeated links
and body text, so a first ``mdgraph view`` shows something useful.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

SAMPLE_FILENAME = "sample.md"

SAMPLE_DOCUMENT = """
# Markdown Graph Sample

This document shows how headings and links become a graph.
See the [project notes](https://example.com/notes) for background.

## Getting Started

Install the package and point it at any Markdown file.

### Loading Files

Local paths and `http(s)` URLs are both accepted.

### Choosing a View

Switch between the planar and the spatial view at any time.

## Concepts

Headings nest under the nearest shallower heading.
Links become shared reference nodes, see [project notes](https://example.com/notes).

#### Deep Dive

Levels may jump: this heading hangs directly off **Concepts**.
Read more about [force layouts](https://d3js.org).
"""

SAMPLE_API_DOCUMENT = """# Sample Markdown

This is a **sample** markdown file for testing the API.

## Features

- Bullet points
- *Italic text*
- `Inline code`

## Links

Check out [D3.js](https://d3js.org) for data visualization!

### Nested Section

This is a deeper nested section with more content."""


class SampleManager:
    """
    Manages the creation of the sample document.
    """

    def __init__(self, root_dir: Path):
        self.root_dir = root_dir

    def provision(self) -> Path:
        """
        Write the sample document to disk.

        Returns:
            Path: The path to the created file.
        """
        self.root_dir.mkdir(parents=True, exist_ok=True)
        sample_file = self.root_dir / SAMPLE_FILENAME
        sample_file.write_text(SAMPLE_DOCUMENT.strip() + "\n", encoding="utf-8")
        logger.debug(f"Sample document written to {sample_file}")
        return sample_file
