"""mdgraph: turn Markdown documents into navigable heading/link graphs."""

__version__ = "1.0.0"
