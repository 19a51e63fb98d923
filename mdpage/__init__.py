"""Build a single HTML page from a directory of Markdown posts."""

__version__ = "0.1.0"
