"""tldrhooks - hook-side client for the tldr code-analysis daemon."""

__version__ = "0.1.0"
