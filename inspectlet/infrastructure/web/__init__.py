"""Web scraping adapters."""

from . import parsers

__all__ = ["parsers"]
