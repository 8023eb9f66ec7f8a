"""Infrastructure layer for the Inspectlet client.

Holds the adapters for HTTP, HTML parsing and logging.
"""

from . import http, observability, web

__all__ = ["http", "observability", "web"]
