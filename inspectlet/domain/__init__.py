"""Domain layer for the Inspectlet client.

Plain data types shared by the transport, the parsers and the public client.
Nothing in this package performs I/O.
"""

from . import errors, models

__all__ = ["errors", "models"]
