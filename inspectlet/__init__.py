"""
Inspectlet dashboard client.

The dashboard exposes no public API: this package signs in through the HTML
login form, performs requests with the resulting cookie session and scrapes
the pieces of the dashboard that are only available as HTML.

The package exposes a ``__version__`` attribute read from the installed
distribution metadata.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("inspectlet-client")
except PackageNotFoundError:
    # Package is not installed (running from source without pip install -e .)
    __version__ = "0.0.0.dev"

from .client import Inspectlet
from .config import ClientSettings
from .domain.errors import InspectletError, MissingCredentialsError
from .domain.models import Result, SiteRecord

__all__: list[str] = [
    "ClientSettings",
    "Inspectlet",
    "InspectletError",
    "MissingCredentialsError",
    "Result",
    "SiteRecord",
    "__version__",
]
