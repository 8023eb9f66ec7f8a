"""Exceptions raised by the Inspectlet client."""


class InspectletError(Exception):
    """Base class for errors raised by the client."""


class MissingCredentialsError(InspectletError, ValueError):
    """Raised when the client is constructed without a username or password."""
