"""Domain errors shared by every storefront component.

Each error carries a short uppercase code (also its ``str()``) that the
request layer returns verbatim as ``{"detail": code}``. The mapping to
HTTP status codes lives in ``storefront.main``.
"""


class StorefrontError(Exception):
    """Base class for errors raised by the storefront core.

    Attributes:
        code: Short machine-readable error code, e.g. ``EMPTY_ORDER``.
        message: Optional human readable explanation.
    """

    def __init__(self, code: str, message: str | None = None):
        super().__init__(code)
        self.code = code
        self.message = message


class ValidationError(StorefrontError, ValueError):
    """Malformed or missing required input."""


class NotFound(StorefrontError, LookupError):
    """A single referenced entity does not exist."""


class ConflictError(StorefrontError):
    """The operation is blocked by a state or referential invariant."""


class NotFoundEmpty(StorefrontError):
    """A listing produced zero results.

    Deliberately not a subclass of ``NotFound``: an empty listing is a
    successful-but-empty outcome, not a failed lookup.
    """

    def __init__(self, message: str | None = None):
        super().__init__("NO_RESULTS", message)


class UpstreamUnavailable(StorefrontError):
    """An external collaborator could not answer (transport error, 5xx, open circuit)."""

    def __init__(self, message: str | None = None):
        super().__init__("UPSTREAM_UNAVAILABLE", message)
