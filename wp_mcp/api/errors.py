"""Errors raised by the REST clients and the tool argument validation pass."""


class WPError(Exception):
    pass


class WPAPIError(WPError):
    """The remote site answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str, message: str | None = None):
        self.status_code = status_code
        self.body = body
        super().__init__(message or f"WP API error {status_code}: {body}")


class WPTransportError(WPError):
    """The request never produced an HTTP response (DNS, refused, timeout)."""


class ToolArgumentError(WPError):
    """Caller-supplied arguments failed validation."""
