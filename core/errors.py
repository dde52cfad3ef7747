"""Exceptions raised by the HTTP client and the analytics tools.

Tools log these once and re-raise them; FastMCP reports them to the caller
as a failed tool invocation.
"""


class FreispaceError(Exception):
    """Base class for errors raised by this server."""


class ToolArgumentError(FreispaceError, ValueError):
    """A required tool argument is missing or blank. Raised before any request."""


class HttpStatusError(FreispaceError):
    """The analytics API answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"HTTP error! status: {status_code}, message: {body}")


class UnexpectedResponseError(FreispaceError):
    """The API answered but the payload is missing, not a 200, or malformed."""
