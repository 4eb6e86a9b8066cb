"""
Exceptions raised by the USPS Web Tools client.

Every failure of a call surfaces as a subclass of :class:`USPSError`, raised
from the awaited operation. None of them affects the client instance; the
next call starts from a clean slate.
"""

from typing import Any, Dict, Optional


class USPSError(Exception):
    """
    Base class for all client failures.

    Attributes:
        message (str): Human-readable description of the failure.
        cause (Any): The underlying exception, or the raw error node returned by the service.
        context (dict): Where the failure happened, ``method`` (API code) and ``during`` (phase).
    """

    def __init__(self, message: str, cause: Any = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.context = dict(context or {})

    @property
    def method(self) -> Optional[str]:
        return self.context.get("method")

    @property
    def during(self) -> Optional[str]:
        return self.context.get("during")


class TransportError(USPSError):
    """The HTTP exchange failed: connection error, protocol error or deadline expiry."""

    def __init__(self, message: str, cause: Any = None, context: Optional[Dict[str, Any]] = None,
                 timeout: bool = False):
        super().__init__(message, cause, context)
        self.timeout = timeout


class ParseError(USPSError):
    """The response body was not well-formed XML."""


class DomainError(USPSError):
    """
    The service answered with an ``Error`` element.

    ``level`` is ``"root"`` when the whole call was rejected and ``"node"``
    when the error sits inside the requested result.
    """

    def __init__(self, message: str, cause: Any = None, context: Optional[Dict[str, Any]] = None,
                 level: str = "root"):
        super().__init__(message, cause, context)
        self.level = level


class ResponseShapeError(USPSError):
    """The response did not contain the element path expected for the operation."""
