"""
uspsclient: An asynchronous Python client for the USPS Web Tools XML APIs,
covering address verification, ZIP code and city/state lookups, and
domestic rate quotes.
"""

from .builder import RequestBuilder
from .client import USPSClient
from .exceptions import DomainError, ParseError, ResponseShapeError, TransportError, USPSError
from .extractor import ResultExtractor
from .models import Address, CityState, Configuration, VerifiedAddress
from .parser import ResponseParser
from .transport import Transport
from .writer import XMLWriter

__all__ = [
    "USPSClient",
    "Configuration",
    "Address",
    "VerifiedAddress",
    "CityState",
    "RequestBuilder",
    "XMLWriter",
    "Transport",
    "ResponseParser",
    "ResultExtractor",
    "USPSError",
    "TransportError",
    "ParseError",
    "DomainError",
    "ResponseShapeError",
]
