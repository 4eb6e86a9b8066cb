from dataclasses import asdict, dataclass
from typing import Any, Dict, List, NamedTuple, Optional, Union

# Parsed response tree: text leaves, element mappings and sibling sequences.
Tree = Union[str, Dict[str, Any], List[Any]]

DEFAULT_TIMEOUT_MS = 100000


@dataclass(frozen=True)
class Configuration:
    """
    Immutable connection settings shared by every call a client issues.

    Attributes:
        server_url (str): The Web Tools endpoint (e.g. ``.../ShippingAPI.dll``).
        user_id (str): The USERID issued by USPS, injected into every envelope.
        timeout_ms (int): Hard deadline for a single request, in milliseconds.
            0 or None selects the default of 100000.
    """

    server_url: str
    user_id: str
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    def __post_init__(self):
        if not (self.server_url and self.user_id):
            raise ValueError("Error: must pass usps server url and userId")
        if not self.timeout_ms:
            object.__setattr__(self, "timeout_ms", DEFAULT_TIMEOUT_MS)
        elif self.timeout_ms < 0:
            raise ValueError(f"timeout_ms must not be negative, got {self.timeout_ms}")


@dataclass
class Address:
    """
    A domestic address as supplied by the caller.

    ``street2`` holds the secondary unit (apartment, suite) and may be left empty.
    """

    street1: str
    street2: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""


@dataclass
class VerifiedAddress:
    """
    Normalized address returned by address verification and ZIP code lookup.

    Attributes:
        street1 (str): Primary street line (the service's ``Address2``).
        street2 (str): Secondary unit line (the service's ``Address1``), '' when absent.
        city (str): City name as standardized by USPS.
        state (str): Two-letter state abbreviation.
        zip (str): ZIP5, or ``ZIP5-ZIP4`` for ZIP code lookups.
    """

    street1: str
    street2: str
    city: str
    state: str
    zip: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class CityState:
    """City and state resolved from a 5-digit ZIP code."""

    city: str
    state: str
    zip: str

    def to_dict(self) -> dict:
        return asdict(self)


class ErrorMessage(NamedTuple):
    """
    Outcome of reading a message from a service error node.

    ``fallback`` is True when the node had no ``Description`` and ``text``
    is the stringified node instead.
    """

    text: str
    fallback: bool = False


def first(value: Any) -> Any:
    """Collapses a sibling sequence to its first element; other values pass through."""
    if isinstance(value, list):
        return value[0]
    return value


def text_of(node: Dict[str, Any], key: str, default: Optional[str] = None) -> Optional[str]:
    """Reads the text of a single child element, ``default`` when it is absent."""
    if key not in node:
        return default
    value = first(node[key])
    if isinstance(value, dict):
        return value.get("_", "")
    return value
