"""
Integrations with third-party libraries like Pydantic.
"""

from .pydantic import from_dataclass, PydanticCityState, PydanticVerifiedAddress

__all__ = ["from_dataclass", "PydanticCityState", "PydanticVerifiedAddress"]
