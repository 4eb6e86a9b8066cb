import logging
from typing import Any, Dict, Optional

import httpx

from uspsclient.builder import RequestBuilder
from uspsclient.exceptions import ResponseShapeError
from uspsclient.extractor import ResultExtractor
from uspsclient.models import DEFAULT_TIMEOUT_MS, Address, CityState, Configuration, Tree, VerifiedAddress, text_of
from uspsclient.parser import ResponseParser
from uspsclient.transport import Transport
from uspsclient.writer import XMLWriter

log = logging.getLogger(__name__)


class USPSClient:
    """
    Asynchronous client for the USPS Web Tools XML APIs.

    Each operation is a coroutine that performs one request and resolves
    exactly once, returning a result record or raising a
    :class:`~uspsclient.exceptions.USPSError` subclass. Instances hold no
    mutable state and may serve any number of concurrent calls.

    Example:
        client = USPSClient("https://secure.shippingapis.com/ShippingAPI.dll", "123ABC")
        address = await client.verify(Address(street1="1600 Pennsylvania Ave NW",
                                              city="Washington", state="DC", zip="20500"))
    """

    def __init__(
        self,
        server_url: str,
        user_id: str,
        timeout_ms: Optional[int] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = Configuration(
            server_url=server_url,
            user_id=user_id,
            timeout_ms=timeout_ms or DEFAULT_TIMEOUT_MS,
        )
        self.transport = Transport(http_client)

    @classmethod
    def from_config(cls, config: Configuration, http_client: Optional[httpx.AsyncClient] = None) -> "USPSClient":
        return cls(config.server_url, config.user_id, config.timeout_ms, http_client)

    async def verify(self, address: Address) -> VerifiedAddress:
        """
        Verifies and standardizes a domestic address.

        Raises:
            DomainError: If USPS cannot match the address.
        """
        params = RequestBuilder.verify(address)
        node = await self._call("Verify", "AddressValidateRequest", "AddressValidateResponse.Address", params)

        return VerifiedAddress(
            street1=_required(node, "Address2", "Verify"),
            street2=text_of(node, "Address1", ""),
            city=_required(node, "City", "Verify"),
            state=_required(node, "State", "Verify"),
            zip=_required(node, "Zip5", "Verify"),
        )

    async def zip_code_lookup(self, address: Address) -> VerifiedAddress:
        """
        Looks up the ZIP+4 for an address; ``zip`` is returned as ``ZIP5-ZIP4``.
        """
        params = RequestBuilder.zip_code_lookup(address)
        node = await self._call("ZipCodeLookup", "ZipCodeLookupRequest", "ZipCodeLookupResponse.Address", params)

        zip5 = _required(node, "Zip5", "ZipCodeLookup")
        zip4 = _required(node, "Zip4", "ZipCodeLookup")
        return VerifiedAddress(
            street1=_required(node, "Address2", "ZipCodeLookup"),
            street2=text_of(node, "Address1", ""),
            city=_required(node, "City", "ZipCodeLookup"),
            state=_required(node, "State", "ZipCodeLookup"),
            zip=f"{zip5}-{zip4}",
        )

    async def city_state_lookup(self, zip_code: str) -> CityState:
        """Resolves the city and state served by a 5-digit ZIP code."""
        params = RequestBuilder.city_state_lookup(zip_code)
        node = await self._call("CityStateLookup", "CityStateLookupRequest", "CityStateLookupResponse.ZipCode", params)

        return CityState(
            city=_required(node, "City", "CityStateLookup"),
            state=_required(node, "State", "CityStateLookup"),
            zip=_required(node, "Zip5", "CityStateLookup"),
        )

    async def rate_v4(self, from_zip: str, to_zip: str, weight: Any, service: Optional[str] = None) -> Tree:
        """
        Requests domestic postage rates.

        Args:
            from_zip: Origin ZIP code.
            to_zip: Destination ZIP code.
            weight: Package weight in ounces.
            service: USPS service name, ``STANDARD POST`` when omitted.

        Returns:
            The parsed ``RateV4Response`` node, unchanged.
        """
        params = RequestBuilder.rate_v4(from_zip, to_zip, weight, service)
        return await self._call("RateV4", "RateV4Request", "RateV4Response", params)

    async def _call(self, api: str, request_type: str, result_path: str, params: Dict[str, Any]) -> Tree:
        xml = XMLWriter.build(request_type, self.config.user_id, params)
        body = await self.transport.send(self.config.server_url, api, xml, self.config.timeout_ms)
        tree = ResponseParser.parse(body, api)
        node = ResultExtractor.extract(tree, result_path, api)
        log.debug("%s completed", api)
        return node


def _required(node: Tree, key: str, api: str) -> str:
    value = text_of(node, key) if isinstance(node, dict) else None
    if value is None:
        raise ResponseShapeError(
            f"Unexpected response shape: '{key}' missing from {api} result",
            node,
            {"method": api, "during": "extract"},
        )
    return value
