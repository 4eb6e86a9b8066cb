import math
import re
from typing import Any, Dict, Optional

from uspsclient.models import Address

DEFAULT_RATE_SERVICE = "STANDARD POST"
# Extra service code requested with every rate quote (USPS Tracking).
TRACKING_SERVICE_CODE = 106
_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


class RequestBuilder:
    """
    Maps caller input onto the ordered parameter trees each Web Tools API expects.

    Dictionaries preserve insertion order and the service validates children
    positionally, so the key order below is significant.
    """

    @staticmethod
    def verify(address: Address) -> Dict[str, Any]:
        """
        Builds the ``AddressValidateRequest`` body.

        USPS names the secondary unit line ``Address1`` and the street line
        ``Address2``; the caller's ``street1``/``street2`` are swapped accordingly.
        """
        return {
            "Address": {
                "Address1": address.street2 or "",
                "Address2": address.street1,
                "City": address.city,
                "State": address.state,
                "Zip5": address.zip,
                "Zip4": "",
            }
        }

    @staticmethod
    def zip_code_lookup(address: Address) -> Dict[str, Any]:
        """Builds the ``ZipCodeLookupRequest`` body (no ZIP fields are sent)."""
        return {
            "Address": {
                "Address1": address.street2 or "",
                "Address2": address.street1,
                "City": address.city,
                "State": address.state,
            }
        }

    @staticmethod
    def city_state_lookup(zip_code: str) -> Dict[str, Any]:
        return {"ZipCode": {"Zip5": zip_code}}

    @staticmethod
    def rate_v4(from_zip: str, to_zip: str, weight: Any, service: Optional[str] = None) -> Dict[str, Any]:
        """
        Builds the ``RateV4Request`` body.

        Args:
            from_zip (str): Origin ZIP code.
            to_zip (str): Destination ZIP code.
            weight: Package weight in ounces. Anything that does not read as an
                    integer counts as 0.
            service (str): USPS service name, ``STANDARD POST`` when omitted.

        Note:
            ``Pounds`` carries the full weight converted to pounds and
            ``Ounces`` repeats the full weight in ounces; the ounces are not
            reduced to a remainder.
        """
        ounces = parse_ounces(weight)
        return {
            "ID": 0,
            "Service": service or DEFAULT_RATE_SERVICE,
            "ZipOrigination": from_zip,
            "ZipDestination": to_zip,
            "Pounds": ounces / 16,
            "Ounces": ounces,
            "Container": "",
            "Size": "REGULAR",
            "SpecialServices": {
                "SpecialService": TRACKING_SERVICE_CODE,
            },
        }


def parse_ounces(weight: Any) -> int:
    """
    Reads a leading integer out of ``weight`` ("12", 12.7, " 8oz"), 0 when there is none.
    """
    if isinstance(weight, bool) or weight is None:
        return 0
    if isinstance(weight, int):
        return weight
    if isinstance(weight, float):
        return int(weight) if math.isfinite(weight) else 0

    match = _LEADING_INT.match(str(weight))
    return int(match.group(1)) if match else 0
