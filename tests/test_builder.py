import pytest

from uspsclient.builder import RequestBuilder, parse_ounces
from uspsclient.models import Address


def test_verify_swaps_street_lines():
    address = Address(street1="123 Main St", street2="Apt 4", city="Denver", state="CO", zip="80202")
    params = RequestBuilder.verify(address)

    assert params == {
        "Address": {
            "Address1": "Apt 4",
            "Address2": "123 Main St",
            "City": "Denver",
            "State": "CO",
            "Zip5": "80202",
            "Zip4": "",
        }
    }


def test_verify_missing_street2_defaults_empty():
    address = Address(street1="123 Main St", city="Denver", state="CO", zip="80202")
    assert RequestBuilder.verify(address)["Address"]["Address1"] == ""

    address.street2 = None
    assert RequestBuilder.verify(address)["Address"]["Address1"] == ""


def test_zip_code_lookup_has_no_zip_fields():
    address = Address(street1="123 Main St", city="Denver", state="CO", zip="80202")
    params = RequestBuilder.zip_code_lookup(address)

    assert list(params["Address"]) == ["Address1", "Address2", "City", "State"]


def test_city_state_lookup():
    assert RequestBuilder.city_state_lookup("90210") == {"ZipCode": {"Zip5": "90210"}}


@pytest.mark.parametrize("ounces", [0, 1, 15, 16, 17, 33, 160])
def test_rate_weight_uses_full_ounces(ounces):
    params = RequestBuilder.rate_v4("10001", "90210", ounces)

    assert params["Pounds"] == ounces / 16
    assert params["Ounces"] == ounces


def test_rate_defaults():
    params = RequestBuilder.rate_v4("10001", "90210", "8")

    assert params["ID"] == 0
    assert params["Service"] == "STANDARD POST"
    assert params["ZipOrigination"] == "10001"
    assert params["ZipDestination"] == "90210"
    assert params["Container"] == ""
    assert params["Size"] == "REGULAR"
    assert params["SpecialServices"] == {"SpecialService": 106}


def test_rate_custom_service():
    assert RequestBuilder.rate_v4("1", "2", 1, "PRIORITY")["Service"] == "PRIORITY"


def test_parse_ounces():
    assert parse_ounces("12") == 12
    assert parse_ounces(" 8oz") == 8
    assert parse_ounces(12.9) == 12
    assert parse_ounces("heavy") == 0
    assert parse_ounces("") == 0
    assert parse_ounces(None) == 0
    assert parse_ounces(float("nan")) == 0
    assert parse_ounces("+16") == 16
    assert parse_ounces("-3") == -3
    assert parse_ounces("1e3") == 1
