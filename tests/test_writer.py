from lxml import etree

from uspsclient.builder import RequestBuilder
from uspsclient.models import Address
from uspsclient.writer import XMLWriter, format_value


def test_writer_root_and_userid():
    xml = XMLWriter.build("CityStateLookupRequest", "USER123", {"ZipCode": {"Zip5": "80202"}})

    assert xml.startswith("<?xml")
    root = etree.fromstring(xml.encode("utf-8"))
    assert root.tag == "CityStateLookupRequest"
    assert root.get("USERID") == "USER123"
    assert root.find("ZipCode/Zip5").text == "80202"


def test_writer_preserves_child_order():
    address = Address(street1="6406 Ivy Ln", city="Greenbelt", state="MD", zip="20770")
    xml = XMLWriter.build("AddressValidateRequest", "U", RequestBuilder.verify(address))

    root = etree.fromstring(xml.encode("utf-8"))
    tags = [child.tag for child in root.find("Address")]
    assert tags == ["Address1", "Address2", "City", "State", "Zip5", "Zip4"]
    assert root.find("Address/Address2").text == "6406 Ivy Ln"
    # Empty values still emit the element
    assert root.find("Address/Address1") is not None
    assert not root.find("Address/Zip4").text


def test_writer_rate_numbers():
    xml = XMLWriter.build("RateV4Request", "U", RequestBuilder.rate_v4("10001", "90210", "20"))

    root = etree.fromstring(xml.encode("utf-8"))
    assert [child.tag for child in root] == [
        "ID", "Service", "ZipOrigination", "ZipDestination", "Pounds",
        "Ounces", "Container", "Size", "SpecialServices",
    ]
    assert root.findtext("ID") == "0"
    assert root.findtext("Pounds") == "1.25"
    assert root.findtext("Ounces") == "20"
    assert root.findtext("SpecialServices/SpecialService") == "106"


def test_writer_escapes_text():
    xml = XMLWriter.build("Req", "U", {"Address2": "A & B <Suite>"})
    root = etree.fromstring(xml.encode("utf-8"))
    assert root.findtext("Address2") == "A & B <Suite>"


def test_format_value():
    assert format_value(1.0) == "1"
    assert format_value(0.0625) == "0.0625"
    assert format_value(0) == "0"
    assert format_value("STANDARD POST") == "STANDARD POST"
