from typing import Any, Dict, Optional, Union

from lxml import etree

from uspsclient.exceptions import ParseError
from uspsclient.models import Tree


class ResponseParser:
    """
    Deserializes a Web Tools response into a generic tree of dicts, lists and strings.

    The document root becomes a single-key dict ``{root_tag: node}``. Each
    element with neither children nor attributes collapses to its text.
    Any other element becomes a dict whose child tags map to lists of child
    nodes (singletons included), with attributes under ``"$"`` and text
    under ``"_"``.
    """

    @staticmethod
    def parse(body: Union[str, bytes], api: Optional[str] = None) -> Dict[str, Tree]:
        """
        Args:
            body: Raw response text or bytes.
            api: The API code of the call, recorded on a :class:`ParseError`.

        Raises:
            ParseError: If ``body`` is empty or not well-formed XML.
        """
        if isinstance(body, str):
            # lxml rejects str input carrying an encoding declaration.
            body = body.encode("utf-8")

        try:
            root = etree.fromstring(body.strip(), parser=_xml_parser())
        except (etree.XMLSyntaxError, ValueError) as e:
            raise ParseError(str(e) or "Empty response body", e, {"method": api, "during": "xml parse"})

        return {_local_name(root.tag): ResponseParser._to_node(root)}

    @staticmethod
    def _to_node(element: Any) -> Tree:
        children = [child for child in element if isinstance(child.tag, str)]
        text = element.text or ""
        if not text.strip():
            text = ""

        if not children and not element.attrib:
            return text

        node: Dict[str, Any] = {}
        if element.attrib:
            node["$"] = {_local_name(k): v for k, v in element.attrib.items()}
        if text:
            node["_"] = text
        for child in children:
            node.setdefault(_local_name(child.tag), []).append(ResponseParser._to_node(child))
        return node


def _xml_parser() -> etree.XMLParser:
    # lxml parsers must not be shared across threads; no entity expansion or network access.
    return etree.XMLParser(resolve_entities=False, no_network=True)


def _local_name(tag: str) -> str:
    return etree.QName(tag).localname
