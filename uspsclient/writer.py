from typing import Any, Dict

from lxml import etree


class XMLWriter:
    """
    Compiles an operation's parameter tree into the XML envelope sent to
    USPS Web Tools.
    """

    @staticmethod
    def build(operation: str, user_id: str, params: Dict[str, Any]) -> str:
        """
        Renders ``params`` under a root element named after the request type.

        Args:
            operation: The request type, e.g. ``AddressValidateRequest``.
            user_id: The account USERID, set as an attribute on the root.
            params: Ordered mapping of child names to values. Nested mappings
                    become child elements.

        Returns:
            str: The serialized document, XML declaration included.
        """
        root = etree.Element(operation)
        root.set("USERID", user_id)
        XMLWriter._append_children(root, params)

        return etree.tostring(root, xml_declaration=True, encoding="UTF-8").decode("utf-8")

    @staticmethod
    def _append_children(parent: etree._Element, params: Dict[str, Any]) -> None:
        for name, value in params.items():
            XMLWriter._append_element(parent, name, value)

    @staticmethod
    def _append_element(parent: etree._Element, name: str, value: Any) -> None:
        node = etree.SubElement(parent, name)
        if isinstance(value, dict):
            XMLWriter._append_children(node, value)
        elif value is not None:
            node.text = format_value(value)


def format_value(value: Any) -> str:
    """Renders a scalar the way the service expects (``1.0`` is sent as ``1``)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
