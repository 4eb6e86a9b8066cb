import json
from functools import reduce
from typing import Any, List, Optional

from uspsclient.exceptions import DomainError, ResponseShapeError
from uspsclient.models import ErrorMessage, Tree


class ResultExtractor:
    """
    Locates an operation's result inside a parsed response and surfaces the
    service's ``Error`` elements as :class:`DomainError`.
    """

    @staticmethod
    def extract(tree: Tree, path: str, api: Optional[str] = None) -> Tree:
        """
        Walks ``tree`` along a dotted ``path`` such as ``"AddressValidateResponse.Address"``.

        A root-level ``Error`` is checked first and wins over everything else.
        At each step a list is collapsed to its first element. When the node
        reached carries its own ``Error`` child, that error is raised instead
        of returning the node.

        Raises:
            DomainError: The service rejected the call (``level="root"``) or the
                         requested item (``level="node"``).
            ResponseShapeError: The path does not exist in the response.
        """
        context = {"method": api, "during": "response"}

        if isinstance(tree, dict) and "Error" in tree:
            error = tree["Error"]
            message = root_error_message(error)
            raise DomainError(message.text, error, context, level="root")

        node = reduce(lambda current, key: _step(current, key, path, api), split_path(path), tree)

        if isinstance(node, dict) and "Error" in node:
            error = node["Error"]
            message = node_error_message(error)
            raise DomainError(message.text, error, context, level="node")

        return node


def split_path(path: str) -> List[str]:
    return [key for key in path.split(".") if key]


def root_error_message(error: Any) -> ErrorMessage:
    """Reads ``Error.Description[0]``, falling back to the stringified node."""
    description = _description_of(error)
    if description is None:
        return ErrorMessage(stringify(error), fallback=True)
    return ErrorMessage(description.strip())


def node_error_message(error: Any) -> ErrorMessage:
    """Reads ``Error[0].Description[0]``, falling back to the stringified node."""
    if isinstance(error, list) and error:
        description = _description_of(error[0])
        if description is not None:
            return ErrorMessage(description.strip())
    return ErrorMessage(stringify(error), fallback=True)


def stringify(node: Any) -> str:
    if isinstance(node, str):
        return node
    if isinstance(node, list) and node and all(isinstance(item, str) for item in node):
        return ",".join(node)
    return json.dumps(node, ensure_ascii=False)


def _description_of(error: Any) -> Optional[str]:
    if not isinstance(error, dict):
        return None
    descriptions = error.get("Description")
    if not isinstance(descriptions, list) or not descriptions:
        return None
    if not isinstance(descriptions[0], str):
        return None
    return descriptions[0]


def _step(current: Tree, key: str, path: str, api: Optional[str]) -> Tree:
    if not isinstance(current, dict) or key not in current:
        raise ResponseShapeError(
            f"Unexpected response shape: '{key}' not found while resolving '{path}'",
            current,
            {"method": api, "during": "extract"},
        )

    value = current[key]
    if isinstance(value, list):
        if not value:
            raise ResponseShapeError(
                f"Unexpected response shape: '{key}' is empty while resolving '{path}'",
                current,
                {"method": api, "during": "extract"},
            )
        value = value[0]
    return value
