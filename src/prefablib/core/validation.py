"""Strict pass over every resource path referenced by a node."""

from typing import Iterable, Optional, Union

from .errors import InvalidPathError
from .node import NodeDefinition, NodeInstance
from .resource_path import validate_path


def validate_references(
    node: Union[NodeDefinition, NodeInstance],
    namespaces: Optional[Iterable[str]] = None,
) -> Union[NodeDefinition, NodeInstance]:
    """
    Check that every resource path in ``node`` is well formed.

    Whether the referenced assets exist is not checked here.

    Args:
        node: Definition or instance to check
        namespaces: Allowed path namespaces (defaults to KNOWN_PATH_NAMESPACES)

    Returns:
        ``node``, unchanged

    Raises:
        InvalidPathError: On the first malformed path, naming its owner
    """
    allowed = tuple(namespaces) if namespaces is not None else None
    for owner, path in node.resource_paths():
        try:
            validate_path(path.value, allowed)
        except InvalidPathError as e:
            raise InvalidPathError(f"Component '{owner}': {e}") from e
    return node
