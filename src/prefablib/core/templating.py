"""
Template Instantiation

Turns a NodeDefinition into a NodeInstance by replacing the ``{{NAME}}``
placeholder in name templates. Replacement is plain text, exact match, one
pass; there are no conditionals or expressions.
"""

from __future__ import annotations

import re
from typing import Callable, Mapping, Optional

from ..config.settings import PLACEHOLDER_TOKEN
from .errors import InvalidNameError
from .node import NodeDefinition, NodeInstance


def build_substitution(name: str, placeholders: Optional[Mapping[str, str]] = None) -> Callable[[str], str]:
    """
    Build the text substitution applied to every template.

    Args:
        name: Instance name, replaces PLACEHOLDER_TOKEN
        placeholders: Extra token -> value pairs

    Returns:
        Function mapping a template to its resolved text. Inserted values are
        never scanned again, so a name containing a token stays literal.

    Raises:
        InvalidNameError: If ``name`` is empty or whitespace
    """
    if not isinstance(name, str) or not name.strip():
        raise InvalidNameError(f"Instance name must be a non-empty string, got {name!r}")

    mapping = dict(placeholders or {})
    for token, value in mapping.items():
        if not token:
            raise ValueError("Placeholder tokens must be non-empty")
        if not isinstance(value, str):
            raise TypeError(f"Value for placeholder {token!r} must be a string")
    mapping[PLACEHOLDER_TOKEN] = name

    # Longest token first so overlapping tokens resolve to the longer match
    pattern = re.compile("|".join(re.escape(token) for token in sorted(mapping, key=len, reverse=True)))

    def substitute(template: str) -> str:
        return pattern.sub(lambda match: mapping[match.group(0)], template)

    return substitute


def instantiate(
    definition: NodeDefinition,
    name: str,
    placeholders: Optional[Mapping[str, str]] = None,
) -> NodeInstance:
    """
    Create a named node instance.

    Args:
        definition: Source definition (left untouched)
        name: Non-empty instance name
        placeholders: Optional extra token -> value pairs

    Returns:
        Immutable NodeInstance
    """
    substitute = build_substitution(name, placeholders)
    return NodeInstance(
        name=name,
        external_components=definition.external_components,
        embedded=tuple(entry.instantiate(substitute) for entry in definition.embedded),
    )
