"""
Embedded Component Types

Maps the ``type`` of an ``embedded_components`` entry to the function that
parses its payload. The set of types is closed: a type nobody registered is a
schema error, never a silent skip.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from ..config.settings import MODEL_COMPONENT_TYPE
from .errors import SchemaError
from .model import EmbeddedModelDescriptor
from .text_format import TextBlock

logger = logging.getLogger(__name__)

# parser(payload_block, context, strict) -> payload object
PayloadParser = Callable[[TextBlock, str, bool], Any]


class EmbeddedTypeRegistry:
    """Registry of payload parsers keyed by embedded component type."""

    def __init__(self, parsers: Optional[Dict[str, PayloadParser]] = None):
        self._parsers: Dict[str, PayloadParser] = dict(parsers or {})

    def register(self, type_name: str, parser: PayloadParser, replace: bool = False) -> None:
        """
        Register a payload parser.

        Args:
            type_name: Value of the ``type`` field handled by ``parser``
            parser: Callable taking (block, context, strict)
            replace: Allow overriding an existing registration
        """
        if not type_name:
            raise ValueError("Embedded component type name must be non-empty")
        if type_name in self._parsers and not replace:
            raise ValueError(f"Embedded component type '{type_name}' is already registered")
        self._parsers[type_name] = parser
        logger.debug("Registered embedded component type '%s'", type_name)

    def unregister(self, type_name: str) -> None:
        self._parsers.pop(type_name, None)

    def get(self, type_name: str) -> PayloadParser:
        try:
            return self._parsers[type_name]
        except KeyError:
            raise SchemaError(
                f"Unknown embedded component type '{type_name}' (known: {self.types()})"
            ) from None

    def types(self) -> List[str]:
        return sorted(self._parsers)

    def copy(self) -> "EmbeddedTypeRegistry":
        return EmbeddedTypeRegistry(self._parsers)

    def __contains__(self, type_name: str) -> bool:
        return type_name in self._parsers


def default_registry() -> EmbeddedTypeRegistry:
    """Create a registry holding the built-in types."""
    return EmbeddedTypeRegistry({MODEL_COMPONENT_TYPE: EmbeddedModelDescriptor.from_block})


DEFAULT_REGISTRY = default_registry()


def register_embedded_type(type_name: str, parser: PayloadParser, replace: bool = False) -> None:
    """Register a payload parser on the shared default registry."""
    DEFAULT_REGISTRY.register(type_name, parser, replace=replace)
