"""
Node Definitions

A node definition is a reusable prefab: references to external behavior
components plus inline, typed sub-resources (models). Definitions are parsed
once from source text and never mutated; node instances are stamped out of
them on demand with a concrete name.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple

from .embedded_types import DEFAULT_REGISTRY, EmbeddedTypeRegistry
from .errors import SchemaError
from .fields import check_unknown_fields, require_string, sub_blocks
from .model import EmbeddedModelDescriptor
from .resource_path import ResourcePath
from .text_format import TextBlock, format_block, parse_text_block
from .transform import TRANSFORM_FIELDS, ComponentTransform

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExternalComponentRef:
    """A behavior component (script) defined in another file."""

    id: str
    component_path: ResourcePath
    transform: ComponentTransform = field(default_factory=ComponentTransform)

    KNOWN_FIELDS = ("id", "component", "componentPath") + TRANSFORM_FIELDS

    @classmethod
    def from_block(cls, block: TextBlock, index: int, strict: bool = False) -> "ExternalComponentRef":
        context = f"components[{index}]"
        component_id = require_string(block, "id", context)
        context = f"component '{component_id}'"
        check_unknown_fields(block, cls.KNOWN_FIELDS, context, strict)

        return cls(
            id=component_id,
            component_path=ResourcePath(
                require_string(block, "component", context, aliases=("componentPath",))
            ),
            transform=ComponentTransform.from_block(block, context, strict),
        )

    def to_block(self) -> TextBlock:
        fields = [("id", self.id), ("component", self.component_path.value)]
        fields.extend(_transform_fields(self.transform))
        return TextBlock(tuple(fields))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "component": self.component_path.value,
            "transform": self.transform.to_dict(),
        }


@dataclass(frozen=True)
class EmbeddedEntry:
    """
    An inline sub-resource.

    ``payload`` is whatever the parser registered for ``type`` produced from
    the nested ``data`` text (an :class:`EmbeddedModelDescriptor` for "model").
    ``data`` keeps the source text of the payload.
    """

    id: str
    type: str
    payload: Any
    transform: ComponentTransform = field(default_factory=ComponentTransform)
    data: str = field(default="", compare=False, repr=False)

    KNOWN_FIELDS = ("id", "type", "data") + TRANSFORM_FIELDS

    @classmethod
    def from_block(
        cls,
        block: TextBlock,
        index: int,
        strict: bool = False,
        registry: Optional[EmbeddedTypeRegistry] = None,
    ) -> "EmbeddedEntry":
        registry = registry if registry is not None else DEFAULT_REGISTRY

        context = f"embedded_components[{index}]"
        entry_id = require_string(block, "id", context)
        context = f"embedded component '{entry_id}'"
        check_unknown_fields(block, cls.KNOWN_FIELDS, context, strict)

        type_name = require_string(block, "type", context)
        parser = registry.get(type_name)

        data_values = block.get_all("data")
        if not data_values:
            raise SchemaError(f"{context} is missing required field 'data'")
        if len(data_values) > 1:
            raise SchemaError(f"{context} field 'data' appears more than once")
        data = data_values[0]
        if not isinstance(data, str):
            raise SchemaError(f"{context} field 'data' must be a string")

        # The payload goes through the same grammar as the outer document
        try:
            payload_block = parse_text_block(data)
        except SchemaError as e:
            raise SchemaError.wrap(f"{context} has malformed data", e) from e

        return cls(
            id=entry_id,
            type=type_name,
            payload=parser(payload_block, f"{context} ({type_name})", strict),
            transform=ComponentTransform.from_block(block, context, strict),
            data=data,
        )

    def instantiate(self, substitute: Callable[[str], str]) -> "EmbeddedEntry":
        """Copy of this entry with templates in the payload substituted."""
        instantiate_payload = getattr(self.payload, "instantiate", None)
        if instantiate_payload is None:
            # Each instance owns a private copy of an untemplated payload
            return replace(self, payload=copy.deepcopy(self.payload))
        payload = instantiate_payload(substitute)
        return replace(self, payload=payload, data=_payload_text(payload, self.data))

    def to_block(self) -> TextBlock:
        fields = [
            ("id", self.id),
            ("type", self.type),
            ("data", _payload_text(self.payload, self.data)),
        ]
        fields.extend(_transform_fields(self.transform))
        return TextBlock(tuple(fields))

    def to_dict(self) -> Dict[str, Any]:
        to_dict = getattr(self.payload, "to_dict", None)
        return {
            "id": self.id,
            "type": self.type,
            "data": to_dict() if to_dict is not None else self.data,
            "transform": self.transform.to_dict(),
        }


def _payload_text(payload: Any, fallback: str) -> str:
    to_block = getattr(payload, "to_block", None)
    if to_block is None:
        return fallback
    return format_block(to_block()) + "\n"


def _transform_fields(transform: ComponentTransform) -> List[Tuple[str, TextBlock]]:
    fields = []
    if transform.position != (0.0, 0.0, 0.0):
        fields.append(("position", TextBlock(tuple(zip("xyz", transform.position)))))
    if transform.rotation != (0.0, 0.0, 0.0, 1.0):
        fields.append(("rotation", TextBlock(tuple(zip("xyzw", transform.rotation)))))
    if transform.scale != (1.0, 1.0, 1.0):
        fields.append(("scale", TextBlock(tuple(zip("xyz", transform.scale)))))
    return fields


class _ComponentContainer:
    """Lookup helpers shared by definitions and instances."""

    external_components: Tuple[ExternalComponentRef, ...]
    embedded: Tuple[EmbeddedEntry, ...]

    @property
    def ids(self) -> List[str]:
        return [c.id for c in self.external_components] + [e.id for e in self.embedded]

    def component(self, component_id: str) -> Optional[ExternalComponentRef]:
        for component in self.external_components:
            if component.id == component_id:
                return component
        return None

    def embedded_entry(self, entry_id: str) -> Optional[EmbeddedEntry]:
        for entry in self.embedded:
            if entry.id == entry_id:
                return entry
        return None

    def models(self) -> List[EmbeddedModelDescriptor]:
        """Model payloads in declaration order."""
        return [e.payload for e in self.embedded if isinstance(e.payload, EmbeddedModelDescriptor)]

    def resource_paths(self) -> Iterator[Tuple[str, ResourcePath]]:
        """Yield ``(owner id, path)`` for every resource path referenced."""
        for component in self.external_components:
            yield component.id, component.component_path
        for entry in self.embedded:
            paths = getattr(entry.payload, "resource_paths", None)
            if paths is None:
                continue
            for path in paths():
                yield entry.id, path

    def to_block(self) -> TextBlock:
        fields = [("components", c.to_block()) for c in self.external_components]
        fields.extend(("embedded_components", e.to_block()) for e in self.embedded)
        return TextBlock(tuple(fields))

    def to_text(self) -> str:
        """Source text in the node file format."""
        return format_block(self.to_block()) + "\n"


@dataclass(frozen=True)
class NodeDefinition(_ComponentContainer):
    """Parsed, validated node definition."""

    external_components: Tuple[ExternalComponentRef, ...] = ()
    embedded: Tuple[EmbeddedEntry, ...] = ()

    KNOWN_FIELDS = ("components", "embedded_components")

    @classmethod
    def from_block(
        cls,
        block: TextBlock,
        strict: bool = False,
        registry: Optional[EmbeddedTypeRegistry] = None,
    ) -> "NodeDefinition":
        """
        Create a node definition from a parsed document block.

        Args:
            block: Top-level document block
            strict: Reject unknown fields instead of skipping them
            registry: Embedded type registry (defaults to DEFAULT_REGISTRY)

        Raises:
            SchemaError: On missing fields, duplicate ids or unknown types
        """
        check_unknown_fields(block, cls.KNOWN_FIELDS, "node", strict)

        components = tuple(
            ExternalComponentRef.from_block(component_block, index, strict)
            for index, component_block in enumerate(sub_blocks(block, "components", "node"))
        )
        embedded = tuple(
            EmbeddedEntry.from_block(entry_block, index, strict, registry)
            for index, entry_block in enumerate(sub_blocks(block, "embedded_components", "node"))
        )

        seen = set()
        for component_id in [c.id for c in components] + [e.id for e in embedded]:
            if component_id in seen:
                raise SchemaError(f"Duplicate component id '{component_id}'")
            seen.add(component_id)

        return cls(external_components=components, embedded=embedded)

    @classmethod
    def parse(
        cls,
        text: str,
        strict: bool = False,
        registry: Optional[EmbeddedTypeRegistry] = None,
    ) -> "NodeDefinition":
        """Parse node source text."""
        return cls.from_block(parse_text_block(text), strict=strict, registry=registry)

    def instantiate(self, name: str, placeholders: Optional[Mapping[str, str]] = None) -> "NodeInstance":
        """Create a named instance of this definition."""
        from .templating import instantiate

        return instantiate(self, name, placeholders)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "components": [c.to_dict() for c in self.external_components],
            "embedded_components": [e.to_dict() for e in self.embedded],
        }


@dataclass(frozen=True)
class NodeInstance(_ComponentContainer):
    """A definition with its templates resolved for one concrete name."""

    name: str
    external_components: Tuple[ExternalComponentRef, ...] = ()
    embedded: Tuple[EmbeddedEntry, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "components": [c.to_dict() for c in self.external_components],
            "embedded_components": [e.to_dict() for e in self.embedded],
        }


def parse_node_definition(
    text: str,
    strict: bool = False,
    registry: Optional[EmbeddedTypeRegistry] = None,
) -> NodeDefinition:
    """
    Parse node source text into a :class:`NodeDefinition`.

    Parsing is all-or-nothing: either every block is valid or SchemaError is
    raised and nothing is returned.
    """
    definition = NodeDefinition.parse(text, strict=strict, registry=registry)
    logger.debug(
        "Parsed node definition: %d components, %d embedded",
        len(definition.external_components),
        len(definition.embedded),
    )
    return definition
