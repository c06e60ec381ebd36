"""Node loader for prefab definition files on disk."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from ..config.settings import (
    KNOWN_PATH_NAMESPACES,
    NODE_FILE_EXTENSION,
    PROJECT_ROOT,
    STRICT_PARSING,
    VALIDATE_REFERENCES_ON_LOAD,
)
from ..core.embedded_types import EmbeddedTypeRegistry
from ..core.errors import SchemaError
from ..core.node import NodeDefinition, NodeInstance, parse_node_definition
from ..core.resource_path import ResourcePath
from ..core.validation import validate_references

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NodeLoadResult:
    """Result returned from :class:`NodeLoader`."""

    definition: NodeDefinition
    source_path: Path
    resource_path: Optional[ResourcePath] = None

    def instantiate(self, name: str) -> NodeInstance:
        return self.definition.instantiate(name)


class NodeLoader:
    """Load node definitions from text files."""

    def __init__(
        self,
        project_root: Optional[Path] = None,
        strict: bool = STRICT_PARSING,
        validate: bool = VALIDATE_REFERENCES_ON_LOAD,
        namespaces: Optional[Iterable[str]] = None,
        registry: Optional[EmbeddedTypeRegistry] = None,
    ):
        self.project_root = Path(project_root) if project_root is not None else PROJECT_ROOT
        self.strict = strict
        self.validate = validate
        self.namespaces = tuple(namespaces) if namespaces is not None else KNOWN_PATH_NAMESPACES
        self.registry = registry

    def resolve(self, path: Path | str) -> Path:
        """Resolve a file path, relative paths against the project root first."""

        node_path = Path(path)
        if node_path.is_absolute():
            return node_path.resolve()

        candidate = (self.project_root / node_path).resolve()
        if candidate.exists():
            return candidate

        # allow paths relative to the working directory
        return node_path.resolve()

    def load_node(self, path: Path | str) -> NodeLoadResult:
        """
        Load a node definition from disk.

        Args:
            path: Node file path

        Returns:
            NodeLoadResult with the parsed definition

        Raises:
            FileNotFoundError: If the file does not exist
            SchemaError: If the file is malformed
            InvalidPathError: If validation is enabled and a path is malformed
        """
        node_path = self.resolve(path)
        if not node_path.exists():
            raise FileNotFoundError(f"Node file not found: {node_path}")

        if node_path.suffix != NODE_FILE_EXTENSION:
            logger.debug("Loading node file with unexpected extension: %s", node_path)

        try:
            text = node_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise SchemaError(f"{node_path}: not valid UTF-8 text ({e.reason} at byte {e.start})") from e

        try:
            definition = parse_node_definition(text, strict=self.strict, registry=self.registry)
        except SchemaError as e:
            raise SchemaError.wrap(str(node_path), e) from e

        if self.validate:
            validate_references(definition, self.namespaces)

        logger.info("Loaded node %s (%d components)", node_path.name, len(definition.ids))

        return NodeLoadResult(
            definition=definition,
            source_path=node_path,
            resource_path=self._resource_path_for(node_path),
        )

    def _resource_path_for(self, node_path: Path) -> Optional[ResourcePath]:
        """Logical path of a file under the project root ("/src/Nodes/X.go")."""
        try:
            relative = node_path.relative_to(self.project_root.resolve())
        except ValueError:
            return None
        return ResourcePath("/" + relative.as_posix())
