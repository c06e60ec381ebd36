"""
PrefabLib - Node Composition and Templating

Parses declarative node definitions (external behavior components plus
embedded, typed sub-resources) and stamps out named instances from them.
"""

# Configuration
from .config.settings import PLACEHOLDER_TOKEN, KNOWN_PATH_NAMESPACES

# Core
from .core.errors import PrefabError, SchemaError, InvalidPathError, InvalidNameError
from .core.resource_path import ResourcePath, validate_path
from .core.bindings import TextureBinding, MaterialBinding
from .core.model import EmbeddedModelDescriptor
from .core.transform import ComponentTransform
from .core.embedded_types import EmbeddedTypeRegistry, register_embedded_type
from .core.node import (
    ExternalComponentRef,
    EmbeddedEntry,
    NodeDefinition,
    NodeInstance,
    parse_node_definition,
)
from .core.templating import instantiate
from .core.validation import validate_references

# Loaders
from .loaders import NodeLoader, NodeLoadResult

__version__ = "0.1.0"
__all__ = [
    # Config
    "PLACEHOLDER_TOKEN",
    "KNOWN_PATH_NAMESPACES",
    # Errors
    "PrefabError",
    "SchemaError",
    "InvalidPathError",
    "InvalidNameError",
    # Core
    "ResourcePath",
    "validate_path",
    "TextureBinding",
    "MaterialBinding",
    "EmbeddedModelDescriptor",
    "ComponentTransform",
    "EmbeddedTypeRegistry",
    "register_embedded_type",
    "ExternalComponentRef",
    "EmbeddedEntry",
    "NodeDefinition",
    "NodeInstance",
    "parse_node_definition",
    "instantiate",
    "validate_references",
    # Loaders
    "NodeLoader",
    "NodeLoadResult",
]
