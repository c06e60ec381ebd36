"""Core node composition types"""
from .errors import PrefabError, SchemaError, InvalidPathError, InvalidNameError
from .resource_path import ResourcePath, validate_path
from .bindings import TextureBinding, MaterialBinding
from .model import EmbeddedModelDescriptor
from .transform import ComponentTransform
from .embedded_types import EmbeddedTypeRegistry, DEFAULT_REGISTRY, register_embedded_type
from .node import (
    ExternalComponentRef,
    EmbeddedEntry,
    NodeDefinition,
    NodeInstance,
    parse_node_definition,
)
from .templating import instantiate
from .validation import validate_references

__all__ = [
    "PrefabError",
    "SchemaError",
    "InvalidPathError",
    "InvalidNameError",
    "ResourcePath",
    "validate_path",
    "TextureBinding",
    "MaterialBinding",
    "EmbeddedModelDescriptor",
    "ComponentTransform",
    "EmbeddedTypeRegistry",
    "DEFAULT_REGISTRY",
    "register_embedded_type",
    "ExternalComponentRef",
    "EmbeddedEntry",
    "NodeDefinition",
    "NodeInstance",
    "parse_node_definition",
    "instantiate",
    "validate_references",
]
