"""
Resource Paths

Logical addresses of external assets ("/src/Scene/Materials/Sphere.material").
Resolving a path to bytes is left to the asset resolution service; this module
only knows what a well-formed path looks like.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Iterable, Optional, Tuple

from ..config.settings import KNOWN_PATH_NAMESPACES, PATH_SEPARATOR
from .errors import InvalidPathError


def validate_path(value: str, namespaces: Optional[Iterable[str]] = None) -> str:
    """
    Check that a resource path is absolute and rooted at a known namespace.

    Args:
        value: Path text
        namespaces: Allowed first segments (defaults to KNOWN_PATH_NAMESPACES)

    Returns:
        The path, unchanged

    Raises:
        InvalidPathError: If the path is malformed
    """
    allowed = tuple(namespaces) if namespaces is not None else KNOWN_PATH_NAMESPACES

    if not isinstance(value, str) or not value:
        raise InvalidPathError("Resource path is empty")
    if "\\" in value:
        raise InvalidPathError(f"Resource path uses '\\' instead of '{PATH_SEPARATOR}': {value!r}")
    if not value.startswith(PATH_SEPARATOR):
        raise InvalidPathError(f"Resource path is not absolute: {value!r}")

    segments = value[1:].split(PATH_SEPARATOR)
    if len(segments) < 2:
        raise InvalidPathError(f"Resource path has no separator below its namespace: {value!r}")
    for segment in segments:
        if not segment.strip():
            raise InvalidPathError(f"Resource path has an empty segment: {value!r}")
        if segment in (".", ".."):
            raise InvalidPathError(f"Resource path has a relative segment '{segment}': {value!r}")

    if segments[0] not in allowed:
        raise InvalidPathError(
            f"Resource path namespace '{segments[0]}' is not one of {list(allowed)}: {value!r}"
        )

    return value


@dataclass(frozen=True)
class ResourcePath:
    """Opaque reference to another asset by its logical path."""

    value: str

    def __str__(self) -> str:
        return self.value

    @property
    def segments(self) -> Tuple[str, ...]:
        return tuple(self.value.strip(PATH_SEPARATOR).split(PATH_SEPARATOR))

    @property
    def namespace(self) -> str:
        """First path segment ("src" for "/src/Meshes/Light.glb")."""
        return self.segments[0]

    @property
    def suffix(self) -> str:
        return PurePosixPath(self.value).suffix

    def validate(self, namespaces: Optional[Iterable[str]] = None) -> "ResourcePath":
        validate_path(self.value, namespaces)
        return self
