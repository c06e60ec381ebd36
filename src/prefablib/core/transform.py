"""
Component Transform

Local placement of a component inside its node. Component blocks may carry
``position { x y z }``, ``rotation { x y z w }`` and ``scale { x y z }``;
absent blocks mean the identity.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import numpy as np
from pyrr import Matrix44, Quaternion, Vector3

from .fields import check_unknown_fields, optional_block, optional_number
from .text_format import TextBlock

TRANSFORM_FIELDS = ("position", "rotation", "scale")


@dataclass(frozen=True)
class ComponentTransform:
    """Translation, rotation (quaternion, x y z w) and scale of a component."""

    position: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    rotation: Tuple[float, float, float, float] = (0.0, 0.0, 0.0, 1.0)
    scale: Tuple[float, float, float] = (1.0, 1.0, 1.0)

    @classmethod
    def from_block(cls, block: TextBlock, context: str, strict: bool = False) -> "ComponentTransform":
        """Read the transform fields of a component block."""

        position = optional_block(block, "position", context)
        rotation = optional_block(block, "rotation", context)
        scale = optional_block(block, "scale", context)

        return cls(
            position=_read_axes(position, ("x", "y", "z"), (0.0, 0.0, 0.0), f"{context} position", strict),
            rotation=_read_axes(rotation, ("x", "y", "z", "w"), (0.0, 0.0, 0.0, 1.0), f"{context} rotation", strict),
            scale=_read_axes(scale, ("x", "y", "z"), (1.0, 1.0, 1.0), f"{context} scale", strict),
        )

    @property
    def is_identity(self) -> bool:
        return self == ComponentTransform()

    def model_matrix(self) -> Matrix44:
        """
        Get the local transformation matrix (scale, then rotate, then translate).

        Returns:
            4x4 transformation matrix
        """
        matrix = Matrix44.from_translation(Vector3(self.position))
        if self.rotation != (0.0, 0.0, 0.0, 1.0):
            quat = np.asarray(self.rotation, dtype=float)
            length = np.linalg.norm(quat)
            if length > 0.0:
                matrix = matrix * Matrix44.from_quaternion(Quaternion(quat / length))
        if self.scale != (1.0, 1.0, 1.0):
            matrix = matrix * Matrix44.from_scale(Vector3(self.scale))
        return matrix

    def transform_point(self, point) -> np.ndarray:
        """Map a point from component space into node space."""
        homogeneous = np.append(np.asarray(point, dtype=float), 1.0)
        return (homogeneous @ np.asarray(self.model_matrix()))[:3]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": list(self.position),
            "rotation": list(self.rotation),
            "scale": list(self.scale),
        }


def _read_axes(block: Optional[TextBlock], axes, defaults, context: str, strict: bool):
    if block is None:
        return tuple(defaults)
    check_unknown_fields(block, axes, context, strict)
    return tuple(
        optional_number(block, axis, context, default)
        for axis, default in zip(axes, defaults)
    )
