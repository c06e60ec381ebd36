"""
Embedded Model Descriptor

Payload of an ``embedded_components`` entry of type "model"::

    mesh: "/builtins/assets/meshes/quad.dae"
    name: "{{NAME}}"
    materials {
      name: "default"
      material: "/src/Scene/Materials/Billboard.material"
      textures { sampler: "tex0" texture: "/src/Scene/Textures/render_light.png" }
    }
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Iterator, Tuple

from .bindings import MaterialBinding
from .fields import check_unknown_fields, optional_string, require_string, sub_blocks
from .resource_path import ResourcePath
from .text_format import TextBlock


@dataclass(frozen=True)
class EmbeddedModelDescriptor:
    """
    Mesh, display-name template and material bindings of an inline model.

    Material order is significant (it is the render priority downstream) and
    is never changed here. A model without ``materials`` blocks has an empty
    binding list.
    """

    mesh_path: ResourcePath
    name_template: str = ""
    materials: Tuple[MaterialBinding, ...] = ()

    KNOWN_FIELDS = ("mesh", "name", "materials")

    @classmethod
    def from_block(cls, block: TextBlock, context: str = "model", strict: bool = False) -> "EmbeddedModelDescriptor":
        """Create a model descriptor from a parsed payload block."""

        check_unknown_fields(block, cls.KNOWN_FIELDS, context, strict)

        materials = tuple(
            MaterialBinding.from_block(material_block, f"{context} materials[{index}]", strict)
            for index, material_block in enumerate(sub_blocks(block, "materials", context))
        )

        return cls(
            mesh_path=ResourcePath(require_string(block, "mesh", context)),
            name_template=optional_string(block, "name", context),
            materials=materials,
        )

    def instantiate(self, substitute: Callable[[str], str]) -> "EmbeddedModelDescriptor":
        """Return a copy whose name template went through ``substitute``."""
        return replace(self, name_template=substitute(self.name_template))

    def resource_paths(self) -> Iterator[ResourcePath]:
        yield self.mesh_path
        for material in self.materials:
            yield material.material_path
            for texture in material.textures:
                yield texture.texture_path

    def to_block(self) -> TextBlock:
        fields = [("mesh", self.mesh_path.value), ("name", self.name_template)]
        fields.extend(("materials", material.to_block()) for material in self.materials)
        return TextBlock(tuple(fields))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mesh": self.mesh_path.value,
            "name": self.name_template,
            "materials": [material.to_dict() for material in self.materials],
        }
