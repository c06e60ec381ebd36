"""
Material and Texture Bindings

Named slots that tie a model to its material asset and the textures fed into
the material's samplers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .errors import SchemaError
from .fields import check_unknown_fields, require_string, sub_blocks
from .resource_path import ResourcePath
from .text_format import TextBlock


@dataclass(frozen=True)
class TextureBinding:
    """A sampler slot and the texture bound to it."""

    sampler: str
    texture_path: ResourcePath

    KNOWN_FIELDS = ("sampler", "texture")

    @classmethod
    def from_block(cls, block: TextBlock, context: str, strict: bool = False) -> "TextureBinding":
        check_unknown_fields(block, cls.KNOWN_FIELDS, context, strict)
        return cls(
            sampler=require_string(block, "sampler", context),
            texture_path=ResourcePath(require_string(block, "texture", context)),
        )

    def to_block(self) -> TextBlock:
        return TextBlock((("sampler", self.sampler), ("texture", self.texture_path.value)))

    def to_dict(self) -> Dict[str, Any]:
        return {"sampler": self.sampler, "texture": self.texture_path.value}


@dataclass(frozen=True)
class MaterialBinding:
    """
    A material slot of a model.

    ``slot_name`` is passed through untouched; what "default" means is up to
    the material system. Texture order is kept as written and samplers are
    unique within one binding.
    """

    slot_name: str
    material_path: ResourcePath
    textures: Tuple[TextureBinding, ...] = ()

    KNOWN_FIELDS = ("name", "material", "textures")

    @classmethod
    def from_block(cls, block: TextBlock, context: str, strict: bool = False) -> "MaterialBinding":
        check_unknown_fields(block, cls.KNOWN_FIELDS, context, strict)

        slot_name = require_string(block, "name", context)
        material = require_string(block, "material", context, aliases=("materialPath",))

        textures = []
        samplers = set()
        for index, texture_block in enumerate(sub_blocks(block, "textures", context)):
            binding = TextureBinding.from_block(
                texture_block, f"{context} textures[{index}]", strict
            )
            if binding.sampler in samplers:
                raise SchemaError(f"{context} binds sampler '{binding.sampler}' more than once")
            samplers.add(binding.sampler)
            textures.append(binding)

        return cls(
            slot_name=slot_name,
            material_path=ResourcePath(material),
            textures=tuple(textures),
        )

    def texture_for(self, sampler: str):
        """Return the texture path bound to ``sampler`` or None."""
        for binding in self.textures:
            if binding.sampler == sampler:
                return binding.texture_path
        return None

    def to_block(self) -> TextBlock:
        fields = [("name", self.slot_name), ("material", self.material_path.value)]
        fields.extend(("textures", texture.to_block()) for texture in self.textures)
        return TextBlock(tuple(fields))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.slot_name,
            "material": self.material_path.value,
            "textures": [texture.to_dict() for texture in self.textures],
        }
