"""Tests for component transforms"""

import numpy as np
import pytest
from pyrr import Matrix44, Quaternion

from prefablib.core.errors import SchemaError
from prefablib.core.node import parse_node_definition
from prefablib.core.transform import ComponentTransform


def test_default_transform_is_identity():
    """Components without transform blocks sit at the node origin"""
    transform = ComponentTransform()
    assert transform.is_identity
    assert np.allclose(np.array(transform.model_matrix()), np.eye(4))


def test_translation_matrix():
    """Position ends up in the translation row"""
    matrix = np.array(ComponentTransform(position=(1.0, 2.0, 3.0)).model_matrix())

    assert matrix.shape == (4, 4)
    assert matrix[3, 0] == 1.0
    assert matrix[3, 1] == 2.0
    assert matrix[3, 2] == 3.0


def test_scale_matrix():
    """Test non-uniform scale"""
    transform = ComponentTransform(scale=(2.0, 3.0, 4.0))
    assert np.allclose(np.diag(np.array(transform.model_matrix()))[:3], (2.0, 3.0, 4.0))
    assert np.allclose(transform.transform_point((1.0, 1.0, 1.0)), (2.0, 3.0, 4.0))


def test_rotation_matrix_is_normalized():
    """Unnormalized quaternions are normalized before use"""
    rotation = Quaternion.from_z_rotation(np.pi / 2)
    scaled = tuple(float(v) * 3.0 for v in rotation)

    matrix = np.array(ComponentTransform(rotation=scaled).model_matrix())
    expected = np.array(Matrix44.from_quaternion(rotation))

    assert np.allclose(matrix[:3, :3], expected[:3, :3], atol=1e-6)
    assert np.allclose(matrix[:3, :3] @ matrix[:3, :3].T, np.eye(3), atol=1e-6)


def test_transform_parsed_from_component_block():
    """position/rotation/scale blocks are read from components"""
    definition = parse_node_definition(
        'components { id: "Light" component: "/src/a.script" '
        'position { x: 1 y: 2.5 } rotation { z: 0.7071 w: 0.7071 } }\n'
        'embedded_components { id: "model" type: "model" data: "mesh: \\"/src/a.glb\\"" '
        'scale { x: 2 y: 2 z: 2 } }'
    )

    light = definition.component("Light").transform
    assert light.position == (1.0, 2.5, 0.0)
    assert light.rotation == (0.0, 0.0, 0.7071, 0.7071)
    assert light.scale == (1.0, 1.0, 1.0)
    assert definition.embedded_entry("model").transform.scale == (2.0, 2.0, 2.0)


def test_transform_survives_text_output():
    """Non-identity transforms are written back"""
    definition = parse_node_definition(
        'components { id: "Light" component: "/src/a.script" position { x: 1 y: 2 z: 3 } }'
    )
    assert parse_node_definition(definition.to_text()) == definition


@pytest.mark.parametrize(
    "block, message",
    [
        ('position { x: "left" }', "must be a number"),
        ('position { x: true }', "must be a number"),
        ('position: 3', "must be a block"),
        ('position { x: 1 } position { x: 2 }', "more than once"),
    ],
)
def test_malformed_transform_fails(block, message):
    """Bad transform blocks are schema errors"""
    with pytest.raises(SchemaError, match=message):
        parse_node_definition(f'components {{ id: "Light" component: "/src/a.script" {block} }}')


def test_unknown_axis_rejected_in_strict_mode():
    """Test strict axis check"""
    text = 'components { id: "Light" component: "/src/a.script" position { q: 1 } }'
    assert parse_node_definition(text).component("Light").transform.is_identity
    with pytest.raises(SchemaError, match="unknown field 'q'"):
        parse_node_definition(text, strict=True)
