"""Tests for resource path validation"""

import pytest

from prefablib.core.errors import InvalidPathError
from prefablib.core.node import parse_node_definition
from prefablib.core.resource_path import ResourcePath, validate_path
from prefablib.core.validation import validate_references


@pytest.mark.parametrize(
    "path",
    [
        "/src/Modules/Render/Scene/Nodes/PointLight.script",
        "/builtins/assets/meshes/quad.dae",
        "/src/a.glb",
    ],
)
def test_valid_paths(path):
    """Well-formed paths pass unchanged"""
    assert validate_path(path) == path


@pytest.mark.parametrize(
    "path, message",
    [
        ("", "empty"),
        ("src/a.glb", "not absolute"),
        ("/src", "no separator"),
        ("/src//a.glb", "empty segment"),
        ("/src/a/", "empty segment"),
        ("/src/ /a.glb", "empty segment"),
        ("/src/../a.glb", "relative segment"),
        ("\\src\\a.glb", "instead of"),
        ("/assets/a.glb", "namespace 'assets'"),
    ],
)
def test_invalid_paths(path, message):
    """Malformed paths raise InvalidPathError"""
    with pytest.raises(InvalidPathError, match=message):
        validate_path(path)


def test_custom_namespaces():
    """Namespaces can be supplied by the caller"""
    assert validate_path("/assets/a.glb", namespaces=["assets"]) == "/assets/a.glb"
    with pytest.raises(InvalidPathError):
        validate_path("/src/a.glb", namespaces=["assets"])


def test_resource_path_properties():
    """Test ResourcePath helpers"""
    path = ResourcePath("/src/Modules/Render/Scene/Meshes/Light.glb")
    assert str(path) == path.value
    assert path.namespace == "src"
    assert path.segments[-1] == "Light.glb"
    assert path.suffix == ".glb"
    assert path.validate() is path


def test_light_prefabs_validate(point_light_text, area_light_text, spot_light_text):
    """All light prefab paths are well formed"""
    for text in (point_light_text, area_light_text, spot_light_text):
        definition = parse_node_definition(text)
        assert validate_references(definition) is definition


def test_validate_reports_owner():
    """The failing component is named"""
    definition = parse_node_definition(
        'components { id: "Script" component: "/src/a.script" }\n'
        'embedded_components { id: "model" type: "model" data: "mesh: \\"meshes/a.glb\\"" }'
    )
    with pytest.raises(InvalidPathError, match="Component 'model'"):
        validate_references(definition)


def test_validate_instance(point_light_text):
    """Instances can be validated too"""
    instance = parse_node_definition(point_light_text).instantiate("Lamp01")
    assert validate_references(instance) is instance
