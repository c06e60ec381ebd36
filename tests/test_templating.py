"""Tests for template instantiation"""

import threading

import pytest

from prefablib.config.settings import PLACEHOLDER_TOKEN
from prefablib.core.embedded_types import default_registry
from prefablib.core.errors import InvalidNameError
from prefablib.core.node import NodeInstance, parse_node_definition
from prefablib.core.templating import build_substitution, instantiate


def _model_node(name_template):
    return parse_node_definition(
        'embedded_components { id: "model" type: "model" '
        f'data: "mesh: \\"/src/a.glb\\" name: \\"{name_template}\\"" }}'
    )


def test_point_light_instance(point_light_text):
    """Instantiating the point light stamps the name and keeps bindings"""
    definition = parse_node_definition(point_light_text)

    instance = instantiate(definition, "Lamp01")

    assert isinstance(instance, NodeInstance)
    assert instance.name == "Lamp01"
    billboard = instance.embedded_entry("model").payload
    assert billboard.name_template == "Lamp01"
    source = definition.embedded_entry("model").payload
    assert billboard.materials == source.materials
    assert billboard.materials[0].textures[0].sampler == "tex0"
    assert billboard.materials[0].textures[0].texture_path.value == (
        "/src/Modules/Render/Scene/Textures/render_light.png"
    )
    assert billboard.mesh_path == source.mesh_path
    assert instance.external_components == definition.external_components


def test_definition_untouched_by_instantiation(point_light_text):
    """The source definition keeps its templates"""
    definition = parse_node_definition(point_light_text)
    instantiate(definition, "Lamp01")
    assert all(model.name_template == PLACEHOLDER_TOKEN for model in definition.models())


def test_instantiation_is_deterministic(point_light_text):
    """Same definition and name give equal instances"""
    definition = parse_node_definition(point_light_text)
    assert instantiate(definition, "Lamp01") == instantiate(definition, "Lamp01")
    assert instantiate(definition, "Lamp01") != instantiate(definition, "Lamp02")


def test_exact_placeholder_round_trip():
    """A template of exactly the token becomes the name"""
    instance = instantiate(_model_node("{{NAME}}"), "Any Name_42")
    assert instance.models()[0].name_template == "Any Name_42"


@pytest.mark.parametrize("name", ["Lamp01", "x", "{{NAME}}"])
def test_template_without_placeholder_is_unchanged(name):
    """Fixed names are copied verbatim"""
    instance = instantiate(_model_node("FixedName"), name)
    assert instance.models()[0].name_template == "FixedName"


def test_placeholder_inside_text_and_repeated():
    """Every occurrence is replaced in place"""
    instance = instantiate(_model_node("{{NAME}}_mesh_{{NAME}}"), "Lamp")
    assert instance.models()[0].name_template == "Lamp_mesh_Lamp"


def test_substitution_is_single_pass():
    """Inserted text is not scanned again"""
    substitute = build_substitution("{{NAME}}{{ROOM}}", {"{{ROOM}}": "Hall"})
    assert substitute("{{NAME}}-{{ROOM}}") == "{{NAME}}{{ROOM}}-Hall"


def test_extra_placeholders():
    """Explicit token mapping is applied with the name"""
    definition = _model_node("{{ROOM}}/{{NAME}}")
    instance = definition.instantiate("Lamp01", {"{{ROOM}}": "Kitchen"})
    assert instance.models()[0].name_template == "Kitchen/Lamp01"


def test_name_is_not_overridden_by_placeholders():
    """The instance name always fills the name token"""
    substitute = build_substitution("Lamp01", {PLACEHOLDER_TOKEN: "Other"})
    assert substitute(PLACEHOLDER_TOKEN) == "Lamp01"


@pytest.mark.parametrize("name", ["", "   ", None])
def test_empty_name_fails(point_light_text, name):
    """Empty names raise InvalidNameError"""
    definition = parse_node_definition(point_light_text)
    with pytest.raises(InvalidNameError):
        instantiate(definition, name)


def test_empty_placeholder_token_fails():
    """Test an empty extra token"""
    with pytest.raises(ValueError):
        build_substitution("Lamp01", {"": "x"})


def test_instance_to_text_carries_name(point_light_text):
    """Instance text output has the resolved name"""
    instance = parse_node_definition(point_light_text).instantiate("Lamp01")
    text = instance.to_text()
    assert 'name: \\"Lamp01\\"' in text
    assert PLACEHOLDER_TOKEN not in text


def test_concurrent_instantiation_from_shared_definition(point_light_text):
    """Threads can stamp instances from one definition without coordination"""
    definition = parse_node_definition(point_light_text)
    results = {}

    def spawn(index):
        results[index] = definition.instantiate(f"Lamp{index:02d}")

    threads = [threading.Thread(target=spawn, args=(i,)) for i in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    for index, instance in results.items():
        assert instance.name == f"Lamp{index:02d}"
        assert {m.name_template for m in instance.models()} == {f"Lamp{index:02d}"}


def test_untemplated_payloads_are_not_shared():
    """Instances get their own copy of payloads without templates"""
    registry = default_registry()
    registry.register("label", lambda block, context, strict: dict(block.fields))
    definition = parse_node_definition(
        'embedded_components { id: "label" type: "label" data: "text: \\"Hello\\"" }',
        registry=registry,
    )

    first = definition.instantiate("A")
    second = definition.instantiate("B")
    first.embedded_entry("label").payload["text"] = "changed"

    assert second.embedded_entry("label").payload == {"text": "Hello"}
    assert definition.embedded_entry("label").payload == {"text": "Hello"}
