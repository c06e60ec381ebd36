"""Shared fixtures for node composition tests"""

from pathlib import Path

import pytest

DATA_DIR = Path(__file__).parent / "data"
LIGHTS_DIR = DATA_DIR / "lights"


@pytest.fixture
def lights_dir():
    return LIGHTS_DIR


@pytest.fixture
def point_light_text():
    return (LIGHTS_DIR / "PointLight.go").read_text(encoding="utf-8")


@pytest.fixture
def area_light_text():
    return (LIGHTS_DIR / "AreaLight.go").read_text(encoding="utf-8")


@pytest.fixture
def spot_light_text():
    return (LIGHTS_DIR / "SpotLight.go").read_text(encoding="utf-8")
