"""
Prefab Configuration Settings

All configuration constants for the node composition layer.
Modify these values to change parsing and validation behavior.
"""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# ============================================================================
# Project Paths
# ============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent.parent
ASSETS_DIR = PROJECT_ROOT / "assets"
PREFAB_CONFIG_DIR = ASSETS_DIR / "config" / "prefabs"

# ============================================================================
# Node Files
# ============================================================================

NODE_FILE_EXTENSION = ".go"  # Extension of node definition source files

# Reserved token substituted with the instance name at spawn time
PLACEHOLDER_TOKEN = "{{NAME}}"

# Embedded component type handled out of the box
MODEL_COMPONENT_TYPE = "model"

# ============================================================================
# Resource Paths
# ============================================================================

PATH_SEPARATOR = "/"

# Root segments a resource path may start with ("/builtins/...", "/src/...")
DEFAULT_PATH_NAMESPACES = ("builtins", "src")

# Check every resource path when a node file is loaded from disk
VALIDATE_REFERENCES_ON_LOAD = True

# Reject unknown fields instead of skipping them
STRICT_PARSING = False

# ============================================================================
# Logging
# ============================================================================

LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

# ============================================================================
# Path Namespaces - Loaded from JSON Config
# ============================================================================

def _load_path_namespaces() -> tuple:
    """
    Load extra resource path namespaces from the JSON configuration file.

    Returns:
        Tuple of namespace names (defaults first, then configured extras)
    """
    config_path = PREFAB_CONFIG_DIR / "namespaces.json"

    if not config_path.exists():
        return DEFAULT_PATH_NAMESPACES

    try:
        with open(config_path, 'r', encoding="utf-8") as f:
            config = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Error loading path namespaces from %s: %s", config_path, e)
        return DEFAULT_PATH_NAMESPACES

    extra = config.get("namespaces", []) if isinstance(config, dict) else None
    if not isinstance(extra, list):
        logger.warning("Error loading path namespaces from %s: expected {\"namespaces\": [...]}", config_path)
        return DEFAULT_PATH_NAMESPACES

    namespaces = list(DEFAULT_PATH_NAMESPACES)
    for name in extra:
        name = str(name).strip(PATH_SEPARATOR)
        if name and name not in namespaces:
            namespaces.append(name)

    return tuple(namespaces)

# Load namespaces from JSON configuration
KNOWN_PATH_NAMESPACES = _load_path_namespaces()
