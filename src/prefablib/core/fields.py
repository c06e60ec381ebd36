"""Field access helpers shared by the block-to-dataclass converters."""

import logging
from typing import Iterable, List, Optional

from .errors import SchemaError
from .text_format import TextBlock

logger = logging.getLogger(__name__)


def require_string(block: TextBlock, key: str, context: str, aliases: Iterable[str] = ()) -> str:
    """
    Return the single string stored under ``key`` or one of its aliases.

    Raises:
        SchemaError: If the field is absent, repeated, empty or not a string
    """
    names = (key, *aliases)
    values = [value for name, value in block.fields if name in names]
    if not values:
        raise SchemaError(f"{context} is missing required field '{key}'")
    if len(values) > 1:
        raise SchemaError(f"{context} field '{key}' appears more than once")
    value = values[0]

    if isinstance(value, TextBlock) or not isinstance(value, str):
        raise SchemaError(f"{context} field '{key}' must be a string")
    if not value:
        raise SchemaError(f"{context} field '{key}' is empty")
    return value


def optional_string(block: TextBlock, key: str, context: str, default: str = "") -> str:
    value = _single_value(block, key, context, default)
    if not isinstance(value, str):
        raise SchemaError(f"{context} field '{key}' must be a string")
    return value


def optional_number(block: TextBlock, key: str, context: str, default: float) -> float:
    value = _single_value(block, key, context, default)
    # bool is an int subclass but never a coordinate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SchemaError(f"{context} field '{key}' must be a number")
    return float(value)


def sub_blocks(block: TextBlock, key: str, context: str) -> List[TextBlock]:
    """Return every nested block under ``key``; scalars there are an error."""
    values = block.get_all(key)
    for value in values:
        if not isinstance(value, TextBlock):
            raise SchemaError(f"{context} field '{key}' must be a block")
    return values


def optional_block(block: TextBlock, key: str, context: str) -> Optional[TextBlock]:
    values = sub_blocks(block, key, context)
    if len(values) > 1:
        raise SchemaError(f"{context} field '{key}' appears more than once")
    return values[0] if values else None


def check_unknown_fields(block: TextBlock, known: Iterable[str], context: str, strict: bool) -> None:
    """
    Reject (strict) or skip (lenient) fields outside ``known``.

    Raises:
        SchemaError: In strict mode, naming the first unknown field
    """
    known = set(known)
    unknown = [key for key in block.keys() if key not in known]
    if not unknown:
        return
    if strict:
        raise SchemaError(f"{context} has unknown field '{unknown[0]}'")
    logger.debug("%s: skipping unknown fields %s", context, unknown)


def _single_value(block: TextBlock, key: str, context: str, default):
    values = block.get_all(key)
    if len(values) > 1:
        raise SchemaError(f"{context} field '{key}' appears more than once")
    return values[0] if values else default
