"""
Text Format

Tokenizer, parser and formatter for the block-structured text format used by
node definition files::

    components {
      id: "Light"
      component: "/src/Nodes/PointLight.script"
    }

A document is an ordered list of fields. A field is either ``key: scalar`` or
``key { ... }`` (``key: { ... }`` is accepted too). Keys may repeat, and the
order of fields is kept exactly as written. Adjacent string literals are
concatenated, which is how nested payloads are usually spread over lines.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Tuple, Union

from .errors import SchemaError

Scalar = Union[str, int, float, bool]


@dataclass(frozen=True)
class Token:
    """A single lexical token with its source position (1-based)."""

    kind: str
    value: Any
    line: int
    column: int

    def describe(self) -> str:
        if self.kind == "string":
            return f"string {self.value!r}"
        return repr(self.value)


_TOKEN_RE = re.compile(
    r"""
    (?P<newline>\n)
    | (?P<ws>[ \t\r\f\v]+)
    | (?P<comment>\#[^\n]*)
    | (?P<string>"(?:[^"\\\n]|\\.)*"|'(?:[^'\\\n]|\\.)*')
    | (?P<number>[-+]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][-+]?\d+)?[fF]?(?![A-Za-z_]))
    | (?P<ident>[A-Za-z_][A-Za-z0-9_.]*)
    | (?P<punct>[{}:,;])
    | (?P<unterminated>["'])
    """,
    re.VERBOSE,
)

_ESCAPE_RE = re.compile(r"\\(x[0-9a-fA-F]{1,2}|[0-7]{1,3}|.)", re.DOTALL)

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "?": "?",
    '"': '"',
    "'": "'",
    "\\": "\\",
}

_FORMAT_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
}


def _unescape(body: str, line: int, column: int) -> str:
    def replace(match):
        seq = match.group(1)
        if seq[0] == "x":
            return chr(int(seq[1:], 16))
        if seq[0] in "01234567":
            return chr(int(seq, 8))
        try:
            return _SIMPLE_ESCAPES[seq]
        except KeyError:
            raise SchemaError(f"Invalid escape sequence '\\{seq}'", line, column) from None

    return _ESCAPE_RE.sub(replace, body)


def tokenize(text: str) -> Iterator[Token]:
    """
    Split source text into tokens.

    Args:
        text: Source text

    Yields:
        Tokens in source order (whitespace and comments dropped)

    Raises:
        SchemaError: On characters that cannot start a token
    """
    pos = 0
    line = 1
    line_start = 0
    length = len(text)

    while pos < length:
        match = _TOKEN_RE.match(text, pos)
        column = pos - line_start + 1
        if match is None:
            raise SchemaError(f"Unexpected character {text[pos]!r}", line, column)

        kind = match.lastgroup
        raw = match.group(kind)

        if kind == "newline":
            line += 1
            line_start = match.end()
        elif kind == "unterminated":
            raise SchemaError("Unterminated string literal", line, column)
        elif kind == "string":
            yield Token("string", _unescape(raw[1:-1], line, column), line, column)
        elif kind == "number":
            number = _parse_number(raw)
            if not math.isfinite(number):
                raise SchemaError(f"Number out of range: {raw}", line, column)
            yield Token("number", number, line, column)
        elif kind in ("ident", "punct"):
            yield Token(kind, raw, line, column)

        pos = match.end()


def _parse_number(raw: str) -> Union[int, float]:
    if raw[-1] in "fF":
        return float(raw[:-1])
    if any(c in raw for c in ".eE"):
        return float(raw)
    return int(raw)


@dataclass(frozen=True)
class TextBlock:
    """
    Ordered, duplicate-preserving sequence of ``(key, value)`` fields.

    Values are scalars (``str``, ``int``, ``float``, ``bool``) or nested
    :class:`TextBlock` instances.
    """

    fields: Tuple[Tuple[str, Any], ...] = ()

    def get(self, key: str, default: Any = None) -> Any:
        """Return the first value stored under ``key``."""
        for name, value in self.fields:
            if name == key:
                return value
        return default

    def get_all(self, key: str) -> List[Any]:
        """Return every value stored under ``key`` in source order."""
        return [value for name, value in self.fields if name == key]

    def keys(self) -> List[str]:
        """Return the distinct keys in order of first appearance."""
        seen: List[str] = []
        for name, _ in self.fields:
            if name not in seen:
                seen.append(name)
        return seen

    def __contains__(self, key: str) -> bool:
        return any(name == key for name, _ in self.fields)

    def __iter__(self):
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)


class _Parser:
    """Recursive-descent parser over a token list."""

    def __init__(self, text: str):
        self._tokens = list(tokenize(text))
        self._pos = 0

    def parse(self) -> TextBlock:
        return self._parse_fields(opening=None)

    def _peek(self) -> Optional[Token]:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _advance(self) -> Token:
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def _eof_position(self) -> Tuple[Optional[int], Optional[int]]:
        if not self._tokens:
            return 1, 1
        last = self._tokens[-1]
        return last.line, last.column

    def _parse_fields(self, opening: Optional[Token]) -> TextBlock:
        fields = []
        while True:
            token = self._peek()

            if token is None:
                if opening is not None:
                    raise SchemaError("Unclosed block, expected '}'", opening.line, opening.column)
                return TextBlock(tuple(fields))

            if token.kind == "punct":
                if token.value == "}":
                    if opening is None:
                        raise SchemaError("Unexpected '}'", token.line, token.column)
                    self._advance()
                    return TextBlock(tuple(fields))
                if token.value in ",;":
                    self._advance()
                    continue

            if token.kind != "ident":
                raise SchemaError(f"Expected field name, found {token.describe()}", token.line, token.column)

            self._advance()
            fields.append((token.value, self._parse_field_value(token)))

    def _parse_field_value(self, key: Token) -> Any:
        token = self._peek()
        has_colon = token is not None and token.kind == "punct" and token.value == ":"
        if has_colon:
            self._advance()
            token = self._peek()

        if token is None:
            line, column = self._eof_position()
            raise SchemaError(f"Unexpected end of input after field '{key.value}'", line, column)

        if token.kind == "punct" and token.value == "{":
            return self._parse_fields(opening=self._advance())

        if not has_colon:
            raise SchemaError(f"Expected ':' or '{{' after field '{key.value}'", token.line, token.column)

        return self._parse_scalar(key)

    def _parse_scalar(self, key: Token) -> Scalar:
        token = self._advance()

        if token.kind == "string":
            parts = [token.value]
            # Adjacent literals form a single value
            while True:
                following = self._peek()
                if following is None or following.kind != "string":
                    break
                parts.append(self._advance().value)
            return "".join(parts)

        if token.kind == "number":
            return token.value

        if token.kind == "ident":
            if token.value == "true":
                return True
            if token.value == "false":
                return False
            return token.value

        raise SchemaError(
            f"Expected a value for field '{key.value}', found {token.describe()}",
            token.line,
            token.column,
        )


def parse_text_block(text: str) -> TextBlock:
    """
    Parse source text into a :class:`TextBlock`.

    The parser keeps no state between calls, so nested payloads are parsed by
    calling this function again on the payload string.

    Raises:
        SchemaError: On any grammar error, with line and column set
    """
    return _Parser(text).parse()


def format_value(value: Any, indent: str = "") -> str:
    """Format a scalar value; multi-line strings become adjacent literals."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            raise ValueError(f"Cannot format non-finite number {value!r}")
        return repr(value)
    if isinstance(value, str):
        lines = value.splitlines(keepends=True) or [""]
        return f"\n{indent}".join(_quote(part) for part in lines)
    raise TypeError(f"Cannot format value of type {type(value).__name__}")


def _quote(value: str) -> str:
    out = []
    for char in value:
        if char in _FORMAT_ESCAPES:
            out.append(_FORMAT_ESCAPES[char])
        elif ord(char) < 0x20:
            out.append(f"\\{ord(char):03o}")
        else:
            out.append(char)
    return '"' + "".join(out) + '"'


def format_block(block: TextBlock, indent: int = 0) -> str:
    """
    Write a block back to text, two spaces per nesting level.

    Args:
        block: Block to format
        indent: Current nesting level

    Returns:
        Text that :func:`parse_text_block` reads back into an equal block
    """
    pad = "  " * indent
    lines = []
    for key, value in block.fields:
        if isinstance(value, TextBlock):
            lines.append(f"{pad}{key} {{")
            inner = format_block(value, indent + 1)
            if inner:
                lines.append(inner)
            lines.append(f"{pad}}}")
        else:
            lines.append(f"{pad}{key}: {format_value(value, pad)}")
    return "\n".join(lines)
