"""Low-level RON helpers for repositories.

Definition files use the subset of Rusty Object Notation that the weapon
tables need: named and anonymous structs, tuples, unit tags, lists, maps,
strings, numbers and booleans, with ``//`` and nested ``/* */`` comments and
trailing commas everywhere.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, NoReturn

from .errors import DataLoadError, RonSyntaxError

_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_NUMBER_RE = re.compile(r"[+-]?(?:\d[\d_]*(?:\.[\d_]*)?|\.\d[\d_]*)(?:[eE][+-]?\d[\d_]*)?")
_UNICODE_ESCAPE_RE = re.compile(r"\\u\{([0-9a-fA-F]{1,6})\}")
_ESCAPES = {
    '"': '"',
    "'": "'",
    "\\": "\\",
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
}
_DIGITS = "0123456789"


@dataclass(slots=True)
class RonUnit:
    """A bare tag such as ``Beam`` or a map key such as ``M4``."""

    name: str


@dataclass(slots=True)
class RonTuple:
    """A tuple ``(a, b)`` or a tuple variant ``Projectile(Plasma)``."""

    name: str | None
    items: list[object] = field(default_factory=list)


@dataclass(slots=True)
class RonStruct:
    """A struct ``(field: value)`` or a struct variant ``Ray(damage: 1.0)``."""

    name: str | None
    fields: dict[str, object] = field(default_factory=dict)


@dataclass(slots=True)
class RonMap:
    """A map ``{key: value}``; entries keep source order and duplicate keys."""

    entries: list[tuple[object, object]] = field(default_factory=list)


class _Parser:
    def __init__(self, text: str, source: str) -> None:
        self._text = text
        self._source = source
        self._pos = 0

    def parse_document(self) -> object:
        value = self._parse_value()
        self._skip_ws()
        if self._pos < len(self._text):
            self._error(f"unexpected trailing content {self._describe()}")
        return value

    # -- error reporting ---------------------------------------------------

    def _location(self, pos: int) -> tuple[int, int]:
        line = self._text.count("\n", 0, pos) + 1
        column = pos - (self._text.rfind("\n", 0, pos) + 1) + 1
        return line, column

    def _error(self, message: str, pos: int | None = None) -> NoReturn:
        line, column = self._location(self._pos if pos is None else pos)
        raise RonSyntaxError(message, line, column, self._source)

    def _describe(self) -> str:
        ch = self._peek()
        return "end of input" if not ch else repr(ch)

    # -- scanning ------------------------------------------------------------

    def _peek(self) -> str:
        return self._text[self._pos] if self._pos < len(self._text) else ""

    def _skip_ws(self) -> None:
        text = self._text
        while self._pos < len(text):
            ch = text[self._pos]
            if ch in " \t\r\n":
                self._pos += 1
            elif text.startswith("//", self._pos):
                end = text.find("\n", self._pos)
                self._pos = len(text) if end == -1 else end + 1
            elif text.startswith("/*", self._pos):
                self._skip_block_comment()
            else:
                break

    def _skip_block_comment(self) -> None:
        start = self._pos
        text = self._text
        depth = 0
        while self._pos < len(text):
            if text.startswith("/*", self._pos):
                depth += 1
                self._pos += 2
            elif text.startswith("*/", self._pos):
                depth -= 1
                self._pos += 2
                if depth == 0:
                    return
            else:
                self._pos += 1
        self._error("unterminated block comment", start)

    def _expect(self, ch: str) -> None:
        self._skip_ws()
        if self._peek() != ch:
            self._error(f"expected '{ch}', found {self._describe()}")
        self._pos += 1

    def _parse_sequence(self, close: str, parse_item: Callable[[], None]) -> None:
        while True:
            self._skip_ws()
            if self._peek() == close:
                self._pos += 1
                return
            parse_item()
            self._skip_ws()
            ch = self._peek()
            if ch == ",":
                self._pos += 1
            elif ch == close:
                self._pos += 1
                return
            else:
                self._error(f"expected ',' or '{close}', found {self._describe()}")

    # -- values --------------------------------------------------------------

    def _parse_value(self) -> object:
        self._skip_ws()
        ch = self._peek()
        if not ch:
            self._error("unexpected end of input")
        if ch == '"':
            return self._parse_string()
        if ch == "[":
            return self._parse_list()
        if ch == "{":
            return self._parse_map()
        if ch == "(":
            return self._parse_parenthesized(None)
        if ch in "+-." or ch in _DIGITS:
            return self._parse_number()
        if ch == "_" or ch.isalpha():
            name = self._parse_ident()
            if name == "true":
                return True
            if name == "false":
                return False
            self._skip_ws()
            if self._peek() == "(":
                return self._parse_parenthesized(name)
            return RonUnit(name)
        self._error(f"unexpected character {ch!r}")

    def _parse_ident(self) -> str:
        match = _IDENT_RE.match(self._text, self._pos)
        if match is None:
            self._error(f"expected identifier, found {self._describe()}")
        self._pos = match.end()
        return match.group()

    def _parse_number(self) -> int | float:
        start = self._pos
        match = _NUMBER_RE.match(self._text, start)
        if match is None:
            self._error("invalid number")
        self._pos = match.end()
        nxt = self._peek()
        if nxt and (nxt == "_" or nxt.isalnum()):
            self._error("invalid number", start)
        literal = match.group().replace("_", "")
        if any(marker in literal for marker in ".eE"):
            return float(literal)
        return int(literal)

    def _parse_string(self) -> str:
        start = self._pos
        text = self._text
        self._pos += 1
        parts: list[str] = []
        while True:
            if self._pos >= len(text):
                self._error("unterminated string", start)
            ch = text[self._pos]
            if ch == '"':
                self._pos += 1
                return "".join(parts)
            if ch != "\\":
                parts.append(ch)
                self._pos += 1
                continue
            escape = text[self._pos + 1 : self._pos + 2]
            if escape in _ESCAPES:
                parts.append(_ESCAPES[escape])
                self._pos += 2
            elif escape == "u":
                match = _UNICODE_ESCAPE_RE.match(text, self._pos)
                codepoint = int(match.group(1), 16) if match else -1
                if codepoint < 0 or codepoint > 0x10FFFF:
                    self._error("invalid unicode escape")
                parts.append(chr(codepoint))
                self._pos = match.end()
            else:
                self._error(f"invalid escape sequence '\\{escape}'")

    def _parse_list(self) -> list[object]:
        items: list[object] = []
        self._pos += 1
        self._parse_sequence("]", lambda: items.append(self._parse_value()))
        return items

    def _parse_map(self) -> RonMap:
        result = RonMap()
        self._pos += 1

        def parse_entry() -> None:
            key = self._parse_value()
            self._expect(":")
            result.entries.append((key, self._parse_value()))

        self._parse_sequence("}", parse_entry)
        return result

    def _parse_parenthesized(self, name: str | None) -> RonTuple | RonStruct:
        self._pos += 1
        if self._at_field_name():
            return self._parse_struct_body(name)
        result = RonTuple(name)
        self._parse_sequence(")", lambda: result.items.append(self._parse_value()))
        return result

    def _at_field_name(self) -> bool:
        saved = self._pos
        try:
            self._skip_ws()
            match = _IDENT_RE.match(self._text, self._pos)
            if match is None:
                return False
            self._pos = match.end()
            self._skip_ws()
            return self._peek() == ":"
        finally:
            self._pos = saved

    def _parse_struct_body(self, name: str | None) -> RonStruct:
        result = RonStruct(name)

        def parse_field() -> None:
            key_pos = self._pos
            key = self._parse_ident()
            if key in result.fields:
                self._error(f"duplicate field '{key}'", key_pos)
            self._expect(":")
            result.fields[key] = self._parse_value()

        self._parse_sequence(")", parse_field)
        return result


def is_identifier(name: str) -> bool:
    """Return True if ``name`` can be written bare, without quotes."""
    return _IDENT_RE.fullmatch(name) is not None and name not in ("true", "false")


def parse_ron(text: str, source: str = "<string>") -> object:
    """Parse RON text into plain values and ``Ron*`` nodes."""
    return _Parser(text, source).parse_document()


def load_ron(path: Path) -> object:
    """Load RON from disk and raise DataLoadError on failure."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DataLoadError(f"Definition file not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise DataLoadError(f"Unable to read definition file: {path}") from exc
    return parse_ron(text, source=str(path))
