"""Serialize parsed RON values back to text."""
from __future__ import annotations

import math

from .ron_loader import RonMap, RonStruct, RonTuple, RonUnit

_INDENT = "    "
_MAX_INLINE = 72
_STRING_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
    "\0": "\\0",
}


def dumps(value: object) -> str:
    """Return ``value`` as RON text with a trailing newline."""
    return _format(value, 0) + "\n"


def _is_scalar(value: object) -> bool:
    return isinstance(value, (bool, int, float, str, RonUnit))


def _children(value: object) -> list[object]:
    if isinstance(value, list):
        return list(value)
    if isinstance(value, RonTuple):
        return list(value.items)
    if isinstance(value, RonStruct):
        return list(value.fields.values())
    if isinstance(value, RonMap):
        return [part for entry in value.entries for part in entry]
    return []


def _is_flat(value: object) -> bool:
    return _is_scalar(value) or all(_is_scalar(child) for child in _children(value))


def _format(value: object, depth: int) -> str:
    if _is_scalar(value):
        return _format_scalar(value)
    if not isinstance(value, (list, RonTuple, RonStruct, RonMap)):
        raise TypeError(f"Cannot serialize {type(value).__name__} as RON.")
    if all(_is_flat(child) for child in _children(value)):
        inline = _format_inline(value)
        if len(inline) + depth * len(_INDENT) <= _MAX_INLINE:
            return inline
    return _format_block(value, depth)


def _format_scalar(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Cannot serialize non-finite float {value!r} as RON.")
        return repr(value)
    if isinstance(value, str):
        return _quote(value)
    assert isinstance(value, RonUnit)
    return value.name


def _quote(text: str) -> str:
    pieces = []
    for ch in text:
        if ch in _STRING_ESCAPES:
            pieces.append(_STRING_ESCAPES[ch])
        elif ord(ch) < 0x20:
            pieces.append(f"\\u{{{ord(ch):x}}}")
        else:
            pieces.append(ch)
    return '"' + "".join(pieces) + '"'


def _format_inline(value: object) -> str:
    if _is_scalar(value):
        return _format_scalar(value)
    if isinstance(value, list):
        return "[" + ", ".join(_format_inline(item) for item in value) + "]"
    if isinstance(value, RonTuple):
        return (value.name or "") + "(" + ", ".join(_format_inline(item) for item in value.items) + ")"
    if isinstance(value, RonStruct):
        body = ", ".join(f"{key}: {_format_inline(item)}" for key, item in value.fields.items())
        return (value.name or "") + "(" + body + ")"
    assert isinstance(value, RonMap)
    body = ", ".join(f"{_format_inline(key)}: {_format_inline(item)}" for key, item in value.entries)
    return "{" + body + "}"


def _format_block(value: object, depth: int) -> str:
    inner = _INDENT * (depth + 1)
    if isinstance(value, list):
        opener, closer = "[", "]"
        lines = [_format(item, depth + 1) for item in value]
    elif isinstance(value, RonTuple):
        opener, closer = (value.name or "") + "(", ")"
        lines = [_format(item, depth + 1) for item in value.items]
    elif isinstance(value, RonStruct):
        opener, closer = (value.name or "") + "(", ")"
        lines = [f"{key}: {_format(item, depth + 1)}" for key, item in value.fields.items()]
    else:
        assert isinstance(value, RonMap)
        opener, closer = "{", "}"
        lines = [f"{_format(key, depth + 1)}: {_format(item, depth + 1)}" for key, item in value.entries]
    if not lines:
        return opener + closer
    body = "".join(f"{inner}{line},\n" for line in lines)
    return f"{opener}\n{body}{_INDENT * depth}{closer}"
