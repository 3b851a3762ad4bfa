"""Custom functions made available to pack templates."""

from __future__ import annotations

from typing import Any

__all__ = ["to_string_list", "file_contents"]

_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}


def _quote(text: str) -> str:
    """Double-quote text, escaping quotes, backslashes and unprintable characters."""
    out = ['"']
    for char in text:
        escaped = _ESCAPES.get(char)
        if escaped is not None:
            out.append(escaped)
        elif char.isprintable():
            out.append(char)
        elif ord(char) < 0x80:
            out.append(f"\\x{ord(char):02x}")
        elif ord(char) < 0x10000:
            out.append(f"\\u{ord(char):04x}")
        else:
            out.append(f"\\U{ord(char):08x}")
    out.append('"')
    return "".join(out)


def to_string_list(value: Any) -> str:
    """Render a list as an HCL list of quoted strings, e.g. ["dc1", "dc2"].

    Anything that is not a list or tuple is rendered as a one-element list.
    """
    if isinstance(value, (list, tuple)):
        items = value
    else:
        items = [value]
    return "[" + ", ".join(_quote(str(item)) for item in items) + "]"


def file_contents(path: str) -> str:
    """Return the content of the file at path as text."""
    try:
        with open(path, "rb") as handle:
            content = handle.read()
    except OSError as exc:
        raise OSError(f"failed to read {path}: {exc}") from exc
    return content.decode("utf-8", errors="replace")