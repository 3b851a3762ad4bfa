"""Typed flag values and the parsing helpers they rely on.

Every value type keeps its current value, knows how to parse a command-line
string into it, and can render itself back as text for help output.
"""

from __future__ import annotations

import json
import math
import os
import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from datetime import timedelta
from decimal import Decimal
from fractions import Fraction
from typing import Any, ClassVar

__all__ = [
    "FlagValue",
    "BoolValue",
    "EnumValue",
    "EnumSingleValue",
    "Float64Value",
    "IntValue",
    "DurationValue",
    "StringMapValue",
    "StringSliceValue",
    "parse_bool",
    "parse_int",
    "parse_uint",
    "parse_duration",
    "format_duration",
    "append_duration_suffix",
    "map_to_kv",
    "env_default",
    "env_bool_default",
    "env_duration_default",
]

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_UINT64_MAX = 2**64 - 1

_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_DURATION_UNITS = {
    "ns": 1,
    "us": 1_000,
    "\u00b5s": 1_000,
    "\u03bcs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}
_NUMBER_RE = re.compile(r"([0-9]*)(?:\.([0-9]*))?")
_UNIT_RE = re.compile(r"[^0-9.]*")


# -- parsing helpers ---------------------------------------------------------


def parse_bool(text: str) -> bool:
    """Parse a boolean the way the command line accepts it (1, t, true, ...)."""
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    raise ValueError(f"invalid boolean value {text!r}")


def _parse_integer(text: str, *, signed: bool) -> int:
    if not text or not text.isascii() or text != text.strip():
        raise ValueError(f"invalid integer value {text!r}")
    sign = ""
    body = text
    if body[0] in "+-":
        if not signed:
            raise ValueError(f"invalid unsigned integer value {text!r}")
        sign, body = body[0], body[1:]
    if len(body) > 1 and body[0] == "0" and body[1] not in "xXbBoO":
        # A bare leading zero means octal.
        body = "0o" + body[1:]
    try:
        value = int(sign + body, 0)
    except ValueError:
        raise ValueError(f"invalid integer value {text!r}") from None
    low, high = (_INT64_MIN, _INT64_MAX) if signed else (0, _UINT64_MAX)
    if not low <= value <= high:
        raise ValueError(f"integer value {text!r} out of range")
    return value


def parse_int(text: str) -> int:
    """Parse a signed 64-bit integer; 0x, 0o, 0b and leading-0 prefixes pick the base."""
    return _parse_integer(text, signed=True)


def parse_uint(text: str) -> int:
    """Parse an unsigned 64-bit integer; base prefixes as in parse_int."""
    return _parse_integer(text, signed=False)


def _parse_float(text: str) -> float:
    if not text or not text.isascii() or text != text.strip():
        raise ValueError(f"invalid float value {text!r}")
    unsigned = text.lstrip("+-")
    try:
        if unsigned[:2].lower() == "0x":
            value = float.fromhex(text)
        else:
            value = float(text)
    except ValueError:
        raise ValueError(f"invalid float value {text!r}") from None
    return value


def _parse_duration_ns(text: str) -> int:
    invalid = ValueError(f"invalid duration {text!r}")
    rest = text
    negative = False
    if rest and rest[0] in "+-":
        negative = rest[0] == "-"
        rest = rest[1:]
    if rest == "0":
        return 0
    if not rest:
        raise invalid
    total = 0
    while rest:
        number = _NUMBER_RE.match(rest)
        whole, frac = number.group(1), number.group(2) or ""
        if not whole and not frac:
            raise invalid
        rest = rest[number.end():]
        unit_match = _UNIT_RE.match(rest)
        unit = unit_match.group(0)
        if not unit:
            raise ValueError(f"missing unit in duration {text!r}")
        scale = _DURATION_UNITS.get(unit)
        if scale is None:
            raise ValueError(f"unknown unit {unit!r} in duration {text!r}")
        rest = rest[unit_match.end():]
        total += int(whole or "0") * scale
        if frac:
            total += int(Fraction(int(frac), 10 ** len(frac)) * scale)
        if total > _INT64_MAX + (1 if negative else 0):
            raise invalid
    return -total if negative else total


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as "1h30m", "1.5s" or "250ms".

    Sub-microsecond parts are truncated.
    """
    nanos = _parse_duration_ns(text)
    micros = abs(nanos) // 1_000
    return timedelta(microseconds=-micros if nanos < 0 else micros)


def _format_fraction(value: int, precision: int) -> tuple[int, str]:
    digits: list[str] = []
    significant = False
    for _ in range(precision):
        digit = value % 10
        significant = significant or digit != 0
        if significant:
            digits.append(str(digit))
        value //= 10
    fraction = "." + "".join(reversed(digits)) if digits else ""
    return value, fraction


def format_duration(value: timedelta) -> str:
    """Render a duration in the compact form "1h2m3.5s", "250ms" or "0s"."""
    nanos = (value // timedelta(microseconds=1)) * 1_000
    magnitude = abs(nanos)
    if magnitude == 0:
        return "0s"
    if magnitude < 1_000_000_000:
        if magnitude < 1_000:
            out = f"{magnitude}ns"
        elif magnitude < 1_000_000:
            whole, fraction = _format_fraction(magnitude, 3)
            out = f"{whole}{fraction}\u00b5s"
        else:
            whole, fraction = _format_fraction(magnitude, 6)
            out = f"{whole}{fraction}ms"
    else:
        seconds, fraction = _format_fraction(magnitude, 9)
        out = f"{seconds % 60}{fraction}s"
        minutes = seconds // 60
        if minutes:
            out = f"{minutes % 60}m{out}"
            hours = minutes // 60
            if hours:
                out = f"{hours}h{out}"
    return "-" + out if nanos < 0 else out


def append_duration_suffix(text: str) -> str:
    """Treat a duration without a unit suffix as seconds."""
    if text.endswith(("s", "m", "h")):
        return text
    return text + "s"


def map_to_kv(mapping: Mapping[str, str] | None) -> str:
    """Render a mapping as comma-separated key=value pairs sorted by key."""
    if not mapping:
        return ""
    return ",".join(f"{key}={mapping[key]}" for key in sorted(mapping))


def _format_float(value: float, fmt: str = "g") -> str:
    """Shortest round-tripping rendering in "g" or "e" style."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    sign = "-" if math.copysign(1.0, value) < 0 else ""
    if value == 0:
        digits, point = "0", 1
    else:
        parts = Decimal(repr(abs(value))).as_tuple()
        point = len(parts.digits) + parts.exponent
        digits = "".join(str(d) for d in parts.digits).rstrip("0") or "0"
    exponent = point - 1
    if fmt == "e" or exponent < -4 or exponent >= 6:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        exp_sign = "+" if exponent >= 0 else "-"
        return f"{sign}{mantissa}e{exp_sign}{abs(exponent):02d}"
    if point <= 0:
        body = "0." + "0" * -point + digits
    elif point >= len(digits):
        body = digits + "0" * (point - len(digits))
    else:
        body = digits[:point] + "." + digits[point:]
    return sign + body


# -- environment helpers -----------------------------------------------------


def env_default(key: str, default: str) -> str:
    """Return the environment variable if it is set, else the default."""
    return os.environ.get(key, default)


def env_bool_default(key: str, default: bool) -> bool:
    """Return the environment variable as a boolean; an unparsable value raises."""
    if key in os.environ:
        return parse_bool(os.environ[key])
    return default


def env_duration_default(key: str, default: timedelta) -> timedelta:
    """Return the environment variable as a duration; an unparsable value raises."""
    if key in os.environ:
        return parse_duration(os.environ[key])
    return default


# -- value types -------------------------------------------------------------


class FlagValue(ABC):
    """A flag's current value, settable from command-line text."""

    type_name: ClassVar[str] = ""
    example: ClassVar[str] = ""
    is_bool_flag: ClassVar[bool] = False

    def __init__(
        self,
        default: Any = None,
        *,
        hidden: bool = False,
        set_hook: Callable[[Any], None] | None = None,
    ) -> None:
        self.value = default
        self.hidden = hidden
        self.set_hook = set_hook

    @abstractmethod
    def _parse(self, text: str) -> Any:
        """Convert command-line text into a value, raising ValueError if invalid."""

    def set(self, text: str) -> None:
        """Parse text, store it and run the set hook if there is one."""
        value = self._parse(text)
        self.value = value
        if self.set_hook is not None:
            self.set_hook(value)

    def get(self) -> Any:
        """Return the current value."""
        return self.value

    def __str__(self) -> str:
        return str(self.value)


class BoolValue(FlagValue):
    """A boolean flag that may be given without an explicit value."""

    type_name = "bool"
    is_bool_flag = True

    def __init__(
        self,
        default: bool = False,
        *,
        hidden: bool = False,
        set_hook: Callable[[bool], None] | None = None,
    ) -> None:
        super().__init__(default, hidden=hidden, set_hook=set_hook)

    def _parse(self, text: str) -> bool:
        return parse_bool(text)

    def __str__(self) -> str:
        return "true" if self.value else "false"


class EnumValue(FlagValue):
    """A list of choices from a fixed set; each set call appends to it."""

    type_name = "enum"
    example = "string"

    def __init__(
        self,
        values: Iterable[str],
        default: Iterable[str] | None = None,
        *,
        hidden: bool = False,
    ) -> None:
        super().__init__(list(default) if default is not None else None, hidden=hidden)
        self.values = list(values)

    def _parse(self, text: str) -> list[str]:
        return [part.strip() for part in text.split(",")]

    def set(self, text: str) -> None:
        if self.value is None:
            self.value = []
        for choice in self._parse(text):
            if choice not in self.values:
                raise ValueError(
                    f"'{choice}' not valid. Must be one of: {', '.join(self.values)}"
                )
            self.value.append(choice)

    def __str__(self) -> str:
        return ",".join(self.value or [])


class EnumSingleValue(FlagValue):
    """A single choice from a fixed set."""

    type_name = "EnumSingle"
    example = "string"

    def __init__(
        self,
        values: Iterable[str],
        default: str = "",
        *,
        hidden: bool = False,
        set_hook: Callable[[str], None] | None = None,
    ) -> None:
        super().__init__(default, hidden=hidden, set_hook=set_hook)
        self.values = list(values)

    def _parse(self, text: str) -> str:
        if text not in self.values:
            raise ValueError(
                f"'{text}' not valid. Must be one of: {', '.join(self.values)}"
            )
        return text


class Float64Value(FlagValue):
    """A floating point flag."""

    type_name = "float64"
    example = "float"

    def __init__(self, default: float = 0.0, *, hidden: bool = False) -> None:
        super().__init__(default, hidden=hidden)

    def _parse(self, text: str) -> float:
        return _parse_float(text)

    def __str__(self) -> str:
        return _format_float(self.value)


class IntValue(FlagValue):
    """An integer flag; kind is one of int, int64, uint or uint64."""

    _KINDS: ClassVar[frozenset[str]] = frozenset({"int", "int64", "uint", "uint64"})

    def __init__(
        self,
        default: int = 0,
        *,
        kind: str = "int",
        hidden: bool = False,
        set_hook: Callable[[int], None] | None = None,
    ) -> None:
        if kind not in self._KINDS:
            raise ValueError(f"unknown integer kind {kind!r}")
        super().__init__(default, hidden=hidden, set_hook=set_hook)
        self.kind = kind

    @property
    def type_name(self) -> str:  # type: ignore[override]
        return self.kind

    @property
    def example(self) -> str:  # type: ignore[override]
        return "uint" if self.kind.startswith("uint") else "int"

    @property
    def unsigned(self) -> bool:
        """Whether negative values are rejected."""
        return self.kind.startswith("uint")

    def _parse(self, text: str) -> int:
        return parse_uint(text) if self.unsigned else parse_int(text)


class DurationValue(FlagValue):
    """A duration flag; a bare number is taken as seconds."""

    type_name = "duration"
    example = "duration"

    def __init__(
        self, default: timedelta = timedelta(0), *, hidden: bool = False
    ) -> None:
        super().__init__(default, hidden=hidden)

    def _parse(self, text: str) -> timedelta:
        return parse_duration(append_duration_suffix(text))

    def __str__(self) -> str:
        return format_duration(self.value)


class StringMapValue(FlagValue):
    """A key=value mapping built up by repeated set calls."""

    type_name = "StringMap"
    example = "key=value"

    def __init__(
        self, default: Mapping[str, str] | None = None, *, hidden: bool = False
    ) -> None:
        super().__init__(dict(default) if default is not None else None, hidden=hidden)

    def _parse(self, text: str) -> tuple[str, str]:
        key, sep, value = text.partition("=")
        if not sep:
            raise ValueError(
                f"missing = in KV pair: {json.dumps(text, ensure_ascii=False)}"
            )
        return key, value

    def set(self, text: str) -> None:
        key, value = self._parse(text)
        if self.value is None:
            self.value = {}
        self.value[key] = value

    def __str__(self) -> str:
        return map_to_kv(self.value)


class StringSliceValue(FlagValue):
    """A list of strings; the first set replaces the default, later ones append."""

    type_name = "StringSlice"
    example = "string"

    def __init__(
        self, default: Iterable[str] | None = None, *, hidden: bool = False
    ) -> None:
        super().__init__(list(default) if default is not None else None, hidden=hidden)
        self._was_set = False

    def _parse(self, text: str) -> list[str]:
        return text.strip().split(",")

    def set(self, text: str) -> None:
        if not self._was_set:
            self._was_set = True
            self.value = []
        self.value.extend(self._parse(text))

    def __str__(self) -> str:
        return ",".join(self.value or [])