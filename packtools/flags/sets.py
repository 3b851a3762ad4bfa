"""Grouped flag sets with posix-style parsing and a single-dash fallback.

Flags are registered on named :class:`Set` groups, all of which feed one
shared union table that is actually parsed.  The groups are kept for help
generation.  Arguments that look like single-dash long flags (``-verbose``)
are parsed by a second, stricter parser that stops at the first positional
argument.
"""

from __future__ import annotations

import json
import math
import os
import re
from collections import deque
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

from packtools.flags.values import (
    BoolValue,
    DurationValue,
    EnumSingleValue,
    EnumValue,
    Float64Value,
    FlagValue,
    IntValue,
    StringMapValue,
    StringSliceValue,
    _format_float,
    _parse_float,
    append_duration_suffix,
    format_duration,
    map_to_kv,
    parse_bool,
    parse_duration,
    parse_int,
    parse_uint,
)

__all__ = [
    "FlagError",
    "FlagAfterArgsError",
    "Flag",
    "VarFlag",
    "Set",
    "Sets",
    "wrap_at_length_with_padding",
    "has_go_flags",
    "check_flags_after_args",
    "default_is_zero_value",
]

MAX_LINE_LENGTH = 78

_WHITESPACE_RE = re.compile(r"\s+")
_WRAP_PENALTY = 100_000

_FLAG_AFTER_ARGS_MESSAGE = (
    "Flags must be specified before positional arguments when using single-dash\n"
    ' long flags. For example, "nomad-pack plan -verbose example" instead\n'
    ' of "nomad-pack plan example -verbose".\n'
    "\n"
    " The CLI also accepts posix flags, which does allow flags after positional\n"
    ' arguments. For example, both "nomad-pack plan --verbose example" and\n'
    ' "nomad-pack plan example --verbose" are valid commands.'
)


class FlagError(ValueError):
    """Raised when flags cannot be registered or parsed."""


class FlagAfterArgsError(FlagError):
    """Raised when single-dash flags appear after positional arguments."""

    def __init__(self, message: str = _FLAG_AFTER_ARGS_MESSAGE) -> None:
        super().__init__(message)


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


@dataclass
class Flag:
    """A flag registered in one table."""

    name: str
    value: Any
    shorthand: str = ""
    usage: str = ""
    def_value: str = ""
    no_opt_def_val: str = ""
    hidden: bool = False
    deprecated: str = ""
    changed: bool = False


@dataclass
class VarFlag:
    """Everything needed to register a value under a name, with help details."""

    name: str
    value: Any
    aliases: Sequence[str] = ()
    usage: str = ""
    default: str = ""
    env_var: str = ""
    completion: Any = None
    shorthand: str = ""


class _PosixTable:
    """Flag table parsed with posix rules: --long, -s, interspersed args."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.flags: dict[str, Flag] = {}
        self.shorthands: dict[str, Flag] = {}
        self.args: list[str] = []
        self.parsed = False

    def add(self, value: Any, name: str, shorthand: str = "", usage: str = "") -> Flag:
        if name in self.flags:
            raise FlagError(f"{self.name} flag redefined: {name}")
        if shorthand:
            if len(shorthand) > 1:
                raise FlagError(
                    f"{_quote(shorthand)} shorthand is more than one ASCII character"
                )
            used = self.shorthands.get(shorthand)
            if used is not None:
                raise FlagError(
                    f"unable to redefine {_quote(shorthand)} shorthand in "
                    f"{_quote(self.name)} flagset: it's already used for "
                    f"{_quote(used.name)} flag"
                )
        flag = Flag(
            name=name,
            value=value,
            shorthand=shorthand,
            usage=usage,
            def_value=str(value),
        )
        self.flags[name] = flag
        if shorthand:
            self.shorthands[shorthand] = flag
        return flag

    def lookup(self, name: str) -> Flag | None:
        return self.flags.get(name)

    def visit_all(self) -> Iterator[Flag]:
        for name in sorted(self.flags):
            yield self.flags[name]

    def visit(self) -> Iterator[Flag]:
        return (flag for flag in self.visit_all() if flag.changed)

    def parse(self, arguments: Iterable[str]) -> None:
        self.parsed = True
        self.args = []
        rest = deque(arguments)
        while rest:
            current = rest.popleft()
            if len(current) < 2 or current[0] != "-":
                self.args.append(current)
                continue
            if current[1] == "-":
                if len(current) == 2:
                    self.args.extend(rest)
                    break
                self._parse_long(current, rest)
            else:
                shorthands = current[1:]
                while shorthands:
                    shorthands = self._parse_single_short(shorthands, rest)

    def _parse_long(self, arg: str, rest: deque[str]) -> None:
        body = arg[2:]
        if not body or body[0] in "-=":
            raise FlagError(f"bad flag syntax: {arg}")
        name, sep, value = body.partition("=")
        flag = self.flags.get(name)
        if flag is None:
            if name == "help":
                raise FlagError("help requested")
            raise FlagError(f"unknown flag: --{name}")
        if sep:
            pass
        elif flag.no_opt_def_val:
            value = flag.no_opt_def_val
        elif rest:
            value = rest.popleft()
        else:
            raise FlagError(f"flag needs an argument: {arg}")
        self._set(flag, value)

    def _parse_single_short(self, shorthands: str, rest: deque[str]) -> str:
        if shorthands.startswith("test."):
            return ""
        char = shorthands[0]
        remaining = shorthands[1:]
        flag = self.shorthands.get(char)
        if flag is None:
            if char == "h":
                raise FlagError("help requested")
            raise FlagError(f"unknown shorthand flag: {char!r} in -{shorthands}")
        if len(shorthands) > 2 and shorthands[1] == "=":
            value = shorthands[2:]
            remaining = ""
        elif flag.no_opt_def_val:
            value = flag.no_opt_def_val
        elif len(shorthands) > 1:
            value = shorthands[1:]
            remaining = ""
        elif rest:
            value = rest.popleft()
        else:
            raise FlagError(f"flag needs an argument: {char!r} in -{shorthands}")
        self._set(flag, value)
        return remaining

    @staticmethod
    def _set(flag: Flag, value: str) -> None:
        try:
            flag.value.set(value)
        except ValueError as exc:
            if flag.shorthand:
                flag_name = f"-{flag.shorthand}, --{flag.name}"
            else:
                flag_name = f"--{flag.name}"
            raise FlagError(
                f"invalid argument {_quote(value)} for {_quote(flag_name)} flag: {exc}"
            ) from exc
        flag.changed = True


class _SingleDashTable:
    """Flag table parsed with single-dash rules: flags stop at the first argument."""

    def __init__(self) -> None:
        self.flags: dict[str, Flag] = {}
        self.args: list[str] = []
        self.parsed = False

    def add(self, value: Any, name: str, usage: str = "") -> Flag:
        if name in self.flags:
            raise FlagError(f"flag redefined: {name}")
        flag = Flag(name=name, value=value, usage=usage, def_value=str(value))
        self.flags[name] = flag
        return flag

    def parse(self, arguments: Iterable[str]) -> None:
        self.parsed = True
        rest = deque(arguments)
        try:
            while rest:
                current = rest[0]
                if len(current) < 2 or current[0] != "-":
                    break
                dashes = 1
                if current[1] == "-":
                    dashes = 2
                    if len(current) == 2:
                        rest.popleft()
                        break
                body = current[dashes:]
                if not body or body[0] in "-=":
                    raise FlagError(f"bad flag syntax: {current}")
                rest.popleft()
                name, sep, value = body.partition("=")
                flag = self.flags.get(name)
                if flag is None:
                    if name in ("help", "h"):
                        raise FlagError("help requested")
                    raise FlagError(f"flag provided but not defined: -{name}")
                self._apply(flag, name, sep, value, rest)
        finally:
            self.args = list(rest)

    @staticmethod
    def _apply(flag: Flag, name: str, sep: str, value: str, rest: deque[str]) -> None:
        if getattr(flag.value, "is_bool_flag", False):
            try:
                flag.value.set(value if sep else "true")
            except ValueError as exc:
                if sep:
                    raise FlagError(
                        f"invalid boolean value {_quote(value)} for -{name}: {exc}"
                    ) from exc
                raise FlagError(f"invalid boolean flag {name}: {exc}") from exc
        else:
            if not sep and rest:
                value = rest.popleft()
                sep = "="
            if not sep:
                raise FlagError(f"flag needs an argument: -{name}")
            try:
                flag.value.set(value)
            except ValueError as exc:
                raise FlagError(
                    f"invalid value {_quote(value)} for flag -{name}: {exc}"
                ) from exc
        flag.changed = True


def _env_value(env_var: str) -> str | None:
    if env_var and env_var in os.environ:
        return os.environ[env_var]
    return None


def _split_env_list(text: str) -> list[str]:
    return [part.strip() for part in text.split(",")]


class Set:
    """A named group of flags, such as "Common Options"."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._table = _PosixTable(name)
        self._union = _PosixTable("")
        self._single_dash = _SingleDashTable()
        self._completions: dict[str, Any] = {}
        self._vars: list[VarFlag] = []

    def visit(self) -> Iterator[Flag]:
        """Yield this group's flags that have been set, sorted by name."""
        return self._table.visit()

    def visit_all(self) -> Iterator[Flag]:
        """Yield all of this group's flags, sorted by name."""
        return self._table.visit_all()

    def visit_vars(self) -> Iterator[VarFlag]:
        """Yield the registrations of this group in the order they were made."""
        yield from self._vars

    def var_flag(self, flag: VarFlag) -> None:
        """Register a value with full help text, aliases and completion."""
        self._vars.append(flag)
        if getattr(flag.value, "hidden", False):
            self.var(flag.value, flag.name, "", flag.shorthand)
            return

        usage = flag.usage
        if flag.aliases:
            quoted = [f'"-{alias}"' for alias in flag.aliases]
            if len(quoted) == 1:
                aliases = quoted[0]
            elif len(quoted) == 2:
                aliases = " and ".join(quoted)
            else:
                aliases = ", ".join(quoted[:-1] + ["and " + quoted[-1]])
            usage += f" This is aliased as {aliases}."

        if flag.default:
            if getattr(flag.value, "type_name", "") == "string":
                usage += f" Defaults to {_quote(flag.default)}."
            else:
                usage += f" Defaults to {flag.default}."

        if flag.env_var:
            usage += (
                f" This can also be specified via the {flag.env_var} "
                "environment variable."
            )

        for alias in flag.aliases:
            self._union.add(flag.value, alias, flag.shorthand, "")

        self.var(flag.value, flag.name, usage, flag.shorthand)
        self._completions["--" + flag.name] = flag.completion

    def var(self, value: Any, name: str, usage: str = "", shorthand: str = "") -> None:
        """Register a value directly, bypassing help decoration."""
        self._union.add(value, name, shorthand, usage)
        self._table.add(value, name, shorthand, usage)
        self._single_dash.add(value, name, usage)

    def _register(
        self,
        name: str,
        value: FlagValue,
        *,
        shorthand: str,
        aliases: Sequence[str],
        usage: str,
        default_text: str,
        env_var: str,
        completion: Any,
    ) -> None:
        self.var_flag(
            VarFlag(
                name=name,
                value=value,
                aliases=list(aliases),
                usage=usage,
                default=default_text,
                env_var=env_var,
                completion=completion,
                shorthand=shorthand,
            )
        )

    def bool_var(
        self,
        name: str,
        *,
        shorthand: str = "",
        aliases: Sequence[str] = (),
        usage: str = "",
        default: bool = False,
        hidden: bool = False,
        env_var: str = "",
        completion: Any = None,
        set_hook: Callable[[bool], None] | None = None,
    ) -> BoolValue:
        """Register a boolean flag that may be given without a value."""
        initial = default
        env = _env_value(env_var)
        if env is not None:
            try:
                initial = parse_bool(env)
            except ValueError:
                pass
        value = BoolValue(initial, hidden=hidden, set_hook=set_hook)
        self._register(
            name,
            value,
            shorthand=shorthand,
            aliases=aliases,
            usage=usage,
            default_text="true" if default else "false",
            env_var=env_var,
            completion=completion,
        )
        union_flag = self._union.lookup(name)
        if union_flag is not None:
            union_flag.no_opt_def_val = "true"
        return value

    def enum_var(
        self,
        name: str,
        values: Sequence[str],
        *,
        shorthand: str = "",
        aliases: Sequence[str] = (),
        usage: str = "",
        default: Sequence[str] | None = None,
        hidden: bool = False,
        env_var: str = "",
        completion: Any = None,
    ) -> EnumValue:
        """Register a flag collecting choices from a fixed list."""
        initial = list(default) if default is not None else None
        env = _env_value(env_var)
        if env is not None:
            initial = _split_env_list(env)
        default_text = ",".join(default) if default is not None else ""
        possible = ", ".join(values)
        value = EnumValue(values, initial, hidden=hidden)
        self._register(
            name,
            value,
            shorthand=shorthand,
            aliases=aliases,
            usage=usage.rstrip(". \t") + ". One possible value from: " + possible + ".",
            default_text=default_text,
            env_var=env_var,
            completion=completion,
        )
        return value

    def enum_single_var(
        self,
        name: str,
        values: Sequence[str],
        *,
        shorthand: str = "",
        aliases: Sequence[str] = (),
        usage: str = "",
        default: str = "",
        hidden: bool = False,
        env_var: str = "",
        completion: Any = None,
        set_hook: Callable[[str], None] | None = None,
    ) -> EnumSingleValue:
        """Register a flag holding one choice from a fixed list."""
        initial = default
        env = _env_value(env_var)
        if env is not None:
            initial = env
        possible = ", ".join(values)
        value = EnumSingleValue(values, initial, hidden=hidden, set_hook=set_hook)
        self._register(
            name,
            value,
            shorthand=shorthand,
            aliases=aliases,
            usage=usage.rstrip(". \t") + ". One possible value from: " + possible + ".",
            default_text=default,
            env_var=env_var,
            completion=completion,
        )
        return value

    def float64_var(
        self,
        name: str,
        *,
        shorthand: str = "",
        aliases: Sequence[str] = (),
        usage: str = "",
        default: float = 0.0,
        hidden: bool = False,
        env_var: str = "",
        completion: Any = None,
    ) -> Float64Value:
        """Register a floating point flag.

        The shorthand is accepted for symmetry with the other types but is
        not registered.
        """
        initial = default
        env = _env_value(env_var)
        if env is not None:
            try:
                initial = _parse_float(env)
            except ValueError:
                pass
        default_text = _format_float(default, "e") if default != 0 else ""
        value = Float64Value(initial, hidden=hidden)
        self._register(
            name,
            value,
            shorthand="",
            aliases=aliases,
            usage=usage,
            default_text=default_text,
            env_var=env_var,
            completion=completion,
        )
        return value

    def _integer_var(
        self,
        name: str,
        kind: str,
        *,
        shorthand: str,
        aliases: Sequence[str],
        usage: str,
        default: int,
        hidden: bool,
        env_var: str,
        completion: Any,
        set_hook: Callable[[int], None] | None,
        show_default: bool = True,
    ) -> IntValue:
        parse = parse_uint if kind.startswith("uint") else parse_int
        initial = default
        env = _env_value(env_var)
        if env is not None:
            try:
                initial = parse(env)
            except ValueError:
                pass
        default_text = str(default) if default != 0 and show_default else ""
        value = IntValue(initial, kind=kind, hidden=hidden, set_hook=set_hook)
        self._register(
            name,
            value,
            shorthand=shorthand,
            aliases=aliases,
            usage=usage,
            default_text=default_text,
            env_var=env_var,
            completion=completion,
        )
        return value

    def int_var(
        self,
        name: str,
        *,
        shorthand: str = "",
        aliases: Sequence[str] = (),
        usage: str = "",
        default: int = 0,
        hidden: bool = False,
        env_var: str = "",
        completion: Any = None,
        set_hook: Callable[[int], None] | None = None,
    ) -> IntValue:
        """Register an integer flag."""
        return self._integer_var(
            name, "int", shorthand=shorthand, aliases=aliases, usage=usage,
            default=default, hidden=hidden, env_var=env_var,
            completion=completion, set_hook=set_hook,
        )

    def int64_var(
        self,
        name: str,
        *,
        shorthand: str = "",
        aliases: Sequence[str] = (),
        usage: str = "",
        default: int = 0,
        hidden: bool = False,
        env_var: str = "",
        completion: Any = None,
        set_hook: Callable[[int], None] | None = None,
    ) -> IntValue:
        """Register a 64-bit integer flag."""
        return self._integer_var(
            name, "int64", shorthand=shorthand, aliases=aliases, usage=usage,
            default=default, hidden=hidden, env_var=env_var,
            completion=completion, set_hook=set_hook,
        )

    def uint_var(
        self,
        name: str,
        *,
        shorthand: str = "",
        aliases: Sequence[str] = (),
        usage: str = "",
        default: int = 0,
        hidden: bool = False,
        env_var: str = "",
        completion: Any = None,
        set_hook: Callable[[int], None] | None = None,
    ) -> IntValue:
        """Register an unsigned integer flag."""
        return self._integer_var(
            name, "uint", shorthand=shorthand, aliases=aliases, usage=usage,
            default=default, hidden=hidden, env_var=env_var,
            completion=completion, set_hook=set_hook,
        )

    def uint64_var(
        self,
        name: str,
        *,
        shorthand: str = "",
        aliases: Sequence[str] = (),
        usage: str = "",
        default: int = 0,
        hidden: bool = False,
        env_var: str = "",
        completion: Any = None,
        set_hook: Callable[[int], None] | None = None,
    ) -> IntValue:
        """Register an unsigned 64-bit integer flag; its default is not shown in usage."""
        return self._integer_var(
            name, "uint64", shorthand=shorthand, aliases=aliases, usage=usage,
            default=default, hidden=hidden, env_var=env_var,
            completion=completion, set_hook=set_hook, show_default=False,
        )

    def string_map_var(
        self,
        name: str,
        *,
        shorthand: str = "",
        aliases: Sequence[str] = (),
        usage: str = "",
        default: Mapping[str, str] | None = None,
        hidden: bool = False,
        completion: Any = None,
    ) -> StringMapValue:
        """Register a repeatable key=value flag."""
        default_text = map_to_kv(default) if default is not None else ""
        value = StringMapValue(default, hidden=hidden)
        self._register(
            name,
            value,
            shorthand=shorthand,
            aliases=aliases,
            usage=usage,
            default_text=default_text,
            env_var="",
            completion=completion,
        )
        return value

    def string_slice_var(
        self,
        name: str,
        *,
        shorthand: str = "",
        aliases: Sequence[str] = (),
        usage: str = "",
        default: Sequence[str] | None = None,
        hidden: bool = False,
        env_var: str = "",
        completion: Any = None,
    ) -> StringSliceValue:
        """Register a comma-separated, repeatable list flag."""
        initial = list(default) if default is not None else None
        env = _env_value(env_var)
        if env is not None:
            initial = _split_env_list(env)
        default_text = ",".join(default) if default is not None else ""
        value = StringSliceValue(initial, hidden=hidden)
        self._register(
            name,
            value,
            shorthand=shorthand,
            aliases=aliases,
            usage=usage,
            default_text=default_text,
            env_var=env_var,
            completion=completion,
        )
        return value

    def duration_var(
        self,
        name: str,
        *,
        shorthand: str = "",
        aliases: Sequence[str] = (),
        usage: str = "",
        default: timedelta = timedelta(0),
        hidden: bool = False,
        env_var: str = "",
        completion: Any = None,
    ) -> DurationValue:
        """Register a duration flag; bare numbers are seconds."""
        initial = default
        env = _env_value(env_var)
        if env is not None:
            try:
                initial = parse_duration(append_duration_suffix(env))
            except ValueError:
                pass
        default_text = format_duration(default) if default != timedelta(0) else ""
        value = DurationValue(initial, hidden=hidden)
        self._register(
            name,
            value,
            shorthand=shorthand,
            aliases=aliases,
            usage=usage,
            default_text=default_text,
            env_var=env_var,
            completion=completion,
        )
        return value


class Sets:
    """A collection of flag groups parsed together."""

    def __init__(self) -> None:
        self._union = _PosixTable("")
        self._single_dash = _SingleDashTable()
        self._completions: dict[str, Any] = {}
        self._sets: list[Set] = []

    def new_set(self, name: str) -> Set:
        """Create a group whose flags are parsed as part of this collection."""
        flag_set = Set(name)
        flag_set._union = self._union
        flag_set._single_dash = self._single_dash
        flag_set._completions = self._completions
        self._sets.append(flag_set)
        return flag_set

    def completions(self) -> dict[str, Any]:
        """Return the completion predictors keyed by "--name"."""
        return self._completions

    def parse(self, args: Sequence[str]) -> None:
        """Parse arguments, raising FlagError on any problem."""
        args = list(args)
        if has_go_flags(args):
            self._single_dash.parse(args)
            check_flags_after_args(self._single_dash.args, self)
            return
        self._union.parse(args)

    @property
    def parsed(self) -> bool:
        """Whether the posix parser has run."""
        return self._union.parsed

    def args(self) -> list[str]:
        """Return the positional arguments left after parsing."""
        if self._single_dash.parsed:
            return list(self._single_dash.args)
        return list(self._union.args)

    def uses_goflags(self) -> bool:
        """Whether the single-dash parser has been used."""
        return self._single_dash.parsed

    def visit(self) -> Iterator[Flag]:
        """Yield the flags set by posix parsing, sorted by name."""
        return self._union.visit()

    def help(self) -> str:
        """Render help text grouped by flag set."""
        parts: list[str] = []
        for flag_set in self._sets:
            parts.append(f"{flag_set.name}:\n\n")
            parts.extend(
                _flag_detail(flag) for flag in flag_set.visit_all() if not flag.hidden
            )
        return "".join(parts).rstrip("\n")

    def visit_sets(self) -> Iterator[tuple[str, Set]]:
        """Yield (name, set) for every group in creation order."""
        for flag_set in self._sets:
            yield flag_set.name, flag_set

    def hide_unused_flags(self, set_name: str, flag_names: Iterable[str]) -> None:
        """Hide the named flags of the named group from help."""
        wanted = set(flag_names)
        for name, flag_set in self.visit_sets():
            if name != set_name:
                continue
            for flag in flag_set.visit_all():
                if flag.name in wanted:
                    flag.hidden = True


def _flag_detail(flag: Flag) -> str:
    if getattr(flag.value, "hidden", False):
        return ""
    if flag.shorthand:
        out = f"  -{flag.shorthand}, --{flag.name}"
    else:
        out = f"      --{flag.name}"

    example = getattr(flag.value, "example", "")
    if example:
        out += f"=<{example}>"

    if not default_is_zero_value(flag):
        if getattr(flag.value, "type_name", "") == "string":
            out += f" (default {_quote(flag.def_value)})"
        else:
            out += f" (default {flag.def_value})"
    if flag.deprecated:
        out += f" (DEPRECATED: {flag.deprecated})"
    out += "\n"

    usage = _WHITESPACE_RE.sub(" ", flag.usage)
    return out + wrap_at_length_with_padding(usage, 8) + "\n\n"


def _wrap(text: str, limit: int) -> list[str]:
    """Split text into lines of at most limit columns with minimal raggedness."""
    words = text.strip().replace("\n", " ").split(" ")
    count = len(words)
    prefix = [0]
    for word in words:
        prefix.append(prefix[-1] + len(word))

    def span(first: int, last: int) -> int:
        return prefix[last + 1] - prefix[first] + (last - first)

    breaks = [0] * count
    cost = [math.inf] * count
    for start in range(count - 1, -1, -1):
        if span(start, count - 1) <= limit or start == count - 1:
            cost[start] = 0
            breaks[start] = count
            continue
        for end in range(start + 1, count):
            width = span(start, end - 1)
            slack = limit - width
            candidate = slack * slack + cost[end]
            if width > limit:
                candidate += _WRAP_PENALTY
            if candidate < cost[start]:
                cost[start] = candidate
                breaks[start] = end

    lines = []
    start = 0
    while start < count:
        lines.append(" ".join(words[start:breaks[start]]))
        start = breaks[start]
    return lines


def wrap_at_length_with_padding(text: str, pad: int) -> str:
    """Wrap text to the maximum line length, indenting every line by pad spaces."""
    indent = " " * pad
    return "\n".join(indent + line for line in _wrap(text, MAX_LINE_LENGTH - pad))


def has_go_flags(args: Iterable[str]) -> bool:
    """Whether any argument looks like a single-dash long flag such as -verbose."""
    return any(len(arg) > 2 and arg[0] == "-" and arg[1] != "-" for arg in args)


def check_flags_after_args(args: Sequence[str], sets: Sets) -> None:
    """Raise FlagAfterArgsError if a known flag follows a positional argument."""
    if not args:
        return
    seen: set[str] = set()
    for arg in args:
        if arg == "--":
            break
        if len(arg) < 2 or arg[0] != "-":
            continue
        if arg[1] == "-":
            arg = arg[1:]
        if arg[1] == "-":
            continue
        seen.add(arg[1:].partition("=")[0])

    for _, flag_set in sets.visit_sets():
        if any(flag.name in seen for flag in flag_set.visit_all()):
            raise FlagAfterArgsError()


def default_is_zero_value(flag: Flag) -> bool:
    """Whether the flag's default represents its type's zero value."""
    value = flag.value
    if getattr(value, "is_bool_flag", False):
        return flag.def_value == "false"
    if isinstance(value, DurationValue):
        return flag.def_value in ("0", "0s")
    if isinstance(value, (IntValue, Float64Value)):
        return flag.def_value == "0"
    if isinstance(value, StringSliceValue):
        return flag.def_value in ("[]", "")
    if isinstance(value, StringMapValue):
        return flag.def_value == ""
    return str(value) in ("false", "<nil>", "", "0")