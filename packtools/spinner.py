"""A terminal spinner that animates a character set on a background thread."""

from __future__ import annotations

import os
import sys
import threading
from collections.abc import Callable, Iterable, Sequence
from datetime import timedelta
from typing import IO, Any

__all__ = [
    "CHAR_SETS",
    "InvalidColorError",
    "Spinner",
    "valid_color",
    "generate_number_sequence",
]

_CLOCK_ONE_OCLOCK = 0x1F550
_CLOCK_ONE_THIRTY = 0x1F55C

CHAR_SETS: dict[int, list[str]] = {
    0: ["←", "↖", "↑", "↗", "→", "↘", "↓", "↙"],
    1: ["▁", "▃", "▄", "▅", "▆", "▇", "█", "▇", "▆", "▅", "▄", "▃", "▁"],
    2: ["▖", "▘", "▝", "▗"],
    3: ["┤", "┘", "┴", "└", "├", "┌", "┬", "┐"],
    4: ["◢", "◣", "◤", "◥"],
    5: ["◰", "◳", "◲", "◱"],
    6: ["◴", "◷", "◶", "◵"],
    7: ["◐", "◓", "◑", "◒"],
    8: [".", "o", "O", "@", "*"],
    9: ["|", "/", "-", "\\"],
    10: ["◡◡", "⊙⊙", "◠◠"],
    11: ["⣾", "⣽", "⣻", "⢿", "⡿", "⣟", "⣯", "⣷"],
    12: [">))'>", " >))'>", "  >))'>", "   >))'>", "    >))'>", "   <'((<", "  <'((<", " <'((<"],
    13: ["⠁", "⠂", "⠄", "⡀", "⢀", "⠠", "⠐", "⠈"],
    14: ["⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏"],
    15: list("abcdefghijklmnopqrstuvwxyz"),
    16: ["▉", "▊", "▋", "▌", "▍", "▎", "▏", "▎", "▍", "▌", "▋", "▊", "▉"],
    17: ["■", "□", "▪", "▫"],
    18: ["←", "↑", "→", "↓"],
    19: ["╫", "╪"],
    20: ["⇐", "⇖", "⇑", "⇗", "⇒", "⇘", "⇓", "⇙"],
    21: ["⠁", "⠁", "⠉", "⠙", "⠚", "⠒", "⠂", "⠂", "⠒", "⠲", "⠴", "⠤", "⠄", "⠄", "⠤", "⠠", "⠠", "⠤", "⠦", "⠖", "⠒", "⠐", "⠐", "⠒", "⠓", "⠋", "⠉", "⠈", "⠈"],
    22: ["⠈", "⠉", "⠋", "⠓", "⠒", "⠐", "⠐", "⠒", "⠖", "⠦", "⠤", "⠠", "⠠", "⠤", "⠦", "⠖", "⠒", "⠐", "⠐", "⠒", "⠓", "⠋", "⠉", "⠈"],
    23: ["⠁", "⠉", "⠙", "⠚", "⠒", "⠂", "⠂", "⠒", "⠲", "⠴", "⠤", "⠄", "⠄", "⠤", "⠴", "⠲", "⠒", "⠂", "⠂", "⠒", "⠚", "⠙", "⠉", "⠁"],
    24: ["⠋", "⠙", "⠚", "⠒", "⠂", "⠂", "⠒", "⠲", "⠴", "⠦", "⠖", "⠒", "⠐", "⠐", "⠒", "⠓", "⠋"],
    25: ["ｦ", "ｧ", "ｨ", "ｩ", "ｪ", "ｫ", "ｬ", "ｭ", "ｮ", "ｯ", "ｱ", "ｲ", "ｳ", "ｴ", "ｵ", "ｶ", "ｷ", "ｸ", "ｹ", "ｺ", "ｻ", "ｼ", "ｽ", "ｾ", "ｿ", "ﾀ", "ﾁ", "ﾂ", "ﾃ", "ﾄ", "ﾅ", "ﾆ", "ﾇ", "ﾈ", "ﾉ", "ﾊ", "ﾋ", "ﾌ", "ﾍ", "ﾎ", "ﾏ", "ﾐ", "ﾑ", "ﾒ", "ﾓ", "ﾔ", "ﾕ", "ﾖ", "ﾗ", "ﾘ", "ﾙ", "ﾚ", "ﾛ", "ﾜ", "ﾝ"],
    26: [".", "..", "..."],
    27: ["▁", "▂", "▃", "▄", "▅", "▆", "▇", "█", "▉", "▊", "▋", "▌", "▍", "▎", "▏", "▏", "▎", "▍", "▌", "▋", "▊", "▉", "█", "▇", "▆", "▅", "▄", "▃", "▂", "▁"],
    28: [".", "o", "O", "°", "O", "o", "."],
    29: ["+", "x"],
    30: ["v", "<", "^", ">"],
    31: [">>--->", " >>--->", "  >>--->", "   >>--->", "    >>--->", "    <---<<", "   <---<<", "  <---<<", " <---<<", "<---<<"],
    32: ["|", "||", "|||", "||||", "|||||", "|||||||", "||||||||", "|||||||", "||||||", "|||||", "||||", "|||", "||", "|"],
    33: ["[          ]", "[=         ]", "[==        ]", "[===       ]", "[====      ]", "[=====     ]", "[======    ]", "[=======   ]", "[========  ]", "[========= ]", "[==========]"],
    34: ["(*---------)", "(-*--------)", "(--*-------)", "(---*------)", "(----*-----)", "(-----*----)", "(------*---)", "(-------*--)", "(--------*-)", "(---------*)"],
    35: ["█▒▒▒▒▒▒▒▒▒", "███▒▒▒▒▒▒▒", "█████▒▒▒▒▒", "███████▒▒▒", "██████████"],
    36: ["[                    ]", "[=>                  ]", "[===>                ]", "[=====>              ]", "[======>             ]", "[========>           ]", "[==========>         ]", "[============>       ]", "[==============>     ]", "[================>   ]", "[==================> ]", "[===================>]"],
    37: [chr(_CLOCK_ONE_OCLOCK + i) for i in range(12)],
    38: [c for i in range(12) for c in (chr(_CLOCK_ONE_OCLOCK + i), chr(_CLOCK_ONE_THIRTY + i))],
    39: ["🌍", "🌎", "🌏"],
    40: ["◜", "◝", "◞", "◟"],
    41: ["⬒", "⬔", "⬓", "⬕"],
    42: ["⬖", "⬘", "⬗", "⬙"],
    43: ["[>>>          >]", "[]>>>>        []", "[]  >>>>      []", "[]    >>>>    []", "[]      >>>>  []", "[]        >>>>[]", "[>>          >>]"],
    44: ["♠", "♣", "♥", "♦"],
    45: ["➞", "➟", "➠", "➡", "➠", "➟"],
    46: ["  |  ", " \\   ", "_    ", " \\   ", "  |  ", "   / ", "    _", "   / "],
    47: ["  . . . .", ".   . . .", ". .   . .", ". . .   .", ". . . .  ", ". . . . ."],
    48: [" |     ", "  /    ", "   _   ", "    \\  ", "     | ", "    \\  ", "   _   ", "  /    "],
    49: ["⎺", "⎻", "⎼", "⎽", "⎼", "⎻"],
    50: ["▹▹▹▹▹", "▸▹▹▹▹", "▹▸▹▹▹", "▹▹▸▹▹", "▹▹▹▸▹", "▹▹▹▹▸"],
    51: ["[    ]", "[   =]", "[  ==]", "[ ===]", "[====]", "[=== ]", "[==  ]", "[=   ]"],
    52: ["( ●    )", "(  ●   )", "(   ●  )", "(    ● )", "(     ●)", "(    ● )", "(   ●  )", "(  ●   )", "( ●    )"],
    53: ["✶", "✸", "✹", "✺", "✹", "✷"],
    54: ["▐|\\____________▌", "▐_|\\___________▌", "▐__|\\__________▌", "▐___|\\_________▌", "▐____|\\________▌", "▐_____|\\_______▌", "▐______|\\______▌", "▐_______|\\_____▌", "▐________|\\____▌", "▐_________|\\___▌", "▐__________|\\__▌", "▐___________|\\_▌", "▐____________|\\▌", "▐____________/|▌", "▐___________/|_▌", "▐__________/|__▌", "▐_________/|___▌", "▐________/|____▌", "▐_______/|_____▌", "▐______/|______▌", "▐_____/|_______▌", "▐____/|________▌", "▐___/|_________▌", "▐__/|__________▌", "▐_/|___________▌", "▐/|____________▌"],
    55: ["▐⠂       ▌", "▐⠈       ▌", "▐ ⠂      ▌", "▐ ⠠      ▌", "▐  ⡀     ▌", "▐  ⠠     ▌", "▐   ⠂    ▌", "▐   ⠈    ▌", "▐    ⠂   ▌", "▐    ⠠   ▌", "▐     ⡀  ▌", "▐     ⠠  ▌", "▐      ⠂ ▌", "▐      ⠈ ▌", "▐       ⠂▌", "▐       ⠠▌", "▐       ⡀▌", "▐      ⠠ ▌", "▐      ⠂ ▌", "▐     ⠈  ▌", "▐     ⠂  ▌", "▐    ⠠   ▌", "▐    ⡀   ▌", "▐   ⠠    ▌", "▐   ⠂    ▌", "▐  ⠈     ▌", "▐  ⠂     ▌", "▐ ⠠      ▌", "▐ ⡀      ▌", "▐⠠       ▌"],
    56: ["¿", "?"],
    57: ["⢹", "⢺", "⢼", "⣸", "⣇", "⡧", "⡗", "⡏"],
    58: ["⢄", "⢂", "⢁", "⡁", "⡈", "⡐", "⡠"],
    59: [".  ", ".. ", "...", " ..", "  .", "   "],
    60: [".", "o", "O", "°", "O", "o", "."],
    61: ["▓", "▒", "░"],
    62: ["▌", "▀", "▐", "▄"],
    63: ["⊶", "⊷"],
    64: ["▪", "▫"],
    65: ["□", "■"],
    66: ["▮", "▯"],
    67: ["-", "=", "≡"],
    68: ["d", "q", "p", "b"],
    69: ["∙∙∙", "●∙∙", "∙●∙", "∙∙●", "∙∙∙"],
    70: ["🌑 ", "🌒 ", "🌓 ", "🌔 ", "🌕 ", "🌖 ", "🌗 ", "🌘 "],
    71: ["☗", "☖"],
    72: ["⧇", "⧆"],
    73: ["◉", "◎"],
    74: ["㊂", "㊀", "㊁"],
    75: ["⦾", "⦿"],
    76: ["ဝ", "၀"],
    77: ["▌", "▀", "▐▄"],
}

# SGR attribute codes for every accepted colour or attribute name.
_COLOR_ATTRIBUTES: dict[str, int] = {
    "black": 30,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "magenta": 35,
    "cyan": 36,
    "white": 37,
    "reset": 0,
    "bold": 1,
    "faint": 2,
    "italic": 3,
    "underline": 4,
    "blinkslow": 5,
    "blinkrapid": 6,
    "reversevideo": 7,
    "concealed": 8,
    "crossedout": 9,
    "fgBlack": 30,
    "fgRed": 31,
    "fgGreen": 32,
    "fgYellow": 33,
    "fgBlue": 34,
    "fgMagenta": 35,
    "fgCyan": 36,
    "fgWhite": 37,
    "fgHiBlack": 90,
    "fgHiRed": 91,
    "fgHiGreen": 92,
    "fgHiYellow": 93,
    "fgHiBlue": 94,
    "fgHiMagenta": 95,
    "fgHiCyan": 96,
    "fgHiWhite": 97,
    "bgBlack": 40,
    "bgRed": 41,
    "bgGreen": 42,
    "bgYellow": 43,
    "bgBlue": 44,
    "bgMagenta": 45,
    "bgCyan": 46,
    "bgWhite": 47,
    "bgHiBlack": 100,
    "bgHiRed": 101,
    "bgHiGreen": 102,
    "bgHiYellow": 103,
    "bgHiBlue": 104,
    "bgHiMagenta": 105,
    "bgHiCyan": 106,
    "bgHiWhite": 107,
}

_IS_WINDOWS = os.name == "nt"
_HIDE_CURSOR = "\033[?25l"
_SHOW_CURSOR = "\033[?25h"


class InvalidColorError(ValueError):
    """Raised when an unknown colour or attribute name is given."""

    def __init__(self, message: str = "invalid color") -> None:
        super().__init__(message)


def valid_color(name: str) -> bool:
    """Whether name is an accepted colour or attribute name."""
    return name in _COLOR_ATTRIBUTES


def generate_number_sequence(length: int) -> list[str]:
    """Return the numbers 0 to length-1 as strings."""
    if length < 0:
        raise ValueError(f"length must not be negative, got {length}")
    return [str(i) for i in range(length)]


def _color_enabled() -> bool:
    if "NO_COLOR" in os.environ:
        return False
    isatty = getattr(sys.stdout, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:
        return False


def _attributes(names: Sequence[str]) -> tuple[int, ...]:
    for name in names:
        if not valid_color(name):
            raise InvalidColorError()
    return tuple(_COLOR_ATTRIBUTES[name] for name in names)


def _seconds(delay: float | timedelta) -> float:
    if isinstance(delay, timedelta):
        return delay.total_seconds()
    return float(delay)


class Spinner:
    """A progress indicator cycling through a character set on one line."""

    def __init__(
        self,
        chars: Iterable[str],
        delay: float | timedelta,
        *,
        prefix: str = "",
        suffix: str = "",
        final_msg: str = "",
        hide_cursor: bool = False,
        writer: IO[str] | None = None,
        color: Sequence[str] | str | None = None,
        pre_update: Callable[[Spinner], Any] | None = None,
        post_update: Callable[[Spinner], Any] | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._chars = list(chars)
        self.delay = _seconds(delay)
        self.prefix = prefix
        self.suffix = suffix
        self.final_msg = final_msg
        self.hide_cursor = hide_cursor
        self.writer = writer if writer is not None else sys.stdout
        self.pre_update = pre_update
        self.post_update = post_update
        self._last_output = ""
        self._active = False
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        if color is None:
            self._color_attrs: tuple[int, ...] = (_COLOR_ATTRIBUTES["white"],)
        else:
            names = [color] if isinstance(color, str) else list(color)
            self._color_attrs = _attributes(names)

    @property
    def active(self) -> bool:
        """Whether the spinner is currently running."""
        return self._active

    @property
    def chars(self) -> list[str]:
        """A copy of the current character set."""
        with self._lock:
            return list(self._chars)

    def _colorize(self, text: str) -> str:
        if not _color_enabled():
            return text
        sequence = ";".join(str(attr) for attr in self._color_attrs)
        return f"\x1b[{sequence}m{text}\x1b[0m"

    def _write(self, text: str) -> None:
        self.writer.write(text)
        flush = getattr(self.writer, "flush", None)
        if flush is not None:
            flush()

    def start(self) -> None:
        """Start animating; does nothing if already running."""
        with self._lock:
            if self._active:
                return
            if self.hide_cursor and not _IS_WINDOWS:
                sys.stdout.write(_HIDE_CURSOR)
                sys.stdout.flush()
            self._active = True
            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._run, args=(self._stop_event, self.delay), daemon=True
            )
            self._thread.start()

    def _run(self, stop_event: threading.Event, delay: float) -> None:
        index = 0
        while not stop_event.wait(delay):
            with self._lock:
                if not self._active:
                    return
                chars = self._chars
                if not chars:
                    continue
                if index >= len(chars):
                    index = 0
                self._erase()
                if self.pre_update is not None:
                    self.pre_update(self)
                char = chars[index]
                if _IS_WINDOWS and self.writer is sys.stderr:
                    shown = char
                else:
                    shown = self._colorize(char)
                self._write(f"\r{self.prefix}{shown}{self.suffix} ")
                self._last_output = f"\r{self.prefix}{char}{self.suffix} "
                if self.post_update is not None:
                    self.post_update(self)
                index = (index + 1) % len(chars)

    def stop(self) -> None:
        """Stop animating, clear the line and write the final message."""
        with self._lock:
            if not self._active:
                return
            self._active = False
            self._stop_event.set()
            thread = self._thread
            self._thread = None
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        with self._lock:
            if self.hide_cursor and not _IS_WINDOWS:
                sys.stdout.write(_SHOW_CURSOR)
                sys.stdout.flush()
            self._erase()
            if self.final_msg:
                self._write(self.final_msg)

    def restart(self) -> None:
        """Stop and start again."""
        self.stop()
        self.start()

    def reverse(self) -> None:
        """Reverse the order of the character set."""
        with self._lock:
            self._chars.reverse()

    def set_color(self, *args: str) -> None:
        """Set the colours and attributes used for the indicator, then restart."""
        attrs = _attributes(args)
        with self._lock:
            self._color_attrs = attrs
        self.restart()

    def update_speed(self, delay: float | timedelta) -> None:
        """Set the delay between frames; it takes effect on the next start."""
        with self._lock:
            self.delay = _seconds(delay)

    def update_charset(self, chars: Iterable[str]) -> None:
        """Replace the character set."""
        with self._lock:
            self._chars = list(chars)

    def _erase(self) -> None:
        count = len(self._last_output)
        if _IS_WINDOWS:
            self._write("\r" + " " * count + "\r")
            self._last_output = ""
            return
        for code in ("\b", "\127", "\b", "\033[K"):
            self._write(code * count)
        self._write("\r\033[K")
        self._last_output = ""

    def __enter__(self) -> Spinner:
        self.start()
        return self

    def __exit__(self, *args: object) -> None:
        self.stop()