"""Small helpers: title casing and interrupt handling."""

from __future__ import annotations

import re
import signal
import threading
from collections.abc import Iterator
from contextlib import contextmanager

__all__ = ["title", "with_interrupt"]

# A word is a run of letters and digits, possibly joined by apostrophes
# ("don't" is one word).
_WORD_RE = re.compile(r"[^\W_]+(?:['\u2019][^\W_]+)*")


def _title_word(match: re.Match[str]) -> str:
    word = match.group(0)
    return word[:1].upper() + word[1:].lower()


def title(text: str) -> str:
    """Return text in title case: each word capitalised, the rest lower case."""
    return _WORD_RE.sub(_title_word, text)


@contextmanager
def with_interrupt() -> Iterator[threading.Event]:
    """Yield an event that is set when an interrupt signal arrives.

    The previous SIGINT handler is restored on exit, and the event is set
    then too, so anything waiting on it is released.  Must be entered from
    the main thread.
    """
    done = threading.Event()

    def _handler(signum: int, frame: object) -> None:
        done.set()

    previous = signal.signal(signal.SIGINT, _handler)
    try:
        yield done
    finally:
        signal.signal(
            signal.SIGINT, previous if previous is not None else signal.SIG_DFL
        )
        done.set()