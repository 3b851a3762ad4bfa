import io
import sys
import time
from datetime import timedelta

import pytest

from packtools.spinner import (
    CHAR_SETS,
    InvalidColorError,
    Spinner,
    generate_number_sequence,
    valid_color,
)


def _wait_for(predicate, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


@pytest.fixture(autouse=True)
def _no_color(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")


def test_valid_color_accepts_known_names():
    assert valid_color("red")
    assert valid_color("fgHiCyan")
    assert valid_color("bgHiWhite")
    assert valid_color("crossedout")


def test_valid_color_rejects_unknown_names():
    assert not valid_color("purple")
    assert not valid_color("RED")


def test_generate_number_sequence():
    assert generate_number_sequence(3) == ["0", "1", "2"]
    assert generate_number_sequence(0) == []
    assert len(generate_number_sequence(50)) == 50


def test_generate_number_sequence_negative():
    with pytest.raises(ValueError):
        generate_number_sequence(-1)


def test_char_sets_fixed_entries():
    assert Spinner(CHAR_SETS[9], 0.01, writer=io.StringIO()).chars == [
        "|",
        "/",
        "-",
        "\\",
    ]
    assert Spinner(CHAR_SETS[26], 0.01, writer=io.StringIO()).chars == [
        ".",
        "..",
        "...",
    ]
    spinner = Spinner(CHAR_SETS[29], 0.01, writer=io.StringIO())
    spinner.reverse()
    assert spinner.chars == ["x", "+"]


def test_clock_char_sets():
    clock = Spinner(CHAR_SETS[37], 0.01, writer=io.StringIO())
    half_hours = Spinner(CHAR_SETS[38], 0.01, writer=io.StringIO())
    assert len(clock.chars) == 12
    assert len(half_hours.chars) == 24
    assert clock.chars[0] == "\U0001F550"
    assert half_hours.chars[1] == "\U0001F55C"
    assert half_hours.chars[0::2] == clock.chars


def test_constructor_rejects_invalid_color():
    with pytest.raises(InvalidColorError):
        Spinner(["a"], 0.01, color="purple", writer=io.StringIO())


def test_set_color_invalid_raises_and_stays_stopped():
    spinner = Spinner(["a"], 0.01, writer=io.StringIO())
    with pytest.raises(InvalidColorError):
        spinner.set_color("red", "nope")
    assert spinner.active is False


def test_reverse_and_double_reverse():
    original = ["a", "b", "c"]
    spinner = Spinner(original, 0.01, writer=io.StringIO())
    spinner.reverse()
    assert spinner.chars == ["c", "b", "a"]
    spinner.reverse()
    assert spinner.chars == original


def test_reverse_does_not_touch_shared_char_set():
    spinner = Spinner(CHAR_SETS[9], 0.01, writer=io.StringIO())
    spinner.reverse()
    assert CHAR_SETS[9] == ["|", "/", "-", "\\"]
    assert spinner.chars == list(reversed(CHAR_SETS[9]))


def test_update_charset_and_speed():
    spinner = Spinner(["a"], 0.5, writer=io.StringIO())
    spinner.update_charset(["x", "y"])
    spinner.update_speed(timedelta(milliseconds=250))
    assert spinner.chars == ["x", "y"]
    assert spinner.delay == 0.25


def test_start_writes_frames_and_stop_writes_final_message():
    out = io.StringIO()
    spinner = Spinner(
        ["a", "b"], 0.005, prefix="<", suffix=">", final_msg="done", writer=out
    )
    spinner.start()
    assert spinner.active is True
    assert _wait_for(lambda: "\r<b> " in out.getvalue())
    spinner.stop()
    text = out.getvalue()
    assert spinner.active is False
    assert "\r<a> " in text
    assert text.endswith("\r\033[Kdone")


def test_stop_without_start_writes_nothing():
    out = io.StringIO()
    spinner = Spinner(["a"], 0.01, final_msg="done", writer=out)
    spinner.stop()
    assert out.getvalue() == ""
    assert spinner.active is False


def test_start_twice_is_harmless():
    out = io.StringIO()
    spinner = Spinner(["a"], 0.005, writer=out)
    spinner.start()
    spinner.start()
    assert spinner.active is True
    spinner.stop()
    assert spinner.active is False


def test_context_manager():
    out = io.StringIO()
    with Spinner(["z"], 0.005, final_msg="end", writer=out) as spinner:
        assert spinner.active is True
        assert _wait_for(lambda: "\rz " in out.getvalue())
    assert spinner.active is False
    assert out.getvalue().endswith("end")


def test_update_hooks_are_called():
    out = io.StringIO()
    calls = []
    spinner = Spinner(
        ["a"],
        0.005,
        writer=out,
        pre_update=lambda s: calls.append(("pre", s)),
        post_update=lambda s: calls.append(("post", s)),
    )
    spinner.start()
    assert _wait_for(lambda: len(calls) >= 2)
    spinner.stop()
    assert calls[0] == ("pre", spinner)
    assert calls[1] == ("post", spinner)


def test_set_color_restarts_spinner():
    out = io.StringIO()
    spinner = Spinner(["q"], 0.005, writer=out)
    spinner.set_color("red")
    assert spinner.active is True
    spinner.stop()
    assert spinner.active is False


def test_colored_output_when_enabled(monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.setattr(sys, "stdout", type("Tty", (io.StringIO,), {"isatty": lambda self: True})())
    out = io.StringIO()
    spinner = Spinner(["q"], 0.005, writer=out, color="red")
    spinner.start()
    assert _wait_for(lambda: "\x1b[31mq\x1b[0m" in out.getvalue())
    spinner.stop()
    assert spinner.active is False


def test_hidden_cursor_toggled_on_stdout(monkeypatch):
    fake_stdout = io.StringIO()
    monkeypatch.setattr(sys, "stdout", fake_stdout)
    spinner = Spinner(["a"], 0.005, writer=io.StringIO(), hide_cursor=True)
    spinner.start()
    spinner.stop()
    if sys.platform.startswith("win"):
        assert fake_stdout.getvalue() == ""
    else:
        assert fake_stdout.getvalue() == "\033[?25l\033[?25h"