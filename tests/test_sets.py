from datetime import timedelta

import pytest

from packtools.flags.sets import (
    Flag,
    FlagAfterArgsError,
    FlagError,
    Sets,
    default_is_zero_value,
    has_go_flags,
    wrap_at_length_with_padding,
)
from packtools.flags.values import IntValue, StringSliceValue


@pytest.fixture
def alpha_beta():
    sets = Sets()
    alpha = sets.new_set("setA").int_var("alpha", shorthand="a")
    beta = sets.new_set("setB").int_var("beta", shorthand="b")
    return sets, alpha, beta


@pytest.mark.parametrize(
    "args",
    [
        ["-b", "42", "-a", "21"],
        ["-b", "42", "something", "-a", "21"],
        ["-b", "42", "something", "--alpha", "21"],
        ["--beta", "42", "something", "--alpha", "21"],
    ],
)
def test_sets_parse(alpha_beta, args):
    sets, alpha, beta = alpha_beta
    sets.parse(args)
    assert alpha.value == 21
    assert beta.value == 42


def test_sets_missing_value(alpha_beta):
    sets, _, _ = alpha_beta
    with pytest.raises(FlagError, match="unknown shorthand flag: 'd' in -d"):
        sets.parse(["-d", "42", "-a", "21"])


def test_string_slice():
    sets = Sets()
    val_a = sets.new_set("A").string_slice_var("a")
    val_b = sets.new_set("B").string_slice_var("b")
    sets.parse(["--b", "somevalueB", "--a", "somevalueA,somevalueB"])
    assert val_b.value == ["somevalueB"]
    assert val_a.value == ["somevalueA", "somevalueB"]


def test_positional_args_collected(alpha_beta):
    sets, _, _ = alpha_beta
    sets.parse(["-b", "42", "something", "-a", "21"])
    assert sets.args() == ["something"]
    assert sets.uses_goflags() is False


def test_double_dash_terminates(alpha_beta):
    sets, alpha, beta = alpha_beta
    sets.parse(["--alpha", "1", "--", "--beta", "2"])
    assert alpha.value == 1
    assert beta.value == 0
    assert sets.args() == ["--beta", "2"]


def test_visit_reports_changed_flags(alpha_beta):
    sets, _, _ = alpha_beta
    sets.parse(["--beta", "1", "--alpha", "2"])
    assert [flag.name for flag in sets.visit()] == ["alpha", "beta"]


def test_invalid_posix_value(alpha_beta):
    sets, _, _ = alpha_beta
    with pytest.raises(FlagError, match='invalid argument "x" for "-a, --alpha" flag'):
        sets.parse(["--alpha", "x"])


def test_bad_flag_syntax(alpha_beta):
    sets, _, _ = alpha_beta
    with pytest.raises(FlagError, match="bad flag syntax: ---x"):
        sets.parse(["---x"])


def test_single_dash_long_flags(alpha_beta):
    sets, alpha, beta = alpha_beta
    sets.parse(["-alpha", "21", "-beta=42", "rest"])
    assert (alpha.value, beta.value) == (21, 42)
    assert sets.args() == ["rest"]
    assert sets.uses_goflags() is True


def test_single_dash_flag_after_args(alpha_beta):
    sets, _, _ = alpha_beta
    with pytest.raises(FlagAfterArgsError):
        sets.parse(["-alpha", "21", "x", "-beta", "42"])


def test_single_dash_unknown_flag(alpha_beta):
    sets, _, _ = alpha_beta
    with pytest.raises(FlagError, match="flag provided but not defined: -gamma"):
        sets.parse(["-gamma", "1"])


def test_single_dash_invalid_value(alpha_beta):
    sets, _, _ = alpha_beta
    with pytest.raises(FlagError, match='invalid value "x" for flag -alpha'):
        sets.parse(["-alpha", "x"])


def test_single_dash_bool_without_value():
    sets = Sets()
    verbose = sets.new_set("Options").bool_var("verbose")
    sets.parse(["-verbose", "x"])
    assert verbose.value is True
    assert sets.args() == ["x"]


@pytest.mark.parametrize(
    ("args", "expected"),
    [(["--verbose"], True), (["-v"], True), (["--verbose=false"], False)],
)
def test_posix_bool(args, expected):
    sets = Sets()
    verbose = sets.new_set("Options").bool_var("verbose", shorthand="v")
    sets.parse(args + ["arg"])
    assert verbose.value is expected
    assert sets.args() == ["arg"]


def test_alias_sets_same_value():
    sets = Sets()
    verbose = sets.new_set("Options").bool_var("verbose", aliases=["loud"])
    sets.parse(["--loud=true"])
    assert verbose.value is True


def test_redefinition_raises():
    sets = Sets()
    sets.new_set("A").int_var("alpha")
    with pytest.raises(FlagError):
        sets.new_set("B").int_var("alpha")


def test_set_hook_called():
    seen = []
    sets = Sets()
    sets.new_set("A").int_var("count", set_hook=seen.append)
    sets.parse(["--count", "7"])
    assert seen == [7]


def test_env_var_initial_value(monkeypatch):
    monkeypatch.setenv("PACKTOOLS_TEST_PORT", "0x10")
    sets = Sets()
    flag_set = sets.new_set("A")
    port = flag_set.int_var("port", env_var="PACKTOOLS_TEST_PORT", usage="Port.")
    assert port.value == 16
    assert next(flag_set.visit_all()).usage == (
        "Port. This can also be specified via the "
        "PACKTOOLS_TEST_PORT environment variable."
    )


def test_env_var_invalid_bool_ignored(monkeypatch):
    monkeypatch.setenv("PACKTOOLS_TEST_FLAG", "maybe")
    sets = Sets()
    value = sets.new_set("A").bool_var("flag", default=True, env_var="PACKTOOLS_TEST_FLAG")
    assert value.value is True


def test_help_output():
    sets = Sets()
    sets.new_set("Common Options").int_var(
        "port", shorthand="p", usage="The port.", default=5
    )
    assert sets.help() == (
        "Common Options:\n\n"
        "  -p, --port=<int> (default 5)\n"
        "        The port. Defaults to 5."
    )


def test_help_with_alias():
    sets = Sets()
    sets.new_set("Options").bool_var("verbose", aliases=["v1"], usage="Be loud.")
    assert sets.help() == (
        "Options:\n\n"
        "      --verbose\n"
        '        Be loud. This is aliased as "-v1". Defaults to false.'
    )


def test_three_aliases_usage():
    sets = Sets()
    flag_set = sets.new_set("Options")
    flag_set.bool_var("flag", aliases=["x", "y", "z"], usage="U.")
    assert next(flag_set.visit_all()).usage == (
        'U. This is aliased as "-x", "-y", and "-z". Defaults to false.'
    )


def test_hidden_flag_not_in_help():
    sets = Sets()
    flag_set = sets.new_set("Options")
    flag_set.bool_var("internal", hidden=True)
    flag_set.int_var("count", usage="How many.")
    text = sets.help()
    assert "--internal" not in text
    assert "--count=<int>" in text


def test_hide_unused_flags():
    sets = Sets()
    flag_set = sets.new_set("Options")
    flag_set.int_var("one", usage="First.")
    flag_set.int_var("two", usage="Second.")
    sets.hide_unused_flags("Options", ["two"])
    text = sets.help()
    assert "--one" in text
    assert "--two" not in text


def test_enum_usage_and_validation():
    sets = Sets()
    flag_set = sets.new_set("Options")
    flag_set.enum_var("mode", ["a", "b"], usage="Pick one.")
    assert next(flag_set.visit_vars()).usage == "Pick one. One possible value from: a, b."
    with pytest.raises(FlagError, match="'c' not valid. Must be one of: a, b"):
        sets.parse(["--mode", "c"])


def test_duration_flag():
    sets = Sets()
    flag_set = sets.new_set("Options")
    timeout = flag_set.duration_var("timeout", default=timedelta(seconds=90))
    assert next(flag_set.visit_vars()).default == "1m30s"
    sets.parse(["--timeout", "10"])
    assert timeout.value == timedelta(seconds=10)


def test_uint64_default_not_shown():
    sets = Sets()
    flag_set = sets.new_set("Options")
    flag_set.uint64_var("size", default=7)
    assert next(flag_set.visit_vars()).default == ""


def test_float64_default_text():
    sets = Sets()
    flag_set = sets.new_set("Options")
    flag_set.float64_var("ratio", default=2.5)
    assert next(flag_set.visit_vars()).default == "2.5e+00"


def test_string_map_flag():
    sets = Sets()
    labels = sets.new_set("Options").string_map_var("label")
    sets.parse(["--label", "a=1", "--label", "b=2"])
    assert labels.value == {"a": "1", "b": "2"}
    with pytest.raises(FlagError):
        sets.parse(["--label", "nokey"])


def test_completions_keyed_by_long_name():
    sets = Sets()
    sets.new_set("Options").int_var("count", completion="predictor")
    assert sets.completions() == {"--count": "predictor"}


def test_visit_sets_order():
    sets = Sets()
    sets.new_set("first")
    sets.new_set("second")
    assert [name for name, _ in sets.visit_sets()] == ["first", "second"]


@pytest.mark.parametrize(
    ("args", "expected"),
    [
        (["-verbose"], True),
        (["-v"], False),
        (["--verbose"], False),
        (["plain", "-ab"], True),
        ([], False),
    ],
)
def test_has_go_flags(args, expected):
    assert has_go_flags(args) is expected


def test_wrap_short_text():
    assert wrap_at_length_with_padding("hello world", 4) == "    hello world"


def test_wrap_minimal_raggedness():
    pad = " " * 70
    assert wrap_at_length_with_padding("aaa bbb ccc", 70) == f"{pad}aaa bbb\n{pad}ccc"


def test_wrap_keeps_words_and_width():
    text = " ".join(["word"] * 40)
    wrapped = wrap_at_length_with_padding(text, 8)
    lines = wrapped.split("\n")
    assert all(len(line) <= 78 for line in lines)
    assert " ".join(line.strip() for line in lines) == text


@pytest.mark.parametrize(
    ("value", "def_value", "expected"),
    [
        (IntValue(0), "0", True),
        (IntValue(3), "3", False),
        (StringSliceValue(None), "", True),
        (StringSliceValue(["x"]), "x", False),
    ],
)
def test_default_is_zero_value(value, def_value, expected):
    flag = Flag(name="x", value=value, def_value=def_value)
    assert default_is_zero_value(flag) is expected