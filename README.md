# packtools

Building blocks for command-line pack tooling. The package has no
third-party dependencies.

## Modules

- `packtools.flags.values`: typed flag values (`BoolValue`, `EnumValue`,
  `EnumSingleValue`, `IntValue`, `Float64Value`, `DurationValue`,
  `StringSliceValue`, `StringMapValue`). Every one has `set(text)` and
  `get()`. The module also holds the parsing helpers `parse_bool`,
  `parse_int`, `parse_uint`, `parse_duration`, `format_duration`,
  `append_duration_suffix` and `map_to_kv`, and the environment helpers
  `env_default`, `env_bool_default` and `env_duration_default`.
- `packtools.flags.sets`: grouped flag sets. `Sets.new_set(name)` creates a
  named `Set`. Its registration methods (`bool_var`, `int_var`,
  `int64_var`, `uint_var`, `uint64_var`, `float64_var`, `duration_var`,
  `enum_var`, `enum_single_var`, `string_slice_var`, `string_map_var`)
  return the value object. `Sets.parse(args)` accepts POSIX-style
  arguments (`--name value`, `--name=value`, `-n value`), which may come
  after positional arguments. It also accepts single-dash long flags
  (`-name value`); with those, flags must come before positional arguments,
  and `FlagAfterArgsError` is raised otherwise. Any other parse problem
  raises `FlagError`. `Sets.help()` renders help text grouped by set, and
  `Sets.hide_unused_flags(set_name, flag_names)` hides flags from it.
  Environment variables named with `env_var=` supply initial values.
- `packtools.spinner`: `Spinner`, a progress indicator that draws on a
  background thread. It has `start`, `stop`, `restart`, `reverse`,
  `set_color`, `update_speed` and `update_charset`, and it works as a
  context manager. `CHAR_SETS` holds ready-made character sets, and
  `generate_number_sequence(n)` returns `"0"` to `str(n - 1)`. An unknown
  colour name raises `InvalidColorError`. The spinner colours its output
  only when standard output is a terminal and `NO_COLOR` is unset.
- `packtools.helper`: `title(text)` returns text in title case.
  `with_interrupt()` is a context manager that yields a `threading.Event`.
  The event is set when SIGINT arrives, and on exit.
- `packtools.log`: the `Logger` interface and two implementations.
  `FmtLogger` prints each message to stdout. `TestLogger` passes each
  message to a callback. `default_logger()` returns a `FmtLogger`.
- `packtools.filesystem`: the copy helpers `copy_file` and `copy_dir`,
  which keep permission bits; `copy_dir` skips symlinked files. Also
  `maybe_create_destination_dir`, and `walk(root)`, which yields
  `(path, stat_result)` pairs in sorted order and follows symlinks.
- `packtools.templatefuncs`: `to_string_list(value)` renders a list as an
  HCL list of quoted strings, e.g. `["dc1", "dc2"]`. `file_contents(path)`
  returns the text of a file.

## Installation

```
pip install .
```

## Example

```python
from packtools.flags.sets import Sets

sets = Sets()
common = sets.new_set("Common Options")
alpha = common.int_var("alpha", shorthand="a", usage="An alpha value.")
names = common.string_slice_var("names", usage="Names to use.")

sets.parse(["-a", "21", "--names", "one,two", "positional"])
print(alpha.get(), names.get(), sets.args())
print(sets.help())
```

```python
from packtools.spinner import Spinner

with Spinner(["|", "/", "-", "\\"], 0.1, suffix=" working"):
    ...
```

## What it does not do

This is a library of helpers. It has no command-line program of its own.
It does not load packs, parse variable files or render and deploy
templates. `packtools.templatefuncs` supplies only two template functions,
not a template engine.

## Running the tests

```
pip install .[test]
pytest
```