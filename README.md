# termsurvey

This package provides questions for command-line programs. It can ask for:

- a yes/no confirmation;
- a line of text, with optional suggestions;
- a hidden reply;
- several lines of text;
- text written in an external editor;
- any number of options from a filterable list.

It also has a helper that stores answers in dicts, dataclasses and other objects.

## Installation

```
pip install termsurvey
```

The only dependency is `jinja2`, which draws the prompts.

## Prompts

| Class         | Answer                 | Module                   |
|---------------|------------------------|--------------------------|
| `Confirm`     | `bool`                 | `termsurvey.confirm`     |
| `Input`       | `str`                  | `termsurvey.input`       |
| `Password`    | `str`                  | `termsurvey.password`    |
| `Multiline`   | `str`                  | `termsurvey.multiline`   |
| `Editor`      | `str`                  | `termsurvey.editor`      |
| `MultiSelect` | list of `OptionAnswer` | `termsurvey.multiselect` |

Every prompt is a dataclass built on `termsurvey.rendering.Renderer` and has two methods:

- `prompt(config)` asks the question and returns the answer.
- `cleanup(config, value)` redraws the question with the final answer.

Each prompt also takes two keyword-only fields:

- `stdio`, a `Stdio` with `in_`, `out` and `err` streams, which default to the `sys` streams;
- `color`, which you set to `False` to draw without ANSI colours.

The settings shared by all prompts live in `PromptConfig`:

| Field           | Default            | Meaning                                                    |
|-----------------|--------------------|------------------------------------------------------------|
| `icons`         | `IconSet()`        | The icons the prompts are drawn with                       |
| `help_input`    | `?`                | The key that shows the help text                           |
| `suggest_input` | `esc`              | The suggestion key named in the hint text                  |
| `page_size`     | 7                  | How many list entries are shown at once                    |
| `filter`        | `default_filter`   | The list filter; the default is a case-insensitive substring match |
| `keep_filter`   | `False`            | Whether a multi-select keeps its filter after a selection  |
| `show_cursor`   | `False`            | Whether the cursor stays visible                           |

```python
from termsurvey.confirm import Confirm
from termsurvey.rendering import PromptConfig

config = PromptConfig()
question = Confirm(message="Is pizza your favorite food?", default=True)
answer = question.prompt(config)
question.cleanup(config, answer)
```

If input ends before an answer is complete, a prompt raises `EOFError`. If it reads the interrupt character (Ctrl+C, `\x03`), it raises `KeyboardInterrupt`.

### Confirm

`Confirm` reads whole lines.

- It accepts `y`, `yes`, `n` and `no` in any case.
- An empty line gives `default`.
- If `help` is set, typing the help key shows the help text.
- Any other reply shows an error and asks again.

`Confirm.parse_answer(text, config)` interprets a single reply:

- it returns the boolean answer;
- it returns `None` when the reply is a request for help;
- it raises `ValueError` when it does not understand the reply.

`yes_no(value)` returns the word shown for a boolean answer: `"Yes"` or `"No"`.

### Input

`Input` reads one line and edits it a key at a time. It supports Backspace/Delete and moving the cursor left and right. An empty line gives `default`. Typing the help key on its own shows `help`.

If you pass a `suggest` callable, Tab calls it with the text typed so far.

- If it returns a single suggestion, that suggestion replaces the line.
- If it returns several, they are listed.
- Up, Down and Tab move through the list.
- Enter picks the highlighted suggestion.
- Escape goes back to what was typed.

`Input.on_key(key, line, config)` handles a single key press that concerns suggestions.

### Password

`Password` reads a reply without showing it.

- When the input stream is a terminal, it uses `getpass`.
- Otherwise it reads a plain line.

There is no default. If `help` is set, typing the help key shows the help text. `cleanup` leaves the screen untouched, so the reply is never drawn.

### Multiline

`Multiline` reads lines until two empty lines in a row. It returns the text with surrounding whitespace stripped. An empty answer gives `default`. The help key has no special meaning here.

`collect_lines(lines)` does the line collection on any iterable of strings.

### Editor

`Editor` waits for Enter. It then opens an editor on a temporary file and returns what was saved.

- The file starts with a UTF-8 byte-order mark, which is stripped from the result.
- The file name follows `file_name`, where `*` is replaced by random text. The default is `survey*.txt`.

The editor command is taken from the `editor` field. If that is empty, `default_editor(environ, platform)` picks it: `$VISUAL`, then `$EDITOR`, then `notepad` on Windows or `vim` elsewhere. The command is split with shell quoting rules.

When `append_default` is set, the default is written into the file. Otherwise an empty file gives `default`. `hide_default` keeps the default out of the prompt line.

If the editor exits with an error, `subprocess.CalledProcessError` is raised. `prompt_again(config, invalid, err)` reopens the editor on a rejected reply.

### MultiSelect

`MultiSelect` shows a paged list of `options`. Its `page_size` falls back to the config's.

| Key                                   | Effect                                                          |
|---------------------------------------|-----------------------------------------------------------------|
| Up / Down / Tab                       | Move through the list (`k`/`j` when `vim_mode` is on)           |
| Space                                 | Toggle the option under the cursor                              |
| Right                                 | Select every option that passes the filter                      |
| Left                                  | Clear every option that passes the filter                       |
| Printable characters                  | Extend the filter                                               |
| Backspace                             | Shorten the filter                                              |
| Ctrl+W / Ctrl+X                       | Clear the filter                                                |
| Escape                                | Toggle `vim_mode`                                               |
| Enter                                 | Finish                                                          |

The list is filtered by `filter` if it is set, and by `config.filter` otherwise.

`default` may be a list of option values or a list of indices. The answer is a list of `OptionAnswer(value, index)` in option order. A prompt with no options raises `ValueError`.

## Key codes

Prompts read one character at a time. The special keys are the characters in `termsurvey.rendering.Key`:

| Key    | Character |
|--------|-----------|
| Left   | `\x02`    |
| Right  | `\x06`    |
| Up     | `\x10`    |
| Down   | `\x0e`    |
| Tab    | `\t`      |
| Escape | `\x1b`    |
| and so on |        |

Escape sequences that terminals send for arrow keys are not decoded.

## Rendering helpers

`termsurvey.rendering` also provides:

- `run_template(template, data, disable_color)`, which renders a Jinja template twice: once for display and once without colour for layout.
- `color_code(style)`, which turns a style such as `cyan+b` or `red:white` into an ANSI escape.
- `paginate(page_size, choices, selected)`, which returns the page that holds the selected entry, together with the entry's position on that page.

## Storing answers

`termsurvey.answers.write_answer(target, name, value)` stores an answer. What happens depends on the target:

| Target                                  | What is stored                                                            |
|-----------------------------------------|---------------------------------------------------------------------------|
| An object implementing `Settable` (a `write_answer(name, value)` method) | The object decides for itself |
| A mutable mapping                       | The value, unchanged, under the key `name`                                |
| A list                                  | The contents of a sequence, replacing the list's contents                 |
| A dataclass or other object             | The value, converted to the field's annotated type, in the matching field |

For objects, the field is found by `find_field`. It tries the `"survey"` key of the dataclass field metadata first, then field names, ignoring case. Fields marked with `metadata={"embedded": True}` have their own fields promoted. When no field matches, `FieldNotMatchError` is raised. `is_field_not_match(err)` returns the unmatched name.

Immutable targets such as strings, numbers, tuples and frozen dataclasses raise `TypeError`.

Conversion is done by `convert_value(value, target_type)`:

| Value          | Target type                         | Result                                                                  |
|----------------|-------------------------------------|-------------------------------------------------------------------------|
| String         | `bool`                              | Parsed from `true`/`false`, `1`/`0`, `t`/`f` and so on                  |
| String         | `int` or `float`                    | Parsed as a number                                                      |
| String         | `timedelta`                         | Parsed as a duration such as `30s` or `1h15m`                           |
| `OptionAnswer` | `str`                               | Its value                                                               |
| `OptionAnswer` | `int`                               | Its index                                                               |
| List or tuple  | `list[...]` or `tuple[...]`         | Each item converted                                                     |

`option_answer_list(options)` wraps plain strings as `OptionAnswer`s.

## What this package does not do

This package provides the individual prompts and the answer helpers.

- It has no function that runs a list of questions with validation and stores the answers in one go.
- It has no single-choice select prompt.
- It has no command-line program.
- It does not put the terminal into raw mode.
- It does not translate terminal escape sequences into `Key` codes. The input stream must deliver those characters itself.