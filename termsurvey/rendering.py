"""Template rendering, icons, prompt configuration and screen bookkeeping."""

from __future__ import annotations

import enum
import functools
import re
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, TextIO

import jinja2


class Key(str, enum.Enum):
    """Characters that terminals send for special keys."""

    ARROW_LEFT = "\x02"
    ARROW_RIGHT = "\x06"
    ARROW_UP = "\x10"
    ARROW_DOWN = "\x0e"
    SPACE = " "
    ENTER = "\r"
    BACKSPACE = "\b"
    DELETE = "\x7f"
    INTERRUPT = "\x03"
    END_TRANSMISSION = "\x04"
    ESCAPE = "\x1b"
    DELETE_WORD = "\x17"
    DELETE_LINE = "\x18"
    TAB = "\t"


@dataclass(frozen=True)
class Icon:
    """Text shown for an icon and the colour style it is drawn with."""

    text: str
    format: str


@dataclass
class IconSet:
    """The icons prompts draw with."""

    error: Icon = Icon("X", "red")
    help: Icon = Icon("?", "cyan")
    question: Icon = Icon("?", "green+hb")
    marked_option: Icon = Icon("[x]", "green")
    unmarked_option: Icon = Icon("[ ]", "default+hb")
    select_focus: Icon = Icon(">", "cyan+b")


def default_filter(filter_value, option, index):
    """Keep options containing the filter text, ignoring case."""
    return filter_value.casefold() in option.casefold()


@dataclass
class PromptConfig:
    """Settings shared by all prompts of one session."""

    page_size: int = 7
    icons: IconSet = field(default_factory=IconSet)
    help_input: str = "?"
    suggest_input: str = "esc"
    filter: Callable[[str, str, int], bool] = default_filter
    keep_filter: bool = False
    show_cursor: bool = False


@dataclass
class Stdio:
    """The streams a prompt reads from and writes to."""

    in_: TextIO = field(default_factory=lambda: sys.stdin)
    out: TextIO = field(default_factory=lambda: sys.stdout)
    err: TextIO = field(default_factory=lambda: sys.stderr)


_COLORS = {
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "cyan": 6,
    "white": 7,
    "default": 9,
}
_ATTRIBUTES = {"b": "1;", "B": "5;", "u": "4;", "i": "7;", "s": "9;"}
RESET = "\x1b[0m"


def color_code(style):
    """Return the ANSI escape for a style such as ``cyan+b`` or ``red:white``."""
    if not style:
        return ""
    if style == "reset":
        return RESET
    fg_part, _, bg_part = style.partition(":")
    fg_name, _, fg_attrs = fg_part.partition("+")
    bg_name, _, bg_attrs = bg_part.partition("+")
    out = "\x1b["
    for flag in fg_attrs:
        out += _ATTRIBUTES.get(flag, "")
    codes = []
    if fg_name in _COLORS:
        codes.append(str((90 if "h" in fg_attrs else 30) + _COLORS[fg_name]))
    if bg_name in _COLORS:
        codes.append(str((100 if "h" in bg_attrs else 40) + _COLORS[bg_name]))
    if not codes and out == "\x1b[":
        return ""
    body = out + ";".join(codes)
    return body.rstrip(";") + "m"


@functools.lru_cache(maxsize=None)
def _compiled(template: str, colored: bool) -> jinja2.Template:
    env = jinja2.Environment(autoescape=False, keep_trailing_newline=True)
    env.globals["color"] = color_code if colored else (lambda style: "")
    return env.from_string(template)


def run_template(template, data, disable_color=False):
    """Render ``template`` twice: for the user, and without colour for layout."""
    layout = _compiled(template, False).render(**data)
    if disable_color:
        return layout, layout
    return _compiled(template, True).render(**data), layout


def paginate(page_size, choices, selected):
    """Return the page of ``choices`` holding ``selected`` and its index on that page."""
    count = len(choices)
    if count < page_size:
        start, end, cursor = 0, count, selected
    elif selected < page_size // 2:
        start, end, cursor = 0, page_size, selected
    elif count - selected - 1 < page_size // 2:
        start, end = count - page_size, count
        cursor = selected - start
    else:
        above = page_size // 2
        below = page_size - above
        cursor = above
        start, end = selected - above, selected + below
    return list(choices[start:end]), cursor


ERROR_TEMPLATE = (
    "{{ color(icon.format) }}{{ icon.text }} Sorry, your reply was invalid: "
    "{{ error }}{{ color('reset') }}\n"
)

_ERASE_LINE = "\x1b[2K"
_LINE_START = "\x1b[1G"
_PREVIOUS_LINE = "\x1b[1F"


@dataclass(kw_only=True)
class Renderer:
    """Draws prompt templates and erases what it drew before."""

    stdio: Stdio = field(default_factory=Stdio)
    color: bool = True
    _rendered: str = field(default="", init=False, repr=False)
    _errors: str = field(default="", init=False, repr=False)

    def _reset(self, text: str) -> None:
        out = self.stdio.out
        out.write(_LINE_START + _ERASE_LINE)
        for _ in range(text.count("\n")):
            out.write(_PREVIOUS_LINE + _ERASE_LINE)

    def render(self, template, data):
        """Replace the previous drawing with ``template`` filled from ``data``."""
        user, layout = run_template(template, dict(data), not self.color)
        self._reset(self._rendered)
        self.stdio.out.write(user)
        self.stdio.out.flush()
        self._rendered = layout

    def error(self, config, err):
        """Erase the prompt and show ``err`` as an invalid reply."""
        user, layout = run_template(
            ERROR_TEMPLATE,
            {"icon": config.icons.error, "error": err},
            not self.color,
        )
        self._reset(self._errors + self._rendered)
        self.stdio.out.write(user)
        self.stdio.out.flush()
        self._errors = layout
        self._rendered = ""

    def append_rendered_text(self, text):
        """Count ``text``, written outside render, as part of the current drawing."""
        self._rendered += text


_ANSI_RX = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    """Remove colour escapes from ``text``."""
    return _ANSI_RX.sub("", text)


Data = dict[str, Any]