"""Single-line text prompt with optional suggestions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from .answers import OptionAnswer, option_answer_list
from .rendering import Key, Renderer, paginate

INPUT_TEMPLATE = (
    "{% if show_help %}{{ color(config.icons.help.format) }}{{ config.icons.help.text }} "
    "{{ help }}{{ color('reset') }}\n{% endif %}"
    "{{ color(config.icons.question.format) }}{{ config.icons.question.text }} {{ color('reset') }}"
    "{{ color('default+hb') }}{{ message }} {{ color('reset') }}"
    "{% if show_answer %}{{ color('cyan') }}{{ answer }}{{ color('reset') }}\n"
    "{% elif page_entries %}"
    "{{ answer }} [Use arrows to move, enter to select, type to continue]\n"
    "{% for choice in page_entries %}"
    "{% if loop.index0 == selected_index %}{{ color(config.icons.select_focus.format) }}"
    "{{ config.icons.select_focus.text }} {% else %}{{ color('default') }}  {% endif %}"
    "{{ choice.value }}{{ color('reset') }}\n"
    "{% endfor %}"
    "{% else %}"
    "{% if (help and not show_help) or suggest %}{{ color('cyan') }}["
    "{% if help and not show_help %}{{ config.help_input }} for help"
    "{% if suggest %}, {% endif %}{% endif %}"
    "{% if suggest %}{{ color('cyan') }}{{ config.suggest_input }} for suggestions{% endif %}"
    "]{{ color('reset') }} {% endif %}"
    "{% if default %}{{ color('white') }}({{ default }}) {{ color('reset') }}{% endif %}"
    "{% endif %}"
)

_ENTER_KEYS = {"\r", "\n"}
_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CURSOR_UP = "\x1b[1A"


@dataclass
class Input(Renderer):
    """Free text typed on one line; the answer is a string."""

    message: str = ""
    default: str = ""
    help: str = ""
    suggest: Callable[[str], list[str]] | None = None
    _answer: str = field(default="", init=False, repr=False)
    _typed_answer: str = field(default="", init=False, repr=False)
    _options: list[OptionAnswer] | None = field(default=None, init=False, repr=False)
    _selected_index: int = field(default=0, init=False, repr=False)
    _showing_help: bool = field(default=False, init=False, repr=False)

    def _template_data(self, config, **extra) -> dict:
        data = {
            "message": self.message,
            "default": self.default,
            "help": self.help,
            "suggest": self.suggest,
            "show_answer": False,
            "show_help": False,
            "answer": "",
            "page_entries": [],
            "selected_index": 0,
            "config": config,
        }
        data.update(extra)
        return data

    def on_key(self, key, line, config):
        """Handle a key press that may concern suggestions.

        Returns None when the key is left to the line editor; otherwise the
        text the line now holds. After Enter that text is the final answer,
        after any other key reading starts again from it.
        """
        options = self._options
        if options is not None and key in _ENTER_KEYS:
            return self._answer
        if options is not None and key == Key.ESCAPE:
            self._answer = self._typed_answer
            self._options = None
        elif key == Key.ARROW_UP and options:
            self._selected_index = (self._selected_index - 1) % len(options)
            self._answer = options[self._selected_index].value
        elif key in (Key.ARROW_DOWN, Key.TAB) and options:
            self._selected_index = (self._selected_index + 1) % len(options)
            self._answer = options[self._selected_index].value
        elif key == Key.TAB and self.suggest is not None:
            self._answer = line
            self._typed_answer = line
            suggestions = list(self.suggest(line))
            self._selected_index = 0
            if not suggestions:
                return None
            self._answer = suggestions[0]
            if len(suggestions) == 1:
                self._typed_answer = self._answer
                self._options = None
            else:
                self._options = option_answer_list(suggestions)
        else:
            if options is None:
                return None
            if key >= " ":
                self._answer += key
            self._typed_answer = self._answer
            self._options = None

        entries, index = paginate(
            config.page_size, self._options or [], self._selected_index
        )
        self.render(
            INPUT_TEMPLATE,
            self._template_data(
                config,
                answer=self._answer,
                show_help=self._showing_help,
                selected_index=index,
                page_entries=entries,
            ),
        )
        return self._typed_answer

    def _redraw(self, buffer: list[str], old_cursor: int, cursor: int) -> None:
        out = self.stdio.out
        if old_cursor:
            out.write(f"\x1b[{old_cursor}D")
        text = "".join(buffer) + " "
        out.write(text)
        back = len(text) - cursor
        if back:
            out.write(f"\x1b[{back}D")
        out.flush()

    def _edit_line(self, initial: str, config) -> tuple[str, bool]:
        """Edit one line; return its text and whether it was accepted."""
        buffer = list(initial)
        cursor = len(buffer)
        self.stdio.out.write(initial)
        while True:
            key = self.stdio.in_.read(1)
            if not key:
                raise EOFError("end of input")
            if key == Key.INTERRUPT:
                raise KeyboardInterrupt
            handled = self.on_key(key, "".join(buffer), config)
            if handled is not None:
                return handled, key in _ENTER_KEYS
            if key in _ENTER_KEYS or key == Key.END_TRANSMISSION:
                self.stdio.out.write("\n")
                return "".join(buffer), True
            old_cursor = cursor
            if key in (Key.BACKSPACE, Key.DELETE):
                if cursor:
                    del buffer[cursor - 1]
                    cursor -= 1
            elif key == Key.ARROW_LEFT:
                cursor = max(0, cursor - 1)
            elif key == Key.ARROW_RIGHT:
                cursor = min(len(buffer), cursor + 1)
            elif key >= " ":
                buffer.insert(cursor, key)
                cursor += 1
            else:
                continue
            self._redraw(buffer, old_cursor, cursor)

    def _read_answer(self, config) -> str:
        line = ""
        while True:
            if self._options is not None:
                line = ""
            line, done = self._edit_line(line, config)
            if done:
                return line

    def prompt(self, config):
        """Read a line and return it, or the default for an empty line."""
        out = self.stdio.out
        while True:
            self.render(
                INPUT_TEMPLATE, self._template_data(config, show_help=self._showing_help)
            )
            hide = not config.show_cursor
            if hide:
                out.write(_HIDE_CURSOR)
            try:
                line = self._read_answer(config)
            finally:
                if hide:
                    out.write(_SHOW_CURSOR)
                    out.flush()
            self._answer = line
            # the line editor left an empty line behind; go back up
            out.write(_CURSOR_UP)
            if line == config.help_input and self.help:
                self._showing_help = True
                continue
            if not line:
                return self.default
            self.append_rendered_text(line)
            return line

    def cleanup(self, config, value):
        """Redraw the question with the final answer."""
        answer = self._answer or self.default
        self.render(
            INPUT_TEMPLATE,
            self._template_data(config, show_answer=True, answer=answer),
        )