"""Prompt for choosing any number of options from a list."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from .answers import OptionAnswer, option_answer_list
from .rendering import Key, Renderer, paginate

MULTISELECT_TEMPLATE = (
    "{% if show_help %}{{ color(config.icons.help.format) }}{{ config.icons.help.text }} "
    "{{ help }}{{ color('reset') }}\n{% endif %}"
    "{{ color(config.icons.question.format) }}{{ config.icons.question.text }} {{ color('reset') }}"
    "{{ color('default+hb') }}{{ message }}{{ filter_message }}{{ color('reset') }}"
    "{% if show_answer %}{{ color('cyan') }} {{ answer }}{{ color('reset') }}\n"
    "{% else %}"
    "  {{ color('cyan') }}[Use arrows to move, space to select, <right> to all, "
    "<left> to none, type to filter"
    "{% if help and not show_help %}, {{ config.help_input }} for more help{% endif %}]"
    "{{ color('reset') }}\n"
    "{% for opt in page_entries %}"
    "{% if loop.index0 == selected_index %}{{ color(config.icons.select_focus.format) }}"
    "{{ config.icons.select_focus.text }}{{ color('reset') }}{% else %} {% endif %}"
    "{% if checked.get(opt.index) %}{{ color(config.icons.marked_option.format) }} "
    "{{ config.icons.marked_option.text }} "
    "{% else %}{{ color(config.icons.unmarked_option.format) }} "
    "{{ config.icons.unmarked_option.text }} {% endif %}"
    "{{ color('reset') }} {{ opt.value }}\n"
    "{% endfor %}"
    "{% endif %}"
)

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"


@dataclass
class MultiSelect(Renderer):
    """A list of options, any number of which can be ticked.

    The answer is a list of OptionAnswers in option order.
    """

    message: str = ""
    options: list[str] = field(default_factory=list)
    default: Any = None
    help: str = ""
    page_size: int = 0
    vim_mode: bool = False
    filter_message: str = ""
    filter: Callable[[str, str, int], bool] | None = None
    _filter_text: str = field(default="", init=False, repr=False)
    _selected_index: int = field(default=0, init=False, repr=False)
    _checked: dict[int, bool] = field(default_factory=dict, init=False, repr=False)
    _showing_help: bool = field(default=False, init=False, repr=False)

    def _template_data(self, config, **extra) -> dict:
        data = {
            "message": self.message,
            "filter_message": self.filter_message,
            "help": self.help,
            "show_help": False,
            "show_answer": False,
            "answer": "",
            "page_entries": [],
            "selected_index": 0,
            "checked": self._checked,
            "config": config,
        }
        data.update(extra)
        return data

    def _page_size(self, config) -> int:
        return self.page_size or config.page_size

    def filter_options(self, config):
        """Return the options that pass the current filter."""
        if not self._filter_text:
            return option_answer_list(self.options)
        keep = self.filter or config.filter
        return [
            OptionAnswer(option, index)
            for index, option in enumerate(self.options)
            if keep(self._filter_text, option, index)
        ]

    def _check_all(self, options, value: bool, config) -> None:
        for option in options:
            self._checked[option.index] = value
        if not config.keep_filter:
            self._filter_text = ""

    def on_change(self, key, config):
        """Apply one key press and redraw the list."""
        options = self.filter_options(config)
        old_filter = self._filter_text

        if key == Key.ARROW_UP or (self.vim_mode and key == "k"):
            if self._selected_index == 0:
                self._selected_index = len(options) - 1
            else:
                self._selected_index -= 1
        elif key in (Key.TAB, Key.ARROW_DOWN) or (self.vim_mode and key == "j"):
            if self._selected_index == len(options) - 1:
                self._selected_index = 0
            else:
                self._selected_index += 1
        elif key == Key.SPACE:
            if self._selected_index < len(options):
                chosen = options[self._selected_index]
                self._checked[chosen.index] = not self._checked.get(chosen.index, False)
                if not config.keep_filter:
                    self._filter_text = ""
        elif key == config.help_input and self.help:
            self._showing_help = True
        elif key == Key.ESCAPE:
            self.vim_mode = not self.vim_mode
        elif key in (Key.DELETE_WORD, Key.DELETE_LINE):
            self._filter_text = ""
        elif key in (Key.DELETE, Key.BACKSPACE):
            self._filter_text = self._filter_text[:-1]
        elif key >= " ":
            self._filter_text += key
            self.vim_mode = False
        elif key == Key.ARROW_RIGHT:
            self._check_all(options, True, config)
        elif key == Key.ARROW_LEFT:
            self._check_all(options, False, config)

        self.filter_message = f" {self._filter_text}" if self._filter_text else ""
        if old_filter != self._filter_text:
            options = self.filter_options(config)
            if options and len(options) <= self._selected_index:
                self._selected_index = len(options) - 1

        entries, index = paginate(self._page_size(config), options, self._selected_index)
        self.render(
            MULTISELECT_TEMPLATE,
            self._template_data(
                config,
                selected_index=index,
                show_help=self._showing_help,
                page_entries=entries,
            ),
        )

    def _initial_checks(self) -> dict[int, bool]:
        checked: dict[int, bool] = {}
        default = self.default
        if not isinstance(default, (list, tuple)):
            return checked
        if all(isinstance(value, str) for value in default):
            for wanted in default:
                if wanted in self.options:
                    checked[self.options.index(wanted)] = True
        elif all(isinstance(value, int) and not isinstance(value, bool) for value in default):
            for index in default:
                checked[index] = True
        return checked

    def prompt(self, config):
        """Let the user tick options and return those ticked."""
        self._checked = self._initial_checks()
        if not self.options:
            raise ValueError("please provide options to select from")

        entries, index = paginate(
            self._page_size(config), option_answer_list(self.options), self._selected_index
        )
        out = self.stdio.out
        out.write(_HIDE_CURSOR)
        try:
            self.render(
                MULTISELECT_TEMPLATE,
                self._template_data(config, selected_index=index, page_entries=entries),
            )
            while True:
                key = self.stdio.in_.read(1)
                if not key:
                    raise EOFError("end of input")
                if key in ("\r", "\n", Key.END_TRANSMISSION):
                    break
                if key == Key.INTERRUPT:
                    raise KeyboardInterrupt
                self.on_change(key, config)
        finally:
            out.write(_SHOW_CURSOR)
            out.flush()

        self._filter_text = ""
        self.filter_message = ""
        return [
            OptionAnswer(option, index)
            for index, option in enumerate(self.options)
            if self._checked.get(index)
        ]

    def cleanup(self, config, value):
        """Replace the list with the question and the chosen values."""
        answer = ", ".join(choice.value for choice in value)
        self.render(
            MULTISELECT_TEMPLATE,
            self._template_data(
                config,
                selected_index=self._selected_index,
                answer=answer,
                show_answer=True,
            ),
        )