"""Yes/no question prompt, and the pieces the simple text prompts share."""

from __future__ import annotations

import dataclasses
import json
import re
from dataclasses import dataclass

from .rendering import Key, Renderer

QUESTION_HEADER = (
    "{% if show_help %}{{ color(config.icons.help.format) }}{{ config.icons.help.text }} "
    "{{ help }}{{ color('reset') }}\n{% endif %}"
    "{{ color(config.icons.question.format) }}{{ config.icons.question.text }} {{ color('reset') }}"
    "{{ color('default+hb') }}{{ message }} {{ color('reset') }}"
)
"""Optional help line followed by the icon and the question text."""

HELP_HINT = (
    "{% if help and not show_help %}{{ color('cyan') }}[{{ config.help_input }} for help]"
    "{{ color('reset') }} {% endif %}"
)
"""Reminder of the help key, shown while the help text is hidden."""

CONFIRM_TEMPLATE = (
    QUESTION_HEADER
    + "{% if answer %}{{ color('cyan') }}{{ answer }}{{ color('reset') }}\n"
    "{% else %}"
    + HELP_HINT
    + "{{ color('white') }}{% if default %}(Y/n) {% else %}(y/N) {% endif %}{{ color('reset') }}"
    "{% endif %}"
)

PREVIOUS_LINE = "\x1b[1F"
"""Moves the cursor to the start of the line above."""

_YES = re.compile(r"y(?:es)?", re.IGNORECASE)
_NO = re.compile(r"n(?:o)?", re.IGNORECASE)
_WORDS = {True: "Yes", False: "No"}


def yes_no(value):
    """Return the word shown for a boolean answer."""
    return _WORDS[bool(value)]


def question_data(prompt, config, **extra):
    """Build template data from a prompt's fields, the config and overrides."""
    data = {"answer": "", "show_answer": False, "show_help": False, "config": config}
    data.update((field.name, getattr(prompt, field.name)) for field in dataclasses.fields(prompt))
    data.update(extra)
    return data


def read_line(stream):
    """Read one line without its line ending.

    Raises EOFError when the stream is exhausted and KeyboardInterrupt when
    the line holds the interrupt key.
    """
    raw = stream.readline()
    if not raw:
        raise EOFError("end of input")
    line = raw.rstrip("\r\n")
    if Key.INTERRUPT.value in line:
        raise KeyboardInterrupt
    return line


@dataclass
class Confirm(Renderer):
    """A question answered with yes or no; the answer is a bool."""

    message: str = ""
    default: bool = False
    help: str = ""

    def parse_answer(self, text, config):
        """Interpret a typed reply.

        Returns the boolean answer, or None when the reply asks for help.
        Raises ValueError for a reply that is not understood.
        """
        if _YES.fullmatch(text):
            return True
        if _NO.fullmatch(text):
            return False
        if text == "":
            return self.default
        if text == config.help_input and self.help:
            return None
        quoted = json.dumps(text, ensure_ascii=False)
        raise ValueError(f"{quoted} is not a valid answer, please try again.")

    def prompt(self, config):
        """Ask the question and return the chosen bool."""
        self.render(CONFIRM_TEMPLATE, question_data(self, config))
        show_help = False
        while True:
            line = read_line(self.stdio.in_)
            # the terminal echoed a newline; go back up to redraw in place
            self.stdio.out.write(PREVIOUS_LINE)
            try:
                answer = self.parse_answer(line, config)
            except ValueError as exc:
                self.error(config, exc)
                self.render(CONFIRM_TEMPLATE, question_data(self, config, show_help=show_help))
                continue
            if answer is None:
                show_help = True
                self.render(CONFIRM_TEMPLATE, question_data(self, config, show_help=True))
                continue
            return answer

    def cleanup(self, config, value):
        """Redraw the question with the final answer."""
        self.render(CONFIRM_TEMPLATE, question_data(self, config, answer=yes_no(value)))