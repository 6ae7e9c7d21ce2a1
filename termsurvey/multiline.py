"""Prompt for text spanning several lines."""

from __future__ import annotations

from dataclasses import dataclass

from .confirm import QUESTION_HEADER, question_data, read_line
from .rendering import Renderer

MULTILINE_TEMPLATE = (
    QUESTION_HEADER
    + "{% if show_answer %}\n{{ color('cyan') }}{{ answer }}{{ color('reset') }}"
    "{% if answer %}\n{% endif %}"
    "{% else %}"
    "{% if default %}{{ color('white') }}({{ default }}) {{ color('reset') }}{% endif %}"
    "{{ color('cyan') }}[Enter 2 empty lines to finish]{{ color('reset') }}"
    "{% endif %}"
)

_ERASE_LINE = "\x1b[2K"
_NEXT_LINE = "\x1b[1E"


def collect_lines(lines):
    """Take lines until two empty ones in a row; return them without the last.

    Raises EOFError if ``lines`` runs out first.
    """
    collected = []
    empty_once = False
    for line in lines:
        if line == "":
            if empty_once:
                return collected
            empty_once = True
        else:
            empty_once = False
        collected.append(line)
    raise EOFError("input ended before two empty lines")


def _read_lines(stream):
    while True:
        try:
            yield read_line(stream)
        except EOFError:
            return


@dataclass
class Multiline(Renderer):
    """Free text over several lines, finished by two empty lines."""

    message: str = ""
    default: str = ""
    help: str = ""

    def prompt(self, config):
        """Read lines until two empty ones and return the trimmed text."""
        self.render(MULTILINE_TEMPLATE, question_data(self, config))
        lines = collect_lines(_read_lines(self.stdio.in_))

        out = self.stdio.out
        count = len(lines) + 2
        out.write(f"\x1b[{count}F")
        out.write((_ERASE_LINE + _NEXT_LINE) * count)
        out.write(f"\x1b[{count}F")
        out.flush()

        text = "\n".join(lines).strip()
        if not text:
            return self.default
        self.append_rendered_text(text)
        return text

    def cleanup(self, config, value):
        """Redraw the question followed by the answer."""
        self.render(
            MULTILINE_TEMPLATE,
            question_data(self, config, answer=value, show_answer=True),
        )