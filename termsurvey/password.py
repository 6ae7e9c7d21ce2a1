"""Prompt for a hidden reply that is not echoed."""

from __future__ import annotations

import getpass
from dataclasses import dataclass

from .confirm import HELP_HINT, PREVIOUS_LINE, QUESTION_HEADER, question_data, read_line
from .rendering import Key, Renderer, run_template

HIDDEN_INPUT_TEMPLATE = QUESTION_HEADER + HELP_HINT


@dataclass
class Password(Renderer):
    """Like Input, but the reply is hidden and there is no default."""

    message: str = ""
    help: str = ""

    def _read_hidden(self) -> str:
        stream = self.stdio.in_
        isatty = getattr(stream, "isatty", None)
        if isatty is None or not isatty():
            return read_line(stream)
        line = getpass.getpass(prompt="", stream=self.stdio.out)
        if Key.INTERRUPT.value in line:
            raise KeyboardInterrupt
        return line

    def prompt(self, config):
        """Ask for the hidden reply and return it."""
        user, _ = run_template(
            HIDDEN_INPUT_TEMPLATE, question_data(self, config), not self.color
        )
        self.stdio.out.write(user)
        self.stdio.out.flush()

        if not self.help:
            return self._read_hidden()

        while True:
            line = self._read_hidden()
            if line != config.help_input:
                break
            self.stdio.out.write(PREVIOUS_LINE)
            self.render(HIDDEN_INPUT_TEMPLATE, question_data(self, config, show_help=True))

        self.append_rendered_text("*" * len(line))
        return line

    def cleanup(self, config, value):
        """Leave the screen as it is, so the reply is never shown."""
        return None