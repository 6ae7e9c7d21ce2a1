"""Prompt that opens the user's text editor on a temporary file."""

from __future__ import annotations

import io
import os
import shlex
import subprocess
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path

from .rendering import Key, Renderer

EDITOR_TEMPLATE = (
    "{% if show_help %}{{ color(config.icons.help.format) }}{{ config.icons.help.text }} "
    "{{ help }}{{ color('reset') }}\n{% endif %}"
    "{{ color(config.icons.question.format) }}{{ config.icons.question.text }} {{ color('reset') }}"
    "{{ color('default+hb') }}{{ message }} {{ color('reset') }}"
    "{% if show_answer %}{{ color('cyan') }}{{ answer }}{{ color('reset') }}\n"
    "{% else %}"
    "{% if help and not show_help %}{{ color('cyan') }}[{{ config.help_input }} for help]"
    "{{ color('reset') }} {% endif %}"
    "{% if default and not hide_default %}{{ color('white') }}({{ default }}) "
    "{{ color('reset') }}{% endif %}"
    "{{ color('cyan') }}[Enter to launch editor] {{ color('reset') }}"
    "{% endif %}"
)

BOM = b"\xef\xbb\xbf"
_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"


def default_editor(environ, platform):
    """Pick the editor command from VISUAL, then EDITOR, then a platform default."""
    editor = "notepad" if platform.startswith("win") else "vim"
    if environ.get("VISUAL"):
        return environ["VISUAL"]
    if environ.get("EDITOR"):
        return environ["EDITOR"]
    return editor


def _fileno_or_none(stream):
    try:
        return stream.fileno()
    except (AttributeError, OSError, io.UnsupportedOperation):
        return None


@dataclass
class Editor(Renderer):
    """Long text written in an external editor; the answer is a string."""

    message: str = ""
    default: str = ""
    help: str = ""
    editor: str = ""
    hide_default: bool = False
    append_default: bool = False
    file_name: str = ""

    def _template_data(self, config, **extra) -> dict:
        data = {
            "message": self.message,
            "default": self.default,
            "help": self.help,
            "hide_default": self.hide_default,
            "answer": "",
            "show_answer": False,
            "show_help": False,
            "config": config,
        }
        data.update(extra)
        return data

    def prompt(self, config):
        """Wait for Enter, open the editor and return what was written."""
        initial = self.default if self.default and self.append_default else ""
        return self._edit(initial, config)

    def prompt_again(self, config, invalid, err):
        """Reopen the editor on a reply that failed validation."""
        return self._edit(invalid, config)

    def _edit(self, initial: str, config) -> str:
        self.render(EDITOR_TEMPLATE, self._template_data(config))
        out = self.stdio.out
        out.write(_HIDE_CURSOR)
        try:
            self._wait_for_launch(config)
            return self._run_editor(initial)
        finally:
            out.write(_SHOW_CURSOR)
            out.flush()

    def _wait_for_launch(self, config) -> None:
        while True:
            char = self.stdio.in_.read(1)
            if not char:
                raise EOFError("end of input")
            if char in ("\r", "\n", Key.END_TRANSMISSION.value):
                return
            if char == Key.INTERRUPT.value:
                raise KeyboardInterrupt
            if char == config.help_input and self.help:
                self.render(EDITOR_TEMPLATE, self._template_data(config, show_help=True))

    def _run_editor(self, initial: str) -> str:
        pattern = self.file_name or "survey*.txt"
        prefix, star, suffix = pattern.rpartition("*")
        if not star:
            prefix, suffix = suffix, ""
        fd, path = tempfile.mkstemp(prefix=prefix, suffix=suffix)
        try:
            # the BOM keeps editors that guess encodings from treating the file as legacy text
            with os.fdopen(fd, "wb") as handle:
                handle.write(BOM + initial.encode("utf-8"))

            args = shlex.split(self.editor or default_editor(os.environ, sys.platform))
            args.append(path)

            self.stdio.out.write(_SHOW_CURSOR)
            self.stdio.out.flush()
            subprocess.run(
                args,
                stdin=_fileno_or_none(self.stdio.in_),
                stdout=_fileno_or_none(self.stdio.out),
                stderr=_fileno_or_none(self.stdio.err),
                check=True,
            )
            raw = Path(path).read_bytes()
        finally:
            try:
                os.unlink(path)
            except OSError:
                pass

        text = raw.removeprefix(BOM).decode("utf-8")
        if not text and not self.append_default:
            return self.default
        return text

    def cleanup(self, config, value):
        """Redraw the question noting that an answer was received."""
        self.render(
            EDITOR_TEMPLATE,
            self._template_data(config, answer="<Received>", show_answer=True),
        )