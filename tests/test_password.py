import io

import pytest

from termsurvey.confirm import question_data
from termsurvey.password import HIDDEN_INPUT_TEMPLATE, Password
from termsurvey.rendering import PromptConfig, Stdio

CONFIG = PromptConfig()
Q, H = CONFIG.icons.question.text, CONFIG.icons.help.text
MSG = "Please type your password"


def hidden(text="", **kwargs):
    return Password(stdio=Stdio(in_=io.StringIO(text), out=io.StringIO()), color=False, **kwargs)


@pytest.mark.parametrize(
    "kwargs, extra, present, absent",
    [
        ({}, {}, f"{Q} {MSG} ", "for help]"),
        ({"help": "Some help"}, {}, f"{Q} {MSG} [{CONFIG.help_input} for help] ", "Some help"),
        ({"help": "Some help"}, {"show_help": True}, f"{H} Some help\n{Q} {MSG} ", "for help]"),
    ],
)
def test_render(kwargs, extra, present, absent):
    prompt = hidden(message=MSG, **kwargs)
    prompt.render(HIDDEN_INPUT_TEMPLATE, question_data(prompt, CONFIG, **extra))
    out = prompt.stdio.out.getvalue()
    assert present in out
    assert absent not in out


def test_prompt_returns_typed_line():
    prompt = hidden("password\n", message=MSG)
    assert prompt.prompt(CONFIG) == "password"
    out = prompt.stdio.out.getvalue()
    assert f"{Q} {MSG} " in out
    assert "password\n" not in out.replace(MSG, "")


def test_prompt_help_then_answer():
    prompt = hidden("?\npassword\n", message=MSG, help="Some help")
    assert prompt.prompt(CONFIG) == "password"
    assert f"{H} Some help" in prompt.stdio.out.getvalue()


def test_help_input_is_an_answer_without_help():
    assert hidden("?\n", message=MSG).prompt(CONFIG) == "?"


@pytest.mark.parametrize("sent, error", [("", EOFError), ("\x03\n", KeyboardInterrupt)])
def test_prompt_stops(sent, error):
    with pytest.raises(error):
        hidden(sent, message=MSG, help="Some help").prompt(CONFIG)


def test_cleanup_writes_nothing():
    prompt = hidden(message=MSG)
    assert prompt.cleanup(CONFIG, "password") is None
    assert prompt.stdio.out.getvalue() == ""