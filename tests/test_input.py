import io

import pytest

from termsurvey.answers import option_answer_list
from termsurvey.input import INPUT_TEMPLATE, Input
from termsurvey.rendering import Key, PromptConfig, Stdio

CONFIG = PromptConfig()
Q = CONFIG.icons.question.text
H = CONFIG.icons.help.text
HELP = CONFIG.help_input
SUGGEST = CONFIG.suggest_input
FOCUS = CONFIG.icons.select_focus.text


def _no_suggestions(text):
    return []


def _attach(prompt, keys=""):
    out = io.StringIO()
    prompt.stdio = Stdio(in_=io.StringIO(keys), out=out)
    prompt.color = False
    return out


def _render(prompt, **data):
    out = _attach(prompt)
    prompt.render(INPUT_TEMPLATE, prompt._template_data(CONFIG, **data))
    return out.getvalue()


MONTH = "What is your favorite month:"


@pytest.mark.parametrize(
    "prompt, data, expected",
    [
        (Input(message=MONTH), {}, f"{Q} {MONTH} "),
        (Input(message=MONTH, default="April"), {}, f"{Q} {MONTH} (April) "),
        (
            Input(message=MONTH),
            {"show_answer": True, "answer": "October"},
            f"{Q} {MONTH} October\n",
        ),
        (
            Input(message=MONTH, help="This is helpful"),
            {},
            f"{Q} {MONTH} [{HELP} for help] ",
        ),
        (
            Input(message=MONTH, default="April", help="This is helpful"),
            {},
            f"{Q} {MONTH} [{HELP} for help] (April) ",
        ),
        (
            Input(message=MONTH, help="This is helpful"),
            {"show_help": True},
            f"{H} This is helpful\n{Q} {MONTH} ",
        ),
        (
            Input(message=MONTH, default="April", help="This is helpful"),
            {"show_help": True},
            f"{H} This is helpful\n{Q} {MONTH} (April) ",
        ),
        (
            Input(message=MONTH, suggest=_no_suggestions),
            {},
            f"{Q} {MONTH} [{SUGGEST} for suggestions] ",
        ),
        (
            Input(message=MONTH, suggest=_no_suggestions, help="This is helpful"),
            {},
            f"{Q} {MONTH} [{HELP} for help, {SUGGEST} for suggestions] ",
        ),
        (
            Input(
                message=MONTH,
                suggest=_no_suggestions,
                help="This is helpful",
                default="April",
            ),
            {},
            f"{Q} {MONTH} [{HELP} for help, {SUGGEST} for suggestions] (April) ",
        ),
        (
            Input(message=MONTH, suggest=_no_suggestions),
            {
                "answer": "February",
                "page_entries": option_answer_list(
                    ["January", "February", "March", "etc..."]
                ),
                "selected_index": 1,
            },
            f"{Q} {MONTH} February [Use arrows to move, enter to select, type to continue]\n"
            f"  January\n{FOCUS} February\n  March\n  etc...\n",
        ),
    ],
)
def test_render(prompt, data, expected):
    assert expected in _render(prompt, **data)


def _ask(prompt, keys, config=None):
    out = _attach(prompt, keys)
    answer = prompt.prompt(config or PromptConfig())
    return answer, out.getvalue()


def _const(*values):
    return lambda text: list(values)


K = Key


@pytest.mark.parametrize(
    "prompt, keys, expected",
    [
        (Input(message="What is your name?"), "Larry Bird\n", "Larry Bird"),
        (
            Input(message="What is your name?", default="Johnny Appleseed"),
            "\n",
            "Johnny Appleseed",
        ),
        (
            Input(message="What is your name?", default="Johnny Appleseed"),
            "Larry Bird\n",
            "Larry Bird",
        ),
        (Input(message="What is your name?"), "R\n", "R"),
        (Input(message="What is your name?"), "Johnny " + K.DELETE.value + "\n", "Johnny"),
        (Input(message="What is your name?"), "小明" + K.BACKSPACE.value + "\n", "小"),
        (
            Input(message="What is your favorite month?", suggest=_const("January", "February")),
            K.TAB.value + "\n",
            "January",
        ),
        (
            Input(message="What is your favorite month?", suggest=_const("February")),
            "feb" + K.TAB.value + "\n",
            "February",
        ),
        (
            Input(
                message="What is your favorite month?",
                suggest=_const("January", "February", "March"),
            ),
            K.TAB.value + K.ARROW_DOWN.value + K.ARROW_DOWN.value + "\n",
            "March",
        ),
        (
            Input(
                message="What is your favorite month?",
                suggest=_const("January", "February", "March"),
            ),
            K.TAB.value + K.ARROW_DOWN.value * 2 + K.ARROW_UP.value + "\n",
            "February",
        ),
        (
            Input(message="Wanna a suggestion?", suggest=_const("suggest1", "suggest2")),
            "typed answer" + K.TAB.value + K.ESCAPE.value + "\n",
            "typed answer",
        ),
        (
            Input(
                message="Choose the special one:",
                suggest=_const("suggest1", "suggest2", "special answer"),
            ),
            "s" + K.TAB.value * 3 + "\n",
            "special answer",
        ),
        (
            Input(message="Filename to save:"),
            "essay.txt"
            + K.ARROW_LEFT.value * 4
            + "_final"
            + K.ARROW_RIGHT.value * 4
            + K.BACKSPACE.value * 3
            + "md"
            + K.ARROW_LEFT.value * 3
            + "2\n",
            "essay_final2.md",
        ),
        (
            Input(message="Filename to save:", suggest=_const(".txt", ".csv", ".go")),
            K.TAB.value * 2 + K.ARROW_LEFT.value * 5 + "newtable\n",
            "newtable.csv",
        ),
    ],
)
def test_prompt_interaction(prompt, keys, expected):
    answer, _ = _ask(prompt, keys)
    assert answer == expected


def test_prompt_for_help_shows_help_text():
    prompt = Input(message="What is your name?", help="It might be Satoshi Nakamoto")
    answer, output = _ask(prompt, "?\nSatoshi Nakamoto\n")
    assert answer == "Satoshi Nakamoto"
    assert "It might be Satoshi Nakamoto" in output


def test_suggestions_are_listed():
    prompt = Input(message="Month?", suggest=_const("January", "February"))
    _, output = _ask(prompt, K.TAB.value + "\n")
    assert "January" in output
    assert "February" in output


def test_suggestions_refine_after_typing():
    def suggest(text):
        if text == "":
            return ["folder1/", "folder2/", "folder3/"]
        return ["folder3/file1.txt", "folder3/file2.txt"]

    prompt = Input(message="Where to save it?", suggest=suggest)
    keys = K.TAB.value + K.ARROW_DOWN.value * 2 + "f" + K.TAB.value + K.ARROW_DOWN.value + "\n"
    answer, output = _ask(prompt, keys)
    assert answer == "folder3/file2.txt"
    assert "folder1/" in output


def test_escape_restores_typed_text_on_screen():
    prompt = Input(message="Wanna a suggestion?", suggest=_const("suggest1", "suggest2"))
    _, output = _ask(prompt, "typed answer" + K.TAB.value + K.ESCAPE.value + "\n")
    assert "suggest1" in output
    assert output.rstrip().endswith("typed answer") or "typed answer" in output


def test_on_key_leaves_plain_keys_to_editor():
    prompt = Input(message="x")
    _attach(prompt)
    assert prompt.on_key("a", "", CONFIG) is None
    assert prompt.on_key("\n", "abc", CONFIG) is None


def test_on_key_tab_without_suggestions_is_left_to_editor():
    prompt = Input(message="x", suggest=_no_suggestions)
    _attach(prompt)
    assert prompt.on_key(K.TAB.value, "abc", CONFIG) is None


def test_on_key_enter_accepts_highlighted_suggestion():
    prompt = Input(message="x", suggest=_const("one", "two"))
    _attach(prompt)
    assert prompt.on_key(K.TAB.value, "", CONFIG) == ""
    assert prompt.on_key(K.ARROW_DOWN.value, "", CONFIG) == ""
    assert prompt.on_key("\r", "", CONFIG) == "two"


def test_eof_raises():
    prompt = Input(message="x")
    with pytest.raises(EOFError):
        _ask(prompt, "abc")


def test_interrupt_raises():
    prompt = Input(message="x")
    with pytest.raises(KeyboardInterrupt):
        _ask(prompt, "ab" + K.INTERRUPT.value)


def test_cleanup_shows_answer():
    prompt = Input(message="What is your name?")
    _ask(prompt, "Larry Bird\n")
    out = _attach(prompt)
    prompt.cleanup(CONFIG, "Larry Bird")
    assert f"{Q} What is your name? Larry Bird\n" in out.getvalue()


def test_cleanup_falls_back_to_default():
    prompt = Input(message="What is your name?", default="Johnny")
    _ask(prompt, "\n")
    out = _attach(prompt)
    prompt.cleanup(CONFIG, "Johnny")
    assert f"{Q} What is your name? Johnny\n" in out.getvalue()