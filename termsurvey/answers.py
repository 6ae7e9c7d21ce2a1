"""Copying prompt answers into user-supplied targets."""

from __future__ import annotations

import dataclasses
import re
import typing
from collections.abc import MutableMapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Protocol, runtime_checkable

TAG_NAME = "survey"
"""Key in dataclass field metadata that names the question a field answers."""

EMBEDDED = "embedded"
"""Metadata flag marking a dataclass field whose own fields are promoted."""


@dataclass(frozen=True)
class OptionAnswer:
    """A chosen option: its text and its position in the option list."""

    value: str
    index: int


@runtime_checkable
class Settable(Protocol):
    """An object that decides for itself how to store an answer."""

    def write_answer(self, name: str, value: Any) -> None:
        """Store ``value`` as the answer to the question ``name``."""


class FieldNotMatchError(LookupError):
    """No field of the target matches a question name."""

    def __init__(self, question_name: str) -> None:
        super().__init__(f"could not find field matching {question_name}")
        self.question_name = question_name


def option_answer_list(incoming):
    """Wrap plain option strings as OptionAnswers, keeping their positions."""
    return [OptionAnswer(value, index) for index, value in enumerate(incoming)]


def is_field_not_match(err):
    """Return the unmatched question name if ``err`` is a FieldNotMatchError, else None."""
    if isinstance(err, FieldNotMatchError):
        return err.question_name
    return None


_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}
_INT_RX = re.compile(r"[+-]?\d+")
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_DURATION_UNITS = {
    "ns": 1e-3,
    "us": 1.0,
    "µs": 1.0,
    "μs": 1.0,
    "ms": 1e3,
    "s": 1e6,
    "m": 60e6,
    "h": 3600e6,
}


def _parse_bool(text: str) -> bool:
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"invalid boolean: {text!r}")


def _parse_int(text: str) -> int:
    if not _INT_RX.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    return int(text)


def _parse_duration(text: str) -> timedelta:
    sign = 1
    body = text
    if body[:1] in "+-" and body:
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    if body == "0":
        return timedelta(0)
    if not body:
        raise ValueError(f"invalid duration: {text!r}")
    micros = 0.0
    pos = 0
    while pos < len(body):
        match = _DURATION_PART.match(body, pos)
        if match is None:
            raise ValueError(f"invalid duration: {text!r}")
        micros += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    return timedelta(microseconds=sign * micros)


def _type_name(target_type) -> str:
    return getattr(target_type, "__name__", repr(target_type))


def _from_string(text: str, target_type):
    if target_type is bool:
        return _parse_bool(text)
    if target_type is int:
        return _parse_int(text)
    if target_type is float:
        return float(text)
    if target_type is timedelta:
        return _parse_duration(text)
    raise TypeError(f"unable to convert from string to type {_type_name(target_type)}")


def convert_value(value, target_type):
    """Return ``value`` converted to ``target_type`` the way an answer is stored."""
    if target_type is Any or target_type is object:
        return value
    origin = typing.get_origin(target_type)
    if isinstance(value, str) and target_type is not str and origin is None:
        return _from_string(value, target_type)
    if isinstance(value, OptionAnswer):
        if target_type is str:
            return value.value
        if target_type is int:
            return value.index
        if target_type is OptionAnswer:
            return value
        raise TypeError(
            f"unable to convert from OptionAnswer to type {_type_name(target_type)}"
        )
    if origin in (list, tuple) and isinstance(value, (list, tuple)):
        args = typing.get_args(target_type)
        if origin is list:
            element = args[0] if args else Any
            return [convert_value(item, element) for item in value]
        if not args:
            return tuple(value)
        if len(args) == 2 and args[1] is Ellipsis:
            return tuple(convert_value(item, args[0]) for item in value)
        if len(args) != len(value):
            raise ValueError(
                f"cannot write {len(value)} values into a tuple of {len(args)}"
            )
        return tuple(convert_value(item, kind) for item, kind in zip(value, args))
    if isinstance(target_type, type) and not isinstance(value, target_type):
        raise TypeError(
            f"cannot assign {type(value).__name__} to type {_type_name(target_type)}"
        )
    return value


_NAMED_TYPES = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "bytes": bytes,
    "timedelta": timedelta,
    "datetime.timedelta": timedelta,
    "OptionAnswer": OptionAnswer,
    "Any": Any,
    "typing.Any": Any,
    "object": object,
}
_GENERIC_RX = re.compile(r"(?:typing\.)?(list|List|tuple|Tuple)\[(.*)\]")


def _split_args(text: str) -> list[str]:
    """Split a generic's argument text on commas that are not nested."""
    parts = []
    depth = 0
    start = 0
    for pos, char in enumerate(text):
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
        elif char == "," and depth == 0:
            parts.append(text[start:pos].strip())
            start = pos + 1
    parts.append(text[start:].strip())
    return parts


def _resolve(annotation):
    """Turn an annotation written as text into the type it names, or Any."""
    if not isinstance(annotation, str):
        return annotation
    text = annotation.strip()
    if text in _NAMED_TYPES:
        return _NAMED_TYPES[text]
    match = _GENERIC_RX.fullmatch(text)
    if match is None:
        return Any
    origin = list if match.group(1) in ("list", "List") else tuple
    args = tuple(
        Ellipsis if part == "..." else _resolve(part)
        for part in _split_args(match.group(2))
    )
    return origin[args]


def _hints(cls) -> dict:
    annotations: dict = {}
    for klass in reversed(cls.__mro__):
        annotations.update(klass.__dict__.get("__annotations__", {}))
    return {name: _resolve(kind) for name, kind in annotations.items()}


def _flatten(target):
    """Yield (owner, attribute, tag) for every field, promoting embedded ones."""
    if dataclasses.is_dataclass(target):
        for field in dataclasses.fields(target):
            current = getattr(target, field.name, None)
            if field.metadata.get(EMBEDDED) and dataclasses.is_dataclass(current):
                yield from _flatten(current)
                continue
            yield target, field.name, field.metadata.get(TAG_NAME, "")
        return
    names = list(_hints(type(target))) or list(vars(target))
    for attr in names:
        yield target, attr, ""


def find_field(target, name):
    """Find the field answering ``name``: tags first, then case-insensitive names.

    Returns ``(owner, attribute)``; the owner differs from ``target`` for
    promoted fields of embedded dataclasses.
    """
    fields = list(_flatten(target))
    for owner, attr, tag in fields:
        if tag and tag == name:
            return owner, attr
    for owner, attr, _ in fields:
        if attr.casefold() == name.casefold():
            return owner, attr
    raise FieldNotMatchError(name)


_IMMUTABLE = (str, bytes, int, float, complex, bool, tuple, frozenset, type(None))


def write_answer(target, name, value):
    """Store ``value`` as the answer to ``name`` inside ``target``."""
    if isinstance(target, Settable):
        target.write_answer(name, value)
        return
    if isinstance(target, _IMMUTABLE) or (
        dataclasses.is_dataclass(target) and type(target).__dataclass_params__.frozen
    ):
        raise TypeError("the target of a write must be a mutable object")
    if isinstance(target, MutableMapping):
        if not isinstance(name, str):
            raise TypeError("answer maps key must be of type string")
        target[name] = value
        return
    if isinstance(target, list):
        if not isinstance(value, (list, tuple)):
            raise TypeError("only a sequence can be written into a list")
        target[:] = list(value)
        return
    owner, attr = find_field(target, name)
    current = getattr(owner, attr, None)
    if isinstance(current, Settable):
        current.write_answer(name, value)
        return
    hint = _hints(type(owner)).get(attr, Any)
    setattr(owner, attr, convert_value(value, hint))