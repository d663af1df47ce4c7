"""Rules for the String module.

Literal arguments are evaluated the way the Elm runtime would: lengths count
UTF-16 code units, ``words`` splits on runs of whitespace after trimming and
``lines`` splits on ``\\r\\n``, ``\\r`` and ``\\n``.
"""

from __future__ import annotations

import re

from simplify.checks.helpers import (
    as_argument,
    list_literal,
    rename_dropping_first_arg,
    sibling_reference,
    string_literal,
)
from simplify.dispatch import STRING_COLLECTION, CheckInfo, function_check
from simplify.errors import Diagnostic
from simplify.fix import Edit
from simplify.matchers import (
    get_call_with_args,
    get_int,
    get_list_literal,
    get_string_literal,
    is_empty_list,
    is_empty_string,
)

STRING = ("String",)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")

# JavaScript's `\s`, which the Elm runtime trims and splits words on.
_JS_SPACE = "\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
_WORD_BREAK = re.compile(f"[{_JS_SPACE}]+")
_EDGE_SPACE = re.compile(f"^[{_JS_SPACE}]+|[{_JS_SPACE}]+$")


def utf16_length(value: str) -> int:
    return sum(2 if ord(ch) > 0xFFFF else 1 for ch in value)


def elm_words(value: str) -> list[str]:
    trimmed = _EDGE_SPACE.sub("", value)
    if not trimmed:
        return [""]
    return _WORD_BREAK.split(trimmed)


def elm_lines(value: str) -> list[str]:
    return _LINE_BREAK.split(value)


def _report(info: CheckInfo, message: str, detail: str, fixes: list[Edit]) -> list[Diagnostic]:
    return [Diagnostic(message=message, details=[detail], range=info.fn_range, fixes=fixes)]


def _empty_string_result(info: CheckInfo, index: int, message: str) -> list[Diagnostic]:
    if info.argument(index) is not None:
        return _report(info, message, 'You can replace this call by "".', info.replace_by('""'))
    return _report(info, message, 'You can replace this call by always "".',
                   info.replace_by('always ""'))


# ── Queries ──────────────────────────────────────────────────────


@function_check("String", "isEmpty")
def check_is_empty(info: CheckInfo) -> list[Diagnostic]:
    value = get_string_literal(info.first_arg) if info.first_arg is not None else None
    if value is None:
        return []
    result = "True" if value == "" else "False"
    return _report(info, f"The call to String.isEmpty will result in {result}",
                   f"You can replace this call by {result}.", info.replace_by(result))


@function_check("String", "length")
def check_length(info: CheckInfo) -> list[Diagnostic]:
    value = get_string_literal(info.first_arg) if info.first_arg is not None else None
    if value is None:
        return []
    length = utf16_length(value)
    return _report(info, f"The length of the string is {length}",
                   "The length of the string can be determined by looking at the code.",
                   info.replace_by(str(length)))


# ── Building strings ─────────────────────────────────────────────


@function_check("String", "concat")
def check_concat(info: CheckInfo) -> list[Diagnostic]:
    if info.first_arg is not None and is_empty_list(info.first_arg):
        return _report(info, "Using String.concat on an empty list will result in an empty string",
                       'You can replace this call by "".', info.replace_by('""'))
    return []


@function_check("String", "join")
def check_join(info: CheckInfo) -> list[Diagnostic]:
    if info.second_arg is not None and is_empty_list(info.second_arg):
        return _report(info, "Using String.join on an empty list will result in an empty string",
                       'You can replace this call by "".', info.replace_by('""'))
    if info.first_arg is not None and is_empty_string(info.first_arg):
        renamed = rename_dropping_first_arg(info, "concat")
        if renamed is None:
            return []
        return _report(info, "Use String.concat instead",
                       "Using String.join with an empty separator is the same as using "
                       "String.concat.", renamed)
    return []


@function_check("String", "repeat", empty=STRING_COLLECTION, empty_arg=1)
def check_repeat(info: CheckInfo) -> list[Diagnostic]:
    count = get_int(info.first_arg) if info.first_arg is not None else None
    if count is None:
        return []
    if count <= 0:
        return _empty_string_result(info, 1, "String.repeat will result in an empty string")
    if count == 1:
        if info.second_arg is not None:
            return _report(info, "String.repeat 1 won't do anything",
                           "Using String.repeat with 1 will result in the given string.",
                           info.keep(info.second_arg))
        return _report(info, "String.repeat 1 won't do anything",
                       "You can replace this call by identity.", info.replace_by("identity"))
    return []


@function_check("String", "append")
def check_append(info: CheckInfo) -> list[Diagnostic]:
    if info.second_arg is None:
        return []
    for empty, other in ((info.first_arg, info.second_arg), (info.second_arg, info.first_arg)):
        if is_empty_string(empty):
            return _report(info, "Unnecessary String.append with an empty string",
                           "You should remove the concatenation with the empty string.",
                           info.keep(other))
    return []


@function_check("String", "fromList")
def check_from_list(info: CheckInfo) -> list[Diagnostic]:
    elements = get_list_literal(info.first_arg) if info.first_arg is not None else None
    if elements == []:
        return _report(info, "Using String.fromList on an empty list will result in an empty string",
                       'You can replace this call by "".', info.replace_by('""'))
    if elements is None or len(elements) != 1:
        return []
    char = elements[0]
    from_char = sibling_reference(info, "fromChar")
    if from_char is None:
        return []
    return _report(info, "Use String.fromChar instead",
                   "Converting a list with a single character is the same as String.fromChar.",
                   info.replace_by(f"{from_char} {as_argument(char, info.extract(char))}"))


# ── Splitting ────────────────────────────────────────────────────


def _literal_list_result(info: CheckInfo, parts: list[str]) -> list[Diagnostic]:
    text = list_literal([string_literal(p) for p in parts])
    return _report(info, f"The call to {info.qualified_name} can be evaluated",
                   f"The argument is a literal, so you can replace this call by {text}.",
                   info.replace_by(text))


@function_check("String", "words")
def check_words(info: CheckInfo) -> list[Diagnostic]:
    value = get_string_literal(info.first_arg) if info.first_arg is not None else None
    if value is None:
        return []
    return _literal_list_result(info, elm_words(value))


@function_check("String", "lines")
def check_lines(info: CheckInfo) -> list[Diagnostic]:
    value = get_string_literal(info.first_arg) if info.first_arg is not None else None
    if value is None:
        return []
    return _literal_list_result(info, elm_lines(value))


@function_check("String", "toList")
def check_to_list(info: CheckInfo) -> list[Diagnostic]:
    if info.first_arg is not None and is_empty_string(info.first_arg):
        return _report(info, "Using String.toList on an empty string will result in []",
                       "You can replace this call by [].", info.replace_by("[]"))
    return []


# ── Slicing ──────────────────────────────────────────────────────


@function_check("String", "reverse", empty=STRING_COLLECTION, empty_arg=0)
def check_reverse(info: CheckInfo) -> list[Diagnostic]:
    if info.first_arg is None:
        return []
    inner = get_call_with_args(info.lookup, info.first_arg, STRING, "reverse", 1)
    if inner is None:
        return []
    return _report(info, "Unnecessary double String.reverse",
                   "Reversing a string twice is the same as not reversing it.",
                   info.keep(inner.arguments[0]))


def _take_nothing(info: CheckInfo) -> list[Diagnostic]:
    count = get_int(info.first_arg) if info.first_arg is not None else None
    if count is None or count > 0:
        return []
    return _empty_string_result(
        info, 1, f"Taking {count} characters with {info.qualified_name} will result in "
                 "an empty string")


@function_check("String", "left", empty=STRING_COLLECTION, empty_arg=1)
def check_left(info: CheckInfo) -> list[Diagnostic]:
    return _take_nothing(info)


@function_check("String", "right", empty=STRING_COLLECTION, empty_arg=1)
def check_right(info: CheckInfo) -> list[Diagnostic]:
    return _take_nothing(info)
