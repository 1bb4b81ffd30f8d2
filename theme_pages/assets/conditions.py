r"""Evaluate ``{% if %}`` conditions found in theme assets.

Only the condition subset that appears in stylesheets and scripts is
understood: ``settings.*`` lookups, string and number literals, the
``true``/``false``/``nil``/``blank``/``empty`` keywords, the comparison
operators ``== != <> < > <= >=`` and ``contains``, combined with ``and`` /
``or``. As in Liquid, ``and``/``or`` have no precedence and are evaluated
from right to left, and only ``nil`` and ``false`` are falsy.

Example
-------
>>> from theme_pages.assets.conditions import evaluate_condition
>>> evaluate_condition("settings.layout == 'wide'", {"layout": "wide"})
True
>>> evaluate_condition("settings.show_badge and settings.badge_text", {"show_badge": True})
False
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import operator
import re
import typing as typ

from theme_pages.errors import ConditionSyntaxError

from .values import resolve_setting_path

TOKEN_PATTERN = re.compile(
    r"""
    \s*(?:
        (?P<string>'[^']*'|"[^"]*")
      | (?P<number>-?\d+(?:\.\d+)?)(?![\w.])
      | (?P<op>==|!=|<>|<=|>=|<|>)
      | (?P<word>[A-Za-z_][\w-]*(?:\.[\w-]+)*\??)
    )
    """,
    re.VERBOSE,
)

SETTINGS_NAMESPACE = "settings"
_COMBINATORS = frozenset({"and", "or"})


class _Keyword:
    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return self.name


BLANK = _Keyword("blank")
EMPTY = _Keyword("empty")
_LITERAL_WORDS: dict[str, typ.Any] = {
    "true": True,
    "false": False,
    "nil": None,
    "null": None,
    "blank": BLANK,
    "empty": EMPTY,
}
_ORDERING: dict[str, cabc.Callable[[typ.Any, typ.Any], bool]] = {
    "<": operator.lt,
    ">": operator.gt,
    "<=": operator.le,
    ">=": operator.ge,
}


@dc.dataclass(slots=True, frozen=True)
class Token:
    kind: str
    text: str


@dc.dataclass(slots=True)
class Comparison:
    """One ``left [op right]`` term of a condition."""

    left: Token
    op: str | None = None
    right: Token | None = None


def tokenize(expression: str) -> list[Token]:
    """Split ``expression`` into tokens.

    Raises
    ------
    ConditionSyntaxError
        If the expression contains characters no token matches.
    """
    tokens: list[Token] = []
    position = 0
    text = expression.rstrip()
    while position < len(text):
        match = TOKEN_PATTERN.match(text, position)
        if match is None or match.end() == position:
            msg = f"Unexpected input at {position} in condition {expression!r}"
            raise ConditionSyntaxError(msg)
        kind = match.lastgroup or ""
        tokens.append(Token(kind, match.group(kind)))
        position = match.end()
    return tokens


def parse_condition(expression: str) -> tuple[list[Comparison], list[str]]:
    """Parse ``expression`` into comparisons and the combinators between them."""
    tokens = tokenize(expression)
    if not tokens:
        msg = "Condition is empty"
        raise ConditionSyntaxError(msg)

    comparisons: list[Comparison] = []
    combinators: list[str] = []
    position = 0
    while True:
        comparison, position = _parse_comparison(tokens, position, expression)
        comparisons.append(comparison)
        if position >= len(tokens):
            break
        token = tokens[position]
        if token.kind != "word" or token.text not in _COMBINATORS:
            msg = f"Expected 'and' or 'or' but found {token.text!r} in {expression!r}"
            raise ConditionSyntaxError(msg)
        combinators.append(token.text)
        position += 1
        if position >= len(tokens):
            msg = f"Condition {expression!r} ends with {token.text!r}"
            raise ConditionSyntaxError(msg)
    return comparisons, combinators


def evaluate_condition(expression: str, settings: cabc.Mapping[str, typ.Any]) -> bool:
    """Evaluate ``expression`` against the ``settings`` namespace.

    Raises
    ------
    ConditionSyntaxError
        If the expression is outside the supported subset.
    """
    comparisons, combinators = parse_condition(expression)
    result = _evaluate_comparison(comparisons[-1], settings)
    for comparison, combinator in zip(
        reversed(comparisons[:-1]), reversed(combinators), strict=True
    ):
        left = _evaluate_comparison(comparison, settings)
        result = (left and result) if combinator == "and" else (left or result)
    return result


def is_truthy(value: object) -> bool:
    """Return Liquid truthiness: everything except ``nil`` and ``false``."""
    return value is not None and value is not False


def _parse_comparison(
    tokens: list[Token], position: int, expression: str
) -> tuple[Comparison, int]:
    left = tokens[position]
    if left.kind == "op" or (left.kind == "word" and left.text in _COMBINATORS):
        msg = f"Expected a value but found {left.text!r} in {expression!r}"
        raise ConditionSyntaxError(msg)
    position += 1
    if position < len(tokens):
        candidate = tokens[position]
        if candidate.kind == "op" or (candidate.kind == "word" and candidate.text == "contains"):
            if position + 1 >= len(tokens):
                msg = f"Operator {candidate.text!r} is missing its right operand"
                raise ConditionSyntaxError(msg)
            right = tokens[position + 1]
            if right.kind == "op":
                msg = f"Expected a value after {candidate.text!r} in {expression!r}"
                raise ConditionSyntaxError(msg)
            return Comparison(left, candidate.text, right), position + 2
    return Comparison(left), position


def _evaluate_comparison(
    comparison: Comparison, settings: cabc.Mapping[str, typ.Any]
) -> bool:
    left = _operand_value(comparison.left, settings)
    if comparison.op is None or comparison.right is None:
        return is_truthy(left) and left is not BLANK and left is not EMPTY
    right = _operand_value(comparison.right, settings)
    match comparison.op:
        case "==":
            return _equals(left, right)
        case "!=" | "<>":
            return not _equals(left, right)
        case "contains":
            return _contains(left, right)
        case op:
            try:
                return bool(_ORDERING[op](left, right))
            except TypeError:
                return False


def _operand_value(token: Token, settings: cabc.Mapping[str, typ.Any]) -> typ.Any:
    if token.kind == "string":
        return token.text[1:-1]
    if token.kind == "number":
        return float(token.text) if "." in token.text else int(token.text)
    if token.text in _LITERAL_WORDS:
        return _LITERAL_WORDS[token.text]
    namespace, _, path = token.text.partition(".")
    if namespace != SETTINGS_NAMESPACE or not path:
        return None
    return resolve_setting_path(settings, path)


def _equals(left: object, right: object) -> bool:
    if right is BLANK or right is EMPTY:
        left, right = right, left
    if left is BLANK:
        return _is_blank(right)
    if left is EMPTY:
        return _is_empty(right)
    return left == right


def _is_empty(value: object) -> bool:
    return isinstance(value, cabc.Sized) and len(value) == 0


def _is_blank(value: object) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    return _is_empty(value)


def _contains(container: object, item: object) -> bool:
    if isinstance(container, str):
        return isinstance(item, str) and item in container
    if isinstance(container, list | tuple):
        return item in container
    return False


__all__ = [
    "BLANK",
    "EMPTY",
    "Comparison",
    "Token",
    "evaluate_condition",
    "is_truthy",
    "parse_condition",
    "tokenize",
]
