"""
Parsing of loosely written WHERE clauses.

A WHERE specification is either a string (``"WHERE id = ? AND qty > 3"``) or
a list of conditions (``["id = ?", "qty > 3"]``). Only conditions of the form
``column operator value`` joined by ``AND`` are understood; each value is
turned into a bound marker.
"""
import re
from dataclasses import dataclass
from decimal import Decimal

from sqlglot.tokens import TokenType

from ..errors import MalformedCondition, UnsupportedCondition
from ..helpers.tokens import find_markers, single_marker, split_on, tokenize
from .markers import BindingResolver

CONDITION = re.compile(
    r"(?P<column>[A-Za-z_][\w.]*)\s*(?P<operator>[=<>!]+)\s*(?P<value>\S.*?)\s*",
    re.DOTALL,
)

OPERATORS = {"=", "<", ">", "<=", ">=", "<>", "!=", "<=>"}

UNSUPPORTED_TOKENS = {
    TokenType.OR,
    TokenType.IN,
    TokenType.BETWEEN,
    TokenType.LIKE,
    TokenType.ILIKE,
    TokenType.IS,
    TokenType.NOT,
}

STRINGS = {TokenType.STRING, TokenType.NATIONAL_STRING}

INTEGER = re.compile(r"[+-]?\d+")
DECIMAL = re.compile(r"[+-]?(\d+\.\d*|\.\d+)")


def literal_value(text, dialect=None):
    """
    Decode a literal written in SQL into the Python value to bind.

    Strings are unquoted with the escaping rules of ``dialect``. Anything that
    is not a string, a number, NULL or a boolean is bound as the raw text.
    """
    tokens = tokenize(text, dialect)
    if len(tokens) == 1 and tokens[0].token_type in STRINGS:
        return tokens[0].text

    if INTEGER.fullmatch(text):
        return int(text)
    if DECIMAL.fullmatch(text):
        return float(Decimal(text))

    upper = text.upper()
    if upper == "NULL":
        return None
    if upper in ("TRUE", "FALSE"):
        return upper == "TRUE"
    return text


@dataclass(frozen=True)
class Condition:
    column: str
    operator: str
    value: object
    marker: str
    text: str


@dataclass(frozen=True)
class WhereClause:
    conditions: tuple = ()

    @property
    def sql(self):
        if not self.conditions:
            return ""
        return "WHERE " + " AND ".join(c.text for c in self.conditions)

    def __bool__(self):
        return bool(self.conditions)


class WhereClauseParser:
    def __init__(self, resolver: BindingResolver, dialect=None):
        self.resolver = resolver
        self.dialect = dialect

    @staticmethod
    def split(where, dialect=None):
        if not where:
            return []

        if isinstance(where, str):
            fragments = split_on(where, {TokenType.WHERE, TokenType.AND}, dialect)
        else:
            fragments = list(where)

        return [f.strip() for f in fragments if f and f.strip()]

    def parse(self, where) -> WhereClause:
        fragments = self.split(where, self.dialect)
        return WhereClause(tuple(self.parse_condition(f) for f in fragments))

    def parse_condition(self, fragment) -> Condition:
        match = CONDITION.fullmatch(fragment)
        if match is None:
            raise MalformedCondition(f"Cannot parse WHERE condition: {fragment!r}")

        column, operator, value = match.group("column", "operator", "value")
        if operator not in OPERATORS:
            raise MalformedCondition(f"Unknown operator {operator!r} in WHERE condition: {fragment!r}")

        tokens = tokenize(value, self.dialect)
        unsupported = sorted({t.text.upper() for t in tokens if t.token_type in UNSUPPORTED_TOKENS})
        if unsupported:
            raise UnsupportedCondition(f"{', '.join(unsupported)} not supported in WHERE condition: {fragment!r}")

        base = f"where_{column}"
        marker = single_marker(value, self.dialect)
        if marker is not None:
            marker, bound = self.resolver.resolve(marker.text, base)
        elif find_markers(tokens):
            raise UnsupportedCondition(f"Markers inside expressions not supported in WHERE condition: {fragment!r}")
        else:
            marker, bound = self.resolver.bind(literal_value(value, self.dialect), base)

        text = fragment[:match.start("value")] + marker
        return Condition(column, operator, bound, marker, text)
