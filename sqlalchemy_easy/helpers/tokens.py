import re
from collections import namedtuple

import sqlglot
from sqlglot.errors import TokenError
from sqlglot.tokens import TokenType

from ..errors import UnreadableStatement

# SQLAlchemy dialect name -> sqlglot dialect
DIALECTS = {
    "sqlite": "sqlite",
    "mysql": "mysql",
    "mariadb": "mysql",
    "postgresql": "postgres",
    "mssql": "tsql",
    "oracle": "oracle",
}

QUOTED = {
    TokenType.STRING,
    TokenType.IDENTIFIER,
    TokenType.NATIONAL_STRING,
    TokenType.RAW_STRING,
    TokenType.HEREDOC_STRING,
    TokenType.BIT_STRING,
    TokenType.HEX_STRING,
    TokenType.BYTE_STRING,
}

MARKER_NAME = re.compile(r"\w+")

Marker = namedtuple("Marker", ["text", "start", "end", "positional"])


def sql_dialect(name):
    """Return the sqlglot dialect for a SQLAlchemy dialect name, or None."""
    if name is None:
        return None
    return DIALECTS.get(name)


def tokenize(sql, dialect=None):
    """
    Split SQL text into sqlglot tokens.

    Comments are attached to their neighbouring token rather than returned,
    and quoting follows the rules of ``dialect``. ``start``/``end`` of each
    token are offsets into ``sql``, ``end`` inclusive.
    """
    try:
        return sqlglot.tokenize(sql, read=dialect)
    except TokenError as exc:
        raise UnreadableStatement(f"Cannot read SQL: {exc}") from exc


def find_markers(tokens):
    """
    Return the ``?`` and ``:name`` markers among ``tokens``.

    Marker ``end`` is exclusive, ready for slicing.
    """
    found = []
    for i, token in enumerate(tokens):
        if token.token_type == TokenType.PLACEHOLDER:
            found.append(Marker(token.text, token.start, token.end + 1, True))
        elif token.token_type == TokenType.COLON and i + 1 < len(tokens):
            name = tokens[i + 1]
            if (
                name.start == token.end + 1
                and name.token_type not in QUOTED
                and MARKER_NAME.fullmatch(name.text)
            ):
                found.append(Marker(f":{name.text}", token.start, name.end + 1, False))
    return found


def single_marker(text, dialect=None):
    """Return the marker ``text`` consists of, or None if it is anything else."""
    if not isinstance(text, str):
        return None

    tokens = tokenize(text, dialect)
    found = find_markers(tokens)
    if len(found) != 1:
        return None

    marker = found[0]
    if text[:marker.start].strip() or text[marker.end:].strip():
        return None
    return marker


def split_on(sql, token_types, dialect=None):
    """
    Split ``sql`` on the tokens of the given types.

    Fragments are returned untrimmed, including empty ones.
    """
    fragments = []
    start = 0
    for token in tokenize(sql, dialect):
        if token.token_type in token_types:
            fragments.append(sql[start:token.start])
            start = token.end + 1
    fragments.append(sql[start:])
    return fragments
