from enum import Enum

from sqlglot.tokens import TokenType

from ..helpers.tokens import tokenize


class CommandClass(Enum):
    READ = "read"
    DELETE = "delete"
    INSERT = "insert"
    UPDATE = "update"
    DDL = "ddl"
    UNSUPPORTED = "unsupported"

    @property
    def returns_rowcount(self):
        return self in (CommandClass.DELETE, CommandClass.INSERT, CommandClass.UPDATE)


# Checked in this order when the leading keyword is not a command
PRECEDENCE = (
    (CommandClass.READ, (TokenType.SELECT, TokenType.DESCRIBE)),
    (CommandClass.DELETE, (TokenType.DELETE,)),
    (CommandClass.INSERT, (TokenType.INSERT,)),
    (CommandClass.UPDATE, (TokenType.UPDATE,)),
    (CommandClass.DDL, (TokenType.CREATE, TokenType.ALTER)),
)

KEYWORDS = {
    token_type: command
    for command, token_types in PRECEDENCE
    for token_type in token_types
}


def classify(sql, dialect=None) -> CommandClass:
    """
    Return the command class of ``sql``.

    Keywords inside quoted literals, quoted identifiers and comments are
    ignored. The leading keyword decides when it names a command; otherwise
    (``WITH ...``) the first class in PRECEDENCE with a keyword anywhere in
    the statement wins.
    """
    found = [t.token_type for t in tokenize(sql, dialect) if t.token_type != TokenType.L_PAREN]
    if not found:
        return CommandClass.UNSUPPORTED

    if found[0] in KEYWORDS:
        return KEYWORDS[found[0]]

    present = set(found)
    for command, token_types in PRECEDENCE:
        if present.intersection(token_types):
            return command

    return CommandClass.UNSUPPORTED


def has_where(sql, dialect=None):
    return any(t.token_type == TokenType.WHERE for t in tokenize(sql, dialect))
