class EasySQLError(Exception):
    """
    Base class for every failure raised while building or running a statement.
    """


class UnresolvedBinding(EasySQLError):
    """A marker has no value, or the positional bindings ran out."""


class MixedMarkers(UnresolvedBinding):
    """Positional and named markers used in the same statement."""


class MalformedCondition(EasySQLError):
    """A WHERE fragment could not be split into column, operator and value."""


class UnsupportedCondition(MalformedCondition):
    """A WHERE fragment uses syntax the parser does not handle (OR, IN, ...)."""


class EmptyStatement(EasySQLError):
    """No column is left to write after filtering the values."""


class UnreadableStatement(EasySQLError):
    """The SQL text could not be tokenized, e.g. an unterminated quote."""


class MissingWhereClause(EasySQLError):
    pass


class UnsupportedCommand(EasySQLError):
    pass


class UnsupportedFetchMode(EasySQLError):
    pass


class ExecutionFailure(EasySQLError):
    """
    The database rejected the statement, or its rows do not fit the
    requested fetch mode.

    The underlying error is kept as ``__cause__`` and on ``.orig``.
    """
    def __init__(self, message, orig: Exception = None):
        super().__init__(message)
        self.orig = orig
