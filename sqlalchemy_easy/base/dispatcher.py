from ..errors import EasySQLError, MissingWhereClause, UnsupportedCommand
from ..logger import logger
from .commands import CommandClass, classify, has_where
from .cursor import FetchMode, StatementCapability
from .reporter import ErrorContext, ErrorReporter


class CommandDispatcher:
    def __init__(self, statement: StatementCapability, reporter: ErrorReporter, raise_errors=False, dialect=None):
        self.statement = statement
        self.reporter = reporter
        self.raise_errors = raise_errors
        self.dialect = dialect

    def guard(self, sql) -> CommandClass:
        """
        Classify ``sql``, refusing a DELETE without a WHERE clause.
        """
        command = classify(sql, self.dialect)

        if command is CommandClass.DELETE and not has_where(sql, self.dialect):
            raise MissingWhereClause("Missing WHERE clause for DELETE statement")

        return command

    def check(self, sql) -> CommandClass:
        """
        Classify ``sql`` and refuse what must not reach the database.
        """
        command = self.guard(sql)

        if command is CommandClass.UNSUPPORTED:
            raise UnsupportedCommand("Unsupported SQL command")

        return command

    def execute(self, sql, bindings=None):
        command = self.check(sql)
        logger.debug(f"Running {command.name} statement")

        handle = self.statement.prepare(sql)
        self.statement.execute(handle, bindings)

        if command.returns_rowcount:
            return self.statement.row_count(handle)

        if command is CommandClass.READ:
            return self.statement.fetch_all(handle, FetchMode.ASSOC)

        return True

    def run(self, sql, bindings=None):
        """
        Like ``execute`` but failures are reported and turned into None.
        """
        try:
            return self.execute(sql, bindings)
        except EasySQLError as exc:
            self.reporter.report(ErrorContext(sql=sql, bindings=bindings, error=exc))
            if self.raise_errors:
                raise
            return None
