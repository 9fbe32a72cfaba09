from sqlalchemy import create_engine

from ..config import Settings, get_settings
from ..errors import EasySQLError
from ..events import register_events
from ..logger import logger
from .builder import StatementBuilder
from .catalog import ColumnCatalog, ReflectedCatalog, filter_values
from .cursor import EasyCursor, FetchMode, StatementCapability
from .dispatcher import CommandDispatcher
from .reporter import ErrorContext, ErrorReporter


class EasySession:
    """
    Select, insert, update and delete with plain SQL and dicts.

    Every method returns None when something goes wrong; the error is logged
    and available on ``last_error``. With ``raise_errors`` it is re-raised
    after being reported.
    """
    def __init__(
        self,
        statement: StatementCapability,
        catalog: ColumnCatalog = None,
        reporter: ErrorReporter = None,
        raise_errors=False,
        dialect=None,
    ):
        self.statement = statement
        self.catalog = catalog
        self.reporter = reporter or ErrorReporter()
        self.raise_errors = raise_errors

        self.dialect = dialect or getattr(statement, "dialect", None)
        self.builder = StatementBuilder(self.dialect)
        self.dispatcher = CommandDispatcher(statement, self.reporter, raise_errors=raise_errors, dialect=self.dialect)

    @classmethod
    def from_url(cls, url=None, settings: Settings = None, **engine_kwargs):
        settings = settings or get_settings()
        engine_kwargs.setdefault("echo", settings.echo)

        engine = create_engine(url or settings.database_url, **engine_kwargs)
        register_events(engine)

        return cls(
            EasyCursor(engine),
            catalog=ReflectedCatalog(engine),
            reporter=ErrorReporter(debug=settings.debug),
            raise_errors=settings.raise_errors,
        )

    @property
    def last_error(self):
        return self.reporter.last_error

    def _filter(self, values, table):
        if self.catalog is None:
            return dict(values)
        return filter_values(self.catalog, values, table)

    def _failed(self, exc, sql=None, bindings=None):
        self.reporter.report(ErrorContext(sql=sql, bindings=bindings, error=exc))
        if self.raise_errors:
            raise exc
        return None

    def select(self, sql, bindings=None, fetch_mode=FetchMode.ASSOC, fetch_argument=None):
        """
        Return every row of a query, as dicts unless ``fetch_mode`` says otherwise.

        Any statement runs, but a DELETE without a WHERE clause is refused.
        """
        self.reporter.clear()
        try:
            self.dispatcher.guard(sql)
            handle = self.statement.prepare(sql)
            self.statement.execute(handle, bindings)
            return self.statement.fetch_all(handle, fetch_mode, fetch_argument)
        except EasySQLError as exc:
            return self._failed(exc, sql, bindings)

    def select_cell(self, sql, bindings=None):
        """
        Return the first column of the first row, or None if there is no row.
        """
        self.reporter.clear()
        try:
            self.dispatcher.guard(sql)
            handle = self.statement.prepare(sql)
            self.statement.execute(handle, bindings)
            return self.statement.fetch_scalar(handle)
        except EasySQLError as exc:
            return self._failed(exc, sql, bindings)

    def run(self, sql, bindings=None):
        self.reporter.clear()
        return self.dispatcher.run(sql, bindings)

    def delete(self, sql, bindings=None):
        """Run a DELETE statement and return the number of affected rows."""
        return self.run(sql, bindings)

    def filter(self, values, table):
        """
        Drop the values that do not match a column of ``table``, and the
        auto-increment columns.
        """
        self.reporter.clear()
        try:
            return self._filter(values, table)
        except EasySQLError as exc:
            return self._failed(exc, bindings=values)

    def insert(self, table, values, bindings=None):
        """
        Insert one row and return the number of affected rows.

        Without ``bindings`` every value is bound automatically. With
        ``bindings`` the values must be markers (``?`` or ``:name``) and the
        bindings supply their values.
        """
        self.reporter.clear()
        try:
            values = self._filter(values, table)
            statement = self.builder.build_insert(table, values, bindings)
        except EasySQLError as exc:
            return self._failed(exc, bindings=bindings)

        return self.dispatcher.run(statement.sql, statement.bindings)

    def update(self, table, values, where, bindings=None):
        """
        Update rows and return the number of affected rows.

        ``where`` is a string (``"id = ? AND qty > 3"``) or a list of
        conditions. ``bindings`` supply values for markers used in ``values``
        and ``where``: positional ones are consumed in order, values first.

        N.B. conditions using OR, IN, BETWEEN or LIKE are not supported.
        """
        self.reporter.clear()
        try:
            values = self._filter(values, table)
            statement = self.builder.build_update(table, values, where, bindings)
        except EasySQLError as exc:
            return self._failed(exc, bindings=bindings)

        logger.debug(f"Update bindings: {list(statement.bindings)}")
        return self.dispatcher.run(statement.sql, statement.bindings)
