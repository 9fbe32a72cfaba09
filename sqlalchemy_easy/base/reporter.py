import os
import traceback
from dataclasses import dataclass

from ..logger import logger

_PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


@dataclass
class ErrorContext:
    sql: str = None
    bindings: object = None
    error: Exception = None
    call_site: str = None

    def describe(self, debug=False):
        lines = [f"{type(self.error).__name__}: {self.error}"]
        if self.call_site:
            lines.append(f"Call site: {self.call_site}")
        if debug:
            if self.sql:
                lines.append(f"SQL statement: {self.sql}")
            if self.bindings:
                lines.append(f"Bind parameters: {self.bindings!r}")
        return "\n".join(lines)


def find_call_site():
    """
    Return "file @ line N" of the innermost frame outside this package.
    """
    for frame in reversed(traceback.extract_stack()):
        if not os.path.abspath(frame.filename).startswith(_PACKAGE_DIR + os.sep):
            return f"{frame.filename} @ line {frame.lineno}"
    return None


class ErrorReporter:
    """
    Records and logs failures.

    The context of the last failure stays available on ``last`` until the
    next one; with ``debug`` off, SQL text and bound values are kept out of
    the log.
    """
    def __init__(self, debug=False):
        self.debug = debug
        self.last = None

    @property
    def last_error(self):
        return self.last.error if self.last else None

    def clear(self):
        self.last = None

    def report(self, context: ErrorContext) -> None:
        if context.call_site is None:
            context.call_site = find_call_site()

        self.last = context
        logger.error(context.describe(debug=self.debug))
