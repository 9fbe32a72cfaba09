from sqlalchemy import event

from .logger import logger


def register_events(engine):
    """
    Log what actually reaches the driver, after markers were rewritten.
    """
    @event.listens_for(engine, "before_cursor_execute")
    def _log_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        logger.debug(f"Driver statement: {statement}")

    @event.listens_for(engine, "handle_error")
    def _log_driver_error(exception_context):
        logger.debug(f"Driver error: {exception_context.original_exception!r}")

    return engine
