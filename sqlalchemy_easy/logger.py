import logging

logger = logging.getLogger("sqlalchemy_easy")
logger.addHandler(logging.NullHandler())
