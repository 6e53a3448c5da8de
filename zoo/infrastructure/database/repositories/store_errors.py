"""Translate SQLAlchemy failures into the domain's store error."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from zoo.domain.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Log and re-raise any SQLAlchemy error as ``StoreUnavailableError``."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("Store operation '%s' failed: %s", operation, exc)
        raise StoreUnavailableError(operation, exc) from exc
