"""Shared helpers for PostgreSQL repositories."""

from contextlib import contextmanager
from typing import Any, Iterator

import logfire
from sqlalchemy.exc import SQLAlchemyError

from discuss.domain.error import PersistenceError


@contextmanager
def store_operation(name: str, **attributes: Any) -> Iterator[None]:
    """Trace a repository operation and translate driver failures.

    SQLAlchemy errors surface to the domain as PersistenceError so that
    callers never depend on the storage engine.
    """
    with logfire.span(name, **attributes):
        try:
            yield
        except SQLAlchemyError as e:
            logfire.error("Store operation failed", operation=name, error=str(e))
            raise PersistenceError(name, e) from e
