# utils/storage_policy.py
"""What a read path does when the database cannot be reached.

Every read that can hit an outage names its policy explicitly:

* ``FailClosed()`` - answer 503 and let the client retry.
* ``DegradeToSample(data)`` - answer with ``data`` (a value or a zero-argument
  callable) and log a warning.

Catalog writes never degrade; they fail closed. The content store is the
one writer with a fallback of its own (see ``utils.content_store``).
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, TypeVar, Union

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class FailClosed:
    pass


@dataclass(frozen=True)
class DegradeToSample:
    data: Any


ReadPolicy = Union[FailClosed, DegradeToSample]


def storage_unavailable() -> HTTPException:
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Storage unavailable")


def read_with_policy(db: Session, policy: ReadPolicy, read: Callable[[], T], *, what: str) -> T:
    try:
        return read()
    except SQLAlchemyError as e:
        db.rollback()
        if isinstance(policy, DegradeToSample):
            logger.warning("Database unavailable while reading %s, serving sample data: %s", what, e)
            data = policy.data
            return data() if callable(data) else data
        logger.error("Database unavailable while reading %s: %s", what, e)
        raise storage_unavailable()
