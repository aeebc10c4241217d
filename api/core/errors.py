"""
Failure types shared by all features.

Each error knows the HTTP status it maps to. `main.py` renders every
`ServiceError` as `{"message": ..., "error": ...}`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "An unknown error occurred."


class ServiceError(Exception):
    status_code = 500

    def __init__(self, message: str, *, error: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.error = error

    def to_payload(self) -> dict:
        return {"message": self.message, "error": self.error or UNKNOWN_ERROR}


class ValidationError(ServiceError):
    status_code = 400


class NotFoundError(ServiceError):
    status_code = 404


class StoreError(ServiceError):
    status_code = 500


# Constraint violations keep the 500 contract of StoreError.
class ConflictError(StoreError):
    pass


@contextmanager
def store_failure(message: str) -> Iterator[None]:
    """
    Re-label a store failure with the message of the operation that hit it.

        with errors.store_failure("Error creating customer."):
            new_id = await repository.insert_customer(...)
    """
    try:
        yield
    except StoreError as exc:
        logger.warning("store_failure operation=%r error=%s", message, exc.error)
        raise type(exc)(message, error=exc.error) from exc
