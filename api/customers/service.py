"""
Customer business logic.

Scope:
- presence validation of the three customer fields
- paginated, searchable listing (count + page select)
- not-found detection for single-row reads and writes
"""

from __future__ import annotations

import logging
import math

from core import errors, validation
from core.db import Database

from . import repository, schemas

logger = logging.getLogger(__name__)

FIELDS_REQUIRED = "All fields are required."


def total_pages(total: int, limit: int) -> int:
    if limit <= 0:
        return 0
    return math.ceil(total / limit)


async def create_customer(database: Database, payload: schemas.CustomerInput | None) -> int:
    fields = validation.require_text_fields(payload, fields=schemas.CUSTOMER_FIELDS, message=FIELDS_REQUIRED)
    with errors.store_failure("Error creating customer."):
        customer_id = await repository.insert_customer(database, **fields)
    logger.info("customer_created id=%s", customer_id)
    return customer_id


async def list_customers(database: Database, *, page: int, limit: int, search: str = "") -> dict:
    """
    Return one page of customers plus pagination metadata.

    `total` counts every match, independently of the page window. Ranges are
    not clamped: a page below 1 or a negative limit is passed to the store.
    """
    search = search or ""
    offset = (page - 1) * limit

    with errors.store_failure("Error counting customers."):
        total = await repository.count_customers(database, search=search)
    with errors.store_failure("Error fetching customers."):
        rows = await repository.list_customers(database, search=search, limit=limit, offset=offset)

    return {
        "data": rows,
        "pagination": {
            "total": total,
            "page": page,
            "limit": limit,
            "totalPages": total_pages(total, limit),
        },
    }


async def get_customer(database: Database, customer_id: int) -> dict:
    with errors.store_failure("Error fetching customer."):
        row = await repository.get_customer(database, customer_id)
    if row is None:
        raise errors.NotFoundError("Customer not found.")
    return row


async def update_customer(database: Database, customer_id: int, payload: schemas.CustomerInput | None) -> None:
    fields = validation.require_text_fields(payload, fields=schemas.CUSTOMER_FIELDS, message=FIELDS_REQUIRED)
    with errors.store_failure("Error updating customer."):
        updated = await repository.update_customer(database, customer_id, **fields)
    if not updated:
        raise errors.NotFoundError("Customer not found or no changes made.")
    logger.info("customer_updated id=%s", customer_id)


async def delete_customer(database: Database, customer_id: int) -> None:
    with errors.store_failure("Error deleting customer."):
        deleted = await repository.delete_customer(database, customer_id)
    if not deleted:
        raise errors.NotFoundError("Customer not found.")
    logger.info("customer_deleted id=%s", customer_id)
