"""
Address business logic.
"""

from __future__ import annotations

import logging

from core import errors, validation
from core.db import Database

from . import repository, schemas

logger = logging.getLogger(__name__)

FIELDS_REQUIRED = "All address fields are required."


async def add_address(database: Database, customer_id: int, payload: schemas.AddressInput | None) -> int:
    fields = validation.require_text_fields(payload, fields=schemas.ADDRESS_FIELDS, message=FIELDS_REQUIRED)
    with errors.store_failure("Error adding address."):
        address_id = await repository.insert_address(database, customer_id=customer_id, **fields)
    logger.info("address_created id=%s customer_id=%s", address_id, customer_id)
    return address_id


async def list_addresses(database: Database, customer_id: int) -> list[dict]:
    # An unknown customer simply has no addresses.
    with errors.store_failure("Error fetching addresses."):
        return await repository.list_addresses_for_customer(database, customer_id)


async def update_address(database: Database, address_id: int, payload: schemas.AddressInput | None) -> None:
    fields = validation.require_text_fields(payload, fields=schemas.ADDRESS_FIELDS, message=FIELDS_REQUIRED)
    with errors.store_failure("Error updating address."):
        updated = await repository.update_address(database, address_id, **fields)
    if not updated:
        raise errors.NotFoundError("Address not found or no changes made.")
    logger.info("address_updated id=%s", address_id)


async def delete_address(database: Database, address_id: int) -> None:
    with errors.store_failure("Error deleting address."):
        deleted = await repository.delete_address(database, address_id)
    if not deleted:
        raise errors.NotFoundError("Address not found.")
    logger.info("address_deleted id=%s", address_id)
