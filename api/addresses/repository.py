"""
Address persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import db
from core.db import Database


async def insert_address(
    database: Database,
    *,
    customer_id: int,
    address_details: str,
    city: str,
    state: str,
    pin_code: str,
) -> int:
    """
    Insert an address for `customer_id`.

    The customer is not looked up first; an unknown id is rejected by the
    foreign key and surfaces as a `ConflictError`.
    """
    address_id = await database.fetch_value(
        """
        INSERT INTO addresses (customer_id, address_details, city, state, pin_code)
        VALUES ($1, $2, $3, $4, $5)
        RETURNING id
        """,
        customer_id,
        address_details,
        city,
        state,
        pin_code,
    )
    if address_id is None:
        raise RuntimeError("Failed to insert address.")
    return int(address_id)


async def list_addresses_for_customer(database: Database, customer_id: int) -> list[dict[str, Any]]:
    if not db.storable_id(customer_id):
        return []
    return await database.fetch_all(
        """
        SELECT id, customer_id, address_details, city, state, pin_code
        FROM addresses
        WHERE customer_id = $1::bigint
        ORDER BY id ASC
        """,
        customer_id,
    )


async def update_address(
    database: Database,
    address_id: int,
    *,
    address_details: str,
    city: str,
    state: str,
    pin_code: str,
) -> bool:
    if not db.storable_id(address_id):
        return False
    row = await database.fetch_one(
        """
        UPDATE addresses
        SET address_details = $1,
            city = $2,
            state = $3,
            pin_code = $4
        WHERE id = $5::bigint
        RETURNING id
        """,
        address_details,
        city,
        state,
        pin_code,
        address_id,
    )
    return row is not None


async def delete_address(database: Database, address_id: int) -> bool:
    if not db.storable_id(address_id):
        return False
    row = await database.fetch_one(
        """
        DELETE FROM addresses
        WHERE id = $1::bigint
        RETURNING id
        """,
        address_id,
    )
    return row is not None
