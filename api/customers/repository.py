"""
Customer persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import db
from core.db import Database


def search_pattern(search: str) -> str:
    """
    Escape LIKE wildcards so the search term is matched literally.
    """
    return (search or "").replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


async def insert_customer(
    database: Database,
    *,
    first_name: str,
    last_name: str,
    phone_number: str,
) -> int:
    customer_id = await database.fetch_value(
        """
        INSERT INTO customers (first_name, last_name, phone_number)
        VALUES ($1, $2, $3)
        RETURNING id
        """,
        first_name,
        last_name,
        phone_number,
    )
    if customer_id is None:
        raise RuntimeError("Failed to create customer.")
    return int(customer_id)


async def count_customers(database: Database, *, search: str = "") -> int:
    total = await database.fetch_value(
        """
        SELECT count(*)
        FROM customers
        WHERE $1::text = ''
           OR first_name ILIKE '%' || $1 || '%'
           OR last_name ILIKE '%' || $1 || '%'
           OR phone_number ILIKE '%' || $1 || '%'
        """,
        search_pattern(search),
    )
    return int(total or 0)


async def list_customers(
    database: Database,
    *,
    search: str = "",
    limit: int = 10,
    offset: int = 0,
) -> list[dict[str, Any]]:
    """
    One page of customers matching `search` (all customers when it is empty),
    in id order.
    """
    return await database.fetch_all(
        """
        SELECT id, first_name, last_name, phone_number
        FROM customers
        WHERE $1::text = ''
           OR first_name ILIKE '%' || $1 || '%'
           OR last_name ILIKE '%' || $1 || '%'
           OR phone_number ILIKE '%' || $1 || '%'
        ORDER BY id ASC
        LIMIT $2
        OFFSET $3
        """,
        search_pattern(search),
        limit,
        offset,
    )


async def get_customer(database: Database, customer_id: int) -> dict[str, Any] | None:
    if not db.storable_id(customer_id):
        return None
    return await database.fetch_one(
        """
        SELECT id, first_name, last_name, phone_number
        FROM customers
        WHERE id = $1::bigint
        """,
        customer_id,
    )


async def update_customer(
    database: Database,
    customer_id: int,
    *,
    first_name: str,
    last_name: str,
    phone_number: str,
) -> bool:
    if not db.storable_id(customer_id):
        return False
    row = await database.fetch_one(
        """
        UPDATE customers
        SET first_name = $1,
            last_name = $2,
            phone_number = $3
        WHERE id = $4::bigint
        RETURNING id
        """,
        first_name,
        last_name,
        phone_number,
        customer_id,
    )
    return row is not None


async def delete_customer(database: Database, customer_id: int) -> bool:
    """
    Delete a customer. Their addresses go with them (ON DELETE CASCADE).
    """
    if not db.storable_id(customer_id):
        return False
    row = await database.fetch_one(
        """
        DELETE FROM customers
        WHERE id = $1::bigint
        RETURNING id
        """,
        customer_id,
    )
    return row is not None
