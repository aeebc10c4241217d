"""
Customer API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from core import db, settings

from . import schemas, service

router = APIRouter()


@router.post("/api/customers", status_code=201)
async def create_customer(
    payload: schemas.CustomerInput | None = None,
    database: db.Database = Depends(db.get_database),
) -> dict:
    customer_id = await service.create_customer(database, payload)
    return {"message": "Customer created successfully", "id": customer_id}


@router.get("/api/customers")
async def list_customers(
    page: int = Query(default=1),
    limit: int | None = Query(default=None),
    search: str = Query(default=""),
    database: db.Database = Depends(db.get_database),
) -> dict:
    """
    List customers, optionally filtered by a substring of name or phone number.
    """
    result = await service.list_customers(
        database,
        page=page,
        limit=limit if limit is not None else settings.default_page_size(),
        search=search,
    )
    return {"message": "Customers fetched successfully", **result}


@router.get("/api/customers/{customer_id}")
async def get_customer(
    customer_id: int,
    database: db.Database = Depends(db.get_database),
) -> dict:
    row = await service.get_customer(database, customer_id)
    return {"message": "Customer fetched successfully", "data": row}


@router.put("/api/customers/{customer_id}")
async def update_customer(
    customer_id: int,
    payload: schemas.CustomerInput | None = None,
    database: db.Database = Depends(db.get_database),
) -> dict:
    await service.update_customer(database, customer_id, payload)
    return {"message": "Customer updated successfully"}


@router.delete("/api/customers/{customer_id}")
async def delete_customer(
    customer_id: int,
    database: db.Database = Depends(db.get_database),
) -> dict:
    await service.delete_customer(database, customer_id)
    return {"message": "Customer deleted successfully"}
