"""
Address API endpoints.

Addresses are created and listed under their customer, and updated or
deleted by their own id.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from core import db

from . import schemas, service

router = APIRouter()


@router.post("/api/customers/{customer_id}/addresses", status_code=201)
async def add_address(
    customer_id: int,
    payload: schemas.AddressInput | None = None,
    database: db.Database = Depends(db.get_database),
) -> dict:
    address_id = await service.add_address(database, customer_id, payload)
    return {"message": "Address added successfully", "id": address_id}


@router.get("/api/customers/{customer_id}/addresses")
async def list_addresses(
    customer_id: int,
    database: db.Database = Depends(db.get_database),
) -> dict:
    rows = await service.list_addresses(database, customer_id)
    return {"message": "Addresses fetched successfully", "data": rows}


@router.put("/api/addresses/{address_id}")
async def update_address(
    address_id: int,
    payload: schemas.AddressInput | None = None,
    database: db.Database = Depends(db.get_database),
) -> dict:
    await service.update_address(database, address_id, payload)
    return {"message": "Address updated successfully"}


@router.delete("/api/addresses/{address_id}")
async def delete_address(
    address_id: int,
    database: db.Database = Depends(db.get_database),
) -> dict:
    await service.delete_address(database, address_id)
    return {"message": "Address deleted successfully"}
