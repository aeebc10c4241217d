import itertools

import pytest
from fastapi.testclient import TestClient

from addresses import repository as addresses_repository
from core import db, errors
from customers import repository as customers_repository

CUSTOMER_REPOSITORY_FUNCTIONS = (
    "insert_customer",
    "count_customers",
    "list_customers",
    "get_customer",
    "update_customer",
    "delete_customer",
)
ADDRESS_REPOSITORY_FUNCTIONS = (
    "insert_address",
    "list_addresses_for_customer",
    "update_address",
    "delete_address",
)


class FakeStore:
    """
    In-memory stand-in for both repository modules.

    Mirrors the table constraints: unique phone numbers, address foreign key
    and cascade delete.
    """

    def __init__(self):
        self.customers = {}
        self.addresses = {}
        self._customer_ids = itertools.count(1)
        self._address_ids = itertools.count(1)
        self.fail_on = {}

    def _maybe_fail(self, name):
        if name in self.fail_on:
            raise self.fail_on[name]

    def _phone_taken(self, phone_number, *, exclude_id=None):
        return any(
            row["phone_number"] == phone_number and row["id"] != exclude_id
            for row in self.customers.values()
        )

    def _matching(self, search):
        term = (search or "").lower()
        rows = sorted(self.customers.values(), key=lambda row: row["id"])
        if not term:
            return rows
        return [
            row
            for row in rows
            if term in row["first_name"].lower()
            or term in row["last_name"].lower()
            or term in row["phone_number"].lower()
        ]

    async def insert_customer(self, database, *, first_name, last_name, phone_number):
        self._maybe_fail("insert_customer")
        if self._phone_taken(phone_number):
            raise errors.ConflictError(
                "Store constraint violated.",
                error='duplicate key value violates unique constraint "customers_phone_number_key"',
            )
        customer_id = next(self._customer_ids)
        self.customers[customer_id] = {
            "id": customer_id,
            "first_name": first_name,
            "last_name": last_name,
            "phone_number": phone_number,
        }
        return customer_id

    async def count_customers(self, database, *, search=""):
        self._maybe_fail("count_customers")
        return len(self._matching(search))

    async def list_customers(self, database, *, search="", limit=10, offset=0):
        self._maybe_fail("list_customers")
        if limit < 0:
            raise errors.StoreError("Store request failed.", error="LIMIT must not be negative")
        if offset < 0:
            raise errors.StoreError("Store request failed.", error="OFFSET must not be negative")
        return [dict(row) for row in self._matching(search)[offset : offset + limit]]

    async def get_customer(self, database, customer_id):
        self._maybe_fail("get_customer")
        row = self.customers.get(customer_id)
        return dict(row) if row is not None else None

    async def update_customer(self, database, customer_id, *, first_name, last_name, phone_number):
        self._maybe_fail("update_customer")
        if customer_id not in self.customers:
            return False
        if self._phone_taken(phone_number, exclude_id=customer_id):
            raise errors.ConflictError(
                "Store constraint violated.",
                error='duplicate key value violates unique constraint "customers_phone_number_key"',
            )
        self.customers[customer_id].update(
            first_name=first_name,
            last_name=last_name,
            phone_number=phone_number,
        )
        return True

    async def delete_customer(self, database, customer_id):
        self._maybe_fail("delete_customer")
        if self.customers.pop(customer_id, None) is None:
            return False
        for address_id in [a for a, row in self.addresses.items() if row["customer_id"] == customer_id]:
            del self.addresses[address_id]
        return True

    async def insert_address(self, database, *, customer_id, address_details, city, state, pin_code):
        self._maybe_fail("insert_address")
        if customer_id not in self.customers:
            raise errors.ConflictError(
                "Store constraint violated.",
                error='insert or update on table "addresses" violates foreign key constraint',
            )
        address_id = next(self._address_ids)
        self.addresses[address_id] = {
            "id": address_id,
            "customer_id": customer_id,
            "address_details": address_details,
            "city": city,
            "state": state,
            "pin_code": pin_code,
        }
        return address_id

    async def list_addresses_for_customer(self, database, customer_id):
        self._maybe_fail("list_addresses_for_customer")
        return [
            dict(row)
            for _, row in sorted(self.addresses.items())
            if row["customer_id"] == customer_id
        ]

    async def update_address(self, database, address_id, *, address_details, city, state, pin_code):
        self._maybe_fail("update_address")
        if address_id not in self.addresses:
            return False
        self.addresses[address_id].update(
            address_details=address_details,
            city=city,
            state=state,
            pin_code=pin_code,
        )
        return True

    async def delete_address(self, database, address_id):
        self._maybe_fail("delete_address")
        return self.addresses.pop(address_id, None) is not None


@pytest.fixture
def store(monkeypatch):
    fake = FakeStore()
    for name in CUSTOMER_REPOSITORY_FUNCTIONS:
        monkeypatch.setattr(customers_repository, name, getattr(fake, name))
    for name in ADDRESS_REPOSITORY_FUNCTIONS:
        monkeypatch.setattr(addresses_repository, name, getattr(fake, name))
    return fake


@pytest.fixture
def client(store):
    from main import app

    # No lifespan: the pool is never opened and repositories are faked.
    app.dependency_overrides[db.get_database] = lambda: db.Database(None)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def create_customer(client):
    def _create(first_name="Ada", last_name="Lovelace", phone_number="1000"):
        response = client.post(
            "/api/customers",
            json={"first_name": first_name, "last_name": last_name, "phone_number": phone_number},
        )
        assert response.status_code == 201, response.text
        return response.json()["id"]

    return _create
