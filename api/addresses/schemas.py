"""
Address API schemas (request models).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from core import validation

ADDRESS_FIELDS = ("address_details", "city", "state", "pin_code")


class AddressInput(BaseModel):
    # Pin codes often arrive as JSON numbers.
    model_config = ConfigDict(coerce_numbers_to_str=True)

    address_details: str | None = None
    city: str | None = None
    state: str | None = None
    pin_code: str | None = None

    falsy_is_missing = field_validator("*", mode="before")(validation.falsy_to_none)
