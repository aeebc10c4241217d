"""
Customer API schemas (request models).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from core import validation

CUSTOMER_FIELDS = ("first_name", "last_name", "phone_number")


class CustomerInput(BaseModel):
    # Presence is checked by the service so that absent and blank fields
    # produce the same 400 response.
    model_config = ConfigDict(coerce_numbers_to_str=True)

    first_name: str | None = None
    last_name: str | None = None
    phone_number: str | None = None

    falsy_is_missing = field_validator("*", mode="before")(validation.falsy_to_none)
