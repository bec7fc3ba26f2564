"""
Movement schemas.
"""
from pydantic import BaseModel, field_validator
from decimal import Decimal
from typing import Any
from app.models.movement import (
    MovementStatus,
    VALUE_PRECISION,
    VALUE_SCALE,
    WEIGHT_PRECISION,
    WEIGHT_SCALE,
)
from app.services.normalizer import safe_amount, norm_text

TEXT_FIELDS = (
    "month",
    "invoice_number",
    "access_key",
    "description",
    "supplier",
    "invoice_date",
    "unloading_date",
    "plate",
    "container",
    "destination",
    "exit_billing_date",
    "exit_cte",
    "arrival_time",
    "entry_time",
    "exit_time",
    "billing_issue_date",
    "billing_cte",
    "billing_cte_issue_date",
    "carrier_cte",
)


class MovementInput(BaseModel):
    """Field values submitted by the movement form, normalized on the way in."""

    status: MovementStatus = MovementStatus.IN_STOCK

    # Entry
    month: str = ""
    invoice_number: str = ""
    access_key: str = ""
    weight: Decimal = Decimal("0")
    value: Decimal = Decimal("0")
    description: str = ""
    supplier: str = ""
    invoice_date: str = ""
    unloading_date: str = ""
    plate: str = ""
    container: str = ""
    destination: str = ""

    # Exit
    exit_billing_date: str = ""
    exit_cte: str = ""

    # Performance
    arrival_time: str = ""
    entry_time: str = ""
    exit_time: str = ""

    # Billing
    billing_issue_date: str = ""
    billing_cte: str = ""
    billing_cte_issue_date: str = ""
    carrier_cte: str = ""

    # Rounded to the column scale so a stored movement reloads unchanged
    @field_validator("weight", mode="before")
    @classmethod
    def coerce_weight(cls, v: Any) -> Decimal:
        return safe_amount(v, places=WEIGHT_SCALE, max_digits=WEIGHT_PRECISION)

    @field_validator("value", mode="before")
    @classmethod
    def coerce_value(cls, v: Any) -> Decimal:
        return safe_amount(v, places=VALUE_SCALE, max_digits=VALUE_PRECISION)

    @field_validator(*TEXT_FIELDS, mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return norm_text(v)


class Movement(MovementInput):
    id: str

    class Config:
        from_attributes = True


class MovementRow(Movement):
    """A movement as displayed in a table view."""

    quantity: int


class ViewColumn(BaseModel):
    field: str
    label: str
