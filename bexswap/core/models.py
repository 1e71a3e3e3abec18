# /bexswap/core/models.py
from decimal import Decimal
from typing import Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator

ADDRESS_PATTERN = r"^0x[a-fA-F0-9]{40}$"

class SwapRequest(BaseModel):
    """
    Input of a single swap: sell `amount` of `base` for `quote`.
    Addresses are checked against the hex pattern before any chain call is made.
    """
    model_config = ConfigDict(frozen=True)

    base: str = Field(pattern=ADDRESS_PATTERN)
    quote: str = Field(pattern=ADDRESS_PATTERN)
    amount: Decimal

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value):
        # Floats go through str() so 0.1 stays 0.1 instead of its binary expansion
        if isinstance(value, float):
            return str(value)
        return value

    @field_validator("amount")
    @classmethod
    def _check_amount(cls, value: Decimal) -> Decimal:
        if not value.is_finite():
            raise ValueError("amount must be a finite number")
        if value < 0:
            raise ValueError("amount must not be negative")
        return value


class AllowanceState(BaseModel):
    model_config = ConfigDict(frozen=True)

    current: int
    required: int

    @property
    def is_sufficient(self) -> bool:
        return self.current >= self.required


class RouteStep(BaseModel):
    """One pool hop, in the shape the multiSwap router expects."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    pool_idx: int = Field(alias="poolIdx")
    base: str
    quote: str
    is_buy: bool = Field(alias="isBuy")


class TransactionReceipt(BaseModel):
    model_config = ConfigDict(frozen=True)

    hash: str
    status: Literal["success", "reverted"]

    @property
    def succeeded(self) -> bool:
        return self.status == "success"
