from __future__ import annotations

import math
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator

from core.utils import MAX_AMOUNT_DIGITS, amount_digits

RENT_PCT_MIN = 10
RENT_PCT_MAX = 60
RENT_PCT_DEFAULT = 30


class CalculatorInput(BaseModel):
    monthly_income: int = Field(0, ge=0)
    non_rent_expenses: int = Field(0, ge=0)
    monthly_debt: int = Field(0, ge=0)
    rent_percentage: int = Field(RENT_PCT_DEFAULT, ge=RENT_PCT_MIN, le=RENT_PCT_MAX)


class CalculatorResult(BaseModel):
    max_rent: int = 0
    total_committed: int = 0
    disposable_income: int = 0
    rent_to_income_ratio: int = 0


class FormState(BaseModel):
    """Raw form fields as typed by the user, plus the persisted timestamp.

    Amounts stay strings so an untouched field can be told apart from an
    explicit ``0``. Serialised with the camelCase keys used in storage.
    """

    model_config = ConfigDict(populate_by_name=True)

    income: str = ""
    expenses: str = ""
    debt: str = ""
    rent_percentage: int = Field(
        RENT_PCT_DEFAULT, alias="rentPercentage", ge=RENT_PCT_MIN, le=RENT_PCT_MAX
    )
    last_updated: Optional[str] = Field(None, alias="lastUpdated")

    @field_validator("income", "expenses", "debt", mode="before")
    @classmethod
    def _digits_only(cls, v: Any) -> str:
        if v is None:
            return ""
        if isinstance(v, bool):
            raise ValueError("amount must be text or a number")
        if isinstance(v, float) and not math.isfinite(v):
            raise ValueError("amount must be a finite number")
        if isinstance(v, (int, float)):
            return str(min(max(int(round(v)), 0), 10**MAX_AMOUNT_DIGITS - 1))
        if not isinstance(v, str):
            raise ValueError("amount must be text or a number")
        return amount_digits(v)


class EmailAccessResult(BaseModel):
    """First row returned by ``submit_email_for_access``."""

    model_config = ConfigDict(populate_by_name=True)

    success: StrictBool
    message: StrictStr
    is_existing: StrictBool = Field(False, alias="existing")


class SessionSaveResult(BaseModel):
    """First row returned by ``save_calculator_session``."""

    success: StrictBool
    message: StrictStr = "Session saved"


class SyncResult(BaseModel):
    success: bool
    message: str
