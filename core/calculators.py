from __future__ import annotations

import math
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from core.models import (
    RENT_PCT_MAX,
    RENT_PCT_MIN,
    CalculatorInput,
    CalculatorResult,
    FormState,
)
from core.presets import (
    APPLICATION_FEES,
    EMERGENCY_BUFFER,
    MOVING_ESSENTIALS,
    RECOMMENDED_RENT_PCT,
)
from core.utils import MAX_AMOUNT_DIGITS, amount_digits


def parse_amount(value) -> int:
    """Return a non-negative whole-dollar amount for a form value.

    Text input has every non-digit character stripped first, so ``"$5,000"``
    reads as ``5000`` and an empty field reads as ``0``. Numbers coming from
    numeric widgets are rounded and floored at zero. Amounts are capped at
    nine digits.
    """

    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return 0
        if value > 10**MAX_AMOUNT_DIGITS - 1:
            return 10**MAX_AMOUNT_DIGITS - 1
        return max(round_half_away(value), 0)
    digits = amount_digits(value)
    return int(digits) if digits else 0


def round_half_away(x) -> int:
    """Round to the nearest integer, ties away from zero (``2.5 -> 3``)."""

    d = Decimal(str(x))
    sign = -1 if d < 0 else 1
    return sign * int(abs(d).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def clamp_rent_percentage(value) -> int:
    """Keep a slider value inside the supported 10–60% band."""

    try:
        pct = int(value)
    except (TypeError, ValueError):
        return RECOMMENDED_RENT_PCT
    return min(max(pct, RENT_PCT_MIN), RENT_PCT_MAX)


def to_input(form: FormState) -> CalculatorInput:
    """Parse raw form fields into calculator input."""

    return CalculatorInput(
        monthly_income=parse_amount(form.income),
        non_rent_expenses=parse_amount(form.expenses),
        monthly_debt=parse_amount(form.debt),
        rent_percentage=clamp_rent_percentage(form.rent_percentage),
    )


def max_rent(monthly_income: int, rent_percentage: int) -> int:
    """Rent ceiling for the chosen share of income."""

    return round_half_away(Decimal(monthly_income) * Decimal(rent_percentage) / 100)


def calculate(inp: CalculatorInput) -> CalculatorResult:
    """Derive the rent budget for a set of inputs.

    ``max_rent`` is the only rounded figure; the rest is exact integer
    arithmetic on it. Disposable income includes debt payments and goes
    negative when the budget is over-committed. No income means the form is
    still empty, so every field is zero.
    """

    if not inp.monthly_income:
        return CalculatorResult()
    rent = max_rent(inp.monthly_income, inp.rent_percentage)
    committed = rent + inp.non_rent_expenses + inp.monthly_debt
    return CalculatorResult(
        max_rent=rent,
        total_committed=committed,
        disposable_income=inp.monthly_income - committed,
        rent_to_income_ratio=inp.rent_percentage,
    )


def budget_breakdown(inp: CalculatorInput) -> Optional[dict]:
    """Split income into rent / other costs / what's left, with shares in %.

    Returns ``None`` for an empty form. Remaining money is floored at zero so
    the chart never shows a negative slice.
    """

    if not inp.monthly_income:
        return None
    res = calculate(inp)
    income = inp.monthly_income
    other = inp.non_rent_expenses + inp.monthly_debt
    remaining = max(0, res.disposable_income)

    def share(v: int) -> float:
        return round(v / income * 100, 1)

    return {
        "total": income,
        "rent": res.max_rent,
        "other_expenses": other,
        "remaining": remaining,
        "rent_pct": share(res.max_rent),
        "other_pct": share(other),
        "remaining_pct": share(remaining),
    }


def upfront_costs(monthly_rent: int) -> dict:
    """Cash needed at lease signing for a given monthly rent."""

    if not monthly_rent:
        return {}
    costs = {
        "first_month": monthly_rent,
        "security_deposit": monthly_rent,
        "application_fees": APPLICATION_FEES,
        "moving_essentials": MOVING_ESSENTIALS,
    }
    costs["total"] = sum(costs.values())
    return costs


def session_metadata(inp: CalculatorInput, client_info: Optional[str] = None, now: Optional[datetime] = None) -> dict:
    """Metadata attached to a saved calculator session."""

    res = calculate(inp)
    ts = now or datetime.now(timezone.utc)
    return {
        "timestamp": ts.isoformat(),
        "monthly_debt": inp.monthly_debt,
        "meets_three_times_rule": inp.monthly_income >= res.max_rent * 3,
        "follows_30_rule": inp.rent_percentage <= RECOMMENDED_RENT_PCT,
        "has_emergency_buffer": res.disposable_income >= EMERGENCY_BUFFER,
        "client_info": client_info,
    }
