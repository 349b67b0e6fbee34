import os
import sys
from datetime import datetime, timezone

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from core.calculators import (
    budget_breakdown,
    calculate,
    clamp_rent_percentage,
    max_rent,
    parse_amount,
    round_half_away,
    session_metadata,
    to_input,
    upfront_costs,
)
from core.models import CalculatorInput, FormState


def _inp(income, expenses=0, debt=0, pct=30):
    return CalculatorInput(
        monthly_income=income, non_rent_expenses=expenses, monthly_debt=debt, rent_percentage=pct
    )


def test_scenario_within_guideline():
    res = calculate(_inp(5000, 1500, 0, 30))
    assert res.max_rent == 1500
    assert res.total_committed == 3000
    assert res.disposable_income == 2000
    assert res.rent_to_income_ratio == 30


def test_scenario_over_committed():
    res = calculate(_inp(3000, 1200, 500, 45))
    assert res.max_rent == 1350
    assert res.total_committed == 3050
    assert res.disposable_income == -50


def test_empty_income_gives_zeros():
    res = calculate(_inp(0, 1200, 300, 45))
    assert res.max_rent == 0
    assert res.total_committed == 0
    assert res.disposable_income == 0
    assert res.rent_to_income_ratio == 0


def test_totals_always_balance():
    for income in (1, 999, 3333, 5000, 12345):
        for expenses in (0, 250, 4000):
            for debt in (0, 75, 900):
                for pct in (10, 29, 33, 60):
                    inp = _inp(income, expenses, debt, pct)
                    res = calculate(inp)
                    assert res.max_rent + expenses + debt == res.total_committed
                    assert income - res.total_committed == res.disposable_income


def test_calculate_is_idempotent():
    inp = _inp(4321, 800, 120, 37)
    assert calculate(inp) == calculate(inp)


def test_max_rent_rounds_half_away_from_zero():
    # 4150 * 30% = 1245.0, 4155 * 30% = 1246.5, 1005 * 10% = 100.5
    assert max_rent(4150, 30) == 1245
    assert max_rent(4155, 30) == 1247
    assert max_rent(1005, 10) == 101
    assert round_half_away(2.5) == 3
    assert round_half_away(-2.5) == -3


def test_parse_amount_strips_formatting():
    assert parse_amount("$5,000") == 5000
    assert parse_amount("  1 500 ") == 1500
    assert parse_amount("") == 0
    assert parse_amount(None) == 0
    assert parse_amount("-250") == 250
    assert parse_amount(1234.6) == 1235
    assert parse_amount(-40) == 0
    assert parse_amount(float("nan")) == 0


def test_clamp_rent_percentage():
    assert clamp_rent_percentage(5) == 10
    assert clamp_rent_percentage(75) == 60
    assert clamp_rent_percentage("42") == 42
    assert clamp_rent_percentage("abc") == 30


def test_to_input_from_form_strings():
    inp = to_input(FormState(income="5,000", expenses="$1,500", debt="", rent_percentage=35))
    assert inp == _inp(5000, 1500, 0, 35)


def test_budget_breakdown_floors_remaining():
    data = budget_breakdown(_inp(3000, 1200, 500, 45))
    assert data["rent"] == 1350
    assert data["other_expenses"] == 1700
    assert data["remaining"] == 0
    assert data["rent_pct"] == 45.0
    assert budget_breakdown(_inp(0)) is None


def test_upfront_costs():
    costs = upfront_costs(1500)
    assert costs["first_month"] == 1500
    assert costs["security_deposit"] == 1500
    assert costs["total"] == 1500 + 1500 + 150 + 400
    assert upfront_costs(0) == {}


def test_session_metadata_flags():
    now = datetime(2026, 10, 19, tzinfo=timezone.utc)
    meta = session_metadata(_inp(5000, 1500, 200, 30), client_info="pytest", now=now)
    assert meta["timestamp"] == now.isoformat()
    assert meta["meets_three_times_rule"] is True
    assert meta["follows_30_rule"] is True
    assert meta["has_emergency_buffer"] is True
    assert meta["monthly_debt"] == 200
    assert meta["client_info"] == "pytest"

    tight = session_metadata(_inp(3000, 1200, 500, 45), now=now)
    assert tight["meets_three_times_rule"] is False
    assert tight["follows_30_rule"] is False
    assert tight["has_emergency_buffer"] is False


def test_parse_amount_caps_long_values():
    assert parse_amount("9" * 5000) == 999999999
    assert parse_amount("0000042") == 42
    assert parse_amount(1e300) == 999999999
    assert parse_amount(float("inf")) == 0
    assert to_input(FormState(income="1" * 30)).monthly_income == 111111111
