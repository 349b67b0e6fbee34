import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from core.advice import build_financial_advice, build_recommendations
from core.models import CalculatorInput


def _codes(results):
    return [r.code for r in results]


def _inp(income, expenses=0, debt=0, pct=30):
    return CalculatorInput(
        monthly_income=income, non_rent_expenses=expenses, monthly_debt=debt, rent_percentage=pct
    )


def test_no_recommendations_without_income():
    assert build_recommendations(_inp(0)) == []
    assert build_financial_advice(_inp(0)) == []


def test_recommendations_within_guideline():
    codes = _codes(build_recommendations(_inp(5000, 1500, 0, 30)))
    assert codes == ["RENT_AT_GUIDELINE", "BUDGET_COMFORTABLE"]


def test_recommendations_over_committed():
    recs = build_recommendations(_inp(2500, 1000, 500, 45))
    codes = _codes(recs)
    assert codes == ["RENT_OVER_LIMIT", "BUDGET_DEFICIT", "BUDGET_CONSCIOUS"]
    assert "$750" in recs[0].action
    assert recs[1].severity == "error"


def test_recommendations_low_rent_high_earner():
    codes = _codes(build_recommendations(_inp(9000, 2000, 0, 20)))
    assert codes == ["RENT_WELL_BELOW_GUIDELINE", "BUDGET_COMFORTABLE", "HIGH_EARNER"]


def test_strained_budget_is_flagged():
    recs = build_recommendations(_inp(4000, 2300, 0, 40))
    assert "RENT_ABOVE_GUIDELINE" in _codes(recs)
    strained = [r for r in recs if r.code == "BUDGET_STRAINED"][0]
    assert "$100" in strained.description


def test_recommendations_sorted_by_priority():
    recs = build_recommendations(_inp(2000, 0, 0, 50))
    assert [r.priority for r in recs] == sorted(r.priority for r in recs)


def test_financial_advice_limit_and_order():
    advice = build_financial_advice(_inp(5000, 1500, 0, 30))
    assert len(advice) == 4
    assert advice[0].category == "Emergency Fund"
    assert "Rent Optimization" not in [a.category for a in advice]
    assert "$300" in advice[0].content


def test_financial_advice_flags_high_rent():
    advice = build_financial_advice(_inp(3000, 1200, 500, 45))
    cats = [a.category for a in advice]
    assert cats[:2] == ["Emergency Fund", "Rent Optimization"]
    assert "$900" in advice[1].content
    assert "Money's tight" in advice[0].content
