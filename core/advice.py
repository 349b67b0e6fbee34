from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel

from core.calculators import calculate, max_rent, round_half_away
from core.models import CalculatorInput
from core.presets import RECOMMENDED_RENT_PCT
from core.utils import format_currency as fmt


class Recommendation(BaseModel):
    code: str
    severity: Literal["success", "warning", "error", "info"]
    title: str
    description: str
    action: str
    priority: int


class Advice(BaseModel):
    category: str
    title: str
    content: str
    priority: int


def _target_rent(income: int) -> int:
    return max_rent(income, RECOMMENDED_RENT_PCT)


def build_recommendations(inp: CalculatorInput) -> List[Recommendation]:
    res: List[Recommendation] = []
    income = inp.monthly_income
    if not income:
        return res

    pct = inp.rent_percentage
    disposable = calculate(inp).disposable_income
    target = fmt(_target_rent(income))

    if pct <= 25:
        res.append(
            Recommendation(
                code="RENT_WELL_BELOW_GUIDELINE",
                severity="success",
                title="You're Being Super Smart!",
                description=f"At {pct}% of income, you're well within the safe zone. "
                "This gives you tons of room for savings and fun stuff!",
                action="Consider investing the extra money or building an emergency fund.",
                priority=1,
            )
        )
    elif pct <= 30:
        res.append(
            Recommendation(
                code="RENT_AT_GUIDELINE",
                severity="success",
                title="Right in the Sweet Spot!",
                description="The 30% rule exists for a reason - you're following it perfectly. "
                "This should leave you comfortable.",
                action="You're on track! Keep an eye on other expenses to maintain this balance.",
                priority=1,
            )
        )
    elif pct <= 40:
        res.append(
            Recommendation(
                code="RENT_ABOVE_GUIDELINE",
                severity="warning",
                title="Getting a Bit Risky",
                description=f"At {pct}%, you might feel the squeeze. "
                "It's doable, but leaves less room for surprises.",
                action=f"Consider looking for places around ${target} to get back to the 30% sweet spot.",
                priority=1,
            )
        )
    else:
        res.append(
            Recommendation(
                code="RENT_OVER_LIMIT",
                severity="error",
                title="This Might Be Too Much",
                description="Over 40% can put serious strain on your budget. "
                "You might struggle with other expenses.",
                action=f"Strongly consider places under ${target} or ways to increase your income.",
                priority=1,
            )
        )

    if disposable < 0:
        res.append(
            Recommendation(
                code="BUDGET_DEFICIT",
                severity="error",
                title="Houston, We Have a Problem",
                description=f"Your expenses exceed your income by ${fmt(abs(disposable))}. "
                "This isn't sustainable.",
                action="Either find a cheaper place, reduce expenses, or boost your income "
                "before signing any lease.",
                priority=2,
            )
        )
    elif disposable < 200:
        res.append(
            Recommendation(
                code="BUDGET_STRAINED",
                severity="warning",
                title="Living Paycheck to Paycheck",
                description=f"With only ${fmt(disposable)} left over, one surprise expense "
                "could cause problems.",
                action="Try to find $200+ breathing room by negotiating rent or trimming other costs.",
                priority=2,
            )
        )
    elif disposable >= 500:
        res.append(
            Recommendation(
                code="BUDGET_COMFORTABLE",
                severity="success",
                title="You've Got This Covered!",
                description=f"With ${fmt(disposable)} left over, you have good financial breathing room.",
                action="Perfect! Consider putting some of this toward an emergency fund or retirement savings.",
                priority=2,
            )
        )

    if income >= 8000:
        res.append(
            Recommendation(
                code="HIGH_EARNER",
                severity="info",
                title="High Earner Perks",
                description="Your income gives you more flexibility. "
                "Consider neighborhoods that offer good value.",
                action="You might afford premium locations, but don't forget about saving and investing!",
                priority=3,
            )
        )
    elif income < 3000:
        res.append(
            Recommendation(
                code="BUDGET_CONSCIOUS",
                severity="info",
                title="Budget-Conscious Tips",
                description="Every dollar counts at your income level. "
                "Consider roommates or slightly outside city center.",
                action="Look for places with utilities included, or consider shared housing "
                "to stretch your budget.",
                priority=3,
            )
        )

    return sorted(res, key=lambda r: r.priority)


def build_financial_advice(inp: CalculatorInput, limit: int = 4) -> List[Advice]:
    """Coaching notes for the unlocked advice panel, most urgent first."""
    income = inp.monthly_income
    if not income:
        return []

    pct = inp.rent_percentage
    disposable = calculate(inp).disposable_income
    items: List[Advice] = []

    if disposable > 300:
        monthly_save = min(300, round_half_away(disposable * 0.5))
        content = (
            f"Great news! With ${fmt(disposable)} left over each month, you can build a solid "
            f"emergency fund. Try saving ${fmt(monthly_save)} monthly - you'll have 3 months of "
            "expenses saved in no time!"
        )
    else:
        content = (
            f"Money's tight with only ${fmt(disposable)} left over. Start small - even $25/month "
            "adds up! Look for ways to trim expenses so you can build that crucial safety net."
        )
    items.append(Advice(category="Emergency Fund", title="Your Safety Net Strategy", content=content, priority=1))

    if income > 5000:
        content = (
            f"As a higher earner, you should aim to save 20% of your income (${fmt(round_half_away(income * 0.2))}). "
            "Consider maxing out retirement accounts and looking into index fund investing."
        )
    else:
        content = (
            "Start with the 50/30/20 rule: 50% needs, 30% wants, 20% savings. Even if you can't hit "
            "20% yet, start with whatever you can manage."
        )
    items.append(Advice(category="Savings Strategy", title="Growing Your Money Tree", content=content, priority=2))

    if pct > RECOMMENDED_RENT_PCT:
        items.append(
            Advice(
                category="Rent Optimization",
                title="Getting Your Housing Costs Right",
                content=(
                    f"At {pct}% of income, housing is eating too much of your budget. Try to find "
                    f"places around ${fmt(_target_rent(income))} (30% rule). Consider roommates, "
                    "slightly longer commutes, or negotiating with your current landlord."
                ),
                priority=1,
            )
        )
    else:
        items.append(
            Advice(
                category="Rent Optimization",
                title="Housing Win!",
                content=(
                    f"You're crushing it at {pct}%! This smart housing choice leaves room for other "
                    "financial goals."
                ),
                priority=3,
            )
        )

    items.append(
        Advice(
            category="Credit Building",
            title="Building Your Credit Score",
            content=(
                "Strong credit = better rent deals and loan rates. Pay all bills on time, keep credit "
                "card balances low (under 30% of limit), and check your credit report annually."
            ),
            priority=2,
        )
    )

    if income < 4000:
        content = (
            f"At ${fmt(income)}/month, growing your income could be game-changing. Consider skill "
            "development, side hustles, or asking for a raise."
        )
    else:
        content = (
            "You're in good shape income-wise! Focus on advancing in your career, building valuable "
            "skills, and maybe exploring passive income streams."
        )
    items.append(Advice(category="Income Growth", title="Boosting Your Earning Power", content=content, priority=2))

    return sorted(items, key=lambda a: a.priority)[:limit]
