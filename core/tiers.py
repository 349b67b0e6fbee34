"""Qualitative buckets and the landlord approval score.

Everything here is a pure function of an already computed
:class:`~core.models.CalculatorResult`; thresholds live in
:mod:`core.presets`.
"""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from core.calculators import calculate
from core.models import CalculatorInput, CalculatorResult
from core.presets import (
    COLORS,
    DISPOSABLE_TIER_FLOORS,
    RENT_TIER_LIMITS,
    SCORE_BANDS,
    SCORE_BASE,
    SCORE_DISPOSABLE_LOW,
    SCORE_DISPOSABLE_STEPS,
    SCORE_RATIO_HIGH,
    SCORE_RATIO_STEPS,
)

RentTier = Literal["conservative", "moderate", "high_risk"]
DisposableTier = Literal["deficit", "strained", "tight", "comfortable"]
ScoreBand = Literal["excellent", "strong", "risky"]


class TierStatus(BaseModel):
    tier: str
    message: str
    color: str
    icon: str


class ScoreDetails(BaseModel):
    band: ScoreBand
    label: str
    description: str


class Assessment(BaseModel):
    result: CalculatorResult
    rent: TierStatus
    disposable: TierStatus
    score: int
    score_details: ScoreDetails
    insight: str


def rent_tier(ratio: int) -> RentTier:
    if ratio <= RENT_TIER_LIMITS["conservative"]:
        return "conservative"
    if ratio <= RENT_TIER_LIMITS["moderate"]:
        return "moderate"
    return "high_risk"


def disposable_tier(disposable: int) -> DisposableTier:
    if disposable < 0:
        return "deficit"
    if disposable < DISPOSABLE_TIER_FLOORS["tight"]:
        return "strained"
    if disposable < DISPOSABLE_TIER_FLOORS["comfortable"]:
        return "tight"
    return "comfortable"


_RENT_STATUS = {
    "conservative": ("You're in the safe zone!", COLORS["green"], "check-circle"),
    "moderate": ("Getting a bit risky, but doable", COLORS["yellow"], "alert-triangle"),
    "high_risk": ("Heads up: this might be too much", COLORS["orange"], "alert-circle"),
}

_DISPOSABLE_STATUS = {
    "comfortable": ("Looking good!", COLORS["green"], "check-circle"),
    "tight": ("Tight, but manageable", COLORS["yellow"], "alert-triangle"),
    "strained": ("This might be stretching it", COLORS["orange"], "alert-circle"),
    "deficit": ("Time to adjust something!", COLORS["orange"], "alert-circle"),
}


def rent_status(ratio: int) -> TierStatus:
    tier = rent_tier(ratio)
    message, color, icon = _RENT_STATUS[tier]
    return TierStatus(tier=tier, message=message, color=color, icon=icon)


def disposable_status(disposable: int) -> TierStatus:
    tier = disposable_tier(disposable)
    message, color, icon = _DISPOSABLE_STATUS[tier]
    return TierStatus(tier=tier, message=message, color=color, icon=icon)


def approval_score(result: CalculatorResult) -> int:
    """Landlord approval score in ``[0, 100]``.

    Starts at 50, moves with the rent ratio (a ratio of 36–40 leaves it
    unchanged) and with the money left over each month.
    """

    ratio = result.rent_to_income_ratio
    disposable = result.disposable_income
    score = SCORE_BASE

    for limit, points in SCORE_RATIO_STEPS:
        if ratio <= limit:
            score += points
            break
    else:
        high_limit, penalty = SCORE_RATIO_HIGH
        if ratio > high_limit:
            score += penalty

    for floor, points in SCORE_DISPOSABLE_STEPS:
        if disposable >= floor:
            score += points
            break
    else:
        low_floor, penalty = SCORE_DISPOSABLE_LOW
        if disposable < low_floor:
            score += penalty

    return min(max(score, 0), 100)


def score_band(score: int) -> ScoreBand:
    if score >= SCORE_BANDS["excellent"]:
        return "excellent"
    if score >= SCORE_BANDS["strong"]:
        return "strong"
    return "risky"


_SCORE_COPY = {
    "excellent": ("Excellent Applicant", "Landlords will likely approve your application immediately."),
    "strong": ("Strong Applicant", "You meet most criteria. Having a good credit score will seal the deal."),
    "risky": ("Risky Applicant", "You might need a guarantor or a higher security deposit."),
}


def score_details(score: int) -> ScoreDetails:
    band = score_band(score)
    label, description = _SCORE_COPY[band]
    return ScoreDetails(band=band, label=label, description=description)


def ratio_insight(ratio: int) -> str:
    if ratio <= RENT_TIER_LIMITS["conservative"]:
        return "Your rent-to-income ratio is under 30%, which puts you ahead of 65% of other applicants."
    return "Your ratio is slightly high. Offer to sign a longer lease to improve approval odds."


def assess(inp: CalculatorInput) -> Assessment:
    """Calculate and classify in one go."""
    result = calculate(inp)
    score = approval_score(result)
    return Assessment(
        result=result,
        rent=rent_status(result.rent_to_income_ratio),
        disposable=disposable_status(result.disposable_income),
        score=score,
        score_details=score_details(score),
        insight=ratio_insight(result.rent_to_income_ratio),
    )
