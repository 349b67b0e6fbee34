"""Downloadable exports of the results panel.

The PDF is a single page: title, generation date, an image of the results
view and a table of the figures behind it. Everything is built in memory so
a failure never leaves a partial file behind.
"""
from __future__ import annotations

import io
import logging
from datetime import date
from typing import Optional

import pandas as pd
from matplotlib.figure import Figure
from reportlab.lib import colors
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Image, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from core.calculators import budget_breakdown
from core.errors import ExportError
from core.models import CalculatorInput
from core.presets import COLORS, DISCLAIMER
from core.tiers import Assessment, assess
from core.utils import format_currency

logger = logging.getLogger(__name__)

REPORT_TITLE = "Rent Affordability Report"
_TABLE_STYLE = TableStyle(
    [
        ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
        ("BOX", (0, 0), (-1, -1), 1, colors.black),
        ("INNERGRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ]
)


def _money(v: int) -> str:
    sign = "-" if v < 0 else ""
    return f"{sign}${format_currency(abs(v))}"


def summary_rows(inp: CalculatorInput, assessment: Assessment, include_score: bool = False) -> list[list[str]]:
    r = assessment.result
    rows = [
        ["Monthly Income", _money(inp.monthly_income)],
        ["Other Expenses", _money(inp.non_rent_expenses)],
        ["Debt Payments", _money(inp.monthly_debt)],
        ["Rent Share of Income", f"{r.rent_to_income_ratio}%"],
        ["Maximum Recommended Rent", _money(r.max_rent)],
        ["Total Committed", _money(r.total_committed)],
        ["Money Left Over", _money(r.disposable_income)],
        ["Rent Status", assessment.rent.message],
        ["Budget Status", assessment.disposable.message],
    ]
    if include_score:
        rows.append(["Landlord Approval Score", f"{assessment.score}/100 ({assessment.score_details.label})"])
    return rows


def draw_budget_doughnut(ax, data: Optional[dict]) -> None:
    """Rent / other expenses / available money as a doughnut on ``ax``."""
    if not data:
        ax.axis("off")
        ax.text(0.5, 0.5, "Enter your income to see the breakdown", ha="center", va="center", fontsize=9)
        return
    values = [data["rent"], data["other_expenses"], data["remaining"]]
    ax.pie(
        values,
        labels=["Rent", "Other Expenses", "Available Money"],
        colors=[COLORS["orange"], COLORS["brown"], COLORS["green"]],
        wedgeprops={"width": 0.35},
        startangle=90,
        counterclock=False,
        textprops={"fontsize": 8},
    )
    ax.text(0, 0, _money(data["total"]), ha="center", va="center", fontsize=12, fontweight="bold")
    ax.set_aspect("equal")


def render_results_image(inp: CalculatorInput, include_score: bool = False, dpi: int = 150) -> bytes:
    """PNG snapshot of the results panel: headline figures and budget doughnut."""
    assessment = assess(inp)
    r = assessment.result
    fig = Figure(figsize=(8, 4), dpi=dpi)
    text_ax = fig.add_axes([0.02, 0.05, 0.5, 0.9])
    text_ax.axis("off")
    lines = [
        ("Maximum Recommended Rent", _money(r.max_rent), assessment.rent.color, assessment.rent.message),
        ("Money Left Over", _money(r.disposable_income), assessment.disposable.color, assessment.disposable.message),
        ("Rent Share of Income", f"{r.rent_to_income_ratio}%", COLORS["ink"], "Experts suggest staying at or below 30%"),
    ]
    if include_score:
        lines.append(
            ("Landlord Approval Score", f"{assessment.score}/100", COLORS["ink"], assessment.score_details.label)
        )
    y = 0.92
    step = 0.9 / len(lines)
    for label, value, color, note in lines:
        text_ax.text(0.0, y, label, fontsize=9, color="#4a5a7a", transform=text_ax.transAxes)
        text_ax.text(0.0, y - 0.09, value, fontsize=18, fontweight="bold", color=color, transform=text_ax.transAxes)
        text_ax.text(0.0, y - 0.15, note, fontsize=8, color="#4a5a7a", transform=text_ax.transAxes)
        y -= step

    chart_ax = fig.add_axes([0.55, 0.08, 0.42, 0.84])
    draw_budget_doughnut(chart_ax, budget_breakdown(inp))

    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=dpi)
    return buf.getvalue()


def build_results_pdf(
    inp: CalculatorInput,
    include_score: bool = False,
    generated_on: Optional[date] = None,
) -> bytes:
    """Compose the one-page results document. Raises :class:`ExportError`."""
    try:
        assessment = assess(inp)
        png = render_results_image(inp, include_score=include_score)
        styles = getSampleStyleSheet()
        out = io.BytesIO()
        doc = SimpleDocTemplate(
            out,
            pagesize=LETTER,
            leftMargin=36,
            rightMargin=36,
            topMargin=36,
            bottomMargin=36,
            title=REPORT_TITLE,
        )
        day = generated_on or date.today()
        story = [
            Paragraph(f"<b>{REPORT_TITLE}</b>", styles["Title"]),
            Paragraph(f"Generated on {day:%B %d, %Y}", styles["Normal"]),
            Spacer(1, 12),
            Image(io.BytesIO(png), width=7.0 * inch, height=3.5 * inch),
            Spacer(1, 12),
        ]
        t = Table([["Your Numbers", ""]] + summary_rows(inp, assessment, include_score), hAlign="LEFT", colWidths=[200, 320])
        t.setStyle(_TABLE_STYLE)
        story += [t, Spacer(1, 12), Paragraph(f"<font size=8>{DISCLAIMER}</font>", styles["Normal"])]
        doc.build(story)
        return out.getvalue()
    except Exception as exc:
        logger.exception("Results PDF generation failed")
        raise ExportError() from exc


def build_results_csv(inp: CalculatorInput, include_score: bool = False) -> bytes:
    assessment = assess(inp)
    r = assessment.result
    row = {
        "MonthlyIncome": inp.monthly_income,
        "NonRentExpenses": inp.non_rent_expenses,
        "MonthlyDebt": inp.monthly_debt,
        "RentPercentage": inp.rent_percentage,
        "MaxRent": r.max_rent,
        "TotalCommitted": r.total_committed,
        "DisposableIncome": r.disposable_income,
        "RentTier": assessment.rent.tier,
        "DisposableTier": assessment.disposable.tier,
    }
    if include_score:
        row["ApprovalScore"] = assessment.score
        row["ScoreBand"] = assessment.score_details.band
    buf = io.StringIO()
    pd.DataFrame([row]).to_csv(buf, index=False)
    return buf.getvalue().encode("utf-8")
