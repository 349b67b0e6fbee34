import streamlit as st
from core.calculators import parse_amount
from core.models import RENT_PCT_MAX, RENT_PCT_MIN
from core.state import SessionStateManager
from core.tiers import rent_tier
from core.utils import format_currency

# widget key -> form field
AMOUNT_FIELDS = {
    "income_input": "income",
    "debt_input": "debt",
    "expenses_input": "expenses",
}

_SLIDER_COPY = {
    "conservative": "Excellent - Within recommended range",
    "moderate": "Moderate - Consider reducing if possible",
    "high_risk": "High - May strain your budget",
}


def _display(raw: str) -> str:
    return format_currency(raw) if raw else ""


def _on_amount_change(mgr: SessionStateManager, widget_key: str) -> None:
    field = AMOUNT_FIELDS[widget_key]
    mgr.update(**{field: st.session_state[widget_key]})
    st.session_state[widget_key] = _display(getattr(mgr.form, field))


def _on_slider_change(mgr: SessionStateManager) -> None:
    mgr.update(rent_percentage=st.session_state["rent_pct_input"])


def render_income_inputs(mgr: SessionStateManager) -> None:
    st.subheader("Your Monthly Money")
    labels = {
        "income_input": ("Monthly After-Tax Income", "5,000", "Your take-home pay after taxes and deductions"),
        "debt_input": ("Monthly Debt Payments", "500", "Credit cards, student loans, car payments, etc."),
        "expenses_input": ("Other Monthly Expenses", "1,500", "Food, utilities, transportation, subscriptions, etc."),
    }
    for key, (label, placeholder, help_text) in labels.items():
        st.session_state.setdefault(key, _display(getattr(mgr.form, AMOUNT_FIELDS[key])))
        st.text_input(
            label,
            key=key,
            placeholder=placeholder,
            help=help_text,
            on_change=_on_amount_change,
            args=(mgr, key),
        )
    income = parse_amount(mgr.form.income)
    committed = parse_amount(mgr.form.expenses) + parse_amount(mgr.form.debt)
    if income and committed:
        st.caption(f"Left before rent: ${format_currency(max(0, income - committed))}")


def render_rent_slider(mgr: SessionStateManager) -> None:
    st.subheader("Percentage of Income for Rent")
    st.session_state.setdefault("rent_pct_input", mgr.form.rent_percentage)
    st.slider(
        "Rent share of income (%)",
        min_value=RENT_PCT_MIN,
        max_value=RENT_PCT_MAX,
        key="rent_pct_input",
        on_change=_on_slider_change,
        args=(mgr,),
    )
    pct = mgr.form.rent_percentage
    st.caption(f"{pct}% of income: ${format_currency(mgr.result.max_rent)} / month • {_SLIDER_COPY[rent_tier(pct)]}")


def _on_reset(mgr: SessionStateManager) -> None:
    mgr.reset()
    for key in (*AMOUNT_FIELDS, "rent_pct_input"):
        st.session_state.pop(key, None)


def render_reset_button(mgr: SessionStateManager) -> None:
    st.button("Start Over", key="reset_form", on_click=_on_reset, args=(mgr,))
