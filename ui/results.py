import streamlit as st
from matplotlib.figure import Figure
from core.calculators import budget_breakdown, upfront_costs
from core.state import SessionStateManager
from core.tiers import disposable_status, rent_status
from core.utils import format_currency
from export.pdf_export import draw_budget_doughnut


def render_results_panel(mgr: SessionStateManager):
    """Hero numbers: max rent, money left over and the rent share."""
    res = mgr.result
    inp = mgr.inputs
    st.subheader("Your Numbers")
    cols = st.columns(3)
    cols[0].metric("Maximum Recommended Rent", f"${format_currency(res.max_rent)}")
    st.caption(
        f"Rent: {rent_status(inp.rent_percentage).message} • Based on {inp.rent_percentage}% "
        f"of your ${format_currency(inp.monthly_income)} income"
    )
    left = res.disposable_income
    cols[1].metric("Money Left Over", f"{'-' if left < 0 else ''}${format_currency(abs(left))}")
    if left >= 0:
        st.caption(f"Budget: {disposable_status(left).message} • For fun stuff, savings, and surprises")
    else:
        st.caption(f"Budget: {disposable_status(left).message} • Consider reducing expenses or increasing income")
    cols[2].metric("Rent Share of Income", f"{res.rent_to_income_ratio}%")
    st.caption("Financial experts suggest staying at or below 30%")
    return res


def render_budget_chart(mgr: SessionStateManager) -> None:
    data = budget_breakdown(mgr.inputs)
    st.subheader("Where Your Money Goes")
    if data is None:
        st.info("Fill in your income and expenses above to see the breakdown.")
        return
    fig = Figure(figsize=(4, 4))
    draw_budget_doughnut(fig.add_subplot(111), data)
    st.pyplot(fig)
    st.caption(
        f"Rent ${format_currency(data['rent'])} ({data['rent_pct']}%) • "
        f"Other ${format_currency(data['other_expenses'])} ({data['other_pct']}%) • "
        f"Available ${format_currency(data['remaining'])} ({data['remaining_pct']}%)"
    )


def render_upfront_costs(mgr: SessionStateManager) -> None:
    costs = upfront_costs(mgr.result.max_rent)
    if not costs:
        return
    with st.expander(f"Upfront Move-In Costs: ${format_currency(costs['total'])}"):
        st.markdown(
            f"- First month's rent: ${format_currency(costs['first_month'])}\n"
            f"- Security deposit: ${format_currency(costs['security_deposit'])}\n"
            f"- Application fees: ${format_currency(costs['application_fees'])}\n"
            f"- Moving essentials: ${format_currency(costs['moving_essentials'])}"
        )
        st.caption("Most landlords require a cashier's check for the rent and deposit upon lease signing.")
