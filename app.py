import logging

import streamlit as st
from streamlit.components.v1 import html

from core.config import settings
from core.presets import DISCLAIMER
from core.state import get_session
from core.version import __version__
from ui.email_gate import get_gate, render_email_gate
from ui.exports import render_exports
from ui.guide import render_renters_guide
from ui.inputs import render_income_inputs, render_rent_slider, render_reset_button
from ui.insights import render_insights
from ui.results import render_budget_chart, render_results_panel, render_upfront_costs

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def _persist_scroll():
    """Store and restore scroll position across reruns."""

    html(
        """
        <script>
        const pos = sessionStorage.getItem('scrollPos');
        if (pos) window.scrollTo(0, parseInt(pos));
        window.addEventListener('scroll', () => {
            sessionStorage.setItem('scrollPos', window.scrollY);
        });
        </script>
        """,
        height=0,
    )


st.set_page_config(page_title="Rent Affordability Calculator - How Much Rent Can I Afford?", layout="wide")
_persist_scroll()


def init_state():
    mgr = get_session()
    gate = get_gate()
    return mgr, gate


def render_page():
    mgr, gate = init_state()

    st.title("Rent Affordability Calculator")
    st.caption(
        "Finding a new home starts with knowing your budget. Get a clear, reliable estimate based on "
        "your income and expenses."
    )

    left, right = st.columns(2)
    with left:
        render_income_inputs(mgr)
        render_rent_slider(mgr)
        render_reset_button(mgr)
    with right:
        render_results_panel(mgr)
        render_budget_chart(mgr)
        render_upfront_costs(mgr)

    st.divider()
    unlocked = render_email_gate(gate, mgr)
    render_insights(mgr, unlocked)
    render_exports(mgr, unlocked)

    st.divider()
    st.subheader("You Are More Than Your Income")
    st.write(
        "Landlords often focus on income, but your financial responsibility and rental history matter "
        "just as much. Build a renter profile that highlights your strengths."
    )
    st.link_button("Create Your Renter Profile Today", settings.RENTAL_APPLICATION_URL)

    render_renters_guide()
    st.caption(DISCLAIMER)
    st.caption(f"Rent Affordability Calculator v{__version__} • US market guidelines • All amounts in USD")


render_page()
