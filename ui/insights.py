import streamlit as st
from core.advice import build_financial_advice, build_recommendations
from core.state import SessionStateManager
from core.tiers import assess


def render_locked_preview() -> None:
    st.subheader("Your Personal Recommendations")
    st.caption("Unlock smart, personalized advice based on your specific budget and goals.")
    st.info("Landlord Approval Score • Personal Recommendations • Expert Financial Coaching")


def render_approval_score(mgr: SessionStateManager) -> None:
    a = assess(mgr.inputs)
    st.subheader("Landlord Approval Score")
    st.progress(a.score / 100)
    st.metric("Approval Score", f"{a.score}/100")
    st.markdown(f"**{a.score_details.label}** - {a.score_details.description}")
    st.caption(a.insight)


def render_recommendations(mgr: SessionStateManager) -> None:
    st.subheader("Your Personal Recommendations")
    recs = build_recommendations(mgr.inputs)
    if not recs:
        st.info("Fill in your income and expenses above to get personalized advice!")
        return
    for r in recs:
        body = f"**{r.title}** {r.description}\n\nTip: {r.action}"
        if r.severity == "error":
            st.error(body)
        elif r.severity == "warning":
            st.warning(body)
        elif r.severity == "success":
            st.success(body)
        else:
            st.info(body)


def render_financial_advice(mgr: SessionStateManager) -> None:
    st.subheader("Your Financial Coach Says...")
    items = build_financial_advice(mgr.inputs)
    if not items:
        st.info("Enter your income and expenses to get personalized financial advice!")
        return
    for item in items:
        with st.expander(f"{item.category.upper()}: {item.title}", expanded=True):
            st.write(item.content)


def render_insights(mgr: SessionStateManager, unlocked: bool) -> None:
    if not unlocked:
        render_locked_preview()
        return
    render_approval_score(mgr)
    render_recommendations(mgr)
    render_financial_advice(mgr)
