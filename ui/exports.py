import streamlit as st
from core.errors import ExportError
from core.state import SessionStateManager
from export.pdf_export import build_results_csv, build_results_pdf


def render_exports(mgr: SessionStateManager, unlocked: bool) -> None:
    inp = mgr.inputs
    if not inp.monthly_income:
        return
    st.subheader("Save Your Results")
    c1, c2 = st.columns(2)
    c1.download_button(
        "Download CSV Summary",
        data=build_results_csv(inp, include_score=unlocked),
        file_name="rent_affordability.csv",
        mime="text/csv",
    )
    if c2.button("Export PDF Report", key="export_pdf"):
        try:
            pdf = build_results_pdf(inp, include_score=unlocked)
        except ExportError as exc:
            st.error(exc.message)
        else:
            c2.download_button(
                "Download PDF",
                data=pdf,
                file_name="rent_affordability_report.pdf",
                mime="application/pdf",
            )
