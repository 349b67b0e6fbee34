import streamlit as st
from core.presets import RENTERS_GUIDE


def render_renters_guide():
    with st.expander("The Complete Renter's Guide: How Much Rent Can I Afford?"):
        st.write(
            "One in three American renters overspends on housing every month. Use the calculator above "
            "to get your number, then check the hidden costs below."
        )
        for question, answer in RENTERS_GUIDE:
            st.markdown(f"**{question}**")
            st.write(answer)
