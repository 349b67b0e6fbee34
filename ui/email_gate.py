import streamlit as st
from core.config import settings
from core.email_gate import EmailGateController, GateState
from core.integrations import SupabaseClient
from core.state import SessionStateManager, default_store
from core.version import client_info

GATE_KEY = "email_gate"


def get_gate() -> EmailGateController:
    """Return this browser session's gate, reading the stored unlock once."""
    gate = st.session_state.get(GATE_KEY)
    if gate is None:
        gate = EmailGateController(SupabaseClient(), default_store(), client_info(settings.CLIENT_INFO))
        gate.load()
        st.session_state[GATE_KEY] = gate
    return gate


def _on_email_change(gate: EmailGateController) -> None:
    if gate.state is GateState.ERROR:
        gate.acknowledge()


def render_email_gate(gate: EmailGateController, mgr: SessionStateManager) -> bool:
    """Email capture form. Returns True once the gate is open."""
    if gate.unlocked:
        return True
    with st.container(border=True):
        st.subheader("Unlock Your Landlord Approval Score")
        st.write("Get your **Landlord Approval Score**, personal recommendations and expert budgeting advice.")
        email = st.text_input(
            "Email Address",
            key="gate_email",
            placeholder="you@example.com",
            disabled=gate.busy,
            on_change=_on_email_change,
            args=(gate,),
        )
        if st.button("Unlock My Full Report", key="gate_submit", disabled=gate.busy):
            gate.submit(email, session=mgr.inputs)
        if gate.state is GateState.ERROR:
            st.error(gate.message)
        elif gate.unlocked:
            st.success("Access Granted! Unlocking your personalized insights...")
        st.caption("We respect your privacy. No spam, just helpful rent tips.")
    return gate.unlocked
