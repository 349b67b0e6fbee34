import json

import pytest
from streamlit.testing.v1 import AppTest

from core.config import settings
from core.storage import CALCULATOR_KEY


def calculator_app():
    from core.state import get_session
    from ui.inputs import render_income_inputs, render_rent_slider, render_reset_button
    from ui.results import render_results_panel

    mgr = get_session()
    render_income_inputs(mgr)
    render_rent_slider(mgr)
    render_reset_button(mgr)
    render_results_panel(mgr)


@pytest.fixture
def session_file(tmp_path, monkeypatch):
    file = tmp_path / "session.json"
    monkeypatch.setattr(settings, "SESSION_FILE", str(file))
    return file


def _metric(at, label):
    return next(m.value for m in at.metric if m.label == label)


def test_inputs_drive_results(session_file):
    at = AppTest.from_function(calculator_app)
    at.run()
    assert _metric(at, "Maximum Recommended Rent") == "$0"

    at.text_input(key="income_input").set_value("$5000").run()
    at.text_input(key="expenses_input").set_value("1500").run()
    assert _metric(at, "Maximum Recommended Rent") == "$1,500"
    assert _metric(at, "Money Left Over") == "$2,000"
    assert _metric(at, "Rent Share of Income") == "30%"
    assert at.text_input(key="income_input").value == "5,000"

    stored = json.loads(json.loads(session_file.read_text())[CALCULATOR_KEY])
    assert stored["income"] == "5000"
    assert stored["expenses"] == "1500"
    assert stored["lastUpdated"]


def test_slider_and_debt_show_deficit(session_file):
    at = AppTest.from_function(calculator_app)
    at.run()
    at.text_input(key="income_input").set_value("3000").run()
    at.text_input(key="expenses_input").set_value("1200").run()
    at.text_input(key="debt_input").set_value("500").run()
    at.slider(key="rent_pct_input").set_value(45).run()
    assert _metric(at, "Maximum Recommended Rent") == "$1,350"
    assert _metric(at, "Money Left Over") == "-$50"
    assert any("Time to adjust something!" in c.value for c in at.caption)


def test_start_over_clears_inputs(session_file):
    at = AppTest.from_function(calculator_app)
    at.run()
    at.text_input(key="income_input").set_value("4000").run()
    at.button(key="reset_form").click().run()
    assert at.text_input(key="income_input").value == ""
    assert _metric(at, "Maximum Recommended Rent") == "$0"


def test_restores_saved_inputs(session_file):
    session_file.write_text(
        json.dumps({CALCULATOR_KEY: json.dumps({"income": "6000", "expenses": "", "debt": "", "rentPercentage": 25})})
    )
    at = AppTest.from_function(calculator_app)
    at.run()
    assert at.text_input(key="income_input").value == "6,000"
    assert at.slider(key="rent_pct_input").value == 25
    assert _metric(at, "Maximum Recommended Rent") == "$1,500"
