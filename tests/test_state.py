import json
from datetime import datetime, timezone

import pytest
import streamlit as st
from core import state
from core.errors import PersistenceError
from core.models import FormState
from core.storage import CALCULATOR_KEY, JsonFileStore, MemoryStore


def _clock():
    return datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def test_malformed_json_falls_back_to_defaults():
    store = MemoryStore({CALCULATOR_KEY: "{not json"})
    mgr = state.SessionStateManager(store)
    form = mgr.load()
    assert (form.income, form.expenses, form.debt, form.rent_percentage) == ("", "", "", 30)
    assert mgr.result.max_rent == 0


def test_wrong_shape_falls_back_to_defaults():
    for raw in ("[1, 2]", json.dumps({"rentPercentage": 95}), json.dumps({"income": ["x"]})):
        mgr = state.SessionStateManager(MemoryStore({CALCULATOR_KEY: raw}))
        assert mgr.load() == FormState()


def test_load_restores_snapshot_without_writing():
    raw = json.dumps(
        {"income": "5000", "expenses": "1500", "debt": "", "rentPercentage": 35, "lastUpdated": "x"}
    )
    store = MemoryStore({CALCULATOR_KEY: raw})
    mgr = state.SessionStateManager(store)
    mgr.load()
    assert mgr.form.income == "5000"
    assert mgr.result.max_rent == 1750
    assert store.data[CALCULATOR_KEY] == raw


def test_update_before_load_does_not_persist():
    store = MemoryStore()
    mgr = state.SessionStateManager(store)
    mgr.update(income="5000")
    assert mgr.result.max_rent == 1500
    assert store.data == {}


def test_update_persists_snapshot_with_timestamp():
    store = MemoryStore()
    mgr = state.SessionStateManager(store, clock=_clock)
    mgr.load()
    mgr.update(income="$5,000", expenses="1500", rent_percentage=99)
    saved = json.loads(store.data[CALCULATOR_KEY])
    assert saved == {
        "income": "5000",
        "expenses": "1500",
        "debt": "",
        "rentPercentage": 60,
        "lastUpdated": _clock().isoformat(),
    }
    assert mgr.result.max_rent == 3000


def test_update_rejects_unknown_fields():
    mgr = state.SessionStateManager(MemoryStore())
    with pytest.raises(TypeError):
        mgr.update(salary="1")


def test_reset_clears_form():
    store = MemoryStore()
    mgr = state.SessionStateManager(store)
    mgr.load()
    mgr.update(income="4000", debt="200", rent_percentage=40)
    mgr.reset()
    assert mgr.form.income == ""
    assert mgr.form.rent_percentage == 30
    assert json.loads(store.data[CALCULATOR_KEY])["income"] == ""


def test_unreadable_store_does_not_raise(tmp_path):
    file = tmp_path / "session.json"
    file.write_text("garbage")
    mgr = state.SessionStateManager(JsonFileStore(str(file)))
    assert mgr.load() == FormState()
    mgr.update(income="3000")
    assert json.loads(json.loads(file.read_text())[CALCULATOR_KEY])["income"] == "3000"


def test_get_session_uses_session_file(tmp_path, monkeypatch):
    file = tmp_path / "session.json"
    file.write_text(json.dumps({CALCULATOR_KEY: json.dumps({"income": "6000", "rentPercentage": 25})}))
    monkeypatch.setattr(state.settings, "SESSION_FILE", str(file))
    st.session_state.clear()
    mgr = state.get_session()
    assert mgr.inputs.monthly_income == 6000
    assert mgr.result.max_rent == 1500
    assert state.get_session() is mgr
    st.session_state.clear()


class ReadOnlyStore(MemoryStore):
    def set(self, key, value):
        raise PersistenceError("disk full")


@pytest.mark.parametrize(
    "raw",
    ['{"income": Infinity}', '{"expenses": -Infinity}', '{"debt": NaN}', '{"income": 1e400}'],
)
def test_non_finite_amounts_fall_back_to_defaults(raw):
    mgr = state.SessionStateManager(MemoryStore({CALCULATOR_KEY: raw}))
    assert mgr.load() == FormState()
    assert mgr.result.max_rent == 0


def test_overlong_stored_amount_is_capped():
    raw = json.dumps({"income": "9" * 5000, "rentPercentage": 30})
    mgr = state.SessionStateManager(MemoryStore({CALCULATOR_KEY: raw}))
    mgr.load()
    assert mgr.form.income == "999999999"
    assert mgr.result.max_rent == 300000000


def test_overlong_typed_amount_is_capped():
    mgr = state.SessionStateManager(MemoryStore())
    mgr.load()
    mgr.update(income="9" * 5000, expenses="1" * 20)
    assert mgr.form.income == "999999999"
    assert mgr.inputs.non_rent_expenses == 111111111


def test_failed_write_is_ignored():
    mgr = state.SessionStateManager(ReadOnlyStore())
    mgr.load()
    result = mgr.update(income="5000", expenses="1500")
    assert result.max_rent == 1500
    assert result.disposable_income == 2000
    assert mgr.reset().max_rent == 0
