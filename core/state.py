import json
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

import streamlit as st

from core.calculators import calculate, clamp_rent_percentage, to_input
from core.config import settings
from core.errors import PersistenceError
from core.models import CalculatorInput, CalculatorResult, FormState
from core.storage import CALCULATOR_KEY, JsonFileStore, KeyValueStore

logger = logging.getLogger(__name__)

# ``st.session_state`` slot holding the per-browser-session manager.
MANAGER_KEY = "calculator_session"

FORM_FIELDS = ("income", "expenses", "debt", "rent_percentage")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionStateManager:
    """Form inputs plus their derived result, persisted on every change.

    ``load`` is called once at start-up and never writes. Every later
    ``update`` recomputes the result and saves a full snapshot with a
    timestamp. Storage problems fall back to defaults and are never raised.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str = CALCULATOR_KEY,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.store = store
        self.key = key
        self._clock = clock
        self.form = FormState()
        self.result = CalculatorResult()
        self.loaded = False

    @property
    def inputs(self) -> CalculatorInput:
        return to_input(self.form)

    def load(self) -> FormState:
        """Restore the last snapshot; absent or malformed data gives defaults."""
        self.form = self._read() or FormState()
        self.result = calculate(self.inputs)
        self.loaded = True
        return self.form

    def _read(self) -> Optional[FormState]:
        try:
            raw = self.store.get(self.key)
        except PersistenceError as exc:
            logger.debug("Ignoring unreadable calculator state: %s", exc)
            return None
        if raw is None:
            return None
        try:
            payload = json.loads(raw)
            if not isinstance(payload, dict):
                return None
            return FormState.model_validate(payload)
        except ValueError as exc:
            logger.debug("Ignoring malformed calculator state: %s", exc)
            return None

    def update(self, **changes: Any) -> CalculatorResult:
        """Apply form changes, recompute, and persist once loading is done."""
        unknown = set(changes) - set(FORM_FIELDS)
        if unknown:
            raise TypeError(f"unknown form fields: {sorted(unknown)}")
        if "rent_percentage" in changes:
            changes["rent_percentage"] = clamp_rent_percentage(changes["rent_percentage"])
        data = self.form.model_dump()
        data.update(changes)
        self.form = FormState.model_validate(data)
        self.result = calculate(self.inputs)
        if self.loaded:
            self.save()
        return self.result

    def reset(self) -> CalculatorResult:
        self.form = FormState()
        self.result = calculate(self.inputs)
        if self.loaded:
            self.save()
        return self.result

    def save(self) -> None:
        self.form.last_updated = self._clock().isoformat()
        payload = self.form.model_dump(by_alias=True)
        try:
            self.store.set(self.key, json.dumps(payload))
        except PersistenceError as exc:
            logger.debug("Could not persist calculator state: %s", exc)


def default_store() -> KeyValueStore:
    return JsonFileStore(settings.SESSION_FILE)


def get_session(store: Optional[KeyValueStore] = None) -> SessionStateManager:
    """Return this browser session's manager, loading it on first use."""
    mgr = st.session_state.get(MANAGER_KEY)
    if mgr is None:
        mgr = SessionStateManager(store or default_store())
        mgr.load()
        st.session_state[MANAGER_KEY] = mgr
    return mgr
