"""Email gate in front of the score and advice panels.

States and the events that move between them::

    locked     --submit (valid)-->    submitting
    locked     --submit (invalid)-->  error        (no remote call)
    submitting --remote success-->    unlocked     (email persisted)
    submitting --remote failure-->    error
    error      --acknowledge-->       locked
    error      --submit-->            same as from locked

A validated email found in storage at start-up opens the gate straight away.
"""
from __future__ import annotations

import enum
import logging
import re
from typing import Optional

from core.errors import NetworkError, PersistenceError, RemoteError, RentCalculatorError, ValidationError
from core.integrations import SupabaseClient, normalize_email, sync_to_google_sheets
from core.models import CalculatorInput
from core.storage import UNLOCKED_EMAIL_KEY, KeyValueStore
from core.utils import mask_email

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def validate_email(email) -> bool:
    if not email:
        return False
    return bool(EMAIL_RE.match(str(email).strip()))


class GateState(str, enum.Enum):
    LOCKED = "locked"
    SUBMITTING = "submitting"
    UNLOCKED = "unlocked"
    ERROR = "error"


class GateEvent(str, enum.Enum):
    SUBMIT_VALID = "submit_valid"
    SUBMIT_INVALID = "submit_invalid"
    REMOTE_SUCCESS = "remote_success"
    REMOTE_FAILURE = "remote_failure"
    ACKNOWLEDGE = "acknowledge"


TRANSITIONS = {
    (GateState.LOCKED, GateEvent.SUBMIT_VALID): GateState.SUBMITTING,
    (GateState.LOCKED, GateEvent.SUBMIT_INVALID): GateState.ERROR,
    (GateState.ERROR, GateEvent.SUBMIT_VALID): GateState.SUBMITTING,
    (GateState.ERROR, GateEvent.SUBMIT_INVALID): GateState.ERROR,
    (GateState.SUBMITTING, GateEvent.REMOTE_SUCCESS): GateState.UNLOCKED,
    (GateState.SUBMITTING, GateEvent.REMOTE_FAILURE): GateState.ERROR,
    (GateState.ERROR, GateEvent.ACKNOWLEDGE): GateState.LOCKED,
}


class InvalidTransition(RentCalculatorError):
    pass


class EmailGateController:
    def __init__(self, client: SupabaseClient, store: KeyValueStore, client_info: Optional[str] = None) -> None:
        self.client = client
        self.store = store
        self.client_info = client_info
        self.state = GateState.LOCKED
        self.message = ""
        self.email: Optional[str] = None
        self.is_existing = False

    @property
    def unlocked(self) -> bool:
        return self.state is GateState.UNLOCKED

    @property
    def busy(self) -> bool:
        """True while a submission is outstanding.

        ``submit`` runs synchronously within one Streamlit rerun, so widgets
        never render in this state today. The submit control still binds
        ``disabled`` to it for a client that submits in the background.
        """
        return self.state is GateState.SUBMITTING

    def _fire(self, event: GateEvent) -> GateState:
        nxt = TRANSITIONS.get((self.state, event))
        if nxt is None:
            raise InvalidTransition(f"{event.value} not allowed while {self.state.value}")
        logger.debug("Email gate %s --%s--> %s", self.state.value, event.value, nxt.value)
        self.state = nxt
        return nxt

    def load(self) -> GateState:
        """Open the gate if a previously validated email is stored."""
        try:
            stored = self.store.get(UNLOCKED_EMAIL_KEY)
        except PersistenceError as exc:
            logger.debug("Ignoring unreadable unlock flag: %s", exc)
            stored = None
        if stored and validate_email(stored):
            self.email = normalize_email(stored)
            self.state = GateState.UNLOCKED
        return self.state

    def acknowledge(self) -> GateState:
        self.message = ""
        return self._fire(GateEvent.ACKNOWLEDGE)

    def submit(self, email: str, session: Optional[CalculatorInput] = None) -> GateState:
        """Validate ``email`` and register it remotely.

        The optional ``session`` is saved against the email once access is
        granted; that save and the spreadsheet sync are best effort.
        """
        if self.state is GateState.UNLOCKED:
            return self.state
        if not validate_email(email):
            self.message = ValidationError.user_message
            return self._fire(GateEvent.SUBMIT_INVALID)

        self._fire(GateEvent.SUBMIT_VALID)
        self.message = ""
        normalized = normalize_email(email)
        try:
            result = self.client.submit_email_for_access(normalized, self.client_info)
        except (RemoteError, NetworkError) as exc:
            self.message = exc.message
            return self._fire(GateEvent.REMOTE_FAILURE)
        except Exception:
            logger.exception("Email submission error")
            self.message = NetworkError.user_message
            return self._fire(GateEvent.REMOTE_FAILURE)

        if not result.success:
            self.message = result.message or RemoteError.user_message
            return self._fire(GateEvent.REMOTE_FAILURE)

        self.email = normalized
        self.is_existing = result.is_existing
        self.message = result.message
        try:
            self.store.set(UNLOCKED_EMAIL_KEY, normalized)
        except PersistenceError as exc:
            logger.debug("Could not persist unlock flag: %s", exc)
        self._fire(GateEvent.REMOTE_SUCCESS)
        self._after_unlock(normalized, session)
        return self.state

    def _after_unlock(self, email: str, session: Optional[CalculatorInput]) -> None:
        if session is not None and session.monthly_income:
            try:
                saved = self.client.save_calculator_session(email, session, self.client_info)
                if not saved.success:
                    logger.warning("Calculator session not saved for %s: %s", mask_email(email), saved.message)
            except RentCalculatorError as exc:
                logger.warning("Calculator session save failed for %s: %s", mask_email(email), exc)
        sync_to_google_sheets(email)
