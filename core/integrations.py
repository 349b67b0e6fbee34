"""Remote services: Supabase RPC for email capture and session saves.

Both stored procedures return a list of rows; only the first row is read and
it is validated against a strict schema. Anything that does not match is a
:class:`~core.errors.RemoteError` so the caller fails closed. Without
``SUPABASE_URL``/``SUPABASE_ANON_KEY`` the client runs in offline mode and
every RPC fails with a ``RemoteError``.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError as SchemaError

from core.calculators import calculate, session_metadata
from core.config import Settings, settings as default_settings
from core.errors import NetworkError, RemoteError
from core.models import CalculatorInput, EmailAccessResult, SessionSaveResult, SyncResult
from core.utils import mask_email

logger = logging.getLogger(__name__)

OFFLINE_MESSAGE = "Supabase not configured (Offline Mode)"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class SupabaseClient:
    """Thin synchronous wrapper around the PostgREST ``/rpc`` endpoint."""

    def __init__(self, config: Optional[Settings] = None, http: Optional[httpx.Client] = None) -> None:
        self.config = config or default_settings
        self._http = http
        if not self.config.supabase_configured:
            logger.warning("Missing Supabase settings. Running in offline mode.")

    @property
    def offline(self) -> bool:
        return not self.config.supabase_configured

    def _client(self) -> httpx.Client:
        if self._http is None:
            self._http = httpx.Client(
                base_url=self.config.SUPABASE_URL.rstrip("/"),
                headers={
                    "apikey": self.config.SUPABASE_ANON_KEY,
                    "Authorization": f"Bearer {self.config.SUPABASE_ANON_KEY}",
                    "Content-Type": "application/json",
                },
            )
        return self._http

    def rpc(self, function: str, params: dict) -> Any:
        """Call a stored procedure and return the decoded JSON body."""
        if self.offline:
            raise RemoteError(OFFLINE_MESSAGE)
        try:
            response = self._client().post(f"/rest/v1/rpc/{function}", json=params)
        except httpx.HTTPError as exc:
            logger.error("RPC %s failed: %s", function, exc)
            raise NetworkError() from exc
        if response.is_error:
            logger.error("RPC %s returned HTTP %s", function, response.status_code)
            raise RemoteError(_error_message(response))
        try:
            return response.json()
        except ValueError as exc:
            raise RemoteError("Invalid response from server") from exc

    def submit_email_for_access(self, email: str, client_info: Optional[str] = None) -> EmailAccessResult:
        user_email = normalize_email(email)
        data = self.rpc(
            "submit_email_for_access",
            {"user_email": user_email, "user_agent": client_info},
        )
        result = _first_row(data, EmailAccessResult)
        logger.info(
            "Email registration for %s: success=%s existing=%s",
            mask_email(user_email),
            result.success,
            result.is_existing,
        )
        return result

    def save_calculator_session(
        self,
        email: str,
        inp: CalculatorInput,
        client_info: Optional[str] = None,
    ) -> SessionSaveResult:
        res = calculate(inp)
        data = self.rpc(
            "save_calculator_session",
            {
                "user_email": normalize_email(email),
                "monthly_income": inp.monthly_income,
                "non_rent_expenses": inp.non_rent_expenses,
                "rent_percentage": inp.rent_percentage,
                "calculated_rent": res.max_rent,
                "disposable_income": res.disposable_income,
                "session_data": session_metadata(inp, client_info),
            },
        )
        return _first_row(data, SessionSaveResult)

    def close(self) -> None:
        if self._http is not None:
            self._http.close()


def sync_to_google_sheets(email: str) -> SyncResult:
    """Placeholder for the spreadsheet sync, which needs a server-side job."""
    logger.info("Google Sheets sync requested for %s", mask_email(email))
    return SyncResult(success=True, message="Queued for Google Sheets sync")


def _first_row(data: Any, model):
    if not isinstance(data, list) or not data or not isinstance(data[0], dict):
        raise RemoteError("Invalid response from server")
    try:
        return model.model_validate(data[0])
    except SchemaError as exc:
        logger.error("Unexpected RPC row shape: %s", exc)
        raise RemoteError("Invalid response from server") from exc


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("message"), str) and body["message"]:
        return body["message"]
    return "Database error. Please try again."
