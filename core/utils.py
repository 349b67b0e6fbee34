"""Assorted utility helpers."""
import re

NON_DIGITS = re.compile(r"[^0-9]")

# Longest amount kept from a form field ($999,999,999).
MAX_AMOUNT_DIGITS = 9


def digits_only(text) -> str:
    """Strip everything but ``0-9`` from user-typed text."""
    return NON_DIGITS.sub("", str(text))


def amount_digits(text) -> str:
    """Digits of an amount field without leading zeros, cut to ``MAX_AMOUNT_DIGITS``."""
    digits = digits_only(text)
    if not digits:
        return ""
    return digits.lstrip("0")[:MAX_AMOUNT_DIGITS] or "0"


def format_currency(value) -> str:
    """Format a whole-dollar amount with thousands separators (``5,000``)."""
    try:
        return f"{int(value):,}"
    except (TypeError, ValueError):
        return "0"


def mask_email(email) -> str:
    """Hide most of the local part so addresses don't end up in logs."""
    if not email or "@" not in str(email):
        return "***"
    local, _, domain = str(email).partition("@")
    return f"{local[:1]}***@{domain}"
