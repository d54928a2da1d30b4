from __future__ import annotations

import re
from typing import Optional

from ..core.exceptions import ValidationError

_NON_DIGITS = re.compile(r"[^\d+]")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def normalize_phone(value: object) -> Optional[str]:
    """Strip formatting from a phone number; empty input gives None.

    Spreadsheets often hand numbers back as floats (5551234567.0), so the
    trailing ".0" is dropped before the digits are kept.
    """
    if value is None:
        return None
    text = str(value).strip()
    if text.endswith(".0"):
        text = text[:-2]
    text = _NON_DIGITS.sub("", text)
    if not text.strip("+"):
        return None
    return text


def require_phone(value: object, field_name: str = "phone_number") -> str:
    phone = normalize_phone(value)
    if not phone:
        raise ValidationError(f"{field_name} is required")
    return phone
