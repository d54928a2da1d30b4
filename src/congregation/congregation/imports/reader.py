"""Spreadsheet parsing for the people import.

Header names vary between whoever exported the sheet, so columns are matched
loosely ("Phone", "Mobile Number", "phone_number" all mean the same).
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import IO, Iterator, Union

import pandas as pd

from ..common.validators import normalize_phone
from ..core.exceptions import ValidationError
from .model import ImportRow

_ALIASES = {
    "phone": "phone_number",
    "phone_number": "phone_number",
    "phone_no": "phone_number",
    "mobile": "phone_number",
    "mobile_number": "phone_number",
    "cell": "phone_number",
    "first": "first_name",
    "first_name": "first_name",
    "firstname": "first_name",
    "given_name": "first_name",
    "last": "last_name",
    "last_name": "last_name",
    "lastname": "last_name",
    "surname": "last_name",
    "name": "full_name",
    "full_name": "full_name",
    "email": "email",
    "e_mail": "email",
    "email_address": "email",
}

Source = Union[str, Path, IO]


def _canonical(column: object) -> str:
    key = re.sub(r"[^a-z0-9]+", "_", str(column).strip().lower()).strip("_")
    return _ALIASES.get(key, key)


def read_sheet(source: Source, *, filename: str | None = None) -> pd.DataFrame:
    name = (filename or str(getattr(source, "name", source))).lower()
    if name.endswith(".csv"):
        df = pd.read_csv(source, dtype=str)
    elif name.endswith((".xlsx", ".xls")):
        df = pd.read_excel(source, dtype=str)
    else:
        raise ValidationError(f"unsupported spreadsheet type: {filename or name}")

    df = df.rename(columns=_canonical).fillna("")
    if "phone_number" not in df.columns:
        raise ValidationError("spreadsheet has no phone number column")
    return df


def _cell(record: dict, key: str) -> str:
    return str(record.get(key, "") or "").strip()


def iter_rows(df: pd.DataFrame) -> Iterator[ImportRow]:
    # Row numbers match what the user sees in a spreadsheet (header is row 1).
    for offset, record in enumerate(df.to_dict("records"), start=2):
        first, last = _cell(record, "first_name"), _cell(record, "last_name")
        if not first and _cell(record, "full_name"):
            first, _, last = _cell(record, "full_name").partition(" ")
        yield ImportRow(
            row_number=offset,
            first_name=first,
            last_name=last.strip(),
            phone_number=normalize_phone(record.get("phone_number")),
            email=_cell(record, "email") or None,
        )
