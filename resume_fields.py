from __future__ import annotations  # Best-effort contact field extraction from resume text

import re
from typing import Dict

_EMAIL = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
_PHONE = re.compile(r"(\+?\d{1,3}[-.\s]?)?(\d{10}|\d{3}[-.\s]\d{3}[-.\s]\d{4}|\(\d{3}\)\s?\d{3}-\d{4})")
_NAME_HINT = re.compile(r"[A-Z][a-z]")
_NAME_SCAN_LINES = 8
_NAME_MAX_WORDS = 4


def _guess_name(text: str) -> str:  # First short, capitalized line near the top
    lines = [line.strip() for line in re.split(r"\r?\n", text) if line.strip()]
    for line in lines[:_NAME_SCAN_LINES]:
        if len(line.split(" ")) <= _NAME_MAX_WORDS and _NAME_HINT.search(line):
            return line
    return ""


def extract_fields(text: str) -> Dict[str, str]:  # Return text plus name/email/phone, empty when not found
    text = text or ""
    email = _EMAIL.search(text)
    phone = _PHONE.search(text)
    return {
        "text": text,
        "name": _guess_name(text),
        "email": email.group(0) if email else "",
        "phone": phone.group(0) if phone else "",
    }


__all__ = ["extract_fields"]
