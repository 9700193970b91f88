from __future__ import annotations

import re

YEAR_MARKER = "年"
MONTH_MARKER = "月"
DAY_MARKER = "日"
DELIMITER = "/"
MAX_FIELD_DIGITS = 8

# U+FF01..U+FF5E map one-to-one onto printable ASCII.
FULLWIDTH_ASCII_TABLE = str.maketrans(
    {chr(code): chr(code - 0xFEE0) for code in range(0xFF01, 0xFF5F)}
)
WHITESPACE_PATTERN = re.compile(r"[\s　]+")
ALT_DELIMITER_PATTERN = re.compile(r"[-.]")


def is_ascii_number(field: str) -> bool:
    return 0 < len(field) <= MAX_FIELD_DIGITS and field.isascii() and field.isdigit()


def fold_fullwidth(text: str) -> str:
    return text.translate(FULLWIDTH_ASCII_TABLE)


def has_month_marker(text: str) -> bool:
    return MONTH_MARKER in text


def normalise_date_text(text: str) -> str:
    """Rewrite a raw date string into the half-width ``Y/M/D`` shape.

    Whitespace is dropped, full-width ASCII is folded, ``年`` and ``月`` become
    ``/`` and ``日`` is removed. ``-`` and ``.`` are treated as ``/`` too.
    Never fails; strings that are not dates come out mangled and are rejected
    downstream.
    """
    if not text:
        return ""

    cleaned = WHITESPACE_PATTERN.sub("", text)
    cleaned = fold_fullwidth(cleaned)
    cleaned = cleaned.replace(YEAR_MARKER, DELIMITER)
    cleaned = cleaned.replace(MONTH_MARKER, DELIMITER)
    cleaned = cleaned.replace(DAY_MARKER, "")
    return ALT_DELIMITER_PATTERN.sub(DELIMITER, cleaned)
