"""Invoice Numbering

Invoice numbers have the form ``<code>-<year>-<sequence>`` with a zero-padded
sequence that restarts at 1 for every organization and year.
"""

import re
from typing import Iterable, Optional

DEFAULT_ORGANIZATION_CODE = "ORG"
DEFAULT_SEQUENCE_PADDING = 3

_NON_ALNUM = re.compile(r"[^A-Z0-9]")


def organization_code(organization_name: Optional[str], explicit_prefix: Optional[str] = None) -> str:
    """
    Short uppercase code identifying the organization in invoice numbers

    An explicit prefix wins. Otherwise the first 4 alphanumeric characters of
    the name are used, padded from "ORG" when shorter ("AB" -> "ABOR").
    """
    if explicit_prefix and explicit_prefix.strip():
        return explicit_prefix.strip().upper()
    if not organization_name or not organization_name.strip():
        return DEFAULT_ORGANIZATION_CODE

    code = _NON_ALNUM.sub("", organization_name.strip().upper())
    if len(code) >= 4:
        return code[:4]
    if code:
        return code + DEFAULT_ORGANIZATION_CODE[: 4 - len(code)]
    return DEFAULT_ORGANIZATION_CODE


def invoice_prefix(code: str, year: int) -> str:
    """Prefix shared by all invoice numbers of an organization and year"""
    return f"{code}-{year}-"


def parse_sequence(invoice_number: str, prefix: str) -> Optional[int]:
    """Numeric suffix after prefix, or None when the number does not match"""
    if not invoice_number.startswith(prefix):
        return None
    suffix = invoice_number[len(prefix):]
    if not (suffix.isascii() and suffix.isdigit()):
        return None
    return int(suffix)


def max_sequence(invoice_numbers: Iterable[str], prefix: str) -> int:
    """Highest numeric suffix among numbers with prefix, 0 if none"""
    sequences = (parse_sequence(number, prefix) for number in invoice_numbers)
    return max((seq for seq in sequences if seq is not None), default=0)


def format_invoice_number(prefix: str, sequence: int, padding: int = DEFAULT_SEQUENCE_PADDING) -> str:
    return f"{prefix}{sequence:0{padding}d}"


def next_invoice_number(
    prefix: str,
    existing_numbers: Iterable[str],
    padding: int = DEFAULT_SEQUENCE_PADDING,
) -> str:
    """Next number after the highest existing suffix, starting at 1"""
    return format_invoice_number(prefix, max_sequence(existing_numbers, prefix) + 1, padding)
