"""Shared utilities used across the agenda package."""

import re


def normalize_phone(value: str) -> str:
    """Normalize a phone number by stripping everything except digits and a leading +.

    Examples:
        >>> normalize_phone("(11) 98765-4321")
        '11987654321'
        >>> normalize_phone("+55 11 98765 4321")
        '+5511987654321'
    """
    value = value.strip()
    if value.startswith("+"):
        return "+" + re.sub(r"[^\d]", "", value[1:])
    return re.sub(r"[^\d]", "", value)


def count_digits(value: str) -> int:
    return len(re.sub(r"[^\d]", "", value))
