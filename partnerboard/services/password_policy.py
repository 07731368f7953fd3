"""
Password strength policy.

A password is accepted when it is at least MIN_LENGTH characters long and
contains an upper-case letter, a lower-case letter and a digit. Every failing
rule is reported, not just the first.
"""

import re
from typing import List, Pattern, Tuple

from partnerboard.models.schemas import PasswordValidation


MIN_LENGTH = 8

PASSWORD_REQUIREMENTS = "Legalább 8 karakter, nagybetű, kisbetű és szám."

_CHARACTER_RULES: Tuple[Tuple[Pattern[str], str], ...] = (
    (re.compile(r"[A-Z]"), "Tartalmazzon legalább egy nagybetűt"),
    (re.compile(r"[a-z]"), "Tartalmazzon legalább egy kisbetűt"),
    (re.compile(r"[0-9]"), "Tartalmazzon legalább egy számot"),
)


def validate_password(password: str) -> PasswordValidation:
    """
    Check a password against the policy.

    Examples:
        >>> validate_password("Secret123").isValid
        True
        >>> validate_password("short").errors[0]
        'Legalább 8 karakter hosszú legyen'
    """
    password = password or ""
    errors: List[str] = []

    if len(password) < MIN_LENGTH:
        errors.append(f"Legalább {MIN_LENGTH} karakter hosszú legyen")

    for pattern, message in _CHARACTER_RULES:
        if not pattern.search(password):
            errors.append(message)

    return PasswordValidation(isValid=not errors, errors=errors)
