"""
Regex Pattern Utilities

Identifier formats for the three user roles. Kept synchronous: regex checks
are CPU-bound and called from pydantic validators and the CLI alike.

- Student IDs: 'U' + 7 digits + one uppercase letter (e.g. U1234567A)
- Company representative IDs: their company email address
- Career staff IDs: 3-10 alphanumeric characters
"""

import re
from typing import Pattern


class RegexPatterns:
    """Holds the identifier patterns used across the placement system."""

    STUDENT_ID = r'^U\d{7}[A-Z]$'
    EMAIL = r'^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$'
    STAFF_ID = r'^[a-zA-Z0-9]{3,10}$'


class RegexUtils:
    """Compiled-pattern helpers for identifier validation."""

    _student_id: Pattern = re.compile(RegexPatterns.STUDENT_ID)
    _email: Pattern = re.compile(RegexPatterns.EMAIL)
    _staff_id: Pattern = re.compile(RegexPatterns.STAFF_ID)

    @classmethod
    def is_student_id(cls, value: str) -> bool:
        return bool(value) and cls._student_id.match(value) is not None

    @classmethod
    def is_email(cls, value: str) -> bool:
        return bool(value) and cls._email.match(value.strip()) is not None

    @classmethod
    def is_staff_id(cls, value: str) -> bool:
        return bool(value) and cls._staff_id.match(value) is not None

    @staticmethod
    def email_local_part(email: str) -> str:
        """Return the part of an email address before '@'."""
        return email.split("@", 1)[0]
