"""
Shared Enumerations

Status and classification enums used by every placement model. All enums are
`str` based so they serialize to their names in CSV files and compare equal
to plain strings.
"""

from enum import Enum


class UserRole(str, Enum):
    STUDENT = "STUDENT"
    COMPANY_REPRESENTATIVE = "COMPANY_REPRESENTATIVE"
    CAREER_CENTER_STAFF = "CAREER_CENTER_STAFF"


class Major(str, Enum):
    CCDS = "CCDS"
    COE = "COE"
    NBS = "NBS"
    SPMS = "SPMS"
    SBS = "SBS"
    WKWSCI = "WKWSCI"
    COHASS = "COHASS"

    @classmethod
    def parse(cls, raw: str) -> "Major":
        """Parse a major name case-insensitively, accepting the short 'WKW' form."""
        value = raw.strip().upper()
        if value == "WKW":
            return cls.WKWSCI
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown major: {raw!r}") from None


class InternshipLevel(str, Enum):
    BASIC = "BASIC"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"


class InternshipStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    FILLED = "FILLED"


class ApplicationStatus(str, Enum):
    PENDING = "PENDING"
    SUCCESSFUL = "SUCCESSFUL"
    UNSUCCESSFUL = "UNSUCCESSFUL"


class WithdrawalStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
