"""
Data Models Package

This package contains the Pydantic models of the placement domain together
with the shared enums and the error taxonomy.

Models:
- Users (Student, CompanyRep, CareerStaff)
- Internship postings and slot bookkeeping
- Applications and withdrawal requests
"""

from .enums import (
    ApplicationStatus,
    InternshipLevel,
    InternshipStatus,
    Major,
    UserRole,
    WithdrawalStatus,
)
from .errors import (
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
    PlacementError,
    UnauthorizedError,
)
from .application_models import Application, WithdrawalRequest, make_application_id
from .user_models import AnyUser, CareerStaff, CompanyRep, Student, User
from .internship_models import Internship

__all__ = [
    'ApplicationStatus', 'InternshipLevel', 'InternshipStatus', 'Major', 'UserRole',
    'WithdrawalStatus', 'InvalidArgumentError', 'InvalidStateError', 'NotFoundError',
    'PlacementError', 'UnauthorizedError', 'Application', 'WithdrawalRequest',
    'make_application_id', 'AnyUser', 'CareerStaff', 'CompanyRep', 'Student', 'User',
    'Internship',
]
