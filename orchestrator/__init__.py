"""
Orchestrator Package

This package contains the controllers that coordinate the placement workflow.
Each controller receives the shared DataRepository and applies the business
rules of one role on top of the domain models.

Components:
- LoginController: Authentication, password changes, representative sign-up
- StudentController: Applications, offer acceptance, withdrawal requests
- CompanyRepController: Internship authoring and application decisions
- CareerStaffController: Approvals, withdrawals, filtering and statistics
"""

from .base_controller import BaseController
from .login_controller import LoginController
from .student_controller import StudentController
from .company_rep_controller import CompanyRepController
from .career_staff_controller import CareerStaffController

__all__ = [
    'BaseController', 'LoginController', 'StudentController',
    'CompanyRepController', 'CareerStaffController',
]
