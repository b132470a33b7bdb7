"""
User Interface Package

This package contains the console shells of the placement manager.

Components:
- LoginCLI: Login and company representative registration
- StudentCLI, CompanyRepCLI, CareerStaffCLI: Per-role command shells
- input_parsing: Argument parsing helpers shared by the shells
"""

from .cli import LoginCLI, RoleCLI
from .student_cli import StudentCLI
from .company_rep_cli import CompanyRepCLI
from .career_staff_cli import CareerStaffCLI

__all__ = ['LoginCLI', 'RoleCLI', 'StudentCLI', 'CompanyRepCLI', 'CareerStaffCLI']
