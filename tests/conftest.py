"""
Pytest Configuration and Shared Fixtures

This module provides the core test configuration and shared fixtures for the
Internship Placement Management System.

Key Components:
--------------
1. Path Configuration:
   - Configures Python path so the top-level packages import as in main.py

2. Test Environment:
   - Settings dict pointing at a per-test temporary data directory
   - A real LogsManager writing into that directory

3. Domain Fixtures:
   - A populated DataRepository (students, reps, staff)
   - A factory for APPROVED, currently open internships
   - Controllers wired to the repository with a fixed clock

Fixtures:
---------
- settings: Application settings rooted at tmp_path
- logs_manager: Initialized LogsManager (shut down after the test)
- repository: DataRepository with the standard users below
- make_internship: Factory adding an internship to a rep and the repository
- login_controller, student_controller, company_rep_controller, staff_controller

Standard users:
---------------
- U1234567A: year 1 CCDS student
- U7654321B: year 3 COE student
- bob@acme.com: approved representative of "ACME Corp"
- eve@newco.com: representative of "NewCo" awaiting approval
- staff01: career center staff

Usage:
------
```python
def test_something(student_controller, make_internship, repository):
    internship = make_internship(slots=1)
    student = repository.find_student("U1234567A")
    student_controller.apply(student, internship.internship_id)
```
"""

import sys
from datetime import date, timedelta
from pathlib import Path

import pytest

# Add the project root directory to Python path (using pathlib)
project_root = Path(__file__).parent.parent
sys.path.append(str(project_root))

from models import (  # noqa: E402
    CareerStaff,
    CompanyRep,
    Internship,
    InternshipLevel,
    InternshipStatus,
    Major,
    Student,
)
from orchestrator import (  # noqa: E402
    CareerStaffController,
    CompanyRepController,
    LoginController,
    StudentController,
)
from storage.logs_manager import LogsManager  # noqa: E402
from storage.repository import DataRepository  # noqa: E402

TODAY = date.today()


@pytest.fixture
def settings(tmp_path):
    """Provide application settings rooted at a temporary directory."""
    return {
        'system': {
            'data_dir': str(tmp_path / 'data'),
            'reports_dir': str(tmp_path / 'reports'),
            'log_level': 'DEBUG',
        },
        'logging': {
            'console_output': False,
        },
        'policy': {
            'allow_internship_redecision': False,
        },
    }


@pytest.fixture
def logs_manager(settings):
    manager = LogsManager(settings)
    manager.initialize()
    yield manager
    manager.shutdown()


@pytest.fixture
def repository():
    repo = DataRepository()
    repo.add_user(Student(user_id="U1234567A", name="Tan Wei Ling", year_of_study=1, major=Major.CCDS))
    repo.add_user(Student(user_id="U7654321B", name="Lim Jun Hao", year_of_study=3, major=Major.COE))
    repo.add_user(CompanyRep(
        user_id="bob@acme.com",
        name="Bob Tan",
        company_name="ACME Corp",
        department="HR",
        position="Recruiter",
        approved=True,
    ))
    repo.add_user(CompanyRep(
        user_id="eve@newco.com",
        name="Eve Ng",
        company_name="NewCo",
        department="Engineering",
        position="Manager",
    ))
    repo.add_user(CareerStaff(user_id="staff01", name="Sarah Koh", department="Career Services"))
    return repo


@pytest.fixture
def make_internship(repository):
    """Factory for internships that are APPROVED and open today unless overridden."""
    counter = {"n": 0}

    def _make(rep_id="bob@acme.com", slots=2, level=InternshipLevel.BASIC, majors=None, **overrides):
        counter["n"] += 1
        rep = repository.find_company_rep(rep_id)
        fields = {
            "internship_id": f"{''.join(rep.company_name.split())}-{rep_id.split('@')[0]}-{counter['n']}",
            "title": f"Intern Role {counter['n']}",
            "description": "Work on real projects",
            "level": level,
            "preferred_majors": majors if majors is not None else [],
            "open_date": TODAY - timedelta(days=5),
            "close_date": TODAY + timedelta(days=30),
            "company_name": rep.company_name,
            "company_rep_id": rep.user_id,
            "status": InternshipStatus.APPROVED,
            "number_of_slots": slots,
        }
        fields.update(overrides)
        internship = Internship(**fields)
        rep.add_internship(internship)
        repository.add_internship(internship)
        return internship

    return _make


@pytest.fixture
def login_controller(repository):
    return LoginController(repository)


@pytest.fixture
def student_controller(repository):
    return StudentController(repository, clock=lambda: TODAY)


@pytest.fixture
def company_rep_controller(repository):
    return CompanyRepController(repository)


@pytest.fixture
def staff_controller(repository):
    return CareerStaffController(repository)
