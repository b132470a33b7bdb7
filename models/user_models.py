"""
User Models

Pydantic models for the three roles of the placement system. Every user
carries a `role` discriminator; code that needs role-specific behaviour
matches on `user.role` instead of inspecting the class.

Passwords are plain strings compared verbatim. Owned collections
(a student's applications, a representative's internships) are private and
exposed as tuple snapshots; changes go through the methods below.
"""

from datetime import datetime
from typing import List, Literal, Optional, Tuple, Union, TYPE_CHECKING

from pydantic import BaseModel, Field, PrivateAttr, field_validator

from constants import PlacementConstants
from utils.regex_utils import RegexUtils
from .application_models import Application
from .enums import InternshipLevel, InternshipStatus, Major, UserRole

if TYPE_CHECKING:
    from .internship_models import Internship


class User(BaseModel):
    user_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    password: str = PlacementConstants.DEFAULT_PASSWORD
    registered_at: datetime = Field(default_factory=datetime.now)

    @field_validator("password", mode="before")
    @classmethod
    def _default_password(cls, value):
        if value is None or value == "":
            return PlacementConstants.DEFAULT_PASSWORD
        return value

    def check_password(self, password: str) -> bool:
        return self.password == password

    def change_password(self, old_password: str, new_password: str) -> bool:
        """Replace the password if `old_password` matches. Returns False otherwise."""
        if not self.check_password(old_password):
            return False
        self.password = new_password
        return True


class Student(User):
    role: Literal[UserRole.STUDENT] = UserRole.STUDENT
    year_of_study: int = Field(ge=1)
    major: Major
    accepted_application_id: Optional[str] = None

    _applications: List[Application] = PrivateAttr(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": "U1234567A",
                "name": "Tan Wei Ling",
                "year_of_study": 2,
                "major": "CCDS",
            }
        }

    @field_validator("user_id")
    @classmethod
    def _check_student_id(cls, value: str) -> str:
        if not RegexUtils.is_student_id(value):
            raise ValueError(f"Invalid student ID format: {value!r}")
        return value

    @property
    def applications(self) -> Tuple[Application, ...]:
        return tuple(self._applications)

    @property
    def accepted_application(self) -> Optional[Application]:
        if self.accepted_application_id is None:
            return None
        return self.find_application(self.accepted_application_id)

    def find_application(self, application_id: str) -> Optional[Application]:
        for application in self._applications:
            if application.application_id == application_id:
                return application
        return None

    def has_applied_to(self, internship_id: str) -> bool:
        return any(a.internship_id == internship_id for a in self._applications)

    def add_application(self, application: Application) -> None:
        self._applications.append(application)

    def active_application_count(self) -> int:
        return sum(1 for a in self._applications if a.is_active)

    def can_apply_more(self) -> bool:
        return (
            self.accepted_application_id is None
            and self.active_application_count() < PlacementConstants.MAX_APPLICATIONS
        )

    def is_eligible_for_level(self, level: InternshipLevel) -> bool:
        # Years 1-2 only BASIC, year 3+ any level
        if self.year_of_study <= PlacementConstants.BASIC_ONLY_MAX_YEAR:
            return level == InternshipLevel.BASIC
        return True

    def mark_accepted(self, application: Application) -> None:
        application.accepted = True
        self.accepted_application_id = application.application_id

    def clear_accepted(self) -> None:
        self.accepted_application_id = None


class CompanyRep(User):
    role: Literal[UserRole.COMPANY_REPRESENTATIVE] = UserRole.COMPANY_REPRESENTATIVE
    company_name: str = Field(min_length=1)
    department: str = ""
    position: str = ""
    approved: bool = False

    _internships: List["Internship"] = PrivateAttr(default_factory=list)

    @field_validator("user_id")
    @classmethod
    def _check_email_id(cls, value: str) -> str:
        value = value.strip()
        if not RegexUtils.is_email(value):
            raise ValueError(f"Invalid company representative ID (email expected): {value!r}")
        return value

    @property
    def internships(self) -> Tuple["Internship", ...]:
        return tuple(self._internships)

    def find_internship(self, internship_id: str) -> Optional["Internship"]:
        for internship in self._internships:
            if internship.internship_id == internship_id:
                return internship
        return None

    def add_internship(self, internship: "Internship") -> None:
        self._internships.append(internship)

    def remove_internship(self, internship: "Internship") -> None:
        self._internships.remove(internship)

    def active_internship_count(self) -> int:
        return sum(1 for i in self._internships if i.status != InternshipStatus.REJECTED)

    def can_create_more_internships(self) -> bool:
        return self.active_internship_count() < PlacementConstants.MAX_ACTIVE_INTERNSHIPS


class CareerStaff(User):
    role: Literal[UserRole.CAREER_CENTER_STAFF] = UserRole.CAREER_CENTER_STAFF
    department: str = ""

    @field_validator("user_id")
    @classmethod
    def _check_staff_id(cls, value: str) -> str:
        if not RegexUtils.is_staff_id(value):
            raise ValueError(f"Invalid staff ID: {value!r}")
        return value


AnyUser = Union[Student, CompanyRep, CareerStaff]
