"""
Application & Withdrawal Models

Pydantic models for the application lifecycle:
- Application: created PENDING by a student, decided SUCCESSFUL/UNSUCCESSFUL
  by the company, confirmed (accepted) by the student.
- WithdrawalRequest: raised by a student, resolved by career staff.

Both refer to students and internships by id only; the repository resolves
the handles.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from constants import PlacementConstants
from .enums import ApplicationStatus, WithdrawalStatus


def make_application_id(student_id: str, internship_id: str) -> str:
    return f"{student_id}-{internship_id}"


class Application(BaseModel):
    application_id: str = Field(min_length=1)
    student_id: str = Field(min_length=1)
    internship_id: str = Field(min_length=1)

    applied_at: datetime = Field(default_factory=datetime.now)
    status: ApplicationStatus = ApplicationStatus.PENDING
    # Student confirmation; independent of the company's decision in `status`
    accepted: bool = False

    class Config:
        json_schema_extra = {
            "example": {
                "application_id": "U1234567A-ACME-bob-1",
                "student_id": "U1234567A",
                "internship_id": "ACME-bob-1",
                "status": "PENDING",
                "accepted": False,
            }
        }

    @property
    def is_active(self) -> bool:
        """PENDING and SUCCESSFUL applications count towards the student's cap."""
        return self.status in (ApplicationStatus.PENDING, ApplicationStatus.SUCCESSFUL)

    def update_status(self, status: ApplicationStatus) -> None:
        self.status = status

    def withdraw(self) -> None:
        self.accepted = False
        self.status = ApplicationStatus.UNSUCCESSFUL


class WithdrawalRequest(BaseModel):
    request_id: str = Field(min_length=1)
    application_id: str = Field(min_length=1)
    student_id: str = Field(min_length=1)
    internship_id: str = Field(min_length=1)

    requested_at: datetime = Field(default_factory=datetime.now)
    status: WithdrawalStatus = WithdrawalStatus.PENDING

    @classmethod
    def for_application(cls, application: Application) -> "WithdrawalRequest":
        return cls(
            request_id=PlacementConstants.WITHDRAWAL_PREFIX + application.application_id,
            application_id=application.application_id,
            student_id=application.student_id,
            internship_id=application.internship_id,
        )

    @property
    def is_pending(self) -> bool:
        return self.status == WithdrawalStatus.PENDING
