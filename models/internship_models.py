"""
Internship Models

Pydantic model for an internship posting and its slot bookkeeping.

Slot rules:
- confirmed slots are the students holding an accepted placement
  (`intern_ids`), so the count can never drift from the intern list
- an APPROVED internship flips to FILLED when the last slot is taken and
  back to APPROVED when a slot is released
- an empty preferred-majors list means the internship is open to all majors
"""

from datetime import date
from typing import List, Optional, Tuple, TYPE_CHECKING

from pydantic import BaseModel, Field, PrivateAttr, field_validator, model_validator

from constants import PlacementConstants
from .application_models import Application
from .enums import InternshipLevel, InternshipStatus, Major
from .errors import InvalidArgumentError, InvalidStateError

if TYPE_CHECKING:
    from .user_models import Student


class Internship(BaseModel):
    internship_id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    level: InternshipLevel = InternshipLevel.BASIC
    preferred_majors: Tuple[Major, ...] = ()
    open_date: date
    close_date: date
    company_name: str = Field(min_length=1)
    company_rep_id: Optional[str] = None

    status: InternshipStatus = InternshipStatus.PENDING
    number_of_slots: int = Field(
        default=PlacementConstants.DEFAULT_SLOTS,
        ge=PlacementConstants.MIN_SLOTS,
        le=PlacementConstants.MAX_SLOTS,
    )
    visible: bool = True

    _applications: List[Application] = PrivateAttr(default_factory=list)
    _intern_ids: List[str] = PrivateAttr(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "internship_id": "ACME-bob-1",
                "title": "Backend Intern",
                "description": "Build internal APIs",
                "level": "BASIC",
                "preferred_majors": ["CCDS", "COE"],
                "open_date": "2025-01-01",
                "close_date": "2025-03-01",
                "company_name": "ACME",
                "number_of_slots": 2,
            }
        }

    @field_validator("preferred_majors")
    @classmethod
    def _dedupe_majors(cls, majors: Tuple[Major, ...]) -> Tuple[Major, ...]:
        return tuple(dict.fromkeys(majors))

    @model_validator(mode="after")
    def _check_dates(self):
        if self.close_date <= self.open_date:
            raise ValueError("Close date must be after open date")
        return self

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    @property
    def applications(self) -> Tuple[Application, ...]:
        return tuple(self._applications)

    @property
    def intern_ids(self) -> Tuple[str, ...]:
        return tuple(self._intern_ids)

    @property
    def confirmed_slots(self) -> int:
        return len(self._intern_ids)

    @property
    def has_free_slot(self) -> bool:
        return self.confirmed_slots < self.number_of_slots

    def find_application(self, application_id: str) -> Optional[Application]:
        for application in self._applications:
            if application.application_id == application_id:
                return application
        return None

    # ------------------------------------------------------------------
    # Eligibility
    # ------------------------------------------------------------------

    def is_open_to_major(self, major: Major) -> bool:
        return not self.preferred_majors or major in self.preferred_majors

    def is_open(self, today: Optional[date] = None) -> bool:
        """APPROVED, visible, within [open_date, close_date) and not full."""
        today = today or date.today()
        return (
            self.status == InternshipStatus.APPROVED
            and self.visible
            and self.open_date <= today < self.close_date
            and self.has_free_slot
        )

    def is_eligible_for(self, student: "Student", today: Optional[date] = None) -> bool:
        if student is None:
            return False
        if not self.is_open_to_major(student.major):
            return False
        if not student.is_eligible_for_level(self.level):
            return False
        return self.is_open(today)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_application(self, application: Application) -> None:
        self._applications.append(application)

    def add_intern(self, student_id: str) -> None:
        if not self.has_free_slot:
            raise InvalidStateError(f"No available slots on internship {self.internship_id}")
        self._intern_ids.append(student_id)
        self.refresh_fill_status()

    def remove_intern(self, student_id: str) -> None:
        if student_id not in self._intern_ids:
            raise InvalidArgumentError(
                f"Student {student_id} does not hold a slot on internship {self.internship_id}"
            )
        self._intern_ids.remove(student_id)
        self.refresh_fill_status()

    def refresh_fill_status(self) -> None:
        if self.status == InternshipStatus.APPROVED and not self.has_free_slot:
            self.status = InternshipStatus.FILLED
        elif self.status == InternshipStatus.FILLED and self.has_free_slot:
            self.status = InternshipStatus.APPROVED

    def add_preferred_major(self, major: Major) -> bool:
        """Returns False if the major was already listed."""
        if major in self.preferred_majors:
            return False
        self.preferred_majors = self.preferred_majors + (major,)
        return True

    def remove_preferred_major(self, major: Major) -> None:
        if major not in self.preferred_majors:
            raise InvalidArgumentError(f"Major {major.value} not in preferred list")
        self.preferred_majors = tuple(m for m in self.preferred_majors if m != major)

    def update_details(
        self,
        title: Optional[str] = None,
        description: Optional[str] = None,
        level: Optional[InternshipLevel] = None,
        open_date: Optional[date] = None,
        close_date: Optional[date] = None,
        number_of_slots: Optional[int] = None,
    ) -> None:
        """
        Apply the given (non-None) changes after validating them together.
        Nothing is changed if any value is rejected.
        """
        new_title = self.title if title is None else title.strip()
        new_description = self.description if description is None else description.strip()
        new_open = open_date or self.open_date
        new_close = close_date or self.close_date
        new_slots = self.number_of_slots if number_of_slots is None else number_of_slots

        if not new_title:
            raise InvalidArgumentError("Title cannot be empty")
        if not new_description:
            raise InvalidArgumentError("Description cannot be empty")
        if new_close <= new_open:
            raise InvalidArgumentError("Close date must be after open date")
        if not PlacementConstants.MIN_SLOTS <= new_slots <= PlacementConstants.MAX_SLOTS:
            raise InvalidArgumentError(
                f"Number of slots must be between {PlacementConstants.MIN_SLOTS} "
                f"and {PlacementConstants.MAX_SLOTS}"
            )
        if new_slots < self.confirmed_slots:
            raise InvalidStateError("Cannot set slots below confirmed count")

        self.title = new_title
        self.description = new_description
        if level is not None:
            self.level = level
        self.open_date = new_open
        self.close_date = new_close
        self.number_of_slots = new_slots
