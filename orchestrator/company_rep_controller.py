"""
Company Representative Controller

Internship authoring and application decisions for approved company
representatives. Internships can only be edited or deleted while PENDING;
after the staff decision only visibility and application processing remain.
"""

from datetime import date
from typing import Iterable, List, Optional

from pydantic import ValidationError

from constants import Messages
from models import (
    Application,
    ApplicationStatus,
    CompanyRep,
    Internship,
    InternshipLevel,
    InternshipStatus,
    InvalidArgumentError,
    InvalidStateError,
    Major,
    NotFoundError,
    UnauthorizedError,
)
from utils.regex_utils import RegexUtils
from .base_controller import BaseController


class CompanyRepController(BaseController):

    def create_internship(
        self,
        rep: CompanyRep,
        title: str,
        description: str,
        level: InternshipLevel,
        preferred_majors: Optional[Iterable[Major]],
        open_date: date,
        close_date: date,
        number_of_slots: int,
    ) -> Internship:
        if not rep.approved:
            raise UnauthorizedError("Company representative not approved yet")
        if not rep.can_create_more_internships():
            raise InvalidStateError("Maximum number of active internships reached")

        try:
            internship = Internship(
                internship_id=self._next_internship_id(rep),
                title=title,
                description=description,
                level=level,
                preferred_majors=tuple(preferred_majors or ()),
                open_date=open_date,
                close_date=close_date,
                company_name=rep.company_name,
                company_rep_id=rep.user_id,
                number_of_slots=number_of_slots,
            )
        except ValidationError as e:
            raise InvalidArgumentError(str(e)) from e

        rep.add_internship(internship)
        self.repository.add_internship(internship)
        self._log_info(Messages.INTERNSHIP_CREATED.format(internship.internship_id))
        return internship

    def view_internships(self, rep: CompanyRep, status: Optional[InternshipStatus] = None) -> List[Internship]:
        return [i for i in rep.internships if status is None or i.status == status]

    def update_internship(
        self,
        rep: CompanyRep,
        internship_id: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        level: Optional[InternshipLevel] = None,
        open_date: Optional[date] = None,
        close_date: Optional[date] = None,
        number_of_slots: Optional[int] = None,
    ) -> Internship:
        internship = self._find_pending_internship(rep, internship_id)
        internship.update_details(
            title=title,
            description=description,
            level=level,
            open_date=open_date,
            close_date=close_date,
            number_of_slots=number_of_slots,
        )
        self._log_info(Messages.INTERNSHIP_UPDATED.format(internship_id))
        return internship

    def add_preferred_major(self, rep: CompanyRep, internship_id: str, major: Major) -> None:
        internship = self._find_pending_internship(rep, internship_id)
        internship.add_preferred_major(major)
        self._log_debug(f"Added major {major.value} to {internship_id}")

    def remove_preferred_major(self, rep: CompanyRep, internship_id: str, major: Major) -> None:
        internship = self._find_pending_internship(rep, internship_id)
        internship.remove_preferred_major(major)
        self._log_debug(f"Removed major {major.value} from {internship_id}")

    def delete_internship(self, rep: CompanyRep, internship_id: str) -> None:
        internship = self._find_rep_internship(rep, internship_id)
        if internship.status != InternshipStatus.PENDING:
            raise InvalidStateError("Cannot delete internship after approval decision")

        for application in internship.applications:
            application.withdraw()

        rep.remove_internship(internship)
        self.repository.remove_internship(internship_id)
        self._log_info(Messages.INTERNSHIP_DELETED.format(internship_id, len(internship.applications)))

    def view_applications(self, rep: CompanyRep, internship_id: str) -> List[Application]:
        return list(self._find_rep_internship(rep, internship_id).applications)

    def process_application(
        self,
        rep: CompanyRep,
        internship_id: str,
        application_id: str,
        decision: ApplicationStatus,
    ) -> Application:
        """
        Mark a PENDING application SUCCESSFUL or UNSUCCESSFUL. Acceptance stays
        with the student. A decided or withdrawn application is final.
        """
        if decision not in (ApplicationStatus.SUCCESSFUL, ApplicationStatus.UNSUCCESSFUL):
            raise InvalidArgumentError("Decision must be SUCCESSFUL or UNSUCCESSFUL")

        internship = self._find_rep_internship(rep, internship_id)
        application = internship.find_application(application_id)
        if application is None:
            raise NotFoundError(f"Application {application_id} not found")
        if application.accepted:
            raise InvalidStateError("Application already accepted by the student")
        if application.status != ApplicationStatus.PENDING:
            raise InvalidStateError(
                f"Application {application_id} already {application.status.value.lower()}"
            )

        application.update_status(decision)
        self._log_info(Messages.APPLICATION_PROCESSED.format(application_id, decision.value))
        return application

    def toggle_visibility(self, rep: CompanyRep, internship_id: str) -> bool:
        """Flip the visible flag; returns the new value."""
        internship = self._find_rep_internship(rep, internship_id)
        internship.visible = not internship.visible
        self._log_info(Messages.VISIBILITY_TOGGLED.format(internship_id, internship.visible))
        return internship.visible

    # Helpers

    def _find_rep_internship(self, rep: CompanyRep, internship_id: str) -> Internship:
        internship = rep.find_internship(internship_id)
        if internship is None:
            raise NotFoundError(f"Internship {internship_id} not found")
        return internship

    def _find_pending_internship(self, rep: CompanyRep, internship_id: str) -> Internship:
        internship = self._find_rep_internship(rep, internship_id)
        if internship.status != InternshipStatus.PENDING:
            raise InvalidStateError("Cannot edit internship after approval decision")
        return internship

    def _next_internship_id(self, rep: CompanyRep) -> str:
        """<CompanyName>-<email local part>-<n>, n skipping ids already taken."""
        prefix = "".join(rep.company_name.split()) + "-" + RegexUtils.email_local_part(rep.user_id)
        sequence = len(rep.internships) + 1
        while self.repository.find_internship(f"{prefix}-{sequence}") is not None:
            sequence += 1
        return f"{prefix}-{sequence}"
