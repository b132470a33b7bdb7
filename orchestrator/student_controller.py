"""
Student Controller

Student-side operations:
- listing internships the student is eligible for
- applying (max 3 active applications, none once a placement is accepted)
- accepting exactly one successful offer, which withdraws every other
  active application
- rejecting a successful offer (releasing the slot if it was accepted)
- requesting withdrawal, which staff resolve later
"""

from datetime import date
from typing import Callable, Iterable, List, Optional

from constants import Messages
from models import (
    Application,
    ApplicationStatus,
    Internship,
    InternshipLevel,
    InvalidArgumentError,
    InvalidStateError,
    Major,
    NotFoundError,
    Student,
    WithdrawalRequest,
    make_application_id,
)
from storage.logs_manager import LogsManager
from storage.repository import DataRepository
from .base_controller import BaseController


class StudentController(BaseController):
    def __init__(
        self,
        repository: DataRepository,
        logs_manager: Optional[LogsManager] = None,
        clock: Callable[[], date] = date.today,
    ):
        super().__init__(repository, logs_manager)
        self.clock = clock

    def eligible_internships(self, student: Student) -> List[Internship]:
        """Internships matching the student's major and year that are currently open."""
        today = self.clock()
        return [i for i in self.repository.all_internships() if i.is_eligible_for(student, today)]

    def browse_internships(
        self,
        student: Student,
        majors: Optional[Iterable[Major]] = None,
        level: Optional[InternshipLevel] = None,
        close_by: Optional[date] = None,
    ) -> List[Internship]:
        """
        Eligible internships narrowed by the student's display filters,
        sorted by title. Internships open to every major pass any major filter.
        """
        majors = list(majors or [])
        results = []
        for internship in self.eligible_internships(student):
            if level is not None and internship.level != level:
                continue
            if close_by is not None and internship.close_date > close_by:
                continue
            if majors and internship.preferred_majors and not any(
                m in internship.preferred_majors for m in majors
            ):
                continue
            results.append(internship)
        return sorted(results, key=lambda i: i.title.lower())

    def apply(self, student: Student, internship_id: str) -> Application:
        internship = self.repository.find_internship(internship_id)
        if internship is None:
            raise NotFoundError(f"Internship {internship_id} not found")
        if not student.can_apply_more():
            raise InvalidStateError("Max applications reached or already accepted an internship")
        if not internship.is_eligible_for(student, self.clock()):
            raise InvalidStateError(f"Student not eligible for internship {internship_id}")
        if student.has_applied_to(internship_id):
            raise InvalidArgumentError(f"Already applied for internship {internship_id}")

        application = Application(
            application_id=make_application_id(student.user_id, internship_id),
            student_id=student.user_id,
            internship_id=internship_id,
        )
        student.add_application(application)
        internship.add_application(application)
        self._log_info(Messages.APPLICATION_CREATED.format(application.application_id))
        return application

    def view_applications(self, student: Student) -> List[Application]:
        """All of the student's applications, whatever the internship's visibility."""
        return list(student.applications)

    def accept(self, student: Student, application_id: str) -> Application:
        application = self._find_application(student, application_id)
        if student.accepted_application_id is not None:
            raise InvalidStateError("Already accepted an internship")
        if application.status != ApplicationStatus.SUCCESSFUL:
            raise InvalidStateError("Can only accept successful applications")

        internship = self.repository.find_internship(application.internship_id)
        if internship is None:
            raise NotFoundError(f"Internship {application.internship_id} not found")
        # Checked up front so a full internship leaves the other applications alone
        if not internship.has_free_slot:
            raise InvalidStateError(f"No available slots on internship {internship.internship_id}")

        withdrawn = 0
        for other in student.applications:
            if other is not application and other.status != ApplicationStatus.UNSUCCESSFUL:
                other.withdraw()
                withdrawn += 1

        student.mark_accepted(application)
        internship.add_intern(student.user_id)
        self._log_info(Messages.APPLICATION_ACCEPTED.format(application_id, withdrawn))
        return application

    def reject(self, student: Student, application_id: str) -> Application:
        application = self._find_application(student, application_id)
        if application.status != ApplicationStatus.SUCCESSFUL:
            raise InvalidStateError("Can only reject successful applications")

        application.update_status(ApplicationStatus.UNSUCCESSFUL)
        if student.accepted_application_id == application.application_id:
            student.clear_accepted()
            if application.accepted:
                application.accepted = False
                internship = self.repository.find_internship(application.internship_id)
                if internship is not None:
                    internship.remove_intern(student.user_id)
                    self._log_info(Messages.SLOT_RELEASED.format(internship.internship_id, student.user_id))

        self._log_info(Messages.APPLICATION_REJECTED.format(application_id))
        return application

    def request_withdrawal(self, student: Student, application_id: str) -> WithdrawalRequest:
        """Allowed before or after placement confirmation; staff decide later."""
        application = self._find_application(student, application_id)
        request = WithdrawalRequest.for_application(application)
        self.repository.add_withdrawal(request)
        self._log_info(Messages.WITHDRAWAL_REQUESTED.format(request.request_id))
        return request

    def withdrawal_requests(self, student: Student) -> List[WithdrawalRequest]:
        return [w for w in self.repository.all_withdrawals() if w.student_id == student.user_id]

    def _find_application(self, student: Student, application_id: str) -> Application:
        application = student.find_application(application_id)
        if application is None:
            raise NotFoundError(f"Application {application_id} not found")
        return application
