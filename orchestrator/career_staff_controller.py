"""
Career Staff Controller

Approval gate of the placement system:
- company representative accounts (approve, or reject and remove)
- internship postings (PENDING -> APPROVED/REJECTED)
- student withdrawal requests (approving one withdraws the application and
  releases the slot if it was an accepted placement)

Plus the cross-company internship filter and headline statistics.

Re-deciding an internship that already has a decision is off by default and
enabled with the `allow_internship_redecision` policy. FILLED internships are
never re-decided: their status is driven by slot bookkeeping.
"""

from datetime import date
from typing import Dict, Iterable, List, Optional

from constants import Messages
from models import (
    CompanyRep,
    Internship,
    InternshipLevel,
    InternshipStatus,
    InvalidArgumentError,
    InvalidStateError,
    Major,
    NotFoundError,
    User,
    UserRole,
    WithdrawalRequest,
    WithdrawalStatus,
)
from storage.logs_manager import LogsManager
from storage.repository import DataRepository
from .base_controller import BaseController


class CareerStaffController(BaseController):
    def __init__(
        self,
        repository: DataRepository,
        logs_manager: Optional[LogsManager] = None,
        allow_internship_redecision: bool = False,
    ):
        super().__init__(repository, logs_manager)
        self.allow_internship_redecision = allow_internship_redecision

    # -------------------------------------------------------------------------
    # Listings
    # -------------------------------------------------------------------------

    def view_all_users(self) -> List[User]:
        return self.repository.all_users()

    def view_all_internships(self) -> List[Internship]:
        return self.repository.all_internships()

    # -------------------------------------------------------------------------
    # Company representatives
    # -------------------------------------------------------------------------

    def pending_company_reps(self) -> List[CompanyRep]:
        return [
            u for u in self.repository.users_by_role(UserRole.COMPANY_REPRESENTATIVE)
            if not u.approved
        ]

    def approve_company_rep(self, user_id: str) -> CompanyRep:
        rep = self._find_company_rep(user_id)
        rep.approved = True
        self._log_info(Messages.REP_APPROVED.format(user_id))
        return rep

    def reject_company_rep(self, user_id: str) -> None:
        """Removes the account entirely. A rep who still owns internships cannot be rejected."""
        rep = self._find_company_rep(user_id)
        if rep.internships:
            raise InvalidStateError(
                f"Company representative {user_id} still owns {len(rep.internships)} internship(s)"
            )
        self.repository.remove_user(user_id)
        self._log_info(Messages.REP_REJECTED.format(user_id))

    # -------------------------------------------------------------------------
    # Internships
    # -------------------------------------------------------------------------

    def pending_internships(self) -> List[Internship]:
        return [i for i in self.repository.all_internships() if i.status == InternshipStatus.PENDING]

    def approve_internship(self, internship_id: str) -> Internship:
        return self._decide_internship(internship_id, InternshipStatus.APPROVED)

    def reject_internship(self, internship_id: str) -> Internship:
        return self._decide_internship(internship_id, InternshipStatus.REJECTED)

    def _decide_internship(self, internship_id: str, decision: InternshipStatus) -> Internship:
        internship = self.repository.find_internship(internship_id)
        if internship is None:
            raise NotFoundError(f"Internship {internship_id} not found")
        if internship.status == InternshipStatus.FILLED:
            raise InvalidStateError(f"Internship {internship_id} is filled")
        if internship.status != InternshipStatus.PENDING and not self.allow_internship_redecision:
            raise InvalidStateError(
                f"Internship {internship_id} already {internship.status.value.lower()}"
            )

        internship.status = decision
        internship.refresh_fill_status()
        self._log_info(Messages.INTERNSHIP_DECIDED.format(internship_id, internship.status.value))
        return internship

    def filter_internships(
        self,
        majors: Optional[Iterable[Major]] = None,
        company: Optional[str] = None,
        level: Optional[InternshipLevel] = None,
        open_from: Optional[date] = None,
        close_by: Optional[date] = None,
        status: Optional[InternshipStatus] = None,
    ) -> List[Internship]:
        """
        Filter every internship. Each absent (None/empty) criterion is ignored.

        Args:
            majors: keep internships listing any of these majors, or open to all.
            company: case-insensitive substring of the company name.
            level: exact level.
            open_from: keep internships opening on or after this date.
            close_by: keep internships closing on or before this date.
            status: exact status.
        """
        majors = list(majors or [])
        company = (company or "").strip().lower()

        results = []
        for internship in self.repository.all_internships():
            if status is not None and internship.status != status:
                continue
            if level is not None and internship.level != level:
                continue
            # An empty preferred list is open to every major
            if majors and internship.preferred_majors and not any(
                m in internship.preferred_majors for m in majors
            ):
                continue
            if company and company not in internship.company_name.lower():
                continue
            if open_from is not None and internship.open_date < open_from:
                continue
            if close_by is not None and internship.close_date > close_by:
                continue
            results.append(internship)
        return results

    # -------------------------------------------------------------------------
    # Withdrawals
    # -------------------------------------------------------------------------

    def pending_withdrawals(self) -> List[WithdrawalRequest]:
        return [w for w in self.repository.all_withdrawals() if w.is_pending]

    def process_withdrawal(self, request_id: str, approve: bool) -> WithdrawalRequest:
        request = self.repository.find_withdrawal(request_id)
        if request is None:
            raise NotFoundError(f"Withdrawal request {request_id} not found")
        if not request.is_pending:
            raise InvalidStateError(f"Withdrawal request {request_id} already {request.status.value.lower()}")

        if approve:
            student = self.repository.find_student(request.student_id)
            if student is None:
                raise NotFoundError(f"Student {request.student_id} not found")
            application = student.find_application(request.application_id)
            if application is None:
                raise NotFoundError(f"Application {request.application_id} not found")

            was_accepted = application.accepted
            application.withdraw()
            if was_accepted:
                internship = self.repository.find_internship(application.internship_id)
                if internship is not None:
                    internship.remove_intern(student.user_id)
                    self._log_info(Messages.SLOT_RELEASED.format(internship.internship_id, student.user_id))
            if student.accepted_application_id == application.application_id:
                student.clear_accepted()

        request.status = WithdrawalStatus.APPROVED if approve else WithdrawalStatus.REJECTED
        self._log_info(Messages.WITHDRAWAL_PROCESSED.format(request_id, request.status.value.lower()))
        return request

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    def statistics(self) -> Dict[str, Dict[str, int]]:
        users = self.repository.all_users()
        internships = self.repository.all_internships()

        user_counts = {role.value: 0 for role in UserRole}
        approved_reps = 0
        for user in users:
            user_counts[user.role.value] += 1
            match user.role:
                case UserRole.COMPANY_REPRESENTATIVE if user.approved:
                    approved_reps += 1
        user_counts["APPROVED_COMPANY_REPRESENTATIVES"] = approved_reps
        user_counts["TOTAL"] = len(users)

        internship_counts = {status.value: 0 for status in InternshipStatus}
        for internship in internships:
            internship_counts[internship.status.value] += 1
        internship_counts["TOTAL"] = len(internships)

        return {
            "users": user_counts,
            "internships": internship_counts,
            "withdrawals": {"PENDING": len(self.pending_withdrawals())},
        }

    def _find_company_rep(self, user_id: str) -> CompanyRep:
        if self.repository.find_user(user_id) is None:
            raise NotFoundError(f"User {user_id} not found")
        rep = self.repository.find_company_rep(user_id)
        if rep is None:
            raise InvalidArgumentError(f"User {user_id} is not a company representative")
        return rep
