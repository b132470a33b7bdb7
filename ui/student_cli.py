"""
Student shell.

Display filters set with `filter` stay active for the rest of the session
and apply to `internships`.
"""

from typing import Dict, Optional

from models import InternshipLevel, Student
from orchestrator.login_controller import LoginController
from orchestrator.student_controller import StudentController
from utils.report_utils import ReportUtils
from .cli import RoleCLI
from .input_parsing import expect_args, parse_enum, parse_majors, parse_optional_date, parse_options

FILTER_KEYS = ("majors", "level", "close_by")


class StudentCLI(RoleCLI):
    prompt = "(student) "

    def __init__(
        self,
        user: Student,
        login_controller: LoginController,
        student_controller: StudentController,
        **kwargs,
    ):
        super().__init__(user, login_controller, **kwargs)
        self.controller = student_controller
        self.filters: Dict[str, Optional[object]] = {}

    # -------------------------------------------------------------------------
    # Internships
    # -------------------------------------------------------------------------

    def do_internships(self, arg):
        """List open internships you are eligible for, sorted by title (current filters applied)."""
        internships = self.controller.browse_internships(self.user, **self.filters)
        self.emit(ReportUtils.format_internships(internships))

    def do_filter(self, arg):
        """
        Set display filters for `internships`, or `filter clear` to reset.
        Usage: filter [majors=CCDS,COE] [level=BASIC] [close_by=YYYY-MM-DD]
        """
        if arg.strip().lower() == "clear":
            self.filters = {}
            self.emit("Filters cleared.")
            return

        options = parse_options(arg, FILTER_KEYS)
        filters = dict(self.filters)
        if "majors" in options:
            filters["majors"] = parse_majors(options["majors"]) or None
        if "level" in options:
            filters["level"] = parse_enum(InternshipLevel, options["level"]) if options["level"] else None
        if "close_by" in options:
            filters["close_by"] = parse_optional_date(options["close_by"], "closing date")
        self.filters = {k: v for k, v in filters.items() if v is not None}
        self.emit(f"Active filters: {self._describe_filters()}")

    def _describe_filters(self) -> str:
        if not self.filters:
            return "none"
        parts = []
        for key, value in self.filters.items():
            if key == "majors":
                value = ",".join(m.value for m in value)
            elif key == "level":
                value = value.value
            parts.append(f"{key}={value}")
        return " ".join(parts)

    # -------------------------------------------------------------------------
    # Applications
    # -------------------------------------------------------------------------

    def do_apply(self, arg):
        """
        Apply for an internship.
        Usage: apply INTERNSHIP_ID
        """
        (internship_id,) = expect_args(arg, 1, "apply INTERNSHIP_ID")
        application = self.controller.apply(self.user, internship_id)
        self.emit(f"Applied. Application ID: {application.application_id}")

    def do_applications(self, arg):
        """List your applications."""
        self.emit(ReportUtils.format_applications(self.controller.view_applications(self.user)))

    def do_accept(self, arg):
        """
        Accept a successful application. Your other applications are withdrawn.
        Usage: accept APPLICATION_ID
        """
        (application_id,) = expect_args(arg, 1, "accept APPLICATION_ID")
        self.controller.accept(self.user, application_id)
        self.emit(f"Placement confirmed for {application_id}. Other applications withdrawn.")

    def do_reject(self, arg):
        """
        Turn down a successful application.
        Usage: reject APPLICATION_ID
        """
        (application_id,) = expect_args(arg, 1, "reject APPLICATION_ID")
        self.controller.reject(self.user, application_id)
        self.emit(f"Offer {application_id} rejected.")

    def do_withdraw(self, arg):
        """
        Ask career center staff to withdraw an application.
        Usage: withdraw APPLICATION_ID
        """
        (application_id,) = expect_args(arg, 1, "withdraw APPLICATION_ID")
        request = self.controller.request_withdrawal(self.user, application_id)
        self.emit(f"Withdrawal request {request.request_id} submitted for staff approval.")

    def do_withdrawals(self, arg):
        """List your withdrawal requests."""
        self.emit(ReportUtils.format_withdrawals(self.controller.withdrawal_requests(self.user)))
