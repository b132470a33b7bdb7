"""
Career center staff shell.

Approvals, withdrawal processing, cross-company internship search,
statistics and the placement report.
"""

from typing import Dict, Optional

from models import CareerStaff, InternshipLevel, InternshipStatus
from orchestrator.career_staff_controller import CareerStaffController
from orchestrator.login_controller import LoginController
from utils.report_utils import ReportUtils
from .cli import RoleCLI
from .input_parsing import expect_args, parse_enum, parse_majors, parse_optional_date, parse_options

SEARCH_KEYS = ("majors", "company", "level", "open_from", "close_by", "status")
REPORT_KEYS = ("majors", "level", "status", "file")


class CareerStaffCLI(RoleCLI):
    prompt = "(staff) "

    def __init__(
        self,
        user: CareerStaff,
        login_controller: LoginController,
        staff_controller: CareerStaffController,
        report_utils: ReportUtils,
        **kwargs,
    ):
        super().__init__(user, login_controller, **kwargs)
        self.controller = staff_controller
        self.report_utils = report_utils

    # -------------------------------------------------------------------------
    # Company representatives
    # -------------------------------------------------------------------------

    def do_reps(self, arg):
        """List company representatives awaiting approval."""
        self.emit(ReportUtils.format_users(self.controller.pending_company_reps()))

    def do_approverep(self, arg):
        """
        Approve a company representative.
        Usage: approverep EMAIL
        """
        (user_id,) = expect_args(arg, 1, "approverep EMAIL")
        self.controller.approve_company_rep(user_id)
        self.emit(f"Company representative {user_id} approved.")

    def do_rejectrep(self, arg):
        """
        Reject a company representative. The account is removed.
        Usage: rejectrep EMAIL
        """
        (user_id,) = expect_args(arg, 1, "rejectrep EMAIL")
        self.controller.reject_company_rep(user_id)
        self.emit(f"Company representative {user_id} rejected and removed.")

    # -------------------------------------------------------------------------
    # Internships
    # -------------------------------------------------------------------------

    def do_pending(self, arg):
        """List internships awaiting approval."""
        self.emit(ReportUtils.format_internships(self.controller.pending_internships()))

    def do_approve(self, arg):
        """
        Approve an internship.
        Usage: approve INTERNSHIP_ID
        """
        (internship_id,) = expect_args(arg, 1, "approve INTERNSHIP_ID")
        internship = self.controller.approve_internship(internship_id)
        self.emit(f"Internship {internship_id} is now {internship.status.value}.")

    def do_reject(self, arg):
        """
        Reject an internship.
        Usage: reject INTERNSHIP_ID
        """
        (internship_id,) = expect_args(arg, 1, "reject INTERNSHIP_ID")
        internship = self.controller.reject_internship(internship_id)
        self.emit(f"Internship {internship_id} is now {internship.status.value}.")

    def do_internships(self, arg):
        """
        List every internship, optionally filtered.
        Usage: internships [majors=M1,M2] [company=TEXT] [level=LEVEL] [open_from=DATE] [close_by=DATE] [status=STATUS]
        """
        options = parse_options(arg, SEARCH_KEYS)
        internships = self.controller.filter_internships(
            majors=parse_majors(options.get("majors", "")),
            company=options.get("company") or None,
            level=self._optional_enum(InternshipLevel, options.get("level")),
            open_from=parse_optional_date(options.get("open_from"), "opening date"),
            close_by=parse_optional_date(options.get("close_by"), "closing date"),
            status=self._optional_enum(InternshipStatus, options.get("status")),
        )
        self.emit(ReportUtils.format_internships(internships))

    # -------------------------------------------------------------------------
    # Withdrawals
    # -------------------------------------------------------------------------

    def do_withdrawals(self, arg):
        """List pending withdrawal requests."""
        self.emit(ReportUtils.format_withdrawals(self.controller.pending_withdrawals()))

    def do_approvewd(self, arg):
        """
        Approve a withdrawal request. An accepted placement frees its slot.
        Usage: approvewd REQUEST_ID
        """
        (request_id,) = expect_args(arg, 1, "approvewd REQUEST_ID")
        self.controller.process_withdrawal(request_id, approve=True)
        self.emit(f"Withdrawal request {request_id} approved.")

    def do_rejectwd(self, arg):
        """
        Reject a withdrawal request.
        Usage: rejectwd REQUEST_ID
        """
        (request_id,) = expect_args(arg, 1, "rejectwd REQUEST_ID")
        self.controller.process_withdrawal(request_id, approve=False)
        self.emit(f"Withdrawal request {request_id} rejected.")

    # -------------------------------------------------------------------------
    # Users, statistics, report
    # -------------------------------------------------------------------------

    def do_users(self, arg):
        """List every user."""
        self.emit(ReportUtils.format_users(self.controller.view_all_users()))

    def do_stats(self, arg):
        """Show system statistics."""
        self.emit(ReportUtils.format_statistics(self.controller.statistics()))

    def do_report(self, arg):
        """
        Write an internship report to the reports directory.
        Usage: report [majors=M1,M2] [level=LEVEL] [status=STATUS] [file=NAME.txt]
        """
        options = parse_options(arg, REPORT_KEYS)
        majors = parse_majors(options.get("majors", ""))
        level = self._optional_enum(InternshipLevel, options.get("level"))
        status = self._optional_enum(InternshipStatus, options.get("status"))

        internships = self.controller.filter_internships(majors=majors, level=level, status=status)
        filters: Dict[str, Optional[str]] = {
            "Major": ", ".join(m.value for m in majors) or None,
            "Level": level.value if level else None,
            "Status": status.value if status else None,
        }
        path = self.report_utils.write_report(self.user, internships, filters, options.get("file"))
        self.emit(f"Report saved to {path}")

    @staticmethod
    def _optional_enum(enum_cls, raw: Optional[str]):
        if raw is None or not raw.strip():
            return None
        return parse_enum(enum_cls, raw)
