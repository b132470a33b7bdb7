"""
Report Utility Functions

Rendering helpers for the console shells:
- pandas tables of internships, applications, withdrawals and users
- the statistics summary printed by the staff shell
- the plain-text placement report written under the reports directory
"""

from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pandas as pd

from constants import Messages
from models import (
    Application,
    CareerStaff,
    Internship,
    InvalidArgumentError,
    User,
    UserRole,
    WithdrawalRequest,
)
from storage.logs_manager import LogsManager

INTERNSHIP_TABLE_COLUMNS = ["ID", "Company", "Title", "Status", "Level", "Slots", "Majors", "Closes"]
DEFAULT_REPORT_FILENAME = "internship_report.txt"


class ReportUtils:
    def __init__(self, reports_dir: str, logs_manager: Optional[LogsManager] = None):
        self.reports_dir = Path(reports_dir)
        self.logs_manager = logs_manager

    @staticmethod
    def internships_to_frame(internships: Sequence[Internship]) -> pd.DataFrame:
        rows = [
            {
                "ID": i.internship_id,
                "Company": i.company_name,
                "Title": i.title,
                "Status": i.status.value,
                "Level": i.level.value,
                "Slots": f"{i.confirmed_slots}/{i.number_of_slots}",
                "Majors": ", ".join(m.value for m in i.preferred_majors) or "ALL",
                "Closes": i.close_date.isoformat(),
            }
            for i in internships
        ]
        return pd.DataFrame(rows, columns=INTERNSHIP_TABLE_COLUMNS)

    @staticmethod
    def format_internships(internships: Sequence[Internship]) -> str:
        if not internships:
            return "No internships found."
        return ReportUtils.internships_to_frame(internships).to_string(index=False)

    @staticmethod
    def format_applications(applications: Sequence[Application]) -> str:
        if not applications:
            return "No applications found."
        frame = pd.DataFrame(
            [
                {
                    "ApplicationID": a.application_id,
                    "Internship": a.internship_id,
                    "Student": a.student_id,
                    "Status": a.status.value,
                    "Accepted": "Yes" if a.accepted else "No",
                    "Applied": a.applied_at.strftime("%Y-%m-%d"),
                }
                for a in applications
            ]
        )
        return frame.to_string(index=False)

    @staticmethod
    def format_withdrawals(requests: Sequence[WithdrawalRequest]) -> str:
        if not requests:
            return "No withdrawal requests found."
        frame = pd.DataFrame(
            [
                {
                    "RequestID": w.request_id,
                    "Student": w.student_id,
                    "Internship": w.internship_id,
                    "Status": w.status.value,
                    "Requested": w.requested_at.strftime("%Y-%m-%d"),
                }
                for w in requests
            ]
        )
        return frame.to_string(index=False)

    @staticmethod
    def format_users(users: Sequence[User]) -> str:
        if not users:
            return "No users found."
        rows = []
        for user in users:
            match user.role:
                case UserRole.STUDENT:
                    details = f"{user.major.value}, Year {user.year_of_study}"
                case UserRole.COMPANY_REPRESENTATIVE:
                    details = f"{user.company_name} ({'approved' if user.approved else 'pending'})"
                case UserRole.CAREER_CENTER_STAFF:
                    details = user.department
            rows.append({"ID": user.user_id, "Name": user.name, "Role": user.role.value, "Details": details})
        return pd.DataFrame(rows).to_string(index=False)

    @staticmethod
    def format_statistics(stats: Dict[str, Dict[str, int]]) -> str:
        """Render the dict returned by CareerStaffController.statistics()."""
        users = stats["users"]
        internships = stats["internships"]
        lines = [
            "USERS:",
            f"  Students: {users['STUDENT']}",
            f"  Company Representatives: {users['COMPANY_REPRESENTATIVE']}"
            f" (Approved: {users['APPROVED_COMPANY_REPRESENTATIVES']})",
            f"  Career Center Staff: {users['CAREER_CENTER_STAFF']}",
            f"  Total Users: {users['TOTAL']}",
            "",
            "INTERNSHIPS:",
            f"  Pending Approval: {internships['PENDING']}",
            f"  Approved: {internships['APPROVED']}",
            f"  Rejected: {internships['REJECTED']}",
            f"  Filled: {internships['FILLED']}",
            f"  Total: {internships['TOTAL']}",
            "",
            "WITHDRAWAL REQUESTS:",
            f"  Pending: {stats['withdrawals']['PENDING']}",
        ]
        return "\n".join(lines)

    def write_report(
        self,
        staff: CareerStaff,
        internships: List[Internship],
        filters: Dict[str, Optional[str]],
        filename: Optional[str] = None,
    ) -> Path:
        """
        Write the placement report and return its path.

        Args:
            staff: the author, printed in the header.
            internships: rows of the report, already filtered.
            filters: label -> applied value (None means "All").
            filename: bare file name inside the reports directory.
        """
        filename = (filename or "").strip() or DEFAULT_REPORT_FILENAME
        if Path(filename).name != filename:
            raise InvalidArgumentError(f"Report filename must not contain a directory: {filename!r}")

        self.reports_dir.mkdir(parents=True, exist_ok=True)
        path = self.reports_dir / filename

        lines = [
            "INTERNSHIP PLACEMENT MANAGEMENT REPORT".center(60),
            "",
            f"Generated By: {staff.name} ({staff.user_id})",
            f"Department: {staff.department}",
            f"Generated At: {datetime.now().strftime('%Y-%m-%d %H:%M')}",
            "",
            "Filters Applied:",
        ]
        lines.extend(f"  {label}: {value or 'All'}" for label, value in filters.items())
        lines.extend(["", "*" * 60, "", self.format_internships(internships), ""])
        lines.append(f"Total Internships: {len(internships)}")

        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        if self.logs_manager:
            self.logs_manager.info(Messages.REPORT_WRITTEN.format(path))
        return path
