"""
Integration Tests for the console shells

Shells are driven with `onecmd` (or a scripted stdin) and their output is
captured from an injected stdout, so no terminal is needed.
"""

import io
from datetime import date, timedelta
from unittest.mock import MagicMock, patch

import pytest

import main
from models import ApplicationStatus, InternshipStatus
from ui import CareerStaffCLI, CompanyRepCLI, LoginCLI, StudentCLI
from utils.report_utils import ReportUtils

TODAY = date.today()


@pytest.fixture
def out():
    return io.StringIO()


class TestLoginShell:
    def test_login_success_ends_loop(self, login_controller, out):
        shell = LoginCLI(login_controller, stdout=out)
        assert shell.onecmd("login U1234567A password") is True
        assert shell.user.user_id == "U1234567A"
        assert "Welcome, Tan Wei Ling." in out.getvalue()

    def test_unapproved_rep_cannot_login(self, login_controller, out):
        shell = LoginCLI(login_controller, stdout=out)
        assert shell.onecmd("login eve@newco.com password") is False
        assert shell.user is None
        assert "Login failed" in out.getvalue()

    def test_register_with_quoted_values(self, login_controller, repository, out):
        shell = LoginCLI(login_controller, stdout=out)
        shell.onecmd('register rae@co.com "Rae Lee" "Co Pte Ltd" HR Lead')
        rep = repository.find_company_rep("rae@co.com")
        assert rep.company_name == "Co Pte Ltd"
        assert not rep.approved
        assert "Please wait for career center approval" in out.getvalue()

    def test_errors_are_printed_not_raised(self, login_controller, repository, out):
        shell = LoginCLI(login_controller, stdout=out)
        assert shell.onecmd("register not-an-email Rae Co HR Lead") is False
        assert "Error: Invalid email format" in out.getvalue()
        assert len(repository.all_users()) == 5

    def test_unknown_command(self, login_controller, out):
        LoginCLI(login_controller, stdout=out).onecmd("dance")
        assert "Unknown command: dance" in out.getvalue()

    def test_scripted_stdin(self, login_controller, out):
        shell = LoginCLI(login_controller, stdin=io.StringIO("login staff01 wrong\nquit\n"), stdout=out)
        shell.cmdloop()
        assert shell.quit_requested
        assert shell.user is None


class TestStudentShell:
    def test_apply_and_list(self, repository, login_controller, student_controller, make_internship, out):
        internship = make_internship(title="Backend Intern")
        shell = StudentCLI(repository.find_student("U1234567A"), login_controller, student_controller, stdout=out)

        shell.onecmd("internships")
        shell.onecmd(f"apply {internship.internship_id}")
        shell.onecmd("applications")

        text = out.getvalue()
        assert "Backend Intern" in text
        assert f"Application ID: U1234567A-{internship.internship_id}" in text
        assert "PENDING" in text

    def test_failed_apply_changes_nothing(self, repository, login_controller, student_controller, out):
        student = repository.find_student("U1234567A")
        shell = StudentCLI(student, login_controller, student_controller, stdout=out)
        shell.onecmd("apply NOPE-1")
        assert "Error: Internship NOPE-1 not found" in out.getvalue()
        assert student.applications == ()

    def test_filters_persist(self, repository, login_controller, student_controller, make_internship, out):
        make_internship(title="Zeta", close_date=TODAY + timedelta(days=3))
        make_internship(title="Alpha", close_date=TODAY + timedelta(days=40))
        shell = StudentCLI(repository.find_student("U1234567A"), login_controller, student_controller, stdout=out)

        shell.onecmd(f"filter close_by={(TODAY + timedelta(days=10)).isoformat()}")
        shell.onecmd("internships")
        assert "Zeta" in out.getvalue()
        assert "Alpha" not in out.getvalue()

        shell.onecmd("filter clear")
        out.truncate(0)
        out.seek(0)
        shell.onecmd("internships")
        text = out.getvalue()
        assert text.index("Alpha") < text.index("Zeta")

    def test_accept_via_shell(self, repository, login_controller, student_controller, make_internship, out):
        internship = make_internship(slots=1)
        student = repository.find_student("U1234567A")
        application = student_controller.apply(student, internship.internship_id)
        application.update_status(ApplicationStatus.SUCCESSFUL)

        StudentCLI(student, login_controller, student_controller, stdout=out).onecmd(
            f"accept {application.application_id}"
        )
        assert internship.status == InternshipStatus.FILLED
        assert "Placement confirmed" in out.getvalue()


class TestCompanyRepShell:
    def test_create_and_update(self, repository, login_controller, company_rep_controller, out):
        bob = repository.find_company_rep("bob@acme.com")
        shell = CompanyRepCLI(bob, login_controller, company_rep_controller, stdout=out)
        open_date = TODAY.isoformat()
        close_date = (TODAY + timedelta(days=30)).isoformat()

        shell.onecmd(
            f'create title="Data Intern" description="ETL work" level=basic '
            f'majors=CCDS,COE open={open_date} close={close_date} slots=2'
        )
        assert "Internship ACMECorp-bob-1 created and awaiting approval." in out.getvalue()
        internship = repository.find_internship("ACMECorp-bob-1")
        assert internship.number_of_slots == 2
        assert internship.status == InternshipStatus.PENDING

        shell.onecmd('update ACMECorp-bob-1 title="Data Engineering Intern" slots=4')
        assert internship.title == "Data Engineering Intern"
        assert internship.number_of_slots == 4

    def test_create_missing_options(self, repository, login_controller, company_rep_controller, out):
        bob = repository.find_company_rep("bob@acme.com")
        shell = CompanyRepCLI(bob, login_controller, company_rep_controller, stdout=out)
        shell.onecmd("create title=X description=Y level=BASIC open=2030-01-01")
        assert "Error: Missing option(s): close" in out.getvalue()
        assert bob.internships == ()

    def test_decide_and_toggle(
        self, repository, login_controller, company_rep_controller, student_controller, make_internship, out
    ):
        internship = make_internship()
        application = student_controller.apply(repository.find_student("U1234567A"), internship.internship_id)
        shell = CompanyRepCLI(
            repository.find_company_rep("bob@acme.com"), login_controller, company_rep_controller, stdout=out
        )

        shell.onecmd(f"decide {internship.internship_id} {application.application_id} successful")
        shell.onecmd(f"toggle {internship.internship_id}")

        assert application.status == ApplicationStatus.SUCCESSFUL
        assert internship.visible is False
        assert "is now hidden" in out.getvalue()


class TestCareerStaffShell:
    @pytest.fixture
    def shell(self, settings, repository, login_controller, staff_controller, out):
        return CareerStaffCLI(
            repository.find_user("staff01"),
            login_controller,
            staff_controller,
            ReportUtils(settings['system']['reports_dir']),
            stdout=out,
        )

    def test_approve_rep_and_internship(self, shell, repository, make_internship, out):
        internship = make_internship(status=InternshipStatus.PENDING)
        shell.onecmd("approverep eve@newco.com")
        shell.onecmd(f"approve {internship.internship_id}")
        assert repository.find_company_rep("eve@newco.com").approved
        assert internship.status == InternshipStatus.APPROVED

    def test_stats(self, shell, out):
        shell.onecmd("stats")
        assert "Total Users: 5" in out.getvalue()

    def test_report(self, shell, settings, make_internship, out):
        make_internship(title="Report Me")
        shell.onecmd("report level=BASIC file=basic.txt")
        path = settings['system']['reports_dir']
        assert f"Report saved to {path}" in out.getvalue()
        with open(f"{path}/basic.txt", encoding="utf-8") as fh:
            content = fh.read()
        assert "Report Me" in content
        assert "Level: BASIC" in content

    def test_logout(self, shell, out):
        assert shell.onecmd("logout") is True
        assert "Logged out." in out.getvalue()


class TestPlacementApp:
    def test_session_loop_saves_after_logout(self, settings, logs_manager, repository, out):
        storage = MagicMock()
        app = main.PlacementApp(settings, logs_manager, storage, repository)
        script = io.StringIO("login U1234567A password\nprofile\npasswd password n3w\nlogout\nquit\n")

        app.run(stdin=script, stdout=out)

        text = out.getvalue()
        assert "Major: CCDS" in text
        assert "Password changed." in text
        storage.update_password.assert_called_once_with("U1234567A", "n3w")
        storage.save.assert_called_once_with(repository)

    def test_shell_for_each_role(self, settings, logs_manager, repository):
        app = main.PlacementApp(settings, logs_manager, MagicMock(), repository)
        assert isinstance(app.shell_for(repository.find_user("U1234567A")), StudentCLI)
        assert isinstance(app.shell_for(repository.find_user("bob@acme.com")), CompanyRepCLI)
        assert isinstance(app.shell_for(repository.find_user("staff01")), CareerStaffCLI)

    def test_main_exits_when_data_missing(self, settings):
        with patch("main.load_settings", return_value=settings):
            assert main.main() == 1
