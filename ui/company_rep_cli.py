"""
Company representative shell.

Internship fields are given as key=value options, quoted when they
contain spaces:
    create title="Data Intern" description="ETL work" level=BASIC
           majors=CCDS,COE open=2026-01-05 close=2026-02-05 slots=3
"""

from constants import PlacementConstants
from models import ApplicationStatus, CompanyRep, InternshipLevel, InternshipStatus, InvalidArgumentError, Major
from orchestrator.company_rep_controller import CompanyRepController
from orchestrator.login_controller import LoginController
from utils.report_utils import ReportUtils
from .cli import RoleCLI
from .input_parsing import (
    expect_args,
    parse_date,
    parse_enum,
    parse_int,
    parse_majors,
    parse_option_tokens,
    parse_options,
    split_args,
)

CREATE_KEYS = ("title", "description", "level", "majors", "open", "close", "slots")
UPDATE_KEYS = ("title", "description", "level", "open", "close", "slots")
REQUIRED_CREATE_KEYS = ("title", "description", "level", "open", "close")


class CompanyRepCLI(RoleCLI):
    prompt = "(company rep) "

    def __init__(
        self,
        user: CompanyRep,
        login_controller: LoginController,
        company_rep_controller: CompanyRepController,
        **kwargs,
    ):
        super().__init__(user, login_controller, **kwargs)
        self.controller = company_rep_controller

    # -------------------------------------------------------------------------
    # Internships
    # -------------------------------------------------------------------------

    def do_create(self, arg):
        """
        Create an internship (PENDING until staff approve it).
        Usage: create title=T description=D level=LEVEL open=YYYY-MM-DD close=YYYY-MM-DD [majors=M1,M2] [slots=N]
        """
        options = parse_options(arg, CREATE_KEYS)
        missing = [key for key in REQUIRED_CREATE_KEYS if not options.get(key, "").strip()]
        if missing:
            raise InvalidArgumentError(f"Missing option(s): {', '.join(missing)}")

        internship = self.controller.create_internship(
            self.user,
            title=options["title"].strip(),
            description=options["description"].strip(),
            level=parse_enum(InternshipLevel, options["level"]),
            preferred_majors=parse_majors(options.get("majors", "")),
            open_date=parse_date(options["open"], "opening date"),
            close_date=parse_date(options["close"], "closing date"),
            number_of_slots=self._parse_slots(options.get("slots")),
        )
        self.emit(f"Internship {internship.internship_id} created and awaiting approval.")

    def do_internships(self, arg):
        """
        List your internships, optionally by status.
        Usage: internships [PENDING|APPROVED|REJECTED|FILLED]
        """
        status = parse_enum(InternshipStatus, arg) if arg.strip() else None
        self.emit(ReportUtils.format_internships(self.controller.view_internships(self.user, status)))

    def do_update(self, arg):
        """
        Edit a PENDING internship.
        Usage: update INTERNSHIP_ID [title=T] [description=D] [level=LEVEL] [open=DATE] [close=DATE] [slots=N]
        """
        parts = split_args(arg)
        if not parts:
            raise InvalidArgumentError("Usage: update INTERNSHIP_ID key=value ...")
        internship_id = parts[0]
        options = parse_option_tokens(parts[1:], UPDATE_KEYS)
        if not options:
            raise InvalidArgumentError("Nothing to update")

        self.controller.update_internship(
            self.user,
            internship_id,
            title=options["title"].strip() if "title" in options else None,
            description=options["description"].strip() if "description" in options else None,
            level=parse_enum(InternshipLevel, options["level"]) if "level" in options else None,
            open_date=parse_date(options["open"], "opening date") if "open" in options else None,
            close_date=parse_date(options["close"], "closing date") if "close" in options else None,
            number_of_slots=self._parse_slots(options["slots"]) if "slots" in options else None,
        )
        self.emit(f"Internship {internship_id} updated.")

    def do_addmajor(self, arg):
        """
        Add a preferred major to a PENDING internship.
        Usage: addmajor INTERNSHIP_ID MAJOR
        """
        internship_id, raw_major = expect_args(arg, 2, "addmajor INTERNSHIP_ID MAJOR")
        major = self._parse_major(raw_major)
        self.controller.add_preferred_major(self.user, internship_id, major)
        self.emit(f"Major {major.value} added to {internship_id}.")

    def do_removemajor(self, arg):
        """
        Remove a preferred major from a PENDING internship.
        Usage: removemajor INTERNSHIP_ID MAJOR
        """
        internship_id, raw_major = expect_args(arg, 2, "removemajor INTERNSHIP_ID MAJOR")
        major = self._parse_major(raw_major)
        self.controller.remove_preferred_major(self.user, internship_id, major)
        self.emit(f"Major {major.value} removed from {internship_id}.")

    def do_delete(self, arg):
        """
        Delete a PENDING internship; its applications are withdrawn.
        Usage: delete INTERNSHIP_ID
        """
        (internship_id,) = expect_args(arg, 1, "delete INTERNSHIP_ID")
        self.controller.delete_internship(self.user, internship_id)
        self.emit(f"Internship {internship_id} deleted.")

    def do_toggle(self, arg):
        """
        Show or hide an internship from students.
        Usage: toggle INTERNSHIP_ID
        """
        (internship_id,) = expect_args(arg, 1, "toggle INTERNSHIP_ID")
        visible = self.controller.toggle_visibility(self.user, internship_id)
        self.emit(f"Internship {internship_id} is now {'visible' if visible else 'hidden'}.")

    # -------------------------------------------------------------------------
    # Applications
    # -------------------------------------------------------------------------

    def do_applications(self, arg):
        """
        List the applications to one of your internships.
        Usage: applications INTERNSHIP_ID
        """
        (internship_id,) = expect_args(arg, 1, "applications INTERNSHIP_ID")
        self.emit(ReportUtils.format_applications(self.controller.view_applications(self.user, internship_id)))

    def do_decide(self, arg):
        """
        Mark an application successful or unsuccessful.
        Usage: decide INTERNSHIP_ID APPLICATION_ID SUCCESSFUL|UNSUCCESSFUL
        """
        internship_id, application_id, raw_decision = expect_args(
            arg, 3, "decide INTERNSHIP_ID APPLICATION_ID SUCCESSFUL|UNSUCCESSFUL"
        )
        decision = parse_enum(ApplicationStatus, raw_decision)
        self.controller.process_application(self.user, internship_id, application_id, decision)
        self.emit(f"Application {application_id} marked {decision.value}.")

    # Helpers

    @staticmethod
    def _parse_slots(raw) -> int:
        if raw is None or not str(raw).strip():
            return PlacementConstants.DEFAULT_SLOTS
        return parse_int(raw, PlacementConstants.MIN_SLOTS, PlacementConstants.MAX_SLOTS, "slots")

    @staticmethod
    def _parse_major(raw: str) -> Major:
        majors = parse_majors(raw)
        if len(majors) != 1:
            raise InvalidArgumentError("Give exactly one major")
        return majors[0]
