"""
Command Line Interface Module

Console shells built on the standard `cmd` module:
- LoginCLI: login, company representative registration, quit
- RoleCLI: base class for the per-role shells (profile, passwd, logout)
- BaseShell: stream injection and error display shared by both

Arguments are split shell-style (shlex), so values with spaces go in quotes:
    register rep@acme.com "Bob Tan" "Acme Corp" HR Recruiter

BaseShell.onecmd is the one place that catches PlacementError; the message is
printed and the shell keeps running. Parse helpers in ui.input_parsing raise
before any controller call, so a typo never mutates state.
"""

import cmd
from typing import IO, Optional

from constants import Messages
from models import PlacementError, User, UserRole
from orchestrator.login_controller import LoginController
from storage.logs_manager import LogsManager
from .input_parsing import expect_args, split_args


def describe_user(user: User) -> str:
    """Multi-line profile text for any role."""
    lines = [f"ID: {user.user_id}", f"Name: {user.name}", f"Role: {user.role.value}"]
    match user.role:
        case UserRole.STUDENT:
            lines.append(f"Major: {user.major.value}")
            lines.append(f"Year of study: {user.year_of_study}")
            lines.append(f"Accepted application: {user.accepted_application_id or '-'}")
        case UserRole.COMPANY_REPRESENTATIVE:
            lines.append(f"Company: {user.company_name}")
            lines.append(f"Department: {user.department}")
            lines.append(f"Position: {user.position}")
            lines.append(f"Status: {'Approved' if user.approved else 'Pending approval'}")
        case UserRole.CAREER_CENTER_STAFF:
            lines.append(f"Department: {user.department}")
    return "\n".join(lines)


class BaseShell(cmd.Cmd):
    """Shared plumbing: injectable streams, error display, no repeat on empty line."""

    def __init__(
        self,
        logs_manager: Optional[LogsManager] = None,
        stdin: Optional[IO[str]] = None,
        stdout: Optional[IO[str]] = None,
    ):
        super().__init__(stdin=stdin, stdout=stdout)
        if stdin is not None:
            self.use_rawinput = False
        self.logs_manager = logs_manager

    def emit(self, text: str = "") -> None:
        self.stdout.write(f"{text}\n")

    def onecmd(self, line):
        try:
            return super().onecmd(line)
        except PlacementError as e:
            self.emit(f"Error: {e}")
            if self.logs_manager:
                self.logs_manager.debug(f"Command {line!r} failed: {type(e).__name__}: {e}")
            return False

    def emptyline(self):
        return False

    def default(self, line):
        self.emit(f"Unknown command: {line}")
        self.emit("Type 'help' or '?' for available commands.")


class LoginCLI(BaseShell):
    intro = "Internship Placement Management System. Type help or ? to list commands.\n"
    prompt = "(login) "

    def __init__(self, login_controller: LoginController, **kwargs):
        super().__init__(**kwargs)
        self.login_controller = login_controller
        self.user: Optional[User] = None
        self.quit_requested = False

    def preloop(self):
        self.user = None

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def do_login(self, arg):
        """
        Log in.
        Usage: login USER_ID PASSWORD
        """
        user_id, password = expect_args(arg, 2, "login USER_ID PASSWORD")
        user = self.login_controller.login(user_id, password)
        if user is None:
            self.emit("Login failed: wrong ID or password, or account not approved yet.")
            return False
        self.user = user
        self.emit(f"Welcome, {user.name}.")
        return True

    def do_register(self, arg):
        """
        Register as a company representative (needs staff approval before login).
        Usage: register EMAIL NAME COMPANY DEPARTMENT POSITION [PASSWORD]
        """
        parts = split_args(arg)
        if len(parts) not in (5, 6):
            self.emit("Usage: register EMAIL NAME COMPANY DEPARTMENT POSITION [PASSWORD]")
            return False
        rep = self.login_controller.register_company_rep(*parts)
        self.emit(f"Registered {rep.user_id}. Please wait for career center approval.")
        return False

    def do_quit(self, arg):
        """Exit the application."""
        self.quit_requested = True
        return True

    def do_EOF(self, arg):
        self.emit()
        return self.do_quit(arg)


class RoleCLI(BaseShell):
    """Shell for a logged-in user. Returning True from a command ends the session."""

    def __init__(self, user: User, login_controller: LoginController, **kwargs):
        super().__init__(**kwargs)
        self.user = user
        self.login_controller = login_controller
        self.intro = f"Logged in as {user.name} ({user.role.value}). Type help or ? to list commands.\n"

    def do_profile(self, arg):
        """Show your profile."""
        self.emit(describe_user(self.user))

    def do_passwd(self, arg):
        """
        Change your password.
        Usage: passwd OLD_PASSWORD NEW_PASSWORD
        """
        old_password, new_password = expect_args(arg, 2, "passwd OLD_PASSWORD NEW_PASSWORD")
        if self.login_controller.change_password(self.user, old_password, new_password):
            self.emit("Password changed.")
        else:
            self.emit("Old password does not match.")

    def do_logout(self, arg):
        """End the session and return to the login prompt."""
        if self.logs_manager:
            self.logs_manager.info(Messages.LOGOUT_MESSAGE.format(self.user.user_id))
        self.emit("Logged out.")
        return True

    def do_EOF(self, arg):
        self.emit()
        return self.do_logout(arg)
