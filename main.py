"""
Internship Placement Management System

This file sets up:
1) Configuration & logs
2) The CSV-backed repository (a failed load stops the program)
3) The role controllers, sharing one repository
4) The session loop: login shell, then the shell of the user's role
5) A save after every session and once more at shutdown
"""

import sys
from typing import Optional

from config.settings import load_settings
from models import User, UserRole
from orchestrator import (
    CareerStaffController,
    CompanyRepController,
    LoginController,
    StudentController,
)
from storage.csv_storage import CSVStorage
from storage.logs_manager import LogsManager
from storage.repository import DataRepository
from ui import CareerStaffCLI, CompanyRepCLI, LoginCLI, RoleCLI, StudentCLI
from utils.report_utils import ReportUtils


class PlacementApp:
    """Wires the controllers to one repository and runs login sessions until quit."""

    def __init__(self, settings: dict, logs_manager: LogsManager, storage: CSVStorage, repository: DataRepository):
        self.settings = settings
        self.logs_manager = logs_manager
        self.storage = storage
        self.repository = repository

        self.login_controller = LoginController(repository, storage, logs_manager)
        self.student_controller = StudentController(repository, logs_manager)
        self.company_rep_controller = CompanyRepController(repository, logs_manager)
        self.staff_controller = CareerStaffController(
            repository,
            logs_manager,
            allow_internship_redecision=settings['policy']['allow_internship_redecision'],
        )
        self.report_utils = ReportUtils(settings['system']['reports_dir'], logs_manager)

    def shell_for(self, user: User, **kwargs) -> RoleCLI:
        match user.role:
            case UserRole.STUDENT:
                return StudentCLI(user, self.login_controller, self.student_controller, **kwargs)
            case UserRole.COMPANY_REPRESENTATIVE:
                return CompanyRepCLI(user, self.login_controller, self.company_rep_controller, **kwargs)
            case UserRole.CAREER_CENTER_STAFF:
                return CareerStaffCLI(
                    user, self.login_controller, self.staff_controller, self.report_utils, **kwargs
                )
        raise ValueError(f"Unsupported role: {user.role}")

    def run(self, **kwargs) -> None:
        login_cli = LoginCLI(self.login_controller, logs_manager=self.logs_manager, **kwargs)
        while True:
            login_cli.cmdloop()
            if login_cli.quit_requested or login_cli.user is None:
                break

            self.shell_for(login_cli.user, logs_manager=self.logs_manager, **kwargs).cmdloop()
            self.storage.save(self.repository)

            # Only show the banner on the first prompt
            login_cli.intro = None


def main() -> int:
    logs_manager: Optional[LogsManager] = None
    storage: Optional[CSVStorage] = None
    repository: Optional[DataRepository] = None

    try:
        settings = load_settings()
        logs_manager = LogsManager(settings)
        logs_manager.initialize()
        logs_manager.info("Starting Internship Placement Management System...")

        storage = CSVStorage(settings, logs_manager)
        repository, success = storage.load()
        if not success:
            logs_manager.critical("Critical error: data could not be loaded. Exiting.")
            return 1

        PlacementApp(settings, logs_manager, storage, repository).run()
        return 0

    except KeyboardInterrupt:
        print("\nUser pressed Ctrl+C. Saving and shutting down...")
        return 0
    finally:
        if storage is not None and repository is not None and storage.loaded_successfully:
            storage.save(repository)
        if logs_manager:
            logs_manager.info("Shutting down logging system...")
            logs_manager.shutdown()


if __name__ == "__main__":
    sys.exit(main())
