"""
CSV Storage Module (Sync)

Persistence boundary of the placement manager. Uses pandas for CSV
reading/writing and pydantic record schemas for per-row validation:
- `load()` builds a fresh DataRepository from six CSV files and reports
  whether every row parsed; invalid rows are logged and copied to
  invalid_rows.csv
- `save()` rewrites every file from the repository, but only after a
  successful load so a half-read data set never overwrites good files
- passwords and emails are tracked here, next to the files they live in

Student and staff lists are required. The company representative,
internship, application and withdrawal files are created empty when
missing.
"""

from datetime import date, datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple, Type

import pandas as pd
from pydantic import BaseModel, Field, ValidationError, field_validator

from constants import Messages, StorageConstants
from models import (
    Application,
    ApplicationStatus,
    CareerStaff,
    CompanyRep,
    Internship,
    InternshipLevel,
    InternshipStatus,
    Major,
    PlacementError,
    Student,
    UserRole,
    WithdrawalRequest,
    WithdrawalStatus,
)
from .logs_manager import LogsManager
from .repository import DataRepository


# -----------------------------------------------------------------------------
# Row schemas (one per CSV file, aliases are the CSV headers)
# -----------------------------------------------------------------------------

class _Record(BaseModel):
    class Config:
        populate_by_name = True
        str_strip_whitespace = True


class StudentRecord(_Record):
    student_id: str = Field(alias="StudentID", min_length=1)
    password: str = Field("", alias="Password")
    name: str = Field(alias="Name", min_length=1)
    major: Major = Field(alias="Major")
    year: int = Field(alias="Year")
    email: str = Field("", alias="Email")
    registered_at: Optional[datetime] = Field(None, alias="RegisteredAt")

    @field_validator("major", mode="before")
    @classmethod
    def _parse_major(cls, value):
        return Major.parse(value) if isinstance(value, str) else value


class StaffRecord(_Record):
    staff_id: str = Field(alias="StaffID", min_length=1)
    password: str = Field("", alias="Password")
    name: str = Field(alias="Name", min_length=1)
    department: str = Field("", alias="Department")
    email: str = Field("", alias="Email")
    registered_at: Optional[datetime] = Field(None, alias="RegisteredAt")


class CompanyRepRecord(_Record):
    rep_id: str = Field(alias="CompanyRepID", min_length=1)
    password: str = Field("", alias="Password")
    name: str = Field(alias="Name", min_length=1)
    company_name: str = Field(alias="CompanyName", min_length=1)
    department: str = Field("", alias="Department")
    position: str = Field("", alias="Position")
    email: str = Field("", alias="Email")
    status: str = Field("PENDING", alias="Status")
    registered_at: Optional[datetime] = Field(None, alias="RegisteredAt")

    @property
    def approved(self) -> bool:
        return self.status.upper() == "APPROVED"


class InternshipRecord(_Record):
    internship_id: str = Field(alias="InternshipID", min_length=1)
    title: str = Field(alias="Title")
    description: str = Field(alias="Description")
    level: InternshipLevel = Field(alias="Level")
    preferred_majors: List[Major] = Field(default_factory=list, alias="PreferredMajor")
    open_date: date = Field(alias="OpenDate")
    close_date: date = Field(alias="CloseDate")
    company_name: str = Field(alias="CompanyName")
    status: InternshipStatus = Field(alias="Status")
    slots: int = Field(alias="Slots")
    confirmed: int = Field(0, alias="Confirmed")
    visible: bool = Field(True, alias="Visible")
    company_rep_id: Optional[str] = Field(None, alias="CompanyRepID")

    @field_validator("level", "status", mode="before")
    @classmethod
    def _upper(cls, value):
        return value.upper() if isinstance(value, str) else value

    @field_validator("preferred_majors", mode="before")
    @classmethod
    def _split_majors(cls, value):
        if isinstance(value, str):
            return [
                Major.parse(m)
                for m in value.split(StorageConstants.MAJOR_SEPARATOR)
                if m.strip()
            ]
        return value


class ApplicationRecord(_Record):
    application_id: str = Field(alias="ApplicationID", min_length=1)
    student_id: str = Field(alias="StudentID", min_length=1)
    internship_id: str = Field(alias="InternshipID", min_length=1)
    status: ApplicationStatus = Field(alias="ApplicationStatus")
    accepted: bool = Field(False, alias="IsAccepted")
    applied_at: Optional[datetime] = Field(None, alias="AppliedAt")

    @field_validator("status", mode="before")
    @classmethod
    def _upper(cls, value):
        return value.upper() if isinstance(value, str) else value


class WithdrawalRecord(_Record):
    request_id: str = Field(alias="RequestID", min_length=1)
    application_id: str = Field(alias="ApplicationID", min_length=1)
    student_id: str = Field(alias="StudentID", min_length=1)
    internship_id: str = Field(alias="InternshipID", min_length=1)
    requested_at: datetime = Field(alias="RequestDate")
    status: WithdrawalStatus = Field(alias="Status")

    @field_validator("status", mode="before")
    @classmethod
    def _upper(cls, value):
        return value.upper() if isinstance(value, str) else value


def _parse_record(schema: Type[BaseModel], row: dict) -> BaseModel:
    """Validate a CSV row; blank cells count as missing so defaults apply."""
    data = {k: v for k, v in row.items() if isinstance(k, str) and str(v).strip() != ""}
    return schema.model_validate(data)


def _entity_kwargs(**values) -> dict:
    """Drop None values so entity defaults (e.g. registered_at) apply."""
    return {k: v for k, v in values.items() if v is not None}


class CSVStorage:
    def __init__(self, settings: dict, logs_manager: LogsManager):
        """
        Args:
            settings (dict): Must include settings['system']['data_dir'].
            logs_manager: Shared LogsManager instance.
        """
        self.data_dir = Path(settings['system']['data_dir'])
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.logs_manager = logs_manager

        self._passwords: Dict[str, str] = {}
        self._emails: Dict[str, str] = {}
        self._confirmed_on_file: Dict[str, int] = {}
        self.loaded_successfully = False

    # -------------------------------------------------------------------------
    # File helpers
    # -------------------------------------------------------------------------

    def _path(self, base_filename: str) -> Path:
        return self.data_dir / f"{base_filename}.csv"

    def save_data(
        self,
        data: List[dict],
        base_filename: str,
        columns: List[str],
        append: bool = False,
    ) -> None:
        """
        Write rows to <data_dir>/<base_filename>.csv.

        Args:
            data: list of dictionaries keyed by column name.
            base_filename: file name without extension.
            columns: column order (also written as header for empty data).
            append: append rows instead of overwriting the file.
        """
        df = pd.DataFrame(data, columns=columns)
        file_path = self._path(base_filename)
        mode = 'a' if append else 'w'
        header = not (append and file_path.exists())
        df.to_csv(file_path, mode=mode, header=header, index=False)

    def load_data(self, base_filename: str, columns: List[str]) -> Optional[pd.DataFrame]:
        """
        Read a CSV file as strings. Columns missing from older files are added
        blank. Returns None if the file doesn't exist.
        """
        file_path = self._path(base_filename)
        if not file_path.exists():
            return None
        try:
            df = pd.read_csv(file_path, dtype=str, keep_default_na=False)
        except pd.errors.EmptyDataError:
            df = pd.DataFrame(columns=columns)
        for column in columns:
            if column not in df.columns:
                df[column] = ""
        return df

    def _record_invalid_rows(self, rows: List[dict]) -> None:
        self.save_data(
            data=rows,
            base_filename=StorageConstants.INVALID_ROWS_FILE,
            columns=["Source", "Line", "Error", "Row"],
            append=True,
        )

    def _read_section(self, base_filename: str, columns: List[str], required: bool) -> Optional[pd.DataFrame]:
        df = self.load_data(base_filename, columns)
        if df is not None:
            return df
        if required:
            self.logs_manager.critical(f"Required data file missing: {self._path(base_filename)}")
            return None
        self.save_data([], base_filename, columns)
        self.logs_manager.info(Messages.FILE_CREATED.format(base_filename))
        return pd.DataFrame(columns=columns)

    def _load_rows(
        self,
        base_filename: str,
        columns: List[str],
        label: str,
        parse_row: Callable[[dict], None],
        required: bool = False,
    ) -> int:
        """Parse every row of one file; returns the number of errors."""
        df = self._read_section(base_filename, columns, required)
        if df is None:
            return 1

        success, errors = 0, 0
        invalid_rows = []
        # Line 1 is the header
        for line_number, row in enumerate(df.to_dict("records"), start=2):
            if not any(str(v).strip() for v in row.values()):
                continue
            try:
                parse_row(row)
                success += 1
            except (ValidationError, ValueError, PlacementError) as e:
                errors += 1
                self.logs_manager.error(Messages.ROW_INVALID.format(label, line_number, e))
                invalid_rows.append({
                    "Source": base_filename,
                    "Line": line_number,
                    "Error": str(e),
                    "Row": ",".join(str(v) for v in row.values()),
                })

        if invalid_rows:
            self._record_invalid_rows(invalid_rows)
        self.logs_manager.info(Messages.LOAD_SECTION.format(
            label, success, f" (errors: {errors})" if errors else ""
        ))
        return errors

    # -------------------------------------------------------------------------
    # Load
    # -------------------------------------------------------------------------

    def load(self) -> Tuple[DataRepository, bool]:
        """
        Build a repository from the CSV files.

        Returns:
            (repository, success). When success is False the caller must not
            mutate or save the data.
        """
        repository = DataRepository()
        self._passwords.clear()
        self._emails.clear()
        self._confirmed_on_file.clear()
        self.loaded_successfully = False
        self.logs_manager.info(Messages.LOAD_STARTED.format(self.data_dir))

        total_errors = 0
        total_errors += self._load_rows(
            StorageConstants.STUDENT_FILE, StorageConstants.STUDENT_COLUMNS, "Students",
            lambda row: self._parse_student(repository, row), required=True,
        )
        total_errors += self._load_rows(
            StorageConstants.STAFF_FILE, StorageConstants.STAFF_COLUMNS, "Staff",
            lambda row: self._parse_staff(repository, row), required=True,
        )
        total_errors += self._load_rows(
            StorageConstants.COMPANY_REP_FILE, StorageConstants.COMPANY_REP_COLUMNS, "Company reps",
            lambda row: self._parse_company_rep(repository, row),
        )
        total_errors += self._load_rows(
            StorageConstants.INTERNSHIP_FILE, StorageConstants.INTERNSHIP_COLUMNS, "Internships",
            lambda row: self._parse_internship(repository, row),
        )
        total_errors += self._load_rows(
            StorageConstants.APPLICATION_FILE, StorageConstants.APPLICATION_COLUMNS, "Applications",
            lambda row: self._parse_application(repository, row),
        )
        total_errors += self._load_rows(
            StorageConstants.WITHDRAWAL_FILE, StorageConstants.WITHDRAWAL_COLUMNS, "Withdrawal requests",
            lambda row: self._parse_withdrawal(repository, row),
        )

        self._reconcile_slots(repository)

        if total_errors:
            self.logs_manager.error(Messages.LOAD_FAILED.format(total_errors))
        else:
            self.logs_manager.info(Messages.LOAD_COMPLETED)
            self.loaded_successfully = True
        return repository, self.loaded_successfully

    def _parse_student(self, repository: DataRepository, row: dict) -> None:
        record = _parse_record(StudentRecord, row)
        student = Student(**_entity_kwargs(
            user_id=record.student_id,
            name=record.name,
            password=record.password,
            year_of_study=record.year,
            major=record.major,
            registered_at=record.registered_at,
        ))
        self._passwords[student.user_id] = student.password
        self._emails[student.user_id] = record.email
        repository.add_user(student)

    def _parse_staff(self, repository: DataRepository, row: dict) -> None:
        record = _parse_record(StaffRecord, row)
        staff = CareerStaff(**_entity_kwargs(
            user_id=record.staff_id,
            name=record.name,
            password=record.password,
            department=record.department,
            registered_at=record.registered_at,
        ))
        self._passwords[staff.user_id] = staff.password
        self._emails[staff.user_id] = record.email
        repository.add_user(staff)

    def _parse_company_rep(self, repository: DataRepository, row: dict) -> None:
        record = _parse_record(CompanyRepRecord, row)
        rep = CompanyRep(**_entity_kwargs(
            user_id=record.rep_id,
            name=record.name,
            password=record.password,
            company_name=record.company_name,
            department=record.department,
            position=record.position,
            approved=record.approved,
            registered_at=record.registered_at,
        ))
        self._passwords[rep.user_id] = rep.password
        self._emails[rep.user_id] = record.email or rep.user_id
        repository.add_user(rep)

    def _parse_internship(self, repository: DataRepository, row: dict) -> None:
        record = _parse_record(InternshipRecord, row)

        rep = None
        if record.company_rep_id:
            rep = repository.find_company_rep(record.company_rep_id)
        if rep is None:
            # Older files only carry the company name
            rep = next(
                (u for u in repository.users_by_role(UserRole.COMPANY_REPRESENTATIVE)
                 if u.company_name == record.company_name),
                None,
            )

        internship = Internship(
            internship_id=record.internship_id,
            title=record.title,
            description=record.description,
            level=record.level,
            preferred_majors=record.preferred_majors,
            open_date=record.open_date,
            close_date=record.close_date,
            company_name=record.company_name,
            company_rep_id=rep.user_id if rep else record.company_rep_id,
            status=record.status,
            number_of_slots=record.slots,
            visible=record.visible,
        )

        if rep is not None:
            rep.add_internship(internship)
        else:
            self.logs_manager.warning(
                f"Internship {record.internship_id}: company rep not found for '{record.company_name}'"
            )
        self._confirmed_on_file[internship.internship_id] = record.confirmed
        repository.add_internship(internship)

    def _parse_application(self, repository: DataRepository, row: dict) -> None:
        record = _parse_record(ApplicationRecord, row)
        student = repository.find_student(record.student_id)
        if student is None:
            raise ValueError(f"Student {record.student_id} not found")
        internship = repository.find_internship(record.internship_id)
        if internship is None and (record.accepted or record.status != ApplicationStatus.UNSUCCESSFUL):
            raise ValueError(f"Internship {record.internship_id} not found")
        if record.accepted:
            if student.accepted_application_id is not None:
                raise ValueError(f"Student {student.user_id} has more than one accepted application")
            if not internship.has_free_slot:
                raise ValueError(f"Internship {internship.internship_id} has more interns than slots")

        application = Application(**_entity_kwargs(
            application_id=record.application_id,
            student_id=student.user_id,
            internship_id=record.internship_id,
            status=record.status,
            applied_at=record.applied_at,
        ))
        student.add_application(application)
        if internship is None:
            # Withdrawn when its internship was deleted; kept for the student's history
            self.logs_manager.debug(f"Application {record.application_id}: internship {record.internship_id} was deleted")
            return
        internship.add_application(application)
        if record.accepted:
            student.mark_accepted(application)
            internship.add_intern(student.user_id)

    def _parse_withdrawal(self, repository: DataRepository, row: dict) -> None:
        record = _parse_record(WithdrawalRecord, row)
        student = repository.find_student(record.student_id)
        if student is None:
            raise ValueError(f"Student {record.student_id} not found")
        if student.find_application(record.application_id) is None:
            raise ValueError(f"Application {record.application_id} not found")

        repository.add_withdrawal(WithdrawalRequest(
            request_id=record.request_id,
            application_id=record.application_id,
            student_id=record.student_id,
            internship_id=record.internship_id,
            requested_at=record.requested_at,
            status=record.status,
        ))

    def _reconcile_slots(self, repository: DataRepository) -> None:
        """Interns come from accepted applications; the Confirmed column is only checked."""
        for internship in repository.all_internships():
            internship.refresh_fill_status()
            on_file = self._confirmed_on_file.get(internship.internship_id)
            if on_file is not None and on_file != internship.confirmed_slots:
                self.logs_manager.warning(
                    f"Internship {internship.internship_id}: Confirmed column says {on_file}, "
                    f"accepted applications give {internship.confirmed_slots}"
                )

    # -------------------------------------------------------------------------
    # Save
    # -------------------------------------------------------------------------

    def save(self, repository: DataRepository) -> bool:
        """Rewrite every CSV file. Refused unless the last load succeeded."""
        if not self.loaded_successfully:
            self.logs_manager.error(Messages.SAVE_REFUSED)
            return False

        students, staff, reps = [], [], []
        for user in repository.all_users():
            password = self._passwords.get(user.user_id, user.password)
            registered = user.registered_at.isoformat()
            match user.role:
                case UserRole.STUDENT:
                    students.append({
                        "StudentID": user.user_id,
                        "Password": password,
                        "Name": user.name,
                        "Major": user.major.value,
                        "Year": user.year_of_study,
                        "Email": self._emails.get(user.user_id, ""),
                        "RegisteredAt": registered,
                    })
                case UserRole.CAREER_CENTER_STAFF:
                    staff.append({
                        "StaffID": user.user_id,
                        "Password": password,
                        "Name": user.name,
                        "Role": user.role.value,
                        "Department": user.department,
                        "Email": self._emails.get(user.user_id)
                        or f"{user.user_id}@{StorageConstants.STAFF_EMAIL_DOMAIN}",
                        "RegisteredAt": registered,
                    })
                case UserRole.COMPANY_REPRESENTATIVE:
                    reps.append({
                        "CompanyRepID": user.user_id,
                        "Password": password,
                        "Name": user.name,
                        "CompanyName": user.company_name,
                        "Department": user.department,
                        "Position": user.position,
                        "Email": self._emails.get(user.user_id) or user.user_id,
                        "Status": "APPROVED" if user.approved else "PENDING",
                        "RegisteredAt": registered,
                    })

        internships = [
            {
                "InternshipID": i.internship_id,
                "Title": i.title,
                "Description": i.description,
                "Level": i.level.value,
                "PreferredMajor": StorageConstants.MAJOR_SEPARATOR.join(m.value for m in i.preferred_majors),
                "OpenDate": i.open_date.strftime(StorageConstants.DATE_FORMAT),
                "CloseDate": i.close_date.strftime(StorageConstants.DATE_FORMAT),
                "CompanyName": i.company_name,
                "Status": i.status.value,
                "Slots": i.number_of_slots,
                "Confirmed": i.confirmed_slots,
                "Visible": i.visible,
                "CompanyRepID": i.company_rep_id or "",
            }
            for i in repository.all_internships()
        ]

        applications = [
            {
                "ApplicationID": a.application_id,
                "StudentID": a.student_id,
                "InternshipID": a.internship_id,
                "ApplicationStatus": a.status.value,
                "IsAccepted": a.accepted,
                "AppliedAt": a.applied_at.isoformat(),
            }
            for student in repository.users_by_role(UserRole.STUDENT)
            for a in student.applications
        ]

        withdrawals = [
            {
                "RequestID": w.request_id,
                "ApplicationID": w.application_id,
                "StudentID": w.student_id,
                "InternshipID": w.internship_id,
                "RequestDate": w.requested_at.isoformat(),
                "Status": w.status.value,
            }
            for w in repository.all_withdrawals()
        ]

        self.save_data(students, StorageConstants.STUDENT_FILE, StorageConstants.STUDENT_COLUMNS)
        self.save_data(staff, StorageConstants.STAFF_FILE, StorageConstants.STAFF_COLUMNS)
        self.save_data(reps, StorageConstants.COMPANY_REP_FILE, StorageConstants.COMPANY_REP_COLUMNS)
        self.save_data(internships, StorageConstants.INTERNSHIP_FILE, StorageConstants.INTERNSHIP_COLUMNS)
        self.save_data(applications, StorageConstants.APPLICATION_FILE, StorageConstants.APPLICATION_COLUMNS)
        self.save_data(withdrawals, StorageConstants.WITHDRAWAL_FILE, StorageConstants.WITHDRAWAL_COLUMNS)
        self.logs_manager.info(Messages.SAVE_COMPLETED.format(self.data_dir))
        return True

    # -------------------------------------------------------------------------
    # Credential store
    # -------------------------------------------------------------------------

    def update_password(self, user_id: str, new_password: str) -> None:
        self._passwords[user_id] = new_password

    def password_for(self, user_id: str) -> Optional[str]:
        return self._passwords.get(user_id)

    def email_for(self, user_id: str) -> Optional[str]:
        return self._emails.get(user_id)
