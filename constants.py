"""
Global Constants Module

Single source of truth for placement limits, identifier formats, file layout
and standardized log messages used across controllers and storage.
"""


class PlacementConstants:
    """Limits enforced by the placement entities and controllers."""

    # Students
    MAX_APPLICATIONS = 3          # active (PENDING/SUCCESSFUL) applications per student
    BASIC_ONLY_MAX_YEAR = 2       # years 1-2 may only take BASIC internships

    # Company representatives
    MAX_ACTIVE_INTERNSHIPS = 5    # internships whose status is not REJECTED

    # Internships
    MIN_SLOTS = 1
    MAX_SLOTS = 10
    DEFAULT_SLOTS = 5

    # Users
    DEFAULT_PASSWORD = "password"

    # Identifier prefixes
    WITHDRAWAL_PREFIX = "WR-"


class StorageConstants:
    """CSV file names (without extension) and column layouts."""

    DATE_FORMAT = "%Y-%m-%d"

    STUDENT_FILE = "sample_student_list"
    STAFF_FILE = "sample_staff_list"
    COMPANY_REP_FILE = "sample_company_representative_list"
    INTERNSHIP_FILE = "Internship"
    APPLICATION_FILE = "Application"
    WITHDRAWAL_FILE = "WithdrawalRequest"
    INVALID_ROWS_FILE = "invalid_rows"

    STUDENT_COLUMNS = ["StudentID", "Password", "Name", "Major", "Year", "Email", "RegisteredAt"]
    STAFF_COLUMNS = ["StaffID", "Password", "Name", "Role", "Department", "Email", "RegisteredAt"]
    COMPANY_REP_COLUMNS = [
        "CompanyRepID", "Password", "Name", "CompanyName", "Department",
        "Position", "Email", "Status", "RegisteredAt",
    ]
    INTERNSHIP_COLUMNS = [
        "InternshipID", "Title", "Description", "Level", "PreferredMajor",
        "OpenDate", "CloseDate", "CompanyName", "Status", "Slots", "Confirmed",
        "Visible", "CompanyRepID",
    ]
    APPLICATION_COLUMNS = [
        "ApplicationID", "StudentID", "InternshipID", "ApplicationStatus",
        "IsAccepted", "AppliedAt",
    ]
    WITHDRAWAL_COLUMNS = [
        "RequestID", "ApplicationID", "StudentID", "InternshipID", "RequestDate", "Status",
    ]

    MAJOR_SEPARATOR = ";"
    STAFF_EMAIL_DOMAIN = "ntu.edu.sg"


class Messages:
    """
    Standard messages used across controllers and storage for consistent logging.
    """
    # Session messages
    LOGIN_SUCCESS = "User {} logged in."
    LOGIN_FAILED = "Login failed for {}."
    LOGOUT_MESSAGE = "User {} logged out."
    PASSWORD_CHANGED = "Password changed for {}."

    # Student actions
    APPLICATION_CREATED = "Application {} created."
    APPLICATION_ACCEPTED = "Application {} accepted; {} other application(s) withdrawn."
    APPLICATION_REJECTED = "Application {} rejected by student."
    WITHDRAWAL_REQUESTED = "Withdrawal request {} submitted."

    # Company representative actions
    REP_REGISTERED = "Company representative {} registered, pending approval."
    INTERNSHIP_CREATED = "Internship {} created."
    INTERNSHIP_UPDATED = "Internship {} updated."
    INTERNSHIP_DELETED = "Internship {} deleted; {} application(s) withdrawn."
    APPLICATION_PROCESSED = "Application {} marked {}."
    VISIBILITY_TOGGLED = "Internship {} visibility set to {}."

    # Staff actions
    REP_APPROVED = "Company representative {} approved."
    REP_REJECTED = "Company representative {} rejected and removed."
    INTERNSHIP_DECIDED = "Internship {} set to {}."
    WITHDRAWAL_PROCESSED = "Withdrawal request {} {}."
    SLOT_RELEASED = "Slot released on internship {} by student {}."
    REPORT_WRITTEN = "Report written to {}."

    # Storage
    LOAD_STARTED = "Loading data from CSV files in {}"
    LOAD_SECTION = "  {} loaded: {}{}"
    LOAD_FAILED = "{} error(s) occurred during loading. Data will NOT be saved on exit."
    LOAD_COMPLETED = "Data loaded successfully."
    SAVE_REFUSED = "Data was not loaded properly, files will not be overwritten."
    SAVE_COMPLETED = "All data saved to {}."
    ROW_INVALID = "Invalid {} row {}: {}"
    FILE_CREATED = "No {} file found. Created an empty one."
