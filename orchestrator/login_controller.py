"""
Login Controller

Authentication, password changes and company representative
self-registration. Password changes are forwarded to the credential store
(the CSV storage) so they survive the next save.
"""

from typing import Optional, Protocol

from pydantic import ValidationError

from constants import Messages
from models import CompanyRep, InvalidArgumentError, User, UserRole
from storage.logs_manager import LogsManager
from storage.repository import DataRepository
from utils.regex_utils import RegexUtils
from .base_controller import BaseController


class CredentialStore(Protocol):
    def update_password(self, user_id: str, new_password: str) -> None: ...


class LoginController(BaseController):
    def __init__(
        self,
        repository: DataRepository,
        credential_store: Optional[CredentialStore] = None,
        logs_manager: Optional[LogsManager] = None,
    ):
        super().__init__(repository, logs_manager)
        self.credential_store = credential_store

    def login(self, user_id: str, password: str) -> Optional[User]:
        """
        Returns the user, or None if the id is unknown, the password is wrong
        or the user is a company representative still awaiting approval.
        """
        user = self.repository.find_user(user_id)
        if user is None or not user.check_password(password):
            self._log_info(Messages.LOGIN_FAILED.format(user_id))
            return None

        match user.role:
            case UserRole.COMPANY_REPRESENTATIVE if not user.approved:
                self._log_info(Messages.LOGIN_FAILED.format(user_id))
                return None

        self._log_info(Messages.LOGIN_SUCCESS.format(user_id))
        return user

    def change_password(self, user: User, old_password: str, new_password: str) -> bool:
        if not user.change_password(old_password, new_password):
            return False
        if self.credential_store is not None:
            self.credential_store.update_password(user.user_id, new_password)
        self._log_info(Messages.PASSWORD_CHANGED.format(user.user_id))
        return True

    def register_company_rep(
        self,
        email: str,
        name: str,
        company_name: str,
        department: str,
        position: str,
        password: Optional[str] = None,
    ) -> CompanyRep:
        """Create an unapproved company representative keyed by email."""
        email = email.strip()
        if not RegexUtils.is_email(email):
            raise InvalidArgumentError(f"Invalid email format: {email!r}")
        if self.repository.find_user(email) is not None:
            raise InvalidArgumentError(f"User {email} already exists")

        try:
            rep = CompanyRep(
                user_id=email,
                name=name.strip(),
                company_name=company_name.strip(),
                department=department.strip(),
                position=position.strip(),
                password=password,
            )
        except ValidationError as e:
            raise InvalidArgumentError(str(e)) from e

        self.repository.add_user(rep)
        self._log_info(Messages.REP_REGISTERED.format(email))
        return rep
