"""
In-memory Data Repository

Keyed storage for users, internships and withdrawal requests. One instance
is built by the CSV storage at startup and handed to every controller; there
is no global accessor.

Lookups of unknown ids return None and removals of unknown ids are no-ops.
Callers turn absence into domain errors. Inserting an existing key replaces
the stored object.
"""

from typing import Dict, List, Optional

from models import CompanyRep, Internship, Student, User, UserRole, WithdrawalRequest


class DataRepository:
    def __init__(self):
        self._users: Dict[str, User] = {}
        self._internships: Dict[str, Internship] = {}
        self._withdrawals: Dict[str, WithdrawalRequest] = {}

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def add_user(self, user: User) -> None:
        self._users[user.user_id] = user

    def remove_user(self, user_id: str) -> None:
        self._users.pop(user_id, None)

    def find_user(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    def all_users(self) -> List[User]:
        return list(self._users.values())

    def users_by_role(self, role: UserRole) -> List[User]:
        return [u for u in self._users.values() if u.role == role]

    def find_student(self, user_id: str) -> Optional[Student]:
        user = self._users.get(user_id)
        if user is not None and user.role == UserRole.STUDENT:
            return user
        return None

    def find_company_rep(self, user_id: str) -> Optional[CompanyRep]:
        user = self._users.get(user_id)
        if user is not None and user.role == UserRole.COMPANY_REPRESENTATIVE:
            return user
        return None

    # ------------------------------------------------------------------
    # Internships
    # ------------------------------------------------------------------

    def add_internship(self, internship: Internship) -> None:
        self._internships[internship.internship_id] = internship

    def remove_internship(self, internship_id: str) -> None:
        self._internships.pop(internship_id, None)

    def find_internship(self, internship_id: str) -> Optional[Internship]:
        return self._internships.get(internship_id)

    def all_internships(self) -> List[Internship]:
        return list(self._internships.values())

    # ------------------------------------------------------------------
    # Withdrawal requests
    # ------------------------------------------------------------------

    def add_withdrawal(self, request: WithdrawalRequest) -> None:
        self._withdrawals[request.request_id] = request

    def find_withdrawal(self, request_id: str) -> Optional[WithdrawalRequest]:
        return self._withdrawals.get(request_id)

    def all_withdrawals(self) -> List[WithdrawalRequest]:
        return list(self._withdrawals.values())
