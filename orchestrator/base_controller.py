"""
Base controller shared by the role controllers.
"""

from typing import Optional

from storage.logs_manager import LogsManager
from storage.repository import DataRepository


class BaseController:
    """Holds the injected repository and optional logs manager."""

    def __init__(self, repository: DataRepository, logs_manager: Optional[LogsManager] = None):
        self.repository = repository
        self.logs_manager = logs_manager

    def _log_info(self, msg: str) -> None:
        if self.logs_manager:
            self.logs_manager.info(msg)

    def _log_debug(self, msg: str) -> None:
        if self.logs_manager:
            self.logs_manager.debug(msg)
