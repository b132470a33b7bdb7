"""
Storage Package

This package handles in-memory storage, CSV persistence and logging.

Components:
- DataRepository: Keyed in-memory storage of users, internships and withdrawals
- CSVStorage: Loads/saves the repository from/to CSV files
- LogsManager: Manages application logging
"""

from .csv_storage import CSVStorage
from .logs_manager import LogsManager
from .repository import DataRepository

__all__ = ['CSVStorage', 'LogsManager', 'DataRepository']
