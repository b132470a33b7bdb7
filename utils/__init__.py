"""
Utility functions and helpers for the internship placement manager.

report_utils depends on the models package, so it is imported by its full
path (utils.report_utils) rather than re-exported here; models import
regex_utils during their own initialization.
"""

from .regex_utils import RegexUtils, RegexPatterns

__all__ = [
    'RegexUtils',
    'RegexPatterns',
]
