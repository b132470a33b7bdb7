"""
Configuration Package

Settings for the placement manager, read from the environment and an
optional .env file.

Components:
- settings: load_settings() returning the nested settings dict
  (system paths, log level, console echo, approval policy)
"""

from .settings import load_settings

__all__ = ['load_settings']
