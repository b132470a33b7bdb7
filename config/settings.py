"""
Configuration Management Module

Builds the placement manager's settings dict from environment variables
(optionally seeded from a .env file via python-dotenv). Invalid values fall
back to their defaults with a printed warning; the data, logs and reports
directories are created on load.
"""

import os
from dotenv import load_dotenv
from pathlib import Path

_TRUE_VALUES = ('true', '1', 'yes', 'on')
_FALSE_VALUES = ('false', '0', 'no', 'off', '')
_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def _parse_flag(name: str, default: str, warnings: list[str]) -> bool:
    raw = os.getenv(name, default).strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw not in _FALSE_VALUES:
        warnings.append(f"Invalid {name} value '{raw}'. Using default: {default}")
        return default.lower() in _TRUE_VALUES
    return False


def _validate_env_vars(config: dict) -> list[str]:
    """Validate environment variables and return list of warnings."""
    warnings = []

    if config['system']['log_level'] not in _LOG_LEVELS:
        warnings.append(
            f"Invalid LOG_LEVEL value '{config['system']['log_level']}'. Using default: INFO"
        )
        config['system']['log_level'] = 'INFO'

    return warnings


def _setup_data_directories(config: dict) -> list[str]:
    """Setup required data directories and return any warnings."""
    warnings = []
    required_dirs = [
        Path(config['system']['data_dir']),
        Path(config['system']['data_dir']) / 'logs',
        Path(config['system']['reports_dir']),
    ]

    for path in required_dirs:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            warnings.append(f"Failed to create directory '{path}': {e}")

    return warnings


def load_settings() -> dict:
    """
    Load and validate all configuration settings.

    Environment variables (all optional):
    - DATA_DIR: directory holding the CSV files (./data)
    - REPORTS_DIR: where staff reports are written (./reports)
    - LOG_LEVEL: INFO or DEBUG (INFO)
    - LOG_CONSOLE_OUTPUT: echo info/debug logs to the console (false)
    - ALLOW_INTERNSHIP_REDECISION: let staff re-approve/re-reject an
      internship that already has a decision (false)
    """
    load_dotenv()  # Load variables from .env

    warnings = []

    config = {
        'system': {
            'data_dir': os.getenv('DATA_DIR', './data'),
            'reports_dir': os.getenv('REPORTS_DIR', './reports'),
            'log_level': os.getenv('LOG_LEVEL', 'INFO').strip().upper(),
        },
        'logging': {
            'console_output': _parse_flag('LOG_CONSOLE_OUTPUT', 'false', warnings),
        },
        'policy': {
            'allow_internship_redecision': _parse_flag('ALLOW_INTERNSHIP_REDECISION', 'false', warnings),
        },
    }

    warnings.extend(_validate_env_vars(config))
    warnings.extend(_setup_data_directories(config))

    for warning in warnings:
        print(f"[Settings] WARNING: {warning}")

    return config
