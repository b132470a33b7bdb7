"""
Logging Management Module

Synchronous logging for the console placement manager:
- Daily log file naming (app_YYYYMMDD.log) under <data_dir>/logs
- Console echo with colorama colors (warnings yellow, errors red)
- Info/debug console echo can be silenced so menus stay readable
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

# For optional color in logs
from colorama import init as colorama_init, Fore, Style


class LogsManager:
    def __init__(self, settings: dict):
        """
        Args:
            settings (dict): Contains at least:
                {
                    "system": {
                        "data_dir": "./data",
                        "log_level": "INFO" or "DEBUG"
                    },
                    "logging": {
                        "console_output": False
                    }
                }
        """
        system_settings = settings.get('system', {})
        data_dir = system_settings.get('data_dir', './data')
        self.log_level = system_settings.get('log_level', 'INFO').upper()
        self.console_output = settings.get('logging', {}).get('console_output', False)

        self.log_dir = Path(data_dir) / 'logs'
        self.log_dir.mkdir(parents=True, exist_ok=True)

        # Daily filename approach
        self.log_file = self.log_dir / f"app_{datetime.now().strftime('%Y%m%d')}.log"

        # Created in `initialize()`
        self.logger: Optional[logging.Logger] = None
        self.file_handler: Optional[logging.FileHandler] = None
        self.is_initialized = False

        colorama_init(autoreset=False)

    def initialize(self):
        """Attach the daily file handler. Safe to call more than once."""
        if self.is_initialized:
            return

        # One logger per log file so test runs on separate directories stay apart
        self.logger = logging.getLogger(f"PlacementLogger.{self.log_file}")
        self.logger.setLevel(self.log_level)
        self.logger.propagate = False

        self.file_handler = logging.FileHandler(self.log_file, encoding="utf-8")
        self.file_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
        )
        self.logger.addHandler(self.file_handler)

        self.is_initialized = True
        self.logger.info("Logging system initialized successfully")

    def shutdown(self):
        """Flush and detach the file handler."""
        if not self.is_initialized:
            return

        if self.logger and self.file_handler:
            self.logger.removeHandler(self.file_handler)
            self.file_handler.close()

        self.file_handler = None
        self.is_initialized = False

    # -------------------------------------------------------------------------
    # Logging methods for convenience (info, debug, error, etc.)
    # -------------------------------------------------------------------------

    def info(self, msg: str):
        """Log an INFO-level message."""
        if self.console_output:
            print(f"[INFO] {msg}")
        if self.logger:
            self.logger.info(msg)

    def debug(self, msg: str):
        """Log a DEBUG-level message."""
        if self.log_level == "DEBUG" and self.console_output:
            print(f"[DEBUG] {msg}")
        if self.logger:
            self.logger.debug(msg)

    def warning(self, msg: str):
        """Log a WARNING-level message."""
        print(f"{Fore.YELLOW}[WARNING] {msg}{Style.RESET_ALL}")
        if self.logger:
            self.logger.warning(msg)

    def error(self, msg: str):
        """Log an ERROR-level message."""
        print(f"{Fore.RED}[ERROR] {msg}{Style.RESET_ALL}")
        if self.logger:
            self.logger.error(msg)

    def critical(self, msg: str):
        """Log a CRITICAL-level message."""
        print(f"{Fore.RED}[CRITICAL] {msg}{Style.RESET_ALL}")
        if self.logger:
            self.logger.critical(msg)
