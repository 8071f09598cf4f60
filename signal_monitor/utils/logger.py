"""
Logging utilities for the signal monitor
"""

import logging
import logging.handlers
import os
from datetime import datetime
from functools import wraps
from typing import Optional

from signal_monitor.config.settings import LoggingSettings

ROOT_LOGGER_NAME = "signal_monitor"


class SignalLogger:
    """Centralized logging for the signal monitor"""

    def __init__(self, settings: Optional[LoggingSettings] = None, name: str = ROOT_LOGGER_NAME):
        self.settings = settings or LoggingSettings()
        self.name = name
        self.log_dir = str(self.settings.log_directory)
        self.logger = logging.getLogger(name)
        self._setup_logger()

    def _setup_logger(self):
        """Setup logger with file and console handlers"""
        if self.logger.handlers:
            return  # Logger already configured

        self.logger.setLevel(self.settings.level)

        detailed_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
        )
        simple_formatter = logging.Formatter(self.settings.format)

        if self.settings.file_enabled:
            os.makedirs(self.log_dir, exist_ok=True)
            max_bytes = self.settings.max_file_size_mb * 1024 * 1024

            # File handler for all logs
            log_file = os.path.join(self.log_dir, f"{self.name.lower()}.log")
            file_handler = logging.handlers.RotatingFileHandler(
                log_file, maxBytes=max_bytes, backupCount=self.settings.backup_count
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(detailed_formatter)
            self.logger.addHandler(file_handler)

            # Error file handler
            error_log_file = os.path.join(self.log_dir, f"{self.name.lower()}_errors.log")
            error_file_handler = logging.handlers.RotatingFileHandler(
                error_log_file, maxBytes=max_bytes, backupCount=self.settings.backup_count
            )
            error_file_handler.setLevel(logging.ERROR)
            error_file_handler.setFormatter(detailed_formatter)
            self.logger.addHandler(error_file_handler)

        if self.settings.console_enabled:
            console_handler = logging.StreamHandler()
            console_handler.setLevel(self.settings.level)
            console_handler.setFormatter(simple_formatter)
            self.logger.addHandler(console_handler)

    def get_logger(self) -> logging.Logger:
        """Get the configured logger"""
        return self.logger

    @staticmethod
    def setup_module_logger(module_name: str, settings: Optional[LoggingSettings] = None) -> logging.Logger:
        """Get a child logger of the configured package logger"""
        SignalLogger(settings)
        return logging.getLogger(f"{ROOT_LOGGER_NAME}.{module_name}")


def log_performance(func):
    """Decorator to log function performance"""
    @wraps(func)
    def wrapper(*args, **kwargs):
        logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.performance")
        start_time = datetime.now()
        try:
            result = func(*args, **kwargs)
            duration = (datetime.now() - start_time).total_seconds()
            logger.debug(f"{func.__name__} completed in {duration:.3f} seconds")
            return result
        except Exception as e:
            duration = (datetime.now() - start_time).total_seconds()
            logger.error(f"{func.__name__} failed after {duration:.3f} seconds: {e}")
            raise
    return wrapper
