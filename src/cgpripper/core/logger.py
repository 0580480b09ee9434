"""
Logging and Error Tracking

This module provides centralized logging configuration and a small error
tracker for the ripper. Console output goes to stdout; rotating log files are
written only when a log directory is configured.
"""

import logging
import logging.handlers
import os
import sys
from datetime import datetime
from typing import Optional, Dict, Any
import traceback
from pathlib import Path


APP_NAME = "cgpripper"


class RipperLogger:
    """
    Centralized logging system for the ripper.

    Sets up one application logger with a console handler and, optionally,
    a detailed rotating log file plus an errors-only log file.
    """

    def __init__(self, log_dir: Optional[str] = None, app_name: str = APP_NAME):
        """
        Initialize the logging system.

        Args:
            log_dir: Directory to store log files, or None for console only
            app_name: Name of the application logger
        """
        self.log_dir = Path(log_dir) if log_dir else None
        self.app_name = app_name

        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)

    def setup_logger(self, verbose: bool = False) -> logging.Logger:
        """
        Set up the main application logger.

        Args:
            verbose: Show INFO messages on the console instead of warnings only

        Returns:
            Configured logger instance
        """
        logger = logging.getLogger(self.app_name)
        logger.setLevel(logging.DEBUG)

        # Re-initialising replaces the previous handlers
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        detailed_formatter = logging.Formatter(
            '%(asctime)s | %(name)s | %(levelname)s | %(funcName)s:%(lineno)d | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        console_formatter = logging.Formatter(
            '%(asctime)s | %(levelname)s | %(message)s',
            datefmt='%H:%M:%S'
        )

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO if verbose else logging.WARNING)
        console_handler.setFormatter(console_formatter)
        logger.addHandler(console_handler)

        if self.log_dir is not None:
            log_file = self.log_dir / f"{self.app_name}.log"
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=10*1024*1024,  # 10MB
                backupCount=5,
                encoding='utf-8'
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(detailed_formatter)

            error_file = self.log_dir / f"{self.app_name}_errors.log"
            error_handler = logging.handlers.RotatingFileHandler(
                error_file,
                maxBytes=5*1024*1024,  # 5MB
                backupCount=3,
                encoding='utf-8'
            )
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(detailed_formatter)

            logger.addHandler(file_handler)
            logger.addHandler(error_handler)

        return logger

    def log_system_info(self):
        """Log system information for debugging."""
        logger = logging.getLogger(f"{self.app_name}.system")

        logger.debug(f"Python version: {sys.version}")
        logger.debug(f"Platform: {sys.platform}")
        logger.debug(f"Working directory: {os.getcwd()}")
        if self.log_dir is not None:
            logger.debug(f"Log directory: {self.log_dir.absolute()}")


class ErrorTracker:
    """
    Tracks the errors and warnings raised while ripping one book.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self.errors: list = []
        self.warnings: list = []

    def log_error(self,
                  error: Exception,
                  context: str = None,
                  page: int = None) -> str:
        """
        Log an error with context information.

        Args:
            error: The exception that occurred
            context: Context where the error occurred
            page: Page number being processed when the error occurred

        Returns:
            Error ID for tracking
        """
        error_id = f"ERR_{datetime.now().strftime('%Y%m%d_%H%M%S')}_{len(self.errors):03d}"

        error_data = {
            'id': error_id,
            'timestamp': datetime.now(),
            'type': type(error).__name__,
            'message': str(error),
            'context': context,
            'page': page,
            'traceback': traceback.format_exc(),
        }

        self.errors.append(error_data)

        log_message = f"[{error_id}] {error_data['type']}: {error_data['message']}"
        if context:
            log_message += f" (Context: {context})"
        if page is not None:
            log_message += f" (Page: {page})"

        self.logger.error(log_message)
        self.logger.debug(f"[{error_id}] Full traceback:\n{error_data['traceback']}")

        return error_id

    def log_warning(self,
                    message: str,
                    context: str = None,
                    page: int = None) -> str:
        """
        Log a warning with context information.

        Returns:
            Warning ID for tracking
        """
        warning_id = f"WARN_{datetime.now().strftime('%Y%m%d_%H%M%S')}_{len(self.warnings):03d}"

        self.warnings.append({
            'id': warning_id,
            'timestamp': datetime.now(),
            'message': message,
            'context': context,
            'page': page,
        })

        log_message = f"[{warning_id}] {message}"
        if context:
            log_message += f" (Context: {context})"
        if page is not None:
            log_message += f" (Page: {page})"

        self.logger.warning(log_message)

        return warning_id

    def get_error_summary(self) -> Dict[str, Any]:
        """
        Get a summary of all errors and warnings.

        Returns:
            Dictionary with error statistics and details
        """
        return {
            'total_errors': len(self.errors),
            'total_warnings': len(self.warnings),
            'error_types': self._count_error_types(),
            'recent_errors': self.errors[-5:] if self.errors else [],
            'recent_warnings': self.warnings[-5:] if self.warnings else []
        }

    def _count_error_types(self) -> Dict[str, int]:
        """Count errors by type."""
        type_counts = {}
        for error in self.errors:
            error_type = error['type']
            type_counts[error_type] = type_counts.get(error_type, 0) + 1
        return type_counts


def initialize_logging(log_dir: Optional[str] = None, verbose: bool = False) -> logging.Logger:
    """
    Configure the application logger.

    Args:
        log_dir: Directory for log files, or None to log to the console only
        verbose: Show progress messages on the console
    """
    ripper_logger = RipperLogger(log_dir)
    logger = ripper_logger.setup_logger(verbose)
    ripper_logger.log_system_info()
    return logger
