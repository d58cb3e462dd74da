import logging
import os
import sys
from datetime import datetime
from enum import Enum
from logging.handlers import RotatingFileHandler
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class LogMode(Enum):
    NONE = "none"  # No logging
    FILE_ONLY = "file"  # Log to file only
    CONSOLE_ONLY = "console"  # Log to console only
    ALL = "all"  # Log to both file and console


def setup_global_logger(level=logging.INFO, mode=LogMode.CONSOLE_ONLY, log_dir="logs") -> Optional[str]:
    """
    Configure the root logger with flexible output options

    Args:
        level: Logging level (e.g., logging.INFO, logging.DEBUG) or its name
        mode: LogMode enum or its value determining where logs should be output
        log_dir: Base directory for log files, one subdirectory per day

    Returns:
        str: Path of the log file, or None when no file handler was added
    """
    mode = LogMode(mode)
    logger = logging.getLogger()

    # If logging is disabled, set up a null handler
    if mode == LogMode.NONE:
        logger.handlers = [logging.NullHandler()]
        return None

    logger.setLevel(level)

    # Clear any existing handlers
    logger.handlers = []

    formatter = logging.Formatter(LOG_FORMAT)

    if mode in [LogMode.CONSOLE_ONLY, LogMode.ALL]:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    log_file = None
    if mode in [LogMode.FILE_ONLY, LogMode.ALL]:
        # Create directory for today's date
        today = datetime.now().strftime("%Y%m%d")
        daily_dir = os.path.join(log_dir, today)
        os.makedirs(daily_dir, exist_ok=True)

        timestamp = datetime.now().strftime("%H%M%S")
        log_file = os.path.join(daily_dir, f"spline_{timestamp}.log")

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=1024 * 1024,  # 1MB
            backupCount=3,
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        if mode == LogMode.ALL:
            logger.info(f"Logging started - Log file: {log_file}")

    return log_file


def setup_logger_from_config(config_manager, log_dir="logs") -> Optional[str]:
    """Configure logging from the "logging" section of the configuration"""
    level = str(config_manager.get_value("logging", "level", "INFO")).upper()
    mode = config_manager.get_value("logging", "mode", LogMode.CONSOLE_ONLY.value)
    return setup_global_logger(level=level, mode=mode, log_dir=log_dir)


def set_log_level(level):
    """Dynamically change the log level"""
    logging.getLogger().setLevel(level)
