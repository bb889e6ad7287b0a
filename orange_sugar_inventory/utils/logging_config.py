"""
Logging configuration for the inventory application.
"""
import os
import logging
from datetime import datetime
import threading

# Track if logging has been initialized
_logging_initialized = False
_logging_lock = threading.Lock()


def _level_from_env(default=logging.INFO):
    """
    Resolve the log level from INVENTORY_LOG_LEVEL.

    Args:
        default: Level used when the variable is unset or unknown

    Returns:
        int: Logging level
    """
    name = os.environ.get("INVENTORY_LOG_LEVEL")
    if not name:
        return default
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else default


def setup_logging(log_level=None, log_dir=None):
    """
    Set up logging configuration.

    Args:
        log_level: Logging level (default: INVENTORY_LOG_LEVEL or INFO)
        log_dir: Directory for log files (default: INVENTORY_LOG_DIR or "logs")

    Returns:
        logging.Logger: Configured logger
    """
    global _logging_initialized

    with _logging_lock:
        if _logging_initialized:
            return logging.getLogger()

        if log_level is None:
            log_level = _level_from_env()
        if log_dir is None:
            log_dir = os.environ.get("INVENTORY_LOG_DIR", "logs")

        os.makedirs(log_dir, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = os.path.join(log_dir, f"inventory_{timestamp}.log")

        logger = logging.getLogger()
        logger.setLevel(log_level)

        for handler in logger.handlers[:]:
            logger.removeHandler(handler)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)

        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        file_handler.setFormatter(formatter)
        console_handler.setFormatter(formatter)

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)

        logger.info(f"Logging initialized. Log file: {log_file}")

        _logging_initialized = True

        return logger


def get_logger(name):
    """
    Get a logger for a specific module.

    Args:
        name: Name of the module (typically __name__)

    Returns:
        logging.Logger: Logger instance
    """
    if not _logging_initialized:
        setup_logging()

    return logging.getLogger(name)
