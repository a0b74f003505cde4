"""
Centralized logging configuration.

Provides bootstrap_logging, which entry points call to configure logging the
same way everywhere, using Python's native INI format when a logging.ini exists.
"""

import logging
import logging.config
import os
import sys
from pathlib import Path
from typing import Optional

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
DEFAULT_FORMAT = '%(levelname)s: %(name)s: %(message)s'


def _find_logging_config() -> Optional[Path]:
    """
    Find the logging configuration file.

    Looks for the file named by PARAMETER_SYNC_LOGGING_CONFIG, then logging.ini
    in the current working directory.

    Returns:
        Path to logging configuration file, or None if not found.
    """
    override = os.environ.get('PARAMETER_SYNC_LOGGING_CONFIG')
    if override and Path(override).exists():
        return Path(override)

    current_dir_config = Path('logging.ini')
    if current_dir_config.exists():
        return current_dir_config

    return None


def _get_env_log_level() -> Optional[str]:
    """Return the validated LOG_LEVEL environment variable, if set."""
    env_log_level = os.environ.get('LOG_LEVEL', '').strip().upper()
    if not env_log_level:
        return None
    if env_log_level not in LOG_LEVELS:
        print(f"Warning: Invalid LOG_LEVEL '{env_log_level}', using INFO", file=sys.stderr)
        return 'INFO'
    return env_log_level


def bootstrap_logging(debug: bool = False) -> None:
    """
    Bootstrap logging configuration for parameter-sync.

    This function:
    1. Loads configuration from logging.ini using logging.config.fileConfig() if found
    2. Otherwise falls back to basicConfig on stderr
    3. Applies the LOG_LEVEL environment variable override after loading
    4. Forces DEBUG on the parameter_sync logger when debug is set

    Args:
        debug: Enable debug logging for parameter_sync
    """
    config_path = _find_logging_config()
    level_name = _get_env_log_level()

    if config_path is None:
        logging.basicConfig(
            level=getattr(logging, level_name or 'WARNING'),
            format=DEFAULT_FORMAT,
            stream=sys.stderr
        )
    else:
        try:
            logging.config.fileConfig(str(config_path), disable_existing_loggers=False)
        except Exception as e:
            print(f"Warning: Failed to load logging config from {config_path}: {e}", file=sys.stderr)
            print("Using basic logging configuration", file=sys.stderr)
            logging.basicConfig(level=logging.INFO, format=DEFAULT_FORMAT, stream=sys.stderr)

        if level_name:
            root_logger = logging.getLogger()
            root_logger.setLevel(getattr(logging, level_name))
            for handler in root_logger.handlers:
                if isinstance(handler, logging.StreamHandler):
                    handler.setLevel(getattr(logging, level_name))

    if debug:
        logging.getLogger('parameter_sync').setLevel(logging.DEBUG)
        for handler in logging.getLogger().handlers:
            handler.setLevel(logging.DEBUG)

    logging.getLogger(__name__).debug(f"Logging configured from {config_path or 'defaults'}")
