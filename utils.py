# utils.py
"""
Utility functions for the visual.

This module provides helper functions, such as logging setup and config
loading, that are used across the program but do not belong to the
simulation or rendering.
"""
import logging
import logging.handlers
import json
import numbers
import os
from typing import Dict, Any

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary that may contain a "logging" key with "level",
#       "format", "log_file", "max_bytes", "backup_count" and "console"
#       sub-keys.
#   - Side Effects: Configures the root Python logger. Creates a log
#     directory if it doesn't exist. Sets up a console handler and a
#     rotating file handler.
#
# load_config(path: str) -> Dict[str, Any]:
#   - Raises FileNotFoundError / json.JSONDecodeError after logging them.
#
# load_config_or_defaults(path: str) -> Dict[str, Any]:
#   - Same as load_config, but a missing file yields {} (all defaults).
#
# validate_config(config) -> config:
#   - Raises ValueError if the root or a known section is not an object.
#   - Warns about unknown sections and settings.
#
# check_int / check_float(key, value), config_int / config_float(params, key, default):
#   - Reads one numeric setting, raising ValueError on wrong types.

def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configures the logging system from a configuration dictionary.

    Sets up logging to both the console and a rotating file.
    """
    log_config = config.get('logging', {})
    log_level = log_config.get('level', 'INFO').upper()
    log_format = log_config.get('format', '%(asctime)s - %(levelname)s - %(message)s')
    log_file_path = log_config.get('log_file', 'logs/dots.log')
    max_bytes = log_config.get('max_bytes', 1024*1024)
    backup_count = log_config.get('backup_count', 5)
    to_console = log_config.get('console', True)

    log_dir = os.path.dirname(log_file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Clear existing handlers to avoid duplication
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(log_format)

    if to_console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    # Defaults rotate at 1MB and keep 5 backups.
    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path, maxBytes=max_bytes, backupCount=backup_count
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    logging.info("Logging system initialized.")
    logging.debug(f"Log level set to {log_level}.")
    logging.debug(f"Log file path: {log_file_path}")

def load_config(path: str) -> Dict[str, Any]:
    """Loads a JSON configuration file."""
    logging.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
        logging.info("Configuration loaded successfully.")
        return config
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logging.error(f"Error decoding JSON from {path}.")
        raise

def load_config_or_defaults(path: str) -> Dict[str, Any]:
    """Loads `path` if it exists; every setting has a built-in default."""
    if not os.path.exists(path):
        return {}
    return load_config(path)

# Top-level sections of config.json and the setting names each one accepts.
CONFIG_SECTIONS = {
    'simulation_parameters': {'seed', 'particle_count', 'speed'},
    'rendering': {
        'screen_width', 'screen_height', 'window_title', 'vsync', 'max_fps',
        'dot_radius', 'connect_distance', 'cursor_extra_distance',
        'pair_strategy', 'pair_window', 'stroke_policy'
    },
    'run_control': {'ticks_per_second', 'max_steps', 'log_throttle_ticks', 'quit_key', 'profile'},
    'logging': {'level', 'format', 'log_file', 'max_bytes', 'backup_count', 'console'},
}

def _config_error(msg: str) -> ValueError:
    logging.critical(msg)
    return ValueError(msg)

def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Checks the layout of a loaded config: every section must be a JSON
    object. Unknown sections and settings are reported but ignored.
    """
    if not isinstance(config, dict):
        raise _config_error(f"Configuration error: expected a JSON object, got {type(config).__name__}.")
    for section, values in config.items():
        if section not in CONFIG_SECTIONS:
            logging.warning(f"Ignoring unknown config section '{section}'.")
            continue
        if not isinstance(values, dict):
            raise _config_error(f"Configuration error: section '{section}' must be a JSON object.")
        for key in sorted(set(values) - CONFIG_SECTIONS[section]):
            logging.warning(f"Ignoring unknown setting '{section}.{key}'.")
    return config

def check_int(key: str, value: Any) -> int:
    """
    Validates an integer setting. Whole-valued floats such as 200.0 are
    accepted; fractions, booleans and strings are configuration errors.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise _config_error(f"Configuration error: '{key}' must be an integer, got {value!r}.")
    if not isinstance(value, numbers.Integral) and not float(value).is_integer():
        raise _config_error(f"Configuration error: '{key}' must be a whole number, got {value!r}.")
    return int(value)

def check_float(key: str, value: Any) -> float:
    """Validates a numeric setting. Booleans and strings are configuration errors."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise _config_error(f"Configuration error: '{key}' must be a number, got {value!r}.")
    return float(value)

def config_int(params: Dict[str, Any], key: str, default: int) -> int:
    return check_int(key, params.get(key, default))

def config_float(params: Dict[str, Any], key: str, default: float) -> float:
    return check_float(key, params.get(key, default))
