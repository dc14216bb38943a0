"""
Logging Configuration
Sets up the package logger for the bar chart viewer.

PyVista reports deprecated calls and odd inputs through the `warnings` module.
Those are captured into the 'py.warnings' logger, which gets the same handlers
as the package logger, so a log file holds the rendering warnings as well.
"""
import logging
import sys
from typing import Optional, Union

LOGGER_NAME = "barchart3d"
WARNINGS_LOGGER_NAME = "py.warnings"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def _parse_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown logging level '{level}'.")
    return value


def _make_handlers(level: int, log_file: Optional[str]) -> list[logging.Handler]:
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    capture_warnings: bool = True
) -> logging.Logger:
    """
    Configures the 'barchart3d' logger (and captured Python warnings).

    Calling it again replaces the handlers of the previous call.

    Args:
        level: Logging level, as a number or a name ("DEBUG", "info"...).
        log_file: Optional path to save logs to a file (overwritten).
        capture_warnings: Route `warnings.warn` output (PyVista, VTK) into logging.

    Returns:
        The configured package logger.
    """
    numeric_level = _parse_level(level)
    handlers = _make_handlers(numeric_level, log_file)

    logger = logging.getLogger(LOGGER_NAME)
    warnings_logger = logging.getLogger(WARNINGS_LOGGER_NAME)

    for target in (logger, warnings_logger):
        for old in list(target.handlers):
            target.removeHandler(old)
            old.close()

    logger.setLevel(numeric_level)
    for handler in handlers:
        logger.addHandler(handler)

    logging.captureWarnings(capture_warnings)
    if capture_warnings:
        for handler in handlers:
            warnings_logger.addHandler(handler)

    logger.info(f"Logging initialized ({logging.getLevelName(numeric_level)}).")
    return logger
