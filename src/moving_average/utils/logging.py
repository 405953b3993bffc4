"""Package logger setup, from explicit arguments or the ``logging`` config section."""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from moving_average.utils.config_parser import (
    ACCUMULATOR_SECTION,
    LOGGING_SECTION,
    get_nested_value,
    validate_logging_config,
)

LOGGER_NAME = "moving_average"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _resolve_level(log_level: Union[str, int]) -> int:
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def _build_handlers(log_file: Optional[Path]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))
    return handlers


def setup_logging(
    log_level: Union[str, int] = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    log_format: Optional[str] = None,
) -> logging.Logger:
    """
    Attach console and optional file handlers to the package logger.

    Handlers from an earlier call are closed and replaced, so repeated setup
    never duplicates output.

    Parameters
    ----------
    log_level : Union[str, int], optional
        Level name or number; unknown names fall back to INFO, by default "INFO"
    log_file : Union[str, Path], optional
        File that also receives the records; parent directories are created
    log_format : str, optional
        Record format, by default DEFAULT_FORMAT

    Returns
    -------
    logging.Logger
        The ``moving_average`` logger

    Examples
    --------
    >>> logger = setup_logging("DEBUG")
    >>> logger.debug("Discarded threshold outcomes are now visible")
    """
    numeric_level = _resolve_level(log_level)
    formatter = logging.Formatter(log_format or DEFAULT_FORMAT)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    for handler in _build_handlers(log_file):
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def configure_logging(config: Dict[str, Any]) -> logging.Logger:
    """
    Set up the package logger from configuration.

    Parameters
    ----------
    config : Dict[str, Any]
        Either a full configuration document as returned by ``load_config``
        or just its ``logging`` section (``level``, ``file``, ``format``).
        A document without a ``logging`` section gives the defaults.

    Returns
    -------
    logging.Logger
        The configured ``moving_average`` logger

    Raises
    ------
    ConfigurationError
        If the logging section is invalid

    Examples
    --------
    >>> logger = configure_logging(load_config("config/moving_average.yaml"))
    """
    if LOGGING_SECTION in config:
        section = config[LOGGING_SECTION]
    elif ACCUMULATOR_SECTION in config:
        section = None
    else:
        section = config
    validate_logging_config(section)
    section = section or {}

    logger = setup_logging(
        get_nested_value(section, "level", "INFO"),
        log_file=get_nested_value(section, "file"),
        log_format=get_nested_value(section, "format"),
    )
    logger.debug(f"Logging configured at level {logging.getLevelName(logger.level)}")
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get the package logger or one of its children.

    Examples
    --------
    >>> get_logger("pipeline").name
    'moving_average.pipeline'
    """
    if name is None:
        return logging.getLogger(LOGGER_NAME)
    if name == LOGGER_NAME or name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
