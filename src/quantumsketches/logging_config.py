"""
Logging Configuration
=====================
Configures the 'quantumsketches' logger from the command line.

`python -m quantumsketches --log-level DEBUG --log-file sketches.log` ends up
here: the level name chosen on the command line applies to the console and to
the optional log file. DEBUG also shows every canvas geometry recomputation
on resize; INFO keeps to measurements, observer toggles and the theme.
"""
import logging
import sys
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%H:%M:%S'


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach a stdout handler (and a file handler if requested) to the package logger.

    Args:
        level: Numeric level or a name such as "DEBUG" from --log-level.
        log_file: Path given by --log-file; the file is overwritten on each start.

    Returns:
        The configured 'quantumsketches' logger.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")

    logger = logging.getLogger("quantumsketches")
    logger.setLevel(level)

    # main() may run more than once in a process (tests)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info(f"Logging initialized at {logging.getLevelName(level)}"
                + (f", writing to {log_file}." if log_file else "."))
    return logger
