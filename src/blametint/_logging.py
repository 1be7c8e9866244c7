"""
Multiple calls to logging.getLogger("name") with the same "name" string will always
return the same logger instance. If no name is provided, as in logging.getLogger(),
the root logger is returned. This ensures that loggers are singletons and can be
configured centrally.

The root logger is configured here and is not used for logging itself. Modules log via
a named (child) logger: logger = logging.getLogger(__name__).
"""

import logging
from logging import StreamHandler, getLogger

import colorlog

from blametint.constants import DEFAULT_VERBOSITY

FORMAT = "%(levelname)s %(name)s %(funcName)s %(lineno)s\n%(message)s\n"
FORMAT_INFO = "%(message)s"


def ini_for_cli(verbosity: int = DEFAULT_VERBOSITY) -> StreamHandler:
    set_logging_level_from_verbosity(verbosity)
    handler = add_cli_handler()
    return handler


def set_logging_level_from_verbosity(verbosity: int | None) -> None:
    root_logger = getLogger()
    if verbosity is None:
        verbosity = DEFAULT_VERBOSITY
    match verbosity:
        case 0:
            root_logger.setLevel(logging.WARNING)  # verbosity == 0
        case 1:
            root_logger.setLevel(logging.INFO)  # verbosity == 1
        case 2:
            root_logger.setLevel(logging.DEBUG)  # verbosity == 2
        case _:
            raise ValueError(f"Unknown verbosity level: {verbosity}")


def add_cli_handler() -> StreamHandler:
    root_logger = getLogger()
    # Calling main() more than once in the same process must not duplicate output.
    for handler in root_logger.handlers:
        if isinstance(handler.formatter, CustomColoredFormatter):
            return handler  # type: ignore
    cli_handler = StreamHandler()
    cli_handler.setFormatter(get_custom_cli_color_formatter())
    root_logger.addHandler(cli_handler)
    return cli_handler


def get_custom_cli_color_formatter() -> "CustomColoredFormatter":
    return CustomColoredFormatter(
        "%(log_color)s" + FORMAT,
        info_fmt="%(log_color)s" + FORMAT_INFO,  # Different format for INFO level
        reset=True,
        log_colors={
            "DEBUG": "cyan",
            "INFO": "white",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "red,bg_white",
        },
        style="%",
    )


class CustomColoredFormatter(colorlog.ColoredFormatter):
    def __init__(self, fmt, info_fmt, *args, **kwargs):
        super().__init__(fmt, *args, **kwargs)
        self.default_fmt = fmt
        self.info_fmt = info_fmt

    def format(self, record):
        if record.levelno == logging.INFO:
            original_fmt = self._style._fmt
            self._style._fmt = self.info_fmt
            result = super().format(record)
            self._style._fmt = original_fmt
            return result
        else:
            return super().format(record)
