"""Logging setup."""

import logging
import sys
from typing import Union

APP_LOGGER_PREFIX = "vocabbox"


class _OnlyAppOrThirdPartyWarnings(logging.Filter):
    """Pass every app record but only WARNING+ from third-party loggers."""

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name or ""
        if name.startswith(APP_LOGGER_PREFIX) or name == "__main__":
            return True
        return record.levelno >= logging.WARNING


def setup_logger(
    level: Union[int, str] = "INFO",
    *,
    include_time: bool = True,
    quiet_third_party: bool = True,
) -> None:
    """
    Configure root logging to emit to stdout.

    Args:
        level: Log level as int or name (e.g. "DEBUG")
        include_time: Whether to include timestamps in log records
        quiet_third_party: Hold flet/aiohttp/etc. loggers at WARNING
    """
    root = logging.getLogger()
    root.setLevel(level)

    # Re-configuring must not duplicate output
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream=sys.stdout)

    parts = ["%(asctime)s"] if include_time else []
    parts.extend(["%(levelname)s", "%(name)s", "-", "%(message)s"])
    handler.setFormatter(logging.Formatter(fmt=" ".join(parts), datefmt="%Y-%m-%d %H:%M:%S"))

    if quiet_third_party:
        handler.addFilter(_OnlyAppOrThirdPartyWarnings())

    root.addHandler(handler)
