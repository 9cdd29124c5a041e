"""Process-wide logging setup shared by the API and the CLI."""

import logging

from el_arca.core.settings import LogLevel, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: LogLevel | None = None) -> None:
    """Install a root handler using the configured log level."""

    logging.basicConfig(
        level=(level or get_settings().log_level).value,
        format=LOG_FORMAT,
    )
