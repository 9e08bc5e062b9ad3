"""Logging that renders records as GitHub Actions workflow commands."""

import logging
import sys

_COMMANDS = {
    logging.DEBUG: "debug",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}

# These log the full request URL, which includes the webhook key and token
_QUIET_LOGGERS = ("httpx", "httpcore")


def escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class ActionsFormatter(logging.Formatter):
    """
    Format debug, warning and error records as ``::<command>::<message>`` so
    the runner shows them as debug lines or annotations. Info records are
    printed unchanged.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = _COMMANDS.get(record.levelno)
        if command is None:
            return message
        return f"::{command}::{escape_data(message)}"


def configure_logging(debug: bool = False) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ActionsFormatter("%(message)s"))
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        handlers=[handler],
        force=True,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
