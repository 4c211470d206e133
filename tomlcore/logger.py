from typing import NotRequired, TextIO, TypedDict
import logging
import sys
from .utils import resolve_config

ROOT_LOGGER_NAME = "tomlcore"


class LoggerConfig(TypedDict):
    name: NotRequired[str]
    is_enabled: NotRequired[bool]
    level: NotRequired[int]
    format: NotRequired[str]
    stream: NotRequired[TextIO | None]


class LoggerConfigRequired(TypedDict):
    name: str
    is_enabled: bool
    level: int
    format: str
    stream: TextIO | None


DEFAULT_LOGGER_CONFIG: LoggerConfigRequired = {
    "name": "core",
    "is_enabled": True,
    "level": logging.DEBUG,
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    "stream": None,
}


def _find_handler(logger: logging.Logger) -> logging.StreamHandler | None:
    for handler in logger.handlers:
        if getattr(handler, "_tomlcore", False):
            return handler  # type: ignore[return-value]
    return None


class Logger:
    """Named ``tomlcore.<name>`` logger with one stream handler per name.

    The underlying logger is shared by every user of a name, so a disabled
    ``Logger`` leaves it untouched; callers check ``is_enabled`` before logging.
    An enabled one reconfigures the shared handler with its own stream and format.
    """

    def __init__(self, config: LoggerConfig | None = None):
        self.config = resolve_config(config or {}, DEFAULT_LOGGER_CONFIG)
        self.is_enabled: bool = self.config["is_enabled"]
        self.logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{self.config['name']}")
        self.set_configuration()

    def set_configuration(self):
        if not self.is_enabled:
            return

        self.logger.disabled = False
        self.logger.setLevel(self.config["level"])
        stream = self.config["stream"] or sys.stderr
        handler = _find_handler(self.logger)
        if handler is None:
            handler = logging.StreamHandler(stream)
            handler._tomlcore = True  # type: ignore[attr-defined]
            self.logger.addHandler(handler)
        else:
            handler.setStream(stream)
        handler.setFormatter(logging.Formatter(self.config["format"]))
