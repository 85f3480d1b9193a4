import logging
from enum import Enum

LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"

# `extra=` keys the store, API adapter and coordinator attach to records.
LOG_CONTEXT_KEYS = ("booking_id", "operation", "status_code", "date", "slot", "step", "reason", "error")


def _render(value: object) -> str:
    if isinstance(value, Enum):
        value = value.value
    text = str(value)
    if not text or any(ch.isspace() for ch in text) or '"' in text:
        return '"' + text.replace('"', '\\"') + '"'
    return text


class ContextFormatter(logging.Formatter):
    """Formats the base line, then appends `key=value` pairs for any context keys
    present on the record. Values containing whitespace are quoted so an error
    message stays one field."""

    def __init__(self, fmt: str = LOG_FORMAT, keys: tuple[str, ...] = LOG_CONTEXT_KEYS) -> None:
        super().__init__(fmt)
        self.keys = keys

    def context(self, record: logging.LogRecord) -> list[str]:
        pairs = []
        for key in self.keys:
            value = record.__dict__.get(key)
            if value is None or value == "":
                continue
            pairs.append(f"{key}={_render(value)}")
        return pairs

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        pairs = self.context(record)
        return f"{line} | {' '.join(pairs)}" if pairs else line


def configure_logging(level: str, stream=None) -> logging.Handler:
    handler = logging.StreamHandler(stream)
    handler.setFormatter(ContextFormatter())

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)
    return handler
