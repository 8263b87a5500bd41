# comparable/logging.py
from __future__ import annotations
import logging as _logging
import os
import sys

_ANSI = {
    "reset": "\x1b[0m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "red": "\x1b[31m",
    "cyan": "\x1b[36m",
    "gray": "\x1b[90m",
}

_COLOR_ENABLED: bool = False
_LOGGER = _logging.getLogger("comparable")
_LOGGER.addHandler(_logging.NullHandler())

_VERBOSITY_LEVELS = {0: _logging.WARNING, 1: _logging.INFO}


def _supports_color(stream) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty()) and (os.environ.get("TERM") not in (None, "dumb"))


def c(text: str, color: str) -> str:
    if not _COLOR_ENABLED:
        return text
    return f"{_ANSI.get(color, '')}{text}{_ANSI['reset']}"


def get_logger() -> _logging.Logger:
    return _LOGGER


def setup_logging(verbosity: int = 0, log_file: str | None = None, *, stream=None) -> None:
    """Attach console (and optional file) handlers. Verbosity: 0→WARNING, 1→INFO, 2+→DEBUG."""
    global _COLOR_ENABLED
    stream = stream if stream is not None else sys.stderr
    _COLOR_ENABLED = _supports_color(stream)

    level = _VERBOSITY_LEVELS.get(max(verbosity, 0), _logging.DEBUG)

    for h in list(_LOGGER.handlers):
        if not isinstance(h, _logging.NullHandler):
            _LOGGER.removeHandler(h)
            h.close()
    _LOGGER.setLevel(level)

    fmt = _logging.Formatter("%(message)s")

    sh = _logging.StreamHandler(stream=stream)
    sh.setLevel(level)
    sh.setFormatter(fmt)
    _LOGGER.addHandler(sh)

    if log_file:
        fh = _logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(_logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
        _LOGGER.addHandler(fh)


def log_debug(msg: str) -> None:
    _LOGGER.debug(msg)


def log_warn(msg: str) -> None:
    _LOGGER.warning(f"{c('⚠', 'yellow')} {msg}")


def log_err(msg: str) -> None:
    _LOGGER.error(f"{c('✖', 'red')} {msg}")


def log_ok(msg: str) -> None:
    _LOGGER.info(f"{c('✓', 'green')} {msg}")


def log_step(label: str, value: str = "") -> None:
    arrow = c("→", "cyan")
    gray = c(value, "gray") if value else ""
    _LOGGER.info(f"{arrow} {label}{(' ' + gray) if gray else ''}")
