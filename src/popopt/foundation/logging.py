from __future__ import annotations

import logging
import sys


def configure_popopt_logging(*, level: int = logging.INFO) -> None:
    """
    Configure a minimal console logger for popopt.

    Notes:
        - This is opt-in (library code must not call logging.basicConfig()).
        - The handler is only attached if neither the root logger nor the "popopt" logger has handlers.
    """
    root = logging.getLogger()
    popopt_logger = logging.getLogger("popopt")

    if root.handlers or popopt_logger.handlers:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    popopt_logger.addHandler(handler)
    popopt_logger.setLevel(level)
    popopt_logger.propagate = False


def _coerce_level(level: int | str) -> int:
    if isinstance(level, str):
        value = logging.getLevelName(level.strip().upper())
        if not isinstance(value, int):
            raise ValueError(f"Unknown log level '{level}'.")
        return value
    return int(level)


_CONSOLE_STREAMS = ("stdout", "stderr")


class _ConsoleHandler(logging.StreamHandler):
    """Writes to whatever ``sys.stdout``/``sys.stderr`` is at emit time."""

    def __init__(self, stream_name: str) -> None:
        super().__init__(getattr(sys, stream_name))
        self.stream_name = stream_name

    def emit(self, record: logging.LogRecord) -> None:
        self.stream = getattr(sys, self.stream_name)
        super().emit(record)


def _console_logger(stream_name: str, owner: str) -> logging.Logger:
    # one handler per stream; levels live on the per-owner child
    parent = logging.getLogger(f"popopt.console.{stream_name}")
    if not parent.handlers:
        handler = _ConsoleHandler(stream_name)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
        parent.addHandler(handler)
        parent.propagate = False
    return parent.getChild(owner.rsplit(".", 1)[-1])


def resolve_logger(
    selector: str | logging.Logger | None,
    log_level: int | str | None = None,
    *,
    default_name: str = "popopt",
    default_level: int | None = None,
) -> logging.Logger:
    """
    Turn a logger selector into a ``logging.Logger``.

    ``None`` selects the library logger ``default_name``, which stays silent
    unless the application configures logging. ``"stdout"`` and ``"stderr"``
    select a console logger writing to that stream; every ``default_name``
    gets its own child logger there, so solvers sharing a stream keep
    independent levels. A ``Logger`` instance is used as is. ``log_level``
    (or ``default_level`` for console selectors) is applied when given.
    """
    if selector is None:
        logger = logging.getLogger(default_name)
    elif isinstance(selector, logging.Logger):
        logger = selector
    elif isinstance(selector, str) and selector.lower() in _CONSOLE_STREAMS:
        logger = _console_logger(selector.lower(), default_name)
        if log_level is None and default_level is not None:
            logger.setLevel(default_level)
    else:
        raise ValueError(f"Unknown logger selector {selector!r}. Expected 'stdout', 'stderr' or a logging.Logger.")

    if log_level is not None:
        logger.setLevel(_coerce_level(log_level))
    return logger


__all__ = ["configure_popopt_logging", "resolve_logger"]
