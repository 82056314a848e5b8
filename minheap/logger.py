import logging
import sys

_FORMAT = "%(levelname)s %(asctime)s [%(name)s:%(lineno)d] %(message)s"
_DATE_FORMAT = "%H:%M:%S"

_root_logger = logging.getLogger("minheap")
_default_handler = None


def _setup_logger() -> None:
    global _default_handler
    if _default_handler is None:
        _default_handler = logging.StreamHandler(sys.stderr)
        _default_handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
        _root_logger.addHandler(_default_handler)
    _root_logger.setLevel(logging.WARNING)
    _root_logger.propagate = False


_setup_logger()


def init_logger(name: str) -> logging.Logger:
    """Return a logger that reports through the package handler."""
    return logging.getLogger(name)


def set_level(level: str) -> None:
    """Set the package-wide level from a name such as ``"INFO"``."""
    _root_logger.setLevel(level.upper())
