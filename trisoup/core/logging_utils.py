"""Logging utilities for trisoup.

Provides a consistent logger hierarchy and formatting without modifying the
process root logger. All trisoup code should obtain loggers via get_logger().
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, Union

ROOT_LOGGER_NAME = 'trisoup'

_FORMAT = logging.Formatter('%(levelname)s %(name)s: %(message)s')


def _ensure_trisoup_root() -> logging.Logger:
    """Ensure the 'trisoup' logger has a single stream handler and is isolated
    from the process root logger. Returns the 'trisoup' logger.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    # Only NullHandlers (added by the package __init__) means nobody configured output yet
    has_non_null = any(not isinstance(h, logging.NullHandler) for h in root.handlers)
    if not has_non_null:
        for h in list(root.handlers):
            root.removeHandler(h)
        handler = logging.StreamHandler(stream=sys.stdout)
        handler.setFormatter(_FORMAT)
        root.addHandler(handler)
    root.propagate = False
    return root


def _to_level(level: Union[str, int, None], default: int = logging.INFO) -> int:
    if level is None:
        return default
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else default


def configure_logging(level: Union[str, int] = 'INFO', mute_external: bool = True) -> None:
    """Configure the 'trisoup' logger family level and optional external noise suppression.

    This does NOT modify the process root logger.
    """
    root = _ensure_trisoup_root()
    lvl = _to_level(level)
    root.setLevel(lvl)
    # matplotlib is chatty at DEBUG (font cache, backend selection)
    if mute_external and lvl <= logging.DEBUG:
        for noisy in ('matplotlib', 'matplotlib.font_manager'):
            logging.getLogger(noisy).setLevel(logging.INFO)


def get_logger(name: str, level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Return a logger under the 'trisoup' namespace.

    Names outside the namespace are prefixed (``'demo'`` becomes
    ``'trisoup.demo'``). Without an explicit level the logger is NOTSET so it
    inherits from the 'trisoup' parent. Unlike :func:`configure_logging` this
    attaches no handler, so library modules stay silent until an application
    opts in.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + '.'):
        name = f'{ROOT_LOGGER_NAME}.{name}'
    log = logging.getLogger(name)
    if level is not None:
        log.setLevel(_to_level(level))
    else:
        log.setLevel(logging.NOTSET)
    return log


__all__ = ['get_logger', 'configure_logging', 'ROOT_LOGGER_NAME']
