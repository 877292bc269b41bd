"""Logging configuration."""

import logging
import sys
from typing import Optional
from config.settings import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _resolve_level(level_name: Optional[str]) -> int:
    """Map a level name such as "debug" to its logging constant, INFO if unknown."""
    level = getattr(logging, (level_name or "").upper(), None)
    return level if isinstance(level, int) else logging.INFO


def setup_logger(name: str = __name__, level_name: Optional[str] = None) -> logging.Logger:
    """Set up a stdout logger for a module.
    
    Args:
        name: Logger name, normally the calling module's ``__name__``
        level_name: Override for ``settings.log_level``
        
    Returns:
        Configured logger; calling again with the same name reuses its handler
    """
    level = _resolve_level(level_name or settings.log_level)
    logger = logging.getLogger(name)
    logger.setLevel(level)
    
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
    
    return logger
