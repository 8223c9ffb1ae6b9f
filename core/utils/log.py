# core/utils/log.py
import logging
from typing import Optional

from core.config import get_settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
HANDLER_NAME = 'bookfriends'


def setup_logging(level: Optional[str] = None) -> None:
    """Attach a stream handler to the root logger once and set its level"""
    level = (level or get_settings().log_level).upper()
    root = logging.getLogger()
    if not any(h.get_name() == HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.set_name(HANDLER_NAME)
        root.addHandler(handler)
    root.setLevel(getattr(logging, level, logging.INFO))
