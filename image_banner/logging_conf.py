#!/usr/bin/env python3
# image_banner/logging_conf.py
"""
Central logging setup for Image Banner.
Console output goes to stderr so stdout carries only the banner.
Supports an optional rotating file log.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from image_banner.config import Config

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def setup_logging(cfg: Config, level_override: Optional[str] = None) -> None:
    level_name = (level_override or cfg["logging"].get("level", "WARNING")).upper()
    level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)

    log_file = cfg["logging"].get("file")
    if log_file:
        handler = RotatingFileHandler(
            log_file,
            maxBytes=int(cfg["logging"].get("rotate_bytes", 5 * 1024 * 1024)),
            backupCount=int(cfg["logging"].get("rotate_keep", 3)),
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(handler)

    if cfg["logging"].get("http_debug"):
        logging.getLogger("urllib3").setLevel(logging.DEBUG)
        logging.getLogger("requests").setLevel(logging.DEBUG)
