"""Logging setup for the generation backend.

Three top-level loggers own handlers: ``pagegen.generation``,
``pagegen.auth`` and ``pagegen.api``. Module loggers are created below
them (``pagegen.generation.gemini`` etc.) and reach those handlers once the
parent has been configured by the API layer.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict

# Configurable via LOG_DIR for containers
LOG_DIR = Path(os.getenv("LOG_DIR", str(Path(__file__).parent.parent / "logs")))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

FILE_FORMAT = "%(asctime)s [%(name)s] [%(levelname)s] %(message)s"
CONSOLE_FORMAT = "%(asctime)s [%(name)s] %(message)s"

# Logger name -> log file under LOG_DIR
LOG_FILES: Dict[str, str] = {
    "pagegen.generation": "generation.log",
    "pagegen.auth": "auth.log",
    "pagegen.api": "api.log",
}


def _handler(handler: logging.Handler, fmt: str) -> logging.Handler:
    handler.setLevel(LOG_LEVEL)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def setup_logger(name: str) -> logging.Logger:
    """Attach file and console handlers to one of the LOG_FILES loggers.

    Idempotent: a logger that already has handlers is returned unchanged.

    Raises:
        KeyError: name is not listed in LOG_FILES.
    """
    filename = LOG_FILES[name]
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    LOG_DIR.mkdir(parents=True, exist_ok=True)
    logger.setLevel(LOG_LEVEL)
    logger.propagate = False
    logger.addHandler(_handler(logging.FileHandler(LOG_DIR / filename, encoding="utf-8"), FILE_FORMAT))
    logger.addHandler(_handler(logging.StreamHandler(), CONSOLE_FORMAT))
    return logger


def get_generation_logger() -> logging.Logger:
    """HTML/image generation pipeline and its routes."""
    return setup_logger("pagegen.generation")


def get_auth_logger() -> logging.Logger:
    return setup_logger("pagegen.auth")


def get_api_logger() -> logging.Logger:
    return setup_logger("pagegen.api")
