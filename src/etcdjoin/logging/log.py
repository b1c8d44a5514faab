# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

#src/etcdjoin/logging/log.py

from __future__ import annotations

import logging
from pathlib import Path
from datetime import datetime, timezone
import uuid

LOGGER_NAME = "etcdjoin"

_LEVEL_ALIASES = {
    "warn": "WARNING",
    "fatal": "CRITICAL",
    "panic": "CRITICAL",
}


def parse_level(level: str) -> int:
    """
    Map a level name (logging names plus warn/fatal/panic) to a logging level.
    Raises ValueError for anything else.
    """
    key = (level or "").strip().lower()
    name = _LEVEL_ALIASES.get(key, key.upper())
    value = logging.getLevelName(name)
    if not isinstance(value, int):
        raise ValueError(f"not a valid log level: {level!r}")
    return value


def init_logging(
    *,
    level: str = "info",
    log_dir: Path | None = None,
    name: str = LOGGER_NAME,
) -> tuple[logging.Logger, str, Path | None]:
    """
    Initializes:
      - console output at the requested level
      - optional full trace log file under log_dir
      - returns run_id so a run can be correlated across restarts
    """
    run_id = str(uuid.uuid4())

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()
    logger.propagate = False

    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-7s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler()
    ch.setLevel(parse_level(level))
    ch.setFormatter(formatter)
    logger.addHandler(ch)

    log_path: Path | None = None
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        ts = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
        log_path = log_dir / f"{name}-{ts}-{run_id}.log"

        # File = FULL TRACE
        fh = logging.FileHandler(log_path)
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(formatter)
        logger.addHandler(fh)

    logger.debug("run_id=%s", run_id)
    if log_path:
        logger.debug("log_file=%s", log_path)

    return logger, run_id, log_path
