# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/etcdjoin/state/inspector.py

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Tuple

from etcdjoin.errors import StateInspectionError

log = logging.getLogger("etcdjoin")

# Subdirectories etcd creates under its data dir on first start.
ROLE_MARKERS: Tuple[str, ...] = ("member", "proxy")


class StateInspector:
    """Looks for the role markers etcd leaves in its data directory."""

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir)

    def prior_role_marker(self) -> Optional[Path]:
        """
        Return the first marker that exists, or None.

        Only "does not exist" counts as absent; any other stat failure
        is raised so an unreadable data dir never looks like a fresh node.
        """
        for marker in ROLE_MARKERS:
            path = self.data_dir / marker
            try:
                os.stat(path)
            except FileNotFoundError:
                continue
            except OSError as exc:
                raise StateInspectionError(f"cannot inspect {path}: {exc}") from exc
            log.debug("found role marker %s", path)
            return path
        return None

    def has_prior_role(self) -> bool:
        return self.prior_role_marker() is not None
