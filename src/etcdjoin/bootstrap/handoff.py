# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/etcdjoin/bootstrap/handoff.py

from __future__ import annotations

import logging
import os
from typing import Mapping, NoReturn

from etcdjoin.errors import ExecFailed

log = logging.getLogger("etcdjoin")

ARGV0 = "etcd"


def handoff(path: str, env: Mapping[str, str]) -> NoReturn:
    """
    Replace this process with etcd, passing exactly `env`.

    Does not return on success.
    """
    for key in sorted(env):
        log.info("%s = %s", key, env[key])

    log.debug("exec %s", path)
    try:
        os.execve(path, [ARGV0], dict(env))
    except OSError as exc:
        raise ExecFailed(f"failed to exec {path}: {exc}") from exc
    # os.execve only comes back by raising
    raise ExecFailed(f"exec of {path} returned")
