# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/etcdjoin/config/loader.py

import logging
from typing import Optional

from pydantic import ValidationError

from etcdjoin.errors import ConfigError
from etcdjoin.network.addresses import AddressResolver
from .models import BootstrapConfig, Options

log = logging.getLogger("etcdjoin")


def load_options() -> Options:
    """
    Read ETCD_* options from the process environment.

    Validation failures are reported as ConfigError with every offending
    field listed.
    """
    try:
        return Options()
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigError(f"invalid options: {problems}") from exc


def load_config(
    options: Optional[Options] = None,
    *,
    resolver: Optional[AddressResolver] = None,
) -> BootstrapConfig:
    options = options or load_options()
    return BootstrapConfig.from_options(options, resolver=resolver)
