# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/etcdjoin/config/models.py

from __future__ import annotations

import logging
import shutil
import socket
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from etcdjoin.errors import ConfigError
from etcdjoin.logging.log import parse_level
from etcdjoin.network.addresses import AddressResolver

log = logging.getLogger("etcdjoin")


class Options(BaseSettings):
    """Options read from ETCD_* environment variables."""

    data_dir: str = "/var/lib/etcd"
    log_level: str = "info"
    log_dir: Optional[Path] = None
    path: str = ""                       # etcd binary, looked up on PATH when empty
    discovery: str = ""
    peers: str = ""                      # comma separated bootstrap endpoints
    members: int = Field(5, ge=1)        # voting members wanted before new nodes proxy
    name: str = ""                       # defaults to the short hostname
    listen_peer_urls: str = ""
    listen_client_urls: str = ""
    client_port: int = Field(2379, gt=0, lt=65536)
    peer_port: int = Field(2380, gt=0, lt=65536)
    request_timeout: float = Field(5.0, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="ETCD_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_dir", mode="before")
    @classmethod
    def _blank_log_dir(cls, v):
        # ETCD_LOG_DIR= means no file log, not the working directory
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        parse_level(v)
        return v


def _split(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def short_hostname(name: str = "") -> str:
    if not name:
        try:
            name = socket.gethostname()
        except OSError as exc:
            raise ConfigError(f"failed to set name: {exc}") from exc
    short = name.split(".")[0]
    if not short:
        raise ConfigError(f"failed to set name: {name!r} has no host part")
    return short


def find_etcd(path: str = "") -> str:
    if path:
        return path
    found = shutil.which("etcd")
    if not found:
        raise ConfigError("failed to set etcd path: etcd not found in PATH")
    return found


@dataclass
class BootstrapConfig:
    """
    Per-process configuration owned by the bootstrap engine.

    `env` collects the role specific variables while the engine runs;
    `environment()` produces the final map handed to etcd.
    """
    data_dir: str
    path: str
    name: str
    members: int
    peers: List[str]
    client_urls: List[str]
    peer_urls: List[str]
    discovery: str = ""
    request_timeout: float = 5.0
    env: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_options(
        cls,
        options: Options,
        *,
        resolver: Optional[AddressResolver] = None,
    ) -> "BootstrapConfig":
        if options.client_port == options.peer_port:
            raise ConfigError(
                f"client and peer ports must differ (both {options.client_port})"
            )

        resolver = resolver or AddressResolver()
        name = short_hostname(options.name)
        path = find_etcd(options.path)
        client_urls = resolver.urls(options.listen_client_urls, options.client_port)
        peer_urls = resolver.urls(options.listen_peer_urls, options.peer_port)

        log.debug("name=%s path=%s", name, path)
        log.debug("client urls: %s", ",".join(client_urls))
        log.debug("peer urls: %s", ",".join(peer_urls))

        return cls(
            data_dir=options.data_dir,
            path=path,
            name=name,
            members=options.members,
            peers=_split(options.peers),
            client_urls=client_urls,
            peer_urls=peer_urls,
            discovery=options.discovery,
            request_timeout=options.request_timeout,
        )

    def environment(self) -> Dict[str, str]:
        """Derived keys first, accumulated role keys layered on top."""
        base = {
            "ETCD_DATA_DIR": self.data_dir,
            "ETCD_NAME": self.name,
            "ETCD_LISTEN_PEER_URLS": ",".join(self.peer_urls),
            "ETCD_LISTEN_CLIENT_URLS": ",".join(self.client_urls),
            "ETCD_ADVERTISE_CLIENT_URLS": ",".join(self.client_urls),
            "ETCD_INITIAL_ADVERTISE_PEER_URLS": ",".join(self.peer_urls),
        }
        base.update(self.env)
        return base
