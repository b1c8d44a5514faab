# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/etcdjoin/network/addresses.py

from __future__ import annotations

import ipaddress
import logging
import socket
from typing import List, Optional

import psutil

from etcdjoin.errors import AddressResolutionError

log = logging.getLogger("etcdjoin")

_BROADCAST = ipaddress.IPv4Address("255.255.255.255")


def is_usable(ip: ipaddress.IPv4Address) -> bool:
    """Loopback or global unicast (private ranges count as unicast)."""
    if ip.is_loopback:
        return True
    return not (
        ip.is_unspecified
        or ip.is_link_local
        or ip.is_multicast
        or ip == _BROADCAST
    )


class AddressResolver:
    """
    Lists the IPv4 addresses bound on this host.

    The result is computed once and reused, so client and peer URLs are
    always derived from the same address set.
    """

    def __init__(self) -> None:
        self._addresses: Optional[List[str]] = None

    def resolve(self) -> List[str]:
        if self._addresses:
            return self._addresses

        try:
            interfaces = psutil.net_if_addrs()
        except OSError as exc:
            raise AddressResolutionError(f"failed to list interfaces: {exc}") from exc

        ips: List[str] = []
        for ifname, addrs in interfaces.items():
            for addr in addrs:
                if addr.family != socket.AF_INET:
                    continue
                try:
                    ip = ipaddress.IPv4Address(addr.address)
                except ValueError:
                    log.debug("skipping unparsable address %r on %s", addr.address, ifname)
                    continue
                if is_usable(ip) and str(ip) not in ips:
                    ips.append(str(ip))

        if not ips:
            raise AddressResolutionError("did not find any valid addresses")

        log.debug("resolved local addresses: %s", ", ".join(ips))
        self._addresses = ips
        return ips

    def urls(self, explicit: str, port: int) -> List[str]:
        """
        Operator supplied comma list wins verbatim; otherwise one
        http://<ip>:<port> per resolved address.
        """
        if explicit:
            return explicit.split(",")
        return [f"http://{ip}:{port}" for ip in self.resolve()]
