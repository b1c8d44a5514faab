import ipaddress
import socket
from collections import namedtuple

import pytest

from etcdjoin.errors import AddressResolutionError
from etcdjoin.network import addresses as mod
from etcdjoin.network.addresses import AddressResolver

snic = namedtuple("snic", ["family", "address", "netmask", "broadcast", "ptp"])


def _addr(family, address):
    return snic(family, address, None, None, None)


def fake_interfaces(calls):
    def net_if_addrs():
        calls.append("net_if_addrs")
        return {
            "lo": [_addr(socket.AF_INET, "127.0.0.1"), _addr(socket.AF_INET6, "::1")],
            "eth0": [
                _addr(socket.AF_INET, "10.0.0.2"),
                _addr(socket.AF_INET6, "fe80::1"),
                _addr(getattr(socket, "AF_PACKET", 17), "00:11:22:33:44:55"),
            ],
            "eth1": [_addr(socket.AF_INET, "169.254.10.1")],
            "eth2": [_addr(socket.AF_INET, "192.168.1.5")],
        }
    return net_if_addrs


def test_keeps_loopback_and_unicast_ipv4(monkeypatch):
    calls = []
    monkeypatch.setattr(mod.psutil, "net_if_addrs", fake_interfaces(calls))
    assert AddressResolver().resolve() == ["127.0.0.1", "10.0.0.2", "192.168.1.5"]


def test_result_is_cached(monkeypatch):
    calls = []
    monkeypatch.setattr(mod.psutil, "net_if_addrs", fake_interfaces(calls))
    r = AddressResolver()
    r.urls("", 2379)
    r.urls("", 2380)
    assert calls == ["net_if_addrs"]


def test_urls_from_addresses(monkeypatch):
    monkeypatch.setattr(mod.psutil, "net_if_addrs", fake_interfaces([]))
    assert AddressResolver().urls("", 2380) == [
        "http://127.0.0.1:2380",
        "http://10.0.0.2:2380",
        "http://192.168.1.5:2380",
    ]


def test_explicit_urls_skip_resolution(monkeypatch):
    def boom():
        raise AssertionError("should not enumerate interfaces")
    monkeypatch.setattr(mod.psutil, "net_if_addrs", boom)
    assert AddressResolver().urls("http://a:1,http://b:2", 2379) == ["http://a:1", "http://b:2"]


def test_no_usable_address(monkeypatch):
    monkeypatch.setattr(
        mod.psutil,
        "net_if_addrs",
        lambda: {"eth0": [_addr(socket.AF_INET, "169.254.1.1"), _addr(socket.AF_INET, "0.0.0.0")]},
    )
    with pytest.raises(AddressResolutionError):
        AddressResolver().resolve()


@pytest.mark.parametrize(
    "ip,usable",
    [
        ("127.0.0.1", True),
        ("10.1.2.3", True),
        ("8.8.8.8", True),
        ("0.0.0.0", False),
        ("169.254.0.1", False),
        ("224.0.0.1", False),
        ("255.255.255.255", False),
    ],
)
def test_is_usable(ip, usable):
    assert mod.is_usable(ipaddress.IPv4Address(ip)) is usable
