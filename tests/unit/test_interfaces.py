"""Unit tests for self-report discovery."""
from __future__ import annotations

import socket
from collections import namedtuple
from unittest.mock import patch

import pytest

from hostman.interfaces import discover_self_report, local_ipv4_addresses

pytestmark = pytest.mark.unit

Addr = namedtuple("Addr", "family address netmask broadcast ptp")


def _addrs():
    return {
        "lo": [Addr(socket.AF_INET, "127.0.0.1", "255.0.0.0", None, None)],
        "eth0": [
            Addr(socket.AF_INET, "192.168.1.5", "255.255.255.0", None, None),
            Addr(socket.AF_INET6, "fe80::1", None, None, None),
        ],
        "wg0": [Addr(socket.AF_INET, "10.8.0.2", "255.255.255.0", None, None)],
        "docker0": [Addr(socket.AF_INET, "192.168.1.5", "255.255.255.0", None, None)],
    }


@patch("psutil.net_if_addrs", side_effect=_addrs)
def test_non_loopback_ipv4_only(_mock):
    assert local_ipv4_addresses() == ["192.168.1.5", "10.8.0.2"]


@patch("psutil.net_if_addrs", side_effect=_addrs)
def test_network_filter(_mock):
    assert local_ipv4_addresses("10.8.0.0/24") == ["10.8.0.2"]
    assert local_ipv4_addresses("172.16.0.0/12") == []


@patch("socket.gethostname", return_value="box1")
@patch("psutil.net_if_addrs", side_effect=_addrs)
def test_discover_self_report(_mock_addrs, _mock_hostname):
    report = discover_self_report()
    assert report.host == "box1"
    assert report.primary_ip == "192.168.1.5"


@patch("psutil.net_if_addrs", return_value={"lo": _addrs()["lo"]})
def test_loopback_only_host_reports_nothing(_mock):
    assert discover_self_report() is None
