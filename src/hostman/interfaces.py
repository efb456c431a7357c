"""Discover what this machine should report about itself.

Addresses come from *psutil* so no external ``ip`` binary is needed.
"""

from __future__ import annotations

import ipaddress
import logging
import socket
from typing import List, Optional

import psutil

from .table import SelfReport

logger = logging.getLogger("hostman.interfaces")

__all__ = ["local_ipv4_addresses", "discover_self_report"]


def local_ipv4_addresses(network: Optional[str] = None) -> List[str]:
    """Return non-loopback IPv4 addresses of all interfaces, in interface order.

    If *network* (CIDR, e.g. ``192.168.1.0/24``) is given only addresses
    inside it are returned.
    """
    subnet = ipaddress.IPv4Network(network, strict=False) if network else None
    found: List[str] = []

    for iface, addrs in psutil.net_if_addrs().items():
        for addr in addrs:
            if addr.family != socket.AF_INET:
                continue
            try:
                ip = ipaddress.IPv4Address(addr.address)
            except ValueError:
                logger.debug(f"Skipping unparsable address {addr.address!r} on {iface}")
                continue
            if ip.is_loopback:
                continue
            if subnet is not None and ip not in subnet:
                logger.debug(f"Skipping {ip} on {iface}: outside {subnet}")
                continue
            if str(ip) not in found:
                found.append(str(ip))

    return found


def discover_self_report(network: Optional[str] = None) -> Optional[SelfReport]:
    """Return this host's self-report, or ``None`` if it has no usable address."""
    ips = local_ipv4_addresses(network)
    if not ips:
        logger.warning("⚠️ No non-loopback IPv4 address found; fetching only")
        return None

    hostname = socket.gethostname()
    logger.info(f"🔍 Self-report: {hostname} -> {', '.join(ips)}")
    return SelfReport(host=hostname, ips=ips)
