"""IP address anonymisation."""

from __future__ import annotations

import ipaddress


def _is_ipv4(ip: str) -> bool:
    """True for a dotted IPv4 address or an IPv4-mapped IPv6 address."""
    if "%" in ip:
        return False
    try:
        address = ipaddress.ip_address(ip)
    except ValueError:
        return False
    if isinstance(address, ipaddress.IPv4Address):
        return True
    return address.ipv4_mapped is not None


def anonymize_ip(ip: str) -> str:
    """Zero the last IPv4 octet, or keep only the first four IPv6 groups."""
    if _is_ipv4(ip):
        parts = ip.split(".")
        if len(parts) < 3:
            raise ValueError(f"cannot anonymize address {ip!r}")
        return f"{parts[0]}.{parts[1]}.{parts[2]}.0"
    parts = ip.split(":")
    if len(parts) < 4:
        raise ValueError(f"cannot anonymize address {ip!r}")
    return ":".join(parts[:4]) + "::"