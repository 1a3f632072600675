"""Checks applied to user-supplied URLs before the server fetches them.

Only http(s) URLs whose host is a public name or a public IP address pass.
Internal host names, cloud metadata endpoints, private and reserved address
ranges, and numeric host spellings that resolve to an address without
looking like one are refused.
"""

import ipaddress
import re
import socket
from typing import Optional, Union
from urllib.parse import urlsplit

ALLOWED_SCHEMES = ("http", "https")

BLOCKED_HOSTNAMES = (
    "localhost",
    "localhost.localdomain",
    "0.0.0.0",
    "metadata.google.internal",
    "metadata.google",
    "metadata",
    "instance-data",
    "internal",
    "intranet",
    "corp",
    "local",
)

CLOUD_METADATA_IPS = frozenset(
    ipaddress.ip_address(address)
    for address in (
        "169.254.169.254",  # AWS, GCP, Azure, DigitalOcean
        "169.254.170.2",  # AWS ECS task metadata
        "100.100.100.200",  # Alibaba Cloud
        "fd00:ec2::254",  # AWS IPv6
    )
)

BLOCKED_NETWORKS = tuple(
    ipaddress.ip_network(network)
    for network in (
        "0.0.0.0/8",
        "10.0.0.0/8",
        "100.64.0.0/10",
        "127.0.0.0/8",
        "169.254.0.0/16",
        "172.16.0.0/12",
        "192.0.0.0/24",
        "192.0.2.0/24",
        "192.168.0.0/16",
        "198.51.100.0/24",
        "203.0.113.0/24",
        "224.0.0.0/4",
        "240.0.0.0/4",
        "::/128",
        "::1/128",
        "::ffff:0:0/96",
        "fc00::/7",
        "fe80::/10",
        "ff00::/8",
    )
)

_NUMERIC_LABEL = re.compile(r"^(0x[0-9a-f]*|\d+)$", re.IGNORECASE)
_DOTTED_QUAD = re.compile(r"^(\d{1,3})\.(\d{1,3})\.(\d{1,3})\.(\d{1,3})$")
_SUSPICIOUS_HOSTS = (
    re.compile(r"^0x[0-9a-f]+$", re.IGNORECASE),  # hexadecimal address
    re.compile(r"^\d{8,}$"),  # address as one decimal number
    re.compile(r"^0\d+\."),  # octal octets
)

REASON_INVALID_URL = "Invalid URL format"
REASON_PROTOCOL = "Only HTTP and HTTPS protocols are allowed"
REASON_INTERNAL_HOST = "Internal hostname not allowed"
REASON_METADATA = "Cloud metadata endpoint not allowed"
REASON_PRIVATE_IP = "Private or reserved IP address not allowed"
REASON_INVALID_IP = "Invalid IP address format"
REASON_SUSPICIOUS = "Suspicious hostname format"
REASON_TOO_SHORT = "Hostname too short"


def _parse_ip(hostname: str) -> Optional[Union[ipaddress.IPv4Address, ipaddress.IPv6Address]]:
    try:
        return ipaddress.ip_address(hostname)
    except ValueError:
        return None


def _is_numeric_host(hostname: str) -> bool:
    """True when the last label is a number, so resolvers read it as IPv4."""
    return bool(_NUMERIC_LABEL.match(hostname.rsplit(".", 1)[-1]))


def _check_address(address: Union[ipaddress.IPv4Address, ipaddress.IPv6Address]) -> tuple[bool, Optional[str]]:
    if address in CLOUD_METADATA_IPS:
        return False, REASON_METADATA
    if any(address in network for network in BLOCKED_NETWORKS if network.version == address.version):
        return False, REASON_PRIVATE_IP
    return True, None


def is_url_safe_for_fetch(url: str) -> tuple[bool, Optional[str]]:
    """Return ``(safe, reason)``; ``reason`` is None for safe URLs."""
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
        _ = parts.port  # raises ValueError for a malformed port
    except (TypeError, ValueError, AttributeError):
        return False, REASON_INVALID_URL

    if parts.scheme.lower() not in ALLOWED_SCHEMES:
        return False, REASON_PROTOCOL
    if not hostname:
        return False, REASON_INVALID_URL
    hostname = hostname.lower().rstrip(".")
    if not hostname:
        return False, REASON_INVALID_URL

    if any(hostname == blocked or hostname.endswith(f".{blocked}") for blocked in BLOCKED_HOSTNAMES):
        return False, REASON_INTERNAL_HOST

    address = _parse_ip(hostname)
    if address is not None:
        return _check_address(address)

    match = _DOTTED_QUAD.match(hostname)
    if match and any(int(octet) > 255 for octet in match.groups()):
        return False, REASON_INVALID_IP
    if any(pattern.search(hostname) for pattern in _SUSPICIOUS_HOSTS):
        return False, REASON_SUSPICIOUS
    if _is_numeric_host(hostname):
        # Shorthand forms such as 127.1 or 0x7f.0.0.1 still connect to an IPv4 address.
        try:
            return _check_address(ipaddress.IPv4Address(socket.inet_aton(hostname)))
        except OSError:
            return False, REASON_INVALID_IP
    if len(hostname) < 4 and "." not in hostname:
        return False, REASON_TOO_SHORT
    return True, None


def validate_urls(urls: list[str]) -> list[dict[str, str]]:
    """Return ``{"url", "reason"}`` for every URL that fails the fetch check."""
    unsafe = []
    for url in urls:
        safe, reason = is_url_safe_for_fetch(url)
        if not safe:
            unsafe.append({"url": url, "reason": reason or "Unknown"})
    return unsafe


__all__ = ["is_url_safe_for_fetch", "validate_urls"]
