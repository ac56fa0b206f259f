"""
URL validation utilities for SSRF protection.

Team settings carry URLs typed in chat (the Jira site URL) that the
server later calls with stored credentials. Every such URL goes through
validate_outbound_url, once when it is collected and again right before
the request is made.
"""

import ipaddress
import socket
from urllib.parse import urlparse

ALLOWED_SCHEMES = frozenset({"http", "https"})

# Hostnames that always point back at the host itself
LOCAL_HOSTNAMES = frozenset({"localhost", "localhost.localdomain", "ip6-localhost", "ip6-loopback"})


class SSRFError(Exception):
    """Raised when a URL fails SSRF validation."""


def is_private_ip(ip_str: str) -> bool:
    """
    Check if an IP address is private, loopback, or otherwise internal.

    Args:
        ip_str: IP address string (IPv4 or IPv6)

    Returns:
        True if the IP is private/internal, False if public
    """
    try:
        ip = ipaddress.ip_address(ip_str)
    except ValueError:
        # Invalid IP address format
        return True

    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        ip = ip.ipv4_mapped

    return (
        ip.is_private
        or ip.is_loopback
        or ip.is_link_local
        or ip.is_multicast
        or ip.is_reserved
        or ip.is_unspecified
    )


def _is_ip_literal(hostname: str) -> bool:
    try:
        ipaddress.ip_address(hostname)
    except ValueError:
        return False
    return True


def validate_outbound_url(url: str, resolve_dns: bool = True) -> str:
    """
    Validate a user-supplied URL before the server requests it.

    Checks:
    1. URL parses, uses http(s) and has a hostname and a valid port
    2. Hostname is not a local name or a private/internal IP literal
    3. Resolved IPs are not private/internal (optional, against DNS rebinding)

    Args:
        url: The URL to validate
        resolve_dns: Whether to resolve DNS and check for private IPs
                    (off when collecting the URL and in tests)

    Returns:
        The validated URL (unchanged if valid)

    Raises:
        SSRFError: If the URL fails any validation check
    """
    if not url:
        raise SSRFError("Empty URL")

    try:
        parsed = urlparse(url)
        port = parsed.port
    except ValueError as e:
        raise SSRFError(f"Invalid URL format: {e}") from e

    if parsed.scheme not in ALLOWED_SCHEMES:
        raise SSRFError(f"URL must use http or https, got: {parsed.scheme or 'none'}")

    hostname = (parsed.hostname or "").lower().rstrip(".")
    if not hostname:
        raise SSRFError("URL has no hostname")

    if hostname in LOCAL_HOSTNAMES or hostname.endswith(".localhost"):
        raise SSRFError(f"Host not allowed: {hostname}")

    if _is_ip_literal(hostname):
        if is_private_ip(hostname):
            raise SSRFError(f"URL points to a private IP: {hostname}")
        return url

    if resolve_dns:
        default_port = 443 if parsed.scheme == "https" else 80
        try:
            addr_info = socket.getaddrinfo(hostname, port or default_port, proto=socket.IPPROTO_TCP)
        except (socket.gaierror, UnicodeError) as e:
            raise SSRFError(f"DNS resolution failed: {e}") from e
        for _family, _type, _proto, _canonname, sockaddr in addr_info:
            ip = sockaddr[0]
            if is_private_ip(ip):
                raise SSRFError(f"URL resolves to private IP: {ip}")

    return url
