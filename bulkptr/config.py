"""
Configuration defaults and endpoint parsing
"""

import ipaddress
from typing import Iterable

from .errors import ConfigurationError
from .models import Nameserver


# Public resolvers used when no --server is given
DEFAULT_NAMESERVERS = ('1.1.1.1:53', '1.0.0.1:53', '8.8.8.8:53', '8.8.4.4:53')
DEFAULT_PORT = 53
DEFAULT_CONCURRENCY = 30
DEFAULT_TIMEOUT = 5.0  # seconds, per query
DEFAULT_BACKOFF = 0.4  # seconds, after a transport error
DEFAULT_RETRIES = 0
DEFAULT_MAX_CNAME_HOPS = 16
DEFAULT_TRANSPORT = 'tcp'
TRANSPORTS = ('tcp', 'udp')


def _parse_port(text: str, endpoint: str) -> int:
    try:
        port = int(text)
    except ValueError:
        raise ConfigurationError(f"Invalid port in nameserver '{endpoint}'")
    if not 1 <= port <= 65535:
        raise ConfigurationError(f"Port out of range in nameserver '{endpoint}'")
    return port


def _parse_host(text: str, endpoint: str) -> str:
    try:
        return str(ipaddress.ip_address(text))
    except ValueError:
        raise ConfigurationError(
            f"Nameserver '{endpoint}' is not an IP address"
        )


def parse_endpoint(text: str) -> Nameserver:
    """
    Parse a nameserver endpoint.

    Accepted forms:
        1.1.1.1
        1.1.1.1:53
        2606:4700:4700::1111
        [2606:4700:4700::1111]:53

    Args:
        text: Endpoint string

    Returns:
        Nameserver

    Raises:
        ConfigurationError: if the endpoint cannot be parsed
    """
    endpoint = (text or '').strip()
    if not endpoint:
        raise ConfigurationError("Empty nameserver endpoint")

    if endpoint.startswith('['):
        host, sep, rest = endpoint[1:].partition(']')
        if not sep:
            raise ConfigurationError(f"Unterminated '[' in nameserver '{endpoint}'")
        if not rest:
            return Nameserver(_parse_host(host, endpoint), DEFAULT_PORT)
        if not rest.startswith(':'):
            raise ConfigurationError(f"Malformed nameserver '{endpoint}'")
        return Nameserver(_parse_host(host, endpoint), _parse_port(rest[1:], endpoint))

    # More than one colon and no brackets: bare IPv6 address
    if endpoint.count(':') > 1:
        return Nameserver(_parse_host(endpoint, endpoint), DEFAULT_PORT)

    host, sep, port = endpoint.partition(':')
    if sep:
        return Nameserver(_parse_host(host, endpoint), _parse_port(port, endpoint))
    return Nameserver(_parse_host(host, endpoint), DEFAULT_PORT)


def parse_endpoints(texts: Iterable[str]) -> list[Nameserver]:
    """Parse endpoints, splitting comma-separated entries"""
    endpoints: list[Nameserver] = []
    for text in texts:
        for part in text.split(','):
            if part.strip():
                endpoints.append(parse_endpoint(part))
    if not endpoints:
        raise ConfigurationError("At least one nameserver is required")
    return endpoints
