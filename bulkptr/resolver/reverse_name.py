"""
Reverse lookup name construction
"""

import ipaddress
from typing import Union

import dns.reversename

from ..errors import ConfigurationError
from ..models import IPAddress


def build_reverse_name(address: Union[IPAddress, str]) -> str:
    """
    Build the PTR query name for an address.

    IPv4 octets are reversed under in-addr.arpa., IPv6 nibbles are
    reversed under ip6.arpa. The result is always fully qualified.

        >>> build_reverse_name('192.0.2.12')
        '12.2.0.192.in-addr.arpa.'

    Args:
        address: IPv4/IPv6 address object or its text form

    Returns:
        Fully qualified reverse name
    """
    if isinstance(address, str):
        try:
            address = ipaddress.ip_address(address.strip())
        except ValueError:
            raise ConfigurationError(f"Invalid IP address '{address}'")

    return dns.reversename.from_address(str(address)).to_text()
