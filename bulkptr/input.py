"""
Address list reader
"""

import ipaddress
from typing import Iterable, Union

from .errors import ConfigurationError
from .models import IPAddress


def read_addresses(lines: Iterable[Union[str, bytes]]) -> list[IPAddress]:
    """
    Read one address per line.

    Every line must hold an address: a blank line, a malformed address
    or undecodable bytes abort the whole read. A final newline does not
    count as an extra line.

    Args:
        lines: Iterable of text or UTF-8 byte lines (an open file works)

    Returns:
        Addresses in input order

    Raises:
        ConfigurationError: on the first malformed line
    """
    addresses: list[IPAddress] = []
    for lineno, line in enumerate(lines, start=1):
        if isinstance(line, bytes):
            try:
                line = line.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ConfigurationError(
                    f"Something went wrong while decoding line {lineno}: {e.reason}"
                )
        text = line.strip()
        try:
            addresses.append(ipaddress.ip_address(text))
        except ValueError:
            raise ConfigurationError(
                f"Something went wrong while parsing the IP ({text}) on line {lineno}"
            )
    return addresses
