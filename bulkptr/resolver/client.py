"""
DNS clients bound to a single nameserver
"""

from abc import ABC, abstractmethod
from typing import Callable, Union

import dns.exception
import dns.message
import dns.name
import dns.query
import dns.rdataclass
import dns.rdatatype

from ..config import DEFAULT_TIMEOUT, TRANSPORTS
from ..errors import ConfigurationError, TransportError
from ..models import Nameserver


# Everything dnspython or the socket layer raises for a failed exchange
QUERY_ERRORS = (dns.exception.DNSException, OSError, EOFError)


class DNSClient(ABC):
    """Abstract base class for DNS clients"""

    def __init__(self, nameserver: Nameserver, timeout: float = DEFAULT_TIMEOUT):
        self.nameserver = nameserver
        self.timeout = timeout

    @abstractmethod
    def query(
        self,
        name: Union[str, dns.name.Name],
        rdclass: dns.rdataclass.RdataClass = dns.rdataclass.IN,
        rdtype: dns.rdatatype.RdataType = dns.rdatatype.PTR,
    ) -> dns.message.Message:
        """
        Send a query and return the response.

        Args:
            name: Query name
            rdclass: Record class
            rdtype: Record type

        Returns:
            Response message

        Raises:
            TransportError: on timeout, connection or decoding failure
        """
        pass

    def close(self):
        """Clean up resources"""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def _make_query(self, name, rdclass, rdtype) -> dns.message.Message:
        return dns.message.make_query(name, rdtype, rdclass)

    def _transport_error(self, err: Exception) -> TransportError:
        detail = str(err) or type(err).__name__
        return TransportError(detail, self.nameserver)


class TCPClient(DNSClient):
    """DNS over TCP, one connection per query"""

    def query(self, name, rdclass=dns.rdataclass.IN, rdtype=dns.rdatatype.PTR):
        request = self._make_query(name, rdclass, rdtype)
        try:
            return dns.query.tcp(
                request,
                self.nameserver.host,
                timeout=self.timeout,
                port=self.nameserver.port,
            )
        except QUERY_ERRORS as e:
            raise self._transport_error(e) from e


class UDPClient(DNSClient):
    """DNS over UDP, retrying over TCP when the answer is truncated"""

    def query(self, name, rdclass=dns.rdataclass.IN, rdtype=dns.rdatatype.PTR):
        request = self._make_query(name, rdclass, rdtype)
        try:
            response, _ = dns.query.udp_with_fallback(
                request,
                self.nameserver.host,
                timeout=self.timeout,
                port=self.nameserver.port,
            )
            return response
        except QUERY_ERRORS as e:
            raise self._transport_error(e) from e


ClientFactory = Callable[[Nameserver], DNSClient]

CLIENTS = {
    'tcp': TCPClient,
    'udp': UDPClient,
}


def make_client_factory(transport: str = 'tcp',
                        timeout: float = DEFAULT_TIMEOUT) -> ClientFactory:
    """
    Build a factory producing clients for a given transport.

    Raises:
        ConfigurationError: on unknown transport or non-positive timeout
    """
    client_class = CLIENTS.get((transport or '').lower())
    if not client_class:
        raise ConfigurationError(
            f"Unknown transport '{transport}'. "
            f"Supported: {', '.join(TRANSPORTS)}"
        )
    if timeout <= 0:
        raise ConfigurationError("Timeout must be positive")

    def factory(nameserver: Nameserver) -> DNSClient:
        return client_class(nameserver, timeout=timeout)

    return factory
