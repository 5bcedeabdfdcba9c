"""
Resolution engine for BulkPTR
"""

from .cancel import CancelToken
from .client import DNSClient, TCPClient, UDPClient, make_client_factory
from .pool import NameserverPool
from .ptr_resolver import get_ptr, resolve
from .reverse_name import build_reverse_name
from .scheduler import BulkResolver, resolve_all

__all__ = [
    'CancelToken', 'DNSClient', 'TCPClient', 'UDPClient', 'make_client_factory',
    'NameserverPool', 'get_ptr', 'resolve', 'build_reverse_name',
    'BulkResolver', 'resolve_all',
]
