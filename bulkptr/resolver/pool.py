"""
Round-robin nameserver pool
"""

import threading
from typing import Iterable

from ..errors import ConfigurationError
from ..models import Nameserver


class NameserverPool:
    """
    Hands out nameservers in strict rotation.

    The Nth call to next() returns endpoints[(N - 1) % len(endpoints)],
    whichever thread makes it. The cursor is the only mutable state and
    is advanced under a lock.
    """

    def __init__(self, endpoints: Iterable[Nameserver]):
        self._endpoints = tuple(endpoints)
        if not self._endpoints:
            raise ConfigurationError("Nameserver pool needs at least one endpoint")
        self._cursor = 0
        self._lock = threading.Lock()

    @property
    def endpoints(self) -> tuple[Nameserver, ...]:
        return self._endpoints

    def next(self) -> Nameserver:
        """Return the next nameserver in rotation"""
        with self._lock:
            endpoint = self._endpoints[self._cursor]
            self._cursor = (self._cursor + 1) % len(self._endpoints)
        return endpoint

    def __len__(self) -> int:
        return len(self._endpoints)

    def __repr__(self) -> str:
        servers = ', '.join(str(e) for e in self._endpoints)
        return f"NameserverPool([{servers}])"
