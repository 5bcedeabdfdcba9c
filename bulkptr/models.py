"""
Data models for BulkPTR
"""

import ipaddress
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


class OutcomeStatus(Enum):
    """Terminal state of a single address"""
    RESOLVED = "resolved"
    NO_ANSWER = "no_answer"
    ERROR = "error"


class ErrorKind(Enum):
    """Classification of a failed resolution"""
    TRANSPORT = "transport"          # connection failure, timeout, I/O
    PROTOCOL = "protocol"            # unexpected answer shape
    CHAIN_TOO_LONG = "chain_too_long"
    CANCELLED = "cancelled"
    INTERNAL = "internal"


@dataclass(frozen=True)
class Nameserver:
    """A DNS server endpoint"""
    host: str
    port: int = 53

    @property
    def is_ipv6(self) -> bool:
        return ':' in self.host

    def __str__(self) -> str:
        if self.is_ipv6:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


@dataclass(frozen=True)
class AddressToResolve:
    """Work item: an address paired with the nameserver assigned to it"""
    address: IPAddress
    nameserver: Nameserver


@dataclass(frozen=True)
class ResolutionOutcome:
    """
    Result of resolving one reverse name.

    Exactly one of three states holds:
    - resolved: ``hostname`` is set
    - no answer: neither ``hostname`` nor ``error`` is set
    - error: ``error`` (and ``error_kind``) is set
    """
    query: str
    address: Optional[IPAddress] = None
    nameserver: Optional[Nameserver] = None
    hostname: Optional[str] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    cname_chain: tuple[str, ...] = field(default_factory=tuple)

    @property
    def status(self) -> OutcomeStatus:
        if self.error is not None:
            return OutcomeStatus.ERROR
        if self.hostname is not None:
            return OutcomeStatus.RESOLVED
        return OutcomeStatus.NO_ANSWER

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @property
    def is_transport_error(self) -> bool:
        return self.error_kind is ErrorKind.TRANSPORT


@dataclass
class BatchSummary:
    """Aggregate counters for a finished batch"""
    total: int = 0
    resolved: int = 0
    no_answer: int = 0
    errors: int = 0
    elapsed: Optional[float] = None
    errors_by_kind: dict[str, int] = field(default_factory=dict)

    def add(self, outcome: ResolutionOutcome):
        """Count one outcome"""
        self.total += 1
        status = outcome.status
        if status is OutcomeStatus.RESOLVED:
            self.resolved += 1
        elif status is OutcomeStatus.NO_ANSWER:
            self.no_answer += 1
        else:
            self.errors += 1
            kind = outcome.error_kind.value if outcome.error_kind else "unknown"
            self.errors_by_kind[kind] = self.errors_by_kind.get(kind, 0) + 1
