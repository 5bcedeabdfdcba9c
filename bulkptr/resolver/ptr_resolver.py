"""
PTR (reverse DNS) resolver
"""

import ipaddress
import logging
from dataclasses import replace
from typing import Optional, Union

import dns.rcode
import dns.rdataclass
import dns.rdatatype

from ..config import DEFAULT_MAX_CNAME_HOPS
from ..errors import TransportError
from ..models import ErrorKind, IPAddress, ResolutionOutcome
from .cancel import CancelToken
from .client import DNSClient
from .reverse_name import build_reverse_name


logger = logging.getLogger(__name__)


def resolve(
    name: str,
    client: DNSClient,
    *,
    max_hops: int = DEFAULT_MAX_CNAME_HOPS,
    cancel: Optional[CancelToken] = None,
) -> ResolutionOutcome:
    """
    Resolve a reverse name to the hostname it points to.

    Only the first answer record is inspected. A PTR record ends the
    lookup; a CNAME is followed by querying its target on the same
    client, at most ``max_hops`` times. Failures are returned as error
    outcomes, never raised.

    Args:
        name: Fully qualified reverse name, e.g. 8.8.8.8.in-addr.arpa.
        client: DNS client bound to one nameserver
        max_hops: Maximum number of CNAME indirections to follow
        cancel: Optional token checked before every query

    Returns:
        ResolutionOutcome with hostname, no answer, or error
    """
    return _resolve(name, client, max_hops, name, (), cancel)


def _resolve(
    name: str,
    client: DNSClient,
    hops_left: int,
    query: str,
    chain: tuple[str, ...],
    cancel: Optional[CancelToken],
) -> ResolutionOutcome:
    def failed(kind: ErrorKind, message: str) -> ResolutionOutcome:
        return ResolutionOutcome(
            query=query, error=message, error_kind=kind, cname_chain=chain
        )

    if cancel is not None and cancel.cancelled:
        return failed(ErrorKind.CANCELLED, f"Cancelled before querying ({name})")

    try:
        response = client.query(name, dns.rdataclass.IN, dns.rdatatype.PTR)
    except TransportError as e:
        return failed(ErrorKind.TRANSPORT, str(e))

    if not response.answer:
        logger.debug("No answer for %s (%s)", name, dns.rcode.to_text(response.rcode()))
        return ResolutionOutcome(query=query, cname_chain=chain)

    rrset = response.answer[0]
    if len(rrset) == 0:
        return failed(ErrorKind.PROTOCOL, f"Weird empty result from: {name}")

    rdata = next(iter(rrset))

    if rrset.rdtype == dns.rdatatype.PTR:
        return ResolutionOutcome(
            query=query,
            hostname=rdata.target.to_text().lower(),
            cname_chain=chain,
        )

    # Example: 87.246.7.75
    # 75.7.246.87.in-addr.arpa.        3600  IN CNAME 75.0-255.7.246.87.in-addr.arpa.
    # 75.0-255.7.246.87.in-addr.arpa. 86400  IN PTR   bulbank.linkbg.com.
    if rrset.rdtype == dns.rdatatype.CNAME:
        target = rdata.target.to_text().lower()
        if hops_left <= 0:
            return failed(
                ErrorKind.CHAIN_TOO_LONG,
                f"CNAME chain too long from: {query} (stopped at {target})",
            )
        logger.debug("Following CNAME %s -> %s", name, target)
        return _resolve(target, client, hops_left - 1, query, chain + (target,), cancel)

    return failed(
        ErrorKind.PROTOCOL,
        f"Unexpected result ({dns.rdatatype.to_text(rrset.rdtype)} "
        f"{rdata.to_text()}) from: {name}",
    )


def get_ptr(
    address: Union[IPAddress, str],
    client: DNSClient,
    *,
    max_hops: int = DEFAULT_MAX_CNAME_HOPS,
    cancel: Optional[CancelToken] = None,
) -> ResolutionOutcome:
    """
    Resolve an IP address to its PTR hostname.

    Example:
        with TCPClient(Nameserver("8.8.8.8")) as client:
            get_ptr("8.8.8.8", client).hostname  # "dns.google."
    """
    name = build_reverse_name(address)
    if isinstance(address, str):
        address = ipaddress.ip_address(address.strip())
    outcome = resolve(name, client, max_hops=max_hops, cancel=cancel)
    return replace(outcome, address=address)
