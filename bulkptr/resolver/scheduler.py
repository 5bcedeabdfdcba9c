"""
Bulk resolution scheduler
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import replace
from typing import Iterable, Iterator, Optional, Union

from ..config import (
    DEFAULT_BACKOFF,
    DEFAULT_CONCURRENCY,
    DEFAULT_MAX_CNAME_HOPS,
    DEFAULT_RETRIES,
    DEFAULT_TIMEOUT,
    DEFAULT_TRANSPORT,
    parse_endpoint,
)
from ..errors import ConfigurationError
from ..models import (
    AddressToResolve,
    ErrorKind,
    IPAddress,
    Nameserver,
    ResolutionOutcome,
)
from .cancel import CancelToken
from .client import ClientFactory, make_client_factory
from .pool import NameserverPool
from .ptr_resolver import resolve
from .reverse_name import build_reverse_name


logger = logging.getLogger(__name__)


class BulkResolver:
    """
    Resolves many addresses concurrently.

    Each address is assigned the next nameserver from a round-robin
    pool, then resolved on a fixed-size thread pool. Every address
    yields exactly one outcome; per-address failures never stop the
    batch.
    """

    def __init__(
        self,
        endpoints: Iterable[Union[Nameserver, str]],
        concurrency: int = DEFAULT_CONCURRENCY,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: str = DEFAULT_TRANSPORT,
        retries: int = DEFAULT_RETRIES,
        backoff: float = DEFAULT_BACKOFF,
        max_hops: int = DEFAULT_MAX_CNAME_HOPS,
        client_factory: Optional[ClientFactory] = None,
    ):
        if concurrency < 1:
            raise ConfigurationError("Concurrency must be at least 1")
        if retries < 0:
            raise ConfigurationError("Retries cannot be negative")
        if backoff < 0:
            raise ConfigurationError("Backoff cannot be negative")
        if max_hops < 1:
            raise ConfigurationError("Max CNAME hops must be at least 1")

        self.pool = NameserverPool(
            e if isinstance(e, Nameserver) else parse_endpoint(e)
            for e in endpoints
        )
        self.concurrency = concurrency
        self.retries = retries
        self.backoff = backoff
        self.max_hops = max_hops
        self.client_factory = client_factory or make_client_factory(transport, timeout)

    def assign(self, addresses: Iterable[IPAddress]) -> list[AddressToResolve]:
        """Pair every address with the next nameserver, in input order"""
        return [AddressToResolve(address, self.pool.next()) for address in addresses]

    def resolve_item(self, item: AddressToResolve,
                     cancel: Optional[CancelToken] = None) -> ResolutionOutcome:
        """
        Resolve a single work item.

        A transport error is followed by a backoff pause, then up to
        ``retries`` further attempts on the same nameserver.
        """
        cancel = cancel or CancelToken()
        name = build_reverse_name(item.address)

        for attempt in range(self.retries + 1):
            with self.client_factory(item.nameserver) as client:
                outcome = resolve(name, client, max_hops=self.max_hops, cancel=cancel)
            outcome = replace(outcome, address=item.address, nameserver=item.nameserver)

            if not outcome.is_transport_error:
                return outcome

            logger.info(
                "Query error for (%s) from (%s): %s",
                item.address, item.nameserver, outcome.error,
            )
            if self.backoff and cancel.wait(self.backoff):
                break
            if attempt < self.retries:
                logger.debug("Retrying %s (attempt %d)", item.address, attempt + 2)

        return outcome

    def run(self, addresses: Iterable[IPAddress],
            cancel: Optional[CancelToken] = None) -> Iterator[ResolutionOutcome]:
        """
        Resolve all addresses, yielding outcomes in completion order.

        Closing the iterator before it is exhausted cancels pending work.
        """
        cancel = cancel or CancelToken()
        items = self.assign(addresses)
        if not items:
            return

        logger.info(
            "Resolving %d addresses over %d nameservers (%d workers)",
            len(items), len(self.pool), self.concurrency,
        )

        executor = ThreadPoolExecutor(
            max_workers=min(self.concurrency, len(items)),
            thread_name_prefix='bulkptr',
        )
        finished = False
        try:
            futures = {
                executor.submit(self.resolve_item, item, cancel): item
                for item in items
            }
            for future in as_completed(futures):
                yield self._collect(future, futures[future])
            finished = True
        finally:
            if not finished:
                cancel.cancel()
            executor.shutdown(wait=True, cancel_futures=True)

    def _collect(self, future: Future, item: AddressToResolve) -> ResolutionOutcome:
        try:
            return future.result()
        except Exception as e:
            logger.exception("Worker failed for %s", item.address)
            return ResolutionOutcome(
                query=build_reverse_name(item.address),
                address=item.address,
                nameserver=item.nameserver,
                error=f"Internal error: {e}",
                error_kind=ErrorKind.INTERNAL,
            )


def resolve_all(
    addresses: Iterable[IPAddress],
    endpoints: Iterable[Union[Nameserver, str]],
    concurrency: int = DEFAULT_CONCURRENCY,
    *,
    cancel: Optional[CancelToken] = None,
    deadline: Optional[float] = None,
    **options,
) -> Iterator[ResolutionOutcome]:
    """
    Resolve every address, one outcome per address.

    Configuration is validated immediately; resolution starts when the
    returned iterator is first advanced.

    Args:
        addresses: Parsed IPv4/IPv6 addresses
        endpoints: Nameservers, as Nameserver objects or "host:port" strings
        concurrency: Number of worker threads
        cancel: Token to stop the batch early
        deadline: Seconds after which remaining items are cancelled
        **options: Passed to BulkResolver (timeout, transport, retries,
            backoff, max_hops, client_factory)

    Returns:
        Iterator of ResolutionOutcome in completion order

    Raises:
        ConfigurationError: on invalid configuration
    """
    resolver = BulkResolver(endpoints, concurrency, **options)

    if deadline is not None:
        if deadline <= 0:
            raise ConfigurationError("Deadline must be positive")
        if cancel is not None:
            raise ConfigurationError("Pass either a cancel token or a deadline, not both")
        cancel = CancelToken(deadline)

    return resolver.run(addresses, cancel)
