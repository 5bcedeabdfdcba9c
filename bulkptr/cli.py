import sys
import time
from pathlib import Path
from typing import BinaryIO, Optional

import click

from . import __version__
from .config import (
    DEFAULT_BACKOFF,
    DEFAULT_CONCURRENCY,
    DEFAULT_MAX_CNAME_HOPS,
    DEFAULT_NAMESERVERS,
    DEFAULT_RETRIES,
    DEFAULT_TIMEOUT,
    DEFAULT_TRANSPORT,
    TRANSPORTS,
    parse_endpoints,
)
from .errors import ConfigurationError
from .input import read_addresses
from .logging_config import setup_logging
from .models import BatchSummary
from .output import ConsoleOutput, JsonExporter, sort_outcomes
from .resolver import CancelToken, make_client_factory, resolve_all


@click.command()
@click.argument('file', type=click.File('rb'))
@click.option('-s', '--server', 'servers', multiple=True, envvar='BULKPTR_NAMESERVERS',
              help='Nameserver as host[:port], repeatable '
                   '(default: 1.1.1.1, 1.0.0.1, 8.8.8.8, 8.8.4.4)')
@click.option('-j', '--concurrency', default=DEFAULT_CONCURRENCY, type=int,
              envvar='BULKPTR_CONCURRENCY', show_envvar=True,
              help=f'Worker threads (default: {DEFAULT_CONCURRENCY})')
@click.option('-w', '--timeout', default=DEFAULT_TIMEOUT, type=float,
              envvar='BULKPTR_TIMEOUT', show_envvar=True,
              help=f'Timeout per query in seconds (default: {DEFAULT_TIMEOUT:g})')
@click.option('-t', '--transport', default=DEFAULT_TRANSPORT,
              type=click.Choice(TRANSPORTS, case_sensitive=False),
              envvar='BULKPTR_TRANSPORT', show_envvar=True,
              help=f'Query transport (default: {DEFAULT_TRANSPORT})')
@click.option('--retries', default=DEFAULT_RETRIES, type=int,
              envvar='BULKPTR_RETRIES', show_envvar=True,
              help='Extra attempts after a transport error (default: 0)')
@click.option('--backoff', default=DEFAULT_BACKOFF, type=float,
              envvar='BULKPTR_BACKOFF', show_envvar=True,
              help=f'Pause after a transport error in seconds (default: {DEFAULT_BACKOFF:g})')
@click.option('--max-cname-hops', default=DEFAULT_MAX_CNAME_HOPS, type=int,
              envvar='BULKPTR_MAX_CNAME_HOPS', show_envvar=True,
              help=f'CNAME indirections to follow (default: {DEFAULT_MAX_CNAME_HOPS})')
@click.option('--deadline', type=float, envvar='BULKPTR_DEADLINE', show_envvar=True,
              help='Cancel whatever is left after this many seconds')
@click.option('--sort', 'sort_output', is_flag=True,
              help='Print results in address order once all are done')
@click.option('--json', 'json_path', type=click.Path(),
              help='Export results to JSON file')
@click.option('-q', '--quiet', is_flag=True,
              help='Do not print the summary')
@click.option('-v', '--verbose', count=True,
              help='Log more (-v info, -vv debug)')
@click.version_option(version=__version__)
def main(file: BinaryIO, servers: tuple[str, ...], concurrency: int, timeout: float,
         transport: str, retries: int, backoff: float, max_cname_hops: int,
         deadline: Optional[float], sort_output: bool, json_path: Optional[str],
         quiet: bool, verbose: int):
    """
    BulkPTR - bulk reverse DNS resolution.

    Resolve every IP address in FILE (one per line, "-" for stdin) to
    its PTR hostname, spreading queries round-robin over the nameservers.

    Examples:

        bulkptr ips.txt

        bulkptr ips.txt -s 9.9.9.9 -s 149.112.112.112 -j 50

        cat ips.txt | bulkptr - --sort --json results.json
    """
    output = ConsoleOutput()
    setup_logging(verbose, console=output.err_console)

    try:
        endpoints = parse_endpoints(servers or DEFAULT_NAMESERVERS)
        addresses = read_addresses(file)
        if deadline is not None and deadline <= 0:
            raise ConfigurationError("Deadline must be positive")
        cancel = CancelToken(deadline)
        outcomes = resolve_all(
            addresses,
            endpoints,
            concurrency,
            cancel=cancel,
            retries=retries,
            backoff=backoff,
            max_hops=max_cname_hops,
            client_factory=make_client_factory(transport, timeout),
        )
    except ConfigurationError as e:
        output.print_error(str(e))
        sys.exit(1)

    summary = BatchSummary()
    collected = []
    started = time.monotonic()

    try:
        for outcome in outcomes:
            summary.add(outcome)
            if sort_output or json_path:
                collected.append(outcome)
            if not sort_output:
                output.print_outcome(outcome)
    except KeyboardInterrupt:
        cancel.cancel()
        outcomes.close()
        output.err_console.print("\n[yellow]Interrupted[/]")
        sys.exit(130)

    summary.elapsed = time.monotonic() - started

    if sort_output:
        for outcome in sort_outcomes(collected):
            output.print_outcome(outcome)

    if not quiet:
        output.print_summary(summary)

    if json_path:
        exporter = JsonExporter(endpoints, transport=transport.lower())
        json_file = Path(json_path)
        exporter.export(collected, summary, json_file)
        if not quiet:
            output.err_console.print(f"[dim]Results exported to:[/] {json_file.absolute()}")


if __name__ == '__main__':
    main()
