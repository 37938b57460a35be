import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .config import ClientConfig, BatchRequestOptions, BATCH_MAX_SIZE, BATCH_REQ_TIMEOUT_DEFAULT
from .enrichment import BogonClassifier
from .errors import IPLensError
from .logging_config import setup_logging
from .output import ConsoleOutput, JsonExporter
from .resolvers import IPInfo, IPInfoLite, IPInfoCore


logger = logging.getLogger(__name__)

VARIANTS = {
    'standard': IPInfo,
    'lite': IPInfoLite,
    'core': IPInfoCore,
}


def build_resolver(variant: str, token: Optional[str], timeout: Optional[float]):
    """Create the resolver for a variant name from env and CLI settings"""
    config = ClientConfig.from_env(token=token, timeout=timeout)
    return VARIANTS[variant].from_config(config)


async def resolve_all(resolver, addresses: tuple[str, ...],
                      options: BatchRequestOptions) -> dict:
    """
    Resolve addresses with the cheapest call the resolver offers.

    The standard API resolves several addresses in batch; the other
    products fall back to one lookup per distinct address.
    """
    if len(addresses) == 1:
        return {addresses[0]: await resolver.lookup(addresses[0])}

    if isinstance(resolver, IPInfo):
        return await resolver.lookup_batch(addresses, options)

    results = {}
    for ip in dict.fromkeys(addresses):
        results[ip] = await resolver.lookup(ip)
    return results


def _run(coro):
    """Run a coroutine, turning library errors into a clean exit"""
    output = ConsoleOutput()
    try:
        return asyncio.run(coro)
    except IPLensError as e:
        logger.debug("command failed", exc_info=True)
        output.print_error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        output.console.print("\n[yellow]Interrupted[/]")
        sys.exit(130)


@click.group()
@click.option('--token', envvar='IPINFO_TOKEN', default=None,
              help='ipinfo.io access token (default: $IPINFO_TOKEN)')
@click.option('--timeout', type=float, default=None,
              help='Timeout for single lookups in seconds (default: 3)')
@click.option('--variant', default='standard',
              type=click.Choice(list(VARIANTS), case_sensitive=False),
              help='API product to query (default: standard)')
@click.option('-v', '--verbose', count=True,
              help='Log progress (-v) or debug detail (-vv)')
@click.version_option(version=__version__)
@click.pass_context
def main(ctx: click.Context, token: Optional[str], timeout: Optional[float],
         variant: str, verbose: int):
    """
    IPLens - IP address details from ipinfo.io.

    Examples:

        iplens lookup 8.8.8.8

        iplens lookup 8.8.8.8 1.1.1.1 --json out.json

        iplens --variant lite me
    """
    setup_logging('DEBUG' if verbose > 1 else 'INFO' if verbose else 'WARNING')
    ctx.obj = {'token': token, 'timeout': timeout, 'variant': variant.lower()}


@main.command()
@click.argument('addresses', nargs=-1, required=True)
@click.option('--batch-size', default=BATCH_MAX_SIZE, type=int,
              help=f'Addresses per batch request (default: {BATCH_MAX_SIZE})')
@click.option('--chunk-timeout', default=BATCH_REQ_TIMEOUT_DEFAULT, type=float,
              help=f'Timeout per batch request in seconds (default: {BATCH_REQ_TIMEOUT_DEFAULT:g})')
@click.option('--total-timeout', default=None, type=float,
              help='Timeout for the whole batch in seconds (default: none)')
@click.option('--json', 'json_path', type=click.Path(),
              help='Export results to JSON file')
@click.pass_obj
def lookup(obj: dict, addresses: tuple[str, ...], batch_size: int,
           chunk_timeout: float, total_timeout: Optional[float],
           json_path: Optional[str]):
    """Look up one or more ADDRESSES."""
    output = ConsoleOutput()

    async def run():
        resolver = build_resolver(obj['variant'], obj['token'], obj['timeout'])
        options = BatchRequestOptions(
            batch_size=batch_size,
            timeout_per_chunk=chunk_timeout,
            timeout_total=total_timeout,
        )
        return await resolve_all(resolver, addresses, options)

    results = _run(run())

    if len(results) == 1:
        output.print_details(next(iter(results.values())))
    else:
        output.print_header(f"{obj['variant']} lookup", len(results))
        output.print_batch(results)

    bogons = sum(1 for record in results.values() if record.bogon)
    if bogons:
        output.print_warning(f"{bogons} bogon address{'es' if bogons != 1 else ''} answered locally")

    if json_path:
        json_file = Path(json_path)
        JsonExporter().export(results, json_file)
        output.console.print(f"\n[dim]Results exported to:[/] {json_file.absolute()}")


@main.command()
@click.option('--v6', is_flag=True, help='Look up your IPv6 address instead of IPv4')
@click.pass_obj
def me(obj: dict, v6: bool):
    """Look up your own public address."""
    async def run():
        resolver = build_resolver(obj['variant'], obj['token'], obj['timeout'])
        if v6:
            return await resolver.lookup_self_v6()
        return await resolver.lookup_self_v4()

    ConsoleOutput().print_details(_run(run()))


@main.command(name='map')
@click.argument('addresses', nargs=-1, required=True)
@click.pass_obj
def map_command(obj: dict, addresses: tuple[str, ...]):
    """Build a map report for ADDRESSES."""
    async def run():
        resolver = build_resolver('standard', obj['token'], obj['timeout'])
        return await resolver.get_map(list(addresses))

    ConsoleOutput().print_map_url(_run(run()))


@main.command()
@click.argument('addresses', nargs=-1, required=True)
def bogon(addresses: tuple[str, ...]):
    """Check whether ADDRESSES are bogons, without any network access."""
    output = ConsoleOutput()
    for ip in addresses:
        output.print_bogon(ip, BogonClassifier.network_for(ip))


if __name__ == '__main__':
    main()
