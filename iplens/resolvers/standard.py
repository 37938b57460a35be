"""
Standard ipinfo.io API with batch and map support
"""

import asyncio
import logging
from typing import Optional, Sequence

import httpx

from ..cache import cache_key
from ..config import BatchRequestOptions
from ..enrichment import is_bogon
from ..errors import LimitExceededError, LookupTimeoutError, ParseError, TransportError
from ..models import Details
from ..transport import open_client, send, check_error, decode_object
from .base import BaseResolver


logger = logging.getLogger(__name__)


class IPInfo(BaseResolver):
    """
    Resolver for the standard ipinfo.io API.

    Adds lookup_batch(), which resolves many addresses with as few remote
    calls as possible, and get_map(), which builds a map report.
    """

    BASE_URL = "https://ipinfo.io"
    BASE_URL_V6 = "https://v6.ipinfo.io"
    BATCH_URL = "https://ipinfo.io/batch"
    MAP_URL = "https://ipinfo.io/tools/map?cli=1"

    MAP_MAX_ADDRESSES = 500_000

    def parse_record(self, data: dict) -> Details:
        return Details.from_dict(data)

    async def lookup_batch(self, ips: Sequence[str],
                           options: Optional[BatchRequestOptions] = None) -> dict[str, Details]:
        """
        Look up many addresses.

        Bogons are answered locally, cached addresses come from the cache
        and everything else is deduplicated and sent in chunks of
        options.batch_size, one chunk at a time. Any failing chunk fails
        the whole call and nothing is returned or cached.

        Args:
            ips: Addresses, duplicates allowed
            options: Chunk size and deadlines (defaults when None)

        Returns:
            Dict mapping each distinct input address to its record

        Raises:
            LookupTimeoutError: options.timeout_total expired
            TransportError, RateLimitExceededError, RequestError,
            ParseError, DataIntegrityError
        """
        options = options or BatchRequestOptions()
        results: dict[str, Details] = {}
        misses: list[str] = []

        for ip in ips:
            if ip in results:
                continue
            if is_bogon(ip):
                results[ip] = self.bogon_record(ip)
                continue
            cached = self.cache.get(cache_key(ip))
            if cached is not None:
                results[ip] = cached
            else:
                misses.append(ip)

        candidates = list(dict.fromkeys(misses))
        logger.debug(
            "batch of %d: %d resolved locally, %d to fetch",
            len(ips), len(results), len(candidates),
        )

        if candidates:
            fetched = await self._fetch_with_deadline(candidates, options)
            for ip, details in fetched.items():
                if not details.bogon:
                    self.cache.put(cache_key(ip), details)
            results.update(fetched)

        return {ip: results[ip] for ip in dict.fromkeys(ips)}

    async def _fetch_with_deadline(self, candidates: list[str],
                                   options: BatchRequestOptions) -> dict[str, Details]:
        """Run the chunk loop, under timeout_total when one is set"""
        if options.timeout_total is None:
            return await self._fetch_chunks(candidates, options)

        try:
            return await asyncio.wait_for(
                self._fetch_chunks(candidates, options),
                timeout=options.timeout_total,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "batch lookup of %d addresses exceeded %.2fs",
                len(candidates), options.timeout_total,
            )
            raise LookupTimeoutError(
                f"batch lookup exceeded total timeout of {options.timeout_total}s"
            ) from None

    async def _fetch_chunks(self, candidates: list[str],
                            options: BatchRequestOptions) -> dict[str, Details]:
        """Fetch, merge and enrich every chunk; sequential by design"""
        merged: dict[str, Details] = {}
        size = options.batch_size

        async with open_client(options.timeout_per_chunk, self.token) as client:
            for start in range(0, len(candidates), size):
                chunk = candidates[start:start + size]
                logger.debug("fetching chunk %d-%d", start, start + len(chunk))
                merged.update(await self._fetch_chunk(client, chunk, options.timeout_per_chunk))

        for details in merged.values():
            self.tables.enrich(details)
        return merged

    async def _fetch_chunk(self, client: httpx.AsyncClient, chunk: list[str],
                           timeout: float) -> dict[str, Details]:
        """POST one chunk to the batch endpoint"""
        try:
            response = await asyncio.wait_for(
                send(client, 'POST', self.BATCH_URL, payload=chunk),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            raise TransportError(
                f"batch chunk of {len(chunk)} addresses exceeded {timeout}s"
            ) from None

        data = decode_object(response)

        out: dict[str, Details] = {}
        for ip in chunk:
            raw = data.get(ip)
            if not isinstance(raw, dict):
                raise ParseError(f"batch response has no record for {ip}")
            check_error(raw)
            out[ip] = self._build_record(raw)
        return out

    async def get_map(self, ips: Sequence[str]) -> str:
        """
        Submit addresses to the map tool.

        Args:
            ips: Up to MAP_MAX_ADDRESSES addresses

        Returns:
            URL of the generated map report

        Raises:
            LimitExceededError: more than MAP_MAX_ADDRESSES addresses
            TransportError, RateLimitExceededError, RequestError, ParseError
        """
        if len(ips) > self.MAP_MAX_ADDRESSES:
            raise LimitExceededError(
                f"map requests take at most {self.MAP_MAX_ADDRESSES} addresses, got {len(ips)}"
            )

        async with open_client(self.timeout, authenticate=False) as client:
            response = await send(client, 'POST', self.MAP_URL, payload=list(ips))

        report_url = decode_object(response).get('reportUrl')
        if not isinstance(report_url, str):
            raise ParseError("map response has no reportUrl")
        return report_url
