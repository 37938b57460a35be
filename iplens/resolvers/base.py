"""
Single-address lookup pipeline shared by every resolver
"""

import logging
from abc import ABC, abstractmethod
from typing import Mapping, Optional, Sequence

from ..cache import LRUCache, cache_key
from ..config import ClientConfig, DEFAULT_CACHE_SIZE, DEFAULT_TIMEOUT
from ..enrichment import EnrichmentTables, is_bogon
from ..errors import ConfigurationError, ParseError
from ..models import CountryFlag, CountryCurrency, Continent
from ..transport import open_client, send, decode_object


logger = logging.getLogger(__name__)


class BaseResolver(ABC):
    """
    Resolve single addresses against one ipinfo.io product.

    Each lookup runs bogon check -> cache -> remote GET -> country
    enrichment -> cache write. The cache and the enrichment tables belong
    to the instance and live as long as it does. Instances are not safe
    for concurrent use; serialize calls when sharing one.
    """

    BASE_URL: str = ''
    BASE_URL_V6: str = ''
    SELF_PATH = 'me'

    def __init__(self,
                 token: Optional[str] = None,
                 timeout: float = DEFAULT_TIMEOUT,
                 cache_size: int = DEFAULT_CACHE_SIZE,
                 countries: Optional[Mapping[str, str]] = None,
                 eu: Optional[Sequence[str]] = None,
                 flags: Optional[Mapping[str, CountryFlag]] = None,
                 currencies: Optional[Mapping[str, CountryCurrency]] = None,
                 continents: Optional[Mapping[str, Continent]] = None):
        """
        Args:
            token: ipinfo.io access token, sent as a bearer credential
            timeout: Deadline in seconds for single lookups
            cache_size: LRU cache capacity, fixed for the instance lifetime
            countries, eu, flags, currencies, continents: Optional
                replacements for the bundled reference tables

        Raises:
            ConfigurationError: invalid settings or unusable bundled data
        """
        if timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {timeout}")

        self.token = token
        self.timeout = timeout
        self.cache = LRUCache(cache_size)
        self.tables = EnrichmentTables.load(
            countries=countries,
            eu=eu,
            flags=flags,
            currencies=currencies,
            continents=continents,
        )

    @classmethod
    def from_config(cls, config: ClientConfig):
        """Build a resolver from a ClientConfig"""
        return cls(
            token=config.token,
            timeout=config.timeout,
            cache_size=config.cache_size,
            countries=config.countries,
            eu=config.eu,
            flags=config.flags,
            currencies=config.currencies,
            continents=config.continents,
        )

    @abstractmethod
    def parse_record(self, data: dict):
        """Build this product's record type from a decoded response object"""
        pass

    def bogon_record(self, ip: str):
        """Synthetic record for a bogon address; every other field stays empty"""
        return self.parse_record({'ip': ip, 'bogon': True})

    def _build_record(self, data: dict):
        """
        Parse a record and check the fields the pipeline relies on.

        Raises:
            ParseError: no `ip`, or `ip`/country code of the wrong type
        """
        try:
            record = self.parse_record(data)
            code = record.country_code
        except (AttributeError, TypeError, ValueError) as e:
            raise ParseError(f"unexpected record shape: {e}") from e

        if not record.ip or not isinstance(record.ip, str):
            raise ParseError(f"record has no usable ip: {record.ip!r}")
        if code is not None and not isinstance(code, str):
            raise ParseError(f"country code must be a string, got {type(code).__name__}")
        return record

    async def lookup(self, ip: str):
        """
        Look up details for one address.

        Args:
            ip: IPv4 or IPv6 address

        Returns:
            Enriched record; bogons get a record with only `ip` and `bogon`

        Raises:
            TransportError, RateLimitExceededError, RequestError,
            ParseError, DataIntegrityError
        """
        return await self._lookup(ip, self.BASE_URL)

    async def lookup_self_v4(self):
        """Look up the caller's own IPv4 address"""
        return await self._lookup(self.SELF_PATH, self.BASE_URL)

    async def lookup_self_v6(self):
        """Look up the caller's own IPv6 address"""
        return await self._lookup(self.SELF_PATH, self.BASE_URL_V6,
                                  key=cache_key(f"{self.SELF_PATH}/v6"))

    async def _lookup(self, ip: str, base_url: str, key: Optional[str] = None):
        if is_bogon(ip):
            return self.bogon_record(ip)

        # v4 and v6 self lookups hit the same path on different hosts
        key = key or cache_key(ip)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("cache hit for %s", ip)
            return cached

        logger.debug("cache miss for %s, querying %s", ip, base_url)
        async with open_client(self.timeout, self.token) as client:
            response = await send(client, 'GET', f"{base_url}/{ip}")

        details = self._build_record(decode_object(response))
        self.tables.enrich(details)

        if not details.bogon:
            self.cache.put(key, details)
        return details
