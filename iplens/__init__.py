"""
IPLens - IP address lookups against ipinfo.io

Resolves IP addresses into geolocation and network details with bogon
short-circuiting, an in-process LRU cache, chunked batch lookups and
static country enrichment.
"""

__version__ = "1.0.0"
__author__ = "IPLens"

from .errors import (
    IPLensError,
    ErrorKind,
    TransportError,
    RateLimitExceededError,
    RequestError,
    ParseError,
    LookupTimeoutError,
    LimitExceededError,
    DataIntegrityError,
    ConfigurationError,
)
from .config import ClientConfig, BatchRequestOptions
from .cache import LRUCache, cache_key
from .enrichment import is_bogon, is_bogon_addr, EnrichmentTables
from .models import Details, LiteDetails, CoreDetails
from .resolvers import IPInfo, IPInfoLite, IPInfoCore

__all__ = [
    '__version__',
    'IPLensError', 'ErrorKind', 'TransportError', 'RateLimitExceededError',
    'RequestError', 'ParseError', 'LookupTimeoutError', 'LimitExceededError',
    'DataIntegrityError', 'ConfigurationError',
    'ClientConfig', 'BatchRequestOptions',
    'LRUCache', 'cache_key',
    'is_bogon', 'is_bogon_addr', 'EnrichmentTables',
    'Details', 'LiteDetails', 'CoreDetails',
    'IPInfo', 'IPInfoLite', 'IPInfoCore',
]
