"""
Client configuration
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from .errors import ConfigurationError
from .models import CountryFlag, CountryCurrency, Continent


DEFAULT_TIMEOUT = 3.0
DEFAULT_CACHE_SIZE = 100

BATCH_MAX_SIZE = 1000
BATCH_REQ_TIMEOUT_DEFAULT = 5.0


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == '':
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == '':
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")


@dataclass
class ClientConfig:
    """
    Settings shared by every resolver.

    The table overrides replace the bundled reference data; leave them
    as None to use the defaults shipped with the package.
    """
    token: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    cache_size: int = DEFAULT_CACHE_SIZE
    countries: Optional[Mapping[str, str]] = None
    eu: Optional[Sequence[str]] = None
    flags: Optional[Mapping[str, CountryFlag]] = None
    currencies: Optional[Mapping[str, CountryCurrency]] = None
    continents: Optional[Mapping[str, Continent]] = None

    def __post_init__(self):
        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")
        if self.cache_size <= 0:
            raise ConfigurationError(f"cache_size must be positive, got {self.cache_size}")

    @classmethod
    def from_env(cls, **overrides) -> 'ClientConfig':
        """
        Build a config from IPINFO_TOKEN, IPLENS_TIMEOUT and IPLENS_CACHE_SIZE.

        Keyword arguments take precedence over the environment.
        """
        values = {
            'token': os.getenv('IPINFO_TOKEN') or None,
            'timeout': _env_float('IPLENS_TIMEOUT', DEFAULT_TIMEOUT),
            'cache_size': _env_int('IPLENS_CACHE_SIZE', DEFAULT_CACHE_SIZE),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


@dataclass(frozen=True)
class BatchRequestOptions:
    """Chunking and deadline settings for a batch lookup"""
    batch_size: int = BATCH_MAX_SIZE
    timeout_per_chunk: float = BATCH_REQ_TIMEOUT_DEFAULT
    timeout_total: Optional[float] = None

    def __post_init__(self):
        if not 0 < self.batch_size <= BATCH_MAX_SIZE:
            raise ConfigurationError(
                f"batch_size must be between 1 and {BATCH_MAX_SIZE}, got {self.batch_size}"
            )
        if self.timeout_per_chunk <= 0:
            raise ConfigurationError(
                f"timeout_per_chunk must be positive, got {self.timeout_per_chunk}"
            )
        if self.timeout_total is not None and self.timeout_total <= 0:
            raise ConfigurationError(
                f"timeout_total must be positive, got {self.timeout_total}"
            )
