"""
Static country reference tables and the enrichment join
"""

import json
from dataclasses import dataclass
from importlib import resources
from types import MappingProxyType
from typing import Mapping, Optional, Sequence

from ..errors import ConfigurationError, DataIntegrityError
from ..models import CountryFlag, CountryCurrency, Continent, CountryInfo


COUNTRY_FLAG_URL = "https://cdn.ipinfo.io/static/images/countries-flags/"
FLAG_FILE_EXT = ".svg"

DATA_PACKAGE = 'iplens'
COUNTRIES_FILE = 'data/countries.json'
EU_FILE = 'data/eu.json'
CURRENCIES_FILE = 'data/currency.json'
CONTINENTS_FILE = 'data/continent.json'

# Regional indicator symbol letter A
_REGIONAL_INDICATOR_A = 0x1F1E6


def flag_for(country_code: str) -> CountryFlag:
    """
    Build the flag emoji for a two-letter country code.

    Flags are pairs of regional indicator symbols, one per letter.
    """
    code = country_code.upper()
    points = [_REGIONAL_INDICATOR_A + ord(ch) - ord('A') for ch in code]
    return CountryFlag(
        emoji=''.join(chr(p) for p in points),
        unicode=' '.join(f"U+{p:X}" for p in points),
    )


def flag_url_for(country_code: str) -> str:
    return f"{COUNTRY_FLAG_URL}{country_code}{FLAG_FILE_EXT}"


def _load_json(name: str):
    """Read one bundled data file; any failure is a setup error"""
    try:
        text = resources.files(DATA_PACKAGE).joinpath(name).read_text(encoding='utf-8')
        return json.loads(text)
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"cannot load bundled data file {name}: {e}") from e


def _load_countries() -> dict[str, str]:
    data = _load_json(COUNTRIES_FILE)
    if not isinstance(data, dict):
        raise ConfigurationError(f"{COUNTRIES_FILE} must hold an object")
    return data


def _load_eu() -> list[str]:
    data = _load_json(EU_FILE)
    if not isinstance(data, list):
        raise ConfigurationError(f"{EU_FILE} must hold an array")
    return data


def _load_currencies() -> dict[str, CountryCurrency]:
    data = _load_json(CURRENCIES_FILE)
    try:
        return {
            code: CountryCurrency(code=entry['code'], symbol=entry['symbol'])
            for code, entry in data.items()
        }
    except (AttributeError, KeyError, TypeError) as e:
        raise ConfigurationError(f"malformed {CURRENCIES_FILE}: {e}") from e


def _load_continents() -> dict[str, Continent]:
    data = _load_json(CONTINENTS_FILE)
    try:
        return {
            code: Continent(code=entry['code'], name=entry['name'])
            for code, entry in data.items()
        }
    except (AttributeError, KeyError, TypeError) as e:
        raise ConfigurationError(f"malformed {CONTINENTS_FILE}: {e}") from e


@dataclass(frozen=True)
class EnrichmentTables:
    """
    Immutable country reference data keyed by ISO 3166-1 alpha-2 code.

    Built once per resolver. Use EnrichmentTables.load() to combine the
    bundled defaults with optional overrides.
    """
    countries: Mapping[str, str]
    eu: frozenset
    flags: Mapping[str, CountryFlag]
    currencies: Mapping[str, CountryCurrency]
    continents: Mapping[str, Continent]

    @classmethod
    def load(cls,
             countries: Optional[Mapping[str, str]] = None,
             eu: Optional[Sequence[str]] = None,
             flags: Optional[Mapping[str, CountryFlag]] = None,
             currencies: Optional[Mapping[str, CountryCurrency]] = None,
             continents: Optional[Mapping[str, Continent]] = None) -> 'EnrichmentTables':
        """
        Load the tables, bundled defaults first, overrides second.

        Raises:
            ConfigurationError: a bundled data file is missing or malformed
        """
        if countries is None:
            countries = _load_countries()
        if eu is None:
            eu = _load_eu()
        if flags is None:
            flags = {code: flag_for(code) for code in countries}
        if currencies is None:
            currencies = _load_currencies()
        if continents is None:
            continents = _load_continents()

        return cls(
            countries=MappingProxyType(dict(countries)),
            eu=frozenset(eu),
            flags=MappingProxyType(dict(flags)),
            currencies=MappingProxyType(dict(currencies)),
            continents=MappingProxyType(dict(continents)),
        )

    def describe(self, country_code: str) -> CountryInfo:
        """
        Join every table on one country code.

        Args:
            country_code: Non-empty ISO country code

        Returns:
            CountryInfo with name, EU membership, flag, flag URL,
            currency and continent

        Raises:
            DataIntegrityError: any table lacks the code
        """
        missing = [
            table for table, mapping in (
                ('countries', self.countries),
                ('flags', self.flags),
                ('currencies', self.currencies),
                ('continents', self.continents),
            )
            if country_code not in mapping
        ]
        if missing:
            raise DataIntegrityError(
                f"country code {country_code!r} missing from {', '.join(missing)}",
                country_code=country_code,
            )

        return CountryInfo(
            name=self.countries[country_code],
            is_eu=country_code in self.eu,
            flag=self.flags[country_code],
            flag_url=flag_url_for(country_code),
            currency=self.currencies[country_code],
            continent=self.continents[country_code],
        )

    def enrich(self, details):
        """
        Fill the enrichment fields of a record in place.

        Records with an empty country code are left untouched. The record
        is only modified once every lookup has succeeded.
        """
        code = details.country_code
        if not code:
            return details
        details.apply_country_info(self.describe(code))
        return details
