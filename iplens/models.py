"""
Data models for IPLens
"""

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Optional


@dataclass(frozen=True)
class CountryFlag:
    """Flag emoji and its unicode code points, e.g. "U+1F1FA U+1F1F8" """
    emoji: str
    unicode: str


@dataclass(frozen=True)
class CountryCurrency:
    """Currency code and symbol"""
    code: str
    symbol: str


@dataclass(frozen=True)
class Continent:
    """Continent code and name"""
    code: str
    name: str


@dataclass(frozen=True)
class CountryInfo:
    """Everything the enrichment tables know about one country code"""
    name: str
    is_eu: bool
    flag: CountryFlag
    flag_url: str
    currency: CountryCurrency
    continent: Continent


def _from_mapping(cls, data: dict):
    """
    Build a record dataclass from an API payload.

    Keys are renamed through cls._RENAMES, nested groups are built through
    cls._NESTED and anything unrecognized lands in `extra` when the class
    has one.
    """
    renames = getattr(cls, '_RENAMES', {})
    nested = getattr(cls, '_NESTED', {})
    known = {f.name for f in fields(cls) if f.init}
    kwargs: dict[str, Any] = {}
    extra: dict[str, Any] = {}

    for key, value in data.items():
        name = renames.get(key, key)
        if name == 'extra' or name not in known:
            extra[key] = value
            continue
        if name in nested and isinstance(value, dict):
            value = _from_mapping(nested[name], value)
        kwargs[name] = value

    if 'extra' in known:
        kwargs['extra'] = extra
    return cls(**kwargs)


def _to_mapping(obj) -> dict:
    """Inverse of _from_mapping, re-emitting API key names and `extra`"""
    reverse = {attr: key for key, attr in getattr(obj, '_RENAMES', {}).items()}
    out: dict[str, Any] = {}

    for f in fields(obj):
        if f.name == 'extra':
            continue
        value = getattr(obj, f.name)
        if hasattr(value, '__dataclass_fields__'):
            value = _to_mapping(value)
        out[reverse.get(f.name, f.name)] = value

    out.update(getattr(obj, 'extra', {}) or {})
    return out


@dataclass
class ASNDetails:
    """Autonomous system details"""
    _RENAMES: ClassVar[dict] = {'type': 'asn_type'}

    asn: Optional[str] = None
    name: Optional[str] = None
    domain: Optional[str] = None
    route: Optional[str] = None
    asn_type: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class CompanyDetails:
    """Company using the address"""
    _RENAMES: ClassVar[dict] = {'type': 'company_type'}

    name: Optional[str] = None
    domain: Optional[str] = None
    company_type: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class CarrierDetails:
    """Mobile carrier details"""
    name: Optional[str] = None
    mcc: Optional[str] = None
    mnc: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class PrivacyDetails:
    """Privacy detection flags"""
    vpn: Optional[bool] = None
    proxy: Optional[bool] = None
    tor: Optional[bool] = None
    relay: Optional[bool] = None
    hosting: Optional[bool] = None
    service: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class AbuseDetails:
    """Abuse contact for the network"""
    address: Optional[str] = None
    country: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None
    network: Optional[str] = None
    phone: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class DomainsDetails:
    """Hosted domains"""
    ip: Optional[str] = None
    page: Optional[int] = None
    total: Optional[int] = None
    domains: list[str] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)


def _split_loc(loc: Optional[str]) -> tuple[Optional[float], Optional[float]]:
    """Split "lat,lon" into floats, (None, None) when absent or malformed"""
    if not loc:
        return None, None
    parts = loc.split(',')
    if len(parts) != 2:
        return None, None
    try:
        return float(parts[0]), float(parts[1])
    except ValueError:
        return None, None


@dataclass
class Details:
    """
    Lookup result from the standard ipinfo.io API.

    `country` holds the ISO country code as returned by the service; the
    enrichment fields below it are filled locally from the country tables.
    Fields the library does not know about are kept in `extra`.
    """
    _NESTED: ClassVar[dict] = {
        'asn': ASNDetails,
        'company': CompanyDetails,
        'carrier': CarrierDetails,
        'privacy': PrivacyDetails,
        'abuse': AbuseDetails,
        'domains': DomainsDetails,
    }

    ip: str = ''
    hostname: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = None
    country: Optional[str] = None
    loc: Optional[str] = None
    postal: Optional[str] = None
    timezone: Optional[str] = None
    org: Optional[str] = None
    asn: Optional[ASNDetails] = None
    company: Optional[CompanyDetails] = None
    carrier: Optional[CarrierDetails] = None
    privacy: Optional[PrivacyDetails] = None
    abuse: Optional[AbuseDetails] = None
    domains: Optional[DomainsDetails] = None
    bogon: bool = False

    # Enrichment
    country_name: Optional[str] = None
    is_eu: Optional[bool] = None
    country_flag: Optional[CountryFlag] = None
    country_flag_url: Optional[str] = None
    country_currency: Optional[CountryCurrency] = None
    continent: Optional[Continent] = None

    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def country_code(self) -> Optional[str]:
        return self.country

    @property
    def latitude(self) -> Optional[float]:
        return _split_loc(self.loc)[0]

    @property
    def longitude(self) -> Optional[float]:
        return _split_loc(self.loc)[1]

    def apply_country_info(self, info: CountryInfo):
        self.country_name = info.name
        self.is_eu = info.is_eu
        self.country_flag = info.flag
        self.country_flag_url = info.flag_url
        self.country_currency = info.currency
        self.continent = info.continent

    @classmethod
    def from_dict(cls, data: dict) -> 'Details':
        return _from_mapping(cls, data)

    def to_dict(self) -> dict:
        return _to_mapping(self)


@dataclass
class LiteDetails:
    """
    Lookup result from the /lite API.

    The service's own `continent` field is a plain name, so the enriched
    continent lives in `continent_info`.
    """
    ip: str = ''
    asn: Optional[str] = None
    as_name: Optional[str] = None
    as_domain: Optional[str] = None
    country_code: Optional[str] = None
    country: Optional[str] = None
    continent_code: Optional[str] = None
    continent: Optional[str] = None
    bogon: bool = False

    country_name: Optional[str] = None
    is_eu: Optional[bool] = None
    country_flag: Optional[CountryFlag] = None
    country_flag_url: Optional[str] = None
    country_currency: Optional[CountryCurrency] = None
    continent_info: Optional[Continent] = None

    extra: dict[str, Any] = field(default_factory=dict)

    def apply_country_info(self, info: CountryInfo):
        self.country_name = info.name
        self.is_eu = info.is_eu
        self.country_flag = info.flag
        self.country_flag_url = info.flag_url
        self.country_currency = info.currency
        self.continent_info = info.continent

    @classmethod
    def from_dict(cls, data: dict) -> 'LiteDetails':
        return _from_mapping(cls, data)

    def to_dict(self) -> dict:
        return _to_mapping(self)


@dataclass
class CoreGeo:
    """Geolocation group of a /lookup result"""
    city: Optional[str] = None
    region: Optional[str] = None
    region_code: Optional[str] = None
    country: Optional[str] = None
    country_code: Optional[str] = None
    continent: Optional[str] = None
    continent_code: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    timezone: Optional[str] = None
    postal_code: Optional[str] = None

    country_name: Optional[str] = None
    is_eu: Optional[bool] = None
    country_flag: Optional[CountryFlag] = None
    country_flag_url: Optional[str] = None
    country_currency: Optional[CountryCurrency] = None
    continent_info: Optional[Continent] = None

    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class CoreAS:
    """Autonomous system group of a /lookup result"""
    _RENAMES: ClassVar[dict] = {'type': 'as_type'}

    asn: Optional[str] = None
    name: Optional[str] = None
    domain: Optional[str] = None
    as_type: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class CoreDetails:
    """Lookup result from the /lookup API"""
    _RENAMES: ClassVar[dict] = {'as': 'as_'}
    _NESTED: ClassVar[dict] = {'geo': CoreGeo, 'as_': CoreAS}

    ip: str = ''
    hostname: Optional[str] = None
    geo: Optional[CoreGeo] = None
    as_: Optional[CoreAS] = None
    is_anonymous: Optional[bool] = None
    is_anycast: Optional[bool] = None
    is_hosting: Optional[bool] = None
    is_mobile: Optional[bool] = None
    is_satellite: Optional[bool] = None
    bogon: bool = False

    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def country_code(self) -> Optional[str]:
        return self.geo.country_code if self.geo else None

    def apply_country_info(self, info: CountryInfo):
        geo = self.geo
        geo.country_name = info.name
        geo.is_eu = info.is_eu
        geo.country_flag = info.flag
        geo.country_flag_url = info.flag_url
        geo.country_currency = info.currency
        geo.continent_info = info.continent

    @classmethod
    def from_dict(cls, data: dict) -> 'CoreDetails':
        return _from_mapping(cls, data)

    def to_dict(self) -> dict:
        return _to_mapping(self)
