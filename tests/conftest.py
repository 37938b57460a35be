import logging

import pytest

from iplens import IPInfo, IPInfoLite, IPInfoCore

from .payloads import details_payload


TOKEN = "test-token"


@pytest.fixture(autouse=True)
def reset_iplens_logger():
    """The CLI installs handlers on the iplens logger; undo that between tests."""
    yield
    logger = logging.getLogger("iplens")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def ipinfo():
    return IPInfo(token=TOKEN)


@pytest.fixture
def ipinfo_lite():
    return IPInfoLite(token=TOKEN)


@pytest.fixture
def ipinfo_core():
    return IPInfoCore(token=TOKEN)


@pytest.fixture
def google_payload():
    return details_payload()


@pytest.fixture
def lite_payload():
    return {
        "ip": "8.8.8.8",
        "asn": "AS15169",
        "as_name": "Google LLC",
        "as_domain": "google.com",
        "country_code": "US",
        "country": "United States",
        "continent_code": "NA",
        "continent": "North America",
    }


@pytest.fixture
def core_payload():
    return {
        "ip": "8.8.8.8",
        "hostname": "dns.google",
        "geo": {
            "city": "Mountain View",
            "region": "California",
            "region_code": "CA",
            "country": "United States",
            "country_code": "US",
            "continent": "North America",
            "continent_code": "NA",
            "latitude": 37.4056,
            "longitude": -122.0775,
            "timezone": "America/Los_Angeles",
            "postal_code": "94043",
        },
        "as": {
            "asn": "AS15169",
            "name": "Google LLC",
            "domain": "google.com",
            "type": "hosting",
        },
        "is_anonymous": False,
        "is_anycast": True,
        "is_hosting": True,
        "is_mobile": False,
        "is_satellite": False,
    }
