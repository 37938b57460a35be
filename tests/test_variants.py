import httpx
import pytest
import respx

from iplens import LiteDetails, CoreDetails, DataIntegrityError
from iplens.models import Continent


LITE_URL = "https://api.ipinfo.io/lite"
CORE_URL = "https://api.ipinfo.io/lookup"


@pytest.mark.asyncio
@respx.mock
async def test_lite_lookup(ipinfo_lite, lite_payload):
    route = respx.get(f"{LITE_URL}/8.8.8.8").mock(return_value=httpx.Response(200, json=lite_payload))

    details = await ipinfo_lite.lookup("8.8.8.8")
    await ipinfo_lite.lookup("8.8.8.8")

    assert isinstance(details, LiteDetails)
    assert details.asn == "AS15169"
    assert details.as_name == "Google LLC"
    assert details.continent == "North America"
    assert details.continent_info == Continent(code="NA", name="North America")
    assert details.country_name == "United States"
    assert details.country_flag_url.endswith("/US.svg")
    assert route.call_count == 1
    assert route.calls.last.request.headers["authorization"] == "Bearer test-token"


@pytest.mark.asyncio
@respx.mock
async def test_lite_self_lookups(ipinfo_lite, lite_payload):
    v4 = respx.get(f"{LITE_URL}/me").mock(return_value=httpx.Response(200, json=lite_payload))
    v6 = respx.get("https://v6.api.ipinfo.io/lite/me").mock(
        return_value=httpx.Response(200, json=dict(lite_payload, ip="2001:4860:4860::8888"))
    )

    assert (await ipinfo_lite.lookup_self_v4()).ip == "8.8.8.8"
    assert (await ipinfo_lite.lookup_self_v6()).ip == "2001:4860:4860::8888"
    assert v4.called and v6.called


@pytest.mark.asyncio
async def test_lite_bogon(ipinfo_lite):
    details = await ipinfo_lite.lookup("192.168.0.10")
    assert isinstance(details, LiteDetails)
    assert details.bogon is True
    assert details.asn is None


@pytest.mark.asyncio
@respx.mock
async def test_core_lookup(ipinfo_core, core_payload):
    respx.get(f"{CORE_URL}/8.8.8.8").mock(return_value=httpx.Response(200, json=core_payload))

    details = await ipinfo_core.lookup("8.8.8.8")

    assert isinstance(details, CoreDetails)
    assert details.hostname == "dns.google"
    assert details.as_.name == "Google LLC"
    assert details.is_hosting is True
    assert details.geo.city == "Mountain View"
    assert details.geo.country_name == "United States"
    assert details.geo.country_currency.code == "USD"
    assert details.geo.continent_info.code == "NA"


@pytest.mark.asyncio
@respx.mock
async def test_core_self_v6(ipinfo_core, core_payload):
    route = respx.get("https://v6.api.ipinfo.io/lookup/me").mock(
        return_value=httpx.Response(200, json=core_payload)
    )

    await ipinfo_core.lookup_self_v6()

    assert route.called


@pytest.mark.asyncio
@respx.mock
async def test_core_unknown_country(ipinfo_core, core_payload):
    core_payload["geo"]["country_code"] = "ZZ"
    respx.get(f"{CORE_URL}/8.8.8.8").mock(return_value=httpx.Response(200, json=core_payload))

    with pytest.raises(DataIntegrityError):
        await ipinfo_core.lookup("8.8.8.8")

    assert len(ipinfo_core.cache) == 0


@pytest.mark.asyncio
async def test_core_bogon(ipinfo_core):
    details = await ipinfo_core.lookup("fe80::1")
    assert details.bogon is True
    assert details.geo is None
