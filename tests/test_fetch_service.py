import asyncio
import json

import httpx

from models import Country, DecodeFailed, NetworkFailed
from services import CountryFetchService

URL = "https://example.test/countries.json"

PAYLOAD = [
    {"name": "Afghanistan", "region": "AS", "code": "AF", "capital": "Kabul"},
    {"name": "Åland Islands", "region": "EU", "code": "AX", "capital": "Mariehamn"},
    {"name": "Albania", "region": "EU", "code": "AL", "capital": "Tirana"},
]


def _fetch_with(handler):
    service = CountryFetchService(URL, timeout=1.0, transport=httpx.MockTransport(handler))
    return asyncio.run(service.fetch())


def test_fetch_decodes_countries_in_order():
    countries, error = _fetch_with(lambda request: httpx.Response(200, json=PAYLOAD))
    assert error is None
    assert [c.code for c in countries] == ["AF", "AX", "AL"]
    assert countries[1] == Country(name="Åland Islands", region="EU", code="AX", capital="Mariehamn")


def test_fetch_requests_the_configured_url():
    seen = []

    def handler(request):
        seen.append(str(request.url))
        return httpx.Response(200, json=[])

    countries, error = _fetch_with(handler)
    assert countries == []
    assert error is None
    assert seen == [URL]


def test_extra_fields_are_ignored():
    item = dict(PAYLOAD[0], population=38928346)
    countries, error = _fetch_with(lambda request: httpx.Response(200, json=[item]))
    assert error is None
    assert countries[0].capital == "Kabul"


def test_transport_error_is_network_failure():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    countries, error = _fetch_with(handler)
    assert countries is None
    assert isinstance(error, NetworkFailed)
    assert isinstance(error.cause, httpx.ConnectError)


def test_http_error_status_is_network_failure():
    countries, error = _fetch_with(lambda request: httpx.Response(503, text="unavailable"))
    assert countries is None
    assert isinstance(error, NetworkFailed)


def test_invalid_json_is_decode_failure():
    countries, error = _fetch_with(lambda request: httpx.Response(200, text="<html>oops</html>"))
    assert countries is None
    assert isinstance(error, DecodeFailed)


def test_non_array_payload_is_decode_failure():
    countries, error = _fetch_with(lambda request: httpx.Response(200, json={"countries": PAYLOAD}))
    assert countries is None
    assert isinstance(error, DecodeFailed)


def test_one_bad_item_rejects_the_whole_payload():
    bad = PAYLOAD + [{"name": "Nowhere", "region": "XX", "code": 7, "capital": "None"}]
    countries, error = _fetch_with(lambda request: httpx.Response(200, content=json.dumps(bad)))
    assert countries is None
    assert isinstance(error, DecodeFailed)
    assert "code" in error.reason


def test_missing_field_is_decode_failure():
    item = {k: v for k, v in PAYLOAD[0].items() if k != "capital"}
    countries, error = _fetch_with(lambda request: httpx.Response(200, json=[item]))
    assert countries is None
    assert isinstance(error, DecodeFailed)


def test_malformed_url_is_network_failure():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=PAYLOAD)

    service = CountryFetchService(
        "https://example.test:notaport/countries.json", timeout=1.0, transport=httpx.MockTransport(handler)
    )
    countries, error = asyncio.run(service.fetch())
    assert countries is None
    assert isinstance(error, NetworkFailed)
    assert isinstance(error.cause, httpx.InvalidURL)
    assert seen == []
