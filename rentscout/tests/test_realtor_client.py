import json
from urllib.parse import parse_qs

import httpx
import pytest

from rentscout.collectors.realtor.client import DEFAULT_API_URL, RealtorSearchClient
from rentscout.core.errors import NetworkError, RateLimitError, RedirectError, RequestError


def _client(handler):
    return RealtorSearchClient(transport=httpx.MockTransport(handler))


def test_execute_posts_form_and_parses_result_page():
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["form"] = parse_qs(request.content.decode("utf-8"))
        seen["cookie"] = request.headers.get("cookie")
        seen["user_agent"] = request.headers.get("user-agent")
        payload = {
            "Paging": {"TotalRecords": 40, "RecordsPerPage": 20},
            "Results": [{"MlsNumber": "A1"}, {"MlsNumber": "B2"}],
        }
        return httpx.Response(200, json=payload)

    page = _client(handler).execute(
        {"CurrentPage": 1, "IncludeHiddenListings": False, "LatitudeMax": 43.65, "Skip": None},
        {"User-Agent": "custom-agent"},
        "session=abc",
    )

    assert seen["method"] == "POST"
    assert seen["url"] == DEFAULT_API_URL
    assert seen["form"]["CurrentPage"] == ["1"]
    assert seen["form"]["IncludeHiddenListings"] == ["false"]
    assert seen["form"]["LatitudeMax"] == ["43.65"]
    assert "Skip" not in seen["form"]
    assert seen["cookie"] == "session=abc"
    assert seen["user_agent"] == "custom-agent"
    assert page.total_records == 40
    assert page.page_size == 20
    assert [record["MlsNumber"] for record in page.records] == ["A1", "B2"]


def test_execute_maps_429_to_rate_limit():
    with pytest.raises(RateLimitError):
        _client(lambda request: httpx.Response(429)).execute({}, {})


def test_execute_maps_other_status_to_request_error():
    with pytest.raises(RequestError) as excinfo:
        _client(lambda request: httpx.Response(403, text="blocked")).execute({}, {})

    assert excinfo.value.status_code == 403


def test_execute_maps_redirect_loop_to_redirect_error():
    def handler(request):
        return httpx.Response(302, headers={"location": DEFAULT_API_URL})

    with pytest.raises(RedirectError):
        _client(handler).execute({}, {})


def test_execute_maps_transport_failure_to_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkError):
        _client(handler).execute({}, {})


def test_execute_rejects_non_json_body():
    with pytest.raises(RequestError):
        _client(lambda request: httpx.Response(200, text="<html>captcha</html>")).execute({}, {})


def test_execute_tolerates_missing_paging():
    page = _client(lambda request: httpx.Response(200, content=json.dumps({"Results": []}))).execute({}, {})

    assert page.records == ()
    assert page.total_records == 0
    assert page.page_size is None


def test_execute_maps_undecodable_body_to_network_error():
    def handler(request):
        return httpx.Response(
            200,
            headers={"content-encoding": "gzip"},
            stream=httpx.ByteStream(b"not gzip at all"),
        )

    with pytest.raises(NetworkError):
        _client(handler).execute({}, {})
