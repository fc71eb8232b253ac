import httpx
import pytest

from tools.web.errors import NetworkError
from tools.web.http_client import HttpFetchClient

pytestmark = pytest.mark.unit


def test_follows_redirects_and_reports_final_url():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/old":
            return httpx.Response(301, headers={"location": "https://site.example/new"})
        return httpx.Response(200, text="moved here", headers={"content-type": "text/HTML"})

    with HttpFetchClient(transport=httpx.MockTransport(handler)) as client:
        response = client.get("https://site.example/old")

    assert response.url == "https://site.example/new"
    assert response.text == "moved here"
    assert response.content_type == "text/html"


def test_sends_user_agent(fake_web):
    fake_web.add("https://site.example/", text="ok")

    with HttpFetchClient(user_agent="research-bot/1.0", transport=fake_web.transport()) as client:
        client.get("https://site.example/")

    assert fake_web.requests[0].headers["user-agent"] == "research-bot/1.0"


@pytest.mark.parametrize(
    "status_code,retryable",
    [(404, False), (403, False), (429, True), (500, True), (503, True)],
)
def test_status_classification(fake_web, http_client, status_code, retryable):
    fake_web.add("https://site.example/", status_code=status_code)

    with pytest.raises(NetworkError) as exc_info:
        http_client.get("https://site.example/")

    assert exc_info.value.reason == "http_status"
    assert exc_info.value.status_code == status_code
    assert exc_info.value.retryable is retryable


@pytest.mark.parametrize("url", ["", "example.com/page", "ftp://example.com/file", "mailto:a@b.example"])
def test_rejects_non_http_urls(http_client, fake_web, url):
    with pytest.raises(NetworkError) as exc_info:
        http_client.get(url)

    assert exc_info.value.reason == "invalid_url"
    assert fake_web.requests == []


def test_error_to_dict(fake_web, http_client):
    fake_web.add("https://site.example/", status_code=502)

    with pytest.raises(NetworkError) as exc_info:
        http_client.get("https://site.example/")

    assert exc_info.value.to_dict() == {
        "code": "network_error",
        "message": "GET https://site.example/ returned HTTP 502",
        "retryable": True,
        "url": "https://site.example/",
        "status_code": 502,
        "reason": "http_status",
    }
