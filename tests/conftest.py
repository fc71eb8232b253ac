from urllib.parse import quote

import httpx
import pytest

from config.config import ResearchConfig
from orchestrator.tool_registry import build_tool_registry
from tools.web.factory import create_research_toolkit
from tools.web.http_client import HttpFetchClient

SEARCH_URL = "https://html.duckduckgo.com/html/"


def ddg_href(target: str, encoded: bool = True) -> str:
    """Build a DuckDuckGo redirect link the way the HTML endpoint emits it."""
    value = quote(target, safe="") if encoded else target
    return f"//duckduckgo.com/l/?uddg={value}&amp;rut=4f1c2e9a"


def ddg_result(title: str | None, href: str | None, snippet: str | None = "A snippet") -> str:
    title_html = ""
    if title is not None:
        href_attr = f' href="{href}"' if href is not None else ""
        title_html = f'<h2 class="result__title"><a class="result__a"{href_attr}>{title}</a></h2>'
    snippet_html = (
        f'<a class="result__snippet" href="{href or ""}">{snippet}</a>' if snippet is not None else ""
    )
    return f'<div class="result results_links web-result"><div class="result__body">{title_html}{snippet_html}</div></div>'


def ddg_page(*results: str) -> str:
    return (
        "<html><head><title>DuckDuckGo</title></head><body>"
        '<div id="links" class="results">' + "".join(results) + "</div></body></html>"
    )


class FakeWeb:
    """Canned responses keyed by scheme://host/path, served through httpx.MockTransport."""

    def __init__(self):
        self.routes: dict[str, dict] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        url: str,
        *,
        text: str = "",
        status_code: int = 200,
        content_type: str = "text/html; charset=utf-8",
        exc: type[Exception] | None = None,
    ) -> None:
        self.routes[url] = {
            "text": text,
            "status_code": status_code,
            "content_type": content_type,
            "exc": exc,
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = f"{request.url.scheme}://{request.url.host}{request.url.path}"
        route = self.routes.get(key)
        if route is None:
            raise httpx.ConnectError(f"Name or service not known: {request.url.host}", request=request)
        if route["exc"] is not None:
            raise route["exc"]("simulated failure", request=request)
        return httpx.Response(
            route["status_code"],
            content=route["text"].encode("utf-8"),
            headers={"content-type": route["content_type"]},
        )

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_web():
    return FakeWeb()


@pytest.fixture
def http_client(fake_web):
    client = HttpFetchClient(timeout_s=2.0, transport=fake_web.transport())
    yield client
    client.close()


@pytest.fixture
def research_config(monkeypatch, tmp_path):
    """Config built from a clean environment."""
    for name in (
        "SEARCH_URL",
        "HTTP_TIMEOUT_SECONDS",
        "HTTP_MAX_RETRIES",
        "HTTP_USER_AGENT",
        "SEARCH_MAX_RESULTS",
        "CONTENT_CHAR_LIMIT",
        "MAX_TOOL_CALLS",
        "OPENAI_API_KEY",
        "RESEARCH_MODEL",
    ):
        monkeypatch.delenv(name, raising=False)
    return ResearchConfig(env_file=tmp_path / "missing.env")


@pytest.fixture
def toolkit(fake_web, research_config):
    kit = create_research_toolkit(research_config, transport=fake_web.transport())
    yield kit
    kit.close()


@pytest.fixture
def registry(toolkit):
    return build_tool_registry(toolkit)
