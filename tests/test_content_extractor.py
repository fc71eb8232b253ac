import httpx
import pytest

from models.research import TRUNCATION_MARKER
from tools.web.content_extractor import ContentExtractor, truncate_text
from tools.web.errors import NetworkError, ParseError
from tools.web.markup import is_binary

pytestmark = pytest.mark.unit

PAGE_URL = "https://blog.example/post"


@pytest.fixture
def extractor(http_client):
    return ContentExtractor(http_client)


def _page(body: str) -> str:
    return f"<html><head><title>T</title><style>p {{color: red}}</style></head><body>{body}</body></html>"


def test_strips_non_content_elements(fake_web, extractor):
    fake_web.add(
        PAGE_URL,
        text=_page(
            "<header>Site header</header>"
            "<nav><a href='/'>Home</a></nav>"
            "<script>var tracking = 1;</script>"
            "<div class='ad'>Buy now</div>"
            "<aside class='advertisement'>Sponsored</aside>"
            "<iframe src='https://ads.example'></iframe>"
            "<article><h1>Title</h1><p>First   paragraph.</p>\n<p>Second paragraph.</p></article>"
            "<footer>Copyright</footer>"
        ),
    )

    doc = extractor.fetch(PAGE_URL)

    assert doc.content == "Title First paragraph. Second paragraph."
    for noise in ("Site header", "Home", "tracking", "Buy now", "Sponsored", "Copyright", "color"):
        assert noise not in doc.content
    assert doc.source_url == PAGE_URL
    assert doc.truncated is False


def test_nested_non_content_elements(fake_web, extractor):
    fake_web.add(PAGE_URL, text=_page("<header><nav>Menu</nav><script>x()</script></header><p>Body</p>"))

    assert extractor.fetch(PAGE_URL).content == "Body"


def test_short_document_is_not_truncated(fake_web, extractor):
    fake_web.add(PAGE_URL, text=_page("<p>" + "a" * 120 + "</p>"))

    doc = extractor.fetch(PAGE_URL)

    assert doc.original_length == 120
    assert doc.content_length == 120
    assert TRUNCATION_MARKER not in doc.content


def test_exactly_at_limit_is_not_truncated(fake_web, extractor):
    fake_web.add(PAGE_URL, text=_page("<p>" + "b" * 3000 + "</p>"))

    doc = extractor.fetch(PAGE_URL)

    assert doc.content == "b" * 3000
    assert doc.original_length == 3000
    assert doc.truncated is False


def test_long_document_is_truncated_with_marker(fake_web, extractor):
    text = "".join(chr(ord("a") + i % 26) for i in range(4500))
    fake_web.add(PAGE_URL, text=_page(f"<p>{text}</p>"))

    doc = extractor.fetch(PAGE_URL)

    assert doc.content == text[:3000] + TRUNCATION_MARKER
    assert doc.original_length == 4500
    assert doc.truncated is True
    assert doc.content_length <= 3000 + len(TRUNCATION_MARKER)
    assert "full page: 4500 chars" in str(doc)


def test_custom_char_limit(fake_web, http_client):
    fake_web.add(PAGE_URL, text=_page("<p>" + "c" * 50 + "</p>"))

    doc = ContentExtractor(http_client, char_limit=10).fetch(PAGE_URL)

    assert doc.content == "c" * 10 + TRUNCATION_MARKER
    assert doc.original_length == 50


def test_empty_body_returns_empty_document(fake_web, extractor):
    fake_web.add(PAGE_URL, text="")

    doc = extractor.fetch(PAGE_URL)

    assert doc.content == ""
    assert doc.original_length == 0


def test_fragment_without_body_tag(fake_web, extractor):
    fake_web.add(PAGE_URL, text="<p>Just a fragment</p><script>ignored()</script>")

    assert extractor.fetch(PAGE_URL).content == "Just a fragment"


def test_plain_text_response(fake_web, extractor):
    fake_web.add(PAGE_URL, text="plain words here", content_type="text/plain")

    assert extractor.fetch(PAGE_URL).content == "plain words here"


def test_http_error_status_raises_network_error(fake_web, extractor):
    fake_web.add(PAGE_URL, status_code=404, text="missing")

    with pytest.raises(NetworkError) as exc_info:
        extractor.fetch(PAGE_URL)

    assert exc_info.value.status_code == 404
    assert exc_info.value.retryable is False
    assert exc_info.value.url == PAGE_URL


def test_unreachable_host_raises_network_error(extractor):
    with pytest.raises(NetworkError) as exc_info:
        extractor.fetch("https://no-such-host.invalid/")

    assert exc_info.value.reason == "unreachable"


def test_timeout_raises_network_error(fake_web, extractor):
    fake_web.add(PAGE_URL, exc=httpx.ConnectTimeout)

    with pytest.raises(NetworkError) as exc_info:
        extractor.fetch(PAGE_URL)

    assert exc_info.value.reason == "timeout"


def test_url_without_scheme_raises_network_error(extractor):
    with pytest.raises(NetworkError) as exc_info:
        extractor.fetch("example.com/page")

    assert exc_info.value.reason == "invalid_url"


def test_binary_content_raises_parse_error(fake_web, extractor):
    fake_web.add(PAGE_URL, text="%PDF-1.7", content_type="application/pdf")

    with pytest.raises(ParseError):
        extractor.fetch(PAGE_URL)


def test_json_response_returns_text(fake_web, extractor):
    fake_web.add(PAGE_URL, text='{"name": "koog"}', content_type="application/json")

    doc = extractor.fetch(PAGE_URL)

    assert doc.content == '{"name": "koog"}'
    assert doc.original_length == len('{"name": "koog"}')


def test_missing_content_type_is_parsed(fake_web, extractor):
    fake_web.add(PAGE_URL, text="<p>No header</p>", content_type="")

    assert extractor.fetch(PAGE_URL).content == "No header"


class TestIsBinary:
    @pytest.mark.parametrize(
        "content_type",
        [
            "application/pdf",
            "application/octet-stream",
            "application/zip",
            "image/png",
            "audio/mpeg",
            "video/mp4; codecs=avc1",
        ],
    )
    def test_binary_types(self, content_type):
        assert is_binary(content_type) is True

    @pytest.mark.parametrize(
        "content_type",
        [
            "",
            "text/html; charset=utf-8",
            "text/plain",
            "application/json",
            "application/javascript",
            "application/xhtml+xml",
            "application/ld+json",
            "image/svg+xml",
        ],
    )
    def test_text_types(self, content_type):
        assert is_binary(content_type) is False


class TestTruncateText:
    def test_under_limit(self):
        assert truncate_text("abc", 3) == ("abc", False)

    def test_over_limit(self):
        assert truncate_text("abcdef", 4) == ("abcd" + TRUNCATION_MARKER, True)

    def test_default_limit(self):
        content, truncated = truncate_text("x" * 3001)
        assert truncated is True
        assert content.startswith("x" * 3000)
        assert len(content) == 3000 + len(TRUNCATION_MARKER)
