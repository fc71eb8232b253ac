"""Fetch a page and reduce it to bounded plain text."""

from models.research import TRUNCATION_MARKER, FetchedDocument
from utils.logger import get_logger

from .errors import ParseError
from .http_client import HttpFetchClient
from .markup import element_text, is_binary, parse_markup

logger = get_logger(__name__)

DEFAULT_CHAR_LIMIT = 3000  # ~750 tokens

# Elements whose text is noise for research purposes
NON_CONTENT_SELECTOR = "script, style, nav, header, footer, iframe, .ad, .advertisement"


def truncate_text(text: str, limit: int = DEFAULT_CHAR_LIMIT) -> tuple[str, bool]:
    """
    Cap text at `limit` characters.

    Returns:
        (content, truncated). Truncated content is the first `limit`
        characters followed by TRUNCATION_MARKER.
    """
    if len(text) <= limit:
        return text, False
    return text[:limit] + TRUNCATION_MARKER, True


class ContentExtractor:
    """Turns a URL into a FetchedDocument."""

    def __init__(self, http_client: HttpFetchClient, *, char_limit: int = DEFAULT_CHAR_LIMIT):
        if char_limit < 1:
            raise ValueError("char_limit must be at least 1")
        self.http_client = http_client
        self.char_limit = char_limit

    def fetch(self, url: str) -> FetchedDocument:
        """
        Fetch `url` and extract its main text.

        Raises:
            NetworkError: unreachable host, timeout or non-2xx status
            ParseError: binary content type or rejected markup
        """
        logger.info(f"Fetching: {url}")
        response = self.http_client.get(url)

        if is_binary(response.content_type):
            raise ParseError(
                f"Unsupported content type '{response.content_type}' for {url}",
                url=url,
                details={"content_type": response.content_type},
            )

        text = self.extract_text(response.text, source=url)
        content, truncated = truncate_text(text, self.char_limit)

        logger.info(
            "Fetched document",
            extra={
                "extra_fields": {
                    "url": url,
                    "original_length": len(text),
                    "truncated": truncated,
                }
            },
        )
        return FetchedDocument(
            source_url=url, content=content, original_length=len(text), truncated=truncated
        )

    @staticmethod
    def extract_text(html: str, *, source: str = "") -> str:
        if not html or not html.strip():
            return ""

        soup = parse_markup(html, source=source)
        for element in soup.select(NON_CONTENT_SELECTOR):
            # nested matches are already gone with their ancestor
            if not element.decomposed:
                element.decompose()

        return element_text(soup.body if soup.body is not None else soup)
