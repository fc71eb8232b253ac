"""DuckDuckGo HTML search provider."""

from urllib.parse import unquote

from models.research import SearchHit, SearchResultSet
from utils.logger import get_logger

from .http_client import HttpFetchClient
from .markup import element_text, parse_markup

logger = get_logger(__name__)

DUCKDUCKGO_HTML_URL = "https://html.duckduckgo.com/html/"
DEFAULT_MAX_RESULTS = 5
REDIRECT_PARAM = "uddg="

RESULT_SELECTOR = "div.result"
TITLE_SELECTOR = "a.result__a"
SNIPPET_SELECTOR = ".result__snippet"

NO_TITLE = "No title"
NO_DESCRIPTION = "No description"


def unwrap_redirect_url(href: str | None) -> str:
    """
    Strip the search engine's redirect wrapper from a result link.

    The destination travels in the `uddg` query parameter; everything after
    the next `&` belongs to the wrapper. A link without the parameter is
    returned unchanged, so unwrapping is idempotent.

    Example:
        >>> unwrap_redirect_url("//duckduckgo.com/l/?uddg=https%3A%2F%2Fexample.com%2F&rut=abc")
        'https://example.com/'
    """
    if not href:
        return ""
    if REDIRECT_PARAM not in href:
        return href

    target = href.split(REDIRECT_PARAM, 1)[1].split("&", 1)[0]
    target = unquote(target).strip()
    if target.startswith("//"):
        target = "https:" + target
    return target


class SearchProvider:
    """
    Runs a query against the DuckDuckGo HTML endpoint and parses the listing.
    """

    def __init__(
        self,
        http_client: HttpFetchClient,
        *,
        search_url: str = DUCKDUCKGO_HTML_URL,
        max_results: int = DEFAULT_MAX_RESULTS,
    ):
        """
        Args:
            http_client: Shared transport
            search_url: Markup-returning search endpoint
            max_results: Number of result containers considered per query
        """
        if max_results < 1:
            raise ValueError("max_results must be at least 1")
        self.http_client = http_client
        self.search_url = search_url
        self.max_results = max_results

    def search(self, query: str) -> SearchResultSet:
        """
        Search the web.

        The cap applies to the containers considered: the first
        `max_results` containers are read, then those without a usable URL
        are dropped. A hit keeps its container position as rank, so ranks
        skip dropped containers.

        Raises:
            ValueError: blank query
            NetworkError: endpoint unreachable or non-2xx
            ParseError: body is not parseable markup
        """
        if not query or not query.strip():
            raise ValueError("query must be non-empty")

        logger.info(f"Searching: '{query[:100]}'")
        response = self.http_client.get(self.search_url, params={"q": query})
        hits = self.parse_results(response.text, source=response.url)

        logger.info(
            f"Search returned {len(hits)} results",
            extra={"extra_fields": {"query": query[:100], "hits": len(hits)}},
        )
        return SearchResultSet(query=query, hits=tuple(hits))

    def parse_results(self, html: str, *, source: str = "") -> list[SearchHit]:
        soup = parse_markup(html, source=source)

        considered = soup.select(RESULT_SELECTOR)[: self.max_results]
        hits: list[SearchHit] = []
        # rank is the container's position, so a dropped container leaves a gap
        for rank, container in enumerate(considered, start=1):
            title_el = container.select_one(TITLE_SELECTOR)
            snippet_el = container.select_one(SNIPPET_SELECTOR)

            url = unwrap_redirect_url(title_el.get("href") if title_el is not None else None)
            if not url:
                logger.debug(f"Dropping result container {rank} without a destination URL")
                continue

            hits.append(
                SearchHit(
                    title=element_text(title_el) or NO_TITLE,
                    url=url,
                    snippet=element_text(snippet_el) or NO_DESCRIPTION,
                    rank=rank,
                )
            )
        return hits
