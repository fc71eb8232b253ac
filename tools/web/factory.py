"""Factory for building the research toolkit from configuration."""

from dataclasses import dataclass

import httpx

from config.config import ResearchConfig
from utils.logger import get_logger

from .content_extractor import ContentExtractor
from .http_client import DEFAULT_USER_AGENT, HttpFetchClient
from .progress_tracker import ProgressTracker
from .search_provider import SearchProvider
from .synthesis_gate import SynthesisGate

logger = get_logger(__name__)


@dataclass
class ResearchToolkit:
    """The four research components sharing one HTTP transport."""

    http_client: HttpFetchClient
    search_provider: SearchProvider
    content_extractor: ContentExtractor
    progress_tracker: ProgressTracker
    synthesis_gate: SynthesisGate

    def close(self) -> None:
        self.http_client.close()


def create_research_toolkit(
    config: ResearchConfig | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> ResearchToolkit:
    """
    Build the research toolkit.

    Args:
        config: Settings (defaults to ResearchConfig() read from the environment)
        transport: Optional httpx transport override, e.g. httpx.MockTransport in tests

    Returns:
        ResearchToolkit with a single shared HttpFetchClient
    """
    config = config or ResearchConfig()

    http_client = HttpFetchClient(
        timeout_s=config.HTTP_TIMEOUT_SECONDS,
        max_retries=config.HTTP_MAX_RETRIES,
        user_agent=config.HTTP_USER_AGENT or DEFAULT_USER_AGENT,
        transport=transport,
    )

    logger.info(
        "Research toolkit created",
        extra={
            "extra_fields": {
                "search_url": config.SEARCH_URL,
                "timeout_s": config.HTTP_TIMEOUT_SECONDS,
                "max_results": config.SEARCH_MAX_RESULTS,
                "char_limit": config.CONTENT_CHAR_LIMIT,
            }
        },
    )

    return ResearchToolkit(
        http_client=http_client,
        search_provider=SearchProvider(
            http_client, search_url=config.SEARCH_URL, max_results=config.SEARCH_MAX_RESULTS
        ),
        content_extractor=ContentExtractor(http_client, char_limit=config.CONTENT_CHAR_LIMIT),
        progress_tracker=ProgressTracker(),
        synthesis_gate=SynthesisGate(),
    )
