"""Web research tools: search, fetch, assess, finalize."""

from .content_extractor import ContentExtractor, truncate_text
from .errors import InvalidToolArguments, NetworkError, ParseError, ResearchToolError, UnknownToolError
from .factory import ResearchToolkit, create_research_toolkit
from .http_client import HttpFetchClient
from .progress_tracker import ProgressTracker
from .search_provider import SearchProvider, unwrap_redirect_url
from .synthesis_gate import SynthesisGate

__all__ = [
    "ContentExtractor",
    "HttpFetchClient",
    "InvalidToolArguments",
    "NetworkError",
    "ParseError",
    "ProgressTracker",
    "ResearchToolError",
    "ResearchToolkit",
    "SearchProvider",
    "SynthesisGate",
    "UnknownToolError",
    "create_research_toolkit",
    "truncate_text",
    "unwrap_redirect_url",
]
