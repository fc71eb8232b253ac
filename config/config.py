import os
from pathlib import Path

from dotenv import load_dotenv

from utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_SEARCH_URL = "https://html.duckduckgo.com/html/"
DEFAULT_RESEARCH_MODEL = "gpt-4o"


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning(f"Invalid value for {name}: {raw!r}; using default {default}")
        return default


class ResearchConfig:
    """Configuration for the research tools, read from the environment."""

    def __init__(self, env_file: str | Path | None = None):
        """
        Load a .env file (if present) and read settings.

        Args:
            env_file: Explicit .env path. Defaults to the one at the project root.
        """
        env_path = Path(env_file) if env_file else Path(__file__).parent.parent / ".env"
        if env_path.exists():
            load_dotenv(dotenv_path=env_path)

        # HTTP transport
        self.SEARCH_URL = os.getenv("SEARCH_URL", DEFAULT_SEARCH_URL)
        self.HTTP_TIMEOUT_SECONDS = _env_number("HTTP_TIMEOUT_SECONDS", 10.0, float)
        self.HTTP_MAX_RETRIES = _env_number("HTTP_MAX_RETRIES", 1, int)
        self.HTTP_USER_AGENT = os.getenv("HTTP_USER_AGENT") or None

        # Result caps
        self.SEARCH_MAX_RESULTS = _env_number("SEARCH_MAX_RESULTS", 5, int)
        self.CONTENT_CHAR_LIMIT = _env_number("CONTENT_CHAR_LIMIT", 3000, int)

        # Session / LLM policy
        self.MAX_TOOL_CALLS = _env_number("MAX_TOOL_CALLS", 12, int)
        self.OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
        self.RESEARCH_MODEL = os.getenv("RESEARCH_MODEL", DEFAULT_RESEARCH_MODEL)

    def problems(self, *, require_llm: bool = False) -> list[str]:
        issues: list[str] = []
        if self.HTTP_TIMEOUT_SECONDS <= 0:
            issues.append("HTTP_TIMEOUT_SECONDS must be positive")
        if self.HTTP_MAX_RETRIES < 0:
            issues.append("HTTP_MAX_RETRIES must not be negative")
        if self.SEARCH_MAX_RESULTS < 1:
            issues.append("SEARCH_MAX_RESULTS must be at least 1")
        if self.CONTENT_CHAR_LIMIT < 1:
            issues.append("CONTENT_CHAR_LIMIT must be at least 1")
        if self.MAX_TOOL_CALLS < 1:
            issues.append("MAX_TOOL_CALLS must be at least 1")
        if require_llm and not self.OPENAI_API_KEY:
            issues.append("OPENAI_API_KEY is not set. Please set it in the .env file.")
        return issues

    def validate(self, *, require_llm: bool = False) -> bool:
        """
        Validate the configuration.

        Args:
            require_llm: Also require credentials for the OpenAI research policy

        Returns:
            bool: True if configuration is valid, False otherwise
        """
        issues = self.problems(require_llm=require_llm)
        for issue in issues:
            logger.error(f"Configuration error: {issue}")
        return not issues

    def get_model_info(self) -> str:
        return f"OpenAI ({self.RESEARCH_MODEL})"
