"""Value objects returned by the research tools."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

TRUNCATION_MARKER = "\n\n[Content truncated for cost efficiency]"


class Readiness(str, Enum):
    SUFFICIENT = "sufficient"
    NEEDS_MORE = "needs_more"

    @classmethod
    def parse(cls, text: str | None) -> "Readiness":
        """
        Parse free-text readiness.

        Only a case-insensitive exact match of "sufficient" counts as ready;
        anything else, including empty text, means more work is needed.
        """
        if (text or "").lower() == cls.SUFFICIENT.value:
            return cls.SUFFICIENT
        return cls.NEEDS_MORE


@dataclass(frozen=True)
class SearchHit:
    """One search result, rank is 1-based."""

    title: str
    url: str
    snippet: str
    rank: int

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "url": self.url, "snippet": self.snippet, "rank": self.rank}


@dataclass(frozen=True)
class SearchResultSet:
    query: str
    hits: tuple[SearchHit, ...] = ()

    def __len__(self) -> int:
        return len(self.hits)

    def __iter__(self):
        return iter(self.hits)

    @property
    def urls(self) -> list[str]:
        return [hit.url for hit in self.hits]

    def to_dict(self) -> dict[str, Any]:
        return {"query": self.query, "results": [hit.to_dict() for hit in self.hits]}

    def __str__(self) -> str:
        blocks = [
            f"[{hit.rank}] {hit.title}\n    URL: {hit.url}\n    {hit.snippet}" for hit in self.hits
        ]
        return f"Found {len(self.hits)} results:\n\n" + "\n\n".join(blocks)


@dataclass(frozen=True)
class FetchedDocument:
    """
    Plain-text rendition of a fetched page.

    `content` is capped; `original_length` is the character count before
    truncation.
    """

    source_url: str
    content: str
    original_length: int
    truncated: bool = False

    @property
    def content_length(self) -> int:
        return len(self.content)

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_url": self.source_url,
            "content": self.content,
            "content_length": self.content_length,
            "original_length": self.original_length,
            "truncated": self.truncated,
        }

    def __str__(self) -> str:
        return (
            f"Content from: {self.source_url}\n"
            f"Length: {self.content_length} characters (full page: {self.original_length} chars)\n\n"
            f"{self.content}"
        )


@dataclass(frozen=True)
class ResearchState:
    """
    Snapshot produced by one assessment call.

    Built wholesale from the caller's arguments; nothing is carried over from
    earlier assessments.
    """

    reviewed_count: int
    ranked_sources: tuple[str, ...] = ()
    key_findings: tuple[str, ...] = ()
    critical_gaps: tuple[str, ...] = ()
    readiness: Readiness = Readiness.NEEDS_MORE
    readiness_level: str = ""
    recommendation: str = ""
    should_continue: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "reviewed_count": self.reviewed_count,
            "ranked_sources": list(self.ranked_sources),
            "key_findings": list(self.key_findings),
            "critical_gaps": list(self.critical_gaps),
            "readiness": self.readiness.value,
            "readiness_level": self.readiness_level,
            "recommendation": self.recommendation,
            "should_continue": self.should_continue,
        }

    def __str__(self) -> str:
        lines = [
            f"STATUS: {self.readiness_level} | Sources: {self.reviewed_count} | "
            f"Continue: {'YES' if self.should_continue else 'NO'}",
            "",
        ]
        if self.ranked_sources:
            lines.append(f"Sources: {'; '.join(self.ranked_sources)}")
        if self.key_findings:
            lines.append(f"Findings: {'; '.join(self.key_findings)}")
        if self.critical_gaps:
            lines.append(f"Gaps: {'; '.join(self.critical_gaps)}")
        lines.append(f"Next: {self.recommendation}")
        return "\n".join(lines).strip()


@dataclass(frozen=True)
class SynthesisSignal:
    """Terminal marker: research is over, the caller should write the answer."""

    message: str
    instruction: str
    ready: bool = field(default=True)

    def to_dict(self) -> dict[str, Any]:
        return {"ready": self.ready, "message": self.message, "instruction": self.instruction}

    def __str__(self) -> str:
        return f"Ready to synthesize\nSummary: {self.message}\nNext: {self.instruction}"
