"""Research progress assessment and the continue/stop decision."""

from collections.abc import Sequence

from models.research import Readiness, ResearchState
from utils.logger import get_logger

logger = get_logger(__name__)

MAX_GAPS_IN_RECOMMENDATION = 2


class ProgressTracker:
    """
    Builds a ResearchState from the caller's own account of the session.

    Pure data transform: never raises on free-text input and keeps no state
    between calls.
    """

    def assess(
        self,
        ranked_sources: Sequence[str],
        key_findings: Sequence[str],
        critical_gaps: Sequence[str],
        readiness_level: str,
    ) -> ResearchState:
        """
        Assess whether research should continue.

        Args:
            ranked_sources: Sources by relevance, most relevant first
            key_findings: Facts learned so far
            critical_gaps: Missing information that still matters
            readiness_level: "sufficient" (any casing) or anything else

        Returns:
            ResearchState. `should_continue` is true only when readiness is
            NEEDS_MORE and at least one gap was stated; a vague "needs more"
            without gaps stops the session.
        """
        sources = tuple(str(s) for s in ranked_sources or ())
        findings = tuple(str(f) for f in key_findings or ())
        gaps = tuple(str(g) for g in critical_gaps or ())
        readiness_text = readiness_level if isinstance(readiness_level, str) else ""
        readiness = Readiness.parse(readiness_text)

        should_continue = readiness is Readiness.NEEDS_MORE and len(gaps) > 0
        recommendation = self._recommend(readiness, findings, gaps)

        logger.info(
            "Research progress assessed",
            extra={
                "extra_fields": {
                    "readiness": readiness.value,
                    "sources": len(sources),
                    "findings": len(findings),
                    "gaps": len(gaps),
                    "should_continue": should_continue,
                }
            },
        )
        return ResearchState(
            reviewed_count=len(sources),
            ranked_sources=sources,
            key_findings=findings,
            critical_gaps=gaps,
            readiness=readiness,
            readiness_level=readiness_text,
            recommendation=recommendation,
            should_continue=should_continue,
        )

    @staticmethod
    def _recommend(readiness: Readiness, findings: tuple[str, ...], gaps: tuple[str, ...]) -> str:
        if readiness is Readiness.SUFFICIENT:
            return f"Research complete. Call finalize with {len(findings)} key findings."
        if not gaps:
            return (
                "No actionable gaps reported. Stop researching and call finalize "
                f"with {len(findings)} key findings."
            )
        named = ", ".join(gaps[:MAX_GAPS_IN_RECOMMENDATION])
        return f"Need to address {len(gaps)} critical gaps: {named}"
