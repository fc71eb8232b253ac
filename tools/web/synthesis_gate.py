"""End-of-research marker."""

from models.research import SynthesisSignal

ANSWER_INSTRUCTION = (
    "Provide structured answer with Overview, Main Features, Additional Details, and Sources sections."
)


class SynthesisGate:
    """
    Produces the terminal SynthesisSignal.

    After a signal is returned the caller is expected to stop calling research
    tools and write the answer; nothing here enforces that.
    """

    def finalize(self, summary: str) -> SynthesisSignal:
        summary = summary if isinstance(summary, str) else ""
        return SynthesisSignal(
            message=f"Research phase complete. Now produce your comprehensive answer based on: {summary}",
            instruction=ANSWER_INSTRUCTION,
        )
