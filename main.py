import argparse
import sys

from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from api.openai_policy import OpenAIResearchPolicy
from config.config import ResearchConfig
from orchestrator.session import ResearchSession, SessionHooks, SessionOutcome
from orchestrator.tool_registry import build_tool_registry
from tools.web.factory import create_research_toolkit

DEFAULT_QUERY = "What is the Koog AI framework and what are its main features?"
PREVIEW_CHARS = 150


def print_tool_call_starting(step, action) -> None:
    print(f"\n>>> TOOL CALL {step}: {action.tool_name}")
    print(f"    Arguments: {action.arguments()}")


def print_tool_call_completed(step, action, result) -> None:
    print(f"<<< TOOL COMPLETED: {action.tool_name}")
    preview = result.render()[:PREVIEW_CHARS].replace("\n", " ")
    print(f"    Result preview: {preview}...")


def print_outcome(outcome: SessionOutcome) -> None:
    print("\n" + "=" * 80)
    print("RESEARCH RESULTS:")
    print("=" * 80)
    if outcome.answer:
        print(outcome.answer)
    else:
        print(f"No answer produced (stop reason: {outcome.stop_reason}).")
    print(f"\n[Tool calls: {outcome.tool_calls}, failed: {len(outcome.failed_calls)}]")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run a bounded deep-research session")
    parser.add_argument("query", nargs="?", default=DEFAULT_QUERY, help="Research question")
    parser.add_argument("--model", default=None, help="OpenAI chat model (overrides RESEARCH_MODEL)")
    parser.add_argument("--max-tool-calls", type=int, default=None, help="Tool-call budget for the session")
    args = parser.parse_args(argv)

    config = ResearchConfig()
    if not config.validate(require_llm=True):
        for issue in config.problems(require_llm=True):
            print(f"Error: {issue}")
        return 1

    toolkit = create_research_toolkit(config)
    try:
        registry = build_tool_registry(toolkit)
        policy = OpenAIResearchPolicy(
            registry.openai_tool_schemas(),
            api_key=config.OPENAI_API_KEY,
            model_name=args.model or config.RESEARCH_MODEL,
        )
        session = ResearchSession(
            registry,
            policy,
            max_tool_calls=args.max_tool_calls or config.MAX_TOOL_CALLS,
            hooks=SessionHooks(
                on_tool_call_starting=print_tool_call_starting,
                on_tool_call_completed=print_tool_call_completed,
            ),
        )

        print("=" * 80)
        print("DEEP RESEARCH QUERY:")
        print(args.query)
        print("=" * 80)
        print(f"\nStarting research with {config.get_model_info()}...\n")

        outcome = session.run(args.query)
        print_outcome(outcome)
    except KeyboardInterrupt:
        print("\nExiting...")
        return 130
    except Exception as e:
        print(f"\nError: {str(e)}")
        return 1
    finally:
        toolkit.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
