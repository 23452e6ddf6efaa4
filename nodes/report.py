import json
from datetime import date

from langchain_anthropic import ChatAnthropic
from langchain_core.output_parsers import StrOutputParser
from langchain_core.runnables import RunnableConfig

from src.errors import GenerationError, PersistenceError
from src.models import ReportState, FEEDBACK, REPORT
from src.stats import in_window, created_day, report_stats
from src.logger import log
from prompts import REPORT_PROMPT_TEMPLATE, NO_FEEDBACK_MARKDOWN
from settings import REPORT_MODEL

# Instantiate once at module level
_llm = ChatAnthropic(model=REPORT_MODEL)
_report_chain = _llm | StrOutputParser()


def format_day(day: date) -> str:
    """e.g. "Mar 4, 2025" """
    return f"{day:%b} {day.day}, {day.year}"


def window_label(start_date: date, end_date: date) -> str:
    """e.g. "Mar 2 - Mar 8, 2025" """
    return f"{start_date:%b} {start_date.day} - {format_day(end_date)}"


def select_feedback(state: ReportState, config: RunnableConfig) -> dict:
    """Load every feedback record and keep those created inside the window (both ends inclusive)."""
    store = config["configurable"]["store"]
    feedback = store.list(FEEDBACK, "-created_date")
    selected = [record for record in feedback if in_window(record, state["start_date"], state["end_date"])]

    log(f"  {len(selected)} of {len(feedback)} feedback entries fall in "
        f"{state['start_date'].isoformat()} .. {state['end_date'].isoformat()}")

    return {"selected": selected, "status": "filtered"}


def route_after_select(state: ReportState) -> str:
    return "no_feedback" if not state["selected"] else "build_prompt"


def no_feedback(state: ReportState) -> dict:
    """Placeholder report for an empty window. Not persisted, and the LLM is not called."""
    return {
        "report": {
            "week_start_date": state["start_date"].isoformat(),
            "week_end_date": state["end_date"].isoformat(),
            "report_markdown": NO_FEEDBACK_MARKDOWN,
            **report_stats([]),
        },
        "status": "empty",
    }


def build_prompt(state: ReportState) -> dict:
    feedback_summary = []
    for record in state["selected"]:
        day = created_day(record)
        feedback_summary.append({
            "text": record["feedback_text"],
            "customer": record.get("customer_name") or "Anonymous",
            "urgency": record.get("urgency") or "unknown",
            "impact": record.get("impact") or "unknown",
            "category": record.get("category") or "unknown",
            "sentiment": record.get("sentiment") or "unknown",
            "date": format_day(day) if day else "unknown",
        })

    prompt = REPORT_PROMPT_TEMPLATE.format(
        count=len(state["selected"]),
        feedback_json=json.dumps(feedback_summary, indent=2, ensure_ascii=False),
        window_label=window_label(state["start_date"], state["end_date"]),
    )
    return {"prompt": prompt, "status": "prompted"}


def generate(state: ReportState) -> dict:
    """Ask the LLM for the report narrative. The text is used as returned."""
    log(f"Generating report from {len(state['selected'])} feedback entries...")
    try:
        markdown = _report_chain.invoke(state["prompt"])
    except Exception as e:
        log(f"\n Report generation failed: {type(e).__name__}")
        log(f"    Error: {str(e)[:200]}")
        raise GenerationError(f"Report generation failed: {e}") from e

    return {"report_markdown": markdown, "status": "generated"}


def persist(state: ReportState, config: RunnableConfig) -> dict:
    """Save the report with statistics computed from the selected records, not from the narrative."""
    store = config["configurable"]["store"]
    report = {
        "week_start_date": state["start_date"].isoformat(),
        "week_end_date": state["end_date"].isoformat(),
        "report_markdown": state["report_markdown"],
        **report_stats(state["selected"]),
    }
    try:
        saved = store.create(REPORT, report)
    except PersistenceError as e:
        log(f"\n Saving report failed: {e}")
        raise GenerationError(f"Report was generated but could not be saved: {e}") from e

    log(f"✓ Saved report {saved['id']} ({saved['total_feedback_count']} entries)")
    return {"report": saved, "status": "done"}
