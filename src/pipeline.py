"""
User-facing operations: submit one entry, upload a file, save a batch,
generate and browse reports.

Each operation is a single sequential flow. The only concurrency is the
fan-out inside classify_batch().
"""

from datetime import date, timedelta
from pathlib import Path
from typing import Optional

from settings import ACCEPTED_UPLOAD_TYPES, DEFAULT_UPLOADS_DIR, DASHBOARD_FEEDBACK_LIMIT
from src.errors import ValidationError
from src.graph import create_batch_graph, create_report_graph
from src.models import FEEDBACK, REPORT, SOURCES
from src.store import EntityStore, upload_file
from src.logger import log
from nodes.classify import classify_feedback, merge_classification
from nodes.extract import extract_feedback, file_kind

UNSUPPORTED_FILE_MESSAGE = (
    "Please upload a PDF or CSV file. Excel files are not supported - please convert to CSV first."
)
NO_ENTRIES_MESSAGE = "No feedback entries found in the file. Please check your file format."


def submit_feedback(
    store: EntityStore,
    feedback_text: str,
    customer_name: str = "",
    customer_email: str = "",
    source: str = "other",
) -> dict:
    """
    Classify and persist a single piece of feedback.

    Raises:
        ValidationError: Blank feedback text or unknown source
        PersistenceError: The record could not be saved
    """
    if not feedback_text or not feedback_text.strip():
        raise ValidationError("Feedback text is required.")
    source = source or "other"
    if source not in SOURCES:
        raise ValidationError(f"Unknown source '{source}'. Choose one of: {', '.join(SOURCES)}")

    entry = {
        "customer_name": customer_name,
        "customer_email": customer_email,
        "feedback_text": feedback_text,
        "source": source,
    }
    record = merge_classification(entry, classify_feedback(feedback_text))
    return store.create(FEEDBACK, record)


def validate_upload(file_name: str) -> None:
    """Reject anything that is not a CSV or PDF file before doing any work."""
    if file_kind(file_name) not in ACCEPTED_UPLOAD_TYPES:
        raise ValidationError(UNSUPPORTED_FILE_MESSAGE)


def classify_batch(records: list[dict]) -> dict:
    """
    Classify every entry concurrently and group the results by urgency.

    Args:
        records: Raw entries, each with at least feedback_text

    Returns:
        {"high": [...], "medium": [...], "low": [...], "all": [...], "total": n}
        Buckets keep input order; together they contain every entry of "all" exactly once.
    """
    graph = create_batch_graph()
    result = graph.invoke({"records": list(records)})
    return {
        "high": result["high"],
        "medium": result["medium"],
        "low": result["low"],
        "all": result["all"],
        "total": result["total"],
    }


def process_upload(file_path: str, uploads_dir: str = DEFAULT_UPLOADS_DIR) -> dict:
    """
    Upload, extract and classify a feedback file. Nothing is persisted.

    Raises:
        ValidationError: Unsupported file type, missing file, or no entries found
        ExtractionError: The file could not be read or parsed
    """
    validate_upload(file_path)
    if not Path(file_path).is_file():
        raise ValidationError(f"File not found: {file_path}")

    stored = upload_file(file_path, uploads_dir)
    entries = extract_feedback(stored["file_url"])
    if not entries:
        raise ValidationError(NO_ENTRIES_MESSAGE)

    log(f"Classifying {len(entries)} entries...")
    return classify_batch(entries)


def save_batch(store: EntityStore, batch: dict) -> list[dict]:
    """
    Persist every classified entry of a batch in one write.

    The batch itself is left untouched, so a failed save can be retried
    without classifying again.

    Raises:
        PersistenceError: The write failed
    """
    return store.bulk_create(FEEDBACK, batch["all"])


def current_week(today: Optional[date] = None) -> tuple[date, date]:
    """Sunday through Saturday of the week containing today."""
    today = today or date.today()
    # weekday(): Monday is 0, Sunday is 6
    start = today - timedelta(days=(today.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


def generate_report(store: EntityStore, start_date: date, end_date: date) -> dict:
    """
    Generate a narrative report for feedback created between start_date and end_date.

    Returns:
        The persisted Report, or an unsaved placeholder when the window is empty

    Raises:
        ValidationError: start_date is after end_date
        GenerationError: The LLM call or the report save failed
        PersistenceError: Feedback could not be read
    """
    if start_date > end_date:
        raise ValidationError("Start date must be on or before end date.")

    graph = create_report_graph()
    result = graph.invoke(
        {"start_date": start_date, "end_date": end_date},
        {"configurable": {"store": store}},
    )
    return result["report"]


def list_reports(store: EntityStore, limit: Optional[int] = None) -> list[dict]:
    """Report history, newest first."""
    return store.list(REPORT, "-created_date", limit)


def get_report(store: EntityStore, report_id: str) -> Optional[dict]:
    return store.get(REPORT, report_id)


def recent_feedback(store: EntityStore, limit: Optional[int] = DASHBOARD_FEEDBACK_LIMIT) -> list[dict]:
    """Most recent feedback, newest first."""
    return store.list(FEEDBACK, "-created_date", limit)
