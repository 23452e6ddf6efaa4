from pathlib import Path

import pdfplumber
from langchain_anthropic import ChatAnthropic

from src.errors import ExtractionError
from src.models import ExtractionResult
from src.logger import log
from prompts import EXTRACTION_SYSTEM_PROMPT, EXTRACTION_USER_TEMPLATE
from settings import EXTRACTION_MODEL

# Instantiate once at module level
_llm = ChatAnthropic(model=EXTRACTION_MODEL)
_structured_llm = _llm.with_structured_output(ExtractionResult)


def file_kind(file_name: str) -> str:
    """Lower-cased extension without the dot, e.g. "csv"."""
    return Path(file_name).suffix.lstrip(".").lower()


def _read_csv(path: Path) -> str:
    # utf-8-sig drops the BOM spreadsheet exports tend to add
    return path.read_text(encoding="utf-8-sig")


def _read_pdf(path: Path) -> str:
    pages = []
    with pdfplumber.open(path) as pdf:
        for page in pdf.pages:
            text = page.extract_text()
            if text:
                pages.append(text)
    return "\n\n".join(pages)


def read_file_text(file_url: str) -> str:
    """Return the text content of a stored CSV or PDF upload."""
    path = Path(file_url)
    kind = file_kind(path.name)
    if kind == "csv":
        return _read_csv(path)
    if kind == "pdf":
        return _read_pdf(path)
    raise ExtractionError(f"Unsupported file type: .{kind}")


def extract_feedback(file_url: str) -> list[dict]:
    """
    Extract raw feedback entries from an uploaded CSV or PDF file.

    Args:
        file_url: Location returned by upload_file()

    Returns:
        List of dicts with feedback_text and, when present, customer_name,
        customer_email and source. Empty when the file holds no feedback.

    Raises:
        ExtractionError: If the file cannot be read or the LLM call fails
    """
    path = Path(file_url)

    try:
        content = read_file_text(file_url)
    except ExtractionError:
        raise
    except UnicodeDecodeError as e:
        raise ExtractionError(f"{path.name} is not valid UTF-8 text. Save the CSV with UTF-8 encoding and try again.") from e
    except Exception as e:
        raise ExtractionError(f"Failed to read {path.name}: {e}") from e

    if not content.strip():
        log(f"  {path.name} contains no text")
        return []

    log(f"Extracting feedback from {path.name}...")
    log(f"  File length: {len(content)} characters")

    try:
        result = _structured_llm.invoke([
            {"role": "system", "content": EXTRACTION_SYSTEM_PROMPT},
            {"role": "user", "content": EXTRACTION_USER_TEMPLATE.format(
                file_kind=file_kind(path.name).upper(),
                file_name=path.name,
                content=content,
            )}
        ])
    except Exception as e:
        log(f"\n Extraction failed: {type(e).__name__}")
        log(f"    Error: {str(e)[:200]}")
        raise ExtractionError(
            "Failed to extract data from file. Please ensure your file has the correct format."
        ) from e

    if result is None:
        raise ExtractionError("Failed to extract data from file. Please ensure your file has the correct format.")

    entries = []
    for item in result.items:
        if not item.feedback_text.strip():
            continue
        entry = {"feedback_text": item.feedback_text}
        if item.customer_name:
            entry["customer_name"] = item.customer_name
        if item.customer_email:
            entry["customer_email"] = item.customer_email
        if item.source:
            entry["source"] = item.source
        entries.append(entry)

    dropped = len(result.items) - len(entries)
    if dropped:
        log(f"  Dropped {dropped} entries with no feedback text")
    log(f"✓ Extracted {len(entries)} entries")

    return entries
