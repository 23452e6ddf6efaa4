import operator
from datetime import date
from typing import Annotated, TypedDict, Optional, Literal
from pydantic import BaseModel, Field


# Shared constants: enum buckets used by the classifier schema, stats and the CLI
URGENCY_LEVELS = ["high", "medium", "low"]
IMPACT_LEVELS = ["high", "medium", "low"]
CATEGORIES = ["bug", "feature_request", "ux_issue", "pricing", "other"]
SENTIMENTS = ["positive", "neutral", "negative"]
SOURCES = ["email", "support_ticket", "survey", "call", "chat", "social_media", "other"]

# Entity types in the store
FEEDBACK = "Feedback"
REPORT = "Report"

# Substituted whenever the classification call fails
FALLBACK_CLASSIFICATION = {
    "urgency": "medium",
    "impact": "medium",
    "category": "other",
    "sentiment": "neutral",
}


class FeedbackRecord(TypedDict, total=False):
    # Assigned by the store
    id: str
    created_date: str

    # Input
    feedback_text: str
    customer_name: str
    customer_email: str
    source: str

    # Classification (all four set, or none)
    urgency: str
    impact: str
    category: str
    sentiment: str


class SentimentSummary(TypedDict):
    positive: int
    neutral: int
    negative: int


class Report(TypedDict, total=False):
    id: str
    created_date: str
    week_start_date: str        # "YYYY-MM-DD"
    week_end_date: str          # "YYYY-MM-DD"
    report_markdown: str
    total_feedback_count: int
    high_urgency_count: int
    sentiment_summary: SentimentSummary


class Classification(BaseModel):
    """Structured output schema for the classifier."""
    urgency: Literal["high", "medium", "low"] = Field(
        description="How quickly does this need attention?"
    )
    impact: Literal["high", "medium", "low"] = Field(
        description="How many customers does this affect?"
    )
    category: Literal["bug", "feature_request", "ux_issue", "pricing", "other"] = Field(
        description="The category that best fits this feedback"
    )
    sentiment: Literal["positive", "neutral", "negative"] = Field(
        description="The overall tone of the feedback"
    )


# --- Bulk upload extraction ---

class ExtractedFeedback(BaseModel):
    """One feedback entry found in an uploaded file."""
    customer_name: Optional[str] = Field(
        default=None, description="Name of the customer, if the entry has one"
    )
    customer_email: Optional[str] = Field(
        default=None, description="Email address of the customer, if the entry has one"
    )
    feedback_text: str = Field(
        description="The feedback itself, copied verbatim"
    )
    source: Optional[Literal["email", "support_ticket", "survey", "call", "chat", "social_media", "other"]] = Field(
        default=None,
        description="Channel the feedback came through, or other if it fits none of the listed channels"
    )


class ExtractionResult(BaseModel):
    """All entries extracted from a single file, in file order."""
    items: list[ExtractedFeedback]


# --- Workflow state ---

class ClassifyItemState(TypedDict):
    """Payload sent to one classify_item task during fan-out."""
    index: int
    record: dict


class BatchState(TypedDict, total=False):
    # Input
    records: list[dict]

    # Fan-out results, gathered from every classify_item task
    results: Annotated[list[dict], operator.add]

    # Output (from group node)
    high: list[dict]
    medium: list[dict]
    low: list[dict]
    all: list[dict]
    total: int


class ReportState(TypedDict, total=False):
    # Input
    start_date: date
    end_date: date

    selected: list[dict]         # Feedback inside the window (from select_feedback)
    prompt: Optional[str]        # From build_prompt
    report_markdown: Optional[str]  # From generate
    report: Optional[Report]     # Persisted report, or the unsaved placeholder

    # Workflow status
    status: str  # "filtered" | "empty" | "prompted" | "generated" | "done"
