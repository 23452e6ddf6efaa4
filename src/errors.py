"""
Error taxonomy for the feedback pipeline.

Classification failures never appear here: the classifier recovers locally
with a fallback. Everything below propagates to main.py, which prints the
message and returns the user to a point where they can retry.
"""


class FeedbackPipelineError(Exception):
    """Base class for errors surfaced to the user."""


class ValidationError(FeedbackPipelineError):
    """Bad input (unsupported file type, blank text, empty extraction). Nothing was written."""


class ExtractionError(FeedbackPipelineError):
    """The uploaded file could not be turned into feedback entries."""


class GenerationError(FeedbackPipelineError):
    """Report narrative generation or report persistence failed. No report was saved."""


class PersistenceError(FeedbackPipelineError):
    """Reading from or writing to the entity store failed."""
