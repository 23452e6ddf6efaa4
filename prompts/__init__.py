"""
Prompt templates for Feedback Pulse.
"""

from prompts.prompt_classify import CLASSIFIER_SYSTEM_PROMPT, CLASSIFIER_USER_TEMPLATE
from prompts.prompt_extract import EXTRACTION_SYSTEM_PROMPT, EXTRACTION_USER_TEMPLATE
from prompts.prompt_report import REPORT_PROMPT_TEMPLATE, NO_FEEDBACK_MARKDOWN

__all__ = [
    "CLASSIFIER_SYSTEM_PROMPT",
    "CLASSIFIER_USER_TEMPLATE",
    "EXTRACTION_SYSTEM_PROMPT",
    "EXTRACTION_USER_TEMPLATE",
    "REPORT_PROMPT_TEMPLATE",
    "NO_FEEDBACK_MARKDOWN",
]
