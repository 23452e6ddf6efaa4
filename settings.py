"""
Configuration for the Feedback Pulse project.
"""

import os

# Model configuration
CLASSIFICATION_MODEL = "claude-haiku-4-5-20251001"  # Classifying one entry against four fixed enums is a simple task
EXTRACTION_MODEL = "claude-sonnet-4-6"  # Pulling entries out of loosely structured PDFs needs more judgment
REPORT_MODEL = "claude-sonnet-4-6"  # Weekly narrative reports benefit from a stronger writer

# Storage (defaults, can be overridden via CLI)
DEFAULT_DATA_DIR = os.environ.get("FEEDBACK_DATA_DIR", "data")
DEFAULT_UPLOADS_DIR = os.path.join(DEFAULT_DATA_DIR, "uploads")

# Bulk upload
ACCEPTED_UPLOAD_TYPES = ("csv", "pdf")

# Dashboard and statistics
DASHBOARD_FEEDBACK_LIMIT = 50
DASHBOARD_REPORT_LIMIT = 5
DASHBOARD_LIST_LIMIT = 10  # Entries shown in the dashboard feedback list
TREND_DAYS = 7
