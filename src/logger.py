"""
Simple logging utility for Feedback Pulse.

Logs all output to both console and file with timestamps.
Minimal implementation - no log levels or configuration.
"""

import os
import sys
from datetime import datetime, timezone

LOG_FILE_NAME = "feedback_pipeline.log"
LOG_FILE = LOG_FILE_NAME


def set_log_dir(directory: str) -> None:
    """
    Write the log file inside `directory` from now on.

    The directory is created if missing. If it cannot be created the log
    keeps its current location.
    """
    global LOG_FILE

    try:
        os.makedirs(directory, exist_ok=True)
    except OSError as e:
        print(f"Warning: Failed to create log directory: {e}", file=sys.stderr)
        return
    LOG_FILE = os.path.join(directory, LOG_FILE_NAME)


def log(message: str, end: str = "\n") -> None:
    """
    Print message to console and append to log file with timestamp.

    Args:
        message: The message to log
        end: Line ending (default newline, matches print() behavior)
    """
    print(message, end=end)

    try:
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")

        # Only add timestamp prefix for actual content lines (not empty lines)
        if message.strip():
            log_entry = f"[{timestamp}] {message}{end}"
        else:
            log_entry = f"{message}{end}"

        with open(LOG_FILE, "a", encoding="utf-8") as f:
            f.write(log_entry)

    except IOError as e:
        # Stderr keeps the warning out of command output
        print(f"Warning: Failed to write to log file: {e}", file=sys.stderr)


def log_separator() -> None:
    """Log a visual separator line."""
    log("=" * 60)


def log_session_start(command: str) -> None:
    """Log the start of a command session."""
    log_separator()
    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
    log(f"{command} started: {timestamp}")
    log_separator()


def log_session_end(command: str) -> None:
    """Log the end of a command session."""
    log_separator()
    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
    log(f"{command} ended: {timestamp}")
    log_separator()
    log("")
