"""
Aggregations over classified feedback.

Everything here is a pure function of the records passed in. Callers load a
snapshot from the store and hand it over; nothing is cached between calls.
"""

from collections import Counter
from datetime import date, timedelta
from typing import Iterable, Optional

from src.models import URGENCY_LEVELS, IMPACT_LEVELS, CATEGORIES, SENTIMENTS
from src.store import parse_timestamp


def _count_fixed(records: Iterable[dict], field: str, buckets: list[str]) -> dict:
    counts = {bucket: 0 for bucket in buckets}
    for record in records:
        value = record.get(field)
        if value in counts:
            counts[value] += 1
    return counts


def count_urgency(records: Iterable[dict]) -> dict:
    return _count_fixed(records, "urgency", URGENCY_LEVELS)


def count_impact(records: Iterable[dict]) -> dict:
    return _count_fixed(records, "impact", IMPACT_LEVELS)


def count_category(records: Iterable[dict]) -> dict:
    return _count_fixed(records, "category", CATEGORIES)


def count_sentiment(records: Iterable[dict]) -> dict:
    return _count_fixed(records, "sentiment", SENTIMENTS)


def count_source(records: Iterable[dict]) -> dict:
    """Tally sources actually present. Records without a source are not counted."""
    return dict(Counter(record["source"] for record in records if record.get("source")))


def percentage(count: int, total: int) -> float:
    """count / total * 100, with an empty total giving 0."""
    if not total:
        return 0
    return count / total * 100


def distribution(counts: dict) -> dict:
    """Convert a bucket -> count mapping into bucket -> percentage of the bucket total."""
    total = sum(counts.values())
    return {bucket: percentage(count, total) for bucket, count in counts.items()}


def created_day(record: dict) -> Optional[date]:
    """Local calendar day a record was created on, or None if unknown."""
    parsed = parse_timestamp(record.get("created_date"))
    if parsed is None:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.date()


def in_window(record: dict, start_date: date, end_date: date) -> bool:
    """True when the record's creation day is within [start_date, end_date]."""
    day = created_day(record)
    return day is not None and start_date <= day <= end_date


def sentiment_trend(records: Iterable[dict], today: Optional[date] = None, days: int = 7) -> list[dict]:
    """
    Daily sentiment counts for the `days` calendar days ending today, oldest first.

    Returns:
        List of {"date": date, "positive": n, "neutral": n, "negative": n}
    """
    today = today or date.today()
    by_day = {}
    for record in records:
        day = created_day(record)
        if day is not None:
            by_day.setdefault(day, []).append(record)

    trend = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        trend.append({"date": day, **count_sentiment(by_day.get(day, []))})
    return trend


def summarize(records: list[dict]) -> dict:
    """Headline numbers for the dashboard."""
    return {
        "total": len(records),
        "high_urgency": sum(1 for record in records if record.get("urgency") == "high"),
        "sentiment": count_sentiment(records),
    }


def report_stats(records: list[dict]) -> dict:
    """Summary fields stored on a Report, derived from the records it covers."""
    summary = summarize(records)
    return {
        "total_feedback_count": summary["total"],
        "high_urgency_count": summary["high_urgency"],
        "sentiment_summary": summary["sentiment"],
    }
