from datetime import date
from typing import Optional

from settings import TREND_DAYS, DASHBOARD_LIST_LIMIT
from src.stats import (
    count_urgency, count_impact, count_category, count_sentiment, count_source,
    percentage, distribution, sentiment_trend, summarize, created_day,
)

BAR_WIDTH = 30

LABELS = {
    "high": "High",
    "medium": "Medium",
    "low": "Low",
    "bug": "Bug",
    "feature_request": "Feature Request",
    "ux_issue": "UX Issue",
    "pricing": "Pricing",
    "other": "Other",
    "positive": "Positive",
    "neutral": "Neutral",
    "negative": "Negative",
}


def label(value: str) -> str:
    return LABELS.get(value, value.replace("_", " "))


def bar(count: int, total: int) -> str:
    filled = round(percentage(count, total) / 100 * BAR_WIDTH)
    return "█" * filled + "·" * (BAR_WIDTH - filled)


def print_heading(title: str) -> None:
    print(f"\n{'─' * 50}")
    print(title)
    print(f"{'─' * 50}")


def print_distribution(title: str, counts: dict, hide_empty: bool = False) -> None:
    print_heading(title)
    total = sum(counts.values())
    shares = distribution(counts)
    rows = [(name, count) for name, count in counts.items() if count or not hide_empty]
    if not rows:
        print("  None")
        return
    for name, count in rows:
        print(f"  {label(name):<16} {bar(count, total)} {count:>4} ({shares[name]:.1f}%)")


def show_statistics(feedback: list[dict], today: Optional[date] = None) -> None:
    """Print urgency, impact, category, sentiment and source breakdowns plus the daily sentiment trend."""
    total = len(feedback)

    print(f"\n{'═' * 50}")
    print("FEEDBACK ANALYTICS")
    print(f"({total} entries)")
    print(f"{'═' * 50}")

    if total == 0:
        print("No Data Available")
        print("\nAdd feedback entries to see analytics:")
        print('  python main.py submit "Your feedback here"')
        return

    print_distribution("URGENCY DISTRIBUTION", count_urgency(feedback))
    print_distribution("IMPACT DISTRIBUTION", count_impact(feedback))
    print_distribution("CATEGORY BREAKDOWN", count_category(feedback), hide_empty=True)
    print_distribution("SENTIMENT DISTRIBUTION", count_sentiment(feedback))
    print_distribution("FEEDBACK SOURCES", count_source(feedback))

    print_heading(f"{TREND_DAYS}-DAY SENTIMENT TREND")
    print(f"  {'Date':<8} {'Positive':>9} {'Neutral':>9} {'Negative':>9}")
    for day in sentiment_trend(feedback, today=today, days=TREND_DAYS):
        print(f"  {day['date']:%b} {day['date'].day:<4} {day['positive']:>9} {day['neutral']:>9} {day['negative']:>9}")


def show_dashboard(feedback: list[dict], reports: list[dict], urgency: Optional[str] = None) -> None:
    """
    Print headline numbers, the sentiment overview and the latest feedback and reports.

    Args:
        feedback: Recently loaded feedback, newest first
        reports: Recently generated reports, newest first
        urgency: Only list feedback with this urgency. Headline numbers and
                 sentiment bars always cover all of `feedback`.
    """
    summary = summarize(feedback)
    total = summary["total"]
    sentiment = summary["sentiment"]

    print(f"\n{'═' * 50}")
    print("PRODUCT INTELLIGENCE DASHBOARD")
    print(f"{'═' * 50}")
    print(f"Total feedback:      {total}")
    print(f"High urgency:        {summary['high_urgency']}")
    print(f"Positive sentiment:  {sentiment['positive']}")
    print(f"Reports generated:   {len(reports)}")

    print_heading("SENTIMENT OVERVIEW")
    for name in ("positive", "neutral", "negative"):
        # Bars are relative to all loaded feedback, not just entries with a sentiment
        print(f"  {label(name):<10} {bar(sentiment[name], total)} {percentage(sentiment[name], total):.0f}%")

    listed = [record for record in feedback if urgency is None or record.get("urgency") == urgency]
    listed = listed[:DASHBOARD_LIST_LIMIT]

    print_heading(f"RECENT FEEDBACK ({label(urgency).upper()} URGENCY)" if urgency else "RECENT FEEDBACK")
    if not listed:
        print("  No feedback yet.")
    for record in listed:
        day = created_day(record)
        when = day.isoformat() if day else "unknown"
        who = record.get("customer_name") or "Anonymous"
        tags = " / ".join(record.get(field) or "?" for field in ("urgency", "category", "sentiment"))
        print(f"  [{when}] {who} ({tags})")
        print(f"    {record['feedback_text'][:100]}")

    print_heading("RECENT REPORTS")
    show_report_list(reports)


def show_report_list(reports: list[dict]) -> None:
    if not reports:
        print("  No reports yet. Generate one with: python main.py report")
        return
    for report in reports:
        print(
            f"  {report['id']}  {report['week_start_date']} → {report['week_end_date']}  "
            f"{report['total_feedback_count']} entries, {report['high_urgency_count']} high urgency"
        )


def show_report(report: dict) -> None:
    """Print a report's statistics followed by its Markdown."""
    sentiment = report["sentiment_summary"]
    total = report["total_feedback_count"]
    print(f"\n{'═' * 50}")
    print(f"Report: {report['week_start_date']} → {report['week_end_date']}")
    print(f"{'═' * 50}")
    print(f"Total feedback:  {total}")
    print(f"High urgency:    {report['high_urgency_count']}")
    print(
        f"Sentiment:       {sentiment['positive']} positive ({percentage(sentiment['positive'], total):.0f}%), "
        f"{sentiment['neutral']} neutral ({percentage(sentiment['neutral'], total):.0f}%), "
        f"{sentiment['negative']} negative ({percentage(sentiment['negative'], total):.0f}%)"
    )
    print(f"{'─' * 50}\n")
    print(report["report_markdown"])


def show_batch(batch: dict) -> None:
    """Preview a classified upload grouped by urgency."""
    print(f"\n{'═' * 50}")
    print("CLASSIFICATION RESULTS")
    print(f"({batch['total']} feedback entries classified)")
    print(f"{'═' * 50}")
    print(f"High urgency:    {len(batch['high'])}")
    print(f"Medium urgency:  {len(batch['medium'])}")
    print(f"Low urgency:     {len(batch['low'])}")

    for level in ("high", "medium", "low"):
        entries = batch[level]
        if not entries:
            continue
        print_heading(f"{label(level).upper()} URGENCY ({len(entries)})")
        for entry in entries:
            who = entry.get("customer_name") or "Anonymous"
            print(f"  {who} [{label(entry['category'])}, {entry['sentiment']}, impact: {entry['impact']}]")
            print(f"    {entry['feedback_text'][:100]}")
