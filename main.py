import os
import sys
from datetime import date
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from settings import DEFAULT_DATA_DIR, DASHBOARD_FEEDBACK_LIMIT, DASHBOARD_REPORT_LIMIT
from src.errors import FeedbackPipelineError, PersistenceError
from src.models import SOURCES, URGENCY_LEVELS, FEEDBACK
from src.store import EntityStore
from src.stats import created_day
from src.logger import log, log_session_start, log_session_end, set_log_dir
from src import pipeline
import analyze


def require_api_key() -> None:
    """Exit with instructions if ANTHROPIC_API_KEY is not set."""
    if not os.environ.get("ANTHROPIC_API_KEY"):
        log("Error: ANTHROPIC_API_KEY environment variable not set")
        log("\nPlease set your API key:")
        log("  export ANTHROPIC_API_KEY=your_key_here")
        log("\nOr add to .env file:")
        log("  ANTHROPIC_API_KEY=your_key_here")
        sys.exit(1)


def parse_day(value: str) -> date:
    import argparse

    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}', expected YYYY-MM-DD")


def confirm_save(store: EntityStore, batch: dict, assume_yes: bool = False) -> bool:
    """
    Ask whether to save a classified batch, retrying failed saves on request.

    Classification results stay in memory between attempts, so a retry only
    repeats the write.

    Returns:
        bool: True if the batch was saved
    """
    if not assume_yes:
        while True:
            choice = input("\n[y] Save all  [n] Discard: ").strip().lower()
            if choice == "y":
                break
            elif choice == "n":
                log("Discarded. Nothing was saved.")
                return False
            else:
                log("Invalid choice. Please enter 'y' or 'n'.")

    while True:
        try:
            saved = pipeline.save_batch(store, batch)
            log(f"✓ {len(saved)} Feedback Entries Saved!")
            return True
        except PersistenceError as e:
            log(f"\n Failed to save feedback to database: {e}")
            if assume_yes:
                raise
            while True:
                choice = input("    [r] Retry save  [n] Discard: ").strip().lower()
                if choice in ("r", "n"):
                    break
                log("    Invalid choice. Please enter 'r' or 'n'.")
            if choice == "n":
                log("Discarded. Nothing was saved.")
                return False


def cmd_submit(args, store: EntityStore) -> None:
    require_api_key()
    record = pipeline.submit_feedback(
        store,
        args.text,
        customer_name=args.name,
        customer_email=args.email,
        source=args.source,
    )
    log("✓ Feedback Submitted!")
    log(f"  ID:        {record['id']}")
    log(f"  Urgency:   {record['urgency']}")
    log(f"  Impact:    {record['impact']}")
    log(f"  Category:  {record['category']}")
    log(f"  Sentiment: {record['sentiment']}")


def cmd_upload(args, store: EntityStore) -> None:
    pipeline.validate_upload(args.file)
    require_api_key()
    uploads_dir = os.path.join(args.data_dir, "uploads")
    batch = pipeline.process_upload(args.file, uploads_dir)
    analyze.show_batch(batch)
    confirm_save(store, batch, assume_yes=args.yes)


def cmd_report(args, store: EntityStore) -> None:
    default_start, default_end = pipeline.current_week()
    start_date = args.start or default_start
    end_date = args.end or default_end

    require_api_key()
    log(f"Generating report for {start_date.isoformat()} .. {end_date.isoformat()}")
    report = pipeline.generate_report(store, start_date, end_date)
    analyze.show_report(report)

    if args.output:
        output_path = Path(args.output)
        output_path.write_text(report["report_markdown"], encoding="utf-8")
        log(f"\nSaved Markdown to: {output_path}")


def cmd_reports(args, store: EntityStore) -> None:
    if args.output is not None and not args.show:
        log("Error: --output needs --show ID to pick the report to download")
        sys.exit(1)

    if args.show:
        report = pipeline.get_report(store, args.show)
        if report is None:
            log(f"Error: No report with id {args.show}")
            sys.exit(1)
        analyze.show_report(report)

        if args.output is not None:
            created = created_day(report) or date.today()
            output_path = Path(args.output or f"report-{created.isoformat()}.md")
            output_path.write_text(report["report_markdown"], encoding="utf-8")
            log(f"\nSaved Markdown to: {output_path}")
        return

    reports = pipeline.list_reports(store, args.limit)
    print(f"\n{'═' * 50}")
    print(f"REPORT HISTORY ({len(reports)})")
    print(f"{'═' * 50}")
    analyze.show_report_list(reports)


def cmd_stats(args, store: EntityStore) -> None:
    analyze.show_statistics(store.list(FEEDBACK, "-created_date"))


def cmd_dashboard(args, store: EntityStore) -> None:
    feedback = pipeline.recent_feedback(store, DASHBOARD_FEEDBACK_LIMIT)
    reports = pipeline.list_reports(store, DASHBOARD_REPORT_LIMIT)
    analyze.show_dashboard(feedback, reports, urgency=args.urgency)


def build_parser():
    import argparse

    parser = argparse.ArgumentParser(
        description="Classify customer feedback with AI and generate weekly reports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Submit a single piece of feedback
  python main.py submit "App crashes on login" --name "Dana" --source support_ticket

  # Classify every entry in a CSV or PDF file, preview, then save
  python main.py upload feedback_export.csv

  # Generate this week's report and download the Markdown
  python main.py report --output

  # Generate a report for a custom date range
  python main.py report --start 2025-03-02 --end 2025-03-08

  # Browse reports, statistics and the dashboard
  python main.py reports
  python main.py stats
  python main.py dashboard --urgency high

  # Download a past report's Markdown
  python main.py reports --show <id> --output
        """
    )
    parser.add_argument("--data-dir", default=DEFAULT_DATA_DIR,
                        help=f"Directory holding feedback and reports (default: {DEFAULT_DATA_DIR})")

    subparsers = parser.add_subparsers(dest="command", required=True)

    submit = subparsers.add_parser("submit", help="Classify and save one piece of feedback")
    submit.add_argument("text", help="The feedback text")
    submit.add_argument("--name", default="", help="Customer name")
    submit.add_argument("--email", default="", help="Customer email")
    submit.add_argument("--source", default="other", choices=SOURCES,
                        help="Where the feedback came from (default: other)")
    submit.set_defaults(func=cmd_submit)

    upload = subparsers.add_parser("upload", help="Classify every entry in a CSV or PDF file")
    upload.add_argument("file", help="CSV or PDF file with feedback entries")
    upload.add_argument("--yes", action="store_true",
                        help="Save the classified entries without asking")
    upload.set_defaults(func=cmd_upload)

    report = subparsers.add_parser("report", help="Generate an AI report for a date range")
    report.add_argument("--start", type=parse_day, help="First day, YYYY-MM-DD (default: this Sunday)")
    report.add_argument("--end", type=parse_day, help="Last day, YYYY-MM-DD (default: this Saturday)")
    report.add_argument("--output", nargs="?", const=f"feedback-report-{date.today().isoformat()}.md",
                        help="Write the Markdown to a file (default name: feedback-report-<today>.md)")
    report.set_defaults(func=cmd_report)

    reports = subparsers.add_parser("reports", help="List previously generated reports")
    reports.add_argument("--limit", type=int, help="Show at most this many reports")
    reports.add_argument("--show", metavar="ID", help="Print one report in full")
    reports.add_argument("--output", nargs="?", const="",
                         help="With --show, write the report's Markdown to a file "
                              "(default name: report-<created day>.md)")
    reports.set_defaults(func=cmd_reports)

    stats = subparsers.add_parser("stats", help="Show feedback analytics")
    stats.set_defaults(func=cmd_stats)

    dashboard = subparsers.add_parser("dashboard", help="Show the feedback dashboard")
    dashboard.add_argument("--urgency", choices=URGENCY_LEVELS,
                           help="Only list recent feedback with this urgency")
    dashboard.set_defaults(func=cmd_dashboard)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    store = EntityStore(args.data_dir)
    set_log_dir(args.data_dir)

    log_session_start(args.command)
    try:
        args.func(args, store)
    except FeedbackPipelineError as e:
        log(f"Error: {e}")
        log_session_end(args.command)
        sys.exit(1)
    log_session_end(args.command)


if __name__ == "__main__":
    main()
