"""
Tests for feedback aggregation: enum tallies, percentages, the daily
sentiment trend, and the summaries used by the dashboard and reports.
"""

import unittest
import os
import sys
from datetime import date, datetime, timezone
from unittest.mock import patch
from io import StringIO

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from src.stats import (
    count_urgency, count_impact, count_category, count_sentiment, count_source,
    percentage, distribution, created_day, in_window, sentiment_trend,
    summarize, report_stats,
)


def record(urgency="low", category="other", sentiment="neutral", source="other", created_date="2025-03-05T12:00:00"):
    return {
        "feedback_text": "text",
        "urgency": urgency,
        "impact": "low",
        "category": category,
        "sentiment": sentiment,
        "source": source,
        "created_date": created_date,
    }


class TestCounts(unittest.TestCase):
    """Test single-field tallies"""

    def test_empty_collection_has_zeroed_buckets(self):
        self.assertEqual(count_urgency([]), {"high": 0, "medium": 0, "low": 0})
        self.assertEqual(count_impact([]), {"high": 0, "medium": 0, "low": 0})
        self.assertEqual(count_category([]), {
            "bug": 0, "feature_request": 0, "ux_issue": 0, "pricing": 0, "other": 0,
        })
        self.assertEqual(count_sentiment([]), {"positive": 0, "neutral": 0, "negative": 0})
        self.assertEqual(count_source([]), {})

    def test_totals_match_across_fields(self):
        """Urgency, category and sentiment tallies each add up to the record count"""
        records = [
            record("high", "bug", "negative", "email"),
            record("high", "bug", "negative", "chat"),
            record("medium", "ux_issue", "neutral", "email"),
            record("low", "feature_request", "positive", "survey"),
            record("low", "pricing", "positive", "email"),
        ]

        self.assertEqual(count_urgency(records), {"high": 2, "medium": 1, "low": 2})
        self.assertEqual(count_category(records)["bug"], 2)
        self.assertEqual(count_sentiment(records), {"positive": 2, "neutral": 1, "negative": 2})
        self.assertEqual(count_source(records), {"email": 3, "chat": 1, "survey": 1})

        for counts in (count_urgency(records), count_category(records), count_sentiment(records)):
            self.assertEqual(sum(counts.values()), len(records))

    def test_missing_and_unknown_values_are_not_counted(self):
        """Unclassified records add nothing, and no phantom buckets appear"""
        records = [
            record("high", "bug", "negative"),
            {"feedback_text": "unclassified", "created_date": "2025-03-05T12:00:00"},
            {"feedback_text": "odd", "urgency": "critical", "sentiment": None, "source": ""},
        ]

        urgency = count_urgency(records)
        self.assertEqual(urgency, {"high": 1, "medium": 0, "low": 0})
        self.assertNotIn("critical", urgency)
        self.assertEqual(sum(count_sentiment(records).values()), 1)
        self.assertEqual(count_source(records), {"other": 1})


class TestPercentages(unittest.TestCase):
    """Test the division-by-zero guard"""

    def test_percentage(self):
        self.assertEqual(percentage(1, 4), 25)
        self.assertEqual(percentage(3, 3), 100)
        self.assertEqual(percentage(0, 0), 0)
        self.assertEqual(percentage(5, 0), 0)

    def test_distribution_of_empty_collection(self):
        self.assertEqual(distribution(count_sentiment([])), {"positive": 0, "neutral": 0, "negative": 0})

    def test_distribution(self):
        dist = distribution({"positive": 3, "neutral": 1, "negative": 0})
        self.assertAlmostEqual(dist["positive"], 75.0)
        self.assertAlmostEqual(dist["neutral"], 25.0)
        self.assertEqual(dist["negative"], 0)


class TestDates(unittest.TestCase):
    """Test calendar-day handling"""

    def test_created_day(self):
        self.assertEqual(created_day({"created_date": "2025-03-05T23:59:59"}), date(2025, 3, 5))
        self.assertEqual(created_day({"created_date": "2025-03-05"}), date(2025, 3, 5))
        self.assertIsNone(created_day({}))
        self.assertIsNone(created_day({"created_date": "yesterday"}))

    def test_created_day_uses_local_calendar(self):
        """Aware timestamps are converted to local time before taking the date"""
        moment = datetime(2025, 3, 5, 12, 0, tzinfo=timezone.utc)
        expected = moment.astimezone().date()
        self.assertEqual(created_day({"created_date": moment.isoformat()}), expected)

    def test_in_window_bounds(self):
        start, end = date(2025, 3, 2), date(2025, 3, 8)
        self.assertTrue(in_window({"created_date": "2025-03-02T00:00:00"}, start, end))
        self.assertTrue(in_window({"created_date": "2025-03-08T23:59:59"}, start, end))
        self.assertFalse(in_window({"created_date": "2025-03-01T23:59:59"}, start, end))
        self.assertFalse(in_window({"created_date": "2025-03-09T00:00:00"}, start, end))
        self.assertFalse(in_window({}, start, end))


class TestTrend(unittest.TestCase):
    """Test the 7-day sentiment trend"""

    def test_seven_days_oldest_first(self):
        today = date(2025, 3, 10)
        records = [
            record(sentiment="positive", created_date="2025-03-10T08:00:00"),
            record(sentiment="negative", created_date="2025-03-10T22:00:00"),
            record(sentiment="neutral", created_date="2025-03-04T00:00:01"),
            # Too old
            record(sentiment="positive", created_date="2025-03-03T23:00:00"),
        ]

        trend = sentiment_trend(records, today=today)

        self.assertEqual(len(trend), 7)
        self.assertEqual([day["date"] for day in trend][0], date(2025, 3, 4))
        self.assertEqual([day["date"] for day in trend][-1], today)
        self.assertEqual(trend[0], {"date": date(2025, 3, 4), "positive": 0, "neutral": 1, "negative": 0})
        self.assertEqual(trend[-1], {"date": today, "positive": 1, "neutral": 0, "negative": 1})

        # Days without feedback report zeros
        for day in trend[1:-1]:
            self.assertEqual((day["positive"], day["neutral"], day["negative"]), (0, 0, 0))

    def test_empty_trend(self):
        trend = sentiment_trend([], today=date(2025, 3, 10), days=3)
        self.assertEqual(trend, [
            {"date": date(2025, 3, 8), "positive": 0, "neutral": 0, "negative": 0},
            {"date": date(2025, 3, 9), "positive": 0, "neutral": 0, "negative": 0},
            {"date": date(2025, 3, 10), "positive": 0, "neutral": 0, "negative": 0},
        ])


class TestSummaries(unittest.TestCase):
    """Test dashboard and report summaries"""

    def test_summarize(self):
        records = [record("high", sentiment="positive"), record("high", sentiment="negative"), record("low")]
        self.assertEqual(summarize(records), {
            "total": 3,
            "high_urgency": 2,
            "sentiment": {"positive": 1, "neutral": 1, "negative": 1},
        })

    def test_report_stats(self):
        records = [record(sentiment="positive")] * 3 + [record(sentiment="neutral"), record("high", sentiment="negative")]
        self.assertEqual(report_stats(records), {
            "total_feedback_count": 5,
            "high_urgency_count": 1,
            "sentiment_summary": {"positive": 3, "neutral": 1, "negative": 1},
        })

    def test_report_stats_empty(self):
        self.assertEqual(report_stats([]), {
            "total_feedback_count": 0,
            "high_urgency_count": 0,
            "sentiment_summary": {"positive": 0, "neutral": 0, "negative": 0},
        })


class TestStatisticsOutput(unittest.TestCase):
    """Test the analytics printout built on these tallies"""

    def test_statistics_include_impact_shares(self):
        from analyze import show_statistics

        records = [
            {**record("high"), "impact": "high"},
            {**record("high"), "impact": "high"},
            record("low"),
        ]

        with patch('sys.stdout', new=StringIO()) as output:
            show_statistics(records, today=date(2025, 3, 5))
        text = output.getvalue()

        self.assertIn("IMPACT DISTRIBUTION", text)
        impact = text[text.index("IMPACT DISTRIBUTION"):text.index("CATEGORY BREAKDOWN")]
        self.assertIn("(66.7%)", impact)
        self.assertIn("(33.3%)", impact)
        self.assertIn("(0.0%)", impact)


def run_tests():
    """Run all aggregation tests"""
    print("\n" + "=" * 60)
    print("Running Aggregation Tests")
    print("=" * 60 + "\n")

    loader = unittest.TestLoader()
    suite = unittest.TestSuite()

    suite.addTests(loader.loadTestsFromTestCase(TestCounts))
    suite.addTests(loader.loadTestsFromTestCase(TestPercentages))
    suite.addTests(loader.loadTestsFromTestCase(TestDates))
    suite.addTests(loader.loadTestsFromTestCase(TestTrend))
    suite.addTests(loader.loadTestsFromTestCase(TestSummaries))
    suite.addTests(loader.loadTestsFromTestCase(TestStatisticsOutput))

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)

    print("\n" + "=" * 60)
    print(f"Results: {result.testsRun} tests, {len(result.failures)} failures, {len(result.errors)} errors")
    print("=" * 60 + "\n")

    return 0 if result.wasSuccessful() else 1


if __name__ == "__main__":
    sys.exit(run_tests())
