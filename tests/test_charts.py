'''
    File Name: test_charts.py
    Version: 2.0.0
    Date: 26/01/2026
    Author: Pablo Bartolomé Molina
'''
import unittest
from datetime import date
from decimal import Decimal
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import MagicMock

from models.transaction import Transaction, TransactionType
from reports import charts
from reports.aggregation import CategoryTotal, TimeSeriesPoint
from reports.summaries import DashboardSummary


def _tx(amount, tx_type, day, category):
    return Transaction(user_id="alice", amount=Decimal(amount), category=category,
                       type=TransactionType(tx_type), date=date.fromisoformat(day))


class TestChartFrames(unittest.TestCase):
    """DataFrame conversion of engine output."""

    def test_time_series_frame_keeps_bucket_order(self):
        df = charts.time_series_frame([
            TimeSeriesPoint("Jan 2", Decimal("1.5"), Decimal("0")),
            TimeSeriesPoint("Jan 1", Decimal("0"), Decimal("3")),
        ])
        self.assertEqual(list(df.columns), ["label", "income", "expenses"])
        self.assertEqual(list(df["label"]), ["Jan 2", "Jan 1"])
        self.assertAlmostEqual(df["income"].sum(), 1.5)

    def test_empty_frames_have_columns(self):
        self.assertTrue(charts.time_series_frame([]).empty)
        self.assertEqual(list(charts.category_frame([]).columns), ["category", "total"])


class TestChartDrawing(unittest.TestCase):
    """Drawing onto axes, including the empty state."""

    def test_category_breakdown_cycles_palette(self):
        ax = MagicMock()
        totals = [CategoryTotal(f"C{i}", Decimal(i + 1)) for i in range(7)]
        charts.draw_category_breakdown(ax, totals)
        ax.pie.assert_called_once()
        colors = ax.pie.call_args.kwargs["colors"]
        self.assertEqual(len(colors), 7)
        self.assertEqual(colors[5], colors[0])

    def test_time_series_draws_two_lines(self):
        ax = MagicMock()
        charts.draw_time_series(ax, [TimeSeriesPoint("Jan 1", Decimal("100"), Decimal("40"))])
        self.assertEqual(ax.plot.call_count, 2)
        ax.legend.assert_called_once()

    def test_empty_input_shows_placeholder(self):
        ax = MagicMock()
        charts.draw_time_series(ax, [])
        charts.draw_category_breakdown(ax, [])
        self.assertEqual(ax.text.call_count, 2)
        self.assertIn("No transactions", ax.text.call_args.args[2])
        ax.plot.assert_not_called()
        ax.pie.assert_not_called()

    def test_plot_functions_return_figures(self):
        fig = charts.plot_time_series([TimeSeriesPoint("Jan 1", Decimal("1"), Decimal("2"))])
        self.assertEqual(len(fig.axes), 1)
        fig = charts.plot_category_breakdown([CategoryTotal("Food", Decimal("5"))])
        self.assertEqual(len(fig.axes), 1)


class TestSaveDashboard(unittest.TestCase):

    def test_save_dashboard_writes_png(self):
        records = [
            _tx("100", "income", "2024-01-01", "Salary"),
            _tx("40", "expense", "2024-01-01", "Food"),
        ]
        with TemporaryDirectory() as tmp:
            out = charts.save_dashboard(records, Path(tmp) / "nested" / "dash.png")
            self.assertTrue(out.exists())
            self.assertGreater(out.stat().st_size, 0)

    def test_save_dashboard_with_no_data(self):
        with TemporaryDirectory() as tmp:
            out = charts.save_dashboard([], Path(tmp) / "empty.png", summary=DashboardSummary.from_records([]))
            self.assertTrue(out.exists())


if __name__ == "__main__":
    unittest.main()
