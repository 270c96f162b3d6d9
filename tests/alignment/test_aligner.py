"""Tests for strategy series alignment"""

import io
from datetime import date

import pytest

from qlab_app.alignment.aligner import SeriesAligner
from qlab_app.data.models import AnchorPolicy, StrategyReturnSeries
from qlab_app.data.parsers import load_benchmark
from qlab_app.data.store import BenchmarkStore
from qlab_app.errors import DateNotFoundError, MalformedDataError


@pytest.fixture
def aligner(three_day_store):
    return SeriesAligner(three_day_store)


@pytest.fixture
def ten_day_store():
    """Benchmark with ten trading days, values 100..109"""
    days = [date(2024, 1, d) for d in (2, 3, 4, 5, 8, 9, 10, 11, 12, 15)]
    rows = "".join(f"{d}T00:00:00.000Z,{100 + i}\n" for i, d in reversed(list(enumerate(days))))
    return BenchmarkStore(load_benchmark(io.StringIO(rows)))


class TestRightAnchored:
    """Test alignment to the latest trading day"""

    def test_full_length(self, aligner):
        """Equal lengths align one to one"""
        result = aligner.align(StrategyReturnSeries(values=[10, 11, 12]), AnchorPolicy.RIGHT)

        assert result.comparison.benchmark_values == (100.0, 102.0, 105.0)
        assert result.comparison.strategy_values == (10.0, 11.0, 12.0)
        assert result.truncated_points == 0
        assert result.aligned_start_date == date(2024, 1, 2)
        assert result.aligned_end_date == date(2024, 1, 4)

    @pytest.mark.parametrize("length", [1, 2, 5, 9, 10])
    def test_last_point_on_last_trading_day(self, ten_day_store, length):
        """The last strategy point always meets the latest benchmark value"""
        aligner = SeriesAligner(ten_day_store)
        values = [float(i) for i in range(length)]

        result = aligner.align(values, "right")

        assert len(result.comparison) == length
        assert result.comparison.strategy_values[-1] == values[-1]
        assert result.comparison.benchmark_values[-1] == 109.0
        assert result.aligned_end_date == date(2024, 1, 15)

    def test_truncates_older_points(self, aligner):
        """A series longer than the benchmark loses its oldest points"""
        result = aligner.align(StrategyReturnSeries(values=[1, 2, 3, 4, 5]), AnchorPolicy.RIGHT)

        assert result.truncated_points == 2
        assert result.truncated is True
        assert len(result.comparison) == 3
        assert result.comparison.strategy_values == (3.0, 4.0, 5.0)

    def test_empty_strategy(self, aligner):
        """A zero-length strategy gives a zero-length comparison"""
        result = aligner.align(StrategyReturnSeries(values=[]))

        assert len(result.comparison) == 0
        assert result.truncated_points == 0
        assert result.aligned_start_date is None

    def test_empty_benchmark(self):
        """Against an empty benchmark every point is truncated"""
        aligner = SeriesAligner(BenchmarkStore())
        result = aligner.align([1.0, 2.0])

        assert len(result.comparison) == 0
        assert result.truncated_points == 2

    def test_default_anchor(self, three_day_store):
        """The aligner's default anchor applies when none is given"""
        aligner = SeriesAligner(three_day_store, default_anchor="right")
        assert aligner.align([1.0]).anchor is AnchorPolicy.RIGHT


class TestDateAnchored:
    """Test alignment by the strategy's own dates"""

    def test_exact_span(self, aligner):
        """day1..day3 maps onto the whole benchmark"""
        strategy = StrategyReturnSeries(values=[10, 11, 12], start_date=date(2024, 1, 2),
                                        end_date=date(2024, 1, 4))
        result = aligner.align(strategy, AnchorPolicy.DATE)

        assert result.comparison.benchmark_values == (100.0, 102.0, 105.0)
        assert result.comparison.strategy_values == (10.0, 11.0, 12.0)
        assert result.anchor is AnchorPolicy.DATE

    def test_inner_window(self, ten_day_store):
        """A span in the middle of the benchmark selects just those days"""
        strategy = StrategyReturnSeries(values=[1, 2, 3], start_date="2024-01-05",
                                        end_date="2024-01-09", quant_id=3)
        result = SeriesAligner(ten_day_store).align(strategy, "date")

        assert result.comparison.benchmark_values == (103.0, 104.0, 105.0)
        assert result.comparison.dates == (date(2024, 1, 5), date(2024, 1, 8), date(2024, 1, 9))
        assert result.quant_id == 3

    def test_end_date_only(self, ten_day_store):
        """Without a start date, points count back from the end date"""
        strategy = StrategyReturnSeries(values=[1, 2], end_date="2024-01-04")
        result = SeriesAligner(ten_day_store).align(strategy, AnchorPolicy.DATE)

        assert result.comparison.benchmark_values == (101.0, 102.0)
        assert result.truncated_points == 0

    def test_end_date_past_benchmark(self, aligner):
        """An end date after the last trading day is not found"""
        strategy = StrategyReturnSeries(values=[10, 11, 12], start_date=date(2024, 1, 3),
                                        end_date=date(2024, 1, 5))
        with pytest.raises(DateNotFoundError) as exc_info:
            aligner.align(strategy, AnchorPolicy.DATE)
        assert exc_info.value.requested_date == date(2024, 1, 5)

    def test_end_date_on_non_trading_day(self, ten_day_store):
        """Weekends are not on the timeline"""
        strategy = StrategyReturnSeries(values=[1], end_date="2024-01-06")
        with pytest.raises(DateNotFoundError):
            SeriesAligner(ten_day_store).align(strategy, AnchorPolicy.DATE)

    def test_start_date_on_non_trading_day(self, ten_day_store):
        """A start date inside the range must be a trading day"""
        strategy = StrategyReturnSeries(values=[1, 2, 3], start_date="2024-01-07",
                                        end_date="2024-01-10")
        with pytest.raises(DateNotFoundError) as exc_info:
            SeriesAligner(ten_day_store).align(strategy, AnchorPolicy.DATE)
        assert exc_info.value.requested_date == date(2024, 1, 7)

    def test_start_before_benchmark_truncates(self, aligner):
        """Points older than the benchmark are truncated, not rejected"""
        strategy = StrategyReturnSeries(values=[8, 9, 10, 11, 12], start_date="2023-12-28",
                                        end_date="2024-01-04")
        result = aligner.align(strategy, AnchorPolicy.DATE)

        assert result.truncated_points == 2
        assert result.comparison.strategy_values == (10.0, 11.0, 12.0)

    def test_start_before_benchmark_without_excess(self, aligner):
        """An early start date needs enough points to reach back past the benchmark"""
        strategy = StrategyReturnSeries(values=[1.0], start_date="2000-01-01",
                                        end_date="2024-01-04")
        with pytest.raises(MalformedDataError):
            aligner.align(strategy, AnchorPolicy.DATE)

    def test_start_before_benchmark_exact_fit(self, aligner):
        """Exactly the benchmark length leaves nothing to truncate, so the early start is wrong"""
        strategy = StrategyReturnSeries(values=[10, 11, 12], start_date="2023-12-28",
                                        end_date="2024-01-04")
        with pytest.raises(MalformedDataError):
            aligner.align(strategy, AnchorPolicy.DATE)

    def test_span_length_mismatch(self, aligner):
        """Dates must cover exactly as many trading days as there are points"""
        strategy = StrategyReturnSeries(values=[10, 11], start_date="2024-01-02",
                                        end_date="2024-01-04")
        with pytest.raises(MalformedDataError):
            aligner.align(strategy, AnchorPolicy.DATE)

    def test_requires_end_date(self, aligner):
        """Undated series cannot be date-anchored"""
        with pytest.raises(MalformedDataError):
            aligner.align(StrategyReturnSeries(values=[1.0]), AnchorPolicy.DATE)

    def test_empty_series_never_fails(self, aligner):
        """Zero-length input is not an error even with bad dates"""
        strategy = StrategyReturnSeries(values=[], end_date="2030-01-01")
        result = aligner.align(strategy, AnchorPolicy.DATE)
        assert len(result.comparison) == 0


class TestAnchorValidation:
    """Test anchor policy handling"""

    def test_unknown_anchor(self, aligner):
        """Unknown policies are malformed input"""
        with pytest.raises(MalformedDataError):
            aligner.align([1.0], "left")
