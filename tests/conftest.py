"""Pytest configuration and shared fixtures."""

import io
from pathlib import Path

import pytest
import structlog

from qlab_app.data.parsers import load_benchmark
from qlab_app.data.store import BenchmarkStore


def make_csv(rows) -> str:
    """Render (iso_date, value) pairs as newest-first benchmark CSV text."""
    return "".join(f"{d}T00:00:00.000Z,{v}\n" for d, v in rows)


@pytest.fixture
def three_day_csv() -> str:
    """Three trading days stored newest-first: (day3,105), (day2,102), (day1,100)."""
    return make_csv([
        ("2024-01-04", "105"),
        ("2024-01-03", "102"),
        ("2024-01-02", "100"),
    ])


@pytest.fixture
def three_day_file(tmp_path: Path, three_day_csv: str) -> Path:
    """Three-day benchmark written to disk."""
    path = tmp_path / "kospi.csv"
    path.write_text(three_day_csv)
    return path


@pytest.fixture
def three_day_series(three_day_csv: str):
    """Loaded three-day benchmark series."""
    return load_benchmark(io.StringIO(three_day_csv))


@pytest.fixture
def three_day_store(three_day_series) -> BenchmarkStore:
    """Store holding the three-day benchmark."""
    return BenchmarkStore(three_day_series)


@pytest.fixture
def sample_source() -> Path:
    """Bundled sample benchmark file."""
    return Path(__file__).parent.parent / "data" / "kospi.csv"


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any structlog configuration a test applied."""
    yield
    structlog.reset_defaults()
