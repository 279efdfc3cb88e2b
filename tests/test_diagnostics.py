# tests/test_diagnostics.py

import pytest
from datetime import date

from sambat.diagnostics.new_year_scatter import build_series, day_of_year, days_since_march_equinox


def test_day_helpers():
    assert day_of_year(date(2024, 4, 13)) == 104
    assert days_since_march_equinox(date(2024, 4, 13)) == 24


def test_build_series_doy():
    np = pytest.importorskip("numpy")
    years, y, lengths = build_series(np, 2080, 2082, metric="doy")
    assert years.tolist() == [2080, 2081, 2082]
    # Baisakh 1 fell on 2023-04-14, 2024-04-13 and 2025-04-14
    assert y.tolist() == [104.0, 104.0, 104.0]
    assert lengths.tolist() == [365, 366, 365]


def test_build_series_since_equinox():
    np = pytest.importorskip("numpy")
    years, y, _ = build_series(np, 2081, 2081, metric="since-equinox")
    assert years.tolist() == [2081]
    assert y.tolist() == [24.0]


def test_build_series_outside_table_is_empty():
    np = pytest.importorskip("numpy")
    years, y, lengths = build_series(np, 2200, 2210, metric="doy")
    assert years.size == 0 and y.size == 0 and lengths.size == 0


def test_build_series_rejects_unknown_metric():
    np = pytest.importorskip("numpy")
    with pytest.raises(ValueError):
        build_series(np, 2081, 2081, metric="weekday")
