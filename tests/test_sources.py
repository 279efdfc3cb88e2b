# tests/test_sources.py

import json
import logging

import pytest
from datetime import date

from sambat.core.engine import BikramCalendar
from sambat.core.errors import DataSourceError
from sambat.core.types import EPOCH, NepaliDate
from sambat.sources.builtin import BS_MONTH_DAYS, END_YEAR, START_YEAR, VERSION, default_source
from sambat.sources.inline import InlineCalendarDataSource, check_month_lengths
from sambat.sources.json_source import ENV_VAR, JsonCalendarDataSource, cache_path, load_default

ROW_2081 = [31, 32, 31, 32, 31, 30, 30, 30, 29, 30, 29, 31]


@pytest.fixture
def snapshot():
    return JsonCalendarDataSource.from_source(default_source(), version=VERSION)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    monkeypatch.delenv(ENV_VAR, raising=False)
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    return tmp_path


# --- Inline tables -----------------------------------------------------------

def test_builtin_range():
    src = default_source()
    assert (src.supported_start_year, src.supported_end_year) == (START_YEAR, END_YEAR) == (2000, 2090)
    assert len(src) == len(BS_MONTH_DAYS)
    assert src.year_data(2081) == tuple(ROW_2081)
    assert src.year_data(1999) is None
    assert default_source() is src


def test_check_month_lengths():
    assert check_month_lengths(2081, ROW_2081) == tuple(ROW_2081)
    with pytest.raises(DataSourceError):
        check_month_lengths(2081, ROW_2081[:11])
    with pytest.raises(DataSourceError):
        check_month_lengths(2081, [28] + ROW_2081[1:])
    with pytest.raises(DataSourceError):
        check_month_lengths(2081, [33] + ROW_2081[1:])
    with pytest.raises(DataSourceError):
        check_month_lengths(2081, None)
    with pytest.raises(DataSourceError):
        check_month_lengths(2081, ["x"] + ROW_2081[1:])


def test_inline_string_keys_and_default_range():
    src = InlineCalendarDataSource({"2081": ROW_2081, 2079: ROW_2081})
    assert (src.supported_start_year, src.supported_end_year) == (2079, 2081)
    assert src.year_data(2081) == tuple(ROW_2081)
    assert src.year_data(2080) is None
    assert [y for y, _ in src] == [2079, 2081]


def test_inline_rejects_bad_tables():
    with pytest.raises(DataSourceError):
        InlineCalendarDataSource({"abc": ROW_2081})
    with pytest.raises(DataSourceError):
        InlineCalendarDataSource({})
    with pytest.raises(DataSourceError):
        InlineCalendarDataSource({2081: ROW_2081}, 2085, 2080)


def test_inline_empty_with_explicit_range():
    src = InlineCalendarDataSource({}, 2000, 2010)
    assert len(src) == 0
    assert BikramCalendar(src).available_years() == []
    assert BikramCalendar(src).available_ad_years() == []


def test_inline_rows_are_immutable():
    row = list(ROW_2081)
    src = InlineCalendarDataSource({2081: row})
    row[0] = 29
    assert src.year_data(2081)[0] == 31


# --- JSON tables -------------------------------------------------------------

def test_to_dict_shape(snapshot):
    d = snapshot.to_dict()
    assert d["version"] == VERSION
    assert d["supportedRange"] == {"start": 2000, "end": 2090}
    assert d["referencePoint"] == EPOCH.to_dict()
    assert d["years"]["2081"] == ROW_2081


def test_from_dict_matches_builtin(snapshot):
    src = JsonCalendarDataSource.from_dict(json.loads(json.dumps(snapshot.to_dict())))
    assert list(src) == list(default_source())
    cal = BikramCalendar(src)
    assert cal.ad_to_bs(date(2025, 9, 17)) == NepaliDate(2082, 6, 1)


def test_from_dict_defaults():
    src = JsonCalendarDataSource.from_dict({"years": {"2000": BS_MONTH_DAYS[2000]}})
    assert (src.supported_start_year, src.supported_end_year) == (2000, 2000)
    assert src.reference == EPOCH
    assert src.version == ""


def test_write_and_read_file(snapshot, tmp_path):
    path = snapshot.write(tmp_path / "nested" / "calendar.json")
    assert path.is_file()
    src = JsonCalendarDataSource.from_file(path)
    assert src.version == VERSION
    assert src.origin == str(path)
    assert src.year_data(2090) == BS_MONTH_DAYS[2090]


def test_from_url_file_scheme(snapshot, tmp_path):
    path = snapshot.write(tmp_path / "calendar.json")
    src = JsonCalendarDataSource.from_url(path.as_uri())
    assert len(src) == len(BS_MONTH_DAYS)


def test_from_url_failure(tmp_path):
    with pytest.raises(DataSourceError):
        JsonCalendarDataSource.from_url((tmp_path / "missing.json").as_uri())


@pytest.mark.parametrize(
    "text",
    [
        "{",
        "[1, 2, 3]",
        '{"version": "x"}',
        '{"years": [1, 2]}',
        '{"years": {"2000": [30, 32]}}',
        '{"supportedRange": {"start": "soon"}, "years": {}}',
        '{"referencePoint": {"bsYear": 2000}, "years": {}}',
        '{"years": {"2000": null}}',
        '{"years": {"2000": 5}}',
        '{"years": {"2000": ["a", 32, 31, 32, 31, 30, 30, 30, 29, 30, 29, 31]}}',
    ],
)
def test_malformed_json(text):
    with pytest.raises(DataSourceError):
        JsonCalendarDataSource.from_text(text)


def test_reference_point_mismatch(snapshot):
    d = snapshot.to_dict()
    d["referencePoint"]["adDay"] = 13
    with pytest.raises(DataSourceError):
        JsonCalendarDataSource.from_dict(d)


def test_missing_file(tmp_path):
    with pytest.raises(DataSourceError):
        JsonCalendarDataSource.from_file(tmp_path / "nope.json")


# --- Lookup order ------------------------------------------------------------

def test_cache_path_honours_xdg(clean_env):
    assert cache_path() == clean_env / "cache" / "sambat" / "calendar.json"


def test_load_default_falls_back_to_builtin(clean_env):
    assert load_default() is default_source()


def test_load_default_prefers_cache(clean_env, snapshot):
    snapshot.write(cache_path())
    src = load_default()
    assert isinstance(src, JsonCalendarDataSource)
    assert src.origin == str(cache_path())


@pytest.mark.parametrize("text", ["{", '{"years": {"2000": null}}', '{"years": {"2000": [30, "x"]}}'])
def test_load_default_skips_broken_cache(clean_env, caplog, text):
    cp = cache_path()
    cp.parent.mkdir(parents=True)
    cp.write_text(text, encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="sambat.sources.json_source"):
        assert load_default() is default_source()
    assert "Ignoring cached calendar table" in caplog.text


def test_load_default_env_var_wins(clean_env, monkeypatch, snapshot):
    snapshot.write(cache_path())
    path = JsonCalendarDataSource.from_dict({"years": {"2000": BS_MONTH_DAYS[2000]}}).write(clean_env / "env.json")
    monkeypatch.setenv(ENV_VAR, str(path))
    src = load_default()
    assert len(src) == 1


def test_load_default_env_var_errors_propagate(clean_env, monkeypatch):
    monkeypatch.setenv(ENV_VAR, str(clean_env / "missing.json"))
    with pytest.raises(DataSourceError):
        load_default()
