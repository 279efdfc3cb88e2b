# tests/test_cli.py

import json

import pytest
from datetime import datetime, timezone

from sambat import api
from sambat.cli import main
from sambat.sources.builtin import BS_MONTH_DAYS
from sambat.sources.json_source import ENV_VAR, JsonCalendarDataSource


@pytest.fixture(autouse=True)
def isolated(monkeypatch, tmp_path):
    """Keep the user's cache and env out of the CLI, and restore the active calendar."""
    monkeypatch.delenv(ENV_VAR, raising=False)
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    old = api.get_calendar()
    yield tmp_path
    api.set_calendar(old)


@pytest.fixture
def frozen_clock(monkeypatch):
    # 00:00 in Kathmandu on BS 2081-01-01 (AD 2024-04-13)
    monkeypatch.setattr("sambat.core.time.utc_now", lambda: datetime(2024, 4, 12, 18, 15, tzinfo=timezone.utc))


def test_today(frozen_clock, capsys):
    assert main(["today"]) == 0
    out = capsys.readouterr().out
    assert "2081-01-01" in out
    assert "2024-04-13" in out
    assert "Baisakh 1, 2081" in out


def test_no_command_means_today(frozen_clock, capsys):
    assert main([]) == 0
    assert "2081-01-01" in capsys.readouterr().out


def test_ad2bs(capsys):
    assert main(["ad2bs", "2024-04-13"]) == 0
    out = capsys.readouterr().out
    assert "2081-01-01" in out
    assert "Baisakh 1, 2081" in out
    assert "April 13, 2024" in out


def test_bs2ad(capsys):
    assert main(["bs2ad", "2082-11-08"]) == 0
    out = capsys.readouterr().out
    assert "2026-02-20" in out
    assert "February 20, 2026" in out
    assert "८ फागुन २०८२, शुक्रबार" in out


def test_bs2ad_invalid(capsys):
    assert main(["bs2ad", "2082-13-01"]) == 1
    assert "out of range" in capsys.readouterr().err


@pytest.mark.parametrize("raw", ["2024/04/13", "2024-02-30", "yesterday"])
def test_ad2bs_malformed(raw, capsys):
    assert main(["ad2bs", raw]) == 1
    assert capsys.readouterr().err.startswith("✖")


def test_ad2bs_before_epoch(capsys):
    assert main(["ad2bs", "1900-01-01"]) == 1
    assert "before the BS epoch" in capsys.readouterr().err


def test_info_detects_calendar(capsys):
    assert main(["info", "2082-11-08"]) == 0
    out = capsys.readouterr().out
    assert "input treated as BS" in out
    assert "2026-02-20" in out

    assert main(["info", "1999-12-31"]) == 0
    out = capsys.readouterr().out
    assert "input treated as AD" in out
    assert "December 31, 1999" in out


def test_month_grid(frozen_clock, capsys):
    assert main(["month", "2081", "1"]) == 0
    out = capsys.readouterr().out
    assert "Total days: 31" in out
    assert "2024-04-13 .. 2024-05-13" in out
    assert "[1]" in out


def test_month_defaults_to_current(frozen_clock, capsys):
    assert main(["month"]) == 0
    out = capsys.readouterr().out
    assert "बैशाख २०८१" in out
    assert "[1]" in out


def test_month_out_of_range(capsys):
    assert main(["month", "2081", "13"]) == 1
    assert main(["month", "1990", "1"]) == 1


def test_export_and_reload(isolated, capsys):
    out_path = isolated / "cal.json"
    assert main(["export-data", str(out_path)]) == 0
    assert str(out_path) in capsys.readouterr().out

    data = json.loads(out_path.read_text(encoding="utf-8"))
    assert data["supportedRange"] == {"start": 2000, "end": 2090}

    assert main(["--data", str(out_path), "bs2ad", "2082-11-08"]) == 0
    assert "2026-02-20" in capsys.readouterr().out


def test_export_defaults_to_cache(isolated, capsys):
    assert main(["export-data"]) == 0
    assert (isolated / "cache" / "sambat" / "calendar.json").is_file()


def test_data_flag_limits_range(isolated, capsys):
    path = JsonCalendarDataSource.from_dict({"years": {"2000": BS_MONTH_DAYS[2000]}}).write(isolated / "small.json")
    assert main(["--data", str(path), "bs2ad", "2000-01-01"]) == 0
    assert "1943-04-14" in capsys.readouterr().out
    assert main(["--data", str(path), "bs2ad", "2082-11-08"]) == 1


def test_data_flag_missing_file(isolated, capsys):
    assert main(["--data", str(isolated / "missing.json"), "today"]) == 1
    assert "Cannot read calendar table" in capsys.readouterr().err


def test_data_flag_corrupt_row(isolated, capsys):
    path = isolated / "bad.json"
    path.write_text('{"years": {"2000": null}}', encoding="utf-8")
    assert main(["--data", str(path), "today"]) == 1
    assert "BS year 2000" in capsys.readouterr().err


def test_help(capsys):
    assert main(["help"]) == 0
    assert "usage: sambat" in capsys.readouterr().out


def test_unknown_extra_args():
    with pytest.raises(SystemExit) as exc:
        main(["today", "--bogus"])
    assert exc.value.code == 2


# --- Diagnostics -------------------------------------------------------------

def test_diag_round_trip(isolated, capsys):
    years = {str(y): BS_MONTH_DAYS[y] for y in range(2000, 2006)}
    path = JsonCalendarDataSource.from_dict({"years": years}).write(isolated / "six.json")
    assert main(["--data", str(path), "diag", "round-trip", "--N", "200"]) == 0
    assert "All round-trip tests passed." in capsys.readouterr().out


def test_diag_new_years(capsys):
    assert main(["diag", "new-years", "--from-year", "2080", "--to-year", "2082"]) == 0
    out = capsys.readouterr().out
    assert "2024-04-13" in out
    assert "2025-04-14" in out
