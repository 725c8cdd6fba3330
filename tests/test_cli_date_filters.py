"""Tests for CLI date filter helper."""

from datetime import date

import click
import pytest

from horadofrango.cli.date_filters import collect_period_flags, resolve_cli_date_range

TODAY = date(2026, 10, 16)


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


def test_resolve_cli_date_range_rejects_multiple_periods(capsys):
    period_flags = {"this-month": True, "last-month": True}

    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date=None,
            end_date=None,
            period_flags=period_flags,
        )

    assert excinfo.value.exit_code == 1
    err = capsys.readouterr().err
    assert "Only one period option" in err


def test_resolve_cli_date_range_rejects_period_with_start_end(capsys):
    period_flags = {"this-month": True}

    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date="2026-01-01",
            end_date=None,
            period_flags=period_flags,
        )

    assert excinfo.value.exit_code == 1
    err = capsys.readouterr().err
    assert "cannot be combined" in err


def test_resolve_cli_date_range_returns_period_range():
    start, end = resolve_cli_date_range(
        _ctx(),
        start_date=None,
        end_date=None,
        period_flags={"this-week": True},
        today=TODAY,
    )

    assert start == date(2026, 10, 12)
    assert end == date(2026, 10, 18)


def test_resolve_cli_date_range_parses_explicit_dates():
    start, end = resolve_cli_date_range(
        _ctx(),
        start_date="2026-01-02",
        end_date="05/01/2026",
        period_flags={},
    )

    assert start == date(2026, 1, 2)
    assert end == date(2026, 1, 5)


def test_resolve_cli_date_range_applies_default_range():
    default_range = (date(2020, 1, 1), date(2020, 1, 31))

    start, end = resolve_cli_date_range(
        _ctx(),
        start_date=None,
        end_date=None,
        period_flags={"today": False},
        default_range=default_range,
    )

    assert (start, end) == default_range


def test_resolve_cli_date_range_no_default_range():
    start, end = resolve_cli_date_range(
        _ctx(),
        start_date=None,
        end_date=None,
        period_flags={},
        default_range=None,
    )

    assert start is None
    assert end is None


def test_resolve_cli_date_range_invalid_start_date(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date="not-a-date",
            end_date=None,
            period_flags={},
        )

    assert excinfo.value.exit_code == 1
    err = capsys.readouterr().err
    assert "Invalid start date" in err


def test_resolve_cli_date_range_rejects_reversed_range(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date="2026-02-01",
            end_date="2026-01-01",
            period_flags={},
        )

    assert excinfo.value.exit_code == 1
    assert "must not be after" in capsys.readouterr().err


def test_collect_period_flags():
    flags = collect_period_flags({"this_month": True, "today": False, "limit": 5})

    assert flags["this-month"] is True
    assert flags["today"] is False
    assert "limit" not in flags
    assert len(flags) == 6
