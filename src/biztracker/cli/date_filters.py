"""CLI helpers for date range resolution."""

from datetime import date

import click

from biztracker.cli.error_handling import fail
from biztracker.utils.date_parser import PERIODS, get_date_range, parse_date


def period_options(command):
    """Attach one ``--<period>`` flag per named period to a click command."""
    for period in reversed(PERIODS):
        command = click.option(
            f"--{period}",
            period.replace("-", "_"),
            is_flag=True,
            help=f"Filter to {period.replace('-', ' ')}",
        )(command)
    return command


def collect_period_flags(kwargs: dict) -> dict[str, bool]:
    """Pop the period flags added by ``period_options`` out of ``kwargs``."""
    return {period: kwargs.pop(period.replace("-", "_"), False) for period in PERIODS}


def _parse_bound(ctx, value: str | None, label: str) -> date | None:
    if not value:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        fail(ctx, f"Invalid {label} date: {e}")


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    default_range: tuple[date, date] | None = None,
) -> tuple[date | None, date | None]:
    """Resolve the reporting window from a period flag or explicit dates.

    At most one period flag may be set, and a period flag excludes
    ``--start-date``/``--end-date``. Without either, ``default_range`` is
    used (None means all time).
    """
    chosen = [period for period, is_set in period_flags.items() if is_set]

    if len(chosen) > 1:
        flag_names = ", ".join(f"--{period}" for period in PERIODS)
        fail(ctx, f"Only one period option ({flag_names}) can be specified at a time.")

    if chosen and (start_date or end_date):
        fail(
            ctx,
            "Period options (--this-month, --last-quarter, etc.) cannot be "
            "combined with --start-date or --end-date.",
        )

    if chosen:
        return get_date_range(chosen[0])

    start = _parse_bound(ctx, start_date, "start")
    end = _parse_bound(ctx, end_date, "end")
    if start is None and end is None and default_range is not None:
        return default_range
    return start, end


def describe_range(start: date | None, end: date | None) -> str:
    """Human-readable label for a resolved range."""
    if start is None and end is None:
        return "All time"
    if start is None:
        return f"Up to {end.isoformat()}"
    if end is None:
        return f"From {start.isoformat()}"
    return f"{start.isoformat()} to {end.isoformat()}"
