"""CLI helpers for date range resolution."""

from datetime import date

import click

from ledgerdesk.utils.date_parser import get_date_range, parse_date


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
) -> tuple[date | None, date | None]:
    """Resolve a date range from a named period or explicit start/end dates."""
    if period and (start_date or end_date):
        click.echo(
            "Error: --period cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if period:
        return get_date_range(period)

    start = None
    end = None
    for label, raw in (("start", start_date), ("end", end_date)):
        if not raw:
            continue
        try:
            parsed = parse_date(raw)
        except ValueError as e:
            click.echo(f"Error: Invalid {label} date: {e}", err=True)
            ctx.exit(1)
        if label == "start":
            start = parsed
        else:
            end = parsed

    if start is not None and end is not None and start > end:
        click.echo("Error: Start date is after end date.", err=True)
        ctx.exit(1)

    return start, end
