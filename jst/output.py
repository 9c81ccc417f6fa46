"""Output renderer: ranking, plain ranked list, rich table, JSON."""

import json
import sys
from datetime import timedelta
from io import StringIO

from rich.console import Console
from rich.table import Table
from rich.text import Text

from jst.models import ProbeOutcome, SpeedTestRun

FORMATS = ("text", "table", "json")

SEPARATOR = "=" * 60
SUCCESS_MARK = "🟢"
FAILURE_MARK = "🔴"

_ZERO = timedelta(0)


def sort_outcomes(outcomes: list[ProbeOutcome]) -> list[ProbeOutcome]:
    """Rank outcomes for display.

    Successes come first, fastest first; failures follow, ordered by
    endpoint name.  The sort is stable.
    """
    return sorted(outcomes, key=_rank_key)


def _rank_key(outcome: ProbeOutcome) -> tuple[int, timedelta, str]:
    if outcome.response_time is not None:
        return (0, outcome.response_time, "")
    return (1, _ZERO, outcome.name)


def render(
    run: SpeedTestRun,
    fmt: str,
    *,
    file: object | None = None,
    width: int | None = None,
) -> None:
    """Dispatch output to the appropriate formatter.

    Args:
        run: Speed test run to render.
        fmt: Output format: ``"text"``, ``"table"`` or ``"json"``.
        file: Writable file object for output (default: ``sys.stdout``).
        width: Explicit console width (default: auto-detect).

    Raises:
        ValueError: If *fmt* is not a known format.
    """
    if fmt == "text":
        render_text(run, file=file, width=width)
    elif fmt == "table":
        render_table(run, file=file, width=width)
    elif fmt == "json":
        render_json(run, file=file)
    else:
        raise ValueError(f"Unknown output format: {fmt!r}")


def _header(run: SpeedTestRun) -> str:
    header = f"🚀 Speed test results — {run.network}"
    if run.dropped:
        count = len(run.dropped)
        noun = "endpoint" if count == 1 else "endpoints"
        header = f"{header} ({count} {noun} dropped)"
    return header


# ---------------------------------------------------------------------------
# Ranked list
# ---------------------------------------------------------------------------


def render_text(
    run: SpeedTestRun,
    *,
    file: object | None = None,
    width: int | None = None,
) -> None:
    """Render *run* as a ranked list, one block per endpoint."""
    out = file or sys.stdout
    console = Console(file=out, highlight=False, width=width)

    console.print(Text(_header(run)), soft_wrap=True)
    console.print(SEPARATOR)

    for rank, outcome in enumerate(sort_outcomes(run.outcomes), start=1):
        if outcome.ok:
            console.print(
                Text(f"#{rank} {SUCCESS_MARK} {outcome.name} - {outcome.latency_ms}ms"),
                soft_wrap=True,
            )
            console.print(Text(f"    URL: {outcome.url}"), soft_wrap=True)
        else:
            console.print(
                Text(f"#{rank} {FAILURE_MARK} {outcome.name} - failed"),
                soft_wrap=True,
            )
            console.print(Text(f"    URL: {outcome.url}"), soft_wrap=True)
            console.print(Text(f"    Error: {outcome.error}"), soft_wrap=True)
        console.print()


# ---------------------------------------------------------------------------
# Table (rich) formatter
# ---------------------------------------------------------------------------


def render_table(
    run: SpeedTestRun,
    *,
    file: object | None = None,
    width: int | None = None,
) -> None:
    """Render *run* as a ``rich`` table in ranked order."""
    out = file or sys.stdout
    console = Console(file=out, highlight=False, width=width)

    table = Table(title=_header(run))
    table.add_column("Rank", justify="right")
    table.add_column("Status")
    table.add_column("Endpoint")
    table.add_column("URL")
    table.add_column("Latency", justify="right")
    table.add_column("Error")

    for rank, outcome in enumerate(sort_outcomes(run.outcomes), start=1):
        table.add_row(
            Text(str(rank)),
            Text(SUCCESS_MARK if outcome.ok else FAILURE_MARK),
            Text(outcome.name),
            Text(outcome.url),
            Text(f"{outcome.latency_ms}ms" if outcome.ok else "—"),
            Text(outcome.error or "—"),
        )

    console.print(table)


# ---------------------------------------------------------------------------
# JSON formatter
# ---------------------------------------------------------------------------


def render_json(run: SpeedTestRun, *, file: object | None = None) -> None:
    """Render *run* as JSON to *file*, results in ranked order."""
    out = file or sys.stdout
    json.dump(_run_to_dict(run), out, indent=2, ensure_ascii=False)
    out.write("\n")  # type: ignore[union-attr]


def _run_to_dict(run: SpeedTestRun) -> dict:
    return {
        "network": run.network,
        "started_at": run.started_at.isoformat(),
        "duration_seconds": run.duration_seconds,
        "dropped": list(run.dropped),
        "results": [
            {
                "rank": rank,
                "name": outcome.name,
                "url": outcome.url,
                "ok": outcome.ok,
                "latency_ms": outcome.latency_ms,
                "error": outcome.error,
            }
            for rank, outcome in enumerate(sort_outcomes(run.outcomes), start=1)
        ],
    }


def render_to_string(run: SpeedTestRun, fmt: str, *, width: int = 200) -> str:
    """Render to a string instead of stdout — useful for testing.

    Args:
        run: Speed test run to render.
        fmt: Output format.
        width: Console width for rich rendering (default: 200).

    Returns:
        The rendered output as a string.
    """
    buf = StringIO()
    render(run, fmt, file=buf, width=width)
    return buf.getvalue()
