"""Synapse CLI — inspect step specs, preview buttons and grade cards from the shell."""

import dataclasses
import json
import logging
import sys
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any

import typer
from pydantic import ValidationError

from synapse_srs.application.config import resolve_config
from synapse_srs.application.scheduler import grade_card, parse_steps, preview_intervals
from synapse_srs.consts import VERSION
from synapse_srs.domain.errors import SchedulerError
from synapse_srs.domain.models import Card, SchedulerSettings

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="synapse: SM-2 spaced repetition scheduler.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage synapse configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Shared options
# ---------------------------------------------------------------------------

StateOpt = Annotated[
    str, typer.Option("--state", "-s", help="Card state: new, learning, review, relearning.")
]
IntervalOpt = Annotated[float, typer.Option("--interval", help="Current interval in days.")]
EaseOpt = Annotated[float | None, typer.Option(help="Current ease. Defaults to starting ease.")]
StepOpt = Annotated[int, typer.Option("--step", help="Current learning step index.")]
RepsOpt = Annotated[int, typer.Option(help="Repetitions so far.")]
LapsesOpt = Annotated[int, typer.Option(help="Lapses so far.")]
NowOpt = Annotated[
    datetime | None,
    typer.Option(help="Reference time (ISO 8601). Defaults to now, UTC."),
]
JsonOpt = Annotated[bool, typer.Option("--json", help="Output as JSON.")]


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Not JSON serializable: {type(value).__name__}")


def _dump(obj: Any) -> str:
    if dataclasses.is_dataclass(obj):
        obj = dataclasses.asdict(obj)
    return json.dumps(obj, indent=2, default=_json_default)


def _load_settings() -> SchedulerSettings:
    try:
        return resolve_config().to_scheduler_settings()
    except ValidationError as e:
        typer.secho(f"Invalid configuration:\n{e}", fg="red", err=True)
        raise typer.Exit(1)


def _reference_time(now: datetime | None) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    return now if now.tzinfo else now.replace(tzinfo=timezone.utc)


def _build_card(
    state: str,
    interval: float,
    ease: float | None,
    step: int,
    reps: int,
    lapses: int,
    now: datetime,
    settings: SchedulerSettings,
) -> Card:
    return Card(
        state=state,
        due_at=now,
        interval_days=interval,
        ease=settings.starting_ease if ease is None else ease,
        learning_step_index=step,
        reps=reps,
        lapses=lapses,
    )


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
):
    """Global settings for synapse."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if verbose:
        logging.getLogger("synapse_srs").setLevel(logging.DEBUG)


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def version():
    """Print the synapse version."""
    typer.echo(VERSION)


@app.command()
def steps(
    spec: Annotated[str, typer.Argument(help='Step spec, e.g. "1m 10m 1d".')],
    json_output: JsonOpt = False,
):
    """Parse a step spec into minutes."""
    minutes = parse_steps(spec)

    if json_output:
        typer.echo(json.dumps(minutes))
        return

    if not minutes:
        typer.secho("No valid steps (phase disabled).", fg="yellow")
        return
    typer.echo(" ".join(f"{m:g}" for m in minutes))


@app.command()
def preview(
    state: StateOpt = "new",
    interval: IntervalOpt = 0,
    ease: EaseOpt = None,
    step: StepOpt = 0,
    reps: RepsOpt = 0,
    lapses: LapsesOpt = 0,
    now: NowOpt = None,
    json_output: JsonOpt = False,
):
    """[bold green]Preview[/bold green] what each answer button would schedule."""
    settings = _load_settings()
    ref = _reference_time(now)
    card = _build_card(state, interval, ease, step, reps, lapses, ref, settings)

    try:
        result = preview_intervals(card, settings, now=ref)
    except SchedulerError as e:
        typer.secho(str(e), fg="red", err=True)
        raise typer.Exit(1)

    if json_output:
        typer.echo(_dump(result))
        return

    typer.echo(f"Again: {result.again}")
    if result.hard is not None:
        typer.echo(f"Hard:  {result.hard}")
    typer.echo(f"Good:  {result.good}")
    typer.echo(f"Easy:  {result.easy}")


@app.command()
def grade(
    rating: Annotated[str, typer.Argument(help="again, hard, good or easy.")],
    state: StateOpt = "new",
    interval: IntervalOpt = 0,
    ease: EaseOpt = None,
    step: StepOpt = 0,
    reps: RepsOpt = 0,
    lapses: LapsesOpt = 0,
    now: NowOpt = None,
):
    """Grade a card and print the resulting schedule as JSON."""
    settings = _load_settings()
    ref = _reference_time(now)
    card = _build_card(state, interval, ease, step, reps, lapses, ref, settings)

    try:
        result = grade_card(card, rating, settings, now=ref)
    except SchedulerError as e:
        typer.secho(str(e), fg="red", err=True)
        raise typer.Exit(1)

    typer.echo(_dump(result))


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    try:
        config = resolve_config()
    except ValidationError as e:
        typer.secho(f"Invalid configuration:\n{e}", fg="red", err=True)
        raise typer.Exit(1)
    typer.echo(json.dumps(config.model_dump(), indent=2))
