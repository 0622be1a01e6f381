"""kioku CLI — preview and apply reviews, inspect levels, streaks and config."""

import dataclasses
import json
import logging
import sys
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Annotated, Any

import typer

from kioku.application.config import SchedulerSettings, resolve_config
from kioku.application.progress.streak import today_date_string, update_streak
from kioku.application.progress.xp import calculate_level, get_level_title
from kioku.application.scheduler.review import get_grade_options, process_review
from kioku.domain.review.models import ConfidenceLevel, Grade, MemoryState

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="kioku: spaced repetition scheduler for kanji and vocabulary.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage kioku configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Path):
        return str(value)
    raise TypeError(f"Not JSON serializable: {type(value).__name__}")


def _dump(obj: Any) -> str:
    if dataclasses.is_dataclass(obj):
        obj = dataclasses.asdict(obj)
    return json.dumps(obj, indent=2, default=_jsonable)


def _fail(message: str) -> None:
    typer.secho(message, fg="red", err=True)
    raise typer.Exit(2)


def _build_state(
    interval: int,
    ease: float | None,
    reviews: int,
    correct: int,
    confidence: str | None,
    settings: SchedulerSettings,
) -> MemoryState:
    if ease is None:
        ease = settings.starting_ease_factor
    if confidence is None:
        confidence = ConfidenceLevel.NEW if reviews == 0 else ConfidenceLevel.LEARNING
    try:
        return MemoryState(
            interval_days=interval,
            ease_factor=ease,
            review_count=reviews,
            times_correct=correct,
            confidence_level=confidence,
        )
    except ValueError as e:
        _fail(f"Invalid memory state: {e}")


def _parse_now(value: str | None) -> datetime:
    if value is None:
        return datetime.now(timezone.utc)
    try:
        moment = datetime.fromisoformat(value)
    except ValueError:
        _fail(f"Invalid --now timestamp: {value!r}")
    # Naive timestamps are taken as UTC
    return moment if moment.tzinfo else moment.replace(tzinfo=timezone.utc)


IntervalOpt = Annotated[int, typer.Option("--interval", help="Current interval in days.")]
EaseOpt = Annotated[
    float | None,
    typer.Option("--ease", help="Current ease factor. Defaults to the configured starting ease."),
]
ReviewsOpt = Annotated[int, typer.Option("--reviews", help="Reviews applied so far.")]
CorrectOpt = Annotated[int, typer.Option("--correct", help="Correct reviews so far.")]
ConfidenceOpt = Annotated[
    str | None,
    typer.Option(
        "--confidence",
        help="Current confidence level. Defaults to 'new' for unreviewed items, else 'learning'.",
    ),
]


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
    """Global settings for kioku."""
    ctx.ensure_object(dict)
    # -v on the command line wins over KIOKU_VERBOSE and the config file
    config = resolve_config({"verbose": verbose or None})
    ctx.obj["verbose"] = config.verbose
    if config.verbose >= 2:
        logging.getLogger().setLevel(logging.DEBUG)
    elif config.verbose == 1:
        logging.getLogger().setLevel(logging.INFO)
    else:
        logging.getLogger().setLevel(logging.WARNING)


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def preview(
    interval: IntervalOpt = 1,
    ease: EaseOpt = None,
    reviews: ReviewsOpt = 0,
    correct: CorrectOpt = 0,
    confidence: ConfidenceOpt = None,
    streak_bonus: Annotated[
        int, typer.Option("--streak-bonus", help="Consecutive correct answers this session.")
    ] = 0,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """[bold green]Preview[/bold green] the interval and XP each grade would give."""
    settings = resolve_config().scheduler
    state = _build_state(interval, ease, reviews, correct, confidence, settings)
    try:
        options = get_grade_options(state, streak_bonus, settings)
    except ValueError as e:
        _fail(str(e))

    if json_output:
        typer.echo(json.dumps([dataclasses.asdict(o) for o in options], indent=2, default=_jsonable))
        return

    for option in options:
        typer.echo(f"{option.grade.value:<6} {option.label:>6}  +{option.xp} XP")


@app.command()
def review(
    grade: Annotated[Grade, typer.Argument(help="again, hard, good or easy.")],
    interval: IntervalOpt = 1,
    ease: EaseOpt = None,
    reviews: ReviewsOpt = 0,
    correct: CorrectOpt = 0,
    confidence: ConfidenceOpt = None,
    now: Annotated[
        str | None, typer.Option("--now", help="Review time (ISO 8601). Defaults to now, UTC.")
    ] = None,
):
    """Apply a graded review and print the resulting schedule as JSON."""
    settings = resolve_config().scheduler
    state = _build_state(interval, ease, reviews, correct, confidence, settings)
    try:
        update = process_review(grade, state, _parse_now(now), settings)
    except ValueError as e:
        _fail(str(e))
    typer.echo(_dump(update))


@app.command()
def level(
    xp: Annotated[int, typer.Argument(help="Total XP earned.")],
):
    """Show the level and title for an XP total."""
    settings = resolve_config().scheduler
    try:
        info = calculate_level(xp, settings)
    except ValueError as e:
        _fail(str(e))
    typer.echo(f"Level {info.level} ({get_level_title(info.level)})")
    typer.echo(f"{info.xp_in_level}/{info.xp_for_next} XP to next level")


@app.command()
def streak(
    today: Annotated[
        str | None, typer.Option("--today", help="Today's date (YYYY-MM-DD). Defaults to UTC today.")
    ] = None,
    last: Annotated[
        str | None, typer.Option("--last", help="Date of the previous review (YYYY-MM-DD).")
    ] = None,
    current: Annotated[int, typer.Option(help="Current streak.")] = 0,
    longest: Annotated[int, typer.Option(help="Longest streak.")] = 0,
):
    """Compute the streak after reviewing today."""
    try:
        result = update_streak(last, current, longest, today or today_date_string())
    except ValueError as e:
        _fail(str(e))
    typer.echo(_dump(result))


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    config = resolve_config()
    typer.echo(json.dumps(config.model_dump(), indent=2, default=_jsonable))
