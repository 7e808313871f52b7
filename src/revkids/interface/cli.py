"""revkids CLI — inspect and drive the scheduling engine over a JSON card store."""

import asyncio
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import ValidationError

from revkids.application.config import AppConfig, resolve_config
from revkids.application.scheduling.ingestion import ExerciseAttempt
from revkids.application.scheduling.quality import calculate_quality
from revkids.domain.errors import CardStoreError
from revkids.domain.scheduling.models import ExerciseResponse

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="revkids: spaced-repetition scheduling for young learners.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage revkids configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logger = logging.getLogger(__name__)


def _setup_logging(config: AppConfig) -> None:
    logging.basicConfig(
        level=config.effective_log_level(),
        format="%(levelname)s:%(name)s:%(message)s",
        stream=sys.stderr,
        force=True,
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _resolve(ctx: typer.Context, **overrides: Any) -> AppConfig:
    ctx.ensure_object(dict)
    config = resolve_config(
        {
            "store_path": ctx.obj.get("store_path"),
            "verbose": ctx.obj.get("verbose"),
            **overrides,
        }
    )
    _setup_logging(config)
    return config


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, default=str))


def _run(coro):
    try:
        return asyncio.run(coro)
    except CardStoreError as e:
        logger.debug("Card store failure", exc_info=True)
        typer.secho(str(e), fg="red", err=True)
        raise typer.Exit(1) from e


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    store: Annotated[
        Path | None, typer.Option("--store", help="Card store JSON file. Defaults to config.")
    ] = None,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
):
    """Global settings for revkids."""
    ctx.ensure_object(dict)
    ctx.obj["store_path"] = store
    ctx.obj["verbose"] = verbose or None


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def quality(
    time_spent: Annotated[float, typer.Option("--time", min=0, help="Seconds spent.")],
    correct: Annotated[bool, typer.Option("--correct/--incorrect", help="Answer result.")] = True,
    hints: Annotated[int, typer.Option("--hints", min=0, help="Hints used.")] = 0,
    difficulty: Annotated[int, typer.Option(min=0, max=5, help="Difficulty tier 0-5.")] = 3,
    confidence: Annotated[
        float | None, typer.Option(min=0, max=5, help="Self-reported confidence 0-5.")
    ] = None,
):
    """Compute the 0-5 quality score for a single response."""
    response = ExerciseResponse(
        is_correct=correct,
        time_spent=time_spent,
        hints_used=hints,
        difficulty=difficulty,
        confidence=confidence,
    )
    typer.echo(calculate_quality(response))


@app.command()
def review(
    ctx: typer.Context,
    learner: Annotated[str, typer.Argument(help="Learner ID.")],
    item: Annotated[str, typer.Argument(help="Item ID.")],
    score: Annotated[float, typer.Option(help="Score 0-100.")],
    time_spent: Annotated[float, typer.Option("--time", help="Seconds spent.")],
    completed: Annotated[
        bool, typer.Option("--completed/--not-completed", help="Whether the exercise was finished.")
    ] = True,
    hints: Annotated[int, typer.Option("--hints", help="Hints used.")] = 0,
    difficulty: Annotated[int | None, typer.Option(help="Difficulty tier 0-5.")] = None,
    label: Annotated[
        str | None,
        typer.Option(help="Item difficulty label (easy, medium, hard), used without --difficulty."),
    ] = None,
    confidence: Annotated[float | None, typer.Option(help="Self-reported confidence 0-5.")] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """[bold green]Record[/bold green] an attempt and reschedule the card."""
    from revkids.application.factory import get_review_service

    config = _resolve(ctx)

    try:
        attempt = ExerciseAttempt(
            item_id=item,
            score=score,
            completed=completed,
            time_spent=time_spent,
            difficulty_level=difficulty,
            difficulty_label=label,
            hints_used=hints,
            confidence=confidence,
        )
    except ValidationError as e:
        typer.secho(f"Invalid attempt: {e}", fg="red", err=True)
        raise typer.Exit(2) from e

    service = get_review_service(config)
    outcome = _run(service.record_attempt(learner, attempt))

    if json_output:
        _echo_json(
            {
                "quality": outcome.quality,
                "result": asdict(outcome.result),
                "card": asdict(outcome.card),
            }
        )
        return

    result = outcome.result
    typer.echo(f"Quality: {outcome.quality}")
    typer.echo(
        f"EF: {result.easiness_factor}  Repetition: {result.repetition_number}"
        f"  Interval: {result.interval}d  Difficulty: {result.difficulty.value}"
    )
    typer.secho(f"Next review: {result.next_review_date:%Y-%m-%d}", fg="green")


@app.command()
def schedule(
    ctx: typer.Context,
    learner: Annotated[str, typer.Argument(help="Learner ID.")],
    max_per_day: Annotated[
        int | None, typer.Option("--max-per-day", min=1, help="Daily review budget.")
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Show due cards, upcoming cards and the 7-day calendar."""
    from revkids.application.factory import get_review_service

    config = _resolve(ctx, max_cards_per_day=max_per_day)
    plan = _run(get_review_service(config).get_schedule(learner))

    if json_output:
        _echo_json(asdict(plan))
        return

    typer.echo(f"Due: {len(plan.due)}  Upcoming: {len(plan.upcoming)}")
    for card in plan.due:
        typer.echo(f"  {card.item_id}  (due {card.next_review:%Y-%m-%d})")
    for day in plan.schedule:
        ids = ", ".join(card.item_id for card in day.cards) or "-"
        typer.echo(f"{day.date.isoformat()}: {ids}")


@app.command()
def progress(
    ctx: typer.Context,
    learner: Annotated[str, typer.Argument(help="Learner ID.")],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Summarize mastery statistics for a learner."""
    from revkids.application.factory import get_review_service

    config = _resolve(ctx)
    stats = _run(get_review_service(config).get_progress(learner))

    if json_output:
        _echo_json(asdict(stats))
        return

    typer.echo(
        f"Cards: {stats.total_cards}  Mastered: {stats.mastered}"
        f"  Learning: {stats.learning}  Difficult: {stats.difficult}"
    )
    typer.echo(
        f"Average EF: {stats.average_easiness}  Average interval: {stats.average_interval}d"
        f"  Success rate: {stats.success_rate:.0%}"
    )


@app.command()
def recommend(
    ctx: typer.Context,
    learner: Annotated[str, typer.Argument(help="Learner ID.")],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Print rule-based study recommendations."""
    from revkids.application.factory import get_review_service

    config = _resolve(ctx)
    recommendations = _run(get_review_service(config).get_recommendations(learner))

    if json_output:
        _echo_json([asdict(r) for r in recommendations])
        return

    if not recommendations:
        typer.secho("No recommendations. Keep it up!", fg="green")
        return

    for rec in recommendations:
        typer.secho(rec.action, fg="yellow")
        typer.echo(f"  {rec.reason}")
        if rec.item_ids:
            typer.echo(f"  Items: {', '.join(rec.item_ids)}")


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Display final resolved configuration."""
    config = _resolve(ctx)
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
