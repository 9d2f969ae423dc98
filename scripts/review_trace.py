# ABOUTME: Provides a CLI that builds and inspects the adaptive review queue.
# ABOUTME: Reads question performance or raw attempt tables and prints the prioritized queue.

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from src.review_scheduler.config import CONFIG_ENV_VAR, DEFAULT_CONFIG, SchedulerConfig, load_config
from src.review_scheduler.labels import review_label
from src.review_scheduler.loaders import (
    performances_from_attempts,
    performances_from_frame,
    queue_to_frame,
    read_table,
    to_epoch_ms,
    write_table,
)
from src.review_scheduler.priority import score_breakdown
from src.review_scheduler.review_queue import build_review_queue, current_time_ms, latest_by_question, summarize_queue
from src.review_scheduler.schemas import QuestionPerformance, ReviewLabel
from src.review_scheduler.topic_aggregation import aggregate_by_topic, build_topic_accuracy_map

console = Console()
app = typer.Typer(help="Build the adaptive review queue from recorded question performance.")

LABEL_COLORS = {
    ReviewLabel.NEEDS_REVIEW: "red",
    ReviewLabel.WEAK_TOPIC: "yellow",
    ReviewLabel.DUE_FOR_REVIEW: "cyan",
}


def _load_config(config: Optional[Path]) -> SchedulerConfig:
    if config is None:
        return DEFAULT_CONFIG
    if not config.exists():
        console.print(f"[red]Error:[/] config {config} not found")
        raise typer.Exit(1)
    try:
        return load_config(config)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc


def _load_performances(input_path: Path, attempts: bool) -> List[QuestionPerformance]:
    if not input_path.exists():
        console.print(f"[red]Error:[/] {input_path} not found")
        raise typer.Exit(1)
    try:
        df = read_table(input_path)
        if attempts:
            return performances_from_attempts(df)
        return performances_from_frame(df)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--input") from exc


def _resolve_now(now: Optional[str]) -> int:
    if not now:
        return current_time_ms()
    try:
        return to_epoch_ms(now)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--now") from exc


@app.command()
def queue(
    input_path: Path = typer.Option(..., "--input", help="Question performance table (.parquet, .csv, .json)."),
    attempts: bool = typer.Option(False, "--attempts", help="Treat input as a raw attempt log (one row per answer)."),
    limit: Optional[int] = typer.Option(None, "--limit", help="Maximum items to surface; defaults to the config value."),
    now: Optional[str] = typer.Option(None, "--now", help="Reference instant as ISO8601; defaults to the current time."),
    config: Optional[Path] = typer.Option(None, "--config", envvar=CONFIG_ENV_VAR, help="Scheduler config YAML."),
    out: Optional[Path] = typer.Option(None, "--out", help="Optional output table for the queue."),
) -> None:
    """
    Build the review queue and print it highest priority first.
    """
    cfg = _load_config(config)
    performances = _load_performances(input_path, attempts)
    reference = _resolve_now(now)

    typer.echo(f"[review] Loaded {len(performances)} performance records from {input_path}")
    items = build_review_queue(performances, limit=limit, now=reference, config=cfg)

    console.rule("[bold blue]Review Queue[/bold blue]")
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#")
    table.add_column("Question ID")
    table.add_column("Topic")
    table.add_column("Label")
    table.add_column("Priority")
    table.add_column("Accuracy")
    table.add_column("Question")
    for rank, item in enumerate(items, start=1):
        color = LABEL_COLORS.get(item.label, "white")
        table.add_row(
            str(rank),
            item.question_id,
            item.topic,
            f"[{color}]{item.label}[/{color}]",
            str(item.priority_score),
            f"{item.accuracy}%",
            item.question_text[:60],
        )
    console.print(table)

    summary = summarize_queue(items)
    console.print(
        f"[bold]{summary.total_due} due[/bold] · "
        f"{summary.needs_review} needs review · "
        f"{summary.weak_topic} weak topic · "
        f"{summary.due_for_review} due for review"
    )

    if out is not None:
        try:
            write_table(queue_to_frame(items), out)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--out") from exc
        typer.echo(f"[review] Wrote {len(items)} queue items to {out}")


@app.command()
def topics(
    input_path: Path = typer.Option(..., "--input", help="Question performance table (.parquet, .csv, .json)."),
    attempts: bool = typer.Option(False, "--attempts", help="Treat input as a raw attempt log (one row per answer)."),
    config: Optional[Path] = typer.Option(None, "--config", envvar=CONFIG_ENV_VAR, help="Scheduler config YAML."),
) -> None:
    """
    Print per-topic accuracy across the full history.
    """
    cfg = _load_config(config)
    performances = _load_performances(input_path, attempts)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Topic")
    table.add_column("Correct")
    table.add_column("Answered")
    table.add_column("Accuracy")
    for ta in sorted(aggregate_by_topic(performances), key=lambda t: (t.accuracy, t.topic)):
        weak = ta.accuracy < cfg.thresholds.weak_topic_accuracy
        accuracy = f"[yellow]{ta.accuracy}%[/yellow]" if weak else f"{ta.accuracy}%"
        table.add_row(ta.topic, str(ta.correct), str(ta.total), accuracy)
    console.print(table)


@app.command()
def explain(
    question_id: str = typer.Option(..., "--question-id", help="Question to explain."),
    input_path: Path = typer.Option(..., "--input", help="Question performance table (.parquet, .csv, .json)."),
    attempts: bool = typer.Option(False, "--attempts", help="Treat input as a raw attempt log (one row per answer)."),
    now: Optional[str] = typer.Option(None, "--now", help="Reference instant as ISO8601; defaults to the current time."),
    config: Optional[Path] = typer.Option(None, "--config", envvar=CONFIG_ENV_VAR, help="Scheduler config YAML."),
) -> None:
    """
    Show which urgency signals fire for one question and the resulting label.
    """
    cfg = _load_config(config)
    performances = _load_performances(input_path, attempts)
    reference = _resolve_now(now)

    matches = [p for p in latest_by_question(performances) if p.question_id == question_id]
    if not matches:
        console.print(f"[yellow]No performance data for {question_id}[/yellow]")
        raise typer.Exit(code=1)
    perf = matches[0]

    topic_accuracy_map = build_topic_accuracy_map(performances)
    topic = perf.topic or "(none)"
    breakdown = score_breakdown(perf, topic_accuracy_map, reference, cfg)
    label = review_label(perf, topic_accuracy_map.get(perf.topic), reference, cfg)

    console.print(f"[bold]Question:[/] {perf.question_id}")
    console.print(f"[bold]Topic:[/] {topic} ({topic_accuracy_map.get(perf.topic, 'n/a')}%)")
    color = LABEL_COLORS.get(label, "white")
    console.print(f"[bold]Label:[/] [{color}]{label}[/{color}]")
    if not breakdown:
        console.print("[green]No urgency signals; question stays out of the queue.[/green]")
        return
    for signal, points in breakdown.items():
        console.print(f"  {signal}: +{points}")
    console.print(f"[bold]Priority:[/] {sum(breakdown.values())}")


if __name__ == "__main__":
    app()
