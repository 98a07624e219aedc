"""CLI interface for orghealth."""

import json
import logging

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from orghealth.config import load_config
from orghealth.evaluators.engine import ScoringEngine
from orghealth.evaluators.recommendations import filter_by_priority
from orghealth.models.model_eval import ScoringConfig
from orghealth.models.model_score import (
    AnalysisReport,
    DimensionScore,
    Priority,
    Recommendation,
)
from orghealth.normalizer import normalize_bundle
from orghealth.storage import load_bundle_file, report_to_dict, save_report

app = typer.Typer(
    name="orghealth",
    help="orghealth - Score CRM org health from collected metrics",
)

console = Console()

PRIORITY_COLORS = {
    Priority.CRITICAL: "bold red",
    Priority.HIGH: "red",
    Priority.MEDIUM: "yellow",
    Priority.LOW: "dim",
}


def _get_score_color(score: float) -> str:
    """Get color for score display."""
    if score >= 75:
        return "green"
    elif score >= 60:
        return "yellow"
    else:
        return "red"


def _truncate(text: str, max_len: int = 60) -> str:
    """Truncate text with ellipsis."""
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def _configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _load_config_or_exit(config_path: str | None) -> ScoringConfig:
    try:
        return load_config(config_path)
    except FileNotFoundError:
        console.print(f"[red]Error:[/red] Config file not found: {config_path}")
        raise typer.Exit(1)
    except ValidationError as e:
        console.print(f"[red]Error:[/red] Invalid config: {e.error_count()} validation error(s)")
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            console.print(f"  {location}: {error['msg']}")
        raise typer.Exit(1)
    except ValueError as e:
        # json.JSONDecodeError is a ValueError
        console.print(f"[red]Error:[/red] Could not read config: {e}")
        raise typer.Exit(1)


def _load_bundle_or_exit(bundle_path: str) -> dict:
    try:
        return load_bundle_file(bundle_path)
    except FileNotFoundError:
        console.print(f"[red]Error:[/red] Metric bundle not found: {bundle_path}")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]Error:[/red] Could not read metric bundle: {e}")
        raise typer.Exit(1)


def _dimension_table(title: str, dimension: DimensionScore) -> Table:
    table = Table(title=f"{title}: {dimension.total}/100")
    table.add_column("Category", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Weight", justify="right", style="magenta")
    table.add_column("Deductions", style="dim")

    for category, component in dimension.components.items():
        color = _get_score_color(component.score)
        deductions = ", ".join(f"{f.name} {f.impact}" for f in component.factors) or "-"
        table.add_row(
            category.label,
            f"[{color}]{component.score}[/{color}]",
            f"{component.weight:.2f}",
            _truncate(deductions),
        )

    for category in dimension.missing:
        table.add_row(category.label, "[dim]-[/dim]", "[dim]excluded[/dim]", "no metrics")

    return table


def _recommendation_table(title: str, recommendations: list[Recommendation]) -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Priority")
    table.add_column("Title", style="bold")
    table.add_column("Category", style="cyan")
    table.add_column("Effort", justify="right")
    table.add_column("Savings/mo", justify="right", style="green")

    for i, rec in enumerate(recommendations, 1):
        color = PRIORITY_COLORS[rec.priority]
        savings = f"${rec.monthly_savings:,.0f}" if rec.monthly_savings else "-"
        table.add_row(
            str(i),
            f"[{color}]{rec.priority.value}[/{color}]",
            _truncate(rec.title, 40),
            rec.category.label,
            f"{rec.effort:g}h",
            savings,
        )

    return table


def _print_report(report: AnalysisReport, top: int) -> None:
    breakdown = report.breakdown
    summary = report.summary

    overall_color = _get_score_color(report.overall_score)
    console.print(
        f"\n[bold]Overall score:[/bold] "
        f"[{overall_color}]{report.overall_score}/100[/{overall_color}]"
    )
    console.print(
        f"Health: [bold]{summary.health_status.value}[/bold]  "
        f"Risk: [bold]{summary.risk_level.value}[/bold]\n"
    )

    console.print(_dimension_table("Technical", breakdown.technical))
    console.print()
    console.print(_dimension_table("Financial", breakdown.financial))

    savings = summary.potential_savings
    console.print(
        f"\n[bold]Potential annual savings:[/bold] [green]${savings.total:,.0f}[/green] "
        f"(immediate ${savings.immediate:,.0f}, short term ${savings.short_term:,.0f}, "
        f"long term ${savings.long_term:,.0f})"
    )

    if report.recommendations:
        console.print()
        shown = report.recommendations[:top]
        console.print(
            _recommendation_table(
                f"Top {len(shown)} of {len(report.recommendations)} Recommendations", shown
            )
        )
    else:
        console.print("\n[green]No recommendations. The org looks healthy.[/green]")


@app.command()
def analyze(
    bundle: str = typer.Argument(..., help="Path to a metric bundle JSON file"),
    config: str = typer.Option(None, "--config", "-c", help="Scoring config JSON file"),
    format: str = typer.Option("table", "--format", "-f", help="Output format (table, json)"),
    output: str = typer.Option(None, "--output", "-o", help="Write the JSON report to this file"),
    top: int = typer.Option(5, "--top", "-n", help="Number of recommendations to display"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Score a metric bundle and show the analysis report."""
    _configure_logging(verbose)

    if format not in ("table", "json"):
        console.print(f"[red]Error:[/red] Unsupported format '{format}'. Use 'table' or 'json'.")
        raise typer.Exit(1)

    scoring_config = _load_config_or_exit(config)
    raw = _load_bundle_or_exit(bundle)

    engine = ScoringEngine(scoring_config)
    report = engine.analyze(raw)

    if output:
        try:
            output_path = save_report(report, output)
        except OSError as e:
            console.print(f"[red]Error:[/red] Could not write report: {e}")
            raise typer.Exit(1)
        if format == "table":
            console.print(f"[green]Saved report to {output_path}[/green]")

    if format == "json":
        typer.echo(json.dumps(report_to_dict(report), indent=2))
    else:
        _print_report(report, top)


@app.command()
def recommendations(
    bundle: str = typer.Argument(..., help="Path to a metric bundle JSON file"),
    priority: str = typer.Option(
        None, "--priority", "-p", help="Only show one priority (critical, high, medium, low)"
    ),
    limit: int = typer.Option(None, "--limit", "-n", help="Maximum recommendations to show"),
    config: str = typer.Option(None, "--config", "-c", help="Scoring config JSON file"),
) -> None:
    """List consolidated recommendations for a metric bundle, most urgent first."""
    _configure_logging()

    priority_filter = None
    if priority:
        try:
            priority_filter = Priority(priority.lower())
        except ValueError:
            console.print(
                f"[red]Error:[/red] Invalid priority '{priority}'. "
                "Must be: critical, high, medium, low"
            )
            raise typer.Exit(1)

    scoring_config = _load_config_or_exit(config)
    raw = _load_bundle_or_exit(bundle)

    engine = ScoringEngine(scoring_config)
    recs = engine.recommend(normalize_bundle(raw))
    if priority_filter:
        recs = filter_by_priority(recs, priority_filter)

    if not recs:
        console.print("[yellow]No recommendations found.[/yellow]")
        return

    total = len(recs)
    if limit is not None:
        recs = recs[:limit]

    console.print(_recommendation_table(f"Recommendations ({len(recs)} of {total})", recs))

    total_effort = sum(rec.effort for rec in recs)
    total_savings = sum(rec.monthly_savings or 0 for rec in recs)
    console.print(
        f"\nEstimated effort: [bold]{total_effort:g}h[/bold]  "
        f"Monthly savings: [green]${total_savings:,.0f}[/green]"
    )


@app.command()
def weights(
    config: str = typer.Option(None, "--config", "-c", help="Scoring config JSON file"),
) -> None:
    """Show the category weights and dimension shares in use."""
    _configure_logging()
    scoring_config = _load_config_or_exit(config)

    table = Table(title="Category Weights")
    table.add_column("Dimension", style="cyan")
    table.add_column("Category")
    table.add_column("Weight", justify="right", style="magenta")

    for weight_table, share in (
        (scoring_config.technical_weights, scoring_config.technical_share),
        (scoring_config.financial_weights, scoring_config.financial_share),
    ):
        dimension = f"{weight_table.dimension.value} ({share:.0%})"
        for category, weight in weight_table.weights.items():
            table.add_row(dimension, category.label, f"{weight:.2f}")
            dimension = ""

    console.print(table)


if __name__ == "__main__":
    app()
