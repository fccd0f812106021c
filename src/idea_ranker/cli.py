"""CLI for the IdeaFit ranking engine.

Provides command-line interface for ranking quiz answers against an
idea library and for inspecting and validating libraries.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from . import __version__
from .library import LibraryLoadError, LibraryValidator, load_library
from .questions import QUIZ_QUESTIONS
from .ranker import IdeaRanker
from .schema import Candidate, ChipType, IdeaRecommendation, MatchChip, QuestionType

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="idea-ranker")
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable debug logging"
)
def main(verbose: bool):
    """IdeaFit Ranking Engine.

    Ranks a curated library of startup ideas against quiz answers and
    explains why each idea fits.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command("rank")
@click.option(
    "--library", "-l",
    required=True,
    type=click.Path(exists=True),
    help="Path to library.json"
)
@click.option(
    "--answers", "-x",
    type=click.Path(exists=True),
    help="Path to quiz answers JSON file"
)
@click.option(
    "--answer", "-a",
    multiple=True,
    help="Quiz answer (format: question_id=value, comma-separate multi-select values)"
)
@click.option(
    "--limit", "-n",
    default=None,
    type=int,
    help="Maximum number of ideas to return (default from config)"
)
@click.option(
    "--seed",
    default=None,
    type=int,
    help="Reshuffle tied scores deterministically"
)
@click.option(
    "--out", "-o",
    type=click.Path(),
    help="Output file for JSON results"
)
@click.option(
    "--json-output", "-j",
    is_flag=True,
    help="Output raw JSON instead of formatted text"
)
@click.option(
    "--details", "-d",
    is_flag=True,
    help="Show per-factor score breakdown"
)
@click.option(
    "--interactive/--no-interactive", "-i/-I",
    default=False,
    help="Prompt for quiz questions that were not answered"
)
def rank_cmd(
    library: str,
    answers: Optional[str],
    answer: tuple,
    limit: Optional[int],
    seed: Optional[int],
    out: Optional[str],
    json_output: bool,
    details: bool,
    interactive: bool,
):
    """Rank the idea library for a set of quiz answers.

    Examples:
        idea-ranker rank -l library.json -x answers.json
        idea-ranker rank -l library.json -a time_weekly=2-5 -a tech_comfort=dev
        idea-ranker rank -l library.json -a audience_access=smb,developers -n 3 -d
    """
    try:
        quiz_answers = load_answers(answers) if answers else {}
        quiz_answers.update(parse_answer_options(answer))

        if interactive and not json_output:
            quiz_answers = prompt_for_answers(quiz_answers)

        lib = load_library(library)
        ranker = IdeaRanker(lib)
        result = ranker.recommend(quiz_answers, limit=limit, seed=seed)

        if json_output:
            output_json(result, out)
        else:
            console.print(f"\n[bold blue]IdeaFit Ranking Engine[/bold blue]")
            console.print(f"Library: {library} ({lib.total_candidates} ideas)")
            console.print(f"Answers provided: {len(quiz_answers)}\n")
            display_recommendation(result, details)
            if out:
                output_json(result, out)
                console.print(f"\n[green]Results saved to {out}[/green]")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("questions")
def questions_cmd():
    """Show the quiz questions and their valid answers."""
    console.print(f"\n[bold]Quiz Questions ({len(QUIZ_QUESTIONS)}):[/bold]\n")

    for i, q in enumerate(QUIZ_QUESTIONS, 1):
        tag = " [dim](personalization)[/dim]" if q.personalization else ""
        console.print(f"[bold cyan]{i}. {q.question}[/bold cyan]{tag}")
        console.print(f"   ID: {q.id} ({q.type.value})")
        if q.options:
            console.print("   Options:")
            for opt in q.options:
                console.print(f"     - {opt.value}: {opt.label}")
        console.print()


@main.command("inspect")
@click.option(
    "--library", "-l",
    required=True,
    type=click.Path(exists=True),
    help="Path to library.json"
)
@click.option(
    "--id", "idea_id",
    help="Show details for a specific idea ID"
)
@click.option(
    "--track", "-t",
    help="Filter by track ID"
)
def inspect_cmd(library: str, idea_id: Optional[str], track: Optional[str]):
    """Inspect the idea library.

    View library contents and filter by track.
    """
    try:
        lib = load_library(library)

        console.print(f"\n[bold blue]Idea Library[/bold blue]")
        console.print(f"Version: {lib.version}")
        console.print(f"Total Ideas: {lib.total_candidates}")
        console.print(f"Tracks: {len(lib.tracks)}")
        console.print()

        if idea_id:
            candidate = lib.get_candidate(idea_id)
            if not candidate:
                console.print(f"[red]Idea not found: {idea_id}[/red]")
                sys.exit(1)
            display_candidate_detail(candidate, lib.get_track(candidate.track_id or ""))
            return

        filtered = lib.candidates
        if track:
            track_lower = track.lower()
            filtered = [c for c in filtered if (c.track_id or "").lower() == track_lower]

        console.print(f"Showing {len(filtered)} ideas:\n")

        table = Table(show_header=True, header_style="bold")
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("Name")
        table.add_column("Track")
        table.add_column("Pricing")
        table.add_column("Evidence")

        for c in filtered[:20]:  # Limit display
            table.add_row(
                c.id[:30],
                c.name[:40],
                c.track_id or "-",
                c.pricing_model.value if c.pricing_model else "-",
                f"{len(c.competitors)} comp / {len(c.voc_quotes)} voc",
            )

        console.print(table)

        if len(filtered) > 20:
            console.print(f"\n[dim]... and {len(filtered) - 20} more[/dim]")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("validate")
@click.option(
    "--library", "-l",
    required=True,
    type=click.Path(),
    help="Path to library.json"
)
@click.option(
    "--strict",
    is_flag=True,
    help="Fail on data quality issues, not just load errors"
)
def validate_cmd(library: str, strict: bool):
    """Validate an idea library.

    Load errors (bad JSON, empty library, duplicate ids) always fail.
    Data quality issues fail only with --strict.

    Examples:
        idea-ranker validate -l library.json
        idea-ranker validate -l library.json --strict
    """
    try:
        lib = load_library(library)
    except LibraryLoadError as e:
        console.print(f"[red]✗ Library invalid: {library}[/red]")
        console.print(f"  - {e}")
        sys.exit(1)

    report = LibraryValidator().validate(lib)
    quality = report.quality

    console.print(f"[green]✓ Library loads: {library}[/green]")
    console.print(Panel(
        f"Competitors: {quality.competitor_coverage}\n"
        f"VoC quotes: {quality.voc_coverage}\n"
        f"MVP in: {quality.mvp_in_coverage}\n"
        f"MVP out: {quality.mvp_out_coverage}\n"
        f"Wedge: {quality.wedge_coverage}\n"
        f"Passing: {quality.passing_candidates}/{quality.total_candidates}",
        title="Data Quality",
    ))

    if report.errors:
        console.print(f"\n[yellow]Quality issues ({len(report.errors)}):[/yellow]")
        for error in report.errors:
            console.print(f"  - {error}")

    sys.exit(1 if strict and not report.valid else 0)


@main.command("init-config")
@click.option(
    "--out", "-o",
    type=click.Path(),
    default="ranker-config.yaml",
    help="Output path for the configuration file"
)
@click.option(
    "--force", "-f",
    is_flag=True,
    help="Overwrite existing config file"
)
def init_config_cmd(out: str, force: bool):
    """Generate a default ranker configuration file.

    Example:
        idea-ranker init-config --out my-config.yaml
    """
    from .config import save_default_config

    out_path = Path(out)
    if out_path.exists() and not force:
        console.print(f"[red]Error:[/red] Config file already exists: {out}")
        console.print("Use --force to overwrite")
        sys.exit(1)

    try:
        save_default_config(out_path)
        console.print(f"[green]✓[/green] Config file created: {out}")
        console.print("\nThis file configures:")
        console.print("  • ranking - Default result count, results window and fallback labels")
        console.print("  • confidence_thresholds - Score gaps for High/Medium/Low confidence")
        console.print("  • match_chips - How many chips of each kind to show")
        console.print("  • library_quality - Minimum evidence and scope per idea")
        console.print("\nThe ranker will look for config in this order:")
        console.print("  1. IDEA_RANKER_CONFIG environment variable")
        console.print("  2. ./ranker-config.yaml (current directory)")
        console.print("  3. ~/.config/idea-ranker/config.yaml")
    except Exception as e:
        console.print(f"[red]Error creating config:[/red] {e}")
        sys.exit(1)


def load_answers(path: str) -> dict[str, Any]:
    """Load quiz answers from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise click.BadParameter("Answers file must contain a JSON object", param_hint="--answers")
    return data


def parse_answer_options(options: tuple) -> dict[str, Any]:
    """Parse repeated -a question_id=value options."""
    answers: dict[str, Any] = {}
    multi_ids = {q.id for q in QUIZ_QUESTIONS if q.type == QuestionType.MULTI}

    for opt in options:
        if "=" not in opt:
            continue
        key, value = opt.split("=", 1)
        key = key.strip()
        if key in multi_ids:
            answers[key] = [v.strip() for v in value.split(",") if v.strip()]
        else:
            answers[key] = value.strip()
    return answers


def prompt_for_answers(existing_answers: dict[str, Any]) -> dict[str, Any]:
    """Interactively prompt for quiz questions not yet answered."""
    answers = existing_answers.copy()
    pending = [
        q for q in QUIZ_QUESTIONS
        if q.id not in answers and q.type != QuestionType.TEXT
    ]
    if not pending:
        return answers

    console.print("\n[bold yellow]━━━ Quiz ━━━[/bold yellow]")
    console.print("[dim]Press enter to keep the default.[/dim]\n")

    for i, q in enumerate(pending, 1):
        choice_map = {str(idx): opt.value for idx, opt in enumerate(q.options, 1)}

        console.print(f"[bold cyan]{i}. {q.question}[/bold cyan]")
        for idx, opt in enumerate(q.options, 1):
            console.print(f"   [bold]{idx}[/bold]. {opt.label}")
        console.print()

        hint = "comma-separated numbers" if q.type == QuestionType.MULTI else f"1-{len(q.options)}"
        try:
            raw_answer = click.prompt(f"   Select [{hint}]", default="", show_default=False)
        except click.Abort:
            console.print("\n[yellow]Skipping remaining questions...[/yellow]")
            break

        selected = [
            choice_map.get(part.strip(), part.strip())
            for part in raw_answer.split(",") if part.strip()
        ]
        if not selected:
            continue
        answers[q.id] = selected if q.type == QuestionType.MULTI else selected[0]
        console.print(f"   [green]✓ Selected: {', '.join(selected)}[/green]\n")

    console.print("[bold yellow]━━━━━━━━━━━━[/bold yellow]\n")
    return answers


def format_chips(chips: list[MatchChip]) -> str:
    """Render chips as inline colored tags."""
    parts = []
    for chip in chips:
        if chip.type == ChipType.MATCH:
            parts.append(f"[green]✓ {chip.label}[/green]")
        else:
            parts.append(f"[magenta]⊘ {chip.label}[/magenta]")
    return "  ".join(parts)


def display_recommendation(result: IdeaRecommendation, details: bool):
    """Display a recommendation in formatted text."""
    ranking = result.ranking
    confidence = result.confidence
    confidence_color = {
        "high": "green",
        "medium": "yellow",
        "low": "red",
    }.get(confidence.level.value, "white")

    winner = ranking.ranked_ideas[0]
    console.print(Panel(
        f"Top Match: [bold cyan]{winner.name}[/bold cyan] ({winner.score})\n"
        f"Track: {ranking.fit_track}\n"
        f"Confidence: [{confidence_color}]{confidence.level.value.title()}[/{confidence_color}]"
        f" - {confidence.explanation}",
        title="Ranking Summary",
    ))

    if result.winner_chips:
        console.print(f"\n[bold]Why this matches you:[/bold] {format_chips(result.winner_chips)}")

    console.print("\n[bold]Top Ideas:[/bold]\n")

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Idea", style="cyan")
    table.add_column("Track")
    table.add_column("Score", justify="right")
    table.add_column("Why")

    for i, idea in enumerate(ranking.ranked_ideas, 1):
        table.add_row(str(i), idea.name, idea.track, str(idea.score), idea.reason)

    console.print(table)

    if details:
        for idea in ranking.ranked_ideas:
            if idea.breakdown:
                display_breakdown(idea)

    if result.runner_up:
        console.print(
            f"\n[bold]Runner-up:[/bold] [cyan]{result.runner_up.name}[/cyan] "
            f"({result.runner_up.track}, {result.runner_up.score})"
        )
        if result.runner_up_chips:
            console.print(f"  {format_chips(result.runner_up_chips)}")

    if result.wildcard:
        console.print(
            f"\n[bold]Wildcard:[/bold] [cyan]{result.wildcard.name}[/cyan] "
            f"(#{result.wildcard_rank}, {result.wildcard.track}, {result.wildcard.score})"
        )
        if result.wildcard_chips:
            console.print(f"  {format_chips(result.wildcard_chips)}")


def display_breakdown(idea):
    """Display the per-factor breakdown for a ranked idea."""
    tree = Tree(f"[bold cyan]{idea.name}[/bold cyan] [bold]{idea.score}[/bold]")
    for factor in idea.breakdown.factors:
        label = f"{factor.factor.value}: {factor.points}/{factor.max_points}"
        if factor.reason:
            label += f" [dim]- {factor.reason}[/dim]"
        tree.add(label)
    console.print(tree)


def display_candidate_detail(candidate: Candidate, track=None):
    """Display detailed idea information."""
    tree = Tree(f"[bold cyan]{candidate.name}[/bold cyan]")

    identity = tree.add("[bold]Identity[/bold]")
    identity.add(f"ID: {candidate.id}")
    identity.add(f"Status: {candidate.status}")
    identity.add(f"Track: {track.name if track else candidate.track_id or '-'}")

    pitch = tree.add("[bold]Pitch[/bold]")
    if candidate.wedge:
        pitch.add(f"Wedge: {candidate.wedge}")
    if candidate.audience:
        pitch.add(f"Audience: {candidate.audience}")
    if candidate.description:
        pitch.add(f"Description: {candidate.description}")

    build = tree.add("[bold]Build & Pricing[/bold]")
    if candidate.timebox_minutes is not None:
        build.add(f"Timebox: {candidate.timebox_minutes} minutes")
    elif candidate.timebox_days is not None:
        build.add(f"Timebox: {candidate.timebox_days} days")
    build.add(f"Pricing: {candidate.pricing_model.value if candidate.pricing_model else '-'} {candidate.pricing_range}")

    if candidate.competitors:
        competitors = tree.add("[bold]Competitors[/bold]")
        for comp in candidate.competitors:
            competitors.add(f"{comp.name} ({comp.price or 'n/a'}) - gap: {comp.gap or 'n/a'}")

    if candidate.voc_quotes:
        quotes = tree.add("[bold]Voice of Customer[/bold]")
        for q in candidate.voc_quotes:
            quotes.add(f"{q.pain_tag or 'quote'}: {q.quote or q.url}")

    console.print(tree)


def output_json(result: IdeaRecommendation, out_path: Optional[str]):
    """Output result as JSON."""
    json_str = result.model_dump_json(indent=2)

    if out_path:
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(json_str)
    else:
        print(json_str)


if __name__ == "__main__":
    main()
