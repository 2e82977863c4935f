"""CLI interface for Deck Meta Analyzer."""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from deckmeta.analysis.meta_engine import MetaEngine
from deckmeta.config import DEFAULT_CONFIG_PATH, EngineConfig
from deckmeta.models.deck import Deck, MatchupTable
from deckmeta.models.meta import TimeSeriesPoint
from deckmeta.scoring.tiers import TierClassifier, group_by_tier

app = typer.Typer(
    name="deckmeta",
    help="Deck Meta Analyzer - Environment-adaptive meta scoring for competitive decks",
)
console = Console()


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def load_snapshot(path: str) -> tuple[list[Deck], MatchupTable]:
    """
    Load a field snapshot from JSON.

    Expected shape::

        {"decks": [{"name": ..., "share": ..., "win_rate": ...}, ...],
         "matchups": {"Deck A": {"Deck B": 55.0, ...}, ...}}

    ``matchups`` may also be a list of ``[deck, [[opponent, rate], ...]]``.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object with \"decks\"")

    decks = [Deck.from_dict(d) for d in data.get("decks", [])]

    raw_matchups = data.get("matchups") or {}
    if isinstance(raw_matchups, dict):
        matchups = MatchupTable.from_nested(raw_matchups)
    else:
        matchups = MatchupTable.from_pairs(raw_matchups)

    return decks, matchups


def load_history(paths: list[str]) -> list[TimeSeriesPoint]:
    """Load historical snapshots, oldest first as given."""
    history = []
    for path in paths:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a JSON object with \"decks\"")
        point = TimeSeriesPoint.from_dict(data)
        if not point.timestamp:
            point = TimeSeriesPoint(timestamp=Path(path).stem, decks=point.decks)
        history.append(point)
    return history


def load_config(config_path: Optional[str]) -> EngineConfig:
    """Load config from an explicit path, the default file, or built-in defaults."""
    if config_path:
        return EngineConfig.from_config(config_path)
    if Path(DEFAULT_CONFIG_PATH).exists():
        return EngineConfig.from_config(DEFAULT_CONFIG_PATH)
    return EngineConfig()


@app.command()
def analyze(
    snapshot_path: str = typer.Argument(..., help="Snapshot JSON with decks and matchups"),
    coverage: Optional[float] = typer.Option(
        None,
        "--coverage", "-c",
        help="Analyze the top decks covering this share % (default from config)",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Scoring config YAML (default: config/scoring.yaml)",
    ),
    history: Optional[list[str]] = typer.Option(
        None,
        "--history",
        help="Historical snapshot JSON, oldest first (repeatable)",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the full snapshot as JSON",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable verbose logging",
    ),
):
    """
    Analyze a field snapshot and recommend a lineup.

    Example:
        deckmeta analyze data/2024-06-01.json --coverage 80
    """
    setup_logging(verbose)

    try:
        config = load_config(config_path)
        decks, matchups = load_snapshot(snapshot_path)
        points = load_history(history) if history else None
    except (OSError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Failed to load input:[/red] {e}")
        raise typer.Exit(1)

    engine = MetaEngine.from_coverage(decks, matchups, coverage, config=config)

    if as_json:
        snapshot = engine.analyze(history=points)
        console.print_json(json.dumps(snapshot.to_dict()))
        return

    console.print(f"\n[bold blue]Deck Meta Analyzer[/bold blue]")
    console.print(f"Snapshot: [green]{snapshot_path}[/green]\n")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Starting analysis...", total=None)

        def progress_callback(step: int, total: int, message: str):
            progress.update(task, description=f"[{step}/{total}] {message}")

        snapshot = engine.analyze(history=points, progress_callback=progress_callback)

    console.print("\n[bold]Analysis Complete![/bold]\n")
    console.print(
        f"Decks: {snapshot.deck_count} | Coverage: {snapshot.coverage:.1f}% | "
        f"Matchups: {snapshot.matchup_count:,}\n"
    )

    # Tier table
    table = Table(title="Deck Rankings")
    table.add_column("Rank", style="cyan")
    table.add_column("Deck", style="green")
    table.add_column("Tier", justify="center")
    table.add_column("Expected", justify="right")
    table.add_column("Share", justify="right")
    table.add_column("Confidence", justify="right")
    table.add_column("Stability", justify="right")
    table.add_column("Meta", justify="right")

    rank = 0
    for tier, analyses in group_by_tier(snapshot.analyses).items():
        for a in analyses:
            rank += 1
            table.add_row(
                str(rank),
                a.name,
                f"{tier} ({TierClassifier.describe(tier)})",
                f"{a.expected_win_rate:.2f}%",
                f"{a.share:.1f}%",
                f"{a.confidence_level:.0%}",
                f"{a.stability:.2f}",
                f"{a.meta_score:.1f}" if a.meta_score is not None else "-",
            )

    console.print(table)
    console.print()

    # Lineup
    lineup = snapshot.lineup
    if lineup:
        console.print(f"[bold]Recommended Lineup[/bold] (confidence {lineup.confidence}%)")
        console.print(f"  Main: [green]{lineup.main.name}[/green] ({lineup.main.tier})")
        console.print(f"  Sub:  {lineup.sub.name if lineup.sub else '-'}")
        console.print(f"  Meta: {lineup.meta.name if lineup.meta else '-'}")
        if lineup.favorable_matchups:
            console.print(
                "  Favorable: " + ", ".join(str(e) for e in lineup.favorable_matchups)
            )
        if lineup.unfavorable_matchups:
            console.print(
                "  Unfavorable: " + ", ".join(str(e) for e in lineup.unfavorable_matchups)
            )
        console.print()

    if snapshot.hidden_gems:
        console.print("[bold yellow]Hidden Gems:[/bold yellow]")
        for a in snapshot.hidden_gems:
            console.print(
                f"  • {a.name} - {a.expected_win_rate:.2f}% at {a.share:.1f}% share"
            )
        console.print()

    if snapshot.cycles:
        console.print("[bold magenta]Meta Cycles:[/bold magenta]")
        for cycle in snapshot.cycles[:5]:
            console.print(f"  • {cycle} (strength {cycle.strength:.2f})")
        console.print()

    diversity = snapshot.diversity
    console.print(
        f"[bold]Diversity:[/bold] Shannon {diversity.shannon:.1f} / "
        f"Simpson {diversity.simpson:.1f} ({diversity.label})"
    )
    for note in snapshot.environment.notes:
        console.print(f"  • {note}")

    prediction = snapshot.prediction
    if prediction:
        console.print(
            f"\n[bold]Trends[/bold] (confidence {prediction.confidence_level:.0%})"
        )
        console.print(f"  Rising: {', '.join(prediction.rising_decks) or '-'}")
        console.print(f"  Declining: {', '.join(prediction.declining_decks) or '-'}")

        movers = [c for c in engine.compare(points[-1].decks) if c.trend != "stable"]
        if movers:
            console.print(f"\n[bold]Since {points[-1].timestamp}:[/bold]")
            for c in movers[:5]:
                console.print(
                    f"  • {c.current.name}: {c.share_change:+.1f}% share, "
                    f"rank {c.rank_change:+d} ({c.trend})"
                )

    console.print("\n[bold green]Done![/bold green]")


@app.command()
def version():
    """Show version information."""
    from deckmeta import __version__
    console.print(f"Deck Meta Analyzer v{__version__}")


if __name__ == "__main__":
    app()
