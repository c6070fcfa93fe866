"""Command-line interface for gitsetup.

Provides commands for:
- detect: Pick the profile for a repository
- match: Find profiles by partial or misspelled name
- init-config: Generate a configuration file
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from gitsetup import __version__
from gitsetup.config.defaults import write_default_config
from gitsetup.config.loader import load_config
from gitsetup.detection.detector import AutoDetector, DetectionResult
from gitsetup.exceptions import GitSetupError
from gitsetup.git.queries import GitRepository
from gitsetup.matching.matcher import MatchResult, ProfileFuzzyMatcher
from gitsetup.profiles.store import InMemoryProfileStore

app = typer.Typer(
    name="gitsetup",
    help="Git identity profile detection and lookup",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"gitsetup version {__version__}")
        raise typer.Exit()


def display_detection_results(results: list[DetectionResult]) -> None:
    table = Table(title="Detected Profiles")
    table.add_column("Profile", style="cyan")
    table.add_column("Confidence", justify="right")
    table.add_column("Rules")
    table.add_column("Reason")

    for result in results:
        rules = ", ".join(
            f"{r.rule_name} ({r.confidence:.2f})" for r in result.matched_rules
        )
        table.add_row(
            result.profile.name,
            f"{result.confidence:.2f}",
            rules,
            result.reason,
        )

    console.print(table)


def display_match_results(results: list[MatchResult]) -> None:
    table = Table(title="Matching Profiles")
    table.add_column("Profile", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Matched on")
    table.add_column("Email")

    for result in results:
        primary = result.primary_field()
        matched_on = primary.field.display_name if primary else ""
        table.add_row(
            result.profile.name,
            f"{result.score:.2f}",
            matched_on,
            result.profile.git_user_email,
        )

    console.print(table)


@app.callback()
def main(
    version: bool = typer.Option(  # noqa: B008
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Git identity profile detection and lookup."""
    pass


@app.command()
def detect(
    path: Path | None = typer.Argument(  # noqa: B008
        None,
        help="Repository directory (defaults to the current directory)",
    ),
    show_all: bool = typer.Option(  # noqa: B008
        False,
        "--all",
        "-a",
        help="Show every candidate profile, ranked",
    ),
    min_confidence: float | None = typer.Option(  # noqa: B008
        None,
        "--min-confidence",
        min=0.0,
        max=1.0,
        help="Override the minimum confidence",
    ),
    config: Path | None = typer.Option(  # noqa: B008
        None,
        "--config",
        "-c",
        help="Path to configuration file",
    ),
) -> None:
    """Detect which profile belongs to a repository."""
    try:
        settings = load_config(config)
        detection = settings.detection
        if min_confidence is not None:
            detection = detection.model_copy(update={"min_confidence": min_confidence})

        detector = AutoDetector(
            InMemoryProfileStore(settings.profiles),
            GitRepository(),
            config=detection,
        )
        results = detector.detect_all(path=path or Path.cwd())

        if not results:
            console.print("[yellow]No profile matches this repository.[/yellow]")
            console.print("Pick one explicitly with 'gitsetup match <name>'.")
            raise typer.Exit(code=1)

        if show_all:
            display_detection_results(results)
        else:
            best = results[0]
            console.print(
                f"[green]{best.profile.name}[/green] "
                f"({best.confidence:.2f}) - {best.reason}"
            )

    except GitSetupError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=e.exit_code) from None


@app.command()
def match(
    query: str = typer.Argument(..., help="Profile name or part of it"),  # noqa: B008
    best: bool = typer.Option(  # noqa: B008
        False,
        "--best",
        "-b",
        help="Print only a single high-confidence match",
    ),
    config: Path | None = typer.Option(  # noqa: B008
        None,
        "--config",
        "-c",
        help="Path to configuration file",
    ),
) -> None:
    """Find profiles by partial or misspelled name."""
    try:
        settings = load_config(config)
        matcher = ProfileFuzzyMatcher(settings.matching)

        if best:
            result = matcher.find_best_match(query, settings.profiles)
            if result is None:
                console.print(
                    f"[yellow]No single profile clearly matches '{query}'.[/yellow]"
                )
                console.print(f"Run 'gitsetup match {query}' to see candidates.")
                raise typer.Exit(code=1)
            console.print(f"[green]{result.profile.name}[/green] ({result.score:.2f})")
            return

        results = matcher.find_matches(query, settings.profiles)
        if not results:
            console.print(f"[yellow]No profiles match '{query}'.[/yellow]")
            raise typer.Exit(code=1)
        display_match_results(results)

    except GitSetupError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=e.exit_code) from None


@app.command(name="init-config")
def init_config(
    output: Path = typer.Option(  # noqa: B008
        Path("gitsetup.yml"),
        "--output",
        "-o",
        help="Output path for configuration file",
    ),
    force: bool = typer.Option(  # noqa: B008
        False,
        "--force",
        "-f",
        help="Overwrite an existing file",
    ),
) -> None:
    """Generate a default configuration file."""
    try:
        written = write_default_config(output, force=force)
        console.print(f"[green]Wrote configuration to {written}[/green]")
    except GitSetupError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=e.exit_code) from None


if __name__ == "__main__":
    app()
