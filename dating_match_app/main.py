"""
Main entry point for the Dating Match Application
"""
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table

from . import __version__
from .config import configure_logging, ensure_directories, get_settings
from .database import init_db
from .models import MatchStatus
from .services.intelligence_provider import DisabledIntelligenceProvider, OllamaIntelligenceProvider
from .services.matching_service import MatchingService
from .utils.db_utils import clear_all_data, create_sample_data, get_database_stats, list_profiles

console = Console()


@click.group()
@click.version_option(version=__version__)
@click.option("--log-level", default=None, help="Override the LOG_LEVEL setting")
def main(log_level):
    """Dating Match Application - compatibility scoring and match ranking"""
    # Ensure directories exist
    ensure_directories()
    configure_logging(log_level)

    # Initialize database
    init_db()

    console.print(Panel.fit(
        "[bold magenta]Dating Match Application[/bold magenta]\n"
        "Compatibility scoring and match ranking",
        border_style="magenta"
    ))


def _build_service(no_ai: bool = False) -> MatchingService:
    provider = DisabledIntelligenceProvider() if no_ai else None
    return MatchingService(intelligence_provider=provider)


def _exit_with_error(result):
    console.print(f"[red]Error:[/red] {escape(result.error or 'Unknown error')}")
    sys.exit(1)


@main.command()
def status():
    """Show application status"""
    settings = get_settings()

    console.print("\n[bold]Application Status:[/bold]")
    console.print(f"• App Directory: {settings.app_dir}")
    console.print(f"• Database: {settings.database_url}")
    console.print(f"• Ollama Host: {settings.ollama_host}")
    console.print(f"• Scoring workers: {settings.max_scoring_workers}")
    console.print(f"• Default max results: {settings.default_max_results}")

    provider = OllamaIntelligenceProvider(settings=settings)
    available = provider.is_available()
    ollama_status = "[green]✓[/green]" if available else "[red]✗[/red]"
    console.print(f"• Ollama: {ollama_status} {provider.model_name if available else 'unavailable, fallback scoring in use'}")

    stats = get_database_stats()
    console.print(f"• Profiles: {stats['profiles']} ({stats['active_profiles']} active)")
    console.print(f"• Match outcomes: {stats['match_outcomes']}")


@main.command()
@click.argument("user_a")
@click.argument("user_b")
@click.option("--no-ai", is_flag=True, help="Use deterministic fallback scoring only")
def score(user_a, user_b, no_ai):
    """Show the detailed compatibility of two users"""
    service = _build_service(no_ai)

    with console.status("[bold green]Calculating compatibility..."):
        result = service.score_compatibility(user_a, user_b)

    if not result.success:
        _exit_with_error(result)

    _display_detailed_score(result.data)


@main.command()
@click.argument("user_id")
@click.option("--max-results", "-n", type=int, default=None, help="Number of matches to show (1-100)")
@click.option("--no-ai", is_flag=True, help="Use deterministic fallback scoring only")
def rank(user_id, max_results, no_ai):
    """Rank suggested matches for a user"""
    service = _build_service(no_ai)

    with console.status("[bold green]Ranking matches..."):
        result = service.rank_candidates(user_id, max_results=max_results)

    if not result.success:
        _exit_with_error(result)

    ranking = result.data
    if not ranking.ranked_matches:
        console.print("[yellow]No potential matches found.[/yellow]")
        return

    _display_ranked_matches(ranking)


@main.command()
@click.argument("user_id")
def learn(user_id):
    """Re-learn a user's preferences from their match history"""
    service = _build_service()
    result = service.learn_preferences(user_id)

    if not result.success:
        _exit_with_error(result)

    summary = result.data
    console.print("[green]✓[/green] Preferences updated")
    console.print(f"• Matches analyzed: {summary.matches_analyzed}")
    console.print(f"• Acceptance rate: {summary.acceptance_rate:.0%}")
    console.print(f"• Average accepted score: {summary.average_accepted_score:.1f}")
    console.print(f"• Learning sessions: {summary.learning_session_count}")

    if summary.interest_weights:
        table = Table(title="Interest Weights")
        table.add_column("Interest", style="cyan")
        table.add_column("Weight", justify="right", style="green")
        for interest, weight in sorted(summary.interest_weights.items(), key=lambda item: (-item[1], item[0])):
            table.add_row(interest, f"{weight:.2f}")
        console.print(table)


@main.command()
@click.argument("user_id")
@click.argument("other_user_id")
@click.option("--status", "match_status", required=True,
              type=click.Choice([choice.value for choice in MatchStatus]),
              help="Outcome of the match")
@click.option("--score", "compatibility_score", required=True, type=int, help="Compatibility score of the match")
def record(user_id, other_user_id, match_status, compatibility_score):
    """Record the outcome of a match"""
    service = _build_service()
    result = service.record_match_outcome(user_id, other_user_id, MatchStatus(match_status), compatibility_score)

    if not result.success:
        _exit_with_error(result)

    preferences = result.data
    console.print(f"[green]✓[/green] Recorded {match_status} match")
    console.print(f"• Acceptances: {preferences.match_acceptance_count}")
    console.print(f"• Rejections: {preferences.match_rejection_count}")


@main.command()
def profiles():
    """List all profiles"""
    all_profiles = list_profiles()

    if not all_profiles:
        console.print("[yellow]No profiles found.[/yellow]")
        return

    table = Table(title="Profiles")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="bold")
    table.add_column("Age", justify="right")
    table.add_column("Location", style="green")
    table.add_column("Interests", style="blue")
    table.add_column("Active", justify="center")

    for profile in all_profiles:
        table.add_row(
            profile.id,
            profile.full_name,
            str(profile.age) if profile.age is not None else "-",
            profile.location or "-",
            ", ".join(sorted(profile.interest_tags)),
            "✓" if profile.is_active else "✗",
        )

    console.print(table)


@main.command()
def seed():
    """Create sample profiles and match outcomes"""
    created = create_sample_data()
    for name, user_id in created.items():
        console.print(f"• {name}: [cyan]{user_id}[/cyan]")


@main.command()
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
def clear(yes):
    """Delete all profiles, preferences and match outcomes"""
    if not yes and not Confirm.ask("Delete all data?", default=False):
        console.print("[yellow]Aborted.[/yellow]")
        return
    clear_all_data()


def _display_detailed_score(detailed_score):
    """Display the four sub-scores and the overall score"""
    table = Table(title="Compatibility")
    table.add_column("Factor", style="cyan")
    table.add_column("Score", justify="right", style="bold")
    table.add_column("Weight", justify="right", style="blue")

    table.add_row("Interest", str(detailed_score.interest), "30%")
    table.add_row("Personality", str(detailed_score.personality), "30%")
    table.add_row("Lifestyle", str(detailed_score.lifestyle), "25%")
    table.add_row("Value", str(detailed_score.value), "15%")
    table.add_row("[bold]Overall[/bold]", f"[bold]{detailed_score.overall}[/bold]", "")

    console.print(table)
    console.print(f"Level: [bold]{detailed_score.compatibility_level}[/bold]")
    if detailed_score.fallback_used:
        console.print("[yellow]AI estimate unavailable, personality and value use fallback scoring[/yellow]")


def _display_ranked_matches(ranking):
    """Display ranked matches in a table"""
    table = Table(title=f"Matches ({len(ranking.ranked_matches)} of {ranking.total_candidates} candidates)")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Candidate", style="bold")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Base", justify="right")
    table.add_column("Adjusted", justify="right", style="bold red")
    table.add_column("Boost", justify="right", style="green")
    table.add_column("Level", style="magenta")

    for position, match in enumerate(ranking.ranked_matches, start=1):
        name = match.candidate.display_name if match.candidate and match.candidate.display_name else "-"
        table.add_row(
            str(position),
            name,
            match.candidate_id,
            str(match.base_score),
            str(match.adjusted_score),
            f"+{match.score_boost}" if match.score_boost else "0",
            match.detailed_score.compatibility_level,
        )

    console.print(table)
    if not ranking.preferences_applied:
        console.print("[dim]No learned preferences yet, scores are unboosted[/dim]")


if __name__ == "__main__":
    main()
