"""CLI commands for commit-helper."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from commit_helper.config import Config, load_config
from commit_helper.git_ops import GitError
from commit_helper.logging import configure_logging
from commit_helper.models import ActionTag, DispatchMode, DispatchResult
from commit_helper.prompts import ConsolePrompter, PromptCancelled
from commit_helper.session import SessionBusyError, WorkflowSession
from commit_helper.workflow import CommitWorkflow

app = typer.Typer(
    name="commit-helper",
    help="Build structured [ACTION] module: description commit messages",
    no_args_is_help=True,
)
console = Console()


def _print_error(message: str) -> None:
    """Print an error message and exit."""
    console.print(f"[red]✗[/red] {message}")
    raise typer.Exit(1)


def _print_warning(message: str) -> None:
    console.print(f"[yellow]⚠[/yellow] {message}")


def _print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def _session() -> WorkflowSession:
    return WorkflowSession(Config.get_session_path())


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    """Configure logging before any command runs."""
    configure_logging(verbose=verbose or load_config().verbose)


@app.command()
def create(
    root: Optional[Path] = typer.Option(
        None, "--root", "-r", help="Scan this directory for repositories",
        exists=True, file_okay=False, dir_okay=True,
    ),
    dispatch: Optional[DispatchMode] = typer.Option(
        None, "--dispatch", "-d", case_sensitive=False,
        help="Print the git command (terminal) or run it (execute)",
    ),
    action: Optional[str] = typer.Option(None, "--action", "-a", help="Action tag, e.g. FIX"),
    module: Optional[str] = typer.Option(None, "--module", "-m", help="Affected module"),
    short: Optional[str] = typer.Option(None, "--short", "-s", help="Short description"),
    long: Optional[str] = typer.Option(None, "--long", "-l", help="Long description"),
) -> None:
    """Interactively build a commit message and commit."""
    config = load_config()
    workflow = CommitWorkflow(ConsolePrompter(console), _session(), config)
    try:
        result = workflow.run(
            root,
            action=action,
            module=module,
            short_description=short,
            long_description=long,
            mode=dispatch,
        )
    except SessionBusyError:
        _print_warning(
            "A commit is already being created. Run 'commit-helper cancel' to reset it."
        )
        raise typer.Exit(1)
    except PromptCancelled as e:
        _print_warning(str(e))
        return
    except GitError as e:
        _print_error(str(e))
        return
    except OSError as e:
        _print_error(f"Failed to scan for repositories: {e}")
        return
    except ValueError as e:
        _print_error(f"Invalid commit message: {e}")
        return

    _print_result(result)


def _print_result(result: DispatchResult) -> None:
    """Show the composed message and what happened to it."""
    console.print(Panel(Text(result.message.strip()), title="Commit message", border_style="blue"))
    if result.commit_hash:
        _print_success(f"Committed in {result.repository} ([cyan]{result.commit_hash}[/cyan])")
        return
    if result.repository is not None:
        console.print(f"[dim]Run this in {result.repository}:[/dim]")
    # Plain print so the command can be piped or copied verbatim.
    print(result.command)


@app.command()
def cancel() -> None:
    """Cancel the commit workflow in progress."""
    if _session().cancel():
        _print_success("Commit creation cancelled")
    else:
        _print_warning("No commit is being created.")


@app.command()
def actions() -> None:
    """List the available action tags."""
    table = Table(title="Commit Actions")
    table.add_column("Tag", style="cyan", no_wrap=True)
    table.add_column("Use for", style="white")
    for tag in ActionTag:
        table.add_row(tag.value, tag.description)
    console.print(table)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
