#!/usr/bin/env python3
"""
Trello Sprint Board Builder CLI

Usage:
    python sync.py              # Build (or top up) the board
    python sync.py --debug      # Build, printing tracebacks on errors
    python sync.py plan         # Show the sprint plan without calling Trello
    python sync.py version      # Show version
"""

import sys
import traceback

import click
import requests
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from trello_sync import __version__
from trello_sync.config import Config
from trello_sync.content import DOD_CHECKLIST_TITLE, SPRINT_0_PLAN
from trello_sync.pipeline import BoardBuilder
from trello_sync.trello_api import TrelloAPI, describe_error

console = Console()


@click.group(invoke_without_command=True)
@click.option("--debug", is_flag=True, help="Print tracebacks on unexpected errors")
@click.pass_context
def cli(ctx, debug: bool):
    """
    Trello Sprint Board Builder

    Creates the MazeBreak workspace, board, lists, labels and Sprint 0
    cards. Safe to re-run: existing resources are reused, never duplicated.
    """
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug

    # If no subcommand, run the build
    if ctx.invoked_subcommand is None:
        ctx.invoke(build)


@cli.command()
@click.pass_context
def build(ctx):
    """Create whatever part of the board is missing on Trello."""
    debug = ctx.obj.get("debug", False)

    try:
        config = Config.from_env()
    except ValueError as e:
        console.print(f"[red]❌ Configuration error:[/red] {escape(str(e))}")
        console.print("\n[dim]Add TRELLO_API_KEY and TRELLO_TOKEN to your environment or .env file.[/dim]")
        sys.exit(1)

    debug = debug or config.debug
    api = TrelloAPI(config)

    try:
        BoardBuilder(api).build(SPRINT_0_PLAN)
    except requests.RequestException as e:
        console.print(f"[red]❌ Trello build failed:[/red] {escape(describe_error(e))}")
        if debug:
            traceback.print_exc()
        sys.exit(1)
    except ValueError as e:
        console.print(f"[red]❌ Configuration error:[/red] {escape(str(e))}")
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Build cancelled.[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        if debug:
            traceback.print_exc()
        sys.exit(1)
    finally:
        api.close()

    console.print(
        "\n[green]✅ Sprint 0 board complete: dependencies + dev notes + DoD on every card.[/green]"
    )
    console.print("   Safe to re-run (idempotent).")


@cli.command()
def plan():
    """Show the sprint plan that a build would mirror onto Trello."""
    board_plan = SPRINT_0_PLAN

    try:
        board_plan.validate()
    except ValueError as e:
        console.print(f"[red]❌ Plan error:[/red] {escape(str(e))}")
        sys.exit(1)

    console.print(f"\n[bold]{escape(board_plan.board_name)}[/bold]")
    console.print(f"Workspace: {escape(board_plan.workspace_name)}")
    console.print(f"Lists: {escape(', '.join(board_plan.lists))}")
    console.print(
        "Labels: " + ", ".join(f"{label.name} ({label.color})" for label in board_plan.labels)
    )

    table = Table(title=f"Cards in {escape(board_plan.target_list)}")
    table.add_column("ID", style="cyan")
    table.add_column("Title", style="white")
    table.add_column("Depends on", style="yellow")
    table.add_column("Labels", style="magenta")
    table.add_column("Checklists", style="green", justify="right")

    for card in board_plan.cards:
        table.add_row(
            card.id,
            escape(card.title),
            ", ".join(card.depends_on) or "-",
            ", ".join(card.labels),
            str(len(card.checklists) + 1),
        )

    console.print(table)
    console.print(
        f"\n[dim]Every card also gets '{DOD_CHECKLIST_TITLE}' "
        f"({len(board_plan.definition_of_done)} items).[/dim]"
    )


@cli.command()
def version():
    """Show version information."""
    console.print(f"Trello Sprint Board Builder v{__version__}")


def main():
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
