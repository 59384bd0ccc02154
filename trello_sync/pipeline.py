"""
Build pipeline that mirrors a BoardPlan onto Trello.

Orchestrates, strictly in order:
- Workspace
- Board
- Lists
- Labels
- Cards, with their dev-notes comment and checklists

Every step is idempotent, so a run that aborts partway can simply be
started again.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .content import DOD_CHECKLIST_TITLE, BoardPlan, CardSpec
from .synchronizer import ResourceSynchronizer, SyncResult
from .trello_api import TrelloAPI

console = Console()


@dataclass
class BuildContext:
    """Identifiers produced by the steps that have run so far."""

    plan: BoardPlan
    workspace_id: Optional[str] = None
    board_id: Optional[str] = None
    list_ids: dict[str, str] = field(default_factory=dict)  # list name -> id
    label_ids: dict[str, str] = field(default_factory=dict)  # label key -> id
    card_ids: dict[str, str] = field(default_factory=dict)  # card spec id -> id


@dataclass(frozen=True)
class PipelineStep:
    """A named step whose return value is stored on the context as `output`."""

    name: str
    output: str
    run: Callable[[ResourceSynchronizer, BuildContext], Any]


def ensure_workspace(sync: ResourceSynchronizer, context: BuildContext) -> str:
    plan = context.plan
    return sync.find_or_create_workspace(plan.workspace_name, plan.workspace_description)


def ensure_board(sync: ResourceSynchronizer, context: BuildContext) -> str:
    plan = context.plan
    return sync.find_or_create_board(
        context.workspace_id, plan.board_name, plan.board_description
    )


def ensure_lists(sync: ResourceSynchronizer, context: BuildContext) -> dict[str, str]:
    return {
        name: sync.find_or_create_list(context.board_id, name)
        for name in context.plan.lists
    }


def ensure_labels(sync: ResourceSynchronizer, context: BuildContext) -> dict[str, str]:
    return {
        label.key: sync.find_or_create_label(context.board_id, label.name, label.color)
        for label in context.plan.labels
    }


def ensure_cards(sync: ResourceSynchronizer, context: BuildContext) -> dict[str, str]:
    list_id = context.list_ids[context.plan.target_list]
    return {
        card.id: materialize_card(sync, context, list_id, card)
        for card in context.plan.cards
    }


def materialize_card(
    sync: ResourceSynchronizer,
    context: BuildContext,
    list_id: str,
    card: CardSpec,
) -> str:
    """
    Ensure one card and everything hanging off it exists.

    Order matters for resumability: card, dev-notes comment, the global
    Definition of Done checklist, then the card's own checklists.
    """
    label_ids = [context.label_ids[key] for key in card.labels]
    card_id = sync.find_or_create_card(
        list_id, card.board_title, card.board_description, label_ids
    )

    if card.dev_notes:
        sync.add_comment_if_missing(card_id, card.dev_notes)

    ensure_checklist(sync, card_id, DOD_CHECKLIST_TITLE, context.plan.definition_of_done)

    for checklist in card.checklists:
        ensure_checklist(sync, card_id, checklist.title, checklist.items)

    return card_id


def ensure_checklist(
    sync: ResourceSynchronizer,
    card_id: str,
    title: str,
    items,
) -> str:
    checklist_id = sync.find_or_create_checklist(card_id, title)
    for item in items:
        sync.add_check_item(checklist_id, item)
    return checklist_id


DEFAULT_STEPS = (
    PipelineStep("Workspace", "workspace_id", ensure_workspace),
    PipelineStep("Board", "board_id", ensure_board),
    PipelineStep("Lists", "list_ids", ensure_lists),
    PipelineStep("Labels", "label_ids", ensure_labels),
    PipelineStep("Cards", "card_ids", ensure_cards),
)


class BuildPipeline:
    """
    Runs an ordered list of steps against one synchronizer.

    There is no error handling here: the first exception raised by a
    step stops the pipeline and reaches the caller.
    """

    def __init__(self, steps=DEFAULT_STEPS):
        self.steps = tuple(steps)

    def run(self, sync: ResourceSynchronizer, plan: BoardPlan) -> BuildContext:
        context = BuildContext(plan=plan)

        for step in self.steps:
            console.print(f"\n[bold cyan]{step.name}[/bold cyan]")
            setattr(context, step.output, step.run(sync, context))

        return context


class BoardBuilder:
    """
    Main orchestrator for a Trello board build.

    Coordinates the components to perform the build:
    1. Validate the local plan
    2. Run the pipeline steps in order
    3. Print a summary of what was created vs. reused
    """

    def __init__(self, api: TrelloAPI, pipeline: Optional[BuildPipeline] = None):
        """
        Initialize the builder.

        Args:
            api: Trello API client (or anything with the same get/post).
            pipeline: Step sequence to run. Defaults to the full build.
        """
        self.api = api
        self.pipeline = pipeline or BuildPipeline()
        self.result = SyncResult()
        self.synchronizer = ResourceSynchronizer(api, self.result)

    def build(self, plan: BoardPlan) -> BuildContext:
        """
        Perform a full, idempotent build of `plan`.

        Raises:
            ValueError: If the plan itself is inconsistent (no remote calls
                        are made in that case).
            requests.RequestException: On the first failed API call.
        """
        plan.validate()

        console.print(
            f"\n[bold blue]🔄 Building {escape(plan.board_name)} on Trello (idempotent)[/bold blue]"
        )

        context = self.pipeline.run(self.synchronizer, plan)

        self._print_summary()
        return context

    def _print_summary(self) -> None:
        """Print build summary."""
        console.print("\n" + "=" * 50)
        console.print("[bold]Build Summary[/bold]")
        console.print("=" * 50)

        table = Table(show_header=True, box=None)
        table.add_column("Resource", style="cyan")
        table.add_column("Created", style="green", justify="right")
        table.add_column("Already present", style="white", justify="right")

        for kind in self.result.kinds:
            table.add_row(kind, str(self.result.created[kind]), str(self.result.reused[kind]))

        request_count = getattr(self.api, "request_count", None)
        if request_count is not None:
            table.add_row("API requests", str(request_count), "")

        console.print(table)
        console.print("")
