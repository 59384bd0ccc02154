"""
Find-or-create primitives for every Trello resource the builder touches.

Each operation lists the parent's current children, looks for one whose
natural key matches, and only creates the resource when nothing matches.
Existing resources are never updated or deleted.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Optional

from rich.console import Console
from rich.markup import escape

from .trello_api import TrelloAPI

console = Console()

# Comments count as present when an existing one starts with this many
# leading characters of the candidate text.
COMMENT_MATCH_PREFIX = 40


@dataclass
class SyncResult:
    """Tally of created vs. reused resources, per resource kind."""

    created: Counter = field(default_factory=Counter)
    reused: Counter = field(default_factory=Counter)

    def record(self, kind: str, created: bool) -> None:
        if created:
            self.created[kind] += 1
        else:
            self.reused[kind] += 1

    @property
    def total_created(self) -> int:
        return sum(self.created.values())

    @property
    def kinds(self) -> list[str]:
        return sorted(set(self.created) | set(self.reused))


class ResourceSynchronizer:
    """
    Idempotent find-or-create operations against a Trello account.

    There is no caching: every call re-reads the parent's children, and
    any HTTP failure propagates to the caller untouched.
    """

    def __init__(self, api: TrelloAPI, result: Optional[SyncResult] = None):
        self.api = api
        self.result = result or SyncResult()

    def find_or_create_workspace(self, display_name: str, description: str) -> str:
        """Return the ID of the workspace named `display_name`, creating it if needed."""
        organizations = self.api.get("/members/me/organizations")
        existing = _find(organizations, displayName=display_name)
        if existing:
            return self._reused("workspace", f"Workspace exists: {existing['id']}", existing["id"])

        created = self.api.post("/organizations", displayName=display_name, desc=description)
        return self._created("workspace", f"Workspace created: {created['id']}", created["id"])

    def find_or_create_board(self, workspace_id: str, name: str, description: str) -> str:
        """Return the ID of board `name` in the workspace, creating it without default lists."""
        existing = _find(self.api.get(f"/organizations/{workspace_id}/boards"), name=name)
        if existing:
            return self._reused("board", f"Board exists: {existing['id']}", existing["id"])

        created = self.api.post(
            "/boards",
            name=name,
            idOrganization=workspace_id,
            defaultLists=False,
            desc=description,
        )
        return self._created("board", f"Board created: {created['id']}", created["id"])

    def find_or_create_list(self, board_id: str, name: str) -> str:
        existing = _find(self.api.get(f"/boards/{board_id}/lists"), name=name)
        if existing:
            return self._reused("list", f"List exists: {name}", existing["id"])

        created = self.api.post("/lists", name=name, idBoard=board_id)
        return self._created("list", f"List created: {name}", created["id"])

    def find_or_create_label(self, board_id: str, name: str, color: str) -> str:
        """
        Return the ID of the label with this exact name and color.

        A label with the same name but a different color does not match,
        so a second label gets created next to it.
        """
        existing = _find(self.api.get(f"/boards/{board_id}/labels"), name=name, color=color)
        if existing:
            return self._reused("label", f"Label exists: {name}", existing["id"])

        created = self.api.post("/labels", idBoard=board_id, name=name, color=color)
        return self._created("label", f"Label created: {name}", created["id"])

    def find_or_create_card(
        self,
        list_id: str,
        name: str,
        description: str,
        label_ids: Optional[list[str]] = None,
    ) -> str:
        existing = _find(self.api.get(f"/lists/{list_id}/cards"), name=name)
        if existing:
            return self._reused("card", f"Card exists: {name}", existing["id"])

        created = self.api.post(
            "/cards",
            idList=list_id,
            name=name,
            desc=description,
            idLabels=",".join(label_ids or []),
        )
        return self._created("card", f"Card created: {name}", created["id"])

    def find_or_create_checklist(self, card_id: str, title: str) -> str:
        existing = _find(self.api.get(f"/cards/{card_id}/checklists"), name=title)
        if existing:
            return self._reused("checklist", f"  Checklist exists: {title}", existing["id"])

        created = self.api.post("/checklists", idCard=card_id, name=title)
        return self._created("checklist", f"  Checklist created: {title}", created["id"])

    def add_check_item(self, checklist_id: str, name: str) -> None:
        """Append `name` to the bottom of the checklist unless an item with that name exists."""
        existing = _find(self.api.get(f"/checklists/{checklist_id}/checkItems"), name=name)
        if existing:
            self.result.record("check item", created=False)
            return

        self.api.post(f"/checklists/{checklist_id}/checkItems", name=name, pos="bottom")
        self.result.record("check item", created=True)

    def add_comment_if_missing(self, card_id: str, text: str) -> None:
        """
        Post `text` as a card comment unless a similar one is already there.

        "Similar" means an existing comment starts with the first
        COMMENT_MATCH_PREFIX characters of `text`, so small edits to the
        tail of a comment do not produce a second copy.
        """
        prefix = text[:COMMENT_MATCH_PREFIX]
        actions = self.api.get(f"/cards/{card_id}/actions", filter="commentCard")

        for action in actions:
            existing_text = (action.get("data") or {}).get("text")
            if existing_text and existing_text.startswith(prefix):
                console.print("  [dim]♻️  Comment exists on card[/dim]")
                self.result.record("comment", created=False)
                return

        self.api.post(f"/cards/{card_id}/actions/comments", text=text)
        console.print("  [green]✅ Comment added[/green]")
        self.result.record("comment", created=True)

    def _reused(self, kind: str, message: str, resource_id: str) -> str:
        console.print(f"[dim]♻️  {escape(message)}[/dim]")
        self.result.record(kind, created=False)
        return resource_id

    def _created(self, kind: str, message: str, resource_id: str) -> str:
        console.print(f"[green]✅ {escape(message)}[/green]")
        self.result.record(kind, created=True)
        return resource_id


def _find(entries: list[dict], **natural_key: str) -> Optional[dict]:
    """Return the first entry whose fields all equal the natural key values."""
    for entry in entries:
        if all(entry.get(name) == value for name, value in natural_key.items()):
            return entry
    return None
