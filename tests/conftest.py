"""Shared pytest fixtures and configuration."""

import itertools
import re
from collections import defaultdict
from typing import Any, Optional

import pytest
import requests

from trello_sync.config import Config


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")


class FakeTrello:
    """In-memory stand-in for TrelloAPI, keeping remote state between runs.

    Supports exactly the endpoints the builder uses. Every call is
    recorded in `calls` as (method, path, params).
    """

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self.organizations: list[dict[str, Any]] = []
        self.boards: dict[str, list[dict[str, Any]]] = defaultdict(list)
        self.lists: dict[str, list[dict[str, Any]]] = defaultdict(list)
        self.labels: dict[str, list[dict[str, Any]]] = defaultdict(list)
        self.cards: dict[str, list[dict[str, Any]]] = defaultdict(list)
        self.checklists: dict[str, list[dict[str, Any]]] = defaultdict(list)
        self.check_items: dict[str, list[dict[str, Any]]] = defaultdict(list)
        self.comments: dict[str, list[dict[str, Any]]] = defaultdict(list)
        self.calls: list[tuple[str, str, dict[str, Any]]] = []
        self.fail_path: Optional[str] = None

    @property
    def request_count(self) -> int:
        return len(self.calls)

    @property
    def posts(self) -> list[tuple[str, str, dict[str, Any]]]:
        return [call for call in self.calls if call[0] == "POST"]

    def close(self) -> None:
        pass

    def _new(self, **fields: Any) -> dict[str, Any]:
        return {"id": f"id{next(self._ids)}", **fields}

    def _maybe_fail(self, path: str) -> None:
        if self.fail_path and re.fullmatch(self.fail_path, path):
            response = requests.Response()
            response.status_code = 429
            response._content = b'{"message": "Rate limit exceeded"}'
            raise requests.HTTPError("429 Client Error", response=response)

    def get(self, path: str, **params: Any) -> Any:
        self.calls.append(("GET", path, params))
        self._maybe_fail(path)

        if path == "/members/me/organizations":
            return list(self.organizations)

        routes = [
            (r"/organizations/([^/]+)/boards", self.boards),
            (r"/boards/([^/]+)/lists", self.lists),
            (r"/boards/([^/]+)/labels", self.labels),
            (r"/lists/([^/]+)/cards", self.cards),
            (r"/cards/([^/]+)/checklists", self.checklists),
            (r"/checklists/([^/]+)/checkItems", self.check_items),
        ]
        for pattern, store in routes:
            match = re.fullmatch(pattern, path)
            if match:
                return list(store[match.group(1)])

        match = re.fullmatch(r"/cards/([^/]+)/actions", path)
        if match:
            assert params.get("filter") == "commentCard"
            return [
                {"id": comment["id"], "type": "commentCard", "data": {"text": comment["text"]}}
                for comment in self.comments[match.group(1)]
            ]

        raise AssertionError(f"Unexpected GET {path}")

    def post(self, path: str, **params: Any) -> Any:
        self.calls.append(("POST", path, params))
        self._maybe_fail(path)

        if path == "/organizations":
            entry = self._new(displayName=params["displayName"], desc=params.get("desc"))
            self.organizations.append(entry)
        elif path == "/boards":
            entry = self._new(name=params["name"], desc=params.get("desc"))
            self.boards[params["idOrganization"]].append(entry)
        elif path == "/lists":
            entry = self._new(name=params["name"])
            self.lists[params["idBoard"]].append(entry)
        elif path == "/labels":
            entry = self._new(name=params["name"], color=params["color"])
            self.labels[params["idBoard"]].append(entry)
        elif path == "/cards":
            id_labels = params.get("idLabels") or ""
            entry = self._new(
                name=params["name"],
                desc=params.get("desc"),
                idLabels=[label for label in id_labels.split(",") if label],
            )
            self.cards[params["idList"]].append(entry)
        elif path == "/checklists":
            entry = self._new(name=params["name"])
            self.checklists[params["idCard"]].append(entry)
        elif re.fullmatch(r"/checklists/([^/]+)/checkItems", path):
            entry = self._new(name=params["name"], state="incomplete")
            self.check_items[path.split("/")[2]].append(entry)
        elif re.fullmatch(r"/cards/([^/]+)/actions/comments", path):
            entry = self._new(text=params["text"])
            self.comments[path.split("/")[2]].append(entry)
        else:
            raise AssertionError(f"Unexpected POST {path}")

        return entry


@pytest.fixture
def fake_trello() -> FakeTrello:
    """Empty in-memory Trello account."""
    return FakeTrello()


@pytest.fixture
def config() -> Config:
    """Configuration with dummy credentials."""
    return Config(api_key="test-key", token="test-token")
