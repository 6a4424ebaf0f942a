"""Shared types and data structures for notevault."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field


class NodeKind(StrEnum):
    """Kind of entry in a vault tree."""

    FOLDER = "FOLDER"
    FILE = "FILE"
    CANVAS = "CANVAS"


class Node(BaseModel):
    """One entry of a vault tree.

    Serialized with the wire names used by the tree documents ("type",
    "parentId"). Unknown keys are kept so app-managed trees round-trip
    unchanged.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str
    name: str
    kind: NodeKind = Field(alias="type")
    children: list[Node] | None = None
    content: str | None = None
    parent_id: str | None = Field(default=None, alias="parentId")

    @property
    def is_folder(self) -> bool:
        return self.kind is NodeKind.FOLDER

    def walk(self) -> Iterator[Node]:
        """Yield this node and every descendant, depth first."""
        yield self
        for child in self.children or []:
            yield from child.walk()

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON shape of tree documents."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


def walk_tree(nodes: list[Node]) -> Iterator[Node]:
    """Yield every node of a forest, depth first."""
    for node in nodes:
        yield from node.walk()


def find_node(nodes: list[Node], node_id: str) -> Node | None:
    """Return the first node whose id matches, searching the whole forest."""
    return next((n for n in walk_tree(nodes) if n.id == node_id), None)


def tree_to_json(nodes: list[Node]) -> list[dict[str, Any]]:
    return [node.to_dict() for node in nodes]


@dataclass(frozen=True)
class PathBacked:
    """Vault whose authoritative state is a real directory."""

    root: Path

    @property
    def available(self) -> bool:
        return self.root.is_dir()


@dataclass(frozen=True)
class AppManaged:
    """Vault whose tree is a persisted document in the data directory."""


VaultKind = PathBacked | AppManaged


def _now_ms() -> int:
    return int(time.time() * 1000)


class VaultDescriptor(BaseModel):
    """Registry entry for a vault.

    `backing_path` is stored under the "path" key. Only an absolute path makes
    the vault path-backed; anything else silently degrades to app-managed.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    id: str
    name: str
    backing_path: str | None = Field(default=None, alias="path")
    created_at: int = Field(default_factory=_now_ms, alias="createdAt")

    @property
    def kind(self) -> VaultKind:
        if self.backing_path:
            candidate = Path(self.backing_path)
            if candidate.is_absolute():
                return PathBacked(candidate)
        return AppManaged()

    @property
    def root(self) -> Path | None:
        kind = self.kind
        return kind.root if isinstance(kind, PathBacked) else None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


__all__ = [
    "AppManaged",
    "Node",
    "NodeKind",
    "PathBacked",
    "VaultDescriptor",
    "VaultKind",
    "find_node",
    "tree_to_json",
    "walk_tree",
]
