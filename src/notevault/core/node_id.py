"""Node identifier codec.

A node id pairs a vault id with a path relative to the vault root:

    "<vault_id>:<relative/posix/path>"

Only the first colon separates the two halves, so colons further along the
path survive a round trip. Ids without any colon are legacy ids: opaque
strings with no embedded vault reference, resolved by searching persisted
trees.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath

SEPARATOR = ":"


def normalize_path(relative_path: str) -> str:
    """Return a relative path in forward-slash form without empty segments."""
    parts = [p for p in relative_path.replace("\\", "/").split("/") if p and p != "."]
    return "/".join(parts)


def encode(vault_id: str, relative_path: str) -> str:
    """Join a vault id and a relative path into a node id."""
    return f"{vault_id}{SEPARATOR}{normalize_path(relative_path)}"


def decode(node_id: str) -> tuple[str | None, str]:
    """Split a node id into (vault_id, relative_path).

    Legacy ids come back as (None, node_id).
    """
    vault_id, sep, path = node_id.partition(SEPARATOR)
    if not sep:
        return None, node_id
    return vault_id, path


@dataclass(frozen=True)
class NodeId:
    """Value type for a node identifier.

    `path` is the vault-relative path in posix form for vault-scoped ids, or
    the whole opaque string for legacy ids (vault_id is None).
    """

    vault_id: str | None
    path: str

    @classmethod
    def parse(cls, text: str) -> NodeId:
        vault_id, path = decode(text)
        return cls(vault_id, path)

    @classmethod
    def for_path(cls, vault_id: str, relative_path: str | PurePosixPath) -> NodeId:
        return cls(vault_id, normalize_path(str(relative_path)))

    @classmethod
    def from_path(cls, vault_id: str, root: Path, path: Path) -> NodeId:
        """Build the id of `path`, which must live under `root`."""
        return cls.for_path(vault_id, path.relative_to(root).as_posix())

    @property
    def is_legacy(self) -> bool:
        return self.vault_id is None

    @property
    def is_root(self) -> bool:
        return not self.is_legacy and self.path == ""

    @property
    def name(self) -> str:
        return PurePosixPath(self.path).name

    def parent(self) -> NodeId | None:
        """Id of the containing folder, or None at the vault root."""
        if self.is_legacy or self.is_root:
            return None
        parent = PurePosixPath(self.path).parent
        return NodeId(self.vault_id, "" if str(parent) == "." else str(parent))

    def child(self, name: str) -> NodeId:
        if self.is_legacy:
            raise ValueError(f"Legacy id has no children: {self}")
        return NodeId.for_path(self.vault_id, f"{self.path}/{name}")

    def with_name(self, new_name: str) -> NodeId:
        """Sibling id with the last segment replaced."""
        parent = self.parent()
        if parent is None:
            raise ValueError(f"Cannot rename root or legacy id: {self}")
        return parent.child(new_name)

    def __str__(self) -> str:
        if self.vault_id is None:
            return self.path
        return f"{self.vault_id}{SEPARATOR}{self.path}"
