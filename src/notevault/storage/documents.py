"""JSON document persistence.

Every persisted structure (registry, trees, side documents, preferences,
plugin lists) goes through this module. Reads distinguish "absent" from
"failed"; writes replace the file atomically.
"""

import json
import logging
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from threading import Lock
from typing import Any

from notevault.core.errors import MalformedDocumentError, StorageIOError

logger = logging.getLogger(__name__)

_locks: dict[Path, Lock] = {}
_locks_guard = Lock()


@dataclass(frozen=True)
class ReadResult:
    """Outcome of reading a file that may legitimately not exist."""

    text: str | None

    @classmethod
    def absent(cls) -> "ReadResult":
        return cls(None)

    @property
    def found(self) -> bool:
        return self.text is not None

    @property
    def blank(self) -> bool:
        """True when absent or whitespace only."""
        return self.text is None or not self.text.strip()

    def text_or_empty(self) -> str:
        return self.text if self.text is not None else ""


def read_text(path: Path) -> ReadResult:
    """Read a UTF-8 file; a missing file is absent, other failures raise."""
    try:
        return ReadResult(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return ReadResult.absent()
    except OSError as e:
        raise StorageIOError(f"Failed to read file ({e})", path) from e


def write_text(path: Path, content: str) -> None:
    """Write a file atomically, creating parent directories as needed."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(content)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as e:
        raise StorageIOError(f"Failed to write file ({e})", path) from e


def remove_file(path: Path) -> bool:
    """Delete a file if present. Returns True when something was removed."""
    try:
        path.unlink()
        return True
    except FileNotFoundError:
        return False
    except OSError as e:
        raise StorageIOError(f"Failed to remove file ({e})", path) from e


def _lock_for(path: Path) -> Lock:
    key = path.resolve()
    with _locks_guard:
        return _locks.setdefault(key, Lock())


class JsonDocument:
    """A whole-file JSON document read and rewritten in one piece."""

    def __init__(self, path: Path | str, indent: int | None = 2):
        self.path = Path(path)
        self.indent = indent

    def read(self, default: Any = None) -> Any:
        """Parse the document, returning `default` when absent or blank.

        Raises:
            MalformedDocumentError: If the file holds invalid JSON.
        """
        result = read_text(self.path)
        if result.blank:
            return default
        try:
            return json.loads(result.text)
        except json.JSONDecodeError as e:
            raise MalformedDocumentError(self.path, str(e)) from e

    def write(self, value: Any) -> None:
        write_text(self.path, json.dumps(value, indent=self.indent, ensure_ascii=False))

    def delete(self) -> bool:
        return remove_file(self.path)

    @contextmanager
    def update(self, default: Any) -> Iterator[Any]:
        """Read-modify-write under a per-path lock.

        The yielded value is mutated in place and written back on normal exit.
        Nothing is written if the block raises.
        """
        with _lock_for(self.path):
            value = self.read(default)
            yield value
            self.write(value)

    def __repr__(self) -> str:
        return f"JsonDocument({self.path})"


def expect_type(path: Path, value: Any, expected: type, label: str) -> Any:
    """Raise MalformedDocumentError unless `value` is an instance of `expected`."""
    if not isinstance(value, expected):
        raise MalformedDocumentError(
            path, f"expected {label}, got {type(value).__name__}"
        )
    return value
