"""Entity prefix table.

The table is a flat JSON array of known entity prefix strings (``"KH0"``,
``"VP2V"``, ``"3DA"``, ...).  It is loaded once, normalized to uppercase and
kept as a ``frozenset``; nothing in hamcall ever modifies it, so a single
instance can be shared by every parser in the process.
"""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Iterable, Optional, Union

from hamcall.config import get_settings
from hamcall.exceptions import EntityTableError
from hamcall.middleware.logging import log_error, log_info


class EntityTable:
    """Read-only, case-insensitive set of entity prefix strings."""

    def __init__(self, entries: Iterable[str] = ()) -> None:
        self._entries = frozenset(entry.strip().upper() for entry in entries)

    def contains(self, candidate: Optional[str]) -> bool:
        """Return True if ``candidate`` is a known entity prefix."""
        if not candidate:
            return False
        return candidate.strip().upper() in self._entries

    def __contains__(self, candidate: object) -> bool:
        return isinstance(candidate, str) and self.contains(candidate)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(sorted(self._entries))

    def __repr__(self) -> str:
        return f"EntityTable({len(self._entries)} entries)"


def _read_entries(path: Optional[Union[str, Path]]) -> tuple[list, str]:
    if path is None:
        source = "hamcall/data/entity_prefixes.json"
        text = resources.files("hamcall").joinpath("data/entity_prefixes.json").read_text()
    else:
        source = str(path)
        text = Path(path).read_text()
    return json.loads(text), source


def load_entity_table(path: Optional[Union[str, Path]] = None) -> EntityTable:
    """Load an entity table from ``path`` or from the packaged data file.

    Raises:
        EntityTableError: if the file is missing, is not valid JSON, or is not
            a flat array of strings.
    """
    try:
        entries, source = _read_entries(path)
    except (OSError, json.JSONDecodeError) as e:
        log_error("entity_table_load_error", path=str(path), error=str(e))
        raise EntityTableError(f"Unable to load entity table: {e}") from e

    if not isinstance(entries, list) or not all(isinstance(x, str) for x in entries):
        log_error("entity_table_invalid", source=source)
        raise EntityTableError(f"Entity table {source} must be a JSON array of strings")

    table = EntityTable(entries)
    log_info("entity_table_loaded", source=source, entries=len(table))
    return table


# Create a singleton instance
_entity_table: Optional[EntityTable] = None


def get_entity_table() -> EntityTable:
    """Get the process-wide entity table, loading it on first use."""
    global _entity_table
    if _entity_table is None:
        _entity_table = load_entity_table(get_settings().entity_table)
    return _entity_table
