"""
Snapshot provider interface.

Every domain collaborator exposes one read-all operation returning its own
records (mappings in the collaborator's field names, or parsed records).
Providers are injected into the engine, never looked up as module globals,
so tests can substitute in-memory fakes.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SnapshotProvider(Protocol):
    """Read-only source of one domain's records."""

    async def fetch_all(self) -> Sequence[Any]:
        """Return every record of the domain."""
        ...


class InMemorySnapshotProvider:
    """Serves a fixed list of records.

    Example:
        provider = InMemorySnapshotProvider([{"wordCount": 300, "date": "..."}])
    """

    def __init__(self, records: Sequence[Any] = ()) -> None:
        self._records = list(records)

    async def fetch_all(self) -> Sequence[Any]:
        return list(self._records)


class CallableSnapshotProvider:
    """Adapts a plain read-all function, sync or async, to SnapshotProvider."""

    def __init__(
        self, fetch: Callable[[], Sequence[Any] | Awaitable[Sequence[Any]]]
    ) -> None:
        self._fetch = fetch

    async def fetch_all(self) -> Sequence[Any]:
        result = self._fetch()
        if inspect.isawaitable(result):
            result = await result
        return result
