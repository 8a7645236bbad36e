"""
Tests for the SnapshotCollector and snapshot providers.

Covers:
- Concurrent collection into DomainSnapshots
- A raising provider degrades only its own domain
- A slow provider times out and degrades
- Unknown domains rejected at construction
- Sync and async callables behind CallableSnapshotProvider
"""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from sal_progress.lib.exceptions import ConfigurationError
from sal_progress.models.records import JournalEntry
from sal_progress.providers.collector import SnapshotCollector
from sal_progress.providers.protocol import (
    CallableSnapshotProvider,
    InMemorySnapshotProvider,
    SnapshotProvider,
)


class SlowProvider:
    """Never answers within the collector timeout."""

    async def fetch_all(self) -> list[Any]:
        await asyncio.sleep(10)
        return []


class FailingProvider:
    async def fetch_all(self) -> list[Any]:
        raise ConnectionError("storage offline")


JOURNAL = [{"id": "j1", "wordCount": 300, "date": "2026-03-15T09:00:00"}]


class TestProviders:
    def test_protocol_conformance(self) -> None:
        assert isinstance(InMemorySnapshotProvider(), SnapshotProvider)
        assert isinstance(CallableSnapshotProvider(list), SnapshotProvider)
        assert isinstance(SlowProvider(), SnapshotProvider)

    @pytest.mark.asyncio
    async def test_in_memory_returns_copy(self) -> None:
        provider = InMemorySnapshotProvider(JOURNAL)
        first = await provider.fetch_all()
        first.clear()
        assert await provider.fetch_all() == JOURNAL

    @pytest.mark.asyncio
    async def test_callable_sync(self) -> None:
        provider = CallableSnapshotProvider(lambda: JOURNAL)
        assert await provider.fetch_all() == JOURNAL

    @pytest.mark.asyncio
    async def test_callable_async(self) -> None:
        async def fetch() -> list[dict[str, Any]]:
            return JOURNAL

        provider = CallableSnapshotProvider(fetch)
        assert await provider.fetch_all() == JOURNAL


class TestSnapshotCollector:
    def test_unknown_domain_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="horoscope"):
            SnapshotCollector({"horoscope": InMemorySnapshotProvider()})

    @pytest.mark.asyncio
    async def test_collects_all(self) -> None:
        collector = SnapshotCollector(
            {
                "journal": InMemorySnapshotProvider(JOURNAL),
                "goals": InMemorySnapshotProvider([{"id": "g", "progress": 30}]),
            }
        )
        snapshots = await collector.collect()
        assert collector.domains == ["journal", "goals"]
        assert snapshots.journal == (
            JournalEntry.model_validate(JOURNAL[0]),
        )
        assert snapshots.goals[0].progress == 30
        assert snapshots.tasks == ()
        assert snapshots.degraded == frozenset()

    @pytest.mark.asyncio
    async def test_failure_degrades_one_domain(self) -> None:
        collector = SnapshotCollector(
            {
                "journal": InMemorySnapshotProvider(JOURNAL),
                "tasks": FailingProvider(),
            }
        )
        snapshots = await collector.collect()
        assert snapshots.degraded == frozenset({"tasks"})
        assert snapshots.tasks == ()
        assert len(snapshots.journal) == 1

    @pytest.mark.asyncio
    async def test_timeout_degrades(self) -> None:
        collector = SnapshotCollector(
            {
                "journal": InMemorySnapshotProvider(JOURNAL),
                "vocabulary": SlowProvider(),
            },
            timeout=0.05,
        )
        snapshots = await collector.collect()
        assert snapshots.degraded == frozenset({"vocabulary"})
        assert len(snapshots.journal) == 1

    @pytest.mark.asyncio
    async def test_fetch_reports_reason(self) -> None:
        collector = SnapshotCollector({"tasks": FailingProvider()})
        error = await collector._fetch("tasks", FailingProvider())
        assert error.domain == "tasks"
        assert error.reason == "storage offline"

    @pytest.mark.asyncio
    async def test_no_providers(self) -> None:
        snapshots = await SnapshotCollector({}).collect()
        assert snapshots.journal == ()
        assert snapshots.degraded == frozenset()
