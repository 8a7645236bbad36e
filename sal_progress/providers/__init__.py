"""
Providers package: the boundary to the domain collaborators.

- protocol.py: SnapshotProvider protocol and simple adapters
- collector.py: Concurrent fan-out/fan-in with per-domain degradation
"""

from __future__ import annotations

from .collector import SnapshotCollector
from .protocol import CallableSnapshotProvider, InMemorySnapshotProvider, SnapshotProvider

__all__ = [
    "SnapshotProvider",
    "InMemorySnapshotProvider",
    "CallableSnapshotProvider",
    "SnapshotCollector",
]
