"""
Concurrent snapshot collection.

Fans out one fetch_all() per domain provider, joins them, and parses the
results into DomainSnapshots. Each fetch has its own timeout. A provider
that raises or times out degrades only its own domain to an empty snapshot
and is reported in DomainSnapshots.degraded; the other domains are unaffected.

No retries happen here; that is the provider's concern.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

import structlog

from sal_progress.config.settings import DEFAULT_SNAPSHOT_TIMEOUT
from sal_progress.engine.aggregator import DOMAIN_MODELS, DomainSnapshots
from sal_progress.lib.exceptions import ConfigurationError, SnapshotError
from sal_progress.providers.protocol import SnapshotProvider

logger = structlog.get_logger(__name__)


class SnapshotCollector:
    """Fetches every domain snapshot concurrently.

    Usage:
        collector = SnapshotCollector({"journal": journal_service, ...})
        snapshots = await collector.collect()
    """

    def __init__(
        self,
        providers: Mapping[str, SnapshotProvider],
        timeout: float = DEFAULT_SNAPSHOT_TIMEOUT,
    ) -> None:
        unknown = set(providers) - set(DOMAIN_MODELS)
        if unknown:
            raise ConfigurationError(
                f"Unknown snapshot domains: {sorted(unknown)}. "
                f"Expected a subset of {sorted(DOMAIN_MODELS)}."
            )
        self._providers = dict(providers)
        self._timeout = timeout

    @property
    def domains(self) -> list[str]:
        return list(self._providers)

    async def collect(self) -> DomainSnapshots:
        """Fetch all domains and parse them.

        Returns:
            DomainSnapshots; failed domains are empty and listed in degraded
        """
        domains = list(self._providers)
        results = await asyncio.gather(
            *(self._fetch(domain, self._providers[domain]) for domain in domains)
        )

        raw: dict[str, Any] = {}
        degraded: set[str] = set()
        for domain, result in zip(domains, results):
            if isinstance(result, SnapshotError):
                degraded.add(domain)
            else:
                raw[domain] = result

        logger.debug(
            "snapshots_collected",
            domains=len(domains),
            degraded=sorted(degraded),
        )
        return DomainSnapshots.from_raw(raw, degraded=degraded)

    async def _fetch(
        self, domain: str, provider: SnapshotProvider
    ) -> Any | SnapshotError:
        try:
            return await asyncio.wait_for(provider.fetch_all(), timeout=self._timeout)
        except TimeoutError:
            error = SnapshotError(domain, f"timed out after {self._timeout}s")
        except Exception as e:
            error = SnapshotError(domain, str(e) or type(e).__name__)
        logger.warning("snapshot_degraded", domain=domain, reason=error.reason)
        return error
