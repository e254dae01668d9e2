"""
Conteneur d'injection de dépendances.

Construit explicitement les composants à durée de vie processus (settings, limiteur GCRA,
scanner) pour les passer à `create_app`. Aucun singleton de module : les tests construisent
leurs propres instances avec de petits quotas et des fetchers factices.
"""

from __future__ import annotations

from pyversions.apigw.rate_limit import GCRARateLimiter, MemoryTATStore, RateQuota
from pyversions.core.settings import Settings, get_settings
from pyversions.domain.scanner import PageScanner
from pyversions.infra.http_clients import PageFetcher


class Container:
    def __init__(
        self,
        settings: Settings | None = None,
        limiter: GCRARateLimiter | None = None,
        scanner: PageScanner | None = None,
    ) -> None:
        self.settings = settings if settings is not None else get_settings()
        if limiter is None:
            quota = RateQuota.per_minute(
                self.settings.RATE_LIMIT_PER_MINUTE, self.settings.RATE_LIMIT_BURST
            )
            limiter = GCRARateLimiter(quota, MemoryTATStore(self.settings.RATE_LIMIT_MAX_KEYS))
        self.limiter = limiter
        self._fetcher: PageFetcher | None = None
        if scanner is None:
            self._fetcher = PageFetcher(
                timeout_s=self.settings.FETCH_TIMEOUT_S,
                user_agent=self.settings.FETCH_USER_AGENT,
            )
            scanner = PageScanner(self._fetcher)
        self.scanner = scanner

    def close(self) -> None:
        """Libère le client HTTP créé par le conteneur (pas ceux injectés)."""
        if self._fetcher is not None:
            self._fetcher.close()
