"""Configuration de test pour pytest avec gestion des chemins.

Ce module ajoute la racine du projet au sys.path et fournit les fixtures communes : settings
sans fichier .env, fetcher factice, horloge contrôlée et fabrique de clients HTTP de test.
"""

import os
import sys

import pytest

# Ensure project root is on sys.path so that
# imports like `from pyversions...` resolve.
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from fastapi.testclient import TestClient  # noqa: E402

from pyversions.apigw.rate_limit import GCRARateLimiter, RateQuota  # noqa: E402
from pyversions.app.main import create_app  # noqa: E402
from pyversions.core.container import Container  # noqa: E402
from pyversions.core.settings import Settings  # noqa: E402
from pyversions.domain.scanner import PageScanner  # noqa: E402
from tests.fakes import PRERELEASE_PAGE, STABLE_PAGE, FakeClock, FakeFetcher  # noqa: E402

TEST_PORT = 8080


@pytest.fixture
def settings() -> Settings:
    """Settings de test, indépendants de tout fichier .env."""
    return Settings(PORT=TEST_PORT, _env_file=None)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fetcher(settings: Settings) -> FakeFetcher:
    """Fetcher factice servant les deux pages de listing."""
    return FakeFetcher(
        {
            settings.STABLE_URL: STABLE_PAGE,
            settings.PRERELEASE_URL: PRERELEASE_PAGE,
        }
    )


@pytest.fixture
def make_client(settings: Settings, fetcher: FakeFetcher, clock: FakeClock):
    """Fabrique un TestClient avec un quota donné (par défaut 20/min, rafale 5)."""

    def _make(quota: RateQuota | None = None) -> TestClient:
        limiter = GCRARateLimiter(quota or RateQuota(), clock=clock)
        container = Container(settings=settings, limiter=limiter, scanner=PageScanner(fetcher))
        return TestClient(create_app(container))

    return _make


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()
